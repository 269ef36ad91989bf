from fastapi import APIRouter

from receituario.utils.date_utils import now_ms

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    return {"ok": True, "ts": now_ms()}

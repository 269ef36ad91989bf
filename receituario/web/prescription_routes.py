"""
Prescription routes: CRUD and search over prescription records.

Handlers are synchronous so FastAPI runs them in its thread pool; each
request works on its own database session.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends

from receituario.dependencies.services import get_prescription_repository
from receituario.repositories.prescription_repository import PrescriptionRepository
from receituario.schemas.prescription import (
    PrescriptionCreate,
    PrescriptionResponse,
    PrescriptionUpdate,
)
from receituario.services.search_service import search
from receituario.utils.id_utils import parse_record_id

router = APIRouter(prefix="/prescriptions", tags=["prescriptions"])


@router.get("", response_model=List[PrescriptionResponse])
def list_prescriptions(
    q: Optional[str] = None,
    repository: PrescriptionRepository = Depends(get_prescription_repository),
):
    return search(q, repository.list())


@router.post("", response_model=PrescriptionResponse, status_code=201)
def create_prescription(
    payload: Optional[PrescriptionCreate] = None,
    repository: PrescriptionRepository = Depends(get_prescription_repository),
):
    payload = payload or PrescriptionCreate()
    return repository.create(
        payload.model_dump(exclude={"rx_no"}), explicit_rx_no=payload.rx_no
    )


@router.get("/{prescription_id}", response_model=PrescriptionResponse)
def get_prescription(
    prescription_id: str,
    repository: PrescriptionRepository = Depends(get_prescription_repository),
):
    return repository.get(parse_record_id(prescription_id))


@router.put("/{prescription_id}", response_model=PrescriptionResponse)
def update_prescription(
    prescription_id: str,
    payload: Optional[PrescriptionUpdate] = None,
    repository: PrescriptionRepository = Depends(get_prescription_repository),
):
    payload = payload or PrescriptionUpdate()
    return repository.update(parse_record_id(prescription_id), payload.model_dump())


@router.delete("/{prescription_id}")
def delete_prescription(
    prescription_id: str,
    repository: PrescriptionRepository = Depends(get_prescription_repository),
):
    repository.delete(parse_record_id(prescription_id))
    return {"ok": True}

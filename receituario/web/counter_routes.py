"""
Counter routes: preview and consume prescription numbers.
"""

from fastapi import APIRouter, Depends

from receituario.dependencies.services import get_sequence_generator
from receituario.schemas.counter import CounterPreviewResponse, IssuedNumberResponse
from receituario.services.sequence_service import SequenceGenerator

router = APIRouter(prefix="/counter", tags=["counter"])


@router.get("/preview", response_model=CounterPreviewResponse)
def preview_counter(sequence: SequenceGenerator = Depends(get_sequence_generator)):
    return sequence.preview()


@router.post("/next", response_model=IssuedNumberResponse)
def consume_next_number(sequence: SequenceGenerator = Depends(get_sequence_generator)):
    return sequence.advance()

from receituario.schemas.counter import CounterPreviewResponse, IssuedNumberResponse
from receituario.schemas.prescription import (
    PrescriptionBase,
    PrescriptionCreate,
    PrescriptionUpdate,
    PrescriptionResponse,
)

__all__ = [
    # Counter schemas
    "CounterPreviewResponse",
    "IssuedNumberResponse",
    # Prescription schemas
    "PrescriptionBase",
    "PrescriptionCreate",
    "PrescriptionUpdate",
    "PrescriptionResponse",
]

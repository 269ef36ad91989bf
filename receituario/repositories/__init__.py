"""
Repository layer for the prescription service.

Repositories encapsulate database query logic and own the transaction scope
of each operation.
"""

from receituario.repositories.prescription_repository import (
    EDITABLE_FIELDS,
    PrescriptionRepository,
)

__all__ = [
    "EDITABLE_FIELDS",
    "PrescriptionRepository",
]

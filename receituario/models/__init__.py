from receituario.models.counter import Counter, COUNTER_ID
from receituario.models.prescription import Prescription

__all__ = [
    "Counter",
    "COUNTER_ID",
    "Prescription",
]

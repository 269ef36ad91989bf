"""
Dependências que montam os componentes do núcleo por requisição.

Cada requisição recebe sua própria sessão; gerador e repositório a recebem
pelo construtor.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from receituario.database import get_db
from receituario.repositories.prescription_repository import PrescriptionRepository
from receituario.services.sequence_service import SequenceGenerator


def get_sequence_generator(db: Session = Depends(get_db)) -> SequenceGenerator:
    return SequenceGenerator(db)


def get_prescription_repository(
    sequence: SequenceGenerator = Depends(get_sequence_generator),
) -> PrescriptionRepository:
    return PrescriptionRepository(sequence.db, sequence)

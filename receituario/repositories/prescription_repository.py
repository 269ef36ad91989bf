"""
Prescription Repository - Lógica centralizada de persistência de receitas.

Gerencia operações de banco de dados para a entidade Prescription. A criação
sem número explícito consome o contador na mesma transação do INSERT.
"""

import logging
from typing import Any, List, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from receituario.database import transaction
from receituario.models.prescription import Prescription
from receituario.services.exceptions import DuplicateRxNoError, RecordNotFoundError
from receituario.services.sequence_service import SequenceGenerator
from receituario.utils.date_utils import now_ms

logger = logging.getLogger(__name__)

# Fields replaced by create/update; everything else is managed by the store
EDITABLE_FIELDS = ("paciente", "endereco", "idade", "data", "diag", "presc")


def _clean_fields(fields: Mapping[str, Any]) -> dict:
    return {name: fields.get(name) or "" for name in EDITABLE_FIELDS}


class PrescriptionRepository:
    def __init__(self, db: Session, sequence: Optional[SequenceGenerator] = None):
        self.db = db
        self.sequence = sequence or SequenceGenerator(db)

    def create(
        self, fields: Mapping[str, Any], explicit_rx_no: Optional[str] = None
    ) -> Prescription:
        """
        Cria uma nova receita.

        Sem explicit_rx_no, o próximo número do contador é consumido dentro da
        mesma transação: contador e receita são gravados juntos ou nenhum é.
        Números já ocupados por um rxNo explícito são pulados.

        Args:
            fields: Campos editáveis; ausentes viram string vazia
            explicit_rx_no: Número escolhido pelo cliente (não consome o contador)

        Returns:
            Objeto Prescription persistido

        Raises:
            DuplicateRxNoError: Se o explicit_rx_no já pertence a outra receita
            StoreError: Em qualquer outra falha de persistência
        """
        with transaction(self.db):
            if explicit_rx_no:
                rx_no = explicit_rx_no
            else:
                rx_no = self.sequence.advance().rx_no
                while self._rx_no_taken(rx_no):
                    logger.warning("rxNo %s already assigned, skipping", rx_no)
                    rx_no = self.sequence.advance().rx_no

            timestamp = now_ms()
            prescription = Prescription(
                rx_no=rx_no,
                created_at=timestamp,
                updated_at=timestamp,
                **_clean_fields(fields),
            )
            self.db.add(prescription)
            try:
                self.db.flush()
            except IntegrityError as e:
                raise DuplicateRxNoError(rx_no) from e

        logger.info("Prescription %s created (id=%d)", rx_no, prescription.id)
        return prescription

    def _rx_no_taken(self, rx_no: str) -> bool:
        return (
            self.db.execute(
                select(Prescription.id).where(Prescription.rx_no == rx_no)
            ).first()
            is not None
        )

    def get(self, prescription_id: int) -> Prescription:
        """
        Obtém uma receita por ID.

        Raises:
            RecordNotFoundError: Se não existir
        """
        with transaction(self.db):
            prescription = self.db.get(Prescription, prescription_id)

        if prescription is None:
            raise RecordNotFoundError(prescription_id)
        return prescription

    def list(self) -> List[Prescription]:
        """Todas as receitas, mais recentes primeiro (empate pela ordem de inserção)"""
        with transaction(self.db):
            return list(
                self.db.scalars(
                    select(Prescription).order_by(
                        Prescription.created_at.desc(), Prescription.id.asc()
                    )
                )
            )

    def update(self, prescription_id: int, fields: Mapping[str, Any]) -> Prescription:
        """
        Substitui todos os campos editáveis (ausentes viram string vazia).

        rx_no e created_at nunca mudam; updated_at recebe o horário atual.

        Raises:
            RecordNotFoundError: Se não existir; nada é alterado
        """
        with transaction(self.db):
            prescription = self.db.get(Prescription, prescription_id)
            if prescription is None:
                raise RecordNotFoundError(prescription_id)

            for name, value in _clean_fields(fields).items():
                setattr(prescription, name, value)
            prescription.updated_at = max(now_ms(), prescription.created_at)
            self.db.flush()

        return prescription

    def delete(self, prescription_id: int) -> None:
        """
        Remove uma receita.

        Raises:
            RecordNotFoundError: Se não existir
        """
        with transaction(self.db):
            prescription = self.db.get(Prescription, prescription_id)
            if prescription is None:
                raise RecordNotFoundError(prescription_id)

            self.db.delete(prescription)
            self.db.flush()

        logger.info("Prescription %s deleted (id=%d)", prescription.rx_no, prescription_id)

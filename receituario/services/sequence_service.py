"""
Serviço de Sequência de Receitas

Gera os números de receita de forma atômica a partir do contador persistido.

A concorrência é resolvida no banco: o incremento é um único
UPDATE ... RETURNING, que obtém o lock de escrita (SQLite) ou o lock da linha
(PostgreSQL) antes de ler o valor atual. Duas transações nunca partem do mesmo
valor; a segunda espera o commit ou rollback da primeira.
"""

import logging
from dataclasses import dataclass

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from receituario.database import transaction
from receituario.models.counter import COUNTER_ID, Counter

logger = logging.getLogger(__name__)

RX_NO_DIGITS = 6


def format_rx_no(number: int) -> str:
    """
    Formata um valor do contador como número de receita.

    Example:
        >>> format_rx_no(42)
        "000042"
        >>> format_rx_no(1234567)
        "1234567"
    """
    return f"{number:0{RX_NO_DIGITS}d}"


@dataclass(frozen=True)
class CounterPreview:
    last: int
    next: int
    rx_no: str


@dataclass(frozen=True)
class IssuedNumber:
    consumed: int
    rx_no: str


class SequenceGenerator:
    """
    Gerador de números de receita sobre a sessão injetada.

    advance() participa de uma transação já aberta na mesma sessão (criação de
    receita) ou abre e commita a sua própria (consumo avulso). Não há retry
    interno: StoreError é propagado para o chamador.
    """

    def __init__(self, db: Session):
        self.db = db

    def preview(self) -> CounterPreview:
        """Lê o contador sem alterá-lo. Linha ausente conta como 0."""
        with transaction(self.db):
            last = self.db.execute(
                select(Counter.last_number).where(Counter.id == COUNTER_ID)
            ).scalar_one_or_none()

        last = last or 0
        return CounterPreview(last=last, next=last + 1, rx_no=format_rx_no(last + 1))

    def advance(self) -> IssuedNumber:
        """
        Consome o próximo número.

        Returns:
            IssuedNumber com o valor consumido e sua forma formatada

        Raises:
            StoreError: Se a transação falhar; o contador fica inalterado
        """
        with transaction(self.db):
            consumed = self.db.execute(
                update(Counter)
                .where(Counter.id == COUNTER_ID)
                .values(last_number=Counter.last_number + 1)
                .returning(Counter.last_number)
                .execution_options(synchronize_session=False)
            ).scalar_one_or_none()

            if consumed is None:
                # Uninitialized store: the first number issued is 1
                self.db.add(Counter(id=COUNTER_ID, last_number=1))
                self.db.flush()
                consumed = 1

        logger.info("Counter advanced to %d", consumed)
        return IssuedNumber(consumed=consumed, rx_no=format_rx_no(consumed))

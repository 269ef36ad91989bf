"""
Counter Model
Single-row counter backing prescription number generation.
"""

from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, mapped_column
from receituario.database import Base

# Fixed key of the only counter row
COUNTER_ID = 1


class Counter(Base):
    """
    Quantidade de números de receita já emitidos.

    Existe exatamente uma linha (id=1), criada com valor 0 na inicialização
    do banco e alterada apenas pelo gerador de sequência.
    """

    __tablename__ = "counter"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    last_number: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    def __repr__(self):
        return f"<Counter {self.last_number}>"

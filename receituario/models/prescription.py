from sqlalchemy import BigInteger, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from receituario.database import Base


class Prescription(Base):
    """
    Receita emitida.

    rx_no é o número legível (ex: "000042"), atribuído na criação e nunca
    alterado. Timestamps são milissegundos desde a época (UTC).
    """

    __tablename__ = "prescriptions"
    # Never reuse ids of deleted rows
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    rx_no: Mapped[str] = mapped_column("rxNo", String(32), unique=True, nullable=False)
    paciente: Mapped[str] = mapped_column(Text, default="", nullable=False)
    endereco: Mapped[str] = mapped_column(Text, default="", nullable=False)
    idade: Mapped[str] = mapped_column(Text, default="", nullable=False)
    data: Mapped[str] = mapped_column(Text, default="", nullable=False)
    diag: Mapped[str] = mapped_column(Text, default="", nullable=False)
    presc: Mapped[str] = mapped_column(Text, default="", nullable=False)
    created_at: Mapped[int] = mapped_column(
        "createdAt", BigInteger, nullable=False, index=True
    )
    updated_at: Mapped[int] = mapped_column("updatedAt", BigInteger, nullable=False)

    def __repr__(self):
        # Mask patient name for privacy: An***
        if self.paciente:
            return f"<Prescription {self.rx_no} {self.paciente[:2]}***>"
        return f"<Prescription {self.rx_no}>"

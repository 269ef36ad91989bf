from pydantic import ConfigDict, field_validator
from typing import Optional
from receituario.schemas.base import CamelSchema


class PrescriptionBase(CamelSchema):
    """Campos editáveis. Ausentes ou null viram string vazia."""

    paciente: str = ""
    endereco: str = ""
    idade: str = ""
    data: str = ""
    diag: str = ""
    presc: str = ""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    @field_validator("*", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return "" if v is None else v


class PrescriptionCreate(PrescriptionBase):
    """Criação: rxNo opcional; quando vazio o número vem do contador"""

    rx_no: Optional[str] = None


class PrescriptionUpdate(PrescriptionBase):
    """Atualização com substituição completa; rxNo enviado é ignorado"""

    pass


class PrescriptionResponse(CamelSchema):
    """Resposta completa de receita com todos os campos"""

    id: int
    rx_no: str
    paciente: str
    endereco: str
    idade: str
    data: str
    diag: str
    presc: str
    created_at: int
    updated_at: int

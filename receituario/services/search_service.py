"""
Search Service - filtro em memória sobre a listagem de receitas.
"""

from typing import Iterable, List, Optional

from receituario.models.prescription import Prescription

# Attributes matched by free-text search
SEARCHABLE_FIELDS = ("rx_no", "paciente", "data", "diag", "presc")


def matches(prescription: Prescription, query: str) -> bool:
    """True if the lowercased query occurs in any searchable field."""
    return any(
        query in (getattr(prescription, name) or "").lower()
        for name in SEARCHABLE_FIELDS
    )


def search(query: Optional[str], prescriptions: Iterable[Prescription]) -> List[Prescription]:
    """
    Filtra receitas por substring, sem diferenciar maiúsculas/minúsculas.

    Consulta vazia retorna tudo. A ordem de entrada é preservada.

    Example:
        >>> search("ana", repository.list())
    """
    needle = (query or "").lower()
    if not needle:
        return list(prescriptions)
    return [p for p in prescriptions if matches(p, needle)]

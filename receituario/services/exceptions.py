"""
Exceções de domínio do receituário.

O núcleo sinaliza falhas com estes tipos; a camada HTTP decide o status.
"""


class RecordNotFoundError(Exception):
    """Raised when no prescription matches an id-scoped operation."""

    def __init__(self, record_id):
        self.record_id = record_id
        super().__init__(f"Receita não encontrada: {record_id}")


class StoreError(Exception):
    """Persistence or transaction failure. The operation was rolled back."""

    pass


class DuplicateRxNoError(StoreError):
    """Raised when an rxNo is already assigned to another prescription."""

    def __init__(self, rx_no: str):
        self.rx_no = rx_no
        super().__init__(f"Número de receita já utilizado: {rx_no}")

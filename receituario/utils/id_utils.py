"""
ID Utilities - conversão de IDs vindos da URL.
"""

from receituario.services.exceptions import RecordNotFoundError


def parse_record_id(id_str: str) -> int:
    """
    Converte o ID do caminho para inteiro.

    Um ID que não é número decimal não pode corresponder a nenhuma linha, então
    é tratado como registro inexistente (404), não como erro de validação.

    Raises:
        RecordNotFoundError: Se id_str não for composto apenas de dígitos

    Example:
        >>> parse_record_id("42")
        42
        >>> parse_record_id("abc")
        RecordNotFoundError("Receita não encontrada: abc")
    """
    if not (id_str.isascii() and id_str.isdigit()):
        raise RecordNotFoundError(id_str)
    return int(id_str)

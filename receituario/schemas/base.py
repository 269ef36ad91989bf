"""
Schema base com a convenção de nomes da API.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelSchema(BaseModel):
    """
    Schema base: atributos snake_case em Python, chaves camelCase no JSON
    (rx_no → rxNo, created_at → createdAt). Aceita os dois na entrada.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

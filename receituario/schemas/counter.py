from receituario.schemas.base import CamelSchema


class CounterPreviewResponse(CamelSchema):
    last: int
    next: int
    rx_no: str


class IssuedNumberResponse(CamelSchema):
    consumed: int
    rx_no: str

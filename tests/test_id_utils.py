import pytest

from receituario.services.exceptions import RecordNotFoundError
from receituario.utils.id_utils import parse_record_id


def test_parses_decimal_ids():
    assert parse_record_id("42") == 42
    assert parse_record_id("007") == 7


@pytest.mark.parametrize("value", ["abc", "", "-1", "+1", "1_0", " 1", "١"])
def test_non_decimal_ids_are_not_found(value):
    with pytest.raises(RecordNotFoundError):
        parse_record_id(value)

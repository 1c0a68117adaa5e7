"""Settings parsing tests"""

import pytest

from config.settings import CONNECT_TIMEOUT, MESSAGE_PREFIX, parse_optional_pin


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, None),
        ("", None),
        ("  ", None),
        ("-1", None),
        ("0", 0),
        ("17", 17),
    ],
)
def test_parse_optional_pin(raw, expected):
    assert parse_optional_pin(raw) == expected


@pytest.mark.unit
def test_parse_optional_pin_rejects_garbage():
    with pytest.raises(ValueError):
        parse_optional_pin("led")


@pytest.mark.unit
def test_defaults():
    assert CONNECT_TIMEOUT == 300
    assert MESSAGE_PREFIX == "**** AppDaemon: "

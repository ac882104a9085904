import pytest

from common.parse import parse_double, parse_long
from exceptions.exceptions import ErrorKind, ParseError


@pytest.mark.parametrize("token, expected", [
    ("1.5", 1.5),
    ("-2e3", -2000.0),
    ("0", 0.0),
    (" 3.25 ", 3.25),
])
def test_parse_double(token, expected):
    assert parse_double(token) == expected


@pytest.mark.parametrize("token", ["abc", "", "1.0abc", "1_000.0", "nan", "\u0661\u0662", "\uff11.5"])
def test_parse_double_rejects_invalid(token):
    with pytest.raises(ParseError) as exc:
        parse_double(token)
    assert exc.value.code == "INVALID_NUMBER"
    assert exc.value.kind is ErrorKind.PARSE
    assert repr(token) in str(exc.value)


@pytest.mark.parametrize("token", ["1e999", "-1e999", "inf"])
def test_parse_double_rejects_out_of_range(token):
    with pytest.raises(ParseError) as exc:
        parse_double(token)
    assert exc.value.code == "OUT_OF_RANGE"


def test_parse_double_keeps_context():
    with pytest.raises(ParseError) as exc:
        parse_double("x", context="line 7")
    assert exc.value.context == "line 7"


@pytest.mark.parametrize("token, expected", [("10", 10), ("-5", -5), ("+3", 3)])
def test_parse_long(token, expected):
    assert parse_long(token) == expected


@pytest.mark.parametrize("token", ["3.0", "ten", "", "1_0", "0x10", "\u0661\u0662"])
def test_parse_long_rejects_invalid(token):
    with pytest.raises(ParseError) as exc:
        parse_long(token)
    assert exc.value.code == "INVALID_NUMBER"


def test_parse_long_rejects_out_of_range():
    with pytest.raises(ParseError) as exc:
        parse_long("99999999999999999999")
    assert exc.value.code == "OUT_OF_RANGE"
    assert parse_long(str(2 ** 63 - 1)) == 2 ** 63 - 1

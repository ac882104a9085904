from __future__ import annotations

import math

from exceptions.exceptions import ParseError

LONG_MIN = -(2 ** 63)
LONG_MAX = 2 ** 63 - 1


def _check_token(token: str, context: str) -> str:
    # int()/float() accept digit-group underscores and non-ASCII digits; the line format does not
    if "_" in token or not token.isascii():
        raise ParseError("INVALID_NUMBER", f"Invalid number string: {token!r}", context=context)
    return token


def parse_double(token: str, context: str = "") -> float:
    """Parse a decimal token into a finite float.

    Raises ParseError naming the token when it is not a number or does not fit
    in a double.
    """
    _check_token(token, context)
    try:
        value = float(token)
    except ValueError as e:
        raise ParseError("INVALID_NUMBER", f"Invalid number string: {token!r}", context=context) from e
    if math.isnan(value):
        raise ParseError("INVALID_NUMBER", f"Invalid number string: {token!r}", context=context)
    if math.isinf(value):
        raise ParseError("OUT_OF_RANGE", f"Out of range string: {token!r}", context=context)
    return value


def parse_long(token: str, context: str = "") -> int:
    """Parse a base-10 integer token within the signed 64-bit range."""
    _check_token(token, context)
    try:
        value = int(token, 10)
    except ValueError as e:
        raise ParseError("INVALID_NUMBER", f"Invalid number string: {token!r}", context=context) from e
    if value < LONG_MIN or value > LONG_MAX:
        raise ParseError("OUT_OF_RANGE", f"Out of range string: {token!r}", context=context)
    return value

"""
Fixed-point decimal conversion.

The Cosmos SDK carries amounts and rates as arbitrary-precision decimals
serialized to text (e.g. ``"1234.500000000000000000"``). They are parsed
exactly with `decimal.Decimal`, scaled, and only then rounded to a float.
"""

from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Union

from cosmos_exporter.errors import DecimalConversionError


def parse_decimal(text: str) -> Decimal:
    """
    Parse decimal text exactly.

    Raises
    ------
    DecimalConversionError
        If the text is not a finite decimal number.
    """
    if not isinstance(text, str):
        raise DecimalConversionError(text, "expected decimal text")
    try:
        value = Decimal(text.strip())
    except InvalidOperation as exc:
        raise DecimalConversionError(text) from exc
    if not value.is_finite():
        raise DecimalConversionError(text, "non-finite decimal")
    return value


def to_float(text: str, coefficient: Union[float, Decimal] = 1) -> float:
    """
    Convert decimal text to a float, divided by `coefficient`.

    The division happens in decimal arithmetic so large base-denomination
    amounts lose precision only once, at the final float conversion.

    Raises
    ------
    DecimalConversionError
        On malformed or non-finite text, or when the result overflows a float.
    """
    value = parse_decimal(text)
    divisor = Decimal(str(coefficient))
    if divisor == 0:
        raise DecimalConversionError(coefficient, "zero coefficient")
    try:
        result = float(value / divisor)
    except ArithmeticError as exc:
        raise DecimalConversionError(text, "out of decimal range") from exc
    if math.isinf(result):
        raise DecimalConversionError(text, "out of float range")
    return result


__all__ = ["parse_decimal", "to_float"]

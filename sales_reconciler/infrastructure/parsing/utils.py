"""Shared parsing utilities for delimited text ingestion."""
from __future__ import annotations

from decimal import Decimal, InvalidOperation
from io import BytesIO
from pathlib import Path
from typing import Iterable
import locale
import re

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_INTEGER = re.compile(r"[+-]?[0-9]+")
_DECIMAL = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

# accepted prices are below 10**15 with at most 20 decimals
MAX_PRICE_INTEGER_DIGITS = 15
MAX_PRICE_SCALE = 20


def ensure_bytes(source: BytesIO | Path | bytes) -> bytes:
    if isinstance(source, bytes):
        return source
    if isinstance(source, BytesIO):
        return source.getvalue()
    if isinstance(source, Path):
        return source.read_bytes()
    raise TypeError(f"Unsupported source type: {type(source)!r}")


def decode_lines(data: bytes, encoding: str | None = None) -> list[str]:
    """Decode ``data`` and split it on any line terminator.

    ``encoding=None`` means the platform default text encoding.
    """
    text = data.decode(encoding or locale.getpreferredencoding(False))
    lines = _LINE_BREAK.split(text)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def non_empty_lines(lines: Iterable[str]) -> list[str]:
    return [line.strip() for line in lines if line.strip()]


def split_fields(line: str, separator: str = ";") -> list[str]:
    """Split on ``separator`` and drop trailing empty fields."""
    parts = line.split(separator)
    while parts and parts[-1] == "":
        parts.pop()
    return parts


def parse_quantity(value: str) -> int:
    """Parse a signed 32-bit integer; raise ValueError otherwise."""
    if not _INTEGER.fullmatch(value):
        raise ValueError(f"Not an integer: {value!r}")
    result = int(value)
    if result < INT_MIN or result > INT_MAX:
        raise ValueError(f"Integer out of range: {value!r}")
    return result


def parse_price(value: str) -> Decimal:
    """Parse a plain ASCII decimal number within the price bounds; raise ValueError otherwise."""
    s = value.strip()
    if not _DECIMAL.fullmatch(s):
        raise ValueError(f"Not a number: {value!r}")
    try:
        result = Decimal(s)
    except InvalidOperation as exc:
        raise ValueError(f"Not a number: {value!r}") from exc
    if result.is_zero():
        return result
    _, digits, exponent = result.as_tuple()
    trailing_zeros = len(digits) - len("".join(map(str, digits)).rstrip("0"))
    if result.adjusted() >= MAX_PRICE_INTEGER_DIGITS or exponent + trailing_zeros < -MAX_PRICE_SCALE:
        raise ValueError(f"Price out of range: {value!r}")
    return result

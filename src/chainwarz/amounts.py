"""Exact decimal-to-wei conversion and wire hex encoding.

Amounts never pass through ``float``: a value such as 0.000001337 ETH is
1337000000000 wei, which a double cannot round-trip reliably once scaled.
Fractional digits beyond ``decimals`` are truncated, not rounded.
"""

from __future__ import annotations

from chainwarz.errors import InvalidAmount

DEFAULT_DECIMALS = 18


def _digits(part: str, raw: str) -> str:
    if part and not (part.isascii() and part.isdigit()):
        raise InvalidAmount(f"Invalid amount {raw!r}: non-digit characters")
    return part


def to_wei(amount: str, decimals: int = DEFAULT_DECIMALS) -> int:
    """Convert a decimal string like ``"0.000001337"`` to smallest units."""
    if decimals < 0:
        raise InvalidAmount(f"Invalid decimals: {decimals}")
    raw = amount
    amount = amount.strip()
    if not amount or amount == ".":
        raise InvalidAmount(f"Invalid amount {raw!r}: empty")
    if amount.count(".") > 1:
        raise InvalidAmount(f"Invalid amount {raw!r}: more than one '.'")

    integer_part, _, fraction_part = amount.partition(".")
    integer_part = _digits(integer_part, raw) or "0"
    fraction_part = _digits(fraction_part, raw)

    fraction_part = fraction_part[:decimals].ljust(decimals, "0")
    return int(integer_part) * 10**decimals + int(fraction_part or "0")


def to_hex(value: int) -> str:
    """Lowercase ``0x``-prefixed hex with no leading zeros (``0`` -> ``0x0``)."""
    if value < 0:
        raise InvalidAmount(f"Negative amount: {value}")
    return hex(value)


def from_hex(value: str) -> int:
    """Parse a ``0x``-prefixed hex quantity."""
    if not value.lower().startswith("0x") or len(value) < 3:
        raise InvalidAmount(f"Invalid hex quantity {value!r}")
    try:
        return int(value, 16)
    except ValueError:
        raise InvalidAmount(f"Invalid hex quantity {value!r}") from None


def format_units(value: int, decimals: int = DEFAULT_DECIMALS) -> str:
    """Render an integer amount as the shortest exact decimal string."""
    if value < 0:
        raise InvalidAmount(f"Negative amount: {value}")
    if decimals == 0:
        return str(value)
    integer_part, fraction_part = divmod(value, 10**decimals)
    fraction = str(fraction_part).rjust(decimals, "0").rstrip("0")
    if not fraction:
        return str(integer_part)
    return f"{integer_part}.{fraction}"

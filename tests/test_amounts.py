"""Exact decimal -> wei -> hex conversion."""

from __future__ import annotations

import pytest

from chainwarz.amounts import format_units, from_hex, to_hex, to_wei
from chainwarz.errors import InvalidAmount


def test_strike_amount_in_wei():
    assert to_wei("0.000001337") == 1337000000000
    assert to_wei("0.0001337") == 133700000000000


def test_strike_amount_hex():
    assert to_hex(to_wei("0.000001337")) == "0x1374b68fa00"


def test_integer_and_missing_parts():
    assert to_wei("1") == 10**18
    assert to_wei("1.") == 10**18
    assert to_wei(".5") == 5 * 10**17
    assert to_wei("2.5", decimals=6) == 2_500_000
    assert to_wei("0") == 0


def test_fraction_beyond_decimals_is_truncated():
    assert to_wei("0.1234567", decimals=6) == 123456
    assert to_wei("0.0000000000000000019") == 1


def test_large_values_stay_exact():
    assert to_wei("123456789.123456789123456789") == 123456789123456789123456789


@pytest.mark.parametrize("bad", ["", ".", "1.2.3", "abc", "1e-6", "-1", "0x10", "1,5", "١"])
def test_malformed_amount_rejected(bad):
    with pytest.raises(InvalidAmount):
        to_wei(bad)


def test_hex_has_no_leading_zeros():
    assert to_hex(0) == "0x0"
    assert to_hex(1) == "0x1"
    assert to_hex(255) == "0xff"


def test_hex_rejects_negative():
    with pytest.raises(InvalidAmount):
        to_hex(-1)


@pytest.mark.parametrize("value", ["0", "0.000001337", "1.5", "42.000000000000000001"])
def test_hex_round_trip_is_stable(value):
    wei = to_wei(value)
    assert from_hex(to_hex(wei)) == wei


@pytest.mark.parametrize("bad", ["", "0x", "12", "0xzz"])
def test_from_hex_rejects_malformed(bad):
    with pytest.raises(InvalidAmount):
        from_hex(bad)


def test_format_units():
    assert format_units(1337000000000) == "0.000001337"
    assert format_units(10**18) == "1"
    assert format_units(15 * 10**17) == "1.5"
    assert format_units(0) == "0"
    assert format_units(7, decimals=0) == "7"

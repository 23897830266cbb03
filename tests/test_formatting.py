"""Tests for display formatting."""

from ceclrisk.formatting import format_compact_number, format_currency, format_percent


def test_format_percent():
    assert format_percent(0.0425) == '4.25%'
    assert format_percent(0.5, decimals=0) == '50%'
    assert format_percent(0) == '0.00%'


def test_format_currency():
    assert format_currency(1234567.4) == '$1,234,567'
    assert format_currency(-50) == '-$50'


def test_compact_number_units():
    assert format_compact_number(999) == '999'
    assert format_compact_number(1234) == '1.2K'
    assert format_compact_number(45_600_000) == '46M'
    assert format_compact_number(2_000_000_000) == '2B'
    assert format_compact_number(3.2e12) == '3.2T'


def test_compact_number_promotes_rounded_unit():
    assert format_compact_number(999_950) == '1M'


def test_compact_number_negative_and_missing():
    assert format_compact_number(-1500) == '-1.5K'
    assert format_compact_number(float('nan')) == '0'
    assert format_compact_number(None) == '0'
    assert format_compact_number(0) == '0'


def test_compact_number_rounds_half_up():
    assert format_compact_number(98_500) == '99K'
    assert format_compact_number(2_500_000) == '2.5M'
    assert format_compact_number(12_500) == '13K'


def test_compact_number_promotes_below_one_thousand():
    assert format_compact_number(999.7) == '1K'
    assert format_compact_number(999.4) == '999'

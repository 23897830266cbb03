"""
Display formatting for metrics and report payloads.
"""

import math

# Largest first; the unit-less entry catches everything below 1000
_COMPACT_UNITS = [(1e12, 'T'), (1e9, 'B'), (1e6, 'M'), (1e3, 'K'), (1.0, '')]


def format_percent(value: float, decimals: int = 2) -> str:
    """0.0425 -> '4.25%'"""
    return f"{value * 100:.{decimals}f}%"


def format_currency(value: float) -> str:
    """Whole US dollars with thousands separators"""
    sign = '-' if value < 0 else ''
    return f"{sign}${abs(value):,.0f}"


def _compact_round(scaled: float) -> float:
    # Half up; one decimal below 10, whole numbers above
    if scaled < 10:
        return math.floor(scaled * 10 + 0.5) / 10
    return float(math.floor(scaled + 0.5))


def format_compact_number(value: float) -> str:
    """
    Short compact notation: 1234 -> '1.2K', 45_600_000 -> '46M', 999 -> '999'.

    A value that rounds up to 1000 of its unit is shown in the next unit
    (999.7 -> '1K', 999_950 -> '1M').
    """
    if value is None or math.isnan(value):
        return '0'
    sign = '-' if value < 0 else ''
    magnitude = abs(value)

    for i, (unit, suffix) in enumerate(_COMPACT_UNITS):
        if magnitude >= unit or suffix == '':
            scaled = _compact_round(magnitude / unit)
            if scaled >= 1000 and i > 0:
                bigger, suffix = _COMPACT_UNITS[i - 1]
                scaled = _compact_round(magnitude / bigger)
            return f"{sign}{_strip_zero(scaled)}{suffix}"


def _strip_zero(number: float) -> str:
    if number == int(number):
        return str(int(number))
    return f"{number:.1f}"

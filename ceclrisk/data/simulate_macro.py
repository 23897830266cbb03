"""
Mock Macroeconomic Series

Locally generated stand-ins for the FRED indicators shown on the dashboard:
- Quarterly observations between a start and end date
- Linear trend plus bounded noise around a per-indicator base level
- A stylised recession window (quarters 8-12) on unemployment, GDP and rates
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List, Tuple, Union

import numpy as np
import pandas as pd
from dateutil.relativedelta import relativedelta


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass(frozen=True)
class MacroIndicatorConfig:
    """Display metadata and mock-series shape for a FRED indicator"""
    series_id: str
    name: str
    title: str
    units: str
    base: float
    volatility: float
    trend: float


MACRO_INDICATORS: Dict[str, MacroIndicatorConfig] = {
    'GDPC1': MacroIndicatorConfig(
        series_id='GDPC1',
        name='Real GDP',
        title='Real Gross Domestic Product',
        units='Billions of Chained 2017 Dollars',
        base=20000, volatility=500, trend=100,
    ),
    'CPIAUCSL': MacroIndicatorConfig(
        series_id='CPIAUCSL',
        name='CPI',
        title='Consumer Price Index for All Urban Consumers',
        units='Index 1982-1984=100',
        base=280, volatility=5, trend=2,
    ),
    'UNRATE': MacroIndicatorConfig(
        series_id='UNRATE',
        name='Unemployment Rate',
        title='Unemployment Rate',
        units='Percent',
        base=4.5, volatility=1, trend=0,
    ),
    'FEDFUNDS': MacroIndicatorConfig(
        series_id='FEDFUNDS',
        name='Fed Funds Rate',
        title='Effective Federal Funds Rate',
        units='Percent',
        base=4.0, volatility=0.5, trend=0.1,
    ),
    'GS10': MacroIndicatorConfig(
        series_id='GS10',
        name='10-Year Treasury',
        title='10-Year Treasury Constant Maturity Rate',
        units='Percent',
        base=4.0, volatility=0.3, trend=0,
    ),
    'MORTGAGE30US': MacroIndicatorConfig(
        series_id='MORTGAGE30US',
        name='30-Year Mortgage',
        title='30-Year Fixed Rate Mortgage Average',
        units='Percent',
        base=6.5, volatility=0.4, trend=0,
    ),
}

RECESSION_WINDOW: Tuple[int, int] = (8, 12)

DateLike = Union[str, date]


def get_indicator(indicator: str) -> MacroIndicatorConfig:
    if indicator not in MACRO_INDICATORS:
        raise ValueError(f"Unknown macro indicator: {indicator}")
    return MACRO_INDICATORS[indicator]


def _to_date(value: DateLike) -> date:
    if isinstance(value, date):
        return value
    return datetime.strptime(value, '%Y-%m-%d').date()


# =============================================================================
# TIME SERIES
# =============================================================================

@dataclass
class MacroTimeSeries:
    """Observations for one indicator plus provenance"""
    indicator: str
    data: pd.Series  # DatetimeIndex -> value
    title: str
    units: str
    frequency: str = 'Quarterly'
    source: str = 'mock'  # 'fred' or 'mock'
    last_updated: datetime = field(default_factory=datetime.now)

    @property
    def is_mock(self) -> bool:
        return self.source == 'mock'

    def to_records(self) -> List[Dict]:
        return [
            {'date': ts.strftime('%Y-%m-%d'), 'value': float(value), 'indicator': self.indicator}
            for ts, value in self.data.items()
        ]


def generate_mock_macro_series(
    indicator: str,
    start_date: DateLike,
    end_date: DateLike,
    seed: int = 42
) -> MacroTimeSeries:
    """
    Quarterly mock series for `indicator` from start to end (inclusive).

    Value = base + trend * (i / 20) + uniform noise of width `volatility`;
    quarters in the recession window get +2pp unemployment, -2% GDP and a
    halved policy rate. Values are floored at zero.
    """
    config = get_indicator(indicator)
    rng = np.random.default_rng(seed)
    start = _to_date(start_date)
    end = _to_date(end_date)

    dates = []
    values = []
    current = start
    index = 0

    while current <= end:
        noise = (rng.random() - 0.5) * config.volatility
        value = config.base + config.trend * (index / 20) + noise

        if RECESSION_WINDOW[0] <= index <= RECESSION_WINDOW[1]:
            if indicator == 'UNRATE':
                value += 2
            elif indicator == 'GDPC1':
                value *= 0.98
            elif indicator == 'FEDFUNDS':
                value *= 0.5

        dates.append(pd.Timestamp(current))
        values.append(max(0.0, value))

        index += 1
        current = start + relativedelta(months=3 * index)

    return MacroTimeSeries(
        indicator=indicator,
        data=pd.Series(values, index=pd.DatetimeIndex(dates), name=indicator, dtype=float),
        title=config.title,
        units=config.units,
        source='mock',
    )


def generate_all_macro_data(
    start_date: DateLike = '2019-01-01',
    end_date: DateLike = '2024-12-31',
    seed: int = 42
) -> Dict[str, MacroTimeSeries]:
    """Mock series for every dashboard indicator"""
    return {
        indicator: generate_mock_macro_series(indicator, start_date, end_date, seed + i)
        for i, indicator in enumerate(MACRO_INDICATORS)
    }

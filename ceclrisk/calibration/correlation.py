"""
Macro / Credit Correlation

Pearson correlation between quarterly macroeconomic indicators and the
portfolio's quarterly average PD, with optional lags.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List

import numpy as np
import pandas as pd
from scipy import stats

from ceclrisk.data.simulate_macro import MacroTimeSeries
from ceclrisk.data.simulate_snapshots import LoanMetricsSnapshot

MIN_OBSERVATIONS = 3


@dataclass(frozen=True)
class MacroCorrelation:
    indicator: str
    metric: str  # 'pd' or 'lgd'
    correlation: float
    p_value: float
    lag_months: int
    n_obs: int


def quarterly_credit_series(snapshots: Iterable[LoanMetricsSnapshot], metric: str = 'pd') -> pd.Series:
    """Average of `metric` across loans per snapshot quarter"""
    if metric not in ('pd', 'lgd'):
        raise ValueError(f"Unknown credit metric: {metric}")
    frame = pd.DataFrame(
        [(pd.Timestamp(s.snapshot_date), getattr(s, metric)) for s in snapshots],
        columns=['date', metric],
    )
    if frame.empty:
        return pd.Series(dtype=float, name=metric)
    return frame.groupby('date')[metric].mean().rename(metric)


def _by_quarter(series: pd.Series) -> pd.Series:
    out = series.copy()
    out.index = pd.DatetimeIndex(out.index).to_period('Q')
    return out.groupby(level=0).mean()


def macro_credit_correlations(
    macro: Dict[str, MacroTimeSeries],
    credit: pd.Series,
    metric: str = 'pd',
    lag_quarters: int = 0
) -> List[MacroCorrelation]:
    """
    Correlate each macro series with a quarterly credit series.

    A positive lag compares the macro value `lag_quarters` quarters earlier
    with the credit value. Indicators with fewer than three overlapping
    quarters, or a constant side, are skipped.
    """
    credit_q = _by_quarter(credit)
    results = []

    for indicator, series in macro.items():
        macro_q = _by_quarter(series.data)
        if lag_quarters:
            macro_q.index = macro_q.index + lag_quarters

        joined = pd.concat([macro_q.rename('macro'), credit_q.rename('credit')], axis=1, join='inner').dropna()
        if len(joined) < MIN_OBSERVATIONS:
            continue
        if np.std(joined['macro']) == 0 or np.std(joined['credit']) == 0:
            continue

        r, p_value = stats.pearsonr(joined['macro'], joined['credit'])
        results.append(MacroCorrelation(
            indicator=indicator,
            metric=metric,
            correlation=float(r),
            p_value=float(p_value),
            lag_months=lag_quarters * 3,
            n_obs=len(joined),
        ))

    return sorted(results, key=lambda c: abs(c.correlation), reverse=True)

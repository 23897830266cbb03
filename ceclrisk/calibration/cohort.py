"""
Pre-Charge-Off Cohort Analysis

Aggregates charge-off histories by months before charge-off:
- PD / LGD trend per month offset (average, min, max, sample count)
- Segment comparison at fixed offsets (-12, -6, 0)
- Early-warning signal prevalence and lead time
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np

from ceclrisk.data.segments import SEGMENT_CONFIGS, SEGMENT_IDS, get_segment, get_segment_label
from ceclrisk.data.simulate_chargeoffs import ChargeOffLoanHistory, MonthlySnapshot, PaymentStatus


@dataclass(frozen=True)
class CohortBucket:
    """PD / LGD distribution at one month offset"""
    month: int  # months before charge-off, -36..0
    avg_pd: float
    min_pd: float
    max_pd: float
    avg_lgd: float
    min_lgd: float
    max_lgd: float
    count: int


@dataclass(frozen=True)
class SegmentCohortComparison:
    segment: str
    label: str
    count: int
    pd_12: float
    pd_6: float
    pd_0: float
    avg_charge_off: float


@dataclass(frozen=True)
class WarningSignal:
    signal: str
    segment: str
    avg_months_before: float
    prevalence: float  # percent of histories showing the signal


# Trigger = (history, snapshot) -> bool; evaluated oldest month first
SignalTrigger = Callable[[ChargeOffLoanHistory, MonthlySnapshot], bool]


def _pd_over_twice_baseline(history: ChargeOffLoanHistory, snap: MonthlySnapshot) -> bool:
    return snap.pd > 2 * SEGMENT_CONFIGS[history.segment].pd.avg


def _first_delinquency(history: ChargeOffLoanHistory, snap: MonthlySnapshot) -> bool:
    return snap.payment_status != PaymentStatus.CURRENT


def _lgd_up_twenty_percent(history: ChargeOffLoanHistory, snap: MonthlySnapshot) -> bool:
    return snap.lgd > history.monthly_snapshots[0].lgd * 1.2


def _pd_over_ten_percent(history: ChargeOffLoanHistory, snap: MonthlySnapshot) -> bool:
    return snap.pd > 0.10


WARNING_SIGNALS: Dict[str, SignalTrigger] = {
    'PD exceeds 2x baseline': _pd_over_twice_baseline,
    'First 30+ DPD occurrence': _first_delinquency,
    'LGD increase >20%': _lgd_up_twenty_percent,
    'PD exceeds 10%': _pd_over_ten_percent,
}


def _stats(values: Sequence[float]):
    if not values:
        return 0.0, 0.0, 0.0
    arr = np.asarray(values, dtype=float)
    return float(arr.mean()), float(arr.min()), float(arr.max())


class CohortAnalyzer:
    """
    Cohort statistics over a set of charge-off histories.
    """

    def __init__(self, histories: List[ChargeOffLoanHistory], history_months: int = 36):
        self.histories = histories
        self.history_months = history_months

    def _filter(self, segment: str) -> List[ChargeOffLoanHistory]:
        if segment == 'all':
            return self.histories
        get_segment(segment)
        return [h for h in self.histories if h.segment == segment]

    def cohort_trend(self, segment: str = 'all') -> List[CohortBucket]:
        """
        One bucket per month offset, oldest first.

        Buckets without samples report zeros rather than NaN.
        """
        months = range(-self.history_months, 1)
        pds = {m: [] for m in months}
        lgds = {m: [] for m in months}

        for history in self._filter(segment):
            for snap in history.monthly_snapshots:
                if snap.months_before_charge_off in pds:
                    pds[snap.months_before_charge_off].append(snap.pd)
                    lgds[snap.months_before_charge_off].append(snap.lgd)

        buckets = []
        for m in months:
            avg_pd, min_pd, max_pd = _stats(pds[m])
            avg_lgd, min_lgd, max_lgd = _stats(lgds[m])
            buckets.append(CohortBucket(
                month=m,
                avg_pd=avg_pd, min_pd=min_pd, max_pd=max_pd,
                avg_lgd=avg_lgd, min_lgd=min_lgd, max_lgd=max_lgd,
                count=len(pds[m]),
            ))
        return buckets

    def average_pd_at(self, histories: List[ChargeOffLoanHistory], month: int) -> float:
        values = [s.pd for h in histories for s in h.monthly_snapshots
                  if s.months_before_charge_off == month]
        return _stats(values)[0]

    def segment_comparison(self) -> List[SegmentCohortComparison]:
        """Segments with at least one history, in segment-table order"""
        comparison = []
        for segment in SEGMENT_IDS:
            histories = [h for h in self.histories if h.segment == segment]
            if not histories:
                continue
            comparison.append(SegmentCohortComparison(
                segment=segment,
                label=get_segment_label(segment),
                count=len(histories),
                pd_12=self.average_pd_at(histories, -12),
                pd_6=self.average_pd_at(histories, -6),
                pd_0=self.average_pd_at(histories, 0),
                avg_charge_off=sum(h.charge_off_amount for h in histories) / len(histories),
            ))
        return comparison

    def _first_trigger(self, history: ChargeOffLoanHistory, trigger: SignalTrigger) -> Optional[int]:
        for snap in history.monthly_snapshots:
            if trigger(history, snap):
                return snap.months_before_charge_off
        return None

    def warning_signals(self, segment: str = 'all') -> List[WarningSignal]:
        """
        Prevalence (percent of histories) and mean lead time in months of each
        early-warning signal, sorted by lead time, earliest first.
        """
        histories = self._filter(segment)
        label = 'All' if segment == 'all' else get_segment_label(segment)
        signals = []

        for name, trigger in WARNING_SIGNALS.items():
            offsets = [o for o in (self._first_trigger(h, trigger) for h in histories) if o is not None]
            signals.append(WarningSignal(
                signal=name,
                segment=label,
                avg_months_before=float(np.mean([-o for o in offsets])) if offsets else 0.0,
                prevalence=len(offsets) / len(histories) * 100 if histories else 0.0,
            ))

        return sorted(signals, key=lambda s: s.avg_months_before, reverse=True)

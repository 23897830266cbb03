"""
Portfolio Aggregator - Segment, Geographic and Concentration Views

Aggregates the synthetic loan set and its quarterly snapshots to compute:
- Portfolio and segment metrics (exposure, average PD/LGD, expected loss)
- State-level rollups and state-by-quarter history
- Concentration measures (HHI, top-N share)
- Report payloads for narrative generation

Averages use each loan's latest snapshot only, never its full history.
"""

from collections import OrderedDict
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd

from ceclrisk.data.dataset import PortfolioDataset
from ceclrisk.data.segments import SEGMENT_IDS, get_segment
from ceclrisk.data.states import get_state_fips
from ceclrisk.data.simulate_loans import Loan
from ceclrisk.data.simulate_snapshots import LoanMetricsSnapshot
from ceclrisk.models.metrics import GeographicMetrics, PortfolioMetrics, SegmentMetrics
from ceclrisk.models.report_data import (
    GeographicSummary,
    PortfolioReport,
    ReportData,
    SegmentReport,
)

TOP_STATES_IN_REPORT = 10


# =============================================================================
# HELPERS
# =============================================================================

def latest_snapshots(snapshots: Iterable[LoanMetricsSnapshot]) -> Dict[str, LoanMetricsSnapshot]:
    """Latest snapshot (max snapshot date) per loan id"""
    latest = {}
    for snapshot in snapshots:
        existing = latest.get(snapshot.loan_id)
        if existing is None or snapshot.snapshot_date > existing.snapshot_date:
            latest[snapshot.loan_id] = snapshot
    return latest


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _metrics_from_latest(
    loans: Sequence[Loan],
    latest: Dict[str, LoanMetricsSnapshot]
) -> PortfolioMetrics:
    if not loans:
        return PortfolioMetrics()

    loan_snapshots = [latest[l.loan_id] for l in loans if l.loan_id in latest]
    charged_off_count = sum(1 for l in loans if l.is_charged_off)

    return PortfolioMetrics(
        total_exposure=sum(l.current_balance for l in loans),
        loan_count=len(loans),
        avg_pd=_mean([s.pd for s in loan_snapshots]),
        avg_lgd=_mean([s.lgd for s in loan_snapshots]),
        total_expected_loss=sum(s.expected_loss for s in loan_snapshots),
        charge_off_rate=charged_off_count / len(loans),
        charged_off_count=charged_off_count,
    )


def calculate_metrics_for_loans(
    loans: Sequence[Loan],
    snapshots: Iterable[LoanMetricsSnapshot]
) -> PortfolioMetrics:
    """
    Metrics for an arbitrary subset of loans.

    Only snapshots belonging to `loans` are considered. An empty subset
    yields a zero-valued record.
    """
    loan_ids = {l.loan_id for l in loans}
    relevant = (s for s in snapshots if s.loan_id in loan_ids)
    return _metrics_from_latest(loans, latest_snapshots(relevant))


def calculate_geographic_metrics(
    loans: Sequence[Loan],
    latest: Dict[str, LoanMetricsSnapshot]
) -> List[GeographicMetrics]:
    """State rollups sorted by exposure, descending; [] for no loans"""
    by_state: Dict[str, List[Loan]] = OrderedDict()
    for loan in loans:
        by_state.setdefault(loan.state, []).append(loan)

    results = []
    for state, state_loans in by_state.items():
        state_snapshots = [latest[l.loan_id] for l in state_loans if l.loan_id in latest]
        results.append(GeographicMetrics(
            state=state,
            loan_count=len(state_loans),
            total_exposure=sum(l.current_balance for l in state_loans),
            avg_pd=_mean([s.pd for s in state_snapshots]),
            avg_lgd=_mean([s.lgd for s in state_snapshots]),
            expected_loss=sum(s.expected_loss for s in state_snapshots),
        ))

    return sorted(results, key=lambda g: g.total_exposure, reverse=True)


def herfindahl_index(exposures: Sequence[float]) -> float:
    """
    Sum of squared percentage shares: 10000 for a single holder, 0 for an
    empty or zero-exposure portfolio.
    """
    total = float(np.sum(exposures)) if len(exposures) else 0.0
    if total <= 0:
        return 0.0
    shares = np.asarray(exposures, dtype=float) / total * 100
    return float(np.sum(shares ** 2))


def top_concentration(exposures: Sequence[float], n: int = 3) -> float:
    """Share of total exposure held by the `n` largest entries"""
    total = float(np.sum(exposures)) if len(exposures) else 0.0
    if total <= 0:
        return 0.0
    largest = sorted(exposures, reverse=True)[:n]
    return sum(largest) / total


# =============================================================================
# PORTFOLIO AGGREGATOR
# =============================================================================

class PortfolioAggregator:
    """
    Read-only aggregation over a PortfolioDataset.
    """

    def __init__(self, dataset: PortfolioDataset):
        self.dataset = dataset
        self._latest: Optional[Dict[str, LoanMetricsSnapshot]] = None

    @property
    def latest(self) -> Dict[str, LoanMetricsSnapshot]:
        if self._latest is None:
            self._latest = latest_snapshots(self.dataset.snapshots)
        return self._latest

    def _segment_loans(self, segment_id: str) -> List[Loan]:
        return [l for l in self.dataset.loans if l.segment == segment_id]

    def portfolio_metrics(self) -> PortfolioMetrics:
        return _metrics_from_latest(self.dataset.loans, self.latest)

    def segment_metrics(self, segment_id: str) -> SegmentMetrics:
        config = get_segment(segment_id)
        metrics = _metrics_from_latest(self._segment_loans(segment_id), self.latest)
        portfolio_exposure = sum(l.current_balance for l in self.dataset.loans)

        return SegmentMetrics(
            total_exposure=metrics.total_exposure,
            loan_count=metrics.loan_count,
            avg_pd=metrics.avg_pd,
            avg_lgd=metrics.avg_lgd,
            total_expected_loss=metrics.total_expected_loss,
            charge_off_rate=metrics.charge_off_rate,
            charged_off_count=metrics.charged_off_count,
            segment_id=segment_id,
            segment_name=config.label,
            segment_short_name=config.short_label,
            percent_of_portfolio=(metrics.total_exposure / portfolio_exposure
                                  if portfolio_exposure > 0 else 0.0),
        )

    def all_segment_metrics(self) -> List[SegmentMetrics]:
        """Every segment, largest exposure first"""
        metrics = [self.segment_metrics(s) for s in SEGMENT_IDS]
        return sorted(metrics, key=lambda m: m.total_exposure, reverse=True)

    def geographic_metrics(self, segment_id: str = None) -> List[GeographicMetrics]:
        """State rollups, optionally restricted to one segment"""
        if segment_id is None:
            loans = self.dataset.loans
        else:
            get_segment(segment_id)
            loans = self._segment_loans(segment_id)
        return calculate_geographic_metrics(loans, self.latest)

    def state_quarterly_metrics(self) -> pd.DataFrame:
        """
        State-by-quarter history of the snapshot set.

        Returns:
            DataFrame with state, fips (two-digit state code), period,
            pd (mean), lgd (mean), portfolio_value (sum), expected_loss (sum)
            and loan_count;
            state/quarter pairs without snapshots are omitted.
        """
        columns = ['state', 'fips', 'period', 'pd', 'lgd', 'portfolio_value', 'expected_loss', 'loan_count']
        state_of = {l.loan_id: l.state for l in self.dataset.loans}
        rows = [
            {
                'state': state_of[s.loan_id],
                'period': pd.Timestamp(s.snapshot_date),
                'pd': s.pd,
                'lgd': s.lgd,
                'portfolio_value': s.portfolio_value,
                'expected_loss': s.expected_loss,
            }
            for s in self.dataset.snapshots
            if s.loan_id in state_of
        ]
        if not rows:
            return pd.DataFrame(columns=columns)

        frame = pd.DataFrame(rows)
        grouped = frame.groupby(['state', 'period']).agg(
            pd=('pd', 'mean'),
            lgd=('lgd', 'mean'),
            portfolio_value=('portfolio_value', 'sum'),
            expected_loss=('expected_loss', 'sum'),
            loan_count=('pd', 'size'),
        )
        frame = grouped.reset_index()
        frame['fips'] = frame['state'].map(get_state_fips)
        return frame[columns]

    def geographic_summary(self) -> GeographicSummary:
        geographic = self.geographic_metrics()
        exposures = [g.total_exposure for g in geographic]
        return GeographicSummary(
            top_states=geographic[:TOP_STATES_IN_REPORT],
            state_count=len(geographic),
            hhi=int(round(herfindahl_index(exposures))),
            top3_concentration=top_concentration(exposures, 3),
        )

    def report_data(self, segment_id: str = None) -> ReportData:
        """Portfolio-scoped report, or segment-scoped when `segment_id` is given"""
        portfolio = self.portfolio_metrics()
        segments = self.all_segment_metrics()
        geographic = self.geographic_summary()

        if segment_id is None:
            return PortfolioReport(portfolio=portfolio, segments=segments, geographic=geographic)

        get_segment(segment_id)
        selected = next(s for s in segments if s.segment_id == segment_id)
        return SegmentReport(
            portfolio=portfolio,
            segments=segments,
            geographic=geographic,
            selected_segment=selected,
        )

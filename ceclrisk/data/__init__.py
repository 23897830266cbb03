"""
Synthetic data generation.

This module provides:
- Seeded loan, quarterly snapshot and charge-off history generators
- Segment and state reference tables
- Mock macroeconomic series
- PortfolioDataset: lazily generated, memoised base data sets
"""

from ceclrisk.data.prng import SeededRandom
from ceclrisk.data.segments import SEGMENT_CONFIGS, SEGMENT_IDS, get_segment, get_segment_label
from ceclrisk.data.states import US_STATES, get_state_name
from ceclrisk.data.simulate_loans import Loan, LoanGenerator, generate_loans
from ceclrisk.data.simulate_snapshots import LoanMetricsSnapshot, SnapshotGenerator, generate_snapshots
from ceclrisk.data.simulate_chargeoffs import (
    ChargeOffHistoryGenerator,
    ChargeOffLoanHistory,
    MonthlySnapshot,
    PaymentStatus,
    generate_charge_off_histories,
)
from ceclrisk.data.simulate_macro import MACRO_INDICATORS, MacroTimeSeries, generate_mock_macro_series
from ceclrisk.data.dataset import PortfolioDataset

__all__ = [
    "SeededRandom",
    "SEGMENT_CONFIGS",
    "SEGMENT_IDS",
    "get_segment",
    "get_segment_label",
    "US_STATES",
    "get_state_name",
    "Loan",
    "LoanGenerator",
    "generate_loans",
    "LoanMetricsSnapshot",
    "SnapshotGenerator",
    "generate_snapshots",
    "ChargeOffHistoryGenerator",
    "ChargeOffLoanHistory",
    "MonthlySnapshot",
    "PaymentStatus",
    "generate_charge_off_histories",
    "MACRO_INDICATORS",
    "MacroTimeSeries",
    "generate_mock_macro_series",
    "PortfolioDataset",
]

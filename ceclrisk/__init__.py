"""
CECL Risk: Synthetic Loan-Portfolio Data and Credit-Loss Analytics

A deterministic toolkit for CECL dashboards:
- Seeded generators for loans, quarterly risk snapshots and charge-off histories
- Portfolio Aggregator for segment, geographic and concentration views
- Backtesting, cohort and macro-correlation statistics
- FRED macro-data and narrative-report clients with local fallbacks
"""

__version__ = "0.1.0"

from ceclrisk.config import GenerationConfig, ServiceSettings
from ceclrisk.data import (
    PortfolioDataset,
    generate_loans,
    generate_snapshots,
    generate_charge_off_histories,
)
from ceclrisk.models import PortfolioAggregator, format_report_data_for_ai
from ceclrisk.calibration import BacktestFramework, CohortAnalyzer, macro_credit_correlations

__all__ = [
    "GenerationConfig",
    "ServiceSettings",
    "PortfolioDataset",
    "generate_loans",
    "generate_snapshots",
    "generate_charge_off_histories",
    "PortfolioAggregator",
    "format_report_data_for_ai",
    "BacktestFramework",
    "CohortAnalyzer",
    "macro_credit_correlations",
]

"""
Model validation statistics.

This module provides:
- BacktestFramework: predicted vs actual loss error metrics
- CohortAnalyzer: pre-charge-off PD/LGD trends and warning signals
- Macro / credit correlation
"""

from ceclrisk.calibration.backtest import BacktestConfig, BacktestFramework, generate_backtesting_data
from ceclrisk.calibration.cohort import CohortAnalyzer
from ceclrisk.calibration.correlation import macro_credit_correlations, quarterly_credit_series

__all__ = [
    "BacktestConfig",
    "BacktestFramework",
    "generate_backtesting_data",
    "CohortAnalyzer",
    "macro_credit_correlations",
    "quarterly_credit_series",
]

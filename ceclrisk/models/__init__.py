"""
Portfolio aggregation and report payloads.
"""

from ceclrisk.models.metrics import GeographicMetrics, PortfolioMetrics, SegmentMetrics
from ceclrisk.models.portfolio_aggregator import PortfolioAggregator, herfindahl_index
from ceclrisk.models.report_data import (
    PortfolioReport,
    SegmentReport,
    format_report_data_for_ai,
)

__all__ = [
    "GeographicMetrics",
    "PortfolioMetrics",
    "SegmentMetrics",
    "PortfolioAggregator",
    "herfindahl_index",
    "PortfolioReport",
    "SegmentReport",
    "format_report_data_for_ai",
]

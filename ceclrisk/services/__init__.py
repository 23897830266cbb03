"""
External service clients: FRED macro data and narrative report generation.
"""

from ceclrisk.services.ai_report import (
    ReportGenerator,
    ReportRequest,
    ReportResponse,
    generate_mock_report,
    handle_generate_report,
)
from ceclrisk.services.fred import MacroDataClient

__all__ = [
    "ReportGenerator",
    "ReportRequest",
    "ReportResponse",
    "handle_generate_report",
    "generate_mock_report",
    "MacroDataClient",
]

"""
Aggregate metric records.

Pure derived values: sums, averages and ratios over loans and their latest
quarterly snapshots. Formatted variants are computed on access.
"""

from dataclasses import dataclass

from ceclrisk.formatting import format_compact_number, format_percent


@dataclass(frozen=True)
class PortfolioMetrics:
    total_exposure: float = 0.0
    loan_count: int = 0
    avg_pd: float = 0.0
    avg_lgd: float = 0.0
    total_expected_loss: float = 0.0
    charge_off_rate: float = 0.0
    charged_off_count: int = 0

    @property
    def total_exposure_formatted(self) -> str:
        return format_compact_number(self.total_exposure)

    @property
    def avg_pd_formatted(self) -> str:
        return format_percent(self.avg_pd)

    @property
    def avg_lgd_formatted(self) -> str:
        return format_percent(self.avg_lgd)

    @property
    def total_expected_loss_formatted(self) -> str:
        return format_compact_number(self.total_expected_loss)

    @property
    def charge_off_rate_formatted(self) -> str:
        return format_percent(self.charge_off_rate)


@dataclass(frozen=True)
class SegmentMetrics(PortfolioMetrics):
    segment_id: str = ''
    segment_name: str = ''
    segment_short_name: str = ''
    percent_of_portfolio: float = 0.0  # share of total exposure, 0..1


@dataclass(frozen=True)
class GeographicMetrics:
    state: str
    loan_count: int
    total_exposure: float
    avg_pd: float
    avg_lgd: float
    expected_loss: float

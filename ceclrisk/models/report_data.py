"""
Report payloads for narrative generation.

A report is either portfolio-scoped or segment-scoped; both variants carry a
fixed field set, and format_report_data_for_ai flattens either one into the
JSON-ready dict that is embedded in the report prompt.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from ceclrisk.formatting import format_compact_number, format_percent
from ceclrisk.models.metrics import GeographicMetrics, PortfolioMetrics, SegmentMetrics


@dataclass(frozen=True)
class GeographicSummary:
    """State concentration of the whole portfolio"""
    top_states: List[GeographicMetrics]  # top 10 by exposure
    state_count: int
    hhi: int  # Herfindahl-Hirschman index, 0..10000
    top3_concentration: float  # share of exposure in the 3 largest states


@dataclass(frozen=True)
class PortfolioReport:
    portfolio: PortfolioMetrics
    segments: List[SegmentMetrics]  # sorted by exposure, descending
    geographic: GeographicSummary
    scope: str = field(default='portfolio', init=False)


@dataclass(frozen=True)
class SegmentReport:
    portfolio: PortfolioMetrics
    segments: List[SegmentMetrics]
    geographic: GeographicSummary
    selected_segment: SegmentMetrics
    scope: str = field(default='segment', init=False)

    @property
    def segment_ranking(self) -> int:
        """1-based rank of the selected segment by exposure"""
        ids = [s.segment_id for s in self.segments]
        return ids.index(self.selected_segment.segment_id) + 1


ReportData = Union[PortfolioReport, SegmentReport]


def _headline(metrics: PortfolioMetrics, scope: str, segment_name: str) -> Dict[str, Any]:
    return {
        'reportScope': scope,
        'segmentName': segment_name,
        'portfolioSize': metrics.loan_count,
        'totalExposure': metrics.total_exposure_formatted,
        'totalExposureRaw': metrics.total_exposure,
        'avgPD': metrics.avg_pd_formatted,
        'avgPDRaw': metrics.avg_pd,
        'avgLGD': metrics.avg_lgd_formatted,
        'avgLGDRaw': metrics.avg_lgd,
        'expectedLoss': metrics.total_expected_loss_formatted,
        'expectedLossRaw': metrics.total_expected_loss,
        'chargeOffRate': metrics.charge_off_rate_formatted,
    }


def format_report_data_for_ai(report: ReportData) -> Dict[str, Any]:
    """Flatten a report into the key-value payload sent with the prompt"""
    if isinstance(report, SegmentReport):
        selected = report.selected_segment
        payload = _headline(selected, 'segment', selected.segment_name)
        payload.update({
            'percentOfTotalPortfolio': format_percent(selected.percent_of_portfolio),
            'totalPortfolioExposure': report.portfolio.total_exposure_formatted,
            'segmentRanking': report.segment_ranking,
            'totalSegments': len(report.segments),
            'pdVsPortfolio': selected.avg_pd - report.portfolio.avg_pd,
            'lgdVsPortfolio': selected.avg_lgd - report.portfolio.avg_lgd,
        })
        return payload

    portfolio = report.portfolio
    total = portfolio.total_exposure
    payload = _headline(portfolio, 'portfolio', 'Full Portfolio')
    payload['segments'] = [
        {
            'name': s.segment_name,
            'shortName': s.segment_short_name,
            'exposure': s.total_exposure_formatted,
            'exposureRaw': s.total_exposure,
            'percentOfPortfolio': format_percent(s.percent_of_portfolio),
            'avgPD': s.avg_pd_formatted,
            'avgLGD': s.avg_lgd_formatted,
            'expectedLoss': s.total_expected_loss_formatted,
            'loanCount': s.loan_count,
        }
        for s in report.segments
    ]
    payload['geographic'] = {
        'stateCount': report.geographic.state_count,
        'hhi': report.geographic.hhi,
        'top3Concentration': format_percent(report.geographic.top3_concentration),
        'topStates': [
            {
                'state': g.state,
                'exposure': format_compact_number(g.total_exposure),
                'percentOfPortfolio': format_percent(g.total_exposure / total if total > 0 else 0.0),
                'avgPD': format_percent(g.avg_pd),
                'avgLGD': format_percent(g.avg_lgd),
                'loanCount': g.loan_count,
            }
            for g in report.geographic.top_states[:5]
        ],
    }
    return payload

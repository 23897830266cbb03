"""Tests for portfolio, segment and geographic aggregation."""

import json

import pytest

from ceclrisk.data.segments import SEGMENT_IDS
from ceclrisk.models.metrics import PortfolioMetrics
from ceclrisk.models.portfolio_aggregator import (
    calculate_geographic_metrics,
    calculate_metrics_for_loans,
    herfindahl_index,
    latest_snapshots,
    top_concentration,
)
from ceclrisk.models.report_data import PortfolioReport, SegmentReport, format_report_data_for_ai


# =============================================================================
# PORTFOLIO / SEGMENT METRICS
# =============================================================================

def test_latest_snapshot_per_loan(snapshots):
    latest = latest_snapshots(snapshots)
    for snap in snapshots:
        assert latest[snap.loan_id].snapshot_date >= snap.snapshot_date


def test_portfolio_totals(aggregator, loans):
    metrics = aggregator.portfolio_metrics()
    assert metrics.loan_count == 5000
    assert metrics.total_exposure == pytest.approx(sum(l.current_balance for l in loans))
    charged_off = sum(l.is_charged_off for l in loans)
    assert metrics.charged_off_count == charged_off
    assert metrics.charge_off_rate == charged_off / 5000


def test_expected_loss_uses_latest_snapshots(aggregator):
    metrics = aggregator.portfolio_metrics()
    expected = sum(s.expected_loss for s in aggregator.latest.values())
    assert metrics.total_expected_loss == pytest.approx(expected)
    assert 0 < metrics.avg_pd < 0.25
    assert 0 < metrics.avg_lgd < 0.85


def test_segments_partition_portfolio(aggregator):
    portfolio = aggregator.portfolio_metrics()
    segments = aggregator.all_segment_metrics()

    assert len(segments) == len(SEGMENT_IDS)
    assert sum(s.loan_count for s in segments) == portfolio.loan_count
    assert sum(s.total_exposure for s in segments) == pytest.approx(portfolio.total_exposure)
    assert sum(s.total_expected_loss for s in segments) == pytest.approx(portfolio.total_expected_loss)
    assert sum(s.percent_of_portfolio for s in segments) == pytest.approx(1.0)


def test_segments_sorted_by_exposure(aggregator):
    exposures = [s.total_exposure for s in aggregator.all_segment_metrics()]
    assert exposures == sorted(exposures, reverse=True)


def test_segment_metrics_labels(aggregator):
    metrics = aggregator.segment_metrics('AUTO')
    assert metrics.segment_id == 'AUTO'
    assert metrics.segment_name == 'Auto'
    assert metrics.loan_count > 0


def test_unknown_segment_rejected(aggregator):
    with pytest.raises(ValueError):
        aggregator.segment_metrics('BOATS')
    with pytest.raises(ValueError):
        aggregator.report_data('BOATS')


def test_empty_subset_is_zero_record(snapshots):
    assert calculate_metrics_for_loans([], snapshots) == PortfolioMetrics()


def test_subset_matches_segment_metrics(aggregator, loans, snapshots):
    auto_loans = [l for l in loans if l.segment == 'AUTO']
    subset = calculate_metrics_for_loans(auto_loans, snapshots)
    segment = aggregator.segment_metrics('AUTO')
    assert subset.total_exposure == pytest.approx(segment.total_exposure)
    assert subset.avg_pd == pytest.approx(segment.avg_pd)


# =============================================================================
# GEOGRAPHIC
# =============================================================================

def test_geographic_partition(aggregator, loans):
    geographic = aggregator.geographic_metrics()
    assert sum(g.loan_count for g in geographic) == len(loans)
    assert sum(g.total_exposure for g in geographic) == pytest.approx(
        aggregator.portfolio_metrics().total_exposure
    )
    exposures = [g.total_exposure for g in geographic]
    assert exposures == sorted(exposures, reverse=True)


def test_geographic_for_segment(aggregator):
    geographic = aggregator.geographic_metrics('CONSTRUCTION')
    assert sum(g.loan_count for g in geographic) == aggregator.segment_metrics('CONSTRUCTION').loan_count


def test_geographic_empty():
    assert calculate_geographic_metrics([], {}) == []


def test_state_quarterly_metrics(aggregator, snapshots):
    frame = aggregator.state_quarterly_metrics()
    assert list(frame.columns) == [
        'state', 'fips', 'period', 'pd', 'lgd', 'portfolio_value', 'expected_loss', 'loan_count'
    ]
    assert frame['loan_count'].sum() == len(snapshots)
    assert not frame.duplicated(['state', 'period']).any()


def test_state_quarterly_fips_codes(aggregator):
    frame = aggregator.state_quarterly_metrics()
    assert set(frame.loc[frame['state'] == 'CA', 'fips']) == {'06'}
    assert set(frame.loc[frame['state'] == 'TX', 'fips']) == {'48'}
    assert frame['fips'].str.len().eq(2).all()


# =============================================================================
# CONCENTRATION
# =============================================================================

def test_hhi_single_holder():
    assert herfindahl_index([5_000_000]) == pytest.approx(10_000)


def test_hhi_equal_shares():
    assert herfindahl_index([1, 1, 1, 1]) == pytest.approx(2_500)


def test_hhi_empty_or_zero():
    assert herfindahl_index([]) == 0.0
    assert herfindahl_index([0, 0]) == 0.0


def test_top_concentration():
    assert top_concentration([10, 20, 30, 40], 3) == pytest.approx(0.9)
    assert top_concentration([], 3) == 0.0


def test_geographic_summary(aggregator):
    summary = aggregator.geographic_summary()
    assert len(summary.top_states) == 10
    assert summary.state_count == len(aggregator.geographic_metrics())
    assert isinstance(summary.hhi, int)
    assert 0 < summary.hhi < 10_000
    assert 0 < summary.top3_concentration < 1


# =============================================================================
# REPORT DATA
# =============================================================================

def test_portfolio_report(aggregator):
    report = aggregator.report_data()
    assert isinstance(report, PortfolioReport)
    assert report.scope == 'portfolio'

    payload = format_report_data_for_ai(report)
    assert payload['reportScope'] == 'portfolio'
    assert payload['portfolioSize'] == 5000
    assert len(payload['segments']) == len(SEGMENT_IDS)
    assert len(payload['geographic']['topStates']) == 5
    json.dumps(payload)


def test_segment_report(aggregator):
    report = aggregator.report_data('CONSUMER')
    assert isinstance(report, SegmentReport)
    assert report.scope == 'segment'
    assert report.selected_segment.segment_id == 'CONSUMER'

    ranking = [s.segment_id for s in aggregator.all_segment_metrics()].index('CONSUMER') + 1
    assert report.segment_ranking == ranking

    payload = format_report_data_for_ai(report)
    assert payload['reportScope'] == 'segment'
    assert payload['segmentRanking'] == ranking
    assert payload['totalSegments'] == len(SEGMENT_IDS)
    assert payload['pdVsPortfolio'] == pytest.approx(
        report.selected_segment.avg_pd - report.portfolio.avg_pd
    )
    json.dumps(payload)

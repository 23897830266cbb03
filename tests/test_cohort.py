"""Tests for pre-charge-off cohort statistics."""

import pytest

from ceclrisk.calibration.cohort import WARNING_SIGNALS, CohortAnalyzer


@pytest.fixture(scope="module")
def analyzer(histories):
    return CohortAnalyzer(histories)


def test_trend_has_one_bucket_per_month(analyzer, histories):
    trend = analyzer.cohort_trend()
    assert [b.month for b in trend] == list(range(-36, 1))
    assert all(b.count == len(histories) for b in trend)


def test_trend_bucket_ordering(analyzer):
    for bucket in analyzer.cohort_trend():
        assert bucket.min_pd <= bucket.avg_pd <= bucket.max_pd
        assert bucket.min_lgd <= bucket.avg_lgd <= bucket.max_lgd


def test_pd_rises_into_charge_off(analyzer):
    trend = analyzer.cohort_trend()
    assert trend[-1].avg_pd > trend[0].avg_pd


def test_empty_trend_is_zero_filled():
    trend = CohortAnalyzer([]).cohort_trend()
    assert len(trend) == 37
    assert all(b.count == 0 and b.avg_pd == 0.0 for b in trend)


def test_segment_filter(analyzer, histories):
    segment = histories[0].segment
    expected = sum(1 for h in histories if h.segment == segment)
    assert analyzer.cohort_trend(segment)[0].count == expected


def test_unknown_segment_rejected(analyzer):
    with pytest.raises(ValueError):
        analyzer.cohort_trend('BOATS')


def test_segment_comparison(analyzer, histories):
    comparison = analyzer.segment_comparison()
    assert sum(c.count for c in comparison) == len(histories)
    for row in comparison:
        assert row.pd_0 > row.pd_12
        assert row.avg_charge_off > 0


def test_warning_signals(analyzer):
    signals = analyzer.warning_signals()
    assert {s.signal for s in signals} == set(WARNING_SIGNALS)
    assert all(0 <= s.prevalence <= 100 for s in signals)
    assert all(s.avg_months_before >= 0 for s in signals)
    lead_times = [s.avg_months_before for s in signals]
    assert lead_times == sorted(lead_times, reverse=True)


def test_delinquency_signal_always_fires(analyzer):
    """Every history is 90 days past due at charge-off."""
    signal = next(s for s in analyzer.warning_signals() if s.signal == 'First 30+ DPD occurrence')
    assert signal.prevalence == 100.0
    assert 6 <= signal.avg_months_before <= 12


def test_warning_signals_empty():
    signals = CohortAnalyzer([]).warning_signals()
    assert all(s.prevalence == 0.0 and s.avg_months_before == 0.0 for s in signals)

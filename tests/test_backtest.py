"""Tests for the backtesting framework."""

import math

import numpy as np
import pytest

from ceclrisk.calibration.backtest import (
    BacktestConfig,
    BacktestFramework,
    BacktestPoint,
    backtest_quarters,
    generate_backtesting_data,
)
from ceclrisk.data.segments import SEGMENT_IDS


def test_quarters_2020_q1_to_2024_q3():
    quarters = backtest_quarters()
    assert len(quarters) == 19
    assert quarters[0] == '2020-Q1'
    assert quarters[-1] == '2024-Q3'


def test_generated_series_deterministic():
    assert generate_backtesting_data('all') == generate_backtesting_data('all')


def test_segments_have_distinct_series():
    series = {s: tuple(p.actual for p in generate_backtesting_data(s)) for s in SEGMENT_IDS}
    assert len(set(series.values())) == len(SEGMENT_IDS)


def test_unknown_segment_rejected():
    with pytest.raises(ValueError):
        generate_backtesting_data('BOATS')


def test_points_are_positive_whole_dollars():
    for point in generate_backtesting_data('C_AND_I'):
        assert point.predicted > 0
        assert point.actual > 0
        assert point.predicted == int(point.predicted)
        assert 0 < point.reserve_ratio < 1


def test_point_variance():
    point = BacktestPoint('2021-Q1', predicted=100.0, actual=120.0, reserve_ratio=0.01, charge_off_rate=0.012)
    assert point.variance == 20.0
    assert point.variance_percent == pytest.approx(20.0)


def test_point_variance_zero_prediction():
    assert BacktestPoint('2021-Q1', 0.0, 0.0, 0.0, 0.0).variance_percent == 0.0
    assert math.isinf(BacktestPoint('2021-Q1', 0.0, 5.0, 0.0, 0.0).variance_percent)


def test_perfect_forecast():
    metrics = BacktestFramework().compute_metrics([100, 200, 300], [100, 200, 300])
    assert metrics['mae'] == 0.0
    assert metrics['rmse'] == 0.0
    assert metrics['mape'] == 0.0
    assert metrics['bias'] == 0.0
    assert metrics['accuracy'] == 100.0
    assert metrics['bias_p_value'] == 1.0
    assert metrics['n_periods'] == 3


def test_known_errors():
    metrics = BacktestFramework().compute_metrics([100, 100, 100, 100], [110, 90, 130, 100])
    assert metrics['mae'] == pytest.approx(12.5)
    assert metrics['rmse'] == pytest.approx(np.sqrt((100 + 100 + 900) / 4))
    assert metrics['mape'] == pytest.approx(12.5)
    assert metrics['bias'] == pytest.approx(7.5)
    assert metrics['accuracy'] == pytest.approx(75.0)


def test_accuracy_threshold_configurable():
    framework = BacktestFramework(BacktestConfig(accuracy_threshold_pct=5.0))
    metrics = framework.compute_metrics([100, 100], [104, 110])
    assert metrics['accuracy'] == pytest.approx(50.0)


def test_empty_series():
    metrics = BacktestFramework().compute_metrics([], [])
    assert metrics['mae'] == 0.0
    assert metrics['accuracy'] == 0.0
    assert metrics['n_periods'] == 0


def test_length_mismatch_rejected():
    with pytest.raises(ValueError):
        BacktestFramework().compute_metrics([1, 2], [1])


def test_zero_predictions_excluded_from_mape():
    metrics = BacktestFramework().compute_metrics([0, 100], [50, 110])
    assert metrics['mape'] == pytest.approx(10.0)
    assert metrics['accuracy'] == pytest.approx(50.0)


def test_constant_bias_is_significant():
    result = BacktestFramework.bias_test(np.array([5.0, 5.0, 5.0]))
    assert result['bias_p_value'] == 0.0


def test_bias_test_detects_systematic_underprediction():
    errors = np.array([10.0, 12.0, 9.0, 11.0, 13.0, 10.5])
    result = BacktestFramework.bias_test(errors)
    assert result['bias_t_stat'] > 0
    assert result['bias_p_value'] < 0.01


def test_run():
    framework = BacktestFramework()
    result = framework.run('all')
    assert result['segment'] == 'all'
    assert len(result['periods']) == 19
    assert result['metrics']['n_periods'] == 19
    assert result['summary']['total_predicted'] == sum(p.predicted for p in result['periods'])
    assert framework.results['all'] is result


def test_stress_quarters_raise_actual_losses():
    points = generate_backtesting_data('CONSTRUCTION')
    stressed = np.mean([p.actual / p.predicted for p in points[8:13]])
    calm = np.mean([p.actual / p.predicted for p in points[:8]])
    assert stressed > calm

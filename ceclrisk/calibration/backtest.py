"""
Backtesting Framework - Predicted vs Actual Credit Losses

Provides backtesting tools for:
- Synthetic quarterly predicted/actual loss series per segment
- Point-forecast error metrics (MAE, RMSE, MAPE, bias)
- Accuracy within a percent-error threshold
- Bias significance (one-sample t-test on signed errors)
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Sequence

import numpy as np
from scipy import stats

from ceclrisk.data.prng import SeededRandom
from ceclrisk.data.segments import SEGMENT_IDS, get_segment


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass
class BacktestConfig:
    """Configuration for backtesting"""
    accuracy_threshold_pct: float = 20.0  # |percent error| counted as accurate
    first_year: int = 2020
    last_year: int = 2024
    last_quarter: int = 3
    stress_window: tuple = (8, 12)
    exposure_growth_per_quarter: float = 2_000_000


@dataclass(frozen=True)
class SegmentBacktestProfile:
    """Loss level and model quality characteristics of a segment"""
    base_loss: float
    portfolio_size: float
    model_accuracy: float  # 0-1
    volatility: float  # spread of actual around predicted
    stress_sensitivity: float  # actual-loss multiplier in stress quarters


SEGMENT_BACKTEST_PROFILES: Dict[str, SegmentBacktestProfile] = {
    'RESIDENTIAL_1_4': SegmentBacktestProfile(800_000, 150_000_000, 0.92, 0.15, 1.2),
    'CRE_NON_OWNER': SegmentBacktestProfile(1_200_000, 180_000_000, 0.78, 0.35, 1.5),
    'CRE_OWNER': SegmentBacktestProfile(600_000, 120_000_000, 0.82, 0.28, 1.4),
    'C_AND_I': SegmentBacktestProfile(900_000, 140_000_000, 0.75, 0.40, 1.6),
    'CONSUMER': SegmentBacktestProfile(400_000, 60_000_000, 0.88, 0.20, 1.3),
    'AUTO': SegmentBacktestProfile(350_000, 55_000_000, 0.90, 0.18, 1.25),
    'MULTIFAMILY': SegmentBacktestProfile(500_000, 100_000_000, 0.85, 0.22, 1.2),
    'CONSTRUCTION': SegmentBacktestProfile(700_000, 80_000_000, 0.70, 0.45, 1.8),
}

# Weighted-average portfolio profile
PORTFOLIO_BACKTEST_PROFILE = SegmentBacktestProfile(2_500_000, 50_000_000, 0.82, 0.25, 1.3)


@dataclass(frozen=True)
class BacktestPoint:
    """One quarter of predicted vs actual loss"""
    period: str  # e.g. '2021-Q3'
    predicted: float
    actual: float
    reserve_ratio: float
    charge_off_rate: float

    @property
    def variance(self) -> float:
        return self.actual - self.predicted

    @property
    def variance_percent(self) -> float:
        if self.predicted == 0:
            return 0.0 if self.actual == 0 else math.inf
        return (self.actual - self.predicted) / self.predicted * 100


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def backtest_quarters(config: BacktestConfig = None) -> List[str]:
    config = config or BacktestConfig()
    quarters = []
    for year in range(config.first_year, config.last_year + 1):
        for q in range(1, 5):
            if year == config.last_year and q > config.last_quarter:
                break
            quarters.append(f"{year}-Q{q}")
    return quarters


def generate_backtesting_data(segment: str = 'all', config: BacktestConfig = None) -> List[BacktestPoint]:
    """
    Synthetic quarterly predicted/actual losses for a segment or 'all'.

    Predicted losses follow a seasonal curve around the base loss; actual
    losses apply the segment's model accuracy, a seeded error term and the
    stress multiplier inside the stress window. Each segment has its own seed.
    """
    config = config or BacktestConfig()
    if segment == 'all':
        profile = PORTFOLIO_BACKTEST_PROFILE
        seed = 42
    else:
        get_segment(segment)
        profile = SEGMENT_BACKTEST_PROFILES[segment]
        seed = SEGMENT_IDS.index(segment) * 100 + 42

    rng = SeededRandom(seed)
    lo, hi = config.stress_window
    points = []

    for idx, period in enumerate(backtest_quarters(config)):
        seasonal_factor = 1 + math.sin(idx / 2) * 0.2
        base_predicted = profile.base_loss * seasonal_factor

        stress_factor = profile.stress_sensitivity if lo <= idx <= hi else 1.0
        model_error = (rng.next() - 0.5) * 2 * profile.volatility
        accuracy_factor = profile.model_accuracy + (1 - profile.model_accuracy) * model_error
        base_actual = base_predicted * stress_factor * accuracy_factor

        predicted = _round_half_up(base_predicted)
        actual = _round_half_up(base_actual)
        exposure = profile.portfolio_size + idx * config.exposure_growth_per_quarter

        points.append(BacktestPoint(
            period=period,
            predicted=predicted,
            actual=actual,
            reserve_ratio=predicted / exposure,
            charge_off_rate=actual / exposure,
        ))

    return points


# =============================================================================
# BACKTEST FRAMEWORK
# =============================================================================

class BacktestFramework:
    """
    Predicted-vs-actual loss backtesting.

    Methods:
    - Point forecast error metrics
    - Threshold accuracy
    - Bias significance
    """

    def __init__(self, config: BacktestConfig = None):
        self.config = config or BacktestConfig()
        self.results = {}

    @staticmethod
    def percent_errors(predicted: np.ndarray, actual: np.ndarray) -> np.ndarray:
        """
        Per-point (actual - predicted) / predicted * 100.

        A zero prediction gives 0 when the actual is also zero, else inf.
        """
        pct = np.zeros(len(predicted), dtype=float)
        nonzero = predicted != 0
        pct[nonzero] = (actual[nonzero] - predicted[nonzero]) / predicted[nonzero] * 100
        pct[~nonzero & (actual != 0)] = np.inf
        return pct

    def compute_metrics(
        self,
        predicted: Sequence[float],
        actual: Sequence[float]
    ) -> Dict[str, float]:
        """
        Compute backtest metrics.

        Args:
            predicted: Model predictions
            actual: Actual values

        Returns:
            Dictionary of metrics; all zeros for empty series
        """
        predicted = np.asarray(predicted, dtype=float)
        actual = np.asarray(actual, dtype=float)
        if predicted.shape != actual.shape:
            raise ValueError(
                f"predicted and actual must have the same length, got {len(predicted)} and {len(actual)}"
            )

        n = len(predicted)
        if n == 0:
            return {'mae': 0.0, 'rmse': 0.0, 'mape': 0.0, 'bias': 0.0, 'accuracy': 0.0,
                    'bias_t_stat': 0.0, 'bias_p_value': 1.0, 'n_periods': 0}

        errors = actual - predicted
        abs_pct = np.abs(self.percent_errors(predicted, actual))
        finite_pct = abs_pct[np.isfinite(abs_pct)]

        metrics = {
            'mae': float(np.abs(errors).mean()),
            'rmse': float(np.sqrt((errors ** 2).mean())),
            # Mean of per-point percent errors, zero predictions excluded
            'mape': float(finite_pct.mean()) if len(finite_pct) else 0.0,
            'bias': float(errors.mean()),
            'accuracy': float((abs_pct <= self.config.accuracy_threshold_pct).sum() / n * 100),
            'n_periods': n,
        }
        metrics.update(self.bias_test(errors))

        self.results['metrics'] = metrics
        return metrics

    @staticmethod
    def bias_test(errors: np.ndarray) -> Dict[str, float]:
        """
        One-sample t-test of the signed errors against zero.

        Constant errors have no spread: p is 1 when they are all zero and 0
        otherwise.
        """
        if len(errors) < 2 or np.std(errors) == 0:
            mean = float(np.mean(errors)) if len(errors) else 0.0
            return {'bias_t_stat': 0.0, 'bias_p_value': 1.0 if mean == 0 else 0.0}

        t_stat, p_value = stats.ttest_1samp(errors, 0.0)
        return {'bias_t_stat': float(t_stat), 'bias_p_value': float(p_value)}

    def run(self, segment: str = 'all') -> Dict[str, object]:
        """
        Generate a segment's series and evaluate it.

        Returns:
            Dict with 'periods', 'metrics' and portfolio-level 'summary'
        """
        points = generate_backtesting_data(segment, self.config)
        metrics = self.compute_metrics([p.predicted for p in points], [p.actual for p in points])

        total_predicted = sum(p.predicted for p in points)
        total_actual = sum(p.actual for p in points)
        summary = {
            'total_predicted': total_predicted,
            'total_actual': total_actual,
            'avg_variance_pct': ((total_actual - total_predicted) / total_predicted * 100
                                 if total_predicted else 0.0),
        }

        result = {'segment': segment, 'periods': points, 'metrics': metrics, 'summary': summary}
        self.results[segment] = result
        return result

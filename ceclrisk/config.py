"""
Configuration for synthetic data generation and external services.

- GenerationConfig: seeds, stress window and risk-ramp constants
- ServiceSettings: API credentials and endpoints read from the environment
"""

import os
from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple


# =============================================================================
# GENERATION
# =============================================================================

@dataclass
class GenerationConfig:
    """Parameters of the synthetic portfolio generators"""
    n_loans: int = 5000
    as_of: Optional[date] = None  # None = today

    # Independent PRNG streams per data family
    loan_seed: int = 42
    snapshot_seed: int = 123
    charge_off_seed: int = 456

    # Loan generation
    origination_years_back: int = 5
    charge_off_probability: float = 0.04
    charge_off_month_range: Tuple[int, int] = (6, 48)
    current_balance_range: Tuple[float, float] = (0.7, 1.0)
    charge_off_amount_range: Tuple[float, float] = (0.3, 0.8)
    interest_rate_range: Tuple[float, float] = (0.03, 0.12)
    credit_score_range: Tuple[int, int] = (580, 850)

    # Quarterly snapshots
    n_quarters: int = 20
    stress_window: Tuple[int, int] = (8, 12)  # inclusive quarter indices
    stress_pd_multiplier: float = 1.5
    stress_pd_cap: float = 0.25
    stress_lgd_multiplier: float = 1.2
    stress_lgd_cap: float = 0.85
    snapshot_value_range: Tuple[float, float] = (0.95, 1.05)

    # Pre-charge-off histories
    history_months: int = 36
    max_histories: int = 200
    pd_ramp: float = 4.0  # quadratic
    lgd_ramp: float = 0.5  # linear
    history_pd_noise: Tuple[float, float] = (0.8, 1.2)
    history_lgd_noise: Tuple[float, float] = (0.9, 1.1)
    history_pd_cap: float = 0.95
    history_lgd_cap: float = 0.90
    history_value_range: Tuple[float, float] = (0.95, 1.02)
    delinquent_30_probability: float = 0.7

    def __post_init__(self):
        if self.n_loans < 0:
            raise ValueError(f"n_loans must be non-negative, got {self.n_loans}")
        if self.n_quarters <= 0:
            raise ValueError(f"n_quarters must be positive, got {self.n_quarters}")
        if self.history_months <= 0:
            raise ValueError(f"history_months must be positive, got {self.history_months}")
        lo, hi = self.stress_window
        if lo > hi:
            raise ValueError(f"Invalid stress window: {self.stress_window}")
        if not 0.0 <= self.charge_off_probability <= 1.0:
            raise ValueError(
                f"charge_off_probability must be in [0, 1], got {self.charge_off_probability}"
            )

    def resolve_as_of(self, as_of: Optional[date] = None) -> date:
        """Explicit argument wins, then the configured date, then today"""
        return as_of or self.as_of or date.today()

    def is_stressed(self, quarter_index: int) -> bool:
        lo, hi = self.stress_window
        return lo <= quarter_index <= hi


DEFAULT_CONFIG = GenerationConfig()


# =============================================================================
# EXTERNAL SERVICES
# =============================================================================

OPENAI_API_URL = 'https://api.openai.com/v1/chat/completions'
DEFAULT_MODEL = 'gpt-4o'


@dataclass(frozen=True)
class ServiceSettings:
    """Credentials and endpoints for the report and macro-data services"""
    openai_api_key: Optional[str] = None
    openai_model: str = DEFAULT_MODEL
    openai_api_url: str = OPENAI_API_URL
    fred_api_key: Optional[str] = None
    request_timeout: float = 60.0

    @classmethod
    def from_env(cls) -> 'ServiceSettings':
        return cls(
            openai_api_key=os.environ.get('OPENAI_API_KEY') or None,
            openai_model=os.environ.get('OPENAI_MODEL', DEFAULT_MODEL),
            openai_api_url=os.environ.get('OPENAI_API_URL', OPENAI_API_URL),
            fred_api_key=os.environ.get('FRED_API_KEY') or None,
            request_timeout=float(os.environ.get('CECLRISK_REQUEST_TIMEOUT', '60')),
        )

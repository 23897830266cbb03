"""
Pre-Charge-Off Risk Trajectories

Monthly history of the 36 months leading up to each charge-off:
- PD escalates quadratically and LGD linearly towards charge-off
- Bounded multiplicative noise on both, with hard caps
- Payment status deteriorates in stages (30 -> 60 -> 90 days past due)
"""

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import List, Tuple

from dateutil.relativedelta import relativedelta

from ceclrisk.config import GenerationConfig, DEFAULT_CONFIG
from ceclrisk.data.prng import SeededRandom
from ceclrisk.data.segments import SEGMENT_CONFIGS
from ceclrisk.data.simulate_loans import Loan

logger = logging.getLogger(__name__)


class PaymentStatus(Enum):
    """Delinquency stage, ordered from best to worst"""
    CURRENT = "current"
    DELINQUENT_30 = "delinquent_30"
    DELINQUENT_60 = "delinquent_60"
    DELINQUENT_90 = "delinquent_90"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    def __lt__(self, other):
        if not isinstance(other, PaymentStatus):
            return NotImplemented
        return self.severity < other.severity


_SEVERITY = {
    PaymentStatus.CURRENT: 0,
    PaymentStatus.DELINQUENT_30: 1,
    PaymentStatus.DELINQUENT_60: 2,
    PaymentStatus.DELINQUENT_90: 3,
}


@dataclass(frozen=True)
class MonthlySnapshot:
    """One month of a pre-charge-off trajectory"""
    months_before_charge_off: int  # -36 .. 0
    date: date
    pd: float
    lgd: float
    portfolio_value: float
    payment_status: PaymentStatus


@dataclass(frozen=True)
class ChargeOffLoanHistory:
    """Monthly risk trajectory anchored at the charge-off date"""
    loan_id: str
    segment: str
    charge_off_date: date
    charge_off_amount: float
    monthly_snapshots: Tuple[MonthlySnapshot, ...]


class ChargeOffHistoryGenerator:
    """
    Builds pre-charge-off histories for the first charged-off loans.

    Only the first `max_histories` charged-off loans in the input order are
    used; the order is part of the reproducibility contract.
    """

    def __init__(self, config: GenerationConfig = None):
        self.config = config or DEFAULT_CONFIG

    def risk_multipliers(self, months_before: int) -> Tuple[float, float]:
        """(PD multiplier, LGD multiplier) for a month offset"""
        progress = 1 - months_before / self.config.history_months
        pd_multiplier = 1 + progress ** 2 * self.config.pd_ramp
        lgd_multiplier = 1 + progress * self.config.lgd_ramp
        return pd_multiplier, lgd_multiplier

    def payment_status(self, rng: SeededRandom, months_before: int) -> PaymentStatus:
        if months_before <= 3:
            return PaymentStatus.DELINQUENT_90
        if months_before <= 6:
            return PaymentStatus.DELINQUENT_60
        if months_before <= 12:
            if rng.next() < self.config.delinquent_30_probability:
                return PaymentStatus.DELINQUENT_30
            return PaymentStatus.CURRENT
        return PaymentStatus.CURRENT

    def build_history(self, rng: SeededRandom, loan: Loan) -> ChargeOffLoanHistory:
        config = self.config
        seg_config = SEGMENT_CONFIGS[loan.segment]
        snapshots = []

        for months_before in range(config.history_months, -1, -1):
            pd_multiplier, lgd_multiplier = self.risk_multipliers(months_before)

            pd = min(seg_config.pd.avg * pd_multiplier * rng.between(*config.history_pd_noise),
                     config.history_pd_cap)
            lgd = min(seg_config.lgd.avg * lgd_multiplier * rng.between(*config.history_lgd_noise),
                      config.history_lgd_cap)
            portfolio_value = loan.current_balance * rng.between(*config.history_value_range)
            status = self.payment_status(rng, months_before)

            snapshots.append(MonthlySnapshot(
                months_before_charge_off=-months_before,
                date=loan.charge_off_date - relativedelta(months=months_before),
                pd=pd,
                lgd=lgd,
                portfolio_value=portfolio_value,
                payment_status=status,
            ))

        return ChargeOffLoanHistory(
            loan_id=loan.loan_id,
            segment=loan.segment,
            charge_off_date=loan.charge_off_date,
            charge_off_amount=loan.charge_off_amount,
            monthly_snapshots=tuple(snapshots),
        )

    def generate(self, loans: List[Loan]) -> List[ChargeOffLoanHistory]:
        rng = SeededRandom(self.config.charge_off_seed)
        charged_off = [l for l in loans if l.is_charged_off and l.charge_off_date is not None]

        histories = [self.build_history(rng, loan)
                     for loan in charged_off[:self.config.max_histories]]

        logger.debug("Generated %d charge-off histories (%d charged-off loans)",
                     len(histories), len(charged_off))
        return histories


def generate_charge_off_histories(
    loans: List[Loan],
    config: GenerationConfig = None
) -> List[ChargeOffLoanHistory]:
    """Pre-charge-off histories from the fixed charge-off seed"""
    return ChargeOffHistoryGenerator(config).generate(loans)

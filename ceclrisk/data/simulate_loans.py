"""
Synthetic Loan Generator for CECL Portfolio Monitoring

Generates a reproducible loan population with:
- Segment mix drawn from fixed portfolio weights
- Exposure and term bounded by the segment configuration
- Population-weighted state placement
- Charge-offs realised only when the charge-off month is already in the past
"""

import logging
import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Optional

from dateutil.relativedelta import relativedelta

from ceclrisk.config import GenerationConfig, DEFAULT_CONFIG
from ceclrisk.data.prng import SeededRandom
from ceclrisk.data.segments import SEGMENT_CONFIGS, SEGMENT_IDS, SEGMENT_WEIGHTS
from ceclrisk.data.states import STATE_POPULATION_WEIGHTS

logger = logging.getLogger(__name__)

LOAN_ID_CHARS = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789'
LOAN_ID_PREFIX = 'LN-'
LOAN_ID_LENGTH = 8


# =============================================================================
# LOAN RECORD
# =============================================================================

@dataclass(frozen=True)
class Loan:
    """A synthetic credit exposure"""
    loan_id: str
    origination_date: date
    maturity_date: date
    original_balance: float
    current_balance: float
    segment: str
    state: str
    interest_rate: float
    term: int  # months
    borrower_credit_score: int
    is_charged_off: bool = False
    charge_off_date: Optional[date] = None
    charge_off_amount: Optional[float] = None

    def months_to_charge_off(self) -> Optional[int]:
        """Calendar months from origination to charge-off"""
        if self.charge_off_date is None:
            return None
        return ((self.charge_off_date.year - self.origination_date.year) * 12
                + self.charge_off_date.month - self.origination_date.month)


# =============================================================================
# LOAN GENERATOR
# =============================================================================

class LoanGenerator:
    """
    Generates the synthetic loan population.

    The PRNG is re-seeded on every call to generate(), so repeated calls with
    the same config and as-of date return identical loans.
    """

    def __init__(self, config: GenerationConfig = None):
        self.config = config or DEFAULT_CONFIG
        self.states = list(STATE_POPULATION_WEIGHTS.keys())
        self.state_weights = list(STATE_POPULATION_WEIGHTS.values())
        self.segment_weights = [SEGMENT_WEIGHTS[s] for s in SEGMENT_IDS]

    def _loan_id(self, rng: SeededRandom) -> str:
        return LOAN_ID_PREFIX + ''.join(rng.pick(LOAN_ID_CHARS) for _ in range(LOAN_ID_LENGTH))

    def _origination_date(self, rng: SeededRandom, as_of: date) -> date:
        days_back = math.floor(rng.next() * self.config.origination_years_back * 365)
        return as_of - timedelta(days=days_back)

    def generate(self, count: int = None, as_of: date = None) -> List[Loan]:
        """
        Generate `count` loans as seen on `as_of`.

        Draw order per loan is fixed: segment, balance, term, origination,
        charge-off candidacy (plus month and amount), id, current balance,
        state, rate, credit score.
        """
        config = self.config
        count = config.n_loans if count is None else count
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        as_of = config.resolve_as_of(as_of)

        rng = SeededRandom(config.loan_seed)
        loans = []

        for _ in range(count):
            segment = rng.weighted_pick(SEGMENT_IDS, self.segment_weights)
            seg_config = SEGMENT_CONFIGS[segment]

            original_balance = rng.between(*seg_config.ead_range)
            term = rng.integer(*seg_config.term_range)
            origination_date = self._origination_date(rng, as_of)
            maturity_date = origination_date + relativedelta(months=term)

            # Candidates whose charge-off month lands in the future stay performing
            charge_off_date = None
            charge_off_amount = None
            if rng.next() < config.charge_off_probability:
                first_month, last_month = config.charge_off_month_range
                months = rng.integer(first_month, min(term, last_month))
                candidate_date = origination_date + relativedelta(months=months)
                if candidate_date < as_of:
                    charge_off_date = candidate_date
                    charge_off_amount = original_balance * rng.between(*config.charge_off_amount_range)

            loan_id = self._loan_id(rng)
            current_balance = original_balance * rng.between(*config.current_balance_range)
            state = rng.weighted_pick(self.states, self.state_weights)
            interest_rate = rng.between(*config.interest_rate_range)
            credit_score = rng.integer(*config.credit_score_range)

            loans.append(Loan(
                loan_id=loan_id,
                origination_date=origination_date,
                maturity_date=maturity_date,
                original_balance=original_balance,
                current_balance=current_balance,
                segment=segment,
                state=state,
                interest_rate=interest_rate,
                term=term,
                borrower_credit_score=credit_score,
                is_charged_off=charge_off_date is not None,
                charge_off_date=charge_off_date,
                charge_off_amount=charge_off_amount,
            ))

        logger.debug("Generated %d loans as of %s", len(loans), as_of.isoformat())
        return loans


def generate_loans(
    count: int = 5000,
    as_of: date = None,
    config: GenerationConfig = None
) -> List[Loan]:
    """Generate `count` synthetic loans from the fixed loan seed"""
    return LoanGenerator(config).generate(count, as_of)

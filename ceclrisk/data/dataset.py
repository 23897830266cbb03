"""
Portfolio Dataset - one stable synthetic portfolio per session

Owns the generated loans, quarterly snapshots and charge-off histories.
Each set is generated on first access and memoised, so every reader in the
session sees the same population until reset() is called.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from ceclrisk.config import GenerationConfig
from ceclrisk.data.simulate_loans import Loan, LoanGenerator
from ceclrisk.data.simulate_snapshots import LoanMetricsSnapshot, SnapshotGenerator
from ceclrisk.data.simulate_chargeoffs import ChargeOffLoanHistory, ChargeOffHistoryGenerator

logger = logging.getLogger(__name__)

LOAN_COLUMNS = [
    'loan_id', 'origination_date', 'maturity_date', 'original_balance', 'current_balance',
    'segment', 'state', 'interest_rate', 'term', 'borrower_credit_score',
    'is_charged_off', 'charge_off_date', 'charge_off_amount',
]


class PortfolioDataset:
    """
    Composition root for the generated base data.

    The as-of date is fixed at construction so that loans, snapshots and
    histories are all generated against the same "now".
    """

    def __init__(self, config: GenerationConfig = None, as_of: date = None):
        self.config = config or GenerationConfig()
        self.as_of = self.config.resolve_as_of(as_of)

        self._loans: Optional[List[Loan]] = None
        self._snapshots: Optional[List[LoanMetricsSnapshot]] = None
        self._histories: Optional[List[ChargeOffLoanHistory]] = None

    @property
    def loans(self) -> List[Loan]:
        if self._loans is None:
            self._loans = LoanGenerator(self.config).generate(self.config.n_loans, self.as_of)
            logger.info("Generated %d loans (%d charged off)",
                        len(self._loans), sum(l.is_charged_off for l in self._loans))
        return self._loans

    @property
    def snapshots(self) -> List[LoanMetricsSnapshot]:
        if self._snapshots is None:
            self._snapshots = SnapshotGenerator(self.config).generate(self.loans, self.as_of)
            logger.info("Generated %d quarterly snapshots", len(self._snapshots))
        return self._snapshots

    @property
    def charge_off_histories(self) -> List[ChargeOffLoanHistory]:
        if self._histories is None:
            self._histories = ChargeOffHistoryGenerator(self.config).generate(self.loans)
            logger.info("Generated %d charge-off histories", len(self._histories))
        return self._histories

    def reset(self) -> None:
        """Drop the memoised sets; the next access regenerates them"""
        self._loans = None
        self._snapshots = None
        self._histories = None

    # -------------------------------------------------------------------------
    # Tabular views
    # -------------------------------------------------------------------------

    def to_frames(self) -> Dict[str, pd.DataFrame]:
        """
        Loans, snapshots and charge-off snapshots as DataFrames.

        Returns:
            Dict with 'loans', 'snapshots' and 'charge_off_snapshots'
        """
        loans_df = pd.DataFrame([
            {
                'loan_id': l.loan_id,
                'origination_date': pd.Timestamp(l.origination_date),
                'maturity_date': pd.Timestamp(l.maturity_date),
                'original_balance': l.original_balance,
                'current_balance': l.current_balance,
                'segment': l.segment,
                'state': l.state,
                'interest_rate': l.interest_rate,
                'term': l.term,
                'borrower_credit_score': l.borrower_credit_score,
                'is_charged_off': l.is_charged_off,
                'charge_off_date': pd.Timestamp(l.charge_off_date) if l.charge_off_date else pd.NaT,
                'charge_off_amount': l.charge_off_amount,
            }
            for l in self.loans
        ], columns=LOAN_COLUMNS)

        snapshots_df = pd.DataFrame(
            [
                {
                    'loan_id': s.loan_id,
                    'snapshot_date': pd.Timestamp(s.snapshot_date),
                    'pd': s.pd,
                    'lgd': s.lgd,
                    'portfolio_value': s.portfolio_value,
                    'expected_loss': s.expected_loss,
                }
                for s in self.snapshots
            ],
            columns=['loan_id', 'snapshot_date', 'pd', 'lgd', 'portfolio_value', 'expected_loss'],
        )

        history_df = pd.DataFrame(
            [
                {
                    'loan_id': h.loan_id,
                    'segment': h.segment,
                    'charge_off_date': pd.Timestamp(h.charge_off_date),
                    'months_before_charge_off': m.months_before_charge_off,
                    'date': pd.Timestamp(m.date),
                    'pd': m.pd,
                    'lgd': m.lgd,
                    'portfolio_value': m.portfolio_value,
                    'payment_status': m.payment_status.value,
                }
                for h in self.charge_off_histories
                for m in h.monthly_snapshots
            ],
            columns=['loan_id', 'segment', 'charge_off_date', 'months_before_charge_off',
                     'date', 'pd', 'lgd', 'portfolio_value', 'payment_status'],
        )

        return {
            'loans': loans_df,
            'snapshots': snapshots_df,
            'charge_off_snapshots': history_df,
        }

    def export_csv(self, output_dir) -> Dict[str, Path]:
        """Write each frame to `<output_dir>/<name>.csv`"""
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        paths = {}
        for name, frame in self.to_frames().items():
            path = output_dir / f'{name}.csv'
            frame.to_csv(path, index=False)
            paths[name] = path
            logger.info("Saved %d rows to %s", len(frame), path)
        return paths


# =============================================================================
# MAIN
# =============================================================================

def main():
    """Generate the default portfolio and print a summary"""
    logging.basicConfig(level=logging.INFO, format='%(levelname)s %(name)s: %(message)s')

    dataset = PortfolioDataset()
    frames = dataset.to_frames()
    loans_df = frames['loans']

    print("=" * 60)
    print(f"SYNTHETIC CECL PORTFOLIO (as of {dataset.as_of.isoformat()})")
    print("=" * 60)
    print(f"Loans generated: {len(loans_df)}")
    print(f"Quarterly snapshots: {len(frames['snapshots'])}")
    print(f"Charge-off histories: {len(dataset.charge_off_histories)}")
    print(f"\nSegment distribution:")
    print(loans_df['segment'].value_counts())
    print(f"\nCharge-off rate: {loans_df['is_charged_off'].mean():.2%}")
    print(f"Total exposure: ${loans_df['current_balance'].sum():,.0f}")


if __name__ == '__main__':
    main()

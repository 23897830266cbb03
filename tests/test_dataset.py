"""Tests for the memoised portfolio dataset and its tabular views."""

import pandas as pd

from ceclrisk.config import GenerationConfig
from ceclrisk.data.dataset import LOAN_COLUMNS, PortfolioDataset


def test_memoised(dataset):
    assert dataset.loans is dataset.loans
    assert dataset.snapshots is dataset.snapshots
    assert dataset.charge_off_histories is dataset.charge_off_histories


def test_reset_regenerates_equal_data(as_of):
    dataset = PortfolioDataset(GenerationConfig(n_loans=50, as_of=as_of))
    first = dataset.loans
    dataset.reset()
    second = dataset.loans
    assert first is not second
    assert first == second


def test_as_of_argument_overrides_config(as_of):
    dataset = PortfolioDataset(GenerationConfig(n_loans=10), as_of=as_of)
    assert dataset.as_of == as_of


def test_to_frames(as_of):
    dataset = PortfolioDataset(GenerationConfig(n_loans=300, as_of=as_of))
    frames = dataset.to_frames()

    assert list(frames) == ['loans', 'snapshots', 'charge_off_snapshots']
    assert list(frames['loans'].columns) == LOAN_COLUMNS
    assert len(frames['loans']) == 300
    assert len(frames['snapshots']) == len(dataset.snapshots)
    assert len(frames['charge_off_snapshots']) == 37 * len(dataset.charge_off_histories)

    snaps = frames['snapshots']
    assert (snaps['expected_loss'] - snaps['pd'] * snaps['lgd'] * snaps['portfolio_value']).abs().max() < 1e-6


def test_empty_portfolio_frames(as_of):
    frames = PortfolioDataset(GenerationConfig(n_loans=0, as_of=as_of)).to_frames()
    assert all(frame.empty for frame in frames.values())
    assert list(frames['loans'].columns) == LOAN_COLUMNS


def test_export_csv(tmp_path, as_of):
    dataset = PortfolioDataset(GenerationConfig(n_loans=100, as_of=as_of))
    paths = dataset.export_csv(tmp_path / 'out')

    assert set(paths) == {'loans', 'snapshots', 'charge_off_snapshots'}
    loans = pd.read_csv(paths['loans'])
    assert len(loans) == 100
    assert loans['loan_id'].iloc[0] == dataset.loans[0].loan_id

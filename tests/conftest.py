"""Shared fixtures: one fixed-date portfolio per test session."""

from datetime import date

import pytest

from ceclrisk.config import GenerationConfig
from ceclrisk.data.dataset import PortfolioDataset
from ceclrisk.models.portfolio_aggregator import PortfolioAggregator

AS_OF = date(2025, 6, 30)


@pytest.fixture(scope="session")
def as_of():
    return AS_OF


@pytest.fixture(scope="session")
def dataset():
    return PortfolioDataset(GenerationConfig(as_of=AS_OF))


@pytest.fixture(scope="session")
def aggregator(dataset):
    return PortfolioAggregator(dataset)


@pytest.fixture(scope="session")
def loans(dataset):
    return dataset.loans


@pytest.fixture(scope="session")
def snapshots(dataset):
    return dataset.snapshots


@pytest.fixture(scope="session")
def histories(dataset):
    return dataset.charge_off_histories

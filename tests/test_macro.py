"""Tests for mock macroeconomic series."""

from datetime import date

import pytest

from ceclrisk.data.simulate_macro import (
    MACRO_INDICATORS,
    generate_all_macro_data,
    generate_mock_macro_series,
)


def test_quarterly_points_inclusive():
    series = generate_mock_macro_series('UNRATE', '2019-01-01', '2024-10-01')
    assert len(series.data) == 24
    assert series.data.index[0].date() == date(2019, 1, 1)
    assert series.data.index[-1].date() == date(2024, 10, 1)
    assert series.is_mock
    assert series.source == 'mock'


def test_deterministic_for_seed():
    a = generate_mock_macro_series('GDPC1', '2019-01-01', '2024-12-31', seed=1)
    b = generate_mock_macro_series('GDPC1', '2019-01-01', '2024-12-31', seed=1)
    assert a.data.equals(b.data)


def test_values_non_negative():
    for series in generate_all_macro_data().values():
        assert (series.data >= 0).all()


def test_recession_window_raises_unemployment():
    data = generate_mock_macro_series('UNRATE', '2019-01-01', '2024-12-31').data
    recession = data.iloc[8:13].mean()
    other = data.iloc[13:].mean()
    assert recession > other + 1


def test_all_indicators():
    data = generate_all_macro_data(date(2020, 1, 1), date(2021, 12, 31))
    assert set(data) == set(MACRO_INDICATORS)
    assert all(len(s.data) == 8 for s in data.values())


def test_unknown_indicator():
    with pytest.raises(ValueError):
        generate_mock_macro_series('GOLD', '2020-01-01', '2021-01-01')


def test_to_records():
    series = generate_mock_macro_series('GS10', '2020-01-01', '2020-07-01')
    records = series.to_records()
    assert [r['date'] for r in records] == ['2020-01-01', '2020-04-01', '2020-07-01']
    assert all(r['indicator'] == 'GS10' for r in records)

"""
FRED macro-data client with a local mock fallback.

Series are fetched with fredapi when a FRED API key is configured. A missing
key or any error while fetching or parsing the response falls back to the
locally generated mock series; nothing is retried.
"""

import logging
from datetime import date
from typing import Dict, Optional

from fredapi import Fred

from ceclrisk.config import ServiceSettings
from ceclrisk.data.simulate_macro import (
    MACRO_INDICATORS,
    DateLike,
    MacroTimeSeries,
    generate_mock_macro_series,
    get_indicator,
)

logger = logging.getLogger(__name__)


class MacroDataClient:
    """
    Fetches quarterly macro indicators from FRED.

    Args:
        settings: Service settings; FRED is used only when fred_api_key is set
        fred: Pre-built fredapi client (mainly for tests)
    """

    def __init__(self, settings: ServiceSettings = None, fred: Optional[Fred] = None):
        self.settings = settings or ServiceSettings.from_env()
        self._fred = fred

    @property
    def fred(self) -> Optional[Fred]:
        if self._fred is None and self.settings.fred_api_key:
            self._fred = Fred(api_key=self.settings.fred_api_key)
        return self._fred

    def fetch_series(
        self,
        indicator: str,
        start_date: DateLike,
        end_date: DateLike
    ) -> MacroTimeSeries:
        config = get_indicator(indicator)

        if self.fred is None:
            logger.info("FRED_API_KEY not configured; using mock data for %s", indicator)
            return generate_mock_macro_series(indicator, start_date, end_date)

        try:
            series = self.fred.get_series(
                indicator,
                observation_start=str(start_date),
                observation_end=str(end_date),
            )
        except Exception as exc:
            logger.warning("Error fetching FRED series %s: %s; using mock data", indicator, exc)
            return generate_mock_macro_series(indicator, start_date, end_date)

        # FRED marks missing observations with '.', which fredapi turns into NaN
        series = series.dropna().astype(float)
        series.name = indicator

        return MacroTimeSeries(
            indicator=indicator,
            data=series,
            title=config.title,
            units=config.units,
            source='fred',
        )

    def fetch_all(
        self,
        start_date: DateLike = '2019-01-01',
        end_date: DateLike = None
    ) -> Dict[str, MacroTimeSeries]:
        """Every dashboard indicator between the two dates"""
        end_date = end_date or date.today()
        return {
            indicator: self.fetch_series(indicator, start_date, end_date)
            for indicator in MACRO_INDICATORS
        }

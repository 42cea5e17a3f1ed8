"""Country and state coefficient lookup.

Per-country coefficients (per-inhabitant load, detergent shares, P
accumulation) are keyed by country ID and year. Long-term and
hydrological-condition runs use pseudo-years that have no country data; those
are redirected to a single calculation year before the lookup.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

import pandas as pd

from p_emissions.errors import CountryDataNotAvailableError
from p_emissions.models.domain import CountryCoefficients

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CountryLookup:
    """Outcome of a country lookup: either found coefficients or not found.

    Attributes:
        country_id: Requested country or state
        year: Year the lookup was made for (after any long-term redirect)
        coefficients: Country coefficients, None when not found
    """

    country_id: int
    year: int
    coefficients: CountryCoefficients | None = None

    @classmethod
    def found(cls, coefficients: CountryCoefficients) -> "CountryLookup":
        return cls(coefficients.country_id, coefficients.year, coefficients)

    @classmethod
    def not_found(cls, country_id: int, year: int) -> "CountryLookup":
        return cls(country_id, year)

    @property
    def is_found(self) -> bool:
        return self.coefficients is not None

    def unwrap(self, unit_id: int | None = None) -> CountryCoefficients:
        """Return the coefficients or raise if the lookup failed.

        Raises:
            CountryDataNotAvailableError: If no coefficients were found
        """
        if self.coefficients is None:
            raise CountryDataNotAvailableError(self.country_id, self.year, unit_id)
        return self.coefficients


class CountryOrStates:
    """Read-only lookup of country coefficients by country ID and year.

    Attributes:
        calculation_year_for_hydrological_conditions: Year whose country data
            is used for long-term and hydrological-condition pseudo-years
    """

    def __init__(
        self,
        records: Iterable[CountryCoefficients],
        calculation_year_for_hydrological_conditions: int,
    ):
        self.calculation_year_for_hydrological_conditions = (
            calculation_year_for_hydrological_conditions
        )
        self._records: dict[tuple[int, int], CountryCoefficients] = {}
        for record in records:
            key = (record.country_id, record.year)
            if key in self._records:
                msg = f"Duplicate country coefficients for country {key[0]} in year {key[1]}"
                raise ValueError(msg)
            self._records[key] = record

    def __len__(self) -> int:
        return len(self._records)

    @classmethod
    def from_dataframe(
        cls, df: pd.DataFrame, calculation_year_for_hydrological_conditions: int
    ) -> "CountryOrStates":
        """Build the lookup from a table with one row per country and year.

        Columns must match the ``CountryCoefficients`` field names; extra
        columns are ignored.

        Raises:
            ValueError: If required columns are missing
        """
        required = {"country_id", "year", "phosphorus_per_inhabitant"}
        missing = sorted(required - set(df.columns))
        if missing:
            msg = f"Missing required country columns: {', '.join(missing)}"
            raise ValueError(msg)

        fields = [c for c in CountryCoefficients.model_fields if c in df.columns]
        records = [
            CountryCoefficients.model_validate(row)
            for row in df[fields].to_dict(orient="records")
        ]
        logger.info(f"Loaded {len(records)} country coefficient records")
        return cls(records, calculation_year_for_hydrological_conditions)

    def lookup_year(self, year: int, long_term_year_threshold: int) -> int:
        """Year to look up country data for, redirecting long-term pseudo-years."""
        if year >= long_term_year_threshold:
            return self.calculation_year_for_hydrological_conditions
        return year

    def find(self, country_id: int, year: int) -> CountryLookup:
        """Look up the coefficients of a country in a year.

        Args:
            country_id: Country or state ID of the analytical unit
            year: Lookup year (already redirected for long-term runs)

        Returns:
            CountryLookup, found or not found
        """
        record = self._records.get((country_id, year))
        if record is None:
            return CountryLookup.not_found(country_id, year)
        return CountryLookup.found(record)

    def require(
        self, country_id: int, year: int, unit_id: int | None = None
    ) -> CountryCoefficients:
        """Look up the coefficients of a country in a year or fail.

        Raises:
            CountryDataNotAvailableError: If no record exists for the pair
        """
        return self.find(country_id, year).unwrap(unit_id)

"""Unit tests for the country coefficient lookup."""

import pickle

import pandas as pd
import pytest

from p_emissions.errors import CountryDataNotAvailableError
from p_emissions.repositories import CountryLookup, CountryOrStates


class TestCountryOrStates:
    def test_find(self, countries, country):
        lookup = countries.find(1, 2015)

        assert lookup.is_found
        assert lookup.coefficients == country
        assert len(countries) == 2

    def test_not_found(self, countries):
        lookup = countries.find(2, 2015)

        assert not lookup.is_found
        assert lookup.country_id == 2
        assert lookup.year == 2015

    def test_require_raises(self, countries):
        with pytest.raises(CountryDataNotAvailableError, match="country 1 in year 1990"):
            countries.require(1, 1990, unit_id=5)

    def test_lookup_year_redirects_long_term(self, countries):
        """Test pseudo-years at or above the threshold use the calculation year."""
        assert countries.lookup_year(2015, 9000) == 2015
        assert countries.lookup_year(9000, 9000) == 2010
        assert countries.lookup_year(9002, 9000) == 2010

    def test_duplicate_rejected(self, country):
        with pytest.raises(ValueError, match="Duplicate country coefficients"):
            CountryOrStates([country, country], calculation_year_for_hydrological_conditions=2010)

    def test_from_dataframe(self):
        df = pd.DataFrame(
            {
                "country_id": [1, 1, 2],
                "year": [2010, 2015, 2015],
                "phosphorus_per_inhabitant": [2.0, 1.8, 1.6],
                "phosphorus_accumulation": [700.0, 900.0, 400.0],
                "comment": ["", "", "ignored"],
            }
        )

        countries = CountryOrStates.from_dataframe(df, 2010)

        assert len(countries) == 3
        assert countries.require(2, 2015).phosphorus_accumulation == 400.0
        assert countries.require(1, 2010).phosphorus_laundry_detergent == 0.0

    def test_from_dataframe_missing_columns(self):
        df = pd.DataFrame({"country_id": [1], "year": [2015]})

        with pytest.raises(ValueError, match="phosphorus_per_inhabitant"):
            CountryOrStates.from_dataframe(df, 2010)


class TestCountryLookup:
    def test_unwrap_found(self, country):
        assert CountryLookup.found(country).unwrap() is country

    def test_unwrap_not_found(self):
        with pytest.raises(CountryDataNotAvailableError) as exc_info:
            CountryLookup.not_found(3, 2020).unwrap(unit_id=42)

        assert exc_info.value.unit_id == 42
        assert "(analytical unit 42)" in str(exc_info.value)


def test_country_error_message():
    """Test the error message ends with the model stop notice."""
    error = CountryDataNotAvailableError(1, 2015)

    assert str(error) == (
        "Country data not available for country 1 in year 2015.\n\nUnable to run model."
    )


def test_country_error_survives_pickling():
    """Test the error can cross process boundaries."""
    error = pickle.loads(pickle.dumps(CountryDataNotAvailableError(1, 2015, 7)))

    assert error.country_id == 1
    assert error.year == 2015
    assert error.unit_id == 7
    assert str(error).endswith("Unable to run model.")

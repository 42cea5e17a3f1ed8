"""Reference data lookups for the phosphorus emission calculation."""

from p_emissions.repositories.countries import CountryLookup, CountryOrStates

__all__ = ["CountryOrStates", "CountryLookup"]

"""Exceptions raised by the phosphorus emission calculation."""

UNABLE_TO_RUN_MODEL = "Unable to run model."


class EmissionCalculationError(Exception):
    """Base class for unrecoverable calculation failures of an analytical unit."""


class CountryDataNotAvailableError(EmissionCalculationError):
    """No country or state coefficients exist for an analytical unit and year."""

    def __init__(self, country_id: int, year: int, unit_id: int | None = None):
        self.country_id = country_id
        self.year = year
        self.unit_id = unit_id
        unit = f" (analytical unit {unit_id})" if unit_id is not None else ""
        detail = f"Country data not available for country {country_id} in year {year}{unit}."
        super().__init__(f"{detail}\n\n{UNABLE_TO_RUN_MODEL}")

    def __reduce__(self):
        return (self.__class__, (self.country_id, self.year, self.unit_id))

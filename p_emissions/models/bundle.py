"""Input bundle for running calculations from a single JSON document."""

from pydantic import BaseModel, Field

from p_emissions.config import PhosphorusCoefficients
from p_emissions.models.domain import (
    AnalyticalUnit,
    Basics,
    CountryCoefficients,
    HydrologyState,
    PeriodicalData,
)


class UnitInput(BaseModel):
    """Inputs of one analytical unit and period."""

    unit: AnalyticalUnit
    period: PeriodicalData
    hydrology: HydrologyState = Field(default_factory=HydrologyState)
    basics: Basics = Field(default_factory=Basics)
    background_retention_factor: float = 1.0
    gw_retention_factor: float = 1.0


class CalculationBundle(BaseModel):
    """Everything needed to calculate a set of analytical units.

    Attributes:
        coefficients: Coefficient overrides keyed by mnemonic code (e.g. "CUS10")
        coefficients_version: Version label of the coefficient table
        calculation_year_for_hydrological_conditions: Year whose country data
            is used for long-term pseudo-years
        countries: Country coefficients per country and year
        units: Units and periods to calculate
    """

    coefficients: dict[str, float] = Field(default_factory=dict)
    coefficients_version: str = "default"
    calculation_year_for_hydrological_conditions: int
    countries: list[CountryCoefficients]
    units: list[UnitInput] = Field(min_length=1)

    def build_coefficients(self) -> PhosphorusCoefficients:
        """Coefficient catalogue with the bundle's overrides applied."""
        return PhosphorusCoefficients.from_mnemonics(self.coefficients, self.coefficients_version)

"""Phosphorus emission budgets of river basin analytical units.

Calculates total phosphorus emissions into surface waters via urban systems,
atmospheric deposition, surface runoff, tile drainage, groundwater, erosion
and point sources, and apportions the total to source categories.
"""

from p_emissions.engine import CalculationContext, PhosphorusEmissionCalculator
from p_emissions.errors import CountryDataNotAvailableError, EmissionCalculationError

__all__ = [
    "CalculationContext",
    "PhosphorusEmissionCalculator",
    "EmissionCalculationError",
    "CountryDataNotAvailableError",
]

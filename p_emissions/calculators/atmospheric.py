"""Atmospheric deposition onto water surfaces."""

from p_emissions.config import CONSTANTS
from p_emissions.models.domain import HydrologyState, PeriodicalData
from p_emissions.models.results import AtmosphericDepositionResult


def calculate_atmospheric_deposition(
    period: PeriodicalData, hydrology: HydrologyState
) -> AtmosphericDepositionResult:
    """Calculate direct TP deposition on water surfaces.

    Formula:
        AD_TP_t_a = water_surface_km2 * deposition_kg_per_km2_a / 1000

    Args:
        period: Periodical data carrying the annual deposition rate
        hydrology: Upstream state carrying the total water surface area

    Returns:
        AtmosphericDepositionResult with the annual load (t/a).
    """
    total = (
        hydrology.water_surface_area_total
        * period.atmospheric_deposition_tp
        / CONSTANTS.KILOGRAMS_PER_TONNE
    )
    return AtmosphericDepositionResult(total=total)

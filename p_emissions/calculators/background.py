"""Natural background phosphorus emission calculations.

Background loads describe reference conditions without anthropogenic
influence. Each pathway is a fixed-coefficient function of its physical
driver, without land-use weighting.
"""

import logging

from p_emissions.config import CONSTANTS, CalculationConfig, PhosphorusCoefficients
from p_emissions.models.domain import Basics, HydrologyState, Landuse, PeriodicalData
from p_emissions.models.results import BackgroundResult

logger = logging.getLogger(__name__)


def calculate_background_groundwater(
    basics: Basics,
    groundwater_total: float,
    background_retention_factor: float,
    coefficients: PhosphorusCoefficients,
    config: CalculationConfig,
) -> float:
    """Background TP load via groundwater (t/a).

    Formula:
        load = leakage_rate * c_bg * recharge_area / 1000
        load *= 1.5            if background retention factor <= 0.05
        load = min(load, GW_total)

    The background load never exceeds the actual groundwater emission.
    """
    load = (
        basics.leakage_water_rate
        * coefficients.background_groundwater_concentration
        * basics.gw_recharge_area
        / CONSTANTS.KILOGRAMS_PER_TONNE
    )
    if background_retention_factor <= config.low_background_retention_threshold:
        load *= config.low_background_retention_multiplier
    if load > groundwater_total:
        logger.debug(
            f"Background groundwater load {load:.6f} t/a capped at groundwater emission "
            f"{groundwater_total:.6f} t/a"
        )
        load = groundwater_total
    return load


def calculate_background_erosion(
    basics: Basics, landuse: Landuse, coefficients: PhosphorusCoefficients
) -> float:
    """Background TP load via erosion (t/a).

    Formula:
        load = CE13 / 1e6 * ER * (SL_bg * A_erosion * 100 * P_corr * C_nat * SDR_bg / 100
                                  + SL_snow_bg * A_snow * 100)

    Units: mg/kg / (mg/kg) * [-] * (t/(ha*a) * km² * ha/km² * [-] * [-] * % / %) -> t/a
    """
    hectares = CONSTANTS.HECTARES_PER_SQUARE_KILOMETRE
    return (
        coefficients.natural_soil_phosphorus_content
        / CONSTANTS.MILLIGRAMS_PER_KILOGRAM
        * basics.enrichment_ratio
        * (
            basics.soil_loss_background
            * landuse.erosion_potential_area
            * hectares
            * basics.precipitation_correction
            * coefficients.background_cover_factor
            * basics.background_sediment_delivery_ratio
            / 100.0
            + coefficients.background_snow_soil_loss * landuse.snow * hectares
        )
    )


def calculate_background(
    period: PeriodicalData,
    hydrology: HydrologyState,
    basics: Basics,
    landuse: Landuse,
    groundwater_total: float,
    snow_surface_runoff: float,
    background_retention_factor: float,
    coefficients: PhosphorusCoefficients,
    config: CalculationConfig,
) -> BackgroundResult:
    """Calculate natural background TP loads per pathway.

    Args:
        period: Periodical data (precipitation)
        hydrology: Upstream state (water surface, runoff of vegetated areas)
        basics: Leakage water, recharge area and erosion factors
        landuse: Land cover composition (erosion potential and snow areas)
        groundwater_total: Actual groundwater emission, upper bound of the
            background groundwater load
        snow_surface_runoff: Surface runoff load of snow covered areas
        background_retention_factor: Precomputed background retention factor
        coefficients: Empirical coefficient catalogue
        config: Calculation rules (low retention scaling)

    Returns:
        BackgroundResult with per-pathway loads and their total.
    """
    atmospheric_deposition = (
        hydrology.water_surface_area_total
        * period.precipitation_annual
        / 1000.0
        / 86.4
        / 0.365
        * coefficients.background_precipitation_concentration
    )
    groundwater = calculate_background_groundwater(
        basics, groundwater_total, background_retention_factor, coefficients, config
    )
    surface_runoff = (
        coefficients.background_runoff_concentration
        * CONSTANTS.DISCHARGE_TO_ANNUAL_LOAD
        * hydrology.q_natural_areas_with_vegetation
    )
    erosion = calculate_background_erosion(basics, landuse, coefficients)

    total = snow_surface_runoff + groundwater + surface_runoff + atmospheric_deposition + erosion

    return BackgroundResult(
        atmospheric_deposition=atmospheric_deposition,
        groundwater=groundwater,
        surface_runoff=surface_runoff,
        erosion=erosion,
        snow_surface_runoff=snow_surface_runoff,
        total=total,
    )

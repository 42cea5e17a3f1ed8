"""Surface runoff phosphorus emission calculations.

Runoff concentrations from agricultural land follow an exponential response
to the phosphorus saturation of the soil. The saturation is derived from the
spatial P accumulation, corrected to the calculation year with the country's
P accumulation, and capped at the maximum saturation before the exponential
is evaluated.
"""

import numpy as np

from p_emissions.config import CONSTANTS, CalculationConfig, PhosphorusCoefficients
from p_emissions.models.domain import Basics, CountryCoefficients, HydrologyState, Landuse, Soil
from p_emissions.models.results import SurfaceRunoffResult


def calculate_saturation_factors(
    soil: Soil,
    country: CountryCoefficients,
    coefficients: PhosphorusCoefficients,
    max_saturation_percent: float,
) -> tuple[float, float]:
    """Correction factors of the reference P saturation for arable land and grassland.

    Formula:
        P_acc_corr = P_acc_country / P_acc_ref * P_acc_soil
        factor     = P_acc_corr / P_acc_ref
        factor_AL  = min(factor, max_sat / sat_ref_AL)
        factor_GL  = min(factor, max_sat / sat_ref_GL)

    Returns:
        Tuple of (arable_factor, grassland_factor).
    """
    reference = coefficients.reference_phosphorus_accumulation
    corrected_accumulation = (
        country.phosphorus_accumulation / reference * soil.phosphorus_accumulation
    )
    factor = corrected_accumulation / reference

    arable_factor = factor
    if factor * coefficients.arable_reference_saturation > max_saturation_percent:
        arable_factor = max_saturation_percent / coefficients.arable_reference_saturation

    grassland_factor = factor
    if factor * coefficients.grassland_reference_saturation > max_saturation_percent:
        grassland_factor = max_saturation_percent / coefficients.grassland_reference_saturation

    return arable_factor, grassland_factor


def runoff_concentration(saturation_percent: float, coefficients: PhosphorusCoefficients) -> float:
    """TP concentration of runoff at a given soil P saturation (mg/l).

    Formula:
        c = base + scale * exp(saturation / divisor)
    """
    return float(
        coefficients.runoff_concentration_base
        + coefficients.runoff_concentration_scale
        * np.exp(saturation_percent / coefficients.runoff_saturation_divisor)
    )


def _class_concentration(area: float, concentration: float) -> float | None:
    """Concentration of a land class, not applicable without area."""
    return concentration if area != 0 else None


def _load(discharge: float, concentration: float | None) -> float:
    if concentration is None:
        return 0.0
    return discharge * concentration * CONSTANTS.DISCHARGE_TO_ANNUAL_LOAD


def calculate_surface_runoff(
    soil: Soil,
    landuse: Landuse,
    hydrology: HydrologyState,
    basics: Basics,
    country: CountryCoefficients,
    coefficients: PhosphorusCoefficients,
    config: CalculationConfig,
) -> SurfaceRunoffResult:
    """Calculate TP emissions via surface runoff per land class.

    Natural covered, open, open-pit-mine and wetland classes use fixed
    concentrations and are not applicable (``None``, zero load) without area.
    Snow covered areas always use the snow runoff concentration.

    Args:
        soil: Soil composition (spatial P accumulation)
        landuse: Land cover composition
        hydrology: Upstream state carrying the snow runoff
        basics: Per-class surface runoff (m³/s)
        country: Country coefficients of the calculation year (P accumulation)
        coefficients: Empirical coefficient catalogue
        config: Calculation rules (maximum saturation)

    Returns:
        SurfaceRunoffResult with per-class loads, the total and the subtotal
        of natural areas with vegetation.
    """
    arable_factor, grassland_factor = calculate_saturation_factors(
        soil, country, coefficients, config.max_phosphorus_saturation_percent
    )
    concentration_arable = runoff_concentration(
        arable_factor * coefficients.arable_reference_saturation, coefficients
    )
    concentration_grassland = runoff_concentration(
        grassland_factor * coefficients.grassland_reference_saturation, coefficients
    )

    concentration_natural_covered = _class_concentration(
        landuse.natural_covered, coefficients.natural_covered_runoff_concentration
    )
    concentration_open_area = _class_concentration(
        landuse.open_area, coefficients.open_area_runoff_concentration
    )
    concentration_open_pit_mine = _class_concentration(
        landuse.open_pit_mine, coefficients.open_area_runoff_concentration
    )
    concentration_wetland = _class_concentration(
        landuse.wetland, coefficients.open_area_runoff_concentration
    )

    arable_land = _load(basics.q_arable_land, concentration_arable)
    grassland = _load(basics.q_grassland, concentration_grassland)
    natural_covered = _load(basics.q_natural_covered, concentration_natural_covered)
    snow = _load(hydrology.q_snow, coefficients.snow_runoff_concentration)
    open_area = _load(basics.q_open_area, concentration_open_area)
    open_pit_mine = _load(basics.q_open_pit_mine, concentration_open_pit_mine)
    wetland = _load(basics.q_wetland, concentration_wetland)

    total = arable_land + grassland + natural_covered + snow + open_area + open_pit_mine + wetland

    return SurfaceRunoffResult(
        saturation_factor_arable=arable_factor,
        saturation_factor_grassland=grassland_factor,
        concentration_arable=concentration_arable,
        concentration_grassland=concentration_grassland,
        concentration_natural_covered=concentration_natural_covered,
        concentration_open_area=concentration_open_area,
        concentration_open_pit_mine=concentration_open_pit_mine,
        concentration_wetland=concentration_wetland,
        arable_land=arable_land,
        grassland=grassland,
        natural_covered=natural_covered,
        snow=snow,
        open_area=open_area,
        open_pit_mine=open_pit_mine,
        wetland=wetland,
        total=total,
        natural_areas_with_vegetation=arable_land + grassland + natural_covered,
    )

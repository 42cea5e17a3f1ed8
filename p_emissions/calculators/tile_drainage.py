"""Tile drainage phosphorus emission calculations."""

import numpy as np

from p_emissions.config import CONSTANTS, PhosphorusCoefficients
from p_emissions.models.domain import Basics, HydrologyState, Landuse, Soil
from p_emissions.models.results import TileDrainageResult


def calculate_drainage_concentration(
    soil: Soil, landuse: Landuse, coefficients: PhosphorusCoefficients
) -> float | None:
    """Soil-weighted TP concentration of drainage water (mg/l).

    Formula:
        c = (c_sandy * sandy + c_loamy * (clayey + loamy + silty)
             + c_fen * fen_degraded + c_bog * bog_degraded) / soil_area

    Returns:
        Concentration, or None when the unit has no drained soil classes.
    """
    soil_area = soil.mineral_area + landuse.fen_degraded + landuse.bog_degraded
    if soil_area == 0:
        return None
    return (
        coefficients.drainage_concentration_sandy * soil.sandy
        + coefficients.drainage_concentration_loamy * (soil.clayey + soil.loamy + soil.silty)
        + coefficients.drainage_concentration_fen * landuse.fen_degraded
        + coefficients.drainage_concentration_bog * landuse.bog_degraded
    ) / soil_area


def calculate_pond_transmission(
    hydraulic_load: float, coefficients: PhosphorusCoefficients
) -> float:
    """Share of TP passing a retention pond at the given hydraulic load.

    Formula:
        T = 1 / (1 + k * HL^p)

    A hydraulic load of zero means no pond, so everything passes.
    """
    if hydraulic_load == 0:
        return 1.0
    return float(
        1.0
        / (
            1.0
            + coefficients.pond_retention_scale
            * np.power(hydraulic_load, coefficients.pond_retention_exponent)
        )
    )


def calculate_tile_drainage(
    soil: Soil,
    landuse: Landuse,
    hydrology: HydrologyState,
    basics: Basics,
    coefficients: PhosphorusCoefficients,
) -> TileDrainageResult:
    """Calculate TP emissions via tile drainage from arable land and grassland.

    Drainage from arable land passes retention ponds; grassland drainage does not.

    Args:
        soil: Soil composition
        landuse: Land cover composition (degraded fens and bogs)
        hydrology: Upstream state carrying drainage discharge per class
        basics: Pond hydraulic load on arable land
        coefficients: Empirical coefficient catalogue

    Returns:
        TileDrainageResult with the drainage concentration and per-class loads.
    """
    concentration = calculate_drainage_concentration(soil, landuse, coefficients)
    transmission = calculate_pond_transmission(
        basics.pond_hydraulic_load_arable_land, coefficients
    )

    arable_land = grassland = 0.0
    if concentration is not None:
        arable_land = (
            concentration
            * transmission
            * hydrology.td_q_arable_land
            * CONSTANTS.DISCHARGE_TO_ANNUAL_LOAD
        )
        grassland = concentration * hydrology.td_q_grassland * CONSTANTS.DISCHARGE_TO_ANNUAL_LOAD

    return TileDrainageResult(
        concentration=concentration,
        pond_transmission_arable=transmission,
        arable_land=arable_land,
        grassland=grassland,
        total=arable_land + grassland,
    )

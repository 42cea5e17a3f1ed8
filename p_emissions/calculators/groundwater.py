"""Groundwater phosphorus emission calculations.

The groundwater concentration blends the soil-dependent concentration of the
event-driven recharge with the natural concentration of the baseline
recharge. A redox factor, selected by the groundwater retention factor,
scales every concentration before loads are derived per land class.
"""

import logging

from p_emissions.config import CONSTANTS, PhosphorusCoefficients
from p_emissions.models.domain import (
    AnalyticalUnit,
    Basics,
    HydrologyState,
)
from p_emissions.models.results import GroundwaterResult, TileDrainageResult, UrbanSystemsResult

logger = logging.getLogger(__name__)


def _soil_concentrations(
    unit: AnalyticalUnit,
    hydrology: HydrologyState,
    basics: Basics,
    coefficients: PhosphorusCoefficients,
) -> tuple[float, float, float, float]:
    """Raw groundwater concentrations (mg/l).

    Returns:
        Tuple of (all areas, arable land and grassland, wetland, natural covered).
    """
    soil = unit.soil
    landuse = unit.landuse

    soil_area = soil.total_area
    if soil_area == 0 or unit.hydrogeology.rock_share == 0 or hydrology.gw_recharge_a1 == 0:
        return 0.0, 0.0, 0.0, 0.0

    c = coefficients
    mineral = (
        c.groundwater_concentration_sandy * soil.sandy
        + c.groundwater_concentration_loamy * (soil.clayey + soil.loamy + soil.silty)
    )
    degraded = (
        c.groundwater_concentration_fen_degraded * landuse.fen_degraded
        + c.groundwater_concentration_bog_degraded * landuse.bog_degraded
    )
    natural = (
        c.groundwater_concentration_fen_natural * landuse.fen_natural
        + c.groundwater_concentration_bog_natural * landuse.bog_natural
    )

    # Event-driven recharge (A1 - A2) carries the soil signature, baseline recharge A2 is natural
    event_recharge = hydrology.gw_recharge_a1 - basics.gw_recharge_a2
    concentration = (
        (mineral + degraded + natural) / soil_area * event_recharge
        + c.groundwater_natural_concentration * basics.gw_recharge_a2
    ) / hydrology.gw_recharge_a1

    agricultural_area = soil.mineral_area + landuse.fen_degraded + landuse.bog_degraded
    arable_grassland = (mineral + degraded) / agricultural_area if agricultural_area != 0 else 0.0

    wetland = 0.0
    peat_area = (
        landuse.fen_degraded + landuse.fen_natural + landuse.bog_degraded + landuse.bog_natural
    )
    if landuse.fen_degraded + landuse.fen_natural == 0:
        if landuse.wetland != 0:
            wetland = concentration
    else:
        wetland = (degraded + natural) / peat_area

    return concentration, arable_grassland, wetland, c.groundwater_natural_concentration


def select_redox_factor(gw_retention_factor: float, coefficients: PhosphorusCoefficients) -> float:
    """Redox correction factor for the groundwater retention regime.

    Low retention indicates reducing conditions, which mobilise phosphorus.
    """
    if gw_retention_factor < coefficients.redox_retention_threshold:
        return coefficients.redox_factor_reduced
    return coefficients.redox_factor_oxic


def _class_load(concentration: float, gw_qcorr: float, area: float) -> float:
    # mg/l * mm/a * km² -> t/a
    return concentration * gw_qcorr * area / CONSTANTS.KILOGRAMS_PER_TONNE


def calculate_groundwater(
    unit: AnalyticalUnit,
    hydrology: HydrologyState,
    basics: Basics,
    urban_systems: UrbanSystemsResult,
    tile_drainage: TileDrainageResult,
    gw_retention_factor: float,
    coefficients: PhosphorusCoefficients,
) -> GroundwaterResult:
    """Calculate TP emissions via groundwater.

    Concentrations are only evaluated when soil area, rock share and primary
    recharge are all non-zero; otherwise they are zero. Arable land and
    grassland only contribute with their non-drained area. Urban areas add
    the groundwater-routed urban loads scaled by the groundwater retention
    factor, and contribute natural groundwater only while the urban area
    exceeds the long-term paved area.

    Args:
        unit: Analytical unit (soil, land use, hydrogeology, area)
        hydrology: Upstream state (recharge, discharge, drained areas)
        basics: Baseline groundwater recharge
        urban_systems: Urban systems result (groundwater-routed loads)
        tile_drainage: Tile drainage result (drainage concentration)
        gw_retention_factor: Precomputed groundwater retention factor
        coefficients: Empirical coefficient catalogue

    Returns:
        GroundwaterResult with raw and corrected concentrations, root-zone
        figures and per-class loads.
    """
    landuse = unit.landuse
    concentration, arable_grassland, wetland, natural_covered = _soil_concentrations(
        unit, hydrology, basics, coefficients
    )

    redox_factor = select_redox_factor(gw_retention_factor, coefficients)
    corrected = concentration * redox_factor
    corrected_arable_grassland = arable_grassland * redox_factor
    corrected_wetland = wetland * redox_factor
    corrected_natural_covered = natural_covered * redox_factor

    drainage_concentration = tile_drainage.concentration or 0.0
    root_zone_load = (
        (drainage_concentration - concentration + corrected)
        * hydrology.gw_q
        * CONSTANTS.DISCHARGE_TO_ANNUAL_LOAD
    )
    root_zone_discharge = (
        (landuse.agricultural - hydrology.drained_area) / unit.area * hydrology.gw_q
    )

    gw_qcorr = hydrology.gw_qcorr
    arable_land = _class_load(
        corrected_arable_grassland,
        gw_qcorr,
        hydrology.arable_land - hydrology.tile_drained_arable_land,
    )
    grassland = _class_load(
        corrected_arable_grassland,
        gw_qcorr,
        hydrology.grassland - hydrology.tile_drained_grassland,
    )
    natural_covered_load = _class_load(corrected_natural_covered, gw_qcorr, landuse.natural_covered)
    wetland_load = _class_load(corrected_wetland, gw_qcorr, landuse.wetland)

    urban = urban_systems.groundwater_routed * gw_retention_factor
    unpaved_urban = landuse.urban - hydrology.paved_area_total_long_term
    if unpaved_urban < 0:
        logger.debug(
            f"Unit {unit.id}: long-term paved area exceeds urban area, "
            "no natural groundwater from urban areas"
        )
    else:
        urban += _class_load(corrected_natural_covered, gw_qcorr, unpaved_urban)

    open_area = _class_load(corrected_natural_covered, gw_qcorr, landuse.open_area)
    open_pit_mine = _class_load(corrected_natural_covered, gw_qcorr, landuse.open_pit_mine)
    snow = _class_load(corrected_natural_covered, gw_qcorr, landuse.snow)

    total = (
        arable_land
        + grassland
        + natural_covered_load
        + wetland_load
        + urban
        + open_area
        + open_pit_mine
        + snow
    )

    concentration_all_areas = None
    if hydrology.gw_q != 0:
        # t/a / (m³/s) -> mg/l
        concentration_all_areas = (
            total
            / hydrology.gw_q
            * CONSTANTS.GRAMS_PER_TONNE
            / CONSTANTS.SECONDS_PER_DAY
            / CONSTANTS.DAYS_PER_YEAR
        )

    return GroundwaterResult(
        concentration=concentration,
        concentration_arable_grassland=arable_grassland,
        concentration_wetland=wetland,
        concentration_natural_covered=natural_covered,
        redox_factor=redox_factor,
        corrected_concentration=corrected,
        corrected_arable_grassland=corrected_arable_grassland,
        corrected_wetland=corrected_wetland,
        corrected_natural_covered=corrected_natural_covered,
        root_zone_load=root_zone_load,
        root_zone_discharge=root_zone_discharge,
        arable_land=arable_land,
        grassland=grassland,
        natural_covered=natural_covered_load,
        wetland=wetland_load,
        urban=urban,
        open_area=open_area,
        open_pit_mine=open_pit_mine,
        snow=snow,
        total=total,
        concentration_all_areas=concentration_all_areas,
    )

"""Total emission aggregation and source apportionment.

The grand total sums the seven pathway totals. Source apportionment splits it
into urban settlements, agriculture, natural background and other sources by
subtraction, followed by a cascading non-negativity pass so that the four
categories are never negative and always add up to the grand total.
"""

import logging

from p_emissions.config import CONSTANTS, PhosphorusCoefficients
from p_emissions.models.domain import AnalyticalUnit, Basics, PeriodicalData
from p_emissions.models.results import (
    AtmosphericDepositionResult,
    BackgroundResult,
    ErosionResult,
    GroundwaterResult,
    PointSourceResult,
    SourceApportionment,
    SurfaceRunoffResult,
    TileDrainageResult,
    TotalEmissions,
    UrbanSystemsResult,
)

logger = logging.getLogger(__name__)


def calculate_totals(
    unit: AnalyticalUnit,
    period: PeriodicalData,
    urban_systems: UrbanSystemsResult,
    atmospheric_deposition: AtmosphericDepositionResult,
    surface_runoff: SurfaceRunoffResult,
    tile_drainage: TileDrainageResult,
    groundwater: GroundwaterResult,
    erosion: ErosionResult,
    point_sources: PointSourceResult,
) -> TotalEmissions:
    """Calculate the grand total and per-land-class totals.

    Formula:
        total = AD + SR + TD + ER + GW + PS + US

    Args:
        unit: Analytical unit (WWTP discharge)
        period: Periodical data (inhabitants)
        urban_systems: Urban systems result
        atmospheric_deposition: Atmospheric deposition result
        surface_runoff: Surface runoff result
        tile_drainage: Tile drainage result
        groundwater: Groundwater result
        erosion: Erosion result
        point_sources: Point-source result

    Returns:
        TotalEmissions with the grand total, per-class totals, root-zone loss
        and emission per inhabitant.
    """
    total = (
        atmospheric_deposition.total
        + surface_runoff.total
        + tile_drainage.total
        + erosion.total
        + groundwater.total
        + point_sources.p_emission
        + urban_systems.total
    )

    per_inhabitant = None
    if period.inhabitants > 0:
        per_inhabitant = total / period.inhabitants * CONSTANTS.GRAMS_PER_TONNE

    return TotalEmissions(
        arable_land=(
            tile_drainage.arable_land
            + erosion.arable_land
            + surface_runoff.arable_land
            + groundwater.arable_land
        ),
        grassland=(
            tile_drainage.grassland
            + erosion.grassland
            + surface_runoff.grassland
            + groundwater.grassland
        ),
        forest=(
            erosion.natural_covered + surface_runoff.natural_covered + groundwater.natural_covered
        ),
        wetland=groundwater.wetland + surface_runoff.wetland,
        urban=urban_systems.total + point_sources.p_emission + groundwater.urban,
        surface_water=atmospheric_deposition.total,
        open_pit_mine=groundwater.open_pit_mine,
        open_area=(
            erosion.snow
            + surface_runoff.snow
            + surface_runoff.open_area
            + groundwater.open_area
            + groundwater.snow
        ),
        total=total,
        p_loss_root_zone=groundwater.root_zone_load + tile_drainage.total,
        discharge_wwtp=unit.point_sources.discharge_wwtp,
        per_inhabitant=per_inhabitant,
    )


def _excess(value: float, background: float) -> float:
    return value - background if value > background else 0.0


def apportion_sources(
    unit: AnalyticalUnit,
    basics: Basics,
    totals: TotalEmissions,
    urban_systems: UrbanSystemsResult,
    atmospheric_deposition: AtmosphericDepositionResult,
    surface_runoff: SurfaceRunoffResult,
    tile_drainage: TileDrainageResult,
    groundwater: GroundwaterResult,
    erosion: ErosionResult,
    point_sources: PointSourceResult,
    background: BackgroundResult,
    coefficients: PhosphorusCoefficients,
) -> SourceApportionment:
    """Apportion the grand total to urban settlements, agriculture, background and other.

    Agriculture is the agricultural share of erosion, surface runoff,
    groundwater and tile drainage, less the background proportional to the
    agricultural area. Negative shares are reconciled in order:

    1. agriculture < 0: agriculture = 0, other recomputed from the remainder
    2. other < 0: other = 0, background shrinks to the remainder
    3. background < 0: background = 0, urban settlements take the whole total

    Args:
        unit: Analytical unit (area, land use)
        basics: Natural soil loss for the anthropogenic erosion excess
        totals: Grand total
        urban_systems: Urban systems result
        atmospheric_deposition: Atmospheric deposition result
        surface_runoff: Surface runoff result
        tile_drainage: Tile drainage result
        groundwater: Groundwater result
        erosion: Erosion result
        point_sources: Point-source result
        background: Natural background loads
        coefficients: Empirical coefficient catalogue

    Returns:
        SourceApportionment with four non-negative categories summing to the
        grand total and the anthropogenic excess per pathway.
    """
    landuse = unit.landuse
    total = totals.total
    bg = background.total

    anthropogenic_atmospheric_deposition = _excess(
        atmospheric_deposition.total, background.atmospheric_deposition
    )
    anthropogenic_erosion = 0.0
    natural_erosion = (
        coefficients.natural_soil_phosphorus_content
        / CONSTANTS.MILLIGRAMS_PER_KILOGRAM
        * basics.soil_loss_natural
    )
    if natural_erosion > background.erosion:
        anthropogenic_erosion = erosion.total - background.erosion
    anthropogenic_surface_runoff = 0.0
    if surface_runoff.natural_areas_with_vegetation > background.surface_runoff:
        anthropogenic_surface_runoff = surface_runoff.total - background.surface_runoff
    anthropogenic_groundwater = _excess(groundwater.total, background.groundwater)

    if landuse.paved == 0:
        urban = point_sources.p_emission
    else:
        urban = point_sources.p_emission + urban_systems.total

    if landuse.agricultural == 0:
        agriculture = 0.0
        other = total - bg - urban
    else:
        agriculture = (
            erosion.arable_land
            + erosion.grassland
            + surface_runoff.arable_land
            + surface_runoff.grassland
            + groundwater.arable_land
            + groundwater.grassland
            + tile_drainage.arable_land
            + tile_drainage.grassland
            - bg * landuse.agricultural / unit.area
        )
        other = total - bg - urban - agriculture

    if agriculture < 0:
        agriculture = 0.0
        other = total - bg - urban

    if other < 0:
        other = 0.0
        bg = total - urban - agriculture

    if bg < 0:
        logger.debug(
            f"Unit {unit.id}: urban and agricultural sources exceed the total, "
            "attributing the total to urban settlements"
        )
        bg = 0.0
        agriculture = 0.0
        urban = total

    return SourceApportionment(
        urban_settlements=urban,
        agriculture=agriculture,
        background=bg,
        other=other,
        anthropogenic_atmospheric_deposition=anthropogenic_atmospheric_deposition,
        anthropogenic_erosion=anthropogenic_erosion,
        anthropogenic_surface_runoff=anthropogenic_surface_runoff,
        anthropogenic_groundwater=anthropogenic_groundwater,
    )

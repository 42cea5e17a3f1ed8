"""Phosphorus emission calculation for one analytical unit and period.

The calculator composes the pathway calculators in their dependency order:

1. Urban systems (needs country coefficients)
2. Atmospheric deposition
3. Surface runoff
4. Tile drainage
5. Groundwater (needs urban systems and tile drainage)
6. Background (needs groundwater and snow surface runoff)
7. Erosion
8. Point sources (needs urban systems)
9. Totals and source apportionment (needs everything above)

All per-call inputs travel in an immutable ``CalculationContext``, so one
calculator instance can serve any number of units.
"""

import logging
import time
from dataclasses import dataclass

from p_emissions.calculators import (
    apportion_sources,
    calculate_atmospheric_deposition,
    calculate_background,
    calculate_erosion,
    calculate_groundwater,
    calculate_point_sources,
    calculate_surface_runoff,
    calculate_tile_drainage,
    calculate_totals,
    calculate_urban_systems,
)
from p_emissions.config import (
    DEFAULT_COEFFICIENTS,
    CalculationConfig,
    DebugConfig,
    PhosphorusCoefficients,
)
from p_emissions.debug import save_debug_result
from p_emissions.errors import CountryDataNotAvailableError
from p_emissions.models.domain import Basics, CountryCoefficients
from p_emissions.models.results import Result
from p_emissions.repositories.countries import CountryOrStates
from p_emissions.validation import validate_inputs

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalculationContext:
    """Per-unit inputs supplied by upstream pipeline stages.

    Attributes:
        basics: Per-unit hydraulic and urban coefficients
        countries: Country coefficient lookup
        background_retention_factor: Retention factor of the background
            groundwater load (BG_GW_TNC / BG_LW_TNC)
        gw_retention_factor: Groundwater retention factor
            (GW_TNC_allAreas / GW_TNC_LW_allAreas)
    """

    basics: Basics
    countries: CountryOrStates
    background_retention_factor: float
    gw_retention_factor: float


class PhosphorusEmissionCalculator:
    """Calculates the phosphorus emission budget of analytical units.

    The budget covers seven pathways (urban systems, atmospheric deposition,
    surface runoff, tile drainage, groundwater, erosion, point sources), the
    natural background, per-land-class totals and the apportionment of the
    total to source categories.
    """

    def __init__(
        self,
        coefficients: PhosphorusCoefficients | None = None,
        config: CalculationConfig | None = None,
        debug_config: DebugConfig | None = None,
    ):
        """Initialize the calculator.

        Args:
            coefficients: Empirical coefficient catalogue (default catalogue if None)
            config: Calculation rules (read from environment if None)
            debug_config: Debug output configuration (read from environment if None)
        """
        self.coefficients = coefficients or DEFAULT_COEFFICIENTS
        self.config = config or CalculationConfig()
        self._debug_config = debug_config or DebugConfig.from_env()

    def resolve_country(self, result: Result, context: CalculationContext) -> CountryCoefficients:
        """Look up the country coefficients for the unit and period.

        Long-term pseudo-years are redirected to the countries' calculation
        year for hydrological conditions.

        Raises:
            CountryDataNotAvailableError: If no coefficients exist for the pair
        """
        unit = result.unit
        year = context.countries.lookup_year(
            result.period.year, self.config.long_term_year_threshold
        )
        lookup = context.countries.find(unit.country_id, year)
        if not lookup.is_found:
            logger.error(
                f"Unit {unit.id}: no country data for country {unit.country_id} in year {year}"
            )
            raise CountryDataNotAvailableError(unit.country_id, year, unit.id)
        return lookup.coefficients

    def run(self, result: Result, context: CalculationContext) -> None:
        """Calculate all pathway results and write them onto the result.

        Units without area are left untouched. The country lookup happens
        before anything is written, so a failed lookup leaves the result and
        the unit's point-source accumulator unchanged. Pathway results are
        assigned together once every pathway has been calculated.

        Args:
            result: Result aggregate with unit, period and hydrology populated
            context: Per-unit inputs from upstream stages

        Raises:
            CountryDataNotAvailableError: If no country coefficients exist for
                the unit and period
        """
        unit = result.unit
        if unit.area == 0:
            logger.debug(f"Unit {unit.id}: no area, skipping phosphorus emissions")
            return

        t_total = time.perf_counter()

        for error in validate_inputs(result, context):
            logger.warning(f"Unit {unit.id}: {error.field}: {error.message}")

        country = self.resolve_country(result, context)

        period = result.period
        hydrology = result.hydrology
        basics = context.basics
        coefficients = self.coefficients
        config = self.config

        t0 = time.perf_counter()
        urban_systems = calculate_urban_systems(
            period, hydrology, basics, unit.option, country, coefficients, config
        )
        logger.debug(f"[timing] urban_systems: {time.perf_counter() - t0:.6f}s")

        t0 = time.perf_counter()
        atmospheric_deposition = calculate_atmospheric_deposition(period, hydrology)
        surface_runoff = calculate_surface_runoff(
            unit.soil, unit.landuse, hydrology, basics, country, coefficients, config
        )
        tile_drainage = calculate_tile_drainage(
            unit.soil, unit.landuse, hydrology, basics, coefficients
        )
        logger.debug(f"[timing] surface_pathways: {time.perf_counter() - t0:.6f}s")

        t0 = time.perf_counter()
        groundwater = calculate_groundwater(
            unit,
            hydrology,
            basics,
            urban_systems,
            tile_drainage,
            context.gw_retention_factor,
            coefficients,
        )
        background = calculate_background(
            period,
            hydrology,
            basics,
            unit.landuse,
            groundwater.total,
            surface_runoff.snow,
            context.background_retention_factor,
            coefficients,
            config,
        )
        logger.debug(f"[timing] groundwater_and_background: {time.perf_counter() - t0:.6f}s")

        t0 = time.perf_counter()
        erosion = calculate_erosion(unit.soil, basics, country, coefficients)
        point_sources = calculate_point_sources(unit, period, urban_systems, coefficients)
        logger.debug(f"[timing] erosion_and_point_sources: {time.perf_counter() - t0:.6f}s")

        t0 = time.perf_counter()
        totals = calculate_totals(
            unit,
            period,
            urban_systems,
            atmospheric_deposition,
            surface_runoff,
            tile_drainage,
            groundwater,
            erosion,
            point_sources,
        )
        apportionment = apportion_sources(
            unit,
            basics,
            totals,
            urban_systems,
            atmospheric_deposition,
            surface_runoff,
            tile_drainage,
            groundwater,
            erosion,
            point_sources,
            background,
            coefficients,
        )
        logger.debug(f"[timing] totals_and_sources: {time.perf_counter() - t0:.6f}s")

        unit.point_sources.p_emission = point_sources.p_emission
        unit.point_sources.p_emission_no_wwtp = point_sources.p_emission_no_wwtp

        result.urban_systems = urban_systems
        result.atmospheric_deposition = atmospheric_deposition
        result.surface_runoff = surface_runoff
        result.tile_drainage = tile_drainage
        result.groundwater = groundwater
        result.background = background
        result.erosion = erosion
        result.point_sources = point_sources
        result.totals = totals
        result.apportionment = apportionment

        breakdown = ", ".join(
            f"{p.value}={load:.4f}" for p, load in result.pathway_totals().items()
        )
        logger.debug(f"Unit {unit.id}: pathway totals {breakdown}")
        save_debug_result(result, "99_final_result", self._debug_config)

        logger.info(
            f"Unit {unit.id} ({period.year}): TP total {totals.total:.4f} t/a "
            f"in {time.perf_counter() - t_total:.3f}s"
        )

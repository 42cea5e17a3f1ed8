"""Point-source phosphorus emission aggregation."""

from p_emissions.config import CONSTANTS, PhosphorusCoefficients
from p_emissions.models.domain import AnalyticalUnit, PeriodicalData
from p_emissions.models.results import PointSourceResult, UrbanSystemsResult


def calculate_point_sources(
    unit: AnalyticalUnit,
    period: PeriodicalData,
    urban_systems: UrbanSystemsResult,
    coefficients: PhosphorusCoefficients,
) -> PointSourceResult:
    """Aggregate treatment plant, industry and sewer loads into point sources.

    Formula:
        PS = P_WWTP * history
             + (P_industry + P_remain) * (1 - reduction% / 100) / 1000
             + only_sewers * (1 - removal_DIN2% / 100)        (0 if all connected)
             + virtual_WWTP

    The point-source accumulator of the unit is not modified here; the engine
    writes ``p_emission`` and ``p_emission_no_wwtp`` back onto it.

    Args:
        unit: Analytical unit (point-source accumulator, scenario options)
        period: Periodical data (WWTP history, industry and remaining loads in kg/a)
        urban_systems: Urban systems result (only-sewer, virtual WWTP and
            combined sewer loads)
        coefficients: Empirical coefficient catalogue

    Returns:
        PointSourceResult with its components, the total point-source emission
        and the figure routed directly into the main river.
    """
    option = unit.option

    wwtp = unit.point_sources.p_emission_wwtp * period.wwtp_p_history
    industry_and_remaining = (
        (period.industry_direct_p + period.wwtp_p_remain)
        * (1.0 - option.reduction_p / 100.0)
        / CONSTANTS.KILOGRAMS_PER_TONNE
    )
    only_sewers = 0.0
    if not option.all_connected:
        only_sewers = urban_systems.only_sewers * (
            1.0 - coefficients.din2_removal_percent / 100.0
        )

    p_emission = wwtp + industry_and_remaining + only_sewers
    p_emission += urban_systems.virtual_wwtp

    ps_in_main_river = 0.0
    if unit.emission_ps_direct_in_main_river:
        ps_in_main_river = (
            p_emission + urban_systems.cs_discharge + urban_systems.p_emission_no_wwtp
        )

    return PointSourceResult(
        wwtp=wwtp,
        industry_and_remaining=industry_and_remaining,
        only_sewers=only_sewers,
        virtual_wwtp=urban_systems.virtual_wwtp,
        p_emission=p_emission,
        p_emission_no_wwtp=urban_systems.p_emission_no_wwtp,
        ps_in_main_river=ps_in_main_river,
    )

"""Urban systems phosphorus emission calculations.

Covers separate sewers, combined sewer overflows, inhabitants and paved areas
connected only to sewers, unconnected urban areas, septic tanks, decentralised
treatment plants (DIN1/DIN2) and virtual WWTPs.
"""

import logging

from p_emissions.config import CONSTANTS, CalculationConfig, PhosphorusCoefficients
from p_emissions.models.domain import (
    Basics,
    CountryCoefficients,
    HydrologyState,
    Option,
    PeriodicalData,
)
from p_emissions.models.results import UrbanSystemsResult

logger = logging.getLogger(__name__)


def calculate_per_inhabitant_load(country: CountryCoefficients, option: Option) -> float:
    """Per-inhabitant TP load after the detergent-free scenario switches.

    Formula:
        load = P_inh - P_laundry (if laundry P-free) - P_dishwasher (if dishwasher P-free)

    The load never drops below zero.

    Args:
        country: Country coefficients of the calculation year
        option: Scenario switches of the analytical unit

    Returns:
        TP per inhabitant and day (g/(inhabitant*d))
    """
    load = country.phosphorus_per_inhabitant
    if option.pfree_laundry_detergents:
        load -= country.phosphorus_laundry_detergent
    if option.pfree_dishwasher_detergents:
        load -= country.phosphorus_dishwasher_detergent
    return max(load, 0.0)


def calculate_pfree_ratio(
    country: CountryCoefficients, option: Option, reference_share: float
) -> float:
    """Ratio of the detergent-adjusted to the baseline per-inhabitant load.

    The ratio is normalised by the detergent reference share, so the baseline
    (no detergent-free option) gives ``1 / reference_share``.

    Args:
        country: Country coefficients of the calculation year
        option: Scenario switches of the analytical unit
        reference_share: Detergent reference share from the calculation config

    Returns:
        Normalised detergent-free ratio (-)
    """
    baseline = country.phosphorus_per_inhabitant
    if baseline == 0:
        return 1.0 / reference_share
    return calculate_per_inhabitant_load(country, option) / baseline / reference_share


def _dctp_load(inhabitants: float, net_load_per_inhabitant: float, removal_percent: float) -> float:
    """Annual TP load (t/a) of inhabitants served by a small treatment system."""
    return (
        (100.0 - removal_percent)
        / 100.0
        * inhabitants
        * net_load_per_inhabitant
        * CONSTANTS.DAYS_PER_YEAR
        / CONSTANTS.GRAMS_PER_TONNE
    )


def _separate_sewer_concentrations(
    basics: Basics, coefficients: PhosphorusCoefficients
) -> tuple[float, float, float]:
    """Concentrations of paved-area, commercial-area and blended rain water runoff (mg/l)."""
    paved = 0.0
    if basics.water_amount_ss_urban_areas > 0:
        # kg/(ha*a) * ha/km² * km² / (m³/a) / (l/m³) * mg/kg
        paved = (
            coefficients.paved_area_specific_load
            * CONSTANTS.HECTARES_PER_SQUARE_KILOMETRE
            * basics.urban_area_connected_ss
            / basics.water_amount_ss_urban_areas
            / CONSTANTS.LITRES_PER_CUBIC_METRE
            * CONSTANTS.MILLIGRAMS_PER_KILOGRAM
        )
    commercial = coefficients.commercial_runoff_concentration

    water_amount = basics.water_amount_ss_urban_areas + basics.water_amount_ss_commercial_areas
    if water_amount == 0:
        return paved, commercial, 0.0

    blended = (
        (
            paved * basics.water_amount_ss_urban_areas
            + commercial * basics.water_amount_ss_commercial_areas
        )
        / water_amount
        * (1.0 - coefficients.storage_basin_efficiency * basics.storage_rss / 100.0)
        * (1.0 - coefficients.retention_soil_filter_efficiency * basics.retention_rbf / 100.0)
    )
    return paved, commercial, blended


def _combined_sewer_overflow(
    period: PeriodicalData,
    hydrology: HydrologyState,
    basics: Basics,
    per_inhabitant_load: float,
    coefficients: PhosphorusCoefficients,
) -> tuple[float, float, float, float]:
    """Loads (kg/a) from inhabitants, commercial and paved areas and the CSO concentration (mg/l).

    Inhabitant and commercial loads cover only days with effective storm water
    events; paved-area loads are spread over the same days.
    """
    if basics.urban_area_connected_css == 0:
        return 0.0, 0.0, 0.0, 0.0

    inhabitants_load = 0.0
    if basics.inhabitants_connected_corrected > 0 and hydrology.paved_area_total > 0:
        inhabitants_load = (
            period.inhabitants
            / 1000.0
            * basics.inhabitants_connected_to_sewer_and_wwtp
            / basics.inhabitants_connected_corrected
            * basics.urban_area_connected_css
            / hydrology.paved_area_total
            * per_inhabitant_load
            * basics.storm_water_events_effective_days
        )

    # l/(ha*s) * km² * ha/km² * s/d / (l/m³) * mg/l * d/a / (mg/kg)
    commercial_load = (
        coefficients.commercial_area_specific_runoff
        * basics.commercial_area_connected_css
        * CONSTANTS.HECTARES_PER_SQUARE_KILOMETRE
        * CONSTANTS.SECONDS_PER_DAY
        / CONSTANTS.LITRES_PER_CUBIC_METRE
        * coefficients.commercial_runoff_concentration
        * basics.storm_water_events_effective_days
        / CONSTANTS.MILLIGRAMS_PER_KILOGRAM
    )

    paved_load = (
        coefficients.paved_area_specific_load
        * CONSTANTS.HECTARES_PER_SQUARE_KILOMETRE
        * basics.paved_area_q_ratio
        * basics.urban_area_connected_css
        / CONSTANTS.DAYS_PER_YEAR
        * basics.storm_water_events_effective_days
    )

    if basics.cso_discharge_during_overflow == 0:
        logger.warning(
            "Combined sewer area connected but no overflow discharge - "
            "CSO concentration set to 0"
        )
        return inhabitants_load, commercial_load, paved_load, 0.0

    concentration = (
        (inhabitants_load + commercial_load + paved_load)
        / basics.cso_discharge_during_overflow
        / CONSTANTS.LITRES_PER_CUBIC_METRE
        * CONSTANTS.MILLIGRAMS_PER_KILOGRAM
    )
    return inhabitants_load, commercial_load, paved_load, concentration


def calculate_urban_systems(
    period: PeriodicalData,
    hydrology: HydrologyState,
    basics: Basics,
    option: Option,
    country: CountryCoefficients,
    coefficients: PhosphorusCoefficients,
    config: CalculationConfig,
) -> UrbanSystemsResult:
    """Calculate TP emissions via urban systems.

    Decentralised system loads are only computed while the country's
    per-inhabitant load exceeds the removal offset; groundwater-routed loads
    additionally require a non-zero corrected groundwater recharge. Without
    groundwater recharge no load reaches surface waters via groundwater.

    Formula (per decentralised system):
        load_t_a = (100 - removal%) / 100 * inhabitants
                   * (P_inh * pfree_ratio - offset) * 365 / 1e6

    Args:
        period: Periodical data (precipitation, inhabitants, CSO storage)
        hydrology: Upstream hydrological state (paved area, CSO discharge, GW recharge)
        basics: Per-unit hydraulic and urban coefficients
        option: Scenario switches
        country: Country coefficients of the calculation year
        coefficients: Empirical coefficient catalogue
        config: Calculation rules

    Returns:
        UrbanSystemsResult with per-component loads and driver-partitioned totals.
    """
    per_inhabitant_load = calculate_per_inhabitant_load(country, option)
    pfree_ratio = calculate_pfree_ratio(country, option, config.detergent_reference_share)

    ss_paved = ss_commercial = ss_concentration = 0.0
    if period.precipitation_annual != 0:
        ss_paved, ss_commercial, ss_concentration = _separate_sewer_concentrations(
            basics, coefficients
        )

    cso_inhabitants, cso_commercial, cso_paved, cso_concentration = _combined_sewer_overflow(
        period, hydrology, basics, per_inhabitant_load, coefficients
    )

    # mg/l * m³/a * l/m³ / (mg/t)
    ss_discharge = ss_concentration * basics.water_amount_ss * 1000.0 / 1_000_000_000.0
    cs_discharge = (
        hydrology.cso_current_discharge * cso_concentration * 1000.0 / 1_000_000_000.0
    )

    inhabitants_discharge = (
        basics.inhabitants_connected_only_to_sewers
        * per_inhabitant_load
        * CONSTANTS.DAYS_PER_YEAR
        / CONSTANTS.GRAMS_PER_TONNE
    )
    paved_area_discharge = (
        basics.urban_area_only_connected_ss
        * coefficients.paved_area_specific_load
        * CONSTANTS.HECTARES_PER_SQUARE_KILOMETRE
        / CONSTANTS.KILOGRAMS_PER_TONNE
    )

    only_sewers = paved_area_discharge
    if not option.all_connected:
        only_sewers += inhabitants_discharge

    groundwater_recharge = hydrology.gw_qcorr != 0

    no_sewer_system = 0.0
    if groundwater_recharge:
        no_sewer_system = (
            basics.urban_area_not_connected * coefficients.paved_area_specific_load / 10.0
        )

    din2_removal = (
        coefficients.din2_p_removal_percent
        if option.din2_with_additional_p_removal
        else coefficients.din2_removal_percent
    )
    offset = coefficients.inhabitant_removal_offset

    septic_tanks = din1_sewer = din1_groundwater = din1_direct = 0.0
    din2_sewer = din2_groundwater = din2_direct = 0.0
    if country.phosphorus_per_inhabitant > offset:
        septic_tanks = _dctp_load(
            basics.inhabitants_connected_to_septic_tanks,
            country.phosphorus_per_inhabitant - offset,
            coefficients.septic_tank_removal_percent,
        )

        net_load = max(country.phosphorus_per_inhabitant * pfree_ratio - offset, 0.0)
        din1_sewer = _dctp_load(
            basics.inhabitants_dctp_sewer_din1, net_load, coefficients.din1_removal_percent
        )
        din1_direct = _dctp_load(
            basics.inhabitants_dctp_direct_din1, net_load, coefficients.din1_removal_percent
        )
        din2_sewer = _dctp_load(basics.inhabitants_dctp_sewer_din2, net_load, din2_removal)
        din2_direct = _dctp_load(basics.inhabitants_dctp_direct_din2, net_load, din2_removal)
        if groundwater_recharge:
            din1_groundwater = _dctp_load(
                basics.inhabitants_dctp_groundwater_din1,
                net_load,
                coefficients.din1_removal_percent,
            )
            din2_groundwater = _dctp_load(
                basics.inhabitants_dctp_groundwater_din2, net_load, din2_removal
            )

    virtual_removal = (
        coefficients.virtual_wwtp_p_removal_percent
        if option.virtual_wwtp_with_additional_p_removal
        else coefficients.virtual_wwtp_removal_percent
    )
    virtual_wwtp = _dctp_load(
        basics.inhabitants_virtual_wwtp,
        max(country.phosphorus_per_inhabitant - offset, 0.0),
        virtual_removal,
    )

    p_emission_no_wwtp = 0.0
    if not option.all_connected:
        p_emission_no_wwtp = (din2_sewer + virtual_wwtp + din1_sewer) * (
            1.0 - option.portion_connected_inhabitants / 100.0
        )

    effective_cso_storage = option.cso_storage_increase or period.cso_storage

    # CS discharge is kept in the total but disaggregated separately over time
    total = (
        ss_discharge
        + cs_discharge
        + only_sewers
        + no_sewer_system
        + septic_tanks
        + din1_direct
        + din1_sewer
        + din2_direct
        + din2_sewer
        + virtual_wwtp
    )
    population_driven = (
        inhabitants_discharge
        + septic_tanks
        + din1_direct
        + din1_sewer
        + din2_direct
        + din2_sewer
        + virtual_wwtp
    )
    precipitation_driven = ss_discharge + paved_area_discharge + no_sewer_system

    return UrbanSystemsResult(
        per_inhabitant_load=per_inhabitant_load,
        pfree_ratio=pfree_ratio,
        ss_concentration_paved=ss_paved,
        ss_concentration_commercial=ss_commercial,
        ss_concentration=ss_concentration,
        cso_inhabitants_load=cso_inhabitants,
        cso_commercial_load=cso_commercial,
        cso_paved_load=cso_paved,
        cso_concentration=cso_concentration,
        effective_cso_storage=effective_cso_storage,
        ss_discharge=ss_discharge,
        cs_discharge=cs_discharge,
        inhabitants_discharge=inhabitants_discharge,
        paved_area_discharge=paved_area_discharge,
        only_sewers=only_sewers,
        no_sewer_system=no_sewer_system,
        septic_tanks=septic_tanks,
        din1_sewer=din1_sewer,
        din1_groundwater=din1_groundwater,
        din1_direct=din1_direct,
        din2_sewer=din2_sewer,
        din2_groundwater=din2_groundwater,
        din2_direct=din2_direct,
        virtual_wwtp=virtual_wwtp,
        p_emission_no_wwtp=p_emission_no_wwtp,
        total=total,
        population_driven=population_driven,
        precipitation_driven=precipitation_driven,
    )

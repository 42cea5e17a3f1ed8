"""Shared fixtures: a mid-sized lowland analytical unit with mixed land use."""

import pytest

from p_emissions.config import DEFAULT_COEFFICIENTS, CalculationConfig, DebugConfig
from p_emissions.engine import CalculationContext, PhosphorusEmissionCalculator
from p_emissions.models import (
    AnalyticalUnit,
    Basics,
    CountryCoefficients,
    HydrologyState,
    Hydrogeology,
    Landuse,
    PeriodicalData,
    PointSources,
    Result,
    Soil,
)
from p_emissions.repositories import CountryOrStates


@pytest.fixture
def country():
    return CountryCoefficients(
        country_id=1,
        year=2015,
        name="Testland",
        phosphorus_per_inhabitant=1.8,
        phosphorus_laundry_detergent=0.2,
        phosphorus_dishwasher_detergent=0.1,
        phosphorus_accumulation=900.0,
    )


@pytest.fixture
def countries(country):
    long_term = country.model_copy(update={"year": 2010, "phosphorus_accumulation": 700.0})
    return CountryOrStates([country, long_term], calculation_year_for_hydrological_conditions=2010)


@pytest.fixture
def soil():
    return Soil(
        sandy=30.0,
        clayey=20.0,
        loamy=25.0,
        silty=10.0,
        fen=5.0,
        bog=2.0,
        phosphorus_accumulation=800.0,
        phosphorus_content=600.0,
        reference_phosphorus_accumulation=1000.0,
    )


@pytest.fixture
def landuse():
    return Landuse(
        arable=40.0,
        grassland=20.0,
        natural_covered=25.0,
        open_area=1.0,
        open_pit_mine=0.5,
        wetland=2.0,
        urban=8.0,
        paved=3.0,
        fen_degraded=2.0,
        fen_natural=1.0,
        bog_degraded=0.5,
        bog_natural=0.5,
        erosion_potential_area=60.0,
    )


@pytest.fixture
def unit(soil, landuse):
    return AnalyticalUnit(
        id=101,
        country_id=1,
        area=100.0,
        soil=soil,
        landuse=landuse,
        hydrogeology=Hydrogeology(
            consolidated_rock_porous=30.0,
            consolidated_rock_impermeable=20.0,
            unconsolidated_rock_shallow=40.0,
            unconsolidated_rock_deep=10.0,
            consolidated_rock_porous_share=0.3,
            consolidated_rock_impermeable_share=0.2,
            unconsolidated_rock_shallow_share=0.4,
            unconsolidated_rock_deep_share=0.1,
        ),
        point_sources=PointSources(p_emission_wwtp=1.2, discharge_wwtp=0.05),
    )


@pytest.fixture
def period():
    return PeriodicalData(
        year=2015,
        precipitation_annual=700.0,
        inhabitants=20_000,
        cso_storage=20.0,
        atmospheric_deposition_tp=40.0,
        wwtp_p_history=1.0,
        industry_direct_p=500.0,
        wwtp_p_remain=200.0,
    )


@pytest.fixture
def hydrology():
    return HydrologyState(
        paved_area_total=3.0,
        paved_area_total_long_term=2.5,
        water_surface_area_total=1.5,
        cso_current_discharge=50_000.0,
        q_snow=0.0,
        q_natural_areas_with_vegetation=0.2,
        td_q_arable_land=0.05,
        td_q_grassland=0.02,
        gw_q=0.6,
        gw_qcorr=120.0,
        gw_recharge_a1=150.0,
        drained_area=10.0,
        arable_land=40.0,
        grassland=20.0,
        tile_drained_arable_land=8.0,
        tile_drained_grassland=2.0,
    )


@pytest.fixture
def basics():
    return Basics(
        urban_area_connected_ss=1.0,
        urban_area_only_connected_ss=0.1,
        water_amount_ss=300_000.0,
        water_amount_ss_urban_areas=250_000.0,
        water_amount_ss_commercial_areas=50_000.0,
        storage_rss=20.0,
        retention_rbf=10.0,
        urban_area_connected_css=1.5,
        commercial_area_connected_css=0.3,
        paved_area_q_ratio=0.8,
        storm_water_events_effective_days=25.0,
        cso_discharge_during_overflow=200_000.0,
        inhabitants_connected_to_sewer_and_wwtp=18_000,
        inhabitants_connected_corrected=18_500,
        inhabitants_connected_only_to_sewers=300,
        inhabitants_connected_to_septic_tanks=200,
        inhabitants_dctp_sewer_din1=100,
        inhabitants_dctp_groundwater_din1=150,
        inhabitants_dctp_direct_din1=50,
        inhabitants_dctp_sewer_din2=80,
        inhabitants_dctp_groundwater_din2=120,
        inhabitants_dctp_direct_din2=40,
        inhabitants_virtual_wwtp=250,
        urban_area_not_connected=0.2,
        q_arable_land=0.03,
        q_grassland=0.02,
        q_natural_covered=0.015,
        q_open_area=0.001,
        q_open_pit_mine=0.0005,
        q_wetland=0.002,
        pond_hydraulic_load_arable_land=50.0,
        gw_recharge_a2=60.0,
        leakage_water_rate=150.0,
        gw_recharge_area=95.0,
        enrichment_ratio=2.0,
        sediment_delivery_ratio=5.0,
        background_sediment_delivery_ratio=5.0,
        sediment_input_arable_land=800.0,
        sediment_input_grassland=100.0,
        soil_loss_natural_covered=50.0,
        soil_loss_natural=300.0,
        soil_loss_background=0.1,
    )


@pytest.fixture
def result(unit, period, hydrology):
    return Result(unit=unit, period=period, hydrology=hydrology)


@pytest.fixture
def context(basics, countries):
    return CalculationContext(
        basics=basics,
        countries=countries,
        background_retention_factor=0.3,
        gw_retention_factor=0.4,
    )


@pytest.fixture
def coefficients():
    return DEFAULT_COEFFICIENTS


@pytest.fixture
def config():
    return CalculationConfig()


@pytest.fixture
def calculator(coefficients, config):
    return PhosphorusEmissionCalculator(coefficients, config, DebugConfig(enabled=False))

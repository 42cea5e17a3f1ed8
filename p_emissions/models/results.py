"""Result models for the phosphorus emission calculation.

Each pathway calculator returns an immutable result model. The mutable
``Result`` aggregate carries the inputs of one analytical unit and period and
is extended in place with the pathway results by the calculator.

Loads are in t/a and concentrations in mg/l unless stated otherwise. A
concentration of ``None`` means "not applicable" (the class has no area or
no discharge), never zero.
"""

from pydantic import BaseModel, ConfigDict, Field

from p_emissions.models.domain import AnalyticalUnit, HydrologyState, PeriodicalData
from p_emissions.models.enums import Pathway, SourceCategory


class UrbanSystemsResult(BaseModel):
    """Emissions via urban systems.

    Attributes:
        per_inhabitant_load: Detergent-adjusted TP per inhabitant (g/(inhabitant*d))
        pfree_ratio: Detergent-adjusted to baseline load ratio, normalised by
            the detergent reference share
        ss_concentration: Mean TP concentration in separate rain water sewers
        cso_concentration: Mean TP concentration of combined sewer overflows
        ss_discharge: TP via separate sewers (US_SS_TP)
        cs_discharge: TP via combined sewer overflows (US_CS_TP)
        inhabitants_discharge: TP from inhabitants only connected to sewers (US_INH_TP)
        paved_area_discharge: TP from paved areas only connected to sewers (US_IUA_TP)
        only_sewers: TP from sewers without WWTP (US_onlySS_TP)
        no_sewer_system: TP from unconnected urban areas, routed via groundwater (US_noSS_TP)
        septic_tanks: TP from inhabitants with septic tanks (US_TP_Inh_septic_tank)
        virtual_wwtp: TP from virtual WWTPs (US_vZKA_TP)
        total: Total TP via urban systems (Emission_TP_US)
        population_driven: Share of the total driven by population
        precipitation_driven: Share of the total driven by precipitation
    """

    model_config = ConfigDict(frozen=True)

    per_inhabitant_load: float
    pfree_ratio: float
    ss_concentration_paved: float = 0.0
    ss_concentration_commercial: float = 0.0
    ss_concentration: float = 0.0
    cso_inhabitants_load: float = Field(default=0.0, description="kg/a")
    cso_commercial_load: float = Field(default=0.0, description="kg/a")
    cso_paved_load: float = Field(default=0.0, description="kg/a")
    cso_concentration: float = 0.0
    effective_cso_storage: float = Field(default=0.0, description="m³/ha")
    ss_discharge: float = 0.0
    cs_discharge: float = 0.0
    inhabitants_discharge: float = 0.0
    paved_area_discharge: float = 0.0
    only_sewers: float = 0.0
    no_sewer_system: float = 0.0
    septic_tanks: float = 0.0
    din1_sewer: float = 0.0
    din1_groundwater: float = 0.0
    din1_direct: float = 0.0
    din2_sewer: float = 0.0
    din2_groundwater: float = 0.0
    din2_direct: float = 0.0
    virtual_wwtp: float = 0.0
    p_emission_no_wwtp: float = 0.0
    total: float = 0.0
    population_driven: float = 0.0
    precipitation_driven: float = 0.0

    @property
    def groundwater_routed(self) -> float:
        """TP from urban systems that discharges via soil and groundwater."""
        return self.din1_groundwater + self.din2_groundwater + self.no_sewer_system


class AtmosphericDepositionResult(BaseModel):
    """Direct atmospheric deposition onto water surfaces."""

    model_config = ConfigDict(frozen=True)

    total: float


class SurfaceRunoffResult(BaseModel):
    """Emissions via surface runoff per land class."""

    model_config = ConfigDict(frozen=True)

    saturation_factor_arable: float
    saturation_factor_grassland: float
    concentration_arable: float
    concentration_grassland: float
    concentration_natural_covered: float | None = None
    concentration_open_area: float | None = None
    concentration_open_pit_mine: float | None = None
    concentration_wetland: float | None = None
    arable_land: float = 0.0
    grassland: float = 0.0
    natural_covered: float = 0.0
    snow: float = 0.0
    open_area: float = 0.0
    open_pit_mine: float = 0.0
    wetland: float = 0.0
    total: float = 0.0
    natural_areas_with_vegetation: float = 0.0


class TileDrainageResult(BaseModel):
    """Emissions via tile drainage."""

    model_config = ConfigDict(frozen=True)

    concentration: float | None = None
    pond_transmission_arable: float = 1.0
    arable_land: float = 0.0
    grassland: float = 0.0
    total: float = 0.0


class GroundwaterResult(BaseModel):
    """Emissions via groundwater.

    Raw concentrations are area-weighted blends; the ``corrected_*`` values
    carry the redox correction.
    """

    model_config = ConfigDict(frozen=True)

    concentration: float = 0.0
    concentration_arable_grassland: float = 0.0
    concentration_wetland: float = 0.0
    concentration_natural_covered: float = 0.0
    redox_factor: float = 1.0
    corrected_concentration: float = 0.0
    corrected_arable_grassland: float = 0.0
    corrected_wetland: float = 0.0
    corrected_natural_covered: float = 0.0
    root_zone_load: float = 0.0
    root_zone_discharge: float = Field(default=0.0, description="m³/s")
    arable_land: float = 0.0
    grassland: float = 0.0
    natural_covered: float = 0.0
    wetland: float = 0.0
    urban: float = 0.0
    open_area: float = 0.0
    open_pit_mine: float = 0.0
    snow: float = 0.0
    total: float = 0.0
    concentration_all_areas: float | None = None


class BackgroundResult(BaseModel):
    """Natural background emissions per pathway."""

    model_config = ConfigDict(frozen=True)

    atmospheric_deposition: float = 0.0
    groundwater: float = 0.0
    surface_runoff: float = 0.0
    erosion: float = 0.0
    snow_surface_runoff: float = 0.0
    total: float = 0.0


class ErosionResult(BaseModel):
    """Emissions via erosion per land class."""

    model_config = ConfigDict(frozen=True)

    topsoil_phosphorus_content: float = Field(description="mg/kg")
    arable_land: float = 0.0
    grassland: float = 0.0
    natural_covered: float = 0.0
    snow: float = 0.0
    total: float = 0.0


class PointSourceResult(BaseModel):
    """Point-source emissions.

    Attributes:
        wwtp: Registry WWTP emissions weighted by historical performance
        industry_and_remaining: Direct industrial and remaining WWTP emissions
            after scenario removal
        only_sewers: Sewer-only emissions added to point sources after treatment
        virtual_wwtp: Virtual WWTP emissions
        p_emission: Total point-source emission (Emission_TP_PointSources)
        p_emission_no_wwtp: Emissions of sewers without treatment plant
        ps_in_main_river: Point sources discharging directly into the main river
            (PS_in_MR_TP)
    """

    model_config = ConfigDict(frozen=True)

    wwtp: float = 0.0
    industry_and_remaining: float = 0.0
    only_sewers: float = 0.0
    virtual_wwtp: float = 0.0
    p_emission: float = 0.0
    p_emission_no_wwtp: float = 0.0
    ps_in_main_river: float = 0.0


class TotalEmissions(BaseModel):
    """Grand total and per-land-class totals."""

    model_config = ConfigDict(frozen=True)

    arable_land: float = 0.0
    grassland: float = 0.0
    forest: float = 0.0
    wetland: float = 0.0
    urban: float = 0.0
    surface_water: float = 0.0
    open_pit_mine: float = 0.0
    open_area: float = 0.0
    total: float = 0.0
    p_loss_root_zone: float = 0.0
    discharge_wwtp: float = Field(default=0.0, description="m³/s")
    per_inhabitant: float | None = Field(
        default=None, description="g/(inhabitant*a), None without inhabitants"
    )


class SourceApportionment(BaseModel):
    """Total emission apportioned to source categories.

    The four categories are non-negative and sum to the grand total. The
    ``anthropogenic_*`` values are the pathway emissions in excess of their
    natural background.
    """

    model_config = ConfigDict(frozen=True)

    urban_settlements: float = Field(ge=0)
    agriculture: float = Field(ge=0)
    background: float = Field(ge=0)
    other: float = Field(ge=0)
    anthropogenic_atmospheric_deposition: float = 0.0
    anthropogenic_erosion: float = 0.0
    anthropogenic_surface_runoff: float = 0.0
    anthropogenic_groundwater: float = 0.0

    def by_category(self) -> dict[SourceCategory, float]:
        """Return the four apportioned figures keyed by source category."""
        return {
            SourceCategory.URBAN_SETTLEMENTS: self.urban_settlements,
            SourceCategory.AGRICULTURE: self.agriculture,
            SourceCategory.BACKGROUND: self.background,
            SourceCategory.OTHER: self.other,
        }


class Result(BaseModel):
    """Result aggregate of one analytical unit and period.

    ``unit``, ``period`` and ``hydrology`` are populated by upstream stages.
    The pathway fields stay ``None`` until the calculator has run; a unit
    without area keeps all of them ``None``.
    """

    unit: AnalyticalUnit
    period: PeriodicalData
    hydrology: HydrologyState = Field(default_factory=HydrologyState)

    urban_systems: UrbanSystemsResult | None = None
    atmospheric_deposition: AtmosphericDepositionResult | None = None
    surface_runoff: SurfaceRunoffResult | None = None
    tile_drainage: TileDrainageResult | None = None
    groundwater: GroundwaterResult | None = None
    background: BackgroundResult | None = None
    erosion: ErosionResult | None = None
    point_sources: PointSourceResult | None = None
    totals: TotalEmissions | None = None
    apportionment: SourceApportionment | None = None

    def is_calculated(self) -> bool:
        """Check if the phosphorus emissions have been calculated."""
        return self.totals is not None and self.apportionment is not None

    def pathway_totals(self) -> dict[Pathway, float]:
        """Return the total TP load of each pathway (t/a).

        Raises:
            ValueError: If the result has not been calculated
        """
        if not self.is_calculated():
            msg = f"Result for unit {self.unit.id} has not been calculated"
            raise ValueError(msg)
        return {
            Pathway.URBAN_SYSTEMS: self.urban_systems.total,
            Pathway.ATMOSPHERIC_DEPOSITION: self.atmospheric_deposition.total,
            Pathway.SURFACE_RUNOFF: self.surface_runoff.total,
            Pathway.TILE_DRAINAGE: self.tile_drainage.total,
            Pathway.GROUNDWATER: self.groundwater.total,
            Pathway.EROSION: self.erosion.total,
            Pathway.POINT_SOURCES: self.point_sources.p_emission,
        }

    def to_record(self) -> dict[str, float | int | None]:
        """Flatten the result into a report row keyed by report codes.

        Returns:
            Dictionary with unit/year identity and, once calculated, the
            pathway, class and source figures

        Raises:
            ValueError: If the result has not been calculated
        """
        if not self.is_calculated():
            msg = f"Result for unit {self.unit.id} has not been calculated"
            raise ValueError(msg)

        us = self.urban_systems
        sr = self.surface_runoff
        td = self.tile_drainage
        gw = self.groundwater
        bg = self.background
        er = self.erosion
        ps = self.point_sources
        tot = self.totals
        src = self.apportionment

        return {
            "AU_ID": self.unit.id,
            "Year": self.period.year,
            # Urban systems
            "US_SS_TP": us.ss_discharge,
            "US_CS_TP": us.cs_discharge,
            "US_CSO_TPC": us.cso_concentration,
            "US_onlySS_TP": us.only_sewers,
            "US_noSS_TP": us.no_sewer_system,
            "US_TP_Inh_septic_tank": us.septic_tanks,
            "US_DCTP_TP_DIN1_direct": us.din1_direct,
            "US_DCTP_TP_DIN1_groundwater": us.din1_groundwater,
            "US_DCTP_TP_DIN2_direct": us.din2_direct,
            "US_DCTP_TP_DIN2_groundwater": us.din2_groundwater,
            "US_vZKA_TP": us.virtual_wwtp,
            "Emission_TP_US": us.total,
            # Atmospheric deposition
            "Emission_TP_AD": self.atmospheric_deposition.total,
            # Surface runoff
            "P_SR_AL": sr.arable_land,
            "P_SR_GL": sr.grassland,
            "P_SR_NatCov": sr.natural_covered,
            "P_SR_Snow": sr.snow,
            "P_SR_OA": sr.open_area,
            "P_SR_nsv": sr.natural_areas_with_vegetation,
            "Emission_TP_SR": sr.total,
            # Tile drainage
            "TD_TPC": td.concentration,
            "TD_TP_AL": td.arable_land,
            "TD_TP_GL": td.grassland,
            "Emission_TP_TD": td.total,
            # Groundwater
            "GW_RZ_TP": gw.root_zone_load,
            "GW_RZ_Q": gw.root_zone_discharge,
            "GW_TP_AL": gw.arable_land,
            "GW_TP_GL": gw.grassland,
            "GW_TP_NatCov": gw.natural_covered,
            "GW_TP_Wetland": gw.wetland,
            "GW_TP_Urban": gw.urban,
            "GW_TP_OpenArea": gw.open_area,
            "GW_TP_OpenPitMine": gw.open_pit_mine,
            "GW_TP_Snow": gw.snow,
            "GW_TPC_allAreas": gw.concentration_all_areas,
            "Emission_TP_GW": gw.total,
            # Background
            "BG_AD_TP": bg.atmospheric_deposition,
            "BG_GW_TP": bg.groundwater,
            "BG_SR_TP": bg.surface_runoff,
            "BG_ER_TP": bg.erosion,
            # Erosion
            "ER_TS_TPcont": er.topsoil_phosphorus_content,
            "ER_TP_AL": er.arable_land,
            "ER_TP_GL": er.grassland,
            "ER_TP_NatCov": er.natural_covered,
            "ER_TP_Snow": er.snow,
            "Emission_TP_ER": er.total,
            # Point sources
            "Emission_TP_PointSources": ps.p_emission,
            "PEmissionNoWWTP": ps.p_emission_no_wwtp,
            "PS_in_MR_TP": ps.ps_in_main_river,
            # Totals
            "TP_tot_AL": tot.arable_land,
            "TP_tot_GL": tot.grassland,
            "TP_tot_Forest": tot.forest,
            "TP_tot_Wetland": tot.wetland,
            "TP_tot_Urban": tot.urban,
            "TP_tot_SurfaceWater": tot.surface_water,
            "TP_tot_OpenPitMine": tot.open_pit_mine,
            "TP_tot_OpenArea": tot.open_area,
            "PLossRootZone": tot.p_loss_root_zone,
            "DischargeWWTP": tot.discharge_wwtp,
            "TP_per_Inhabitant": tot.per_inhabitant,
            "Emission_TP_Total": tot.total,
            # Sources
            "Emission_TP_BG": src.background,
            "P_SourceUrbanSettlements": src.urban_settlements,
            "P_SourceAgriculture": src.agriculture,
            "P_SourceOther": src.other,
        }

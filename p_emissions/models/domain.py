"""Input domain models for the phosphorus emission calculation.

These models describe an analytical unit (sub-catchment) and the period it is
calculated for. Apart from the point-source accumulator they are immutable
value objects for the duration of one calculation.

Areas are in km², discharges in m³/s, loads in t/a unless stated otherwise.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Soil(BaseModel):
    """Soil composition of an analytical unit.

    Attributes:
        sandy: Area of sandy soils (km²)
        clayey: Area of clayey soils (km²)
        loamy: Area of loamy soils (km²)
        silty: Area of silty soils (km²)
        fen: Area of fen soils (km²)
        bog: Area of bog soils (km²)
        phosphorus_accumulation: Spatially detailed P accumulation of
            agricultural soils in the reference year (kg/ha)
        phosphorus_content: Top soil P content in the reference year (mg/kg)
        reference_phosphorus_accumulation: Country P accumulation of the year
            the soil P content refers to (kg/ha)
    """

    model_config = ConfigDict(frozen=True)

    sandy: float = Field(default=0.0, ge=0, description="Sandy soils (km²)")
    clayey: float = Field(default=0.0, ge=0, description="Clayey soils (km²)")
    loamy: float = Field(default=0.0, ge=0, description="Loamy soils (km²)")
    silty: float = Field(default=0.0, ge=0, description="Silty soils (km²)")
    fen: float = Field(default=0.0, ge=0, description="Fen soils (km²)")
    bog: float = Field(default=0.0, ge=0, description="Bog soils (km²)")
    phosphorus_accumulation: float = Field(
        default=0.0, ge=0, description="P accumulation of agricultural soils (kg/ha)"
    )
    phosphorus_content: float = Field(
        default=0.0, ge=0, description="Top soil P content (mg/kg)"
    )
    reference_phosphorus_accumulation: float = Field(
        default=0.0, ge=0, description="Country P accumulation matching phosphorus_content (kg/ha)"
    )

    @property
    def mineral_area(self) -> float:
        """Area of sandy, clayey, loamy and silty soils (km²)."""
        return self.sandy + self.clayey + self.loamy + self.silty

    @property
    def total_area(self) -> float:
        """Area of all soil classes (km²)."""
        return self.mineral_area + self.fen + self.bog

    def correct_phosphorus_content(self, phosphorus_accumulation: float) -> float:
        """Scale the top soil P content to a country P accumulation.

        The content scales linearly with the ratio of the given accumulation to
        the accumulation the content was mapped for. Without a reference
        accumulation the mapped content is returned unchanged.

        Args:
            phosphorus_accumulation: Country P accumulation of the calculation year (kg/ha)

        Returns:
            Corrected top soil P content (mg/kg)
        """
        if self.reference_phosphorus_accumulation == 0:
            return self.phosphorus_content
        return (
            self.phosphorus_content
            * phosphorus_accumulation
            / self.reference_phosphorus_accumulation
        )


class Landuse(BaseModel):
    """Land cover composition of an analytical unit (km²)."""

    model_config = ConfigDict(frozen=True)

    arable: float = Field(default=0.0, ge=0, description="Arable land (km²)")
    grassland: float = Field(default=0.0, ge=0, description="Grassland (km²)")
    natural_covered: float = Field(
        default=0.0, ge=0, description="Areas covered by natural vegetation, e.g. forest (km²)"
    )
    open_area: float = Field(default=0.0, ge=0, description="Open areas without vegetation (km²)")
    open_pit_mine: float = Field(default=0.0, ge=0, description="Open-pit mines (km²)")
    wetland: float = Field(default=0.0, ge=0, description="Wetlands (km²)")
    urban: float = Field(default=0.0, ge=0, description="Urban areas (km²)")
    paved: float = Field(default=0.0, ge=0, description="Paved urban areas (km²)")
    snow: float = Field(default=0.0, ge=0, description="Snow and ice covered areas (km²)")
    fen_degraded: float = Field(default=0.0, ge=0, description="Degraded fens (km²)")
    fen_natural: float = Field(default=0.0, ge=0, description="Natural fens (km²)")
    bog_degraded: float = Field(default=0.0, ge=0, description="Degraded bogs (km²)")
    bog_natural: float = Field(default=0.0, ge=0, description="Natural bogs (km²)")
    erosion_potential_area: float = Field(
        default=0.0, ge=0, description="Area contributing to erosion (km²)"
    )

    @property
    def agricultural(self) -> float:
        """Arable land plus grassland (km²)."""
        return self.arable + self.grassland


class Hydrogeology(BaseModel):
    """Hydrogeological composition of an analytical unit.

    Absolute areas (km²) and area shares (-) are carried separately because
    they come from different reference layers.
    """

    model_config = ConfigDict(frozen=True)

    consolidated_rock_porous: float = Field(default=0.0, ge=0)
    consolidated_rock_impermeable: float = Field(default=0.0, ge=0)
    unconsolidated_rock_shallow: float = Field(default=0.0, ge=0)
    unconsolidated_rock_deep: float = Field(default=0.0, ge=0)
    consolidated_rock_porous_share: float = Field(default=0.0, ge=0)
    consolidated_rock_impermeable_share: float = Field(default=0.0, ge=0)
    unconsolidated_rock_shallow_share: float = Field(default=0.0, ge=0)
    unconsolidated_rock_deep_share: float = Field(default=0.0, ge=0)

    @property
    def rock_area(self) -> float:
        """Sum of all rock-type areas (km²)."""
        return (
            self.consolidated_rock_porous
            + self.consolidated_rock_impermeable
            + self.unconsolidated_rock_shallow
            + self.unconsolidated_rock_deep
        )

    @property
    def rock_share(self) -> float:
        """Sum of all rock-type shares (-)."""
        return (
            self.consolidated_rock_porous_share
            + self.consolidated_rock_impermeable_share
            + self.unconsolidated_rock_shallow_share
            + self.unconsolidated_rock_deep_share
        )


class PointSources(BaseModel):
    """Point-source accumulator of an analytical unit.

    ``p_emission_wwtp`` and ``discharge_wwtp`` are supplied by the caller;
    ``p_emission`` and ``p_emission_no_wwtp`` are written by the calculator
    and read by downstream aggregation.
    """

    p_emission_wwtp: float = Field(default=0.0, ge=0, description="TP from WWTPs (t/a)")
    discharge_wwtp: float = Field(default=0.0, ge=0, description="Discharge of WWTPs (m³/s)")
    p_emission: float = Field(default=0.0, description="Total point-source TP (t/a)")
    p_emission_no_wwtp: float = Field(
        default=0.0, description="TP from sewers not connected to a WWTP (t/a)"
    )


class Option(BaseModel):
    """Scenario switches for an analytical unit.

    Attributes:
        pfree_laundry_detergents: Laundry detergents are phosphate-free
        pfree_dishwasher_detergents: Dishwasher detergents are phosphate-free
        all_connected: All inhabitants are connected to a WWTP
        din2_with_additional_p_removal: DIN2 small plants precipitate phosphorus
        virtual_wwtp_with_additional_p_removal: Virtual WWTPs remove phosphorus
        portion_connected_inhabitants: Share of inhabitants already connected (%)
        cso_storage_increase: Scenario combined-sewer storage volume (m³/ha),
            0 keeps the period's storage
        reduction_p: Removal applied to industry and remaining WWTP loads (%)
    """

    model_config = ConfigDict(frozen=True)

    pfree_laundry_detergents: bool = False
    pfree_dishwasher_detergents: bool = False
    all_connected: bool = False
    din2_with_additional_p_removal: bool = False
    virtual_wwtp_with_additional_p_removal: bool = False
    portion_connected_inhabitants: float = Field(default=0.0, ge=0, le=100)
    cso_storage_increase: float = Field(default=0.0, ge=0)
    reduction_p: float = Field(default=0.0, ge=0, le=100)


class AnalyticalUnit(BaseModel):
    """Analytical unit (sub-catchment) the emission budget is calculated for."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Analytical unit ID")
    country_id: int = Field(description="Country or state the unit is located in")
    area: float = Field(ge=0, description="Total area (km²)")
    emission_ps_direct_in_main_river: bool = Field(
        default=False, description="Treatment plants discharge directly into the main river"
    )
    soil: Soil = Field(default_factory=Soil)
    landuse: Landuse = Field(default_factory=Landuse)
    hydrogeology: Hydrogeology = Field(default_factory=Hydrogeology)
    point_sources: PointSources = Field(default_factory=PointSources)
    option: Option = Field(default_factory=Option)


class PeriodicalData(BaseModel):
    """Time-dependent data of an analytical unit for one period."""

    model_config = ConfigDict(frozen=True)

    year: int = Field(description="Calculation year or long-term pseudo-year")
    precipitation_annual: float = Field(default=0.0, ge=0, description="Precipitation (mm/a)")
    inhabitants: float = Field(default=0.0, ge=0, description="Inhabitants")
    cso_storage: float = Field(default=0.0, ge=0, description="Combined-sewer storage (m³/ha)")
    atmospheric_deposition_tp: float = Field(
        default=0.0, ge=0, description="Atmospheric TP deposition (kg/(km²*a))"
    )
    wwtp_p_history: float = Field(
        default=1.0, ge=0, description="Performance factor applied to WWTP emissions (-)"
    )
    industry_direct_p: float = Field(
        default=0.0, ge=0, description="TP from direct industrial dischargers (kg/a)"
    )
    wwtp_p_remain: float = Field(
        default=0.0, ge=0, description="TP from WWTPs not in the point-source registry (kg/a)"
    )


class CountryCoefficients(BaseModel):
    """Per-country empirical coefficients for one year."""

    model_config = ConfigDict(frozen=True)

    country_id: int
    year: int
    name: str = ""
    phosphorus_per_inhabitant: float = Field(
        ge=0, description="TP emitted per inhabitant (g/(inhabitant*d))"
    )
    phosphorus_laundry_detergent: float = Field(
        default=0.0, ge=0, description="TP from laundry detergents (g/(inhabitant*d))"
    )
    phosphorus_dishwasher_detergent: float = Field(
        default=0.0, ge=0, description="TP from dishwasher detergents (g/(inhabitant*d))"
    )
    phosphorus_accumulation: float = Field(
        default=0.0, ge=0, description="P accumulation of agricultural soils (kg/ha)"
    )

    @model_validator(mode="after")
    def detergents_within_per_inhabitant_load(self) -> "CountryCoefficients":
        detergents = self.phosphorus_laundry_detergent + self.phosphorus_dishwasher_detergent
        if detergents > self.phosphorus_per_inhabitant:
            msg = (
                f"Detergent TP ({detergents} g/(inhabitant*d)) exceeds the per-inhabitant load "
                f"({self.phosphorus_per_inhabitant}) for country {self.country_id} in {self.year}"
            )
            raise ValueError(msg)
        return self


class Basics(BaseModel):
    """Per-unit hydraulic and urban coefficients derived by upstream stages.

    Read-only configuration for the duration of a calculation.
    """

    model_config = ConfigDict(frozen=True)

    # Separate sewers
    urban_area_connected_ss: float = Field(default=0.0, ge=0, description="km²")
    urban_area_only_connected_ss: float = Field(default=0.0, ge=0, description="km²")
    water_amount_ss: float = Field(default=0.0, ge=0, description="m³/a")
    water_amount_ss_urban_areas: float = Field(default=0.0, ge=0, description="m³/a")
    water_amount_ss_commercial_areas: float = Field(default=0.0, ge=0, description="m³/a")
    storage_rss: float = Field(default=0.0, ge=0, le=100, description="Storage basins (%)")
    retention_rbf: float = Field(default=0.0, ge=0, le=100, description="Soil filters (%)")

    # Combined sewers
    urban_area_connected_css: float = Field(default=0.0, ge=0, description="km²")
    commercial_area_connected_css: float = Field(default=0.0, ge=0, description="km²")
    paved_area_q_ratio: float = Field(default=0.0, ge=0, description="Runoff ratio (-)")
    storm_water_events_effective_days: float = Field(default=0.0, ge=0, description="d/a")
    cso_discharge_during_overflow: float = Field(default=0.0, ge=0, description="m³/a")

    # Inhabitants by connection type
    inhabitants_connected_to_sewer_and_wwtp: float = Field(default=0.0, ge=0)
    inhabitants_connected_corrected: float = Field(default=0.0, ge=0)
    inhabitants_connected_only_to_sewers: float = Field(default=0.0, ge=0)
    inhabitants_connected_to_septic_tanks: float = Field(default=0.0, ge=0)
    inhabitants_dctp_sewer_din1: float = Field(default=0.0, ge=0)
    inhabitants_dctp_groundwater_din1: float = Field(default=0.0, ge=0)
    inhabitants_dctp_direct_din1: float = Field(default=0.0, ge=0)
    inhabitants_dctp_sewer_din2: float = Field(default=0.0, ge=0)
    inhabitants_dctp_groundwater_din2: float = Field(default=0.0, ge=0)
    inhabitants_dctp_direct_din2: float = Field(default=0.0, ge=0)
    inhabitants_virtual_wwtp: float = Field(default=0.0, ge=0)
    urban_area_not_connected: float = Field(default=0.0, ge=0, description="km²")

    # Surface runoff by land class (m³/s)
    q_arable_land: float = Field(default=0.0, ge=0)
    q_grassland: float = Field(default=0.0, ge=0)
    q_natural_covered: float = Field(default=0.0, ge=0)
    q_open_area: float = Field(default=0.0, ge=0)
    q_open_pit_mine: float = Field(default=0.0, ge=0)
    q_wetland: float = Field(default=0.0, ge=0)

    # Tile drainage and groundwater
    pond_hydraulic_load_arable_land: float = Field(default=0.0, ge=0, description="m/a")
    gw_recharge_a2: float = Field(default=0.0, ge=0, description="Baseline recharge (mm/a)")
    leakage_water_rate: float = Field(default=0.0, ge=0, description="mm/a")
    gw_recharge_area: float = Field(default=0.0, ge=0, description="km²")

    # Erosion
    enrichment_ratio: float = Field(default=0.0, ge=0)
    sediment_delivery_ratio: float = Field(default=0.0, ge=0, description="%")
    background_sediment_delivery_ratio: float = Field(default=0.0, ge=0, description="%")
    sediment_input_arable_land: float = Field(default=0.0, ge=0, description="t/a")
    sediment_input_grassland: float = Field(default=0.0, ge=0, description="t/a")
    soil_loss_natural_covered: float = Field(default=0.0, ge=0, description="t/a")
    soil_loss_snow: float = Field(default=0.0, ge=0, description="t/a")
    soil_loss_natural: float = Field(default=0.0, ge=0, description="t/a")
    soil_loss_background: float = Field(default=0.0, ge=0, description="t/(ha*a)")
    precipitation_correction: float = Field(default=1.0, ge=0, description="-")


class HydrologyState(BaseModel):
    """Hydrological results written onto the result by upstream stages."""

    model_config = ConfigDict(frozen=True)

    paved_area_total: float = Field(default=0.0, ge=0, description="km²")
    paved_area_total_long_term: float = Field(default=0.0, ge=0, description="km²")
    water_surface_area_total: float = Field(default=0.0, ge=0, description="km²")
    cso_current_discharge: float = Field(default=0.0, ge=0, description="m³/a")
    q_snow: float = Field(default=0.0, ge=0, description="m³/s")
    q_natural_areas_with_vegetation: float = Field(default=0.0, ge=0, description="m³/s")
    td_q_arable_land: float = Field(default=0.0, ge=0, description="m³/s")
    td_q_grassland: float = Field(default=0.0, ge=0, description="m³/s")
    gw_q: float = Field(default=0.0, ge=0, description="Groundwater discharge (m³/s)")
    gw_qcorr: float = Field(default=0.0, ge=0, description="Corrected recharge (mm/a)")
    gw_recharge_a1: float = Field(default=0.0, ge=0, description="Primary recharge (mm/a)")
    drained_area: float = Field(default=0.0, ge=0, description="km²")
    arable_land: float = Field(default=0.0, ge=0, description="km²")
    grassland: float = Field(default=0.0, ge=0, description="km²")
    tile_drained_arable_land: float = Field(default=0.0, ge=0, description="km²")
    tile_drained_grassland: float = Field(default=0.0, ge=0, description="km²")

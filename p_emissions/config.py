"""Configuration and constants for the phosphorus emission calculator.

This module defines the unit conversions, the empirical coefficient catalogue
and the runtime settings used by the pathway calculators.

Includes configuration for:
- Empirical coefficient catalogue (PhosphorusCoefficients, mnemonic aliases)
- Calculation rules (CalculationConfig with PEM_ prefix)
- Batch execution (BatchConfig with BATCH_ prefix)
- Debug snapshots (DebugConfig)

Configuration can be overridden via:
1. Environment variables (e.g., PEM_MAX_PHOSPHORUS_SATURATION_PERCENT=95, BATCH_PARALLEL=false)
2. .env file in the current directory
3. Default values in code
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class PhysicalConstants:
    """Unit conversion factors used in emission calculations.

    These are NOT configurable - they are fixed conversion factors that
    should never vary between runs.

    All attributes are immutable (frozen=True prevents modification).
    """

    DAYS_PER_YEAR: float = 365.0
    SECONDS_PER_DAY: float = 86_400.0
    HECTARES_PER_SQUARE_KILOMETRE: float = 100.0
    LITRES_PER_CUBIC_METRE: float = 1_000.0
    MILLIGRAMS_PER_KILOGRAM: float = 1_000_000.0
    GRAMS_PER_TONNE: float = 1_000_000.0
    KILOGRAMS_PER_TONNE: float = 1_000.0

    # m³/s * mg/l -> t/a (1 g/s = 86.4 kg/d = 31.536 t/a)
    DISCHARGE_TO_ANNUAL_LOAD: float = 86.4 * 0.365


# Module-level singleton for physical constants
CONSTANTS = PhysicalConstants()


class PhosphorusCoefficients(BaseModel):
    """Versioned catalogue of empirical phosphorus coefficients.

    Each field is addressable by its descriptive name and by the mnemonic code
    it carries in the coefficient tables (e.g. ``paved_area_specific_load`` is
    ``CUS10``). The catalogue is read-only for the duration of a calculation.

    Units are given per field. Percentages are 0-100.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    version: str = Field(default="default", description="Catalogue version label")

    # Urban systems
    commercial_runoff_concentration: float = Field(
        default=0.6, alias="CUS9", description="TP concentration of commercial area runoff (mg/l)"
    )
    paved_area_specific_load: float = Field(
        default=2.5, alias="CUS10", description="TP load from paved urban areas (kg/(ha*a))"
    )
    commercial_area_specific_runoff: float = Field(
        default=0.5,
        alias="CUS15",
        description="Dry weather runoff of commercial areas (l/(ha*s))",
    )
    inhabitant_removal_offset: float = Field(
        default=0.2,
        alias="CUS19",
        description="Per-inhabitant TP removed before discharge (g/(inhabitant*d))",
    )
    storage_basin_efficiency: float = Field(
        default=0.45, alias="CUS33", description="TP retention efficiency of storage basins (-)"
    )
    retention_soil_filter_efficiency: float = Field(
        default=0.85,
        alias="CUS35",
        description="TP retention efficiency of retention soil filters (-)",
    )
    septic_tank_removal_percent: float = Field(
        default=60.0, alias="CUS36", description="TP removal in septic tanks (%)"
    )
    din1_removal_percent: float = Field(
        default=25.0, alias="CUS37", description="TP removal in DIN1 small treatment plants (%)"
    )
    din2_removal_percent: float = Field(
        default=50.0, alias="CUS38", description="TP removal in DIN2 small treatment plants (%)"
    )
    din2_p_removal_percent: float = Field(
        default=90.0,
        alias="CUS39",
        description="TP removal in DIN2 plants with additional P precipitation (%)",
    )
    virtual_wwtp_removal_percent: float = Field(
        default=50.0, alias="CUS40", description="TP removal in virtual WWTPs (%)"
    )
    virtual_wwtp_p_removal_percent: float = Field(
        default=85.0,
        alias="CUS41",
        description="TP removal in virtual WWTPs with additional P removal (%)",
    )

    # Surface runoff
    natural_covered_runoff_concentration: float = Field(
        default=0.1, alias="CSR1", description="TP concentration, natural covered areas (mg/l)"
    )
    open_area_runoff_concentration: float = Field(
        default=0.06,
        alias="CSR2",
        description="TP concentration, open areas, open-pit mines and wetlands (mg/l)",
    )
    arable_reference_saturation: float = Field(
        default=90.0, gt=0, alias="CSR6", description="Reference P saturation of arable land (%)"
    )
    grassland_reference_saturation: float = Field(
        default=80.0, gt=0, alias="CSR7", description="Reference P saturation of grassland (%)"
    )
    reference_phosphorus_accumulation: float = Field(
        default=1100.0,
        gt=0,
        alias="CSR8",
        description="P accumulation matching the reference saturation (kg/ha)",
    )
    runoff_concentration_base: float = Field(
        default=0.0, alias="CSR9", description="Base term of the saturation response (mg/l)"
    )
    runoff_concentration_scale: float = Field(
        default=0.0055, alias="CSR10", description="Scale term of the saturation response (mg/l)"
    )
    runoff_saturation_divisor: float = Field(
        default=13.6, gt=0, alias="CSR11", description="Saturation divisor of the exponential (%)"
    )
    snow_runoff_concentration: float = Field(
        default=0.03, alias="CSR12", description="TP concentration, snow covered areas (mg/l)"
    )

    # Tile drainage
    drainage_concentration_sandy: float = Field(
        default=0.2, alias="CTD3", description="TP concentration in drainage, sandy soils (mg/l)"
    )
    drainage_concentration_loamy: float = Field(
        default=0.06,
        alias="CTD4",
        description="TP concentration in drainage, clayey/loamy/silty soils (mg/l)",
    )
    drainage_concentration_fen: float = Field(
        default=0.6, alias="CTD5", description="TP concentration in drainage, degraded fens (mg/l)"
    )
    drainage_concentration_bog: float = Field(
        default=0.8, alias="CTD6", description="TP concentration in drainage, degraded bogs (mg/l)"
    )
    pond_retention_scale: float = Field(
        default=13.3, alias="CR3", description="Retention pond scale factor (-)"
    )
    pond_retention_exponent: float = Field(
        default=-0.93, alias="CR4", description="Retention pond hydraulic load exponent (-)"
    )

    # Groundwater
    redox_factor_oxic: float = Field(
        default=1.0, alias="CGW1", description="Redox correction above retention threshold (-)"
    )
    redox_factor_reduced: float = Field(
        default=2.0, alias="CGW2", description="Redox correction below retention threshold (-)"
    )
    groundwater_natural_concentration: float = Field(
        default=0.02, alias="CGW3", description="TP concentration, natural groundwater (mg/l)"
    )
    groundwater_concentration_sandy: float = Field(
        default=0.1, alias="CGW4", description="TP concentration below sandy soils (mg/l)"
    )
    groundwater_concentration_loamy: float = Field(
        default=0.03,
        alias="CGW5",
        description="TP concentration below clayey/loamy/silty soils (mg/l)",
    )
    groundwater_concentration_fen_degraded: float = Field(
        default=0.5, alias="CGW6", description="TP concentration below degraded fens (mg/l)"
    )
    groundwater_concentration_bog_degraded: float = Field(
        default=0.8, alias="CGW7", description="TP concentration below degraded bogs (mg/l)"
    )
    groundwater_concentration_fen_natural: float = Field(
        default=0.1, alias="CGW11", description="TP concentration below natural fens (mg/l)"
    )
    groundwater_concentration_bog_natural: float = Field(
        default=0.3, alias="CGW12", description="TP concentration below natural bogs (mg/l)"
    )
    redox_retention_threshold: float = Field(
        default=0.25,
        alias="CGW31",
        description="Groundwater retention factor separating redox regimes (-)",
    )

    # Background
    background_groundwater_concentration: float = Field(
        default=0.02,
        alias="CBG6",
        description="Background TP concentration in leakage water (mg/l)",
    )
    background_precipitation_concentration: float = Field(
        default=0.015,
        alias="CBG7",
        description="Background TP concentration in precipitation (mg/l)",
    )
    background_runoff_concentration: float = Field(
        default=0.05,
        alias="CBG8",
        description="Background TP concentration in surface runoff (mg/l)",
    )
    background_snow_soil_loss: float = Field(
        default=0.1,
        alias="CBG17",
        description="Background soil loss of snow covered areas (t/(ha*a))",
    )

    # Erosion
    natural_soil_phosphorus_content: float = Field(
        default=500.0, alias="CE13", description="TP content of natural top soils (mg/kg)"
    )
    background_cover_factor: float = Field(
        default=0.005,
        alias="CE15",
        description="Cover management factor under natural vegetation (-)",
    )

    @classmethod
    def from_mnemonics(
        cls, table: Mapping[str, float], version: str = "default"
    ) -> "PhosphorusCoefficients":
        """Build a catalogue from a ``{mnemonic code: value}`` table.

        Codes missing from the table keep their default value.

        Args:
            table: Coefficient values keyed by mnemonic code (e.g. "CUS10")
            version: Version label of the source table

        Returns:
            Immutable coefficient catalogue

        Raises:
            ValueError: If the table contains codes the catalogue does not know
        """
        known = cls.mnemonics()
        unknown = sorted(set(table) - set(known.values()))
        if unknown:
            msg = f"Unknown coefficient codes: {unknown}"
            raise ValueError(msg)
        return cls(version=version, **dict(table))

    @classmethod
    def mnemonics(cls) -> dict[str, str]:
        """Map descriptive field names to their mnemonic codes."""
        return {
            name: field.alias
            for name, field in cls.model_fields.items()
            if field.alias is not None
        }

    def to_mnemonics(self) -> dict[str, float]:
        """Export the catalogue as a ``{mnemonic code: value}`` table."""
        return {code: getattr(self, name) for name, code in self.mnemonics().items()}


DEFAULT_COEFFICIENTS = PhosphorusCoefficients()


class CalculationConfig(BaseSettings):
    """Rules of the phosphorus emission calculation.

    Can be overridden via environment variables with PEM_ prefix:
    - PEM_LONG_TERM_YEAR_THRESHOLD
    - PEM_MAX_PHOSPHORUS_SATURATION_PERCENT
    - PEM_DETERGENT_REFERENCE_SHARE
    - PEM_LOW_BACKGROUND_RETENTION_THRESHOLD
    - PEM_LOW_BACKGROUND_RETENTION_MULTIPLIER

    Attributes:
        long_term_year_threshold: Period years at or above this value denote
            long-term or hydrological-condition runs (wet/mean/dry) and use the
            countries' calculation year for coefficient lookup
        max_phosphorus_saturation_percent: Upper bound of the soil P saturation
            before the runoff concentration response is evaluated
        detergent_reference_share: Share of the per-inhabitant load that the
            detergent-free ratio is normalised against
        low_background_retention_threshold: Background retention factor at or
            below which background groundwater loads are scaled up
        low_background_retention_multiplier: Scaling applied below the threshold
    """

    model_config = SettingsConfigDict(
        env_prefix="PEM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    long_term_year_threshold: int = Field(
        default=9000, description="First pseudo-year denoting long-term/hydrological conditions"
    )
    max_phosphorus_saturation_percent: float = Field(
        default=97.0, gt=0, le=100, description="Maximum soil P saturation (%)"
    )
    detergent_reference_share: float = Field(
        default=0.850515, gt=0, description="Reference share for the detergent-free ratio (-)"
    )
    low_background_retention_threshold: float = Field(
        default=0.05, ge=0, description="Background retention factor treated as very low (-)"
    )
    low_background_retention_multiplier: float = Field(
        default=1.5, ge=1, description="Scaling of background groundwater load at low retention"
    )


DEFAULT_CONFIG = CalculationConfig()


class BatchConfig(BaseSettings):
    """Configuration for running many analytical units.

    Can be overridden via environment variables with BATCH_ prefix.

    Attributes:
        parallel: Run units in worker processes
        max_workers: Number of worker processes (None = 80% of CPUs)
        min_parallel_units: Batches smaller than this run sequentially
    """

    model_config = SettingsConfigDict(
        env_prefix="BATCH_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    parallel: bool = Field(default=True, description="Enable parallel execution")
    max_workers: int | None = Field(
        default=None, ge=1, description="Worker processes (None = auto-detect)"
    )
    min_parallel_units: int = Field(
        default=50, ge=1, description="Smallest batch worth running in parallel"
    )

    @property
    def resolved_max_workers(self) -> int:
        """Worker count, capped at 80% of available CPUs when not set."""
        if self.max_workers is not None:
            return self.max_workers
        return max(1, int((os.cpu_count() or 4) * 0.8))


class DebugConfig:
    """Debug output configuration.

    WARNING: For local development only.
    - Adds disk I/O overhead per analytical unit
    - Consumes storage space
    """

    def __init__(
        self,
        enabled: bool = False,
        output_dir: Path = Path("/tmp/pem-debug"),
    ):
        self.enabled = enabled
        self.output_dir = output_dir

    @classmethod
    def from_env(cls) -> "DebugConfig":
        return cls(
            enabled=os.environ.get("DEBUG_OUTPUT", "false").lower() == "true",
            output_dir=Path(os.environ.get("DEBUG_OUTPUT_DIR", "/tmp/pem-debug")),
        )

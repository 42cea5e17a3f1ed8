"""Domain and result models for the phosphorus emission calculation."""

from p_emissions.models.domain import (
    AnalyticalUnit,
    Basics,
    CountryCoefficients,
    HydrologyState,
    Hydrogeology,
    Landuse,
    Option,
    PeriodicalData,
    PointSources,
    Soil,
)
from p_emissions.models.enums import Pathway, SourceCategory
from p_emissions.models.results import (
    AtmosphericDepositionResult,
    BackgroundResult,
    ErosionResult,
    GroundwaterResult,
    PointSourceResult,
    Result,
    SourceApportionment,
    SurfaceRunoffResult,
    TileDrainageResult,
    TotalEmissions,
    UrbanSystemsResult,
)

__all__ = [
    "AnalyticalUnit",
    "Soil",
    "Landuse",
    "Hydrogeology",
    "PointSources",
    "Option",
    "PeriodicalData",
    "CountryCoefficients",
    "Basics",
    "HydrologyState",
    "Pathway",
    "SourceCategory",
    "UrbanSystemsResult",
    "AtmosphericDepositionResult",
    "SurfaceRunoffResult",
    "TileDrainageResult",
    "GroundwaterResult",
    "BackgroundResult",
    "ErosionResult",
    "PointSourceResult",
    "TotalEmissions",
    "SourceApportionment",
    "Result",
]

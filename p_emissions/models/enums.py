"""Enums for emission pathways and source categories."""

from enum import Enum


class Pathway(Enum):
    """Transport pathways through which phosphorus reaches surface waters.

    Values are the pathway abbreviations used in report codes (e.g. ``Emission_TP_GW``).
    """

    URBAN_SYSTEMS = "US"
    ATMOSPHERIC_DEPOSITION = "AD"
    SURFACE_RUNOFF = "SR"
    TILE_DRAINAGE = "TD"
    GROUNDWATER = "GW"
    EROSION = "ER"
    POINT_SOURCES = "PS"


class SourceCategory(Enum):
    """Source categories the total emission is apportioned to."""

    URBAN_SETTLEMENTS = "urban_settlements"
    AGRICULTURE = "agriculture"
    BACKGROUND = "background"
    OTHER = "other"

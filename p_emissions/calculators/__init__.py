"""Pathway calculators for the phosphorus emission budget.

This package contains one pure function per emission pathway plus the total
aggregation and source apportionment. All calculators are stateless and
testable without the surrounding model pipeline.
"""

from p_emissions.calculators.atmospheric import calculate_atmospheric_deposition
from p_emissions.calculators.background import calculate_background
from p_emissions.calculators.erosion import calculate_erosion
from p_emissions.calculators.groundwater import calculate_groundwater
from p_emissions.calculators.point_sources import calculate_point_sources
from p_emissions.calculators.surface_runoff import calculate_surface_runoff
from p_emissions.calculators.tile_drainage import calculate_tile_drainage
from p_emissions.calculators.totals import apportion_sources, calculate_totals
from p_emissions.calculators.urban_systems import calculate_urban_systems

__all__ = [
    "calculate_urban_systems",
    "calculate_atmospheric_deposition",
    "calculate_surface_runoff",
    "calculate_tile_drainage",
    "calculate_groundwater",
    "calculate_background",
    "calculate_erosion",
    "calculate_point_sources",
    "calculate_totals",
    "apportion_sources",
]

"""Cross-field validation of analytical unit inputs."""

import math
from typing import TYPE_CHECKING

from p_emissions.models.results import Result
from p_emissions.validation.errors import ValidationError

if TYPE_CHECKING:
    from p_emissions.engine import CalculationContext

# Relative tolerance for area sums compared against the unit area
AREA_TOLERANCE = 1e-6


class AreaConsistencyValidator:
    """Checks that soil and land-use areas fit into the analytical unit."""

    def validate(self, result: Result, context: "CalculationContext") -> list[ValidationError]:
        errors = []
        unit = result.unit
        landuse = unit.landuse
        limit = unit.area * (1 + AREA_TOLERANCE)

        landuse_area = (
            landuse.arable
            + landuse.grassland
            + landuse.natural_covered
            + landuse.open_area
            + landuse.open_pit_mine
            + landuse.wetland
            + landuse.urban
            + landuse.snow
        )
        if landuse_area > limit:
            errors.append(
                ValidationError(
                    message=(
                        f"Land-use areas ({landuse_area:.3f} km²) exceed unit area "
                        f"({unit.area:.3f} km²)"
                    ),
                    field="landuse",
                )
            )

        if unit.soil.total_area > limit:
            errors.append(
                ValidationError(
                    message=(
                        f"Soil areas ({unit.soil.total_area:.3f} km²) exceed unit area "
                        f"({unit.area:.3f} km²)"
                    ),
                    field="soil",
                )
            )

        if landuse.paved > landuse.urban * (1 + AREA_TOLERANCE):
            errors.append(
                ValidationError(
                    message="Paved area exceeds urban area", field="landuse.paved"
                )
            )

        hydrology = result.hydrology
        if hydrology.tile_drained_arable_land > hydrology.arable_land * (1 + AREA_TOLERANCE):
            errors.append(
                ValidationError(
                    message="Tile-drained arable land exceeds arable land",
                    field="hydrology.tile_drained_arable_land",
                )
            )
        if hydrology.tile_drained_grassland > hydrology.grassland * (1 + AREA_TOLERANCE):
            errors.append(
                ValidationError(
                    message="Tile-drained grassland exceeds grassland",
                    field="hydrology.tile_drained_grassland",
                )
            )

        return errors


class RetentionFactorValidator:
    """Checks that the precomputed retention factors are usable numbers."""

    def validate(self, result: Result, context: "CalculationContext") -> list[ValidationError]:
        errors = []
        for name in ("background_retention_factor", "gw_retention_factor"):
            value = getattr(context, name)
            if not math.isfinite(value):
                errors.append(ValidationError(message=f"{name} is not finite", field=name))
            elif value < 0:
                errors.append(ValidationError(message=f"{name} is negative", field=name))

        hydrology = result.hydrology
        if 0 < hydrology.gw_recharge_a1 < context.basics.gw_recharge_a2:
            errors.append(
                ValidationError(
                    message="Baseline groundwater recharge exceeds primary recharge",
                    field="basics.gw_recharge_a2",
                )
            )
        return errors


DEFAULT_VALIDATORS = (AreaConsistencyValidator(), RetentionFactorValidator())


def validate_inputs(result: Result, context: "CalculationContext") -> list[ValidationError]:
    """Run all input validators for one analytical unit and period.

    Returns:
        List of validation errors (empty if valid)
    """
    errors: list[ValidationError] = []
    for validator in DEFAULT_VALIDATORS:
        errors.extend(validator.validate(result, context))
    return errors

"""Validation of analytical unit inputs.

Field-level constraints are enforced by the pydantic models. This module
provides validators for invariants spanning several input models:
1. Area consistency - soil, land-use and drained areas fit into the unit
2. Retention factors - finite, non-negative, consistent recharge components

Validation problems are reported as soft errors; the calculator logs them and
proceeds.
"""

from p_emissions.validation.errors import ValidationError
from p_emissions.validation.inputs import (
    AreaConsistencyValidator,
    RetentionFactorValidator,
    validate_inputs,
)
from p_emissions.validation.protocols import InputValidator

__all__ = [
    "ValidationError",
    "InputValidator",
    "AreaConsistencyValidator",
    "RetentionFactorValidator",
    "validate_inputs",
]

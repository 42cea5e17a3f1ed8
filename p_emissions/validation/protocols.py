"""Validation protocol definitions."""

from typing import TYPE_CHECKING, Protocol

from p_emissions.models.results import Result
from p_emissions.validation.errors import ValidationError

if TYPE_CHECKING:
    from p_emissions.engine import CalculationContext


class InputValidator(Protocol):
    """Protocol for cross-field checks of calculation inputs.

    Field-level constraints (non-negative areas, percentages) are enforced by
    the pydantic models; validators check invariants spanning several models.
    """

    def validate(self, result: Result, context: "CalculationContext") -> list[ValidationError]:
        """Validate the inputs of one analytical unit and period.

        Args:
            result: Result aggregate carrying unit, period and hydrology
            context: Calculation context carrying basics and retention factors

        Returns:
            List of validation errors (empty if valid)
        """
        ...

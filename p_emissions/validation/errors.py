"""Soft input problems found before a unit is calculated.

These describe cross-field inconsistencies in a unit's inputs, such as land-use
or soil areas exceeding the unit area. The engine logs each one as a warning
and still calculates the unit.
"""

from dataclasses import dataclass


@dataclass
class ValidationError:
    """An inconsistency in one group of unit inputs.

    Attributes:
        message: Human-readable description of the inconsistency
        field: Input the message refers to (e.g. ``landuse``, ``basics.gw_recharge_a2``)
    """

    message: str
    field: str | None = None

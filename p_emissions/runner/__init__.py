"""Calculation execution infrastructure.

This package provides the runners for the phosphorus emission calculation:
- run_calculation(): Calculate one analytical unit, failures wrapped in ValueError
- run_batch(): Calculate many units, sequentially or in worker processes
- results_to_dataframe(): Report table keyed by report codes
"""

from p_emissions.runner.runner import (
    CalculationJob,
    results_to_dataframe,
    run_batch,
    run_calculation,
)

__all__ = [
    "CalculationJob",
    "run_calculation",
    "run_batch",
    "results_to_dataframe",
]

"""Batch execution of phosphorus emission calculations.

Analytical units are independent: every unit gets its own result aggregate
and its own calculator call, so batches can run in worker processes without
any synchronisation.
"""

import logging
import time
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass

import pandas as pd

from p_emissions.config import BatchConfig, CalculationConfig, PhosphorusCoefficients
from p_emissions.engine import CalculationContext, PhosphorusEmissionCalculator
from p_emissions.models.results import Result

logger = logging.getLogger(__name__)


@dataclass
class CalculationJob:
    """One analytical unit and period to calculate."""

    result: Result
    context: CalculationContext


def run_calculation(
    result: Result,
    context: CalculationContext,
    calculator: PhosphorusEmissionCalculator | None = None,
) -> Result:
    """Run the phosphorus emission calculation for one unit.

    Args:
        result: Result aggregate with unit, period and hydrology populated
        context: Per-unit inputs from upstream stages
        calculator: Calculator to use (default coefficients and config if None)

    Returns:
        The same result aggregate, now carrying the pathway results

    Raises:
        ValueError: If the calculation fails for the unit
    """
    calculator = calculator or PhosphorusEmissionCalculator()
    try:
        calculator.run(result, context)
    except Exception as e:
        logger.error(f"Calculation failed for unit {result.unit.id}: {e}")
        msg = (
            f"Phosphorus emission calculation failed for unit {result.unit.id} "
            f"({result.period.year}): {e}"
        )
        raise ValueError(msg) from e
    return result


def _run_chunk(
    jobs: list[CalculationJob],
    coefficients: PhosphorusCoefficients,
    config: CalculationConfig,
) -> list[Result]:
    calculator = PhosphorusEmissionCalculator(coefficients, config)
    return [run_calculation(job.result, job.context, calculator) for job in jobs]


def _chunk(jobs: list[CalculationJob], n_chunks: int) -> list[list[CalculationJob]]:
    size = -(-len(jobs) // n_chunks)
    return [jobs[i : i + size] for i in range(0, len(jobs), size)]


def run_batch(
    jobs: list[CalculationJob],
    coefficients: PhosphorusCoefficients | None = None,
    config: CalculationConfig | None = None,
    batch_config: BatchConfig | None = None,
) -> list[Result]:
    """Run the calculation for many analytical units.

    Small batches, or batches with parallel execution disabled, run
    sequentially in this process and mutate the supplied results. Parallel
    batches run in worker processes and return calculated copies; the
    supplied results are left untouched in that case.

    Args:
        jobs: Units to calculate
        coefficients: Empirical coefficient catalogue (default if None)
        config: Calculation rules (read from environment if None)
        batch_config: Batch execution settings (read from environment if None)

    Returns:
        Calculated results in job order

    Raises:
        ValueError: If the calculation fails for any unit
    """
    coefficients = coefficients or PhosphorusCoefficients()
    config = config or CalculationConfig()
    batch_config = batch_config or BatchConfig()

    t0 = time.perf_counter()

    if not batch_config.parallel or len(jobs) < batch_config.min_parallel_units:
        results = _run_chunk(jobs, coefficients, config)
        logger.info(
            f"[timing] run_batch ({len(jobs)} units, sequential): {time.perf_counter() - t0:.3f}s"
        )
        return results

    max_workers = batch_config.resolved_max_workers
    chunks = _chunk(jobs, max_workers)
    logger.info(f"Processing {len(jobs)} units in {len(chunks)} parallel chunks")

    try:
        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            futures = [
                executor.submit(_run_chunk, chunk, coefficients, config) for chunk in chunks
            ]
            chunk_results = [f.result() for f in futures]
    except (NotImplementedError, PermissionError, OSError) as exc:
        logger.warning(f"Parallel run_batch unavailable ({exc}); falling back to sequential")
        return _run_chunk(jobs, coefficients, config)

    results = [result for chunk in chunk_results for result in chunk]
    logger.info(
        f"[timing] run_batch ({len(jobs)} units, parallel): {time.perf_counter() - t0:.3f}s"
    )
    return results


def results_to_dataframe(results: list[Result]) -> pd.DataFrame:
    """Convert calculated results into a report table keyed by report codes.

    Units that were skipped (no area) are left out.

    Args:
        results: Result aggregates

    Returns:
        DataFrame with one row per calculated unit and period
    """
    rows = [result.to_record() for result in results if result.is_calculated()]
    skipped = len(results) - len(rows)
    if skipped:
        logger.info(f"Skipped {skipped} uncalculated result(s) without area")
    if not rows:
        return pd.DataFrame()
    return pd.DataFrame(rows)

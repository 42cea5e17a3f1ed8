"""Unit tests for calculation runners."""

from concurrent.futures import Future
from unittest.mock import Mock

import pandas as pd
import pytest

from p_emissions.config import BatchConfig
from p_emissions.engine import CalculationContext
from p_emissions.errors import CountryDataNotAvailableError
from p_emissions.models import Result
from p_emissions.repositories import CountryOrStates
from p_emissions.runner import (
    CalculationJob,
    results_to_dataframe,
    run_batch,
    run_calculation,
)
from p_emissions.runner import runner


@pytest.fixture
def make_jobs(unit, period, hydrology, context):
    """Factory for jobs with independent units."""

    def _make(n):
        return [
            CalculationJob(
                result=Result(
                    unit=unit.model_copy(update={"id": 1000 + i}, deep=True),
                    period=period,
                    hydrology=hydrology,
                ),
                context=context,
            )
            for i in range(n)
        ]

    return _make


class InProcessExecutor:
    """Executor stand-in that runs submitted work immediately."""

    def __init__(self, max_workers=None):
        self.max_workers = max_workers

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def submit(self, fn, *args):
        future = Future()
        future.set_result(fn(*args))
        return future


def test_run_calculation_successful_execution(result, context, calculator):
    returned = run_calculation(result, context, calculator)

    assert returned is result
    assert result.is_calculated()


def test_run_calculation_wraps_errors(result, context, calculator):
    """Test calculation failures are wrapped in ValueError with the cause kept."""
    empty_context = CalculationContext(
        basics=context.basics,
        countries=CountryOrStates([], calculation_year_for_hydrological_conditions=2010),
        background_retention_factor=0.3,
        gw_retention_factor=0.4,
    )

    with pytest.raises(ValueError, match="failed for unit 101 \\(2015\\)") as exc_info:
        run_calculation(result, empty_context, calculator)

    assert isinstance(exc_info.value.__cause__, CountryDataNotAvailableError)


def test_run_calculation_wraps_unexpected_errors(result, context):
    calculator = Mock()
    calculator.run.side_effect = RuntimeError("boom")

    with pytest.raises(ValueError, match="boom"):
        run_calculation(result, context, calculator)

    calculator.run.assert_called_once_with(result, context)


def test_run_batch_sequential(make_jobs, coefficients, config):
    jobs = make_jobs(3)

    results = run_batch(jobs, coefficients, config, BatchConfig(parallel=False))

    assert [r.unit.id for r in results] == [1000, 1001, 1002]
    assert all(r.is_calculated() for r in results)
    # Sequential runs calculate the supplied results in place
    assert results[0] is jobs[0].result


def test_run_batch_small_batch_stays_sequential(make_jobs, coefficients, config, monkeypatch):
    executor = Mock()
    monkeypatch.setattr(runner, "ProcessPoolExecutor", executor)

    results = run_batch(
        make_jobs(2), coefficients, config, BatchConfig(parallel=True, min_parallel_units=10)
    )

    assert len(results) == 2
    executor.assert_not_called()


def test_run_batch_parallel_keeps_job_order(make_jobs, coefficients, config, monkeypatch):
    monkeypatch.setattr(runner, "ProcessPoolExecutor", InProcessExecutor)
    jobs = make_jobs(5)

    results = run_batch(
        jobs, coefficients, config, BatchConfig(max_workers=2, min_parallel_units=2)
    )

    assert [r.unit.id for r in results] == [1000, 1001, 1002, 1003, 1004]
    assert all(r.is_calculated() for r in results)


def test_run_batch_falls_back_to_sequential(make_jobs, coefficients, config, monkeypatch):
    """Test environments without process pools run the batch sequentially."""
    monkeypatch.setattr(runner, "ProcessPoolExecutor", Mock(side_effect=OSError("no fork")))

    results = run_batch(
        make_jobs(3), coefficients, config, BatchConfig(max_workers=2, min_parallel_units=2)
    )

    assert len(results) == 3
    assert all(r.is_calculated() for r in results)


def test_chunking():
    assert runner._chunk(list(range(5)), 2) == [[0, 1, 2], [3, 4]]
    assert runner._chunk(list(range(2)), 4) == [[0], [1]]


def test_results_to_dataframe(make_jobs, coefficients, config, unit, period, hydrology):
    """Test report rows are keyed by report codes and skip uncalculated units."""
    results = run_batch(make_jobs(2), coefficients, config, BatchConfig(parallel=False))
    skipped = Result(unit=unit.model_copy(update={"area": 0.0}), period=period, hydrology=hydrology)

    df = results_to_dataframe([*results, skipped])

    assert isinstance(df, pd.DataFrame)
    assert len(df) == 2
    assert list(df["AU_ID"]) == [1000, 1001]
    assert "Emission_TP_Total" in df.columns
    assert df["Emission_TP_Total"].iloc[0] == pytest.approx(results[0].totals.total)


def test_results_to_dataframe_empty(result):
    assert results_to_dataframe([result]).empty

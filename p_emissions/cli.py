"""Command line interface for the phosphorus emission calculator.

Usage:
    p-emissions calculate bundle.json
    p-emissions calculate bundle.json --output results.csv --sequential
    p-emissions coefficients
"""

import logging
from pathlib import Path

import pandas as pd
import typer
from pydantic import ValidationError

from p_emissions.config import BatchConfig, CalculationConfig, PhosphorusCoefficients
from p_emissions.engine import CalculationContext
from p_emissions.models.bundle import CalculationBundle
from p_emissions.models.results import Result
from p_emissions.repositories.countries import CountryOrStates
from p_emissions.runner import CalculationJob, results_to_dataframe, run_batch

logger = logging.getLogger(__name__)

app = typer.Typer(help="Phosphorus emission budgets of analytical units")


def load_bundle(path: Path) -> CalculationBundle:
    """Read and validate a JSON calculation bundle."""
    return CalculationBundle.model_validate_json(path.read_text())


def build_jobs(bundle: CalculationBundle) -> list[CalculationJob]:
    """Turn a bundle into calculation jobs sharing one country lookup."""
    countries = CountryOrStates(
        bundle.countries, bundle.calculation_year_for_hydrological_conditions
    )
    return [
        CalculationJob(
            result=Result(unit=item.unit, period=item.period, hydrology=item.hydrology),
            context=CalculationContext(
                basics=item.basics,
                countries=countries,
                background_retention_factor=item.background_retention_factor,
                gw_retention_factor=item.gw_retention_factor,
            ),
        )
        for item in bundle.units
    ]


@app.command()
def calculate(
    bundle_file: Path = typer.Argument(
        ...,
        help="Path to the JSON calculation bundle",
        exists=True,
        dir_okay=False,
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the report table to this CSV file instead of printing it",
    ),
    sequential: bool = typer.Option(
        False,
        "--sequential",
        help="Disable parallel execution",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Calculate the phosphorus emission budget of every unit in a bundle."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        bundle = load_bundle(bundle_file)
        coefficients = bundle.build_coefficients()
        jobs = build_jobs(bundle)
    except (ValidationError, ValueError) as e:
        logger.error(f"Invalid calculation bundle {bundle_file}: {e}")
        raise typer.Exit(1) from e

    logger.info(f"Calculating {len(jobs)} unit(s) with coefficients '{coefficients.version}'")

    batch_config = BatchConfig()
    if sequential:
        batch_config = batch_config.model_copy(update={"parallel": False})

    try:
        results = run_batch(jobs, coefficients, CalculationConfig(), batch_config)
    except ValueError as e:
        logger.error(str(e))
        raise typer.Exit(1) from e

    df = results_to_dataframe(results)
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(output, index=False)
        logger.info(f"Wrote {len(df)} row(s) to {output}")
    else:
        typer.echo(df.to_string(index=False))


@app.command()
def coefficients():
    """List the default coefficient catalogue by mnemonic code."""
    catalogue = PhosphorusCoefficients()
    df = pd.DataFrame(
        [
            {"code": code, "name": name, "value": getattr(catalogue, name)}
            for name, code in PhosphorusCoefficients.mnemonics().items()
        ]
    )
    typer.echo(df.to_string(index=False))


if __name__ == "__main__":
    app()

"""CLI for guardpy."""

import logging
import pathlib
from enum import Enum

import typer

from guardpy.core import config, exceptions
from guardpy.io.writers import writers

logger = config.get_logger()
app = typer.Typer(
    help="Reconstruct guard rest periods from a security log.",
)


class OutputFileType(str, Enum):
    """Valid output file types for saving data."""

    csv = ".csv"
    parquet = ".parquet"


def version_check(version: bool) -> None:
    """Print the current version of guardpy and exit."""
    if version:
        typer.echo(f"Guardpy version: {config.get_version()}")
        raise typer.Exit()


@app.command()
def main(
    input: pathlib.Path = typer.Argument(
        ..., help="Path to the input log file or directory.", exists=True
    ),
    output: pathlib.Path = typer.Option(
        None,
        "-o",
        "--output",
        help="Path where data will be saved. Supports .csv and .parquet formats.",
    ),
    output_filetype: OutputFileType = typer.Option(
        ".csv",
        "-O",
        "--output-filetype",
        help="Format for save files when processing directories. ",
    ),
    verbosity: bool = typer.Option(
        False,
        "-v",
        "--verbosity",
        help="Determines the level of verbosity. Use -v for DEBUG. "
        "Defaults to INFO if not included.",
    ),
    version: bool = typer.Option(
        False,
        "-V",
        "--version",
        help="Print the current version of guardpy and exit.",
        is_eager=True,
        callback=version_check,
    ),
) -> None:
    """Run guardpy orchestrator with command line arguments."""
    from guardpy.core import orchestrator

    log_level = logging.INFO
    if verbosity:
        log_level = logging.DEBUG
    logger.setLevel(log_level)

    logger.debug("Running guardpy. arguments given: %s", locals())
    try:
        results = orchestrator.run(
            input=input,
            output=output,
            verbosity=log_level,
            output_filetype=output_filetype.value,
        )
    except exceptions.GuardpyError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if isinstance(results, dict):
        for file_name, file_results in results.items():
            typer.echo(file_name)
            _echo_results(file_results)
    else:
        _echo_results(results)


def _echo_results(results: writers.AnalysisResults) -> None:
    """Print both query results."""
    sleepiest = results.sleepiest
    best_pair = results.best_pair
    typer.echo(
        f"Sleepiest guard: {sleepiest.actor_id}, "
        f"sleepiest minute: {sleepiest.minute}, answer: {sleepiest.checksum}"
    )
    typer.echo(
        f"Best minute: {best_pair.minute}, guard: {best_pair.actor_id}, "
        f"count: {best_pair.count}, answer: {best_pair.checksum}"
    )


if __name__ == "__main__":
    app()

"""Test the guardpy cli."""

import logging
import pathlib

import pytest
import pytest_mock
from typer import testing

from guardpy.core import cli, config, exceptions, models, orchestrator
from guardpy.io.writers import writers


@pytest.fixture
def create_typer_cli_runner() -> testing.CliRunner:
    """Create a Typer CLI runner."""
    return testing.CliRunner()


@pytest.fixture
def dummy_results() -> writers.AnalysisResults:
    """Makes a results object for the purpose of testing."""
    return writers.AnalysisResults(
        schedules=[],
        sleepiest=models.ActorMinute(actor_id=10, minute=24, count=2),
        best_pair=models.ActorMinute(actor_id=99, minute=45, count=3),
    )


def test_main_default(
    mocker: pytest_mock.MockerFixture,
    sample_data_log: pathlib.Path,
    create_typer_cli_runner: testing.CliRunner,
    dummy_results: writers.AnalysisResults,
) -> None:
    """Test cli with only necessary arguments."""
    mock_run = mocker.patch.object(orchestrator, "run", return_value=dummy_results)

    result = create_typer_cli_runner.invoke(cli.app, [str(sample_data_log)])

    assert result.exit_code == 0
    mock_run.assert_called_once_with(
        input=sample_data_log,
        output=None,
        verbosity=logging.INFO,
        output_filetype=".csv",
    )
    assert "Sleepiest guard: 10, sleepiest minute: 24, answer: 240" in result.output
    assert "Best minute: 45, guard: 99, count: 3, answer: 4455" in result.output


def test_main_with_options(
    mocker: pytest_mock.MockerFixture,
    sample_data_log: pathlib.Path,
    tmp_path: pathlib.Path,
    create_typer_cli_runner: testing.CliRunner,
    dummy_results: writers.AnalysisResults,
) -> None:
    """Test cli with optional arguments."""
    test_output = tmp_path / "test.parquet"
    mock_run = mocker.patch.object(orchestrator, "run", return_value=dummy_results)

    create_typer_cli_runner.invoke(
        cli.app,
        [str(sample_data_log), "--output", str(test_output), "-O", ".parquet", "-v"],
    )

    mock_run.assert_called_once_with(
        input=sample_data_log,
        output=test_output,
        verbosity=logging.DEBUG,
        output_filetype=".parquet",
    )


def test_main_directory(
    mocker: pytest_mock.MockerFixture,
    tmp_path: pathlib.Path,
    create_typer_cli_runner: testing.CliRunner,
    dummy_results: writers.AnalysisResults,
) -> None:
    """Test that directory results are printed per file."""
    mocker.patch.object(
        orchestrator, "run", return_value={"night_shift.txt": dummy_results}
    )

    result = create_typer_cli_runner.invoke(cli.app, [str(tmp_path)])

    assert result.exit_code == 0
    assert "night_shift.txt" in result.output
    assert "answer: 4455" in result.output


def test_main_error(
    mocker: pytest_mock.MockerFixture,
    sample_data_log: pathlib.Path,
    create_typer_cli_runner: testing.CliRunner,
) -> None:
    """Test that guardpy errors exit with code 1."""
    mocker.patch.object(
        orchestrator,
        "run",
        side_effect=exceptions.SequenceError("Rest ended with no open rest period."),
    )

    result = create_typer_cli_runner.invoke(cli.app, [str(sample_data_log)])

    assert result.exit_code == 1


def test_main_missing_input(create_typer_cli_runner: testing.CliRunner) -> None:
    """Test that a missing input path is rejected by the cli."""
    result = create_typer_cli_runner.invoke(cli.app, ["does_not_exist.txt"])

    assert result.exit_code != 0


def test_version(
    mocker: pytest_mock.MockerFixture, create_typer_cli_runner: testing.CliRunner
) -> None:
    """Test that the version flag prints the version and exits."""
    mocker.patch.object(config, "get_version", return_value="1.2.3")

    result = create_typer_cli_runner.invoke(cli.app, ["-V"])

    assert result.exit_code == 0
    assert "Guardpy version: 1.2.3" in result.output

"""Python based runner."""

import itertools
import logging
import pathlib
from typing import Dict, Iterable, Literal, Optional, Union

from rich import progress

from guardpy.core import config, exceptions
from guardpy.io.readers import readers
from guardpy.io.writers import writers
from guardpy.processing import aggregation, ordering, parser, reconstruction

logger = config.get_logger()

VALID_FILE_TYPES = (".csv", ".parquet")


def run(
    input: Union[pathlib.Path, str],
    output: Optional[Union[pathlib.Path, str]] = None,
    verbosity: int = logging.WARNING,
    output_filetype: Literal[".csv", ".parquet"] = ".csv",
) -> Union[writers.AnalysisResults, Dict[str, writers.AnalysisResults]]:
    """Runs the log analysis on single files, or directories.

    The run() function will execute the _run_file() function on individual files, or
    _run_directory() on entire directories. When the input path points to a file, the
    name of the save file will be taken from the given output path (if any). When the
    input path points to a directory the output path must be a valid directory as well.
    Output file names will be derived from original file names in the case of directory
    processing.

    Args:
        input: Path to the input log file or directory of log files. Currently, this
            supports .txt and .log.
        output: Path to save data to. If processing a single file the path should end
            in the save file name in either .csv or .parquet formats.
        verbosity: The logging level for the logger.
        output_filetype: Specifies the data format for the save files. Only used when
            processing directories.

    Returns:
        The analysis results as an AnalysisResults object, or a dictionary of
        AnalysisResults objects keyed by input file when processing a directory.
    """
    logger.setLevel(verbosity)

    input = pathlib.Path(input)
    output = pathlib.Path(output) if output is not None else None

    if input.is_file():
        return _run_file(input=input, output=output, verbosity=verbosity)

    return _run_directory(
        input=input,
        output=output,
        verbosity=verbosity,
        output_filetype=output_filetype,
    )


def analyze(lines: Iterable[str]) -> writers.AnalysisResults:
    """Runs every processing stage over the lines of a single log.

    Args:
        lines: The raw log lines, in any order. Blank lines are skipped.

    Returns:
        The reconstructed schedules and both aggregation results.

    Raises:
        ParseError: If a line cannot be parsed.
        SequenceError: If the ordered events do not form a consistent timeline.
        EmptyResultError: If the log holds no actors or no rest.
    """
    events = parser.parse_log(lines)
    ordered_events = ordering.order_events(events)
    schedules = reconstruction.reconstruct(ordered_events)
    summary = aggregation.summarize(schedules)
    return writers.AnalysisResults(
        schedules=schedules,
        sleepiest=summary.sleepiest,
        best_pair=summary.best_pair,
    )


def _run_directory(
    input: pathlib.Path,
    output: Optional[pathlib.Path] = None,
    verbosity: int = logging.WARNING,
    output_filetype: Literal[".csv", ".parquet"] = ".csv",
) -> Dict[str, writers.AnalysisResults]:
    """Runs the log analysis on every log file of a directory.

    Files that fail to process are logged and skipped, the remaining files are still
    processed.

    Args:
        input: Path to the input directory of log files.
        output: Path to directory data will be saved to.
        verbosity: The logging level for the logger.
        output_filetype: Specifies the data format for the save files.

    Returns:
        A dictionary of AnalysisResults objects keyed by input file path.

    Raises:
        ValueError: If the output given is not a directory.
        ValueError: If the output_filetype is not a valid type.
        EmptyDirectoryError: If the input directory contained no log files.
    """
    if output is not None:
        if output.is_file():
            raise ValueError(
                "Output is a file, but must be a directory when input is a directory."
            )
        if output_filetype not in VALID_FILE_TYPES:
            raise ValueError(
                "Invalid output_filetype: "
                f"{output_filetype}. Valid options are: {VALID_FILE_TYPES}."
            )

    file_names = sorted(itertools.chain(input.glob("*.txt"), input.glob("*.log")))

    if not file_names:
        raise exceptions.EmptyDirectoryError(
            f"Directory {input} contains no .txt or .log files."
        )
    results_dict = {}
    with progress.Progress(
        progress.SpinnerColumn(),
        progress.TextColumn("[progress.description]{task.description}"),
        progress.BarColumn(),
        progress.TaskProgressColumn(),
        console=None,
    ) as progress_bar:
        task = progress_bar.add_task(
            f"[cyan]Processing files in {input.name}...", total=len(file_names)
        )

        for file in file_names:
            output_file_path = (
                output / pathlib.Path(file.stem).with_suffix(output_filetype)
                if output
                else None
            )
            logger.debug(
                "Processing directory: %s, current file: %s, save path: %s",
                input,
                file,
                output_file_path,
            )
            try:
                results_dict[str(file)] = _run_file(
                    input=file,
                    output=output_file_path,
                    verbosity=verbosity,
                )
            except (exceptions.GuardpyError, IOError) as e:
                logger.error("Did not run file: %s, Error: %s", file, e)
            progress_bar.update(task, advance=1)
    logger.info("Processing for directory %s completed successfully.", input)
    return results_dict


def _run_file(
    input: pathlib.Path,
    output: Optional[pathlib.Path] = None,
    verbosity: int = logging.WARNING,
) -> writers.AnalysisResults:
    """Runs the log analysis on a single file and returns the results.

    Args:
        input: Path to the log file to be read.
        output: Path to save data to. The path should end in the save file name in
            either .csv or .parquet formats.
        verbosity: The logging level for the logger.

    Returns:
        The analysis results as an AnalysisResults object.
    """
    logger.setLevel(verbosity)
    if output is not None:
        writers.AnalysisResults.validate_output(output=output)

    lines = readers.read_log_lines(input)
    results = analyze(lines)
    results.processing_params = {"input_file": str(input), "lines_read": len(lines)}

    if output is not None:
        try:
            results.save_results(output=output)
        except (PermissionError, FileExistsError) as exc_info:
            # Allowed to pass to recover in Jupyter Notebook scenarios.
            logger.error(
                "Could not save output due to: %s. Call save_results "
                "on the output object with a correct filename to save these "
                "results.",
                exc_info,
            )
    logger.info("Processing for %s completed successfully.", input.stem)
    return results

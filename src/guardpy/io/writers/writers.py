"""Module containing the output classes for writing data to files."""

import datetime
import json
import pathlib
from typing import Any, Dict, List, Optional

import polars as pl
import pydantic

from guardpy.core import config, exceptions, models

VALID_FILE_TYPES = (".csv", ".parquet")

logger = config.get_logger()


class AnalysisResults(pydantic.BaseModel):
    """Dataclass containing results of orchestrator.run()."""

    schedules: List[models.ActorSchedule]
    sleepiest: models.ActorMinute
    best_pair: models.ActorMinute
    processing_params: Optional[Dict[str, Any]] = None

    def results_frame(self) -> pl.DataFrame:
        """Both query results as a DataFrame, one row per query."""
        queries = {"sleepiest_actor": self.sleepiest, "best_pair": self.best_pair}
        return pl.DataFrame(
            {
                "query": list(queries),
                "actor_id": [result.actor_id for result in queries.values()],
                "minute": [result.minute for result in queries.values()],
                "count": [result.count for result in queries.values()],
                "checksum": [result.checksum for result in queries.values()],
            }
        )

    def intervals_frame(self) -> pl.DataFrame:
        """Every reconstructed rest interval as a DataFrame.

        Returns:
            A DataFrame with columns actor_id, start, end and duration, one row per
            interval, grouped by actor in ascending id order.
        """
        rows = [
            {
                "actor_id": schedule.actor_id,
                "start": interval.start,
                "end": interval.end,
                "duration": interval.duration,
            }
            for schedule in sorted(self.schedules, key=lambda s: s.actor_id)
            for interval in schedule.intervals
        ]
        return pl.DataFrame(
            rows,
            schema={
                "actor_id": pl.Int64,
                "start": pl.Int64,
                "end": pl.Int64,
                "duration": pl.Int64,
            },
        )

    def save_results(self, output: pathlib.Path) -> None:
        """Convert to polars and save the dataframes as csv or parquet files.

        The query results are saved to output. The rest intervals are saved next to
        it, as <stem>_intervals with the same extension.

        Args:
            output: The path and file name of the data to be saved. as either a csv or
                parquet files.

        """
        logger.debug("Saving results.")
        self.validate_output(output=output)
        output.parent.mkdir(parents=True, exist_ok=True)

        intervals_output = self.intervals_path(output)
        for dataframe, path in (
            (self.results_frame(), output),
            (self.intervals_frame(), intervals_output),
        ):
            if path.suffix == ".csv":
                dataframe.write_csv(path, separator=",")
            elif path.suffix == ".parquet":
                dataframe.write_parquet(path)

        logger.info("Results saved in: %s and %s", output, intervals_output)

        if self.processing_params:
            self.save_config_as_json(output)

    @staticmethod
    def intervals_path(output: pathlib.Path) -> pathlib.Path:
        """Path the rest intervals are saved to for a given results path."""
        return output.with_name(f"{output.stem}_intervals{output.suffix}")

    def save_config_as_json(self, output_path: pathlib.Path) -> None:
        """Save processing parameters as a JSON configuration file.

        Args:
            output_path: Path where the data file was saved. The JSON file will use
                the same name but with .json extension.
        """
        if not self.processing_params:
            logger.warning("No processing parameters to save as JSON")
            return

        config_data = {
            "processing_time": datetime.datetime.now().isoformat(timespec="seconds"),
            "guardpy_version": config.get_version(),
            "processing_parameters": self.processing_params,
        }

        config_path = output_path.with_suffix(".json")

        with open(config_path, "w") as f:
            json.dump(config_data, f, indent=4)

        logger.debug("Configuration saved in: %s", config_path)

    @classmethod
    def validate_output(cls, output: pathlib.Path) -> None:
        """Validates that the output path is a valid format.

        Args:
            output: the name of the file to be saved, and the directory it will
                be saved in. Must be a .csv or .parquet file.

        Raises:
            InvalidFileTypeError:If the output file path ends with any extension other
                    than csv or parquet.
        """
        if output.suffix not in VALID_FILE_TYPES:
            raise exceptions.InvalidFileTypeError(
                f"The extension: {output.suffix} is not supported."
                "Please save the file as .csv or .parquet",
            )

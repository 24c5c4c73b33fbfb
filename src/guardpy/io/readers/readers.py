"""Function to read security log lines from a file."""

import pathlib
from typing import List, Union

from guardpy.core import exceptions

VALID_INPUT_TYPES = (".txt", ".log")


def read_log_lines(file_name: Union[pathlib.Path, str]) -> List[str]:
    """Read the lines of a security log.

    Args:
        file_name: The log file to read. Must be UTF-8 text with a .txt or .log
            extension.

    Returns:
        The stripped lines of the file, in file order. Blank lines are kept and
        skipped by the parser.

    Raises:
        InvalidFileTypeError: If the file extension is not supported.
        IOError: If the file cannot be read.
    """
    file_name = pathlib.Path(file_name)
    if file_name.suffix not in VALID_INPUT_TYPES:
        raise exceptions.InvalidFileTypeError(
            f"File type {file_name.suffix} is not supported. "
            f"Expected one of {VALID_INPUT_TYPES}."
        )
    try:
        text = file_name.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise IOError(f"Error reading file: {e}.") from e

    return [line.strip() for line in text.splitlines()]

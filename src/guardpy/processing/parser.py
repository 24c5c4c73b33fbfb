"""Parse raw security log lines into typed events."""

import datetime
import re
from typing import Iterable, List

from guardpy.core import config, exceptions, models

logger = config.get_logger()

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"

_RECORD_PATTERN = re.compile(r"^\[(?P<timestamp>[^\]]*)\] ?(?P<text>.*)$")
_TIMESTAMP_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}$", re.ASCII)
_SHIFT_START_PATTERN = re.compile(r"^Guard #(?P<actor_id>\d+)(?:\s.*)?$", re.ASCII)

_FREE_TEXT_EVENTS = {
    "falls asleep": models.EventKind.REST_BEGIN,
    "wakes up": models.EventKind.REST_END,
}


def parse_record(line: str) -> models.RawEvent:
    """Parse a single log line into an event.

    Two record shapes are recognized:
        [YYYY-MM-DD HH:MM] Guard #<id> <anything>
        [YYYY-MM-DD HH:MM] <free text>

    Free text of "falls asleep" and "wakes up" marks the start and end of a rest
    period. Any other free text becomes an UNRECOGNIZED event, which later stages
    ignore.

    Args:
        line: One trimmed line of the log.

    Returns:
        The parsed event.

    Raises:
        ParseError: If the line has no bracketed prefix or the prefix is not a
            valid timestamp.
    """
    match = _RECORD_PATTERN.match(line)
    if match is None:
        raise exceptions.ParseError(f"Line has no bracketed timestamp: {line!r}")

    timestamp = _parse_timestamp(match["timestamp"])
    text = match["text"]

    shift_match = _SHIFT_START_PATTERN.match(text)
    if shift_match is not None:
        return models.RawEvent(
            timestamp=timestamp,
            kind=models.EventKind.SHIFT_START,
            actor_id=int(shift_match["actor_id"]),
        )

    kind = _FREE_TEXT_EVENTS.get(text, models.EventKind.UNRECOGNIZED)
    if kind == models.EventKind.UNRECOGNIZED:
        logger.debug("Unrecognized event text: %r", text)
    return models.RawEvent(timestamp=timestamp, kind=kind)


def parse_log(lines: Iterable[str]) -> List[models.RawEvent]:
    """Parse every non-blank line of a log.

    Args:
        lines: The raw log lines, in any order.

    Returns:
        The parsed events, in input order.

    Raises:
        ParseError: If any line cannot be parsed. The message names the 1-based
            line number.
    """
    events = []
    for line_number, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue
        try:
            events.append(parse_record(line))
        except exceptions.ParseError as exc_info:
            raise exceptions.ParseError(f"Line {line_number}: {exc_info}") from exc_info
    logger.debug("Parsed %s events.", len(events))
    return events


def format_record(event: models.RawEvent) -> str:
    """Render an event back to its canonical log line.

    Args:
        event: A SHIFT_START, REST_BEGIN or REST_END event.

    Returns:
        The canonical text of the event.

    Raises:
        ValueError: If the event is UNRECOGNIZED, which has no canonical text.
    """
    prefix = f"[{event.timestamp.strftime(TIMESTAMP_FORMAT)}]"
    if event.kind == models.EventKind.SHIFT_START:
        return f"{prefix} Guard #{event.actor_id} begins shift"
    if event.kind == models.EventKind.REST_BEGIN:
        return f"{prefix} falls asleep"
    if event.kind == models.EventKind.REST_END:
        return f"{prefix} wakes up"
    raise ValueError(f"Events of kind {event.kind.value} have no canonical text.")


def _parse_timestamp(text: str) -> datetime.datetime:
    """Parse the bracketed timestamp of a record.

    The shape is checked before calling strptime, which would otherwise accept
    values that are not zero-padded.

    Args:
        text: The text between the brackets.

    Returns:
        The timestamp at minute resolution.

    Raises:
        ParseError: If the text is not a valid YYYY-MM-DD HH:MM timestamp.
    """
    if _TIMESTAMP_PATTERN.match(text) is None:
        raise exceptions.ParseError(
            f"Timestamp {text!r} does not match the format YYYY-MM-DD HH:MM."
        )
    try:
        return datetime.datetime.strptime(text, TIMESTAMP_FORMAT)
    except ValueError as exc_info:
        raise exceptions.ParseError(
            f"Timestamp {text!r} is not a valid date and time."
        ) from exc_info

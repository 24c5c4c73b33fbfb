"""Put parsed events into chronological order."""

import collections
import datetime
from typing import Iterable, List

from guardpy.core import config, models

logger = config.get_logger()


def order_events(events: Iterable[models.RawEvent]) -> List[models.RawEvent]:
    """Sort events by timestamp.

    The sort is stable, so events sharing a timestamp keep their input order. Well
    formed logs never contain two events in the same minute and the domain does not
    say which of them came first, so any ties are reported as a warning.

    Args:
        events: The parsed events, in any order.

    Returns:
        The events ordered non-decreasingly by timestamp.
    """
    ordered = sorted(events, key=lambda event: event.timestamp)

    ties = find_timestamp_ties(ordered)
    if ties:
        logger.warning(
            "Found %s timestamps shared by more than one event, their relative "
            "order is unspecified and input order was kept: %s",
            len(ties),
            ", ".join(str(timestamp) for timestamp in ties),
        )

    logger.debug("Ordered %s events.", len(ordered))
    return ordered


def find_timestamp_ties(
    events: Iterable[models.RawEvent],
) -> List[datetime.datetime]:
    """Find timestamps that occur on more than one event.

    Args:
        events: The events to inspect.

    Returns:
        The duplicated timestamps, in ascending order.
    """
    counts = collections.Counter(event.timestamp for event in events)
    return sorted(timestamp for timestamp, count in counts.items() if count > 1)

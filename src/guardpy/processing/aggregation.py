"""Minute-of-hour rest statistics over reconstructed schedules."""

from typing import Iterable, Sequence, Tuple

import numpy as np

from guardpy.core import config, exceptions, models

logger = config.get_logger()


class MinuteHistogram:
    """Rest counts for each minute of the hour, for a single actor.

    Index i holds the number of rest intervals covering minute i. Intervals are
    end-exclusive, so an interval (s, e) increments buckets s through e - 1.

    Attributes:
        actor_id: The actor the counts belong to.
        counts: Integer array of length 60.
    """

    def __init__(self, actor_id: int, counts: np.ndarray) -> None:
        """Initialize the histogram.

        Args:
            actor_id: The actor the counts belong to.
            counts: Integer array of length 60.

        Raises:
            ValueError: If counts does not have one bucket per minute.
        """
        if counts.shape != (models.MINUTES_PER_HOUR,):
            raise ValueError(
                f"Expected {models.MINUTES_PER_HOUR} buckets, got shape {counts.shape}."
            )
        self.actor_id = actor_id
        self.counts = counts

    @classmethod
    def from_schedule(cls, schedule: models.ActorSchedule) -> "MinuteHistogram":
        """Count the rest minutes of one actor.

        Args:
            schedule: The actor's reconstructed schedule.

        Returns:
            The actor's histogram.
        """
        counts = np.zeros(models.MINUTES_PER_HOUR, dtype=np.int64)
        for interval in schedule.intervals:
            counts[interval.start : interval.end] += 1
        return cls(actor_id=schedule.actor_id, counts=counts)

    def most_frequent_minute(self) -> Tuple[int, int]:
        """Find the minute the actor rested in most often.

        Ties go to the earliest minute.

        Returns:
            A tuple of (minute, count).

        Raises:
            EmptyResultError: If the actor never rested.
        """
        if not self.counts.any():
            raise exceptions.EmptyResultError(
                f"Actor {self.actor_id} has no recorded rest."
            )
        minute = int(np.argmax(self.counts))
        return minute, int(self.counts[minute])

    def total(self) -> int:
        """Sum of all buckets, equal to the actor's total rest in minutes."""
        return int(self.counts.sum())


class ActorMinuteTable:
    """Rest counts for every (actor, minute) pair.

    Rows are actors in ascending id order, columns are minutes of the hour. Cell
    (row, minute) holds the number of that actor's rest intervals covering the
    minute, using the same end-exclusive rule as MinuteHistogram.

    Attributes:
        actor_ids: The actor id of each row.
        counts: Integer array of shape (number of actors, 60).
    """

    def __init__(self, actor_ids: Sequence[int], counts: np.ndarray) -> None:
        """Initialize the table.

        Args:
            actor_ids: The actor id of each row, ascending.
            counts: Integer array of shape (len(actor_ids), 60).

        Raises:
            ValueError: If the counts do not match the actor ids.
        """
        if counts.shape != (len(actor_ids), models.MINUTES_PER_HOUR):
            raise ValueError(
                f"Expected shape ({len(actor_ids)}, {models.MINUTES_PER_HOUR}), "
                f"got {counts.shape}."
            )
        self.actor_ids = tuple(actor_ids)
        self.counts = counts

    @classmethod
    def from_schedules(
        cls, schedules: Iterable[models.ActorSchedule]
    ) -> "ActorMinuteTable":
        """Build the table from every actor's schedule.

        Args:
            schedules: The reconstructed schedules, in any order.

        Returns:
            The (actor, minute) count table.
        """
        ordered = sorted(schedules, key=lambda schedule: schedule.actor_id)
        counts = np.zeros((len(ordered), models.MINUTES_PER_HOUR), dtype=np.int64)
        for row, schedule in enumerate(ordered):
            counts[row] = MinuteHistogram.from_schedule(schedule).counts
        return cls(actor_ids=[schedule.actor_id for schedule in ordered], counts=counts)

    def histogram(self, actor_id: int) -> MinuteHistogram:
        """Project the table onto a single actor.

        Args:
            actor_id: The actor to project onto.

        Returns:
            A copy of the actor's row as a MinuteHistogram.

        Raises:
            KeyError: If the actor is not in the table.
        """
        if actor_id not in self.actor_ids:
            raise KeyError(actor_id)
        row = self.actor_ids.index(actor_id)
        return MinuteHistogram(actor_id=actor_id, counts=self.counts[row].copy())

    def total_rest(self) -> np.ndarray:
        """Total rest minutes of each actor, aligned with actor_ids."""
        return self.counts.sum(axis=1)

    def best_pair(self) -> models.ActorMinute:
        """Find the (actor, minute) cell with the highest count.

        Ties go to the lowest actor id, then to the earliest minute.

        Returns:
            The selected pair and its count.

        Raises:
            EmptyResultError: If no actor ever rested.
        """
        if not self.counts.any():
            raise exceptions.EmptyResultError("No rest intervals were recorded.")
        row, minute = np.unravel_index(np.argmax(self.counts), self.counts.shape)
        return models.ActorMinute(
            actor_id=self.actor_ids[int(row)],
            minute=int(minute),
            count=int(self.counts[row, minute]),
        )

    def sleepiest_actor(self) -> models.ActorMinute:
        """Find the most frequent rest minute of the actor with the most total rest.

        Ties in total rest go to the lowest actor id, ties between minutes go to the
        earliest minute.

        Returns:
            The selected pair and its count.

        Raises:
            EmptyResultError: If no actor ever rested.
        """
        totals = self.total_rest()
        if not totals.any():
            raise exceptions.EmptyResultError("No rest intervals were recorded.")
        row = int(np.argmax(totals))
        logger.debug(
            "Actor %s has the most rest: %s minutes.", self.actor_ids[row], totals[row]
        )
        minute, count = MinuteHistogram(
            actor_id=self.actor_ids[row], counts=self.counts[row]
        ).most_frequent_minute()
        return models.ActorMinute(
            actor_id=self.actor_ids[row], minute=minute, count=count
        )


def sleepiest_actor_minute(
    schedules: Sequence[models.ActorSchedule],
) -> models.ActorMinute:
    """Find the actor with the most rest and the minute they rest in most often.

    Args:
        schedules: The reconstructed schedules.

    Returns:
        The actor, their most frequent rest minute and its count.

    Raises:
        EmptyResultError: If there are no schedules or no rest intervals.
    """
    _check_not_empty(schedules)
    sleepiest = max(
        schedules, key=lambda schedule: (schedule.total_rest, -schedule.actor_id)
    )
    if sleepiest.total_rest == 0:
        raise exceptions.EmptyResultError("No rest intervals were recorded.")
    minute, count = MinuteHistogram.from_schedule(sleepiest).most_frequent_minute()
    return models.ActorMinute(actor_id=sleepiest.actor_id, minute=minute, count=count)


def most_consistent_actor_minute(
    schedules: Sequence[models.ActorSchedule],
) -> models.ActorMinute:
    """Find the (actor, minute) pair rested in most often across all actors.

    Args:
        schedules: The reconstructed schedules.

    Returns:
        The actor, the minute and how often the actor rested in it.

    Raises:
        EmptyResultError: If there are no schedules or no rest intervals.
    """
    _check_not_empty(schedules)
    return ActorMinuteTable.from_schedules(schedules).best_pair()


def summarize(schedules: Sequence[models.ActorSchedule]) -> models.AggregateSummary:
    """Run both aggregation queries over a single count table.

    Args:
        schedules: The reconstructed schedules.

    Returns:
        Both query results.

    Raises:
        EmptyResultError: If there are no schedules or no rest intervals.
    """
    _check_not_empty(schedules)
    table = ActorMinuteTable.from_schedules(schedules)
    summary = models.AggregateSummary(
        sleepiest=table.sleepiest_actor(), best_pair=table.best_pair()
    )
    logger.debug("Aggregation complete: %s", summary)
    return summary


def _check_not_empty(schedules: Sequence[models.ActorSchedule]) -> None:
    """Raise if there are no actors to aggregate over."""
    if not schedules:
        raise exceptions.EmptyResultError("No actors were found in the log.")

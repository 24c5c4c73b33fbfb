"""Internal data model."""

import datetime
import enum
from typing import List, Optional

import pydantic
from pydantic import BaseModel, field_validator, model_validator

from guardpy.core import config

MINUTES_PER_HOUR = 60

logger = config.get_logger()


class EventKind(str, enum.Enum):
    """The closed set of events a log record can describe."""

    SHIFT_START = "shift_start"
    REST_BEGIN = "rest_begin"
    REST_END = "rest_end"
    UNRECOGNIZED = "unrecognized"


class RawEvent(BaseModel):
    """A single parsed log record.

    Attributes:
        timestamp: The moment the record was written, at minute resolution.
        kind: What the record describes.
        actor_id: The guard beginning a shift. Only set for SHIFT_START events.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    timestamp: datetime.datetime
    kind: EventKind
    actor_id: Optional[int] = pydantic.Field(default=None, ge=0)

    @field_validator("timestamp")
    def validate_minute_resolution(
        cls, v: datetime.datetime
    ) -> datetime.datetime:
        """Validate that the timestamp carries no seconds.

        Args:
            cls: The class.
            v: The timestamp to validate.

        Returns:
            v: The timestamp if it has minute resolution.

        Raises:
            ValueError: If the timestamp has a non-zero seconds or microseconds
                component.
        """
        if v.second != 0 or v.microsecond != 0:
            raise ValueError("timestamp must have minute resolution")
        return v

    @model_validator(mode="after")
    def validate_actor_id(self) -> "RawEvent":
        """Validate that only shift starts carry an actor id.

        Returns:
            The validated event.

        Raises:
            ValueError: If a SHIFT_START has no actor id, or any other kind has one.
        """
        if self.kind == EventKind.SHIFT_START and self.actor_id is None:
            raise ValueError("shift start events must carry an actor id")
        if self.kind != EventKind.SHIFT_START and self.actor_id is not None:
            raise ValueError(f"{self.kind.value} events must not carry an actor id")
        return self

    @property
    def minute(self) -> int:
        """Minute of the hour the event occurred in."""
        return self.timestamp.minute


class RestInterval(BaseModel):
    """One contiguous rest period inside a single hour.

    The interval is end-exclusive: the actor is resting during minutes
    start, start + 1, ..., end - 1 and is awake at minute end.

    Attributes:
        start: Minute of the hour the rest began.
        end: Minute of the hour the actor woke up.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    start: int = pydantic.Field(ge=0, lt=MINUTES_PER_HOUR)
    end: int = pydantic.Field(gt=0, le=MINUTES_PER_HOUR)

    @model_validator(mode="after")
    def validate_ordering(self) -> "RestInterval":
        """Validate that the interval is not empty or reversed.

        Returns:
            The validated interval.

        Raises:
            ValueError: If start is not strictly before end.
        """
        if self.start >= self.end:
            raise ValueError(
                f"rest interval start ({self.start}) must precede end ({self.end})"
            )
        return self

    @property
    def duration(self) -> int:
        """Number of minutes spent resting."""
        return self.end - self.start

    def minutes(self) -> range:
        """Every minute of the hour covered by the interval."""
        return range(self.start, self.end)


class ActorSchedule(BaseModel):
    """All rest intervals recorded for one actor, in chronological order.

    Intervals are only ever appended, never modified or removed.
    """

    actor_id: int = pydantic.Field(ge=0)
    intervals: List[RestInterval] = pydantic.Field(default_factory=list)

    def add_interval(self, interval: RestInterval) -> None:
        """Append a closed rest interval to the schedule.

        Args:
            interval: The rest interval to record.
        """
        logger.debug(
            "Actor %s rested from minute %s to %s.",
            self.actor_id,
            interval.start,
            interval.end,
        )
        self.intervals.append(interval)

    @property
    def total_rest(self) -> int:
        """Total minutes of rest over all intervals."""
        return sum(interval.duration for interval in self.intervals)


class ActorMinute(BaseModel):
    """An (actor, minute) pair selected by an aggregation query.

    Attributes:
        actor_id: The selected actor.
        minute: The selected minute of the hour.
        count: How many recorded rest intervals cover that minute for that actor.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    actor_id: int = pydantic.Field(ge=0)
    minute: int = pydantic.Field(ge=0, lt=MINUTES_PER_HOUR)
    count: int = pydantic.Field(ge=0)

    @property
    def checksum(self) -> int:
        """The product of actor id and minute."""
        return self.actor_id * self.minute


class AggregateSummary(BaseModel):
    """Results of both aggregation queries.

    Attributes:
        sleepiest: The sleepiest minute of the actor with the most total rest.
        best_pair: The (actor, minute) pair with the highest rest frequency.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    sleepiest: ActorMinute
    best_pair: ActorMinute

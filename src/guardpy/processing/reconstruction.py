"""Reconstruct per-actor rest intervals from an ordered event stream."""

import datetime
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, cast

from guardpy.core import config, exceptions, models

logger = config.get_logger()


@dataclass(frozen=True)
class ReconstructionState:
    """State carried between events of the reconstruction pass.

    The log only reports transitions, so the pass needs to remember who is on duty
    and whether a rest period is currently open. Only one actor is ever on duty and
    at most one rest period is open at a time.

    Attributes:
        active_actor: Id of the actor currently on duty, None before the first shift.
        rest_start: Minute the open rest period began, None when no rest is open.
        rest_start_hour: The hour the open rest period began in, truncated to the
            hour. None when no rest is open.
    """

    active_actor: Optional[int] = None
    rest_start: Optional[int] = None
    rest_start_hour: Optional[datetime.datetime] = None


def transition(
    state: ReconstructionState,
    event: models.RawEvent,
    schedules: Dict[int, models.ActorSchedule],
) -> ReconstructionState:
    """Apply a single event to the reconstruction state.

    Args:
        state: The state before the event.
        event: The next event in chronological order.
        schedules: Schedules keyed by actor id. A schedule is created the first time
            an actor starts a shift, and a rest interval is appended to the active
            actor's schedule when a rest period closes.

    Returns:
        The state after the event.

    Raises:
        SequenceError: If a rest event arrives with no actor on duty, a rest begins
            while another is open, a rest ends with none open, or a rest does not end
            later within the same hour it began in.
    """
    if event.kind == models.EventKind.SHIFT_START:
        actor_id = cast(int, event.actor_id)
        if state.rest_start is not None:
            logger.warning(
                "Actor %s started a shift at %s while actor %s was resting, "
                "discarding the open rest period.",
                actor_id,
                event.timestamp,
                state.active_actor,
            )
        if actor_id not in schedules:
            schedules[actor_id] = models.ActorSchedule(actor_id=actor_id)
        return ReconstructionState(active_actor=actor_id)

    if event.kind == models.EventKind.REST_BEGIN:
        if state.active_actor is None:
            raise exceptions.SequenceError(
                f"Rest began at {event.timestamp} with no actor on duty."
            )
        if state.rest_start is not None:
            raise exceptions.SequenceError(
                f"Rest began at {event.timestamp} while actor {state.active_actor} "
                f"was already resting since minute {state.rest_start}."
            )
        return ReconstructionState(
            active_actor=state.active_actor,
            rest_start=event.minute,
            rest_start_hour=_truncate_to_hour(event.timestamp),
        )

    if event.kind == models.EventKind.REST_END:
        if state.active_actor is None:
            raise exceptions.SequenceError(
                f"Rest ended at {event.timestamp} with no actor on duty."
            )
        if state.rest_start is None:
            raise exceptions.SequenceError(
                f"Rest ended at {event.timestamp} with no open rest period."
            )
        if _truncate_to_hour(event.timestamp) != state.rest_start_hour:
            raise exceptions.SequenceError(
                f"Rest ended at {event.timestamp}, outside the hour it began in "
                f"({state.rest_start_hour}). Rest periods must lie within a single "
                "hour."
            )
        if event.minute <= state.rest_start:
            raise exceptions.SequenceError(
                f"Rest ended at {event.timestamp}, not after it began at minute "
                f"{state.rest_start}. Rest periods must have a positive length."
            )
        schedules[state.active_actor].add_interval(
            models.RestInterval(start=state.rest_start, end=event.minute)
        )
        return ReconstructionState(active_actor=state.active_actor)

    return state


def reconstruct(events: Iterable[models.RawEvent]) -> List[models.ActorSchedule]:
    """Build the rest schedule of every actor in the log.

    Args:
        events: The events in chronological order.

    Returns:
        One schedule per actor that started a shift, ordered by ascending actor id.

    Raises:
        SequenceError: If the events do not describe a consistent timeline, or a rest
            period is still open when the events run out.
    """
    logger.debug("Beginning interval reconstruction.")
    schedules: Dict[int, models.ActorSchedule] = {}
    state = ReconstructionState()
    for event in events:
        state = transition(state, event, schedules)

    if state.rest_start is not None:
        raise exceptions.SequenceError(
            f"Log ended while actor {state.active_actor} was resting since minute "
            f"{state.rest_start}."
        )

    logger.debug("Reconstruction complete. Actors found: %s", len(schedules))
    return [schedules[actor_id] for actor_id in sorted(schedules)]


def _truncate_to_hour(timestamp: datetime.datetime) -> datetime.datetime:
    """Drop the minutes of a timestamp, keeping its date and hour."""
    return timestamp.replace(minute=0)

"""Fixtures used by pytest."""

import datetime
import pathlib
from typing import Callable, List, Optional

import pytest

from guardpy.core import models


@pytest.fixture
def sample_data_log() -> pathlib.Path:
    """Shuffled security log covering three shifts of guards 10 and 99."""
    return pathlib.Path(__file__).parent / "sample_data" / "example_log.txt"


@pytest.fixture
def sample_data_csv() -> pathlib.Path:
    """Data file with an unsupported extension."""
    return pathlib.Path(__file__).parent / "sample_data" / "example_text.csv"


@pytest.fixture
def canonical_lines() -> List[str]:
    """The canonical log, in chronological order."""
    return [
        "[1518-11-01 00:00] Guard #10 begins shift",
        "[1518-11-01 00:05] falls asleep",
        "[1518-11-01 00:25] wakes up",
        "[1518-11-01 00:30] falls asleep",
        "[1518-11-01 00:55] wakes up",
        "[1518-11-01 23:58] Guard #99 begins shift",
        "[1518-11-02 00:40] falls asleep",
        "[1518-11-02 00:50] wakes up",
        "[1518-11-03 00:05] Guard #10 begins shift",
        "[1518-11-03 00:24] falls asleep",
        "[1518-11-03 00:29] wakes up",
        "[1518-11-04 00:02] Guard #99 begins shift",
        "[1518-11-04 00:36] falls asleep",
        "[1518-11-04 00:46] wakes up",
        "[1518-11-05 00:03] Guard #99 begins shift",
        "[1518-11-05 00:45] falls asleep",
        "[1518-11-05 00:55] wakes up",
    ]


@pytest.fixture
def canonical_schedules() -> List[models.ActorSchedule]:
    """The schedules reconstructed from the canonical log."""
    return [
        models.ActorSchedule(
            actor_id=10,
            intervals=[
                models.RestInterval(start=5, end=25),
                models.RestInterval(start=30, end=55),
                models.RestInterval(start=24, end=29),
            ],
        ),
        models.ActorSchedule(
            actor_id=99,
            intervals=[
                models.RestInterval(start=40, end=50),
                models.RestInterval(start=36, end=46),
                models.RestInterval(start=45, end=55),
            ],
        ),
    ]


@pytest.fixture
def make_event() -> Callable[..., models.RawEvent]:
    """Factory for events on a fixed date."""

    def _make_event(
        minute: int,
        kind: models.EventKind,
        actor_id: Optional[int] = None,
        day: int = 1,
        hour: int = 0,
    ) -> models.RawEvent:
        return models.RawEvent(
            timestamp=datetime.datetime(1518, 11, day, hour, minute),
            kind=kind,
            actor_id=actor_id,
        )

    return _make_event

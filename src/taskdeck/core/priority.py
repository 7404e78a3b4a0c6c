"""Priority scoring and urgency - pure functions over a fixed "now"."""

from datetime import datetime, timedelta, timezone
from enum import Enum

from .tasks import TaskLike

TIME_SENSITIVE_BONUS = 1000
PAST_DEADLINE_PENALTY = 500

# Tightest band first; only the first matching band applies.
DEADLINE_BANDS = (
    (timedelta(hours=1), 500),
    (timedelta(days=1), 300),
    (timedelta(weeks=1), 100),
)


class Urgency(Enum):
    """How close a task's scheduled deadline is."""

    CRITICAL = "critical"  # under an hour
    HIGH = "high"  # under a day
    MEDIUM = "medium"  # under a week
    LOW = "low"


def _now(now: datetime | None) -> datetime:
    return now or datetime.now(timezone.utc)


def deadline_bonus(remaining: timedelta) -> int:
    """Banded deadline contribution to the priority score."""
    if remaining < timedelta(0):
        return -PAST_DEADLINE_PENALTY
    for limit, bonus in DEADLINE_BANDS:
        if remaining < limit:
            return bonus
    return 0


def score(task: TaskLike, now: datetime | None = None) -> int:
    """
    Priority score used for default ordering. Higher sorts first.

    Blends the time-sensitive flag, how close the scheduled deadline is and
    the point value. Deadline scoring is banded so small clock differences
    between renders don't reorder the list.
    """
    now = _now(now)
    total = 0

    if task.is_time_sensitive:
        total += TIME_SENSITIVE_BONUS

    if task.scheduled_deadline:
        total += deadline_bonus(task.scheduled_deadline - now)

    return total + task.points


def task_urgency(task: TaskLike, now: datetime | None = None) -> Urgency | None:
    """Urgency of the scheduled deadline. None if there is none or it has passed."""
    if not task.scheduled_deadline:
        return None
    remaining = task.scheduled_deadline - _now(now)
    if remaining < timedelta(0):
        return None
    if remaining < timedelta(hours=1):
        return Urgency.CRITICAL
    if remaining < timedelta(days=1):
        return Urgency.HIGH
    if remaining < timedelta(weeks=1):
        return Urgency.MEDIUM
    return Urgency.LOW


def is_past_deadline(task: TaskLike, now: datetime | None = None) -> bool:
    """Whether the soft scheduled deadline has passed."""
    if not task.scheduled_deadline:
        return False
    return task.scheduled_deadline < _now(now)

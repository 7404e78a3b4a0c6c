"""Hard-expiry helpers and the sweeps that persist what the lifecycle view derives."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from .lifecycle import is_review_overdue
from .tasks import Completion, Task

MIN_DURATION_HOURS = 1
MAX_DURATION_HOURS = 24
EXPIRED_REASON = "Task has expired and can no longer be completed"
AUTO_REJECT_REASON = "Automatically rejected after 48 hours without approval"


@dataclass
class CompletionCheck:
    can_complete: bool
    reason: str | None = None


@dataclass
class MissedMark:
    """A user/task pair to be recorded as missed."""

    user_id: str
    task_id: str
    missed_at: datetime

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "taskId": self.task_id,
            "missedAt": self.missed_at.isoformat(),
        }


def calculate_expiration(duration_hours: int, now: datetime | None = None) -> datetime:
    """Expiry timestamp for a time-limited task lasting `duration_hours`."""
    if not MIN_DURATION_HOURS <= duration_hours <= MAX_DURATION_HOURS:
        raise ValueError(
            f"Duration must be between {MIN_DURATION_HOURS} and {MAX_DURATION_HOURS} hours, "
            f"got {duration_hours}"
        )
    now = now or datetime.now(timezone.utc)
    return now + timedelta(hours=duration_hours)


def is_expired(expires_at: datetime | None, now: datetime | None = None) -> bool:
    if not expires_at:
        return False
    return (now or datetime.now(timezone.utc)) > expires_at


def can_complete(task: Task, now: datetime | None = None) -> CompletionCheck:
    """Whether the user may still submit this task."""
    if is_expired(task.expires_at, now):
        return CompletionCheck(can_complete=False, reason=EXPIRED_REASON)
    return CompletionCheck(can_complete=True)


def format_expiration_time(expires_at: datetime, now: datetime | None = None) -> str:
    """Human-readable expiry: "in 5 minutes", "in 2 hours", "at 15:45" or "expired"."""
    now = now or datetime.now(timezone.utc)
    if expires_at <= now:
        return "expired"
    total_minutes = int((expires_at - now).total_seconds() // 60)
    hours, minutes = divmod(total_minutes, 60)

    if hours < 1:
        return f"in {minutes} minute{'s' if minutes != 1 else ''}"
    if hours < 24:
        return f"in {hours} hour{'s' if hours != 1 else ''}"
    return f"at {expires_at.strftime('%H:%M')}"


def find_stale_pending(completions: list[Completion], now: datetime | None = None) -> list[Completion]:
    """
    Pending completions whose 48-hour review window has lapsed.

    These are exactly the completions the lifecycle view already shows as
    rejected; the auto-reject sweep makes that permanent.
    """
    now = now or datetime.now(timezone.utc)
    return [c for c in completions if not c.missed_at and is_review_overdue(c, now)]


def find_missed_assignments(
    tasks: list[Task],
    completions: list[Completion],
    user_id: str,
    now: datetime | None = None,
) -> list[MissedMark]:
    """Active tasks that expired before the user attempted them."""
    now = now or datetime.now(timezone.utc)
    attempted = {c.task_id for c in completions}
    # Inclusive of expires_at == now; the lifecycle view waits until strictly past
    return [
        MissedMark(user_id=user_id, task_id=t.id, missed_at=t.expires_at)
        for t in tasks
        if t.is_active and t.expires_at and t.expires_at <= now and t.id not in attempted
    ]

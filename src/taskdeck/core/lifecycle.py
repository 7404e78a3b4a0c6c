"""
Lifecycle categorization for time-limited tasks.

Given every task assigned to a user and that user's completions, decide per
task whether it is active, awaiting review, completed or missed, then sort
and truncate each bucket for display. Pure - the caller supplies "now".
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import assert_never

from .tasks import Completion, CompletionStatus, LifecycleItem, Task

logger = logging.getLogger(__name__)

REVIEW_TIMEOUT = timedelta(hours=48)
ACTIVE_LIMIT = 5
VISIBLE_LIMIT = 5


class Bucket(Enum):
    ACTIVE = "active"
    PENDING_REVIEW = "pending"
    COMPLETED = "completed"
    MISSED = "missed"


@dataclass
class CategorizedTasks:
    """
    The four lifecycle buckets.

    Active has no overflow: at most ACTIVE_LIMIT tasks are in play per view
    and the rest stay unlisted until others leave the bucket.
    """

    active: list[LifecycleItem] = field(default_factory=list)
    pending_visible: list[LifecycleItem] = field(default_factory=list)
    pending_overflow: list[LifecycleItem] = field(default_factory=list)
    completed_visible: list[LifecycleItem] = field(default_factory=list)
    completed_overflow: list[LifecycleItem] = field(default_factory=list)
    missed_visible: list[LifecycleItem] = field(default_factory=list)
    missed_overflow: list[LifecycleItem] = field(default_factory=list)

    @property
    def pending(self) -> list[LifecycleItem]:
        return self.pending_visible + self.pending_overflow

    @property
    def completed(self) -> list[LifecycleItem]:
        return self.completed_visible + self.completed_overflow

    @property
    def missed(self) -> list[LifecycleItem]:
        return self.missed_visible + self.missed_overflow

    def to_dict(self) -> dict:
        return {
            name: [item.to_dict() for item in getattr(self, name)]
            for name in (
                "active",
                "pending_visible",
                "pending_overflow",
                "completed_visible",
                "completed_overflow",
                "missed_visible",
                "missed_overflow",
            )
        }


def is_review_overdue(completion: Completion, now: datetime) -> bool:
    """A pending completion submitted more than 48 hours ago."""
    return (
        completion.status is CompletionStatus.PENDING
        and completion.completed_at is not None
        and completion.completed_at < now - REVIEW_TIMEOUT
    )


def _classify_submitted(
    task: Task, completion: Completion, now: datetime
) -> tuple[Bucket, LifecycleItem]:
    """Classify a task whose completion has a completed_at and no missed_at."""
    status = completion.status
    match status:
        case CompletionStatus.PENDING:
            if is_review_overdue(completion, now):
                # Review window lapsed: shown to the user as rejected
                return Bucket.MISSED, LifecycleItem(
                    task,
                    last_completed_at=completion.completed_at,
                    completion_status=CompletionStatus.REJECTED,
                )
            return Bucket.PENDING_REVIEW, LifecycleItem(
                task,
                last_completed_at=completion.completed_at,
                completion_status=CompletionStatus.PENDING,
            )
        case CompletionStatus.APPROVED | CompletionStatus.AUTO_APPROVED:
            return Bucket.COMPLETED, LifecycleItem(
                task,
                is_completed=True,
                completed_today=True,
                last_completed_at=completion.completed_at,
                completion_status=status,
            )
        case CompletionStatus.REJECTED:
            return Bucket.MISSED, LifecycleItem(
                task,
                last_completed_at=completion.completed_at,
                completion_status=CompletionStatus.REJECTED,
            )
        case CompletionStatus.EXPIRED:
            return Bucket.MISSED, LifecycleItem(
                task,
                last_completed_at=completion.completed_at,
                completion_status=CompletionStatus.EXPIRED,
            )
        case _:
            assert_never(status)


def classify(
    task: Task,
    completion: Completion | None,
    now: datetime,
) -> tuple[Bucket | None, LifecycleItem | None]:
    """
    Decide which bucket a single task belongs to.

    Returns (None, None) when the task belongs in no bucket.
    """
    if completion is None:
        # Strictly past here; the missed-assignment sweep also takes expires_at == now
        if task.expires_at and task.expires_at < now:
            return Bucket.MISSED, LifecycleItem(task)
        if task.is_active:
            return Bucket.ACTIVE, LifecycleItem(task)
        # Inactive, never attempted and not expired: shown nowhere.
        logger.debug(f"Dropping inactive task {task.id} with no completion")
        return None, None

    if completion.missed_at:
        return Bucket.MISSED, LifecycleItem(task, missed_at=completion.missed_at)

    if completion.completed_at:
        return _classify_submitted(task, completion, now)

    logger.debug(f"Dropping task {task.id}: completion {completion.id} has no timestamps")
    return None, None


def _timestamp(value: datetime | None) -> float:
    return value.timestamp() if value else 0.0


def _missed_sort_key(item: LifecycleItem) -> float:
    # Most recently lost first: by submission if any, else by expiry
    return _timestamp(item.last_completed_at or item.expires_at)


def _split(items: list[LifecycleItem]) -> tuple[list[LifecycleItem], list[LifecycleItem]]:
    return items[:VISIBLE_LIMIT], items[VISIBLE_LIMIT:]


def categorize(
    tasks: list[Task],
    completions: list[Completion],
    now: datetime | None = None,
) -> CategorizedTasks:
    """
    Sort a user's tasks into active, pending, completed and missed buckets.

    `tasks` are the tasks assigned to the user, `completions` the user's
    completion records. When a task has several completions the last one
    wins. "now" is read once, so a single call classifies consistently.

    Pure function - no I/O.
    """
    now = now or datetime.now(timezone.utc)
    by_task = {c.task_id: c for c in completions}

    buckets: dict[Bucket, list[LifecycleItem]] = {bucket: [] for bucket in Bucket}
    for task in tasks:
        bucket, item = classify(task, by_task.get(task.id), now)
        if bucket is not None and item is not None:
            buckets[bucket].append(item)

    pending = sorted(buckets[Bucket.PENDING_REVIEW], key=lambda i: _timestamp(i.last_completed_at))
    completed = sorted(
        buckets[Bucket.COMPLETED], key=lambda i: _timestamp(i.last_completed_at), reverse=True
    )
    missed = sorted(buckets[Bucket.MISSED], key=_missed_sort_key, reverse=True)

    pending_visible, pending_overflow = _split(pending)
    completed_visible, completed_overflow = _split(completed)
    missed_visible, missed_overflow = _split(missed)

    return CategorizedTasks(
        active=buckets[Bucket.ACTIVE][:ACTIVE_LIMIT],
        pending_visible=pending_visible,
        pending_overflow=pending_overflow,
        completed_visible=completed_visible,
        completed_overflow=completed_overflow,
        missed_visible=missed_visible,
        missed_overflow=missed_overflow,
    )

"""Flat task feed organization: filter, sort, split into boxes and a list."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from .priority import is_past_deadline, score
from .tasks import LifecycleItem, TaskKind, TaskLike


class SortBy(Enum):
    PRIORITY = "priority"
    DEADLINE = "deadline"
    POINTS = "points"
    CREATED = "created"


class TaskState(Enum):
    """Status values a feed can be filtered on."""

    ACTIVE = "active"
    COMPLETED = "completed"
    EXPIRED = "expired"


@dataclass
class TaskFilter:
    """Feed filters. Every field that is set must match."""

    status: TaskState | None = None
    kind: TaskKind | None = None
    is_time_sensitive: bool | None = None


@dataclass
class DisplayConfig:
    """How a feed is laid out."""

    box_count: int = 10
    sort_by: SortBy = SortBy.PRIORITY
    filter_by: TaskFilter | None = None


@dataclass
class OrganizedTasks:
    """A feed split into the card boxes and the overflow list."""

    visible: list[TaskLike] = field(default_factory=list)
    overflow: list[TaskLike] = field(default_factory=list)
    total_count: int = 0


def _is_completed(task: TaskLike) -> bool:
    return isinstance(task, LifecycleItem) and task.is_completed


def _matches_status(task: TaskLike, status: TaskState, now: datetime) -> bool:
    match status:
        case TaskState.ACTIVE:
            return task.is_active and not _is_completed(task)
        case TaskState.COMPLETED:
            return _is_completed(task)
        case TaskState.EXPIRED:
            return is_past_deadline(task, now)


def filter_tasks(
    tasks: list[TaskLike],
    filter_by: TaskFilter | None,
    now: datetime,
) -> list[TaskLike]:
    """Apply all set filters. Returns a new list."""
    if not filter_by:
        return list(tasks)

    filtered = list(tasks)
    if filter_by.status is not None:
        filtered = [t for t in filtered if _matches_status(t, filter_by.status, now)]
    if filter_by.kind is not None:
        filtered = [t for t in filtered if t.kind == filter_by.kind]
    if filter_by.is_time_sensitive is not None:
        filtered = [t for t in filtered if t.is_time_sensitive == filter_by.is_time_sensitive]
    return filtered


def sort_tasks(tasks: list[TaskLike], sort_by: SortBy, now: datetime) -> list[TaskLike]:
    """
    Sort a feed. Stable, so ties keep their input order.

    Pure function - returns a new list.
    """
    match sort_by:
        case SortBy.PRIORITY:
            return sorted(tasks, key=lambda t: score(t, now), reverse=True)
        case SortBy.DEADLINE:
            # Tasks without a deadline go after every task that has one
            return sorted(
                tasks,
                key=lambda t: (
                    t.scheduled_deadline is None,
                    t.scheduled_deadline.timestamp() if t.scheduled_deadline else 0,
                ),
            )
        case SortBy.POINTS:
            return sorted(tasks, key=lambda t: -t.points)
        case SortBy.CREATED:
            return sorted(
                tasks,
                key=lambda t: -t.created_at.timestamp() if t.created_at else 0,
            )
    return list(tasks)


def organize(
    tasks: list[TaskLike],
    config: DisplayConfig | None = None,
    now: datetime | None = None,
) -> OrganizedTasks:
    """
    Organize a flat feed into the first `box_count` boxes and the rest.

    Pure function - no I/O, the input list is not modified.
    """
    config = config or DisplayConfig()
    if config.box_count < 0:
        raise ValueError(f"box_count must not be negative, got {config.box_count}")
    now = now or datetime.now(timezone.utc)

    processed = filter_tasks(tasks, config.filter_by, now)
    processed = sort_tasks(processed, config.sort_by, now)

    return OrganizedTasks(
        visible=processed[: config.box_count],
        overflow=processed[config.box_count :],
        total_count=len(processed),
    )

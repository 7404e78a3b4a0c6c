"""Functional core - pure business logic with no I/O."""

from .tasks import Task, Completion, CompletionStatus, LifecycleItem, TaskKind
from .priority import Urgency, score, task_urgency, is_past_deadline
from .organizer import DisplayConfig, OrganizedTasks, SortBy, TaskFilter, TaskState, organize
from .lifecycle import Bucket, CategorizedTasks, categorize, classify
from .expiration import (
    CompletionCheck,
    MissedMark,
    can_complete,
    find_missed_assignments,
    find_stale_pending,
)

__all__ = [
    # Model
    "Task",
    "Completion",
    "CompletionStatus",
    "LifecycleItem",
    "TaskKind",
    # Priority
    "Urgency",
    "score",
    "task_urgency",
    "is_past_deadline",
    # Feed
    "DisplayConfig",
    "OrganizedTasks",
    "SortBy",
    "TaskFilter",
    "TaskState",
    "organize",
    # Lifecycle
    "Bucket",
    "CategorizedTasks",
    "categorize",
    "classify",
    # Expiration
    "CompletionCheck",
    "MissedMark",
    "can_complete",
    "find_missed_assignments",
    "find_stale_pending",
]

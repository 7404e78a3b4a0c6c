"""Shared workflow layer between the CLI and the scheduler.

Each function fetches a snapshot through a TaskRepository, runs the pure
core over it, and returns the result (persisting sweep results where the
workflow calls for it).
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from .adapters.rewards_api import RewardsApiAdapter
from .adapters.snapshot import SnapshotRepository
from .config import Config
from .core.expiration import AUTO_REJECT_REASON, find_missed_assignments, find_stale_pending
from .core.lifecycle import CategorizedTasks, categorize
from .core.organizer import DisplayConfig, OrganizedTasks, organize
from .ports.task_repo import TaskRepository

logger = logging.getLogger(__name__)


@dataclass
class SweepResult:
    rejected: list[str]
    missed: list[str]
    dry_run: bool = False


def get_repository(config: Config) -> TaskRepository:
    """Resolve the task source from config: a snapshot file or the API."""
    if config.snapshot_file:
        return SnapshotRepository(config.snapshot_file)
    return RewardsApiAdapter(config)


def _require_user(user_id: str) -> None:
    if not user_id:
        raise ValueError("USER_ID is not configured")


def build_lifecycle(
    repo: TaskRepository,
    user_id: str,
    now: datetime | None = None,
) -> CategorizedTasks:
    """Load the user's tasks and completions and categorize them."""
    _require_user(user_id)
    now = now or datetime.now(timezone.utc)
    tasks = repo.fetch_tasks()
    completions = repo.fetch_completions(user_id)
    logger.debug(f"Categorizing {len(tasks)} tasks against {len(completions)} completions")
    return categorize(tasks, completions, now)


def build_feed(
    repo: TaskRepository,
    display: DisplayConfig,
    now: datetime | None = None,
) -> OrganizedTasks:
    """Load the task feed and organize it."""
    return organize(repo.fetch_tasks(), display, now)


def run_sweep(
    repo: TaskRepository,
    user_id: str,
    now: datetime | None = None,
    dry_run: bool = False,
) -> SweepResult:
    """
    Persist what the lifecycle view derives on the fly.

    Rejects pending completions past the 48-hour review window and records
    expired tasks the user never attempted as missed.
    """
    _require_user(user_id)
    now = now or datetime.now(timezone.utc)
    tasks = repo.fetch_tasks()
    completions = repo.fetch_completions(user_id)

    stale = find_stale_pending(completions, now)
    marks = find_missed_assignments(tasks, completions, user_id, now)
    result = SweepResult(
        rejected=[c.id for c in stale],
        missed=[m.task_id for m in marks],
        dry_run=dry_run,
    )

    if dry_run:
        logger.info(f"Dry run: would reject {len(stale)} and mark {len(marks)} missed")
        return result

    if stale:
        count = repo.reject_completions(result.rejected, AUTO_REJECT_REASON)
        logger.info(f"Rejected {count} expired pending completions")
    if marks:
        count = repo.record_missed(marks)
        logger.info(f"Recorded {count} missed assignments")
    return result

"""Task repository interface."""

from typing import Protocol

from taskdeck.core.expiration import MissedMark
from taskdeck.core.tasks import Completion, Task


class TaskRepository(Protocol):
    """Interface for loading a user's tasks and persisting sweep results."""

    def fetch_tasks(self) -> list[Task]:
        """Fetch the tasks assigned to the user."""
        ...

    def fetch_completions(self, user_id: str) -> list[Completion]:
        """Fetch the user's completion records."""
        ...

    def reject_completions(self, completion_ids: list[str], reason: str) -> int:
        """Reject pending completions. Returns how many were updated."""
        ...

    def record_missed(self, marks: list[MissedMark]) -> int:
        """Record missed assignments. Returns how many were created."""
        ...

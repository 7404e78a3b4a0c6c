"""JSON snapshot adapter - tasks and completions stored in a local file."""

import json
from datetime import datetime, timezone
from pathlib import Path

from taskdeck.core.expiration import MissedMark
from taskdeck.core.tasks import Completion, CompletionStatus, Task


class SnapshotRepository:
    """
    File-based task repository.

    Implements TaskRepository protocol. The file holds
    {"tasks": [...], "completions": [...]} in the platform's API shape.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def _load(self) -> dict:
        if not self.path.exists():
            return {"tasks": [], "completions": []}
        return json.loads(self.path.read_text())

    def _save(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2))

    def fetch_tasks(self) -> list[Task]:
        return [Task.from_api(t) for t in self._load().get("tasks", [])]

    def fetch_completions(self, user_id: str) -> list[Completion]:
        completions = [Completion.from_api(c) for c in self._load().get("completions", [])]
        return [c for c in completions if c.user_id == user_id]

    def reject_completions(self, completion_ids: list[str], reason: str) -> int:
        """Mark completions rejected in the file."""
        data = self._load()
        wanted = set(completion_ids)
        now = datetime.now(timezone.utc).isoformat()
        updated = 0
        for raw in data.get("completions", []):
            if raw["id"] in wanted:
                raw["status"] = CompletionStatus.REJECTED.value
                raw["rejectionReason"] = reason
                raw["missedAt"] = now
                updated += 1
        self._save(data)
        return updated

    def record_missed(self, marks: list[MissedMark]) -> int:
        """Append a completion record per missed assignment, skipping duplicates."""
        data = self._load()
        completions = data.setdefault("completions", [])
        existing = {(c.get("userId", ""), c["taskId"]) for c in completions}
        created = 0
        for mark in marks:
            if (mark.user_id, mark.task_id) in existing:
                continue
            completions.append(
                {
                    "id": f"missed-{mark.user_id}-{mark.task_id}",
                    **mark.to_dict(),
                    "completedAt": None,
                    "status": None,
                }
            )
            existing.add((mark.user_id, mark.task_id))
            created += 1
        self._save(data)
        return created

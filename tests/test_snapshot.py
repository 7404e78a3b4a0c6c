"""Tests for the JSON snapshot repository."""

import json
from datetime import datetime, timezone

import pytest

from taskdeck.adapters.snapshot import SnapshotRepository
from taskdeck.core.expiration import MissedMark
from taskdeck.core.tasks import CompletionStatus


@pytest.fixture
def snapshot_file(tmp_path):
    path = tmp_path / "snapshot.json"
    path.write_text(
        json.dumps(
            {
                "tasks": [
                    {"id": "t1", "title": "Follow", "points": 20, "taskType": "TWITTER_FOLLOW"},
                    {"id": "t2", "title": "Join", "points": 10, "expiresAt": "2025-01-15T11:00:00Z"},
                ],
                "completions": [
                    {"id": "c1", "taskId": "t1", "userId": "u1", "completedAt": "2025-01-12T10:00:00Z"},
                    {"id": "c2", "taskId": "t2", "userId": "u2", "completedAt": "2025-01-14T10:00:00Z"},
                ],
            }
        )
    )
    return path


class TestSnapshotRepository:
    def test_fetch_tasks(self, snapshot_file):
        tasks = SnapshotRepository(snapshot_file).fetch_tasks()
        assert [t.id for t in tasks] == ["t1", "t2"]

    def test_fetch_completions_filters_by_user(self, snapshot_file):
        completions = SnapshotRepository(snapshot_file).fetch_completions("u1")
        assert [c.id for c in completions] == ["c1"]

    def test_fetch_completions_never_returns_other_users(self, snapshot_file):
        assert SnapshotRepository(snapshot_file).fetch_completions("") == []
        assert SnapshotRepository(snapshot_file).fetch_completions("u3") == []

    def test_missing_file_is_empty(self, tmp_path):
        repo = SnapshotRepository(tmp_path / "nope.json")
        assert repo.fetch_tasks() == []
        assert repo.fetch_completions("u1") == []

    def test_reject_completions_writes_back(self, snapshot_file):
        repo = SnapshotRepository(snapshot_file)

        count = repo.reject_completions(["c1"], "too slow")

        assert count == 1
        completion = repo.fetch_completions("u1")[0]
        assert completion.status is CompletionStatus.REJECTED
        assert completion.missed_at is not None
        raw = json.loads(snapshot_file.read_text())["completions"][0]
        assert raw["rejectionReason"] == "too slow"

    def test_record_missed_skips_duplicates(self, snapshot_file):
        repo = SnapshotRepository(snapshot_file)
        missed_at = datetime(2025, 1, 15, 11, 0, tzinfo=timezone.utc)

        created = repo.record_missed(
            [
                MissedMark(user_id="u1", task_id="t2", missed_at=missed_at),
                MissedMark(user_id="u2", task_id="t2", missed_at=missed_at),
            ]
        )

        assert created == 1
        new = [c for c in repo.fetch_completions("u1") if c.task_id == "t2"]
        assert len(new) == 1
        assert new[0].missed_at == missed_at
        assert new[0].completed_at is None

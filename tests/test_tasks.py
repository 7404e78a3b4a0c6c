"""Tests for the task and completion model."""

from datetime import datetime, timezone

from taskdeck.core.tasks import (
    Completion,
    CompletionStatus,
    LifecycleItem,
    Task,
    TaskKind,
    parse_timestamp,
)


class TestParseTimestamp:
    def test_z_suffix(self):
        assert parse_timestamp("2025-01-15T10:00:00.000Z") == datetime(2025, 1, 15, 10, 0, tzinfo=timezone.utc)

    def test_naive_is_utc(self):
        assert parse_timestamp("2025-01-15T10:00:00").tzinfo == timezone.utc

    def test_empty(self):
        assert parse_timestamp(None) is None
        assert parse_timestamp("") is None


class TestTask:
    def test_from_api(self):
        task = Task.from_api(
            {
                "id": "t1",
                "title": "Follow us",
                "description": "Follow the project account",
                "points": 50,
                "taskType": "TWITTER_FOLLOW",
                "taskUrl": "https://x.com/project",
                "isActive": True,
                "createdAt": "2025-01-01T00:00:00Z",
                "expiresAt": "2025-01-16T00:00:00Z",
                "scheduledDeadline": None,
                "isTimeSensitive": True,
                "duration": 24,
                "campaignId": "c1",
            }
        )

        assert task.id == "t1"
        assert task.points == 50
        assert task.kind is TaskKind.TWITTER_FOLLOW
        assert task.url == "https://x.com/project"
        assert task.expires_at == datetime(2025, 1, 16, tzinfo=timezone.utc)
        assert task.scheduled_deadline is None
        assert task.is_time_sensitive is True
        assert task.campaign_id == "c1"

    def test_from_api_minimal(self):
        task = Task.from_api({"id": "t1", "title": "Invite a friend"})

        assert task.points == 0
        assert task.kind is TaskKind.CUSTOM
        assert task.is_active is True
        assert task.expires_at is None

    def test_unknown_kind_is_custom(self):
        task = Task.from_api({"id": "t1", "title": "x", "taskType": "DISCORD_JOIN"})
        assert task.kind is TaskKind.CUSTOM

    def test_to_dict_uses_api_keys(self):
        task = Task(id="t1", title="Join", points=10, kind=TaskKind.TELEGRAM_JOIN)
        data = task.to_dict()
        assert data["taskType"] == "TELEGRAM_JOIN"
        assert data["expiresAt"] is None


class TestCompletion:
    def test_from_api(self):
        completion = Completion.from_api(
            {
                "id": "c1",
                "taskId": "t1",
                "userId": "u1",
                "completedAt": "2025-01-15T10:00:00Z",
                "status": "AUTO_APPROVED",
            }
        )
        assert completion.status is CompletionStatus.AUTO_APPROVED
        assert completion.missed_at is None

    def test_status_defaults_to_pending(self):
        assert Completion.from_api({"id": "c1", "taskId": "t1"}).status is CompletionStatus.PENDING
        assert Completion.from_api({"id": "c1", "taskId": "t1", "status": None}).status is CompletionStatus.PENDING

    def test_platform_expired_row(self):
        completion = Completion.from_api(
            {
                "id": "c1",
                "taskId": "t1",
                "userId": "u1",
                "status": "EXPIRED",
                "missedAt": "2025-01-15T11:00:00Z",
            }
        )
        assert completion.status is CompletionStatus.EXPIRED
        assert completion.missed_at == datetime(2025, 1, 15, 11, 0, tzinfo=timezone.utc)

    def test_unknown_status_is_pending(self):
        completion = Completion.from_api({"id": "c1", "taskId": "t1", "status": "ON_HOLD"})
        assert completion.status is CompletionStatus.PENDING


class TestLifecycleItem:
    def test_exposes_task_attributes(self):
        task = Task(id="t1", title="Like", points=5, is_time_sensitive=True)
        item = LifecycleItem(task)
        assert item.id == "t1"
        assert item.points == 5
        assert item.is_time_sensitive is True

    def test_to_dict_adds_derived_flags(self):
        item = LifecycleItem(
            Task(id="t1", title="Like", points=5),
            is_completed=True,
            completion_status=CompletionStatus.APPROVED,
        )
        data = item.to_dict()
        assert data["isCompleted"] is True
        assert data["completionStatus"] == "APPROVED"
        assert data["title"] == "Like"

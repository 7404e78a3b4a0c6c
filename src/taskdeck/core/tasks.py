"""Pure task domain model - no I/O dependencies."""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum


class TaskKind(Enum):
    """What the user has to do to earn the points."""

    TWITTER_FOLLOW = "TWITTER_FOLLOW"
    TWITTER_LIKE = "TWITTER_LIKE"
    TWITTER_RETWEET = "TWITTER_RETWEET"
    TELEGRAM_JOIN = "TELEGRAM_JOIN"
    REFERRAL = "REFERRAL"
    CUSTOM = "CUSTOM"

    @classmethod
    def parse(cls, value: str | None) -> "TaskKind":
        """Unknown or missing task types fall back to CUSTOM."""
        try:
            return cls(value)
        except ValueError:
            return cls.CUSTOM


class CompletionStatus(Enum):
    """Review state of a submitted completion."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    AUTO_APPROVED = "AUTO_APPROVED"
    REJECTED = "REJECTED"
    # Written by the platform for tasks that expired before any attempt
    EXPIRED = "EXPIRED"

    @classmethod
    def parse(cls, value: str | None) -> "CompletionStatus":
        """Missing or unknown statuses are treated as PENDING."""
        try:
            return cls(value)
        except ValueError:
            return cls.PENDING


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp from the API. Naive values are UTC."""
    if not value:
        return None
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


@dataclass
class Task:
    """A completable unit of work carrying a point reward."""

    id: str
    title: str
    points: int
    kind: TaskKind = TaskKind.CUSTOM
    description: str = ""
    url: str | None = None
    is_active: bool = True
    created_at: datetime | None = None
    expires_at: datetime | None = None
    scheduled_deadline: datetime | None = None
    is_time_sensitive: bool = False
    duration: int | None = None
    campaign_id: str = ""

    @classmethod
    def from_api(cls, data: dict) -> "Task":
        """Create Task from a platform API payload."""
        return cls(
            id=data["id"],
            title=data["title"],
            points=data.get("points", 0),
            kind=TaskKind.parse(data.get("taskType")),
            description=data.get("description", "") or "",
            url=data.get("taskUrl"),
            is_active=data.get("isActive", True),
            created_at=parse_timestamp(data.get("createdAt")),
            expires_at=parse_timestamp(data.get("expiresAt")),
            scheduled_deadline=parse_timestamp(data.get("scheduledDeadline")),
            is_time_sensitive=bool(data.get("isTimeSensitive")),
            duration=data.get("duration"),
            campaign_id=data.get("campaignId", "") or "",
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "points": self.points,
            "taskType": self.kind.value,
            "taskUrl": self.url,
            "isActive": self.is_active,
            "createdAt": format_timestamp(self.created_at),
            "expiresAt": format_timestamp(self.expires_at),
            "scheduledDeadline": format_timestamp(self.scheduled_deadline),
            "isTimeSensitive": self.is_time_sensitive,
            "duration": self.duration,
            "campaignId": self.campaign_id,
        }


@dataclass
class Completion:
    """A user's record of having attempted a task."""

    id: str
    task_id: str
    user_id: str = ""
    completed_at: datetime | None = None
    status: CompletionStatus = CompletionStatus.PENDING
    missed_at: datetime | None = None

    @classmethod
    def from_api(cls, data: dict) -> "Completion":
        """Create Completion from a platform API payload."""
        return cls(
            id=data["id"],
            task_id=data["taskId"],
            user_id=data.get("userId", ""),
            completed_at=parse_timestamp(data.get("completedAt")),
            status=CompletionStatus.parse(data.get("status")),
            missed_at=parse_timestamp(data.get("missedAt")),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "taskId": self.task_id,
            "userId": self.user_id,
            "completedAt": format_timestamp(self.completed_at),
            "status": self.status.value,
            "missedAt": format_timestamp(self.missed_at),
        }


@dataclass(frozen=True)
class LifecycleItem:
    """
    A task as the lifecycle view shows it.

    Built by the categorizer from a task and the user's completion, never
    persisted.
    """

    task: Task
    is_completed: bool = False
    completed_today: bool = False
    last_completed_at: datetime | None = None
    completion_status: CompletionStatus | None = None
    missed_at: datetime | None = None

    # Task attributes the organizer and renderers read directly.
    @property
    def id(self) -> str:
        return self.task.id

    @property
    def title(self) -> str:
        return self.task.title

    @property
    def points(self) -> int:
        return self.task.points

    @property
    def kind(self) -> TaskKind:
        return self.task.kind

    @property
    def is_active(self) -> bool:
        return self.task.is_active

    @property
    def created_at(self) -> datetime | None:
        return self.task.created_at

    @property
    def expires_at(self) -> datetime | None:
        return self.task.expires_at

    @property
    def scheduled_deadline(self) -> datetime | None:
        return self.task.scheduled_deadline

    @property
    def is_time_sensitive(self) -> bool:
        return self.task.is_time_sensitive

    def to_dict(self) -> dict:
        data = self.task.to_dict()
        data.update(
            {
                "isCompleted": self.is_completed,
                "completedToday": self.completed_today,
                "lastCompletedAt": format_timestamp(self.last_completed_at),
                "completionStatus": self.completion_status.value if self.completion_status else None,
                "missedAt": format_timestamp(self.missed_at),
            }
        )
        return data


# Anything the organizer and scorer can rank.
TaskLike = Task | LifecycleItem

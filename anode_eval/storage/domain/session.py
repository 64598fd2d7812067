"""Live session model: one in-flight or finished run as a dashboard sees it."""

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class SessionStatus(StrEnum):
    QUEUED = "queued"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


def _now() -> datetime:
    return datetime.now(UTC)


class SessionInfo(BaseModel, frozen=True):
    session_id: str
    eval_id: str
    eval_name: str
    prompt_id: str
    agent_id: str
    status: SessionStatus = SessionStatus.QUEUED
    started_at: datetime = Field(default_factory=_now)
    completed_at: datetime | None = None
    progress_message: str = "Waiting to start..."
    tests_passed: int = 0
    tests_total: int = 0
    error: str | None = None

    def running(self) -> "SessionInfo":
        return self.model_copy(
            update={
                "status": SessionStatus.RUNNING,
                "started_at": _now(),
                "progress_message": "Agent is working...",
            }
        )

    def completed(self, tests_passed: int, tests_total: int) -> "SessionInfo":
        return self.model_copy(
            update={
                "status": SessionStatus.COMPLETED,
                "completed_at": _now(),
                "tests_passed": tests_passed,
                "tests_total": tests_total,
                "progress_message": f"Completed: {tests_passed}/{tests_total} tests passed",
            }
        )

    def failed(self, error: str) -> "SessionInfo":
        return self.model_copy(
            update={
                "status": SessionStatus.FAILED,
                "completed_at": _now(),
                "error": error,
                "progress_message": f"Failed: {error}",
            }
        )

    def duration_seconds(self, now: datetime | None = None) -> float:
        end = self.completed_at or now or _now()
        return (end - self.started_at).total_seconds()

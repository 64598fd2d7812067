"""EvalRunResult: the record of one (prompt, agent) run and its state machine."""

from typing import TypeAlias
from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, Field

from anode_eval.evaluation.domain.errors import RunStateError
from anode_eval.harness.domain.result import TestSuiteResult

RunId: TypeAlias = str


class RunStatus(StrEnum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self not in (RunStatus.PENDING, RunStatus.RUNNING)


def _now() -> datetime:
    return datetime.now(UTC)


class EvalRunResult(BaseModel):
    """Mutable run record: Pending → Running → Completed | Failed.

    ``completed_at`` is set exactly when the status becomes terminal. Once
    terminal, a run can never transition again.
    """

    run_id: RunId
    prompt_id: str
    agent_id: str
    agent_tool: str
    model: str
    started_at: datetime = Field(default_factory=_now)
    completed_at: datetime | None = None
    duration_seconds: float | None = None
    status: RunStatus = RunStatus.PENDING
    test_results: TestSuiteResult | None = None
    score: float | None = None
    agent_logs: str | None = None
    error: str | None = None
    sandbox_name: str | None = None
    agent_exit_code: int | None = None

    def mark_running(self) -> None:
        if self.status is not RunStatus.PENDING:
            raise RunStateError(run_id=self.run_id, current=self.status, target=RunStatus.RUNNING)
        self.status = RunStatus.RUNNING

    def complete_with_results(self, test_results: TestSuiteResult) -> None:
        self._finish(RunStatus.COMPLETED)
        self.test_results = test_results
        self.score = test_results.pass_rate()

    def fail_with_error(self, error: str) -> None:
        self._finish(RunStatus.FAILED)
        self.error = error
        self.score = 0.0

    def _finish(self, status: RunStatus) -> None:
        if self.status.is_terminal:
            raise RunStateError(run_id=self.run_id, current=self.status, target=status)
        self.completed_at = _now()
        self.duration_seconds = max(
            (self.completed_at - self.started_at).total_seconds(), 0.0
        )
        self.status = status

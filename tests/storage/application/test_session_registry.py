"""Tests for SessionRegistry and the SessionInfo model."""

from datetime import UTC, datetime, timedelta

from anode_eval.storage.application.session_registry import SessionRegistry
from anode_eval.storage.domain.session import SessionInfo, SessionStatus


def _registry_with_queued_run() -> SessionRegistry:
    registry = SessionRegistry()
    registry.evaluation_started(
        eval_id="e1",
        name="katas",
        total_runs=1,
        agent_ids=["codex-gpt-5"],
        runs_per_agent=1,
        parallelism=1,
    )
    registry.run_queued(eval_id="e1", run_id="r1", prompt_id="p1", agent_id="codex-gpt-5")
    return registry


class TestSessionRegistry:
    def test_queued_run_creates_session(self) -> None:
        registry = _registry_with_queued_run()

        session = registry.get_session("r1")

        assert session is not None
        assert session.status is SessionStatus.QUEUED
        assert session.eval_name == "katas"
        assert session.progress_message == "Waiting to start..."

    def test_started_run_is_running(self) -> None:
        registry = _registry_with_queued_run()

        registry.run_started(eval_id="e1", run_id="r1", prompt_id="p1", agent_id="codex-gpt-5")

        session = registry.get_session("r1")
        assert session is not None
        assert session.status is SessionStatus.RUNNING
        assert session.progress_message == "Agent is working..."

    def test_completed_run(self) -> None:
        registry = _registry_with_queued_run()

        registry.run_completed(
            eval_id="e1",
            run_id="r1",
            prompt_id="p1",
            agent_id="codex-gpt-5",
            score=60.0,
            tests_passed=3,
            tests_total=5,
        )

        session = registry.get_session("r1")
        assert session is not None
        assert session.status is SessionStatus.COMPLETED
        assert session.progress_message == "Completed: 3/5 tests passed"
        assert session.completed_at is not None

    def test_failed_run(self) -> None:
        registry = _registry_with_queued_run()

        registry.run_failed(
            eval_id="e1", run_id="r1", prompt_id="p1", agent_id="codex-gpt-5", reason="Timeout"
        )

        session = registry.get_session("r1")
        assert session is not None
        assert session.status is SessionStatus.FAILED
        assert session.error == "Timeout"
        assert session.progress_message == "Failed: Timeout"

    def test_events_for_unknown_runs_are_ignored(self) -> None:
        registry = SessionRegistry()

        registry.run_started(eval_id="e1", run_id="ghost", prompt_id="p1", agent_id="a")

        assert registry.get_sessions() == []

    def test_sessions_for_eval(self) -> None:
        registry = _registry_with_queued_run()
        registry.run_queued(eval_id="e2", run_id="r2", prompt_id="p1", agent_id="a")

        assert [s.session_id for s in registry.get_sessions_for_eval("e1")] == ["r1"]
        assert len(registry.get_sessions()) == 2


class TestSessionInfo:
    def test_duration_of_finished_session(self) -> None:
        started = datetime(2026, 1, 1, tzinfo=UTC)
        session = SessionInfo(
            session_id="r",
            eval_id="e",
            eval_name="n",
            prompt_id="p",
            agent_id="a",
            started_at=started,
            completed_at=started + timedelta(seconds=90),
        )

        assert session.duration_seconds() == 90.0

    def test_duration_of_live_session(self) -> None:
        started = datetime(2026, 1, 1, tzinfo=UTC)
        session = SessionInfo(
            session_id="r",
            eval_id="e",
            eval_name="n",
            prompt_id="p",
            agent_id="a",
            started_at=started,
        )

        assert session.duration_seconds(now=started + timedelta(seconds=5)) == 5.0

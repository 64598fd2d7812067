"""Tests for the EvalRunResult state machine and EvaluationResults aggregate."""

import pytest

from anode_eval.evaluation.domain.errors import ResultsFinalizedError, RunStateError
from anode_eval.evaluation.domain.results import EvaluationResults
from anode_eval.evaluation.domain.run import EvalRunResult, RunStatus
from anode_eval.harness.domain.result import TestSuiteResult


def _run(run_id: str = "run-1", agent_id: str = "codex-gpt-5") -> EvalRunResult:
    return EvalRunResult(
        run_id=run_id,
        prompt_id="p1",
        agent_id=agent_id,
        agent_tool="codex",
        model="gpt-5",
    )


class TestRunStatus:
    def test_terminal_statuses(self) -> None:
        assert not RunStatus.PENDING.is_terminal
        assert not RunStatus.RUNNING.is_terminal
        assert RunStatus.COMPLETED.is_terminal
        assert RunStatus.FAILED.is_terminal
        assert RunStatus.TIMEOUT.is_terminal
        assert RunStatus.CANCELLED.is_terminal


class TestEvalRunResult:
    def test_starts_pending(self) -> None:
        run = _run()
        assert run.status is RunStatus.PENDING
        assert run.completed_at is None
        assert run.score is None

    def test_complete_with_results(self) -> None:
        run = _run()
        run.mark_running()

        run.complete_with_results(TestSuiteResult(total=4, passed=3, failed=1))

        assert run.status is RunStatus.COMPLETED
        assert run.score == 75.0
        assert run.completed_at is not None
        assert run.duration_seconds is not None and run.duration_seconds >= 0
        assert run.error is None

    def test_complete_with_no_tests_scores_zero(self) -> None:
        run = _run()
        run.mark_running()

        run.complete_with_results(TestSuiteResult())

        assert run.score == 0.0

    def test_fail_with_error(self) -> None:
        run = _run()
        run.mark_running()

        run.fail_with_error("Sandbox failed")

        assert run.status is RunStatus.FAILED
        assert run.error == "Sandbox failed"
        assert run.score == 0.0
        assert run.test_results is None
        assert run.completed_at is not None

    def test_terminal_run_cannot_transition(self) -> None:
        run = _run()
        run.mark_running()
        run.fail_with_error("boom")

        with pytest.raises(RunStateError):
            run.complete_with_results(TestSuiteResult(total=1, passed=1))
        with pytest.raises(RunStateError):
            run.fail_with_error("again")

        assert run.error == "boom"

    def test_mark_running_twice_raises(self) -> None:
        run = _run()
        run.mark_running()

        with pytest.raises(RunStateError, match="already running"):
            run.mark_running()

    def test_round_trips_through_json(self) -> None:
        run = _run()
        run.mark_running()
        run.complete_with_results(TestSuiteResult(total=2, passed=2))

        restored = EvalRunResult.model_validate_json(run.model_dump_json())

        assert restored == run


class TestEvaluationResults:
    def _finished_run(self, run_id: str, agent_id: str, passed: int, total: int) -> EvalRunResult:
        run = _run(run_id=run_id, agent_id=agent_id)
        run.mark_running()
        run.complete_with_results(TestSuiteResult(total=total, passed=passed, failed=total - passed))
        return run

    def test_add_run_keeps_arrival_order(self) -> None:
        results = EvaluationResults(name="e", eval_id="e1")
        results.add_run(_run("b"))
        results.add_run(_run("a"))

        assert [r.run_id for r in results.runs] == ["b", "a"]

    def test_finalize_computes_scores(self) -> None:
        results = EvaluationResults(name="e", eval_id="e1")
        results.add_run(self._finished_run("r1", "agent-a", passed=1, total=2))
        results.add_run(self._finished_run("r2", "agent-b", passed=2, total=2))

        results.finalize()

        assert results.is_finalized
        assert [s.agent_id for s in results.agent_scores] == ["agent-b", "agent-a"]
        assert results.summary.completed == 2
        assert results.summary.best_agent == "agent-b"

    def test_finalize_twice_raises(self) -> None:
        results = EvaluationResults(name="e", eval_id="e1")
        results.finalize()

        with pytest.raises(ResultsFinalizedError):
            results.finalize()

    def test_add_after_finalize_raises(self) -> None:
        results = EvaluationResults(name="e", eval_id="e1")
        results.finalize()

        with pytest.raises(ResultsFinalizedError):
            results.add_run(_run())

        assert results.runs == []

    def test_calculate_scores_is_repeatable(self) -> None:
        results = EvaluationResults(name="e", eval_id="e1")
        results.add_run(self._finished_run("r1", "agent-a", passed=1, total=2))

        results.calculate_scores()
        first = results.agent_scores
        results.calculate_scores()

        assert results.agent_scores == first

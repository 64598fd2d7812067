"""Observer port for the evaluation domain: defines events in domain language."""

from typing import Protocol


class EvaluationObserver(Protocol):
    """Observer port emitting structured events during an evaluation.

    Implementations may log to structlog, render progress, track live
    sessions or record for tests.
    """

    def evaluation_started(
        self,
        eval_id: str,
        name: str,
        total_runs: int,
        agent_ids: list[str],
        runs_per_agent: int,
        parallelism: int,
    ) -> None: ...

    def evaluation_completed(
        self,
        eval_id: str,
        total_runs: int,
        elapsed_seconds: float,
    ) -> None: ...

    def evaluation_progress(
        self,
        eval_id: str,
        agent_id: str,
        completed: int,
        total: int,
    ) -> None: ...

    def run_queued(
        self,
        eval_id: str,
        run_id: str,
        prompt_id: str,
        agent_id: str,
    ) -> None: ...

    def run_started(
        self,
        eval_id: str,
        run_id: str,
        prompt_id: str,
        agent_id: str,
    ) -> None: ...

    def run_completed(
        self,
        eval_id: str,
        run_id: str,
        prompt_id: str,
        agent_id: str,
        score: float,
        tests_passed: int,
        tests_total: int,
    ) -> None: ...

    def run_failed(
        self,
        eval_id: str,
        run_id: str,
        prompt_id: str,
        agent_id: str,
        reason: str,
    ) -> None: ...

    def sandbox_left_running(
        self,
        eval_id: str,
        run_id: str,
        sandbox_name: str,
    ) -> None: ...

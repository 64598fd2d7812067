"""StructlogEvaluationObserver: production observer that delegates to structlog."""

import structlog


class StructlogEvaluationObserver:
    """Logs evaluation domain events to structlog.

    Does NOT inherit from EvaluationObserver (structural typing via Protocol).
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def evaluation_started(
        self,
        eval_id: str,
        name: str,
        total_runs: int,
        agent_ids: list[str],
        runs_per_agent: int,
        parallelism: int,
    ) -> None:
        self._log.info(
            "evaluation.started",
            eval_id=eval_id,
            name=name,
            total_runs=total_runs,
            agent_ids=agent_ids,
            runs_per_agent=runs_per_agent,
            parallelism=parallelism,
        )

    def evaluation_completed(
        self,
        eval_id: str,
        total_runs: int,
        elapsed_seconds: float,
    ) -> None:
        self._log.info(
            "evaluation.completed",
            eval_id=eval_id,
            total_runs=total_runs,
            elapsed_seconds=round(elapsed_seconds, 2),
        )

    def evaluation_progress(
        self,
        eval_id: str,
        agent_id: str,
        completed: int,
        total: int,
    ) -> None:
        self._log.info(
            "evaluation.progress",
            eval_id=eval_id,
            agent_id=agent_id,
            completed=completed,
            total=total,
            percent=round(100.0 * completed / total, 1) if total else 0.0,
        )

    def run_queued(
        self,
        eval_id: str,
        run_id: str,
        prompt_id: str,
        agent_id: str,
    ) -> None:
        self._log.debug(
            "evaluation.run.queued",
            eval_id=eval_id,
            run_id=run_id,
            prompt_id=prompt_id,
            agent_id=agent_id,
        )

    def run_started(
        self,
        eval_id: str,
        run_id: str,
        prompt_id: str,
        agent_id: str,
    ) -> None:
        self._log.info(
            "evaluation.run.started",
            eval_id=eval_id,
            run_id=run_id,
            prompt_id=prompt_id,
            agent_id=agent_id,
        )

    def run_completed(
        self,
        eval_id: str,
        run_id: str,
        prompt_id: str,
        agent_id: str,
        score: float,
        tests_passed: int,
        tests_total: int,
    ) -> None:
        self._log.info(
            "evaluation.run.completed",
            eval_id=eval_id,
            run_id=run_id,
            prompt_id=prompt_id,
            agent_id=agent_id,
            score=round(score, 2),
            tests_passed=tests_passed,
            tests_total=tests_total,
        )

    def run_failed(
        self,
        eval_id: str,
        run_id: str,
        prompt_id: str,
        agent_id: str,
        reason: str,
    ) -> None:
        self._log.error(
            "evaluation.run.failed",
            eval_id=eval_id,
            run_id=run_id,
            prompt_id=prompt_id,
            agent_id=agent_id,
            reason=reason,
        )

    def sandbox_left_running(
        self,
        eval_id: str,
        run_id: str,
        sandbox_name: str,
    ) -> None:
        self._log.warning(
            "evaluation.sandbox_left_running",
            eval_id=eval_id,
            run_id=run_id,
            sandbox_name=sandbox_name,
            message="Timed-out sandbox was not deleted; remove it manually",
        )

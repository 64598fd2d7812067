"""CompositeEvaluationObserver: fans out all events to a list of observers."""

from anode_eval.evaluation.domain.observer import EvaluationObserver


class CompositeEvaluationObserver:
    """Delegates every observer event to each observer in order.

    Does NOT inherit from EvaluationObserver (structural typing via Protocol).
    """

    def __init__(self, observers: list[EvaluationObserver]) -> None:
        self._observers = observers

    def evaluation_started(
        self,
        eval_id: str,
        name: str,
        total_runs: int,
        agent_ids: list[str],
        runs_per_agent: int,
        parallelism: int,
    ) -> None:
        for obs in self._observers:
            obs.evaluation_started(
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
        for obs in self._observers:
            obs.evaluation_completed(
                eval_id=eval_id,
                total_runs=total_runs,
                elapsed_seconds=elapsed_seconds,
            )

    def evaluation_progress(
        self,
        eval_id: str,
        agent_id: str,
        completed: int,
        total: int,
    ) -> None:
        for obs in self._observers:
            obs.evaluation_progress(
                eval_id=eval_id,
                agent_id=agent_id,
                completed=completed,
                total=total,
            )

    def run_queued(
        self,
        eval_id: str,
        run_id: str,
        prompt_id: str,
        agent_id: str,
    ) -> None:
        for obs in self._observers:
            obs.run_queued(
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
        for obs in self._observers:
            obs.run_started(
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
        for obs in self._observers:
            obs.run_completed(
                eval_id=eval_id,
                run_id=run_id,
                prompt_id=prompt_id,
                agent_id=agent_id,
                score=score,
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
        for obs in self._observers:
            obs.run_failed(
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
        for obs in self._observers:
            obs.sandbox_left_running(
                eval_id=eval_id,
                run_id=run_id,
                sandbox_name=sandbox_name,
            )

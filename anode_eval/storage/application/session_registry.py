"""SessionRegistry: tracks live runs for dashboards by observing an evaluation."""

from anode_eval.storage.domain.session import SessionInfo


class SessionRegistry:
    """In-memory view of every run seen so far, keyed by run id.

    Satisfies the EvaluationObserver protocol structurally, so it can sit in a
    CompositeEvaluationObserver next to the logging observers. Events for
    runs it has not seen queued are ignored.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, SessionInfo] = {}
        self._eval_names: dict[str, str] = {}

    def get_sessions(self) -> list[SessionInfo]:
        return list(self._sessions.values())

    def get_sessions_for_eval(self, eval_id: str) -> list[SessionInfo]:
        return [s for s in self._sessions.values() if s.eval_id == eval_id]

    def get_session(self, session_id: str) -> SessionInfo | None:
        return self._sessions.get(session_id)

    def evaluation_started(
        self,
        eval_id: str,
        name: str,
        total_runs: int,
        agent_ids: list[str],
        runs_per_agent: int,
        parallelism: int,
    ) -> None:
        self._eval_names[eval_id] = name

    def evaluation_completed(
        self,
        eval_id: str,
        total_runs: int,
        elapsed_seconds: float,
    ) -> None:
        pass

    def evaluation_progress(
        self,
        eval_id: str,
        agent_id: str,
        completed: int,
        total: int,
    ) -> None:
        pass

    def run_queued(
        self,
        eval_id: str,
        run_id: str,
        prompt_id: str,
        agent_id: str,
    ) -> None:
        self._sessions[run_id] = SessionInfo(
            session_id=run_id,
            eval_id=eval_id,
            eval_name=self._eval_names.get(eval_id, ""),
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
        session = self._sessions.get(run_id)
        if session is not None:
            self._sessions[run_id] = session.running()

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
        session = self._sessions.get(run_id)
        if session is not None:
            self._sessions[run_id] = session.completed(
                tests_passed=tests_passed, tests_total=tests_total
            )

    def run_failed(
        self,
        eval_id: str,
        run_id: str,
        prompt_id: str,
        agent_id: str,
        reason: str,
    ) -> None:
        session = self._sessions.get(run_id)
        if session is not None:
            self._sessions[run_id] = session.failed(error=reason)

    def sandbox_left_running(
        self,
        eval_id: str,
        run_id: str,
        sandbox_name: str,
    ) -> None:
        pass

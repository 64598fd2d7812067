"""EvaluationRunner: dispatches every (prompt, agent) combination to a sandbox."""

import asyncio
import time
import uuid
from pathlib import Path

from anode_eval.config.domain.agent import AgentSpec
from anode_eval.config.domain.config import EvalConfig
from anode_eval.config.domain.prompt import PromptSpec
from anode_eval.core.errors import AnodeEvalError
from anode_eval.evaluation.domain.errors import ResultsFinalizedError
from anode_eval.evaluation.domain.observer import EvaluationObserver
from anode_eval.evaluation.domain.plan import DryRunPlan, effective_timeout_hours
from anode_eval.evaluation.domain.results import EvaluationResults
from anode_eval.evaluation.domain.run import EvalRunResult, RunStatus
from anode_eval.harness.domain.extractor import extract_status_record, extract_test_output
from anode_eval.harness.domain.parsers import parse_test_output
from anode_eval.sandbox.application.lifecycle import SandboxLifecycleManager
from anode_eval.sandbox.domain.errors import SandboxError
from anode_eval.sandbox.domain.job import JobSpec
from anode_eval.sandbox.domain.orchestrator import SandboxHandle
from anode_eval.sandbox.domain.status import TIMEOUT_REASON, SandboxState
from anode_eval.storage.infrastructure.json_store import save_results


class EvaluationRunner:
    """Runs every combination of an EvalConfig in its own sandbox.

    The runner only knows the lifecycle manager and the observer port, so
    any SandboxOrchestrator backend can be plugged in. A failing job ends as
    a failed run in the results; it never cancels its siblings.
    """

    def __init__(
        self,
        config: EvalConfig,
        lifecycle: SandboxLifecycleManager,
        api_keys: dict[str, str],
        observer: EvaluationObserver,
        namespace: str = "default",
        poll_interval_seconds: float | None = None,
    ) -> None:
        self._config = config
        self._lifecycle = lifecycle
        self._api_keys = api_keys
        self._observer = observer
        self._namespace = namespace
        self._poll_interval = (
            poll_interval_seconds
            if poll_interval_seconds is not None
            else config.settings.poll_interval_seconds
        )
        self._results = EvaluationResults(name=config.name, eval_id=str(uuid.uuid4()))
        self._results_lock = asyncio.Lock()

    @property
    def eval_id(self) -> str:
        return self._results.eval_id

    async def run(self, parallelism: int = 1, timeout_hours: float = 6) -> EvaluationResults:
        """Run all combinations, at most *parallelism* sandboxes at a time.

        *timeout_hours* caps every job's own timeout. Results are appended in
        completion order and finalized once every job has ended.

        Raises:
            ValueError: if parallelism is less than 1 or timeout_hours is not positive.
            ResultsFinalizedError: if this runner has already run.
        """
        if parallelism < 1:
            raise ValueError(f"parallelism must be at least 1, got {parallelism}")
        if timeout_hours <= 0:
            raise ValueError(f"timeout_hours must be positive, got {timeout_hours}")
        if self._results.is_finalized:
            raise ResultsFinalizedError(eval_id=self._results.eval_id)

        combinations = self._config.combinations()
        eval_id = self._results.eval_id
        self._observer.evaluation_started(
            eval_id=eval_id,
            name=self._config.name,
            total_runs=len(combinations),
            agent_ids=list(dict.fromkeys(agent.id() for agent in self._config.agents)),
            runs_per_agent=len(self._config.prompts),
            parallelism=parallelism,
        )
        started_at = time.monotonic()

        sem = asyncio.Semaphore(parallelism)
        # Shared across tasks; only touched while holding _results_lock.
        completed_count: list[int] = [0]

        async with asyncio.TaskGroup() as tg:
            for prompt, agent in combinations:
                tg.create_task(
                    self._run_one_job(
                        sem=sem,
                        prompt=prompt,
                        agent=agent,
                        timeout_cap_hours=timeout_hours,
                        total_runs=len(combinations),
                        completed_count=completed_count,
                    )
                )

        async with self._results_lock:
            self._results.finalize()

        self._observer.evaluation_completed(
            eval_id=eval_id,
            total_runs=len(self._results.runs),
            elapsed_seconds=time.monotonic() - started_at,
        )
        return self._results

    async def results(self) -> EvaluationResults:
        """Consistent snapshot of the results collected so far."""
        async with self._results_lock:
            return self._results.model_copy(deep=True)

    async def save_results(self, output_dir: Path) -> tuple[Path, Path]:
        """Write the JSON snapshot and Markdown report; returns both paths."""
        snapshot = await self.results()
        return save_results(results=snapshot, output_dir=output_dir)

    @staticmethod
    def preview(config: EvalConfig, timeout_hours: float = 6) -> DryRunPlan:
        return DryRunPlan.from_config(config=config, cap_hours=timeout_hours)

    async def _run_one_job(
        self,
        sem: asyncio.Semaphore,
        prompt: PromptSpec,
        agent: AgentSpec,
        timeout_cap_hours: float,
        total_runs: int,
        completed_count: list[int],
    ) -> None:
        """Execute one combination end to end and record its run.

        The semaphore permit is held from spawn until the run is recorded,
        including cleanup.
        """
        eval_id = self._results.eval_id
        run_id = str(uuid.uuid4())
        agent_id = agent.id()
        self._observer.run_queued(
            eval_id=eval_id, run_id=run_id, prompt_id=prompt.id, agent_id=agent_id
        )

        async with sem:
            run = EvalRunResult(
                run_id=run_id,
                prompt_id=prompt.id,
                agent_id=agent_id,
                agent_tool=agent.tool.display_name,
                model=agent.resolved_model,
            )
            run.mark_running()
            self._observer.run_started(
                eval_id=eval_id, run_id=run_id, prompt_id=prompt.id, agent_id=agent_id
            )

            try:
                await self._execute(run=run, prompt=prompt, agent=agent, cap_hours=timeout_cap_hours)
            except AnodeEvalError as exc:
                if not run.status.is_terminal:
                    run.fail_with_error(str(exc))
            except Exception as exc:
                if not run.status.is_terminal:
                    run.fail_with_error(f"Unexpected error: {exc}")

            async with self._results_lock:
                self._results.add_run(run)
                completed_count[0] += 1
                self._observer.evaluation_progress(
                    eval_id=eval_id,
                    agent_id=agent_id,
                    completed=completed_count[0],
                    total=total_runs,
                )

        if run.status is RunStatus.COMPLETED and run.test_results is not None:
            self._observer.run_completed(
                eval_id=eval_id,
                run_id=run_id,
                prompt_id=prompt.id,
                agent_id=agent_id,
                score=run.score or 0.0,
                tests_passed=run.test_results.passed,
                tests_total=run.test_results.total,
            )
        else:
            self._observer.run_failed(
                eval_id=eval_id,
                run_id=run_id,
                prompt_id=prompt.id,
                agent_id=agent_id,
                reason=run.error or run.status.value,
            )

    async def _execute(
        self,
        run: EvalRunResult,
        prompt: PromptSpec,
        agent: AgentSpec,
        cap_hours: float,
    ) -> None:
        timeout_hours = effective_timeout_hours(prompt, self._config.settings, cap_hours)
        test_command, test_args = prompt.test_harness.test_command()
        job = JobSpec(
            agent=agent,
            prompt=prompt.prompt,
            eval_path=prompt.eval_path,
            run_id=run.run_id,
            namespace=self._namespace,
            timeout_hours=timeout_hours,
            api_keys=self._api_keys,
            test_command=test_command,
            test_args=test_args,
            setup_commands=prompt.setup_commands,
        )

        try:
            handle = await self._lifecycle.spawn(job)
        except SandboxError as exc:
            run.fail_with_error(f"Failed to spawn sandbox: {exc.reason}")
            return
        run.sandbox_name = handle

        try:
            await self._collect(
                run=run, handle=handle, prompt=prompt, max_duration=timeout_hours * 3600
            )
        finally:
            await self._cleanup(run=run, handle=handle)

    async def _collect(
        self,
        run: EvalRunResult,
        handle: SandboxHandle,
        prompt: PromptSpec,
        max_duration: float,
    ) -> None:
        """Wait for the sandbox, then turn its logs into a terminal run state."""
        try:
            status = await self._lifecycle.wait_for_completion(
                handle, poll_interval=self._poll_interval, max_duration=max_duration
            )
        except SandboxError as exc:
            run.fail_with_error(f"Error waiting for sandbox: {exc.reason}")
            run.agent_logs = await self._try_logs(handle)
            return

        logs = await self._try_logs(handle)
        run.agent_logs = logs
        if logs is not None:
            record = extract_status_record(logs)
            if record is not None:
                run.agent_exit_code = record.agent_exit_code

        match status.state:
            case SandboxState.SUCCEEDED:
                if logs is None:
                    run.fail_with_error("Failed to retrieve pod logs")
                    return
                test_output = extract_test_output(logs)
                if test_output is None:
                    run.fail_with_error("No test output found in pod logs")
                    return
                try:
                    suite = parse_test_output(prompt.test_harness, test_output)
                except AnodeEvalError as exc:
                    run.fail_with_error(f"Failed to parse test results: {exc}")
                    return
                run.complete_with_results(suite)
            case SandboxState.FAILED:
                run.fail_with_error(status.reason or "Sandbox failed")
            case _:
                run.fail_with_error(f"Unexpected sandbox status: {status.describe()}")

    async def _try_logs(self, handle: SandboxHandle) -> str | None:
        try:
            return await self._lifecycle.logs(handle)
        except SandboxError:
            return None

    async def _cleanup(self, run: EvalRunResult, handle: SandboxHandle) -> None:
        settings = self._config.settings
        timed_out = run.status is RunStatus.FAILED and run.error == TIMEOUT_REASON
        if settings.cleanup_on_complete or (timed_out and settings.delete_on_timeout):
            await self._lifecycle.delete(handle)
            return
        if timed_out:
            self._observer.sandbox_left_running(
                eval_id=self._results.eval_id,
                run_id=run.run_id,
                sandbox_name=handle,
            )

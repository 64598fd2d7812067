"""SandboxLifecycleManager: spawn, poll, collect and tear down sandboxes."""

import asyncio

from anode_eval.sandbox.domain.errors import SandboxError
from anode_eval.sandbox.domain.job import JobSpec
from anode_eval.sandbox.domain.manifest import RUN_ID_LABEL, build_manifest
from anode_eval.sandbox.domain.observer import SandboxObserver
from anode_eval.sandbox.domain.orchestrator import SandboxHandle, SandboxOrchestrator
from anode_eval.sandbox.domain.status import (
    TIMEOUT_REASON,
    SandboxState,
    SandboxStatus,
    classify_observation,
)


class SandboxLifecycleManager:
    """Drives one sandbox at a time through spawn → poll → logs → delete.

    Holds no per-sandbox state: every method takes the handle returned by
    ``spawn``, so one manager is shared by all concurrent jobs.
    """

    def __init__(
        self,
        orchestrator: SandboxOrchestrator,
        observer: SandboxObserver,
    ) -> None:
        self._orchestrator = orchestrator
        self._observer = observer

    async def spawn(self, job: JobSpec) -> SandboxHandle:
        """Build the manifest for *job* and submit it.

        Raises:
            SandboxSpawnError: if the orchestrator rejects the sandbox.
        """
        manifest = build_manifest(job)
        handle = await self._orchestrator.spawn(manifest)
        self._observer.sandbox_spawned(name=manifest.name, namespace=manifest.namespace)
        return handle

    async def status(self, handle: SandboxHandle) -> SandboxStatus:
        """Read and classify the current state of *handle*.

        Raises:
            SandboxStatusError: if the orchestrator cannot report the state.
        """
        observation = await self._orchestrator.status(handle)
        return classify_observation(observation)

    async def wait_for_completion(
        self,
        handle: SandboxHandle,
        poll_interval: float,
        max_duration: float,
    ) -> SandboxStatus:
        """Poll until *handle* reaches a terminal state or *max_duration* elapses.

        The first check happens immediately. On deadline the result is
        ``Failed("Timeout")`` and the sandbox is left in place; deleting it
        is the caller's decision.

        Raises:
            SandboxStatusError: if a status check fails.
        """
        try:
            async with asyncio.timeout(max_duration):
                while True:
                    status = await self.status(handle)
                    self._observer.sandbox_status_polled(
                        handle=handle, state=status.state.value
                    )
                    if status.is_terminal:
                        self._observer.sandbox_completed(
                            handle=handle,
                            state=status.state.value,
                            reason=status.reason,
                        )
                        return status
                    if status.state is SandboxState.UNKNOWN:
                        self._observer.sandbox_status_unknown(handle=handle)
                    await asyncio.sleep(poll_interval)
        except TimeoutError:
            self._observer.sandbox_timed_out(
                handle=handle, max_duration_seconds=max_duration
            )
            return SandboxStatus.failed(TIMEOUT_REASON)

    async def logs(self, handle: SandboxHandle) -> str:
        """Return the combined output of *handle*.

        Raises:
            SandboxLogsError: if the logs cannot be retrieved.
        """
        return await self._orchestrator.logs(handle)

    async def delete(self, handle: SandboxHandle) -> bool:
        """Remove *handle*; failures are reported to the observer, never raised."""
        try:
            await self._orchestrator.delete(handle)
        except SandboxError as exc:
            self._observer.sandbox_delete_failed(handle=handle, reason=exc.reason)
            return False
        self._observer.sandbox_deleted(handle=handle)
        return True

    async def list_by_run(self, run_id: str) -> list[SandboxHandle]:
        return await self._orchestrator.list({RUN_ID_LABEL: run_id})

    async def delete_all(self, run_id: str) -> int:
        """Delete every sandbox labelled with *run_id*; returns how many were removed."""
        deleted = 0
        for handle in await self.list_by_run(run_id):
            if await self.delete(handle):
                deleted += 1
        return deleted

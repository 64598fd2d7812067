"""LocalProcessOrchestrator: runs sandboxes as local bash subprocesses.

Each sandbox gets a temporary directory holding a copy of the fixture
(``workspace/``), a ``results/`` directory and the combined output log. The
manifest's command runs with ``WORKSPACE_DIR`` and ``RESULTS_DIR`` pointed
at those directories. Resource limits and the container user are not
enforced locally; the active deadline is.
"""

import asyncio
import os
import shutil
import tempfile
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO

from anode_eval.sandbox.domain.errors import (
    SandboxDeleteError,
    SandboxLogsError,
    SandboxSpawnError,
    SandboxStatusError,
)
from anode_eval.sandbox.domain.manifest import SandboxManifest
from anode_eval.sandbox.domain.orchestrator import SandboxHandle
from anode_eval.sandbox.domain.status import ContainerObservation, SandboxObservation

_CONTAINER_NAME = "agent"
_LOG_FILE = "output.log"


@dataclass
class _LocalSandbox:
    manifest: SandboxManifest
    root: Path
    process: asyncio.subprocess.Process
    log_file: IO[bytes]
    started_at: float = field(default_factory=time.monotonic)
    deadline_exceeded: bool = False


class LocalProcessOrchestrator:
    """Satisfies the SandboxOrchestrator protocol with local subprocesses."""

    def __init__(self, base_dir: Path | None = None) -> None:
        self._base_dir = base_dir
        self._sandboxes: dict[SandboxHandle, _LocalSandbox] = {}

    async def spawn(self, manifest: SandboxManifest) -> SandboxHandle:
        if manifest.name in self._sandboxes:
            raise SandboxSpawnError(name=manifest.name, reason="already exists")

        try:
            root = Path(tempfile.mkdtemp(prefix=f"{manifest.name}-", dir=self._base_dir))
        except OSError as exc:
            raise SandboxSpawnError(name=manifest.name, reason=str(exc)) from exc

        workspace = root / "workspace"
        results = root / "results"
        env = {
            **os.environ,
            **manifest.env,
            "WORKSPACE_DIR": str(workspace),
            "RESULTS_DIR": str(results),
        }
        log_file: IO[bytes] | None = None
        try:
            if manifest.eval_path.is_dir():
                await asyncio.to_thread(shutil.copytree, manifest.eval_path, workspace)
            else:
                workspace.mkdir()
            results.mkdir()
            log_file = (root / _LOG_FILE).open("wb")
            process = await asyncio.create_subprocess_exec(
                *manifest.command,
                *manifest.args,
                stdout=log_file,
                stderr=asyncio.subprocess.STDOUT,
                cwd=workspace,
                env=env,
            )
        except OSError as exc:
            if log_file is not None:
                log_file.close()
            shutil.rmtree(root, ignore_errors=True)
            raise SandboxSpawnError(name=manifest.name, reason=str(exc)) from exc

        self._sandboxes[manifest.name] = _LocalSandbox(
            manifest=manifest,
            root=root,
            process=process,
            log_file=log_file,
        )
        return manifest.name

    async def status(self, handle: SandboxHandle) -> SandboxObservation:
        sandbox = self._sandboxes.get(handle)
        if sandbox is None:
            raise SandboxStatusError(handle=handle, reason="not found")

        process = sandbox.process
        elapsed = time.monotonic() - sandbox.started_at
        if process.returncode is None and elapsed > sandbox.manifest.active_deadline_seconds:
            process.kill()
            await process.wait()
            sandbox.deadline_exceeded = True

        code = process.returncode
        if code is None:
            return SandboxObservation(
                phase="Running",
                containers=[ContainerObservation(name=_CONTAINER_NAME)],
            )
        if code == 0:
            return SandboxObservation(
                phase="Succeeded",
                containers=[
                    ContainerObservation(
                        name=_CONTAINER_NAME, exit_code=0, terminated_reason="Completed"
                    )
                ],
            )
        if sandbox.deadline_exceeded:
            reason = "DeadlineExceeded"
        elif code < 0:
            reason = "Killed"
        else:
            reason = "Error"
        return SandboxObservation(
            phase="Failed",
            containers=[
                ContainerObservation(
                    name=_CONTAINER_NAME,
                    # Signals map to 128+N, as a container runtime reports them.
                    exit_code=code if code > 0 else 128 - code,
                    terminated_reason=reason,
                )
            ],
        )

    async def logs(self, handle: SandboxHandle) -> str:
        sandbox = self._sandboxes.get(handle)
        if sandbox is None:
            raise SandboxLogsError(handle=handle, reason="not found")
        sandbox.log_file.flush()
        try:
            return (sandbox.root / _LOG_FILE).read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise SandboxLogsError(handle=handle, reason=str(exc)) from exc

    async def delete(self, handle: SandboxHandle) -> None:
        sandbox = self._sandboxes.pop(handle, None)
        if sandbox is None:
            raise SandboxDeleteError(handle=handle, reason="not found")

        if sandbox.process.returncode is None:
            sandbox.process.kill()
            await sandbox.process.wait()
        sandbox.log_file.close()
        try:
            await asyncio.to_thread(shutil.rmtree, sandbox.root)
        except OSError as exc:
            raise SandboxDeleteError(handle=handle, reason=str(exc)) from exc

    async def list(self, labels: dict[str, str]) -> list[SandboxHandle]:
        return [
            name
            for name, sandbox in self._sandboxes.items()
            if all(sandbox.manifest.labels.get(k) == v for k, v in labels.items())
        ]

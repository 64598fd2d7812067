"""SandboxOrchestrator port: how the lifecycle manager talks to a sandbox backend."""

from typing import Protocol, TypeAlias

from anode_eval.sandbox.domain.manifest import SandboxManifest
from anode_eval.sandbox.domain.status import SandboxObservation

SandboxHandle: TypeAlias = str


class SandboxOrchestrator(Protocol):
    """Backend that creates, inspects and removes sandboxes.

    Implementations raise the matching ``SandboxError`` subclass on failure:
    SandboxSpawnError, SandboxStatusError, SandboxLogsError or
    SandboxDeleteError.
    """

    async def spawn(self, manifest: SandboxManifest) -> SandboxHandle: ...

    async def status(self, handle: SandboxHandle) -> SandboxObservation: ...

    async def logs(self, handle: SandboxHandle) -> str: ...

    async def delete(self, handle: SandboxHandle) -> None: ...

    async def list(self, labels: dict[str, str]) -> list[SandboxHandle]: ...

"""Observer port for the sandbox domain: defines events in domain language."""

from typing import Protocol


class SandboxObserver(Protocol):
    def sandbox_spawned(self, name: str, namespace: str) -> None: ...

    def sandbox_status_polled(self, handle: str, state: str) -> None: ...

    def sandbox_status_unknown(self, handle: str) -> None: ...

    def sandbox_completed(self, handle: str, state: str, reason: str | None) -> None: ...

    def sandbox_timed_out(self, handle: str, max_duration_seconds: float) -> None: ...

    def sandbox_deleted(self, handle: str) -> None: ...

    def sandbox_delete_failed(self, handle: str, reason: str) -> None: ...

"""FakeSandboxObserver: records sandbox lifecycle events for assertion in tests."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SandboxCompletedEvent:
    handle: str
    state: str
    reason: str | None


@dataclass(frozen=True)
class SandboxDeleteFailedEvent:
    handle: str
    reason: str


class FakeSandboxObserver:
    """Records every sandbox event; plain lists keyed by event kind."""

    def __init__(self) -> None:
        self.spawned: list[str] = []
        self.polled: list[tuple[str, str]] = []
        self.unknown: list[str] = []
        self.completed: list[SandboxCompletedEvent] = []
        self.timed_out: list[str] = []
        self.deleted: list[str] = []
        self.delete_failed: list[SandboxDeleteFailedEvent] = []

    def sandbox_spawned(self, name: str, namespace: str) -> None:
        self.spawned.append(name)

    def sandbox_status_polled(self, handle: str, state: str) -> None:
        self.polled.append((handle, state))

    def sandbox_status_unknown(self, handle: str) -> None:
        self.unknown.append(handle)

    def sandbox_completed(self, handle: str, state: str, reason: str | None) -> None:
        self.completed.append(SandboxCompletedEvent(handle=handle, state=state, reason=reason))

    def sandbox_timed_out(self, handle: str, max_duration_seconds: float) -> None:
        self.timed_out.append(handle)

    def sandbox_deleted(self, handle: str) -> None:
        self.deleted.append(handle)

    def sandbox_delete_failed(self, handle: str, reason: str) -> None:
        self.delete_failed.append(SandboxDeleteFailedEvent(handle=handle, reason=reason))

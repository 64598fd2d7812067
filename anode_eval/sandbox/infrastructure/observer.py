"""Structlog implementation of the SandboxObserver port."""

import structlog


class StructlogSandboxObserver:
    """Delegates sandbox lifecycle events to structlog.

    Satisfies the SandboxObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def sandbox_spawned(self, name: str, namespace: str) -> None:
        self._log.info("sandbox.spawned", name=name, namespace=namespace)

    def sandbox_status_polled(self, handle: str, state: str) -> None:
        self._log.debug("sandbox.status_polled", handle=handle, state=state)

    def sandbox_status_unknown(self, handle: str) -> None:
        self._log.warning("sandbox.status_unknown", handle=handle)

    def sandbox_completed(self, handle: str, state: str, reason: str | None) -> None:
        if reason is None:
            self._log.info("sandbox.completed", handle=handle, state=state)
        else:
            self._log.error("sandbox.completed", handle=handle, state=state, reason=reason)

    def sandbox_timed_out(self, handle: str, max_duration_seconds: float) -> None:
        self._log.warning(
            "sandbox.timed_out",
            handle=handle,
            max_duration_seconds=max_duration_seconds,
        )

    def sandbox_deleted(self, handle: str) -> None:
        self._log.info("sandbox.deleted", handle=handle)

    def sandbox_delete_failed(self, handle: str, reason: str) -> None:
        self._log.warning("sandbox.delete_failed", handle=handle, reason=reason)

"""Sandbox status model and the classifier that derives it from observations."""

from enum import StrEnum

from pydantic import BaseModel, Field

TIMEOUT_REASON = "Timeout"

_WAITING_FAILURE_MARKERS = ("Err", "BackOff", "CrashLoop")


class SandboxState(StrEnum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    UNKNOWN = "unknown"


class SandboxStatus(BaseModel, frozen=True):
    """Classified sandbox state; ``reason`` is set only for FAILED."""

    state: SandboxState
    reason: str | None = None

    @classmethod
    def failed(cls, reason: str) -> "SandboxStatus":
        return cls(state=SandboxState.FAILED, reason=reason)

    @property
    def is_terminal(self) -> bool:
        return self.state in (SandboxState.SUCCEEDED, SandboxState.FAILED)

    def describe(self) -> str:
        if self.reason:
            return f"{self.state.value} ({self.reason})"
        return self.state.value


class ContainerObservation(BaseModel, frozen=True):
    """Raw per-container state as reported by an orchestrator."""

    name: str
    exit_code: int | None = None
    terminated_reason: str | None = None
    waiting_reason: str | None = None


class SandboxObservation(BaseModel, frozen=True):
    """Raw sandbox state as reported by an orchestrator; ``phase`` may be missing."""

    phase: str | None = None
    containers: list[ContainerObservation] = Field(default_factory=list)


def classify_observation(observation: SandboxObservation) -> SandboxStatus:
    """Turn a raw observation into a SandboxStatus.

    Container details take precedence over the phase: a non-zero exit or a
    waiting reason that signals an error fails the sandbox even while the
    phase still reads Running or Pending.
    """
    if observation.phase is None:
        return SandboxStatus(state=SandboxState.UNKNOWN)

    for container in observation.containers:
        if container.exit_code is not None and container.exit_code != 0:
            return SandboxStatus.failed(
                f"Container exited with code {container.exit_code}:"
                f" {container.terminated_reason or ''}"
            )
        reason = container.waiting_reason
        if reason and any(marker in reason for marker in _WAITING_FAILURE_MARKERS):
            return SandboxStatus.failed(f"Container waiting: {reason}")

    match observation.phase:
        case "Pending":
            return SandboxStatus(state=SandboxState.PENDING)
        case "Running":
            return SandboxStatus(state=SandboxState.RUNNING)
        case "Succeeded":
            return SandboxStatus(state=SandboxState.SUCCEEDED)
        case "Failed":
            return SandboxStatus.failed("Sandbox failed")
        case _:
            return SandboxStatus(state=SandboxState.UNKNOWN)

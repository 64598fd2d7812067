"""Error types raised by sandbox orchestrators and the lifecycle manager."""

from anode_eval.core.errors import AnodeEvalError


class SandboxError(AnodeEvalError):
    """Base class for sandbox failures; ``reason`` is the cause without the prefix."""

    def __init__(self, action: str, target: str, reason: str) -> None:
        self.target = target
        self.reason = reason
        super().__init__(f"Failed to {action} {target}: {reason}")


class SandboxSpawnError(SandboxError):
    """Raised when a sandbox cannot be created."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(action="spawn sandbox", target=name, reason=reason)


class SandboxStatusError(SandboxError):
    """Raised when a sandbox's state cannot be read."""

    def __init__(self, handle: str, reason: str) -> None:
        super().__init__(action="get status of sandbox", target=handle, reason=reason)


class SandboxLogsError(SandboxError):
    """Raised when a sandbox's logs cannot be retrieved."""

    def __init__(self, handle: str, reason: str) -> None:
        super().__init__(action="get logs for sandbox", target=handle, reason=reason)


class SandboxDeleteError(SandboxError):
    """Raised by orchestrators when a sandbox cannot be removed."""

    def __init__(self, handle: str, reason: str) -> None:
        super().__init__(action="delete sandbox", target=handle, reason=reason)

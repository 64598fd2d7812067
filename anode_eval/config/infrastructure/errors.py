"""Error types raised by config infrastructure."""

from pathlib import Path

from anode_eval.core.errors import AnodeEvalError


class ConfigValidationError(AnodeEvalError):
    """Raised when the loaded config fails schema or semantic validation."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to validate config: {reason}")


class ConfigLoadError(AnodeEvalError):
    """Raised when the config file cannot be opened, read or parsed."""

    def __init__(self, path: Path, reason: str = "file not found") -> None:
        self.path = path
        super().__init__(f"Failed to load config: {reason}: {path}")

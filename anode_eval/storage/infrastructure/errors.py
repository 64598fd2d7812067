"""Error types raised by results storage."""

from pathlib import Path

from anode_eval.core.errors import AnodeEvalError


class ResultsLoadError(AnodeEvalError):
    """Raised when a results snapshot cannot be read or does not validate."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load results: {reason}: {path}")


class ResultsSaveError(AnodeEvalError):
    """Raised when results cannot be written to the output directory."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to save results: {reason}: {path}")

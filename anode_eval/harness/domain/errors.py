"""Error types raised while turning harness output into results."""

from anode_eval.core.errors import AnodeEvalError


class HarnessParseError(AnodeEvalError):
    """Raised when harness output cannot be interpreted at all."""

    def __init__(self, harness: str, reason: str) -> None:
        self.harness = harness
        super().__init__(f"Failed to parse {harness} output: {reason}")

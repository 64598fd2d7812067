"""Error types raised by the evaluation domain models."""

from anode_eval.core.errors import AnodeEvalError


class RunStateError(AnodeEvalError):
    """Raised on a run transition the state machine does not allow."""

    def __init__(self, run_id: str, current: str, target: str) -> None:
        self.run_id = run_id
        super().__init__(
            f"Failed to move run {run_id} to {target}: it is already {current}"
        )


class ResultsFinalizedError(AnodeEvalError):
    """Raised when finalized EvaluationResults are mutated or finalized again."""

    def __init__(self, eval_id: str) -> None:
        self.eval_id = eval_id
        super().__init__(f"Failed to update results {eval_id}: already finalized")

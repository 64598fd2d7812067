"""Base exception class for all anode-eval-specific errors."""


class AnodeEvalError(Exception):
    """Base class for all anode-eval errors.

    Messages follow the "Failed to <action>: <reason>" convention so that a
    single line is enough to report them at the CLI boundary.
    """

    def __init__(self, message: str, retriable: bool = False) -> None:
        super().__init__(message)
        self.retriable = retriable

"""Structured test-run results produced by the harness parsers."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class TestCaseResult(BaseModel):
    """Outcome of one test case."""

    model_config = ConfigDict(frozen=True)
    # Keeps pytest from collecting this model as a test class.
    __test__: ClassVar[bool] = False

    name: str
    passed: bool
    duration_ms: int | None = None
    error: str | None = None
    stdout: str | None = None


class TestSuiteResult(BaseModel):
    """Counts and per-case detail for one harness run.

    ``tests`` may be empty even when the counts are not: the generic
    heuristic parser only recovers summary numbers. ``raw_output`` always
    holds the full text the parser was given.
    """

    model_config = ConfigDict(frozen=True)
    __test__: ClassVar[bool] = False

    total: int = Field(default=0, ge=0)
    passed: int = Field(default=0, ge=0)
    failed: int = Field(default=0, ge=0)
    skipped: int = Field(default=0, ge=0)
    tests: list[TestCaseResult] = Field(default_factory=list)
    duration_ms: int = Field(default=0, ge=0)
    raw_output: str = ""

    def pass_rate(self) -> float:
        """Percentage of passed tests; 0.0 when no tests were counted."""
        if self.total == 0:
            return 0.0
        return self.passed / self.total * 100.0

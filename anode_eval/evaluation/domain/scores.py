"""Per-agent score and whole-evaluation summary models."""

from pydantic import BaseModel, Field


class AgentScore(BaseModel, frozen=True):
    """One agent's aggregate over all of its runs; ``rank`` is 1-based."""

    agent_id: str
    agent_tool: str
    model: str
    total_runs: int = 0
    completed_runs: int = 0
    failed_runs: int = 0
    total_tests: int = 0
    passed_tests: int = 0
    average_score: float = 0.0
    rank: int = 0
    runs: list[str] = Field(default_factory=list)


class EvalSummary(BaseModel, frozen=True):
    total_combinations: int = 0
    completed: int = 0
    failed: int = 0
    timed_out: int = 0
    total_tests: int = 0
    passed_tests: int = 0
    overall_pass_rate: float = 0.0
    best_agent: str | None = None
    worst_agent: str | None = None


class DetailedScore(BaseModel, frozen=True):
    """Weighted view of one agent: pass rate first, then completion, then consistency."""

    agent_id: str
    pass_rate: float
    completion_rate: float
    avg_run_time_seconds: float
    consistency: float
    weighted_score: float

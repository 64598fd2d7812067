"""EvaluationResults: the aggregate of every run in one evaluation."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field

from anode_eval.evaluation.domain.errors import ResultsFinalizedError
from anode_eval.evaluation.domain.run import EvalRunResult
from anode_eval.evaluation.domain.scores import AgentScore, EvalSummary
from anode_eval.evaluation.domain.scoring import compute_agent_scores, summarize


class EvaluationResults(BaseModel):
    """Runs in arrival order plus the rankings and summary derived from them.

    Only ``add_run`` and a single ``finalize`` mutate it; scores are derived
    data and can be recomputed at any time with ``calculate_scores``.
    """

    name: str
    eval_id: str
    started_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    completed_at: datetime | None = None
    runs: list[EvalRunResult] = Field(default_factory=list)
    agent_scores: list[AgentScore] = Field(default_factory=list)
    summary: EvalSummary = Field(default_factory=EvalSummary)

    @property
    def is_finalized(self) -> bool:
        return self.completed_at is not None

    def add_run(self, run: EvalRunResult) -> None:
        if self.is_finalized:
            raise ResultsFinalizedError(eval_id=self.eval_id)
        self.runs.append(run)

    def calculate_scores(self) -> None:
        self.agent_scores = compute_agent_scores(self.runs)
        self.summary = summarize(self.runs, self.agent_scores)

    def finalize(self) -> None:
        if self.is_finalized:
            raise ResultsFinalizedError(eval_id=self.eval_id)
        self.completed_at = datetime.now(UTC)
        self.calculate_scores()

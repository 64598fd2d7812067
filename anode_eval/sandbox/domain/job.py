"""JobSpec: everything a sandbox needs to run one (prompt, agent) pair."""

from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from anode_eval.config.domain.agent import AgentSpec
from anode_eval.config.domain.harness import shell_line


class JobSpec(BaseModel, frozen=True):
    """One agent run inside one sandbox.

    ``agent.iterations`` must already be resolved against the evaluation
    settings before a job is built.
    """

    agent: AgentSpec
    prompt: str
    eval_path: Path
    run_id: str = Field(min_length=8)
    namespace: str = "default"
    timeout_hours: float = Field(gt=0)
    api_keys: dict[str, str] = Field(default_factory=dict)
    test_command: str = Field(min_length=1)
    test_args: list[str] = Field(default_factory=list)
    setup_commands: list[str] = Field(default_factory=list)
    git_repo: str | None = None

    @model_validator(mode="after")
    def _iterations_resolved(self) -> "JobSpec":
        if self.agent.iterations is None:
            raise ValueError("agent iterations must be resolved before building a job")
        return self

    @property
    def iterations(self) -> int:
        assert self.agent.iterations is not None
        return self.agent.iterations

    def agent_label(self) -> str:
        """Agent id made safe for sandbox names and labels."""
        return self.agent.id().replace(".", "-").lower()

    def sandbox_name(self) -> str:
        return f"anode-eval-{self.agent_label()}-{self.run_id[:8]}"

    def test_line(self) -> str:
        return shell_line(self.test_command, self.test_args)

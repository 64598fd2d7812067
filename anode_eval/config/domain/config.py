"""Top-level EvalConfig aggregate: the root configuration object."""

from typing import TypeAlias
from pydantic import BaseModel, Field, model_validator

from anode_eval.config.domain.agent import AgentSpec
from anode_eval.config.domain.prompt import PromptSpec
from anode_eval.config.domain.settings import EvalSettings

Combination: TypeAlias = tuple[PromptSpec, AgentSpec]


class EvalConfig(BaseModel, frozen=True):
    """Root configuration aggregate for an anode-eval evaluation."""

    name: str = Field(min_length=1)
    description: str = ""
    prompts: list[PromptSpec] = Field(min_length=1)
    agents: list[AgentSpec] = Field(min_length=1)
    settings: EvalSettings = Field(default_factory=EvalSettings)

    @model_validator(mode="after")
    def _prompt_ids_are_unique(self) -> "EvalConfig":
        seen: set[str] = set()
        duplicates: list[str] = []
        for prompt in self.prompts:
            if prompt.id in seen and prompt.id not in duplicates:
                duplicates.append(prompt.id)
            seen.add(prompt.id)
        if duplicates:
            raise ValueError(f"duplicate prompt ids: {', '.join(duplicates)}")
        return self

    def combinations(self) -> list[Combination]:
        """Return every (prompt, agent) pair, prompts outer and agents inner.

        Agents without an explicit iteration budget get
        ``settings.default_iterations``.
        """
        agents = [
            agent
            if agent.iterations is not None
            else agent.model_copy(
                update={"iterations": self.settings.default_iterations}
            )
            for agent in self.agents
        ]
        return [(prompt, agent) for prompt in self.prompts for agent in agents]

"""DryRunPlan: what an evaluation would run, without running it."""

from pydantic import BaseModel

from anode_eval.config.domain.config import EvalConfig
from anode_eval.config.domain.harness import render_test_command
from anode_eval.config.domain.prompt import PromptSpec
from anode_eval.config.domain.settings import EvalSettings


def effective_timeout_hours(
    prompt: PromptSpec, settings: EvalSettings, cap_hours: float
) -> float:
    """Per-prompt timeout, falling back to the default, never above *cap_hours*."""
    own = (
        prompt.timeout_hours
        if prompt.timeout_hours is not None
        else settings.default_timeout_hours
    )
    return min(own, cap_hours)


class PlannedRun(BaseModel, frozen=True):
    prompt_id: str
    agent_id: str
    iterations: int
    timeout_hours: float
    test_command: str


class DryRunPlan(BaseModel, frozen=True):
    name: str
    runs: list[PlannedRun]

    @classmethod
    def from_config(cls, config: EvalConfig, cap_hours: float) -> "DryRunPlan":
        """Plan every combination in matrix order: prompts outer, agents inner."""
        runs = []
        for prompt, agent in config.combinations():
            assert agent.iterations is not None
            runs.append(
                PlannedRun(
                    prompt_id=prompt.id,
                    agent_id=agent.id(),
                    iterations=agent.iterations,
                    timeout_hours=effective_timeout_hours(
                        prompt, config.settings, cap_hours
                    ),
                    test_command=render_test_command(prompt.test_harness),
                )
            )
        return cls(name=config.name, runs=runs)

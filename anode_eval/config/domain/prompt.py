"""Prompt configuration model: one task handed to every agent."""

from typing import TypeAlias
from pathlib import Path

from pydantic import BaseModel, Field

from anode_eval.config.domain.harness import Harness

PromptId: TypeAlias = str


class PromptSpec(BaseModel, frozen=True):
    """A natural-language task, the fixture it runs against, and how it is graded."""

    id: PromptId = Field(min_length=1)
    prompt: str = Field(min_length=1)
    eval_path: Path
    test_harness: Harness
    setup_commands: list[str] = Field(default_factory=list)
    timeout_hours: float | None = Field(default=None, gt=0)

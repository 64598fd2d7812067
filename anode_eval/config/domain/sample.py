"""Starter configuration written by `anode-eval init`."""

from pathlib import Path

from anode_eval.config.domain.agent import AgentSpec, AgentTool
from anode_eval.config.domain.config import EvalConfig
from anode_eval.config.domain.harness import CargoHarness
from anode_eval.config.domain.prompt import PromptSpec
from anode_eval.config.domain.settings import ApiKeysConfig, EvalSettings


def sample_config() -> EvalConfig:
    return EvalConfig(
        name="Sample Evaluation",
        description="A sample evaluation configuration",
        prompts=[
            PromptSpec(
                id="hello-world",
                prompt=(
                    "Create a function that returns 'Hello, World!' and write"
                    " tests for it."
                ),
                eval_path=Path("./evals/hello-world"),
                test_harness=CargoHarness(type="cargo"),
            )
        ],
        agents=[
            AgentSpec(tool=AgentTool.CLAUDE_CODE, model="claude_opus_4_5", iterations=10),
            AgentSpec(tool=AgentTool.CODEX, model="gpt_5_2_xhigh", iterations=10),
        ],
        settings=EvalSettings(
            api_keys=ApiKeysConfig(env_vars=["ANTHROPIC_API_KEY", "OPENAI_API_KEY"]),
        ),
    )

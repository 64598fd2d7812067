"""Tests for config domain models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from anode_eval.config.domain.agent import AgentSpec, AgentTool, resolve_model
from anode_eval.config.domain.config import EvalConfig
from anode_eval.config.domain.harness import (
    CargoHarness,
    CustomHarness,
    GoHarness,
    NpmHarness,
    PytestHarness,
    render_test_command,
)
from anode_eval.config.domain.prompt import PromptSpec
from anode_eval.config.domain.sample import sample_config
from anode_eval.config.domain.settings import EvalSettings


def _prompt(prompt_id: str = "p1", **overrides: object) -> PromptSpec:
    fields: dict[str, object] = {
        "id": prompt_id,
        "prompt": "Implement the thing.",
        "eval_path": Path("/evals/thing"),
        "test_harness": CargoHarness(type="cargo"),
    }
    fields.update(overrides)
    return PromptSpec.model_validate(fields)


class TestAgentTool:
    def test_display_names(self) -> None:
        assert AgentTool.CLAUDE_CODE.display_name == "claude-code"
        assert AgentTool.CODEX.display_name == "codex"
        assert AgentTool.OPEN_CODE.display_name == "opencode"

    def test_cli_commands(self) -> None:
        assert AgentTool.CLAUDE_CODE.cli_command == "claude"
        assert AgentTool.OPEN_CODE.cli_command == "opencode"

    def test_api_key_env_vars(self) -> None:
        assert AgentTool.CLAUDE_CODE.api_key_env_var == "ANTHROPIC_API_KEY"
        assert AgentTool.CODEX.api_key_env_var == "OPENAI_API_KEY"
        assert AgentTool.OPEN_CODE.api_key_env_var == "OPENAI_API_KEY"

    def test_parses_from_config_name(self) -> None:
        assert AgentTool("open_code") is AgentTool.OPEN_CODE

    def test_claude_invocation(self) -> None:
        line = AgentTool.CLAUDE_CODE.invocation("m", 5, "do it")
        assert line == "claude --model m --max-turns 5 --dangerously-skip-permissions -p 'do it'"

    def test_codex_invocation(self) -> None:
        line = AgentTool.CODEX.invocation("gpt-5", 3, "do it")
        assert line == "codex --model gpt-5 --full-auto --iterations 3 'do it'"

    def test_opencode_invocation(self) -> None:
        line = AgentTool.OPEN_CODE.invocation("m", 2, "go")
        assert line == "opencode --model m --auto-edit --max-iterations 2 go"

    def test_invocation_escapes_single_quotes(self) -> None:
        line = AgentTool.CODEX.invocation("m", 1, "it's done")
        assert line.endswith("'it'\"'\"'s done'")

    def test_invocation_quotes_free_form_model(self) -> None:
        line = AgentTool.CLAUDE_CODE.invocation("my model", 1, "go")
        assert line.startswith("claude --model 'my model' --max-turns 1")


class TestAgentSpec:
    def test_id_uses_display_name_and_resolved_model(self) -> None:
        agent = AgentSpec(tool=AgentTool.CLAUDE_CODE, model="claude_opus_4_5")
        assert agent.id() == "claude-code-claude-opus-4-5-20251101"

    def test_unknown_model_passes_through(self) -> None:
        agent = AgentSpec(tool=AgentTool.CODEX, model="my-custom-model")
        assert agent.resolved_model == "my-custom-model"
        assert agent.id() == "codex-my-custom-model"

    def test_id_ignores_iterations(self) -> None:
        a = AgentSpec(tool=AgentTool.CODEX, model="gpt_5", iterations=1)
        b = AgentSpec(tool=AgentTool.CODEX, model="gpt_5", iterations=20)
        assert a.id() == b.id()

    def test_resolve_model_known_key(self) -> None:
        assert resolve_model("qwen_coder_8b") == "qwen2.5-coder:7b"

    def test_rejects_zero_iterations(self) -> None:
        with pytest.raises(ValidationError):
            AgentSpec(tool=AgentTool.CODEX, model="gpt_5", iterations=0)

    def test_rejects_empty_model(self) -> None:
        with pytest.raises(ValidationError):
            AgentSpec(tool=AgentTool.CODEX, model="")

    def test_rejects_unknown_tool(self) -> None:
        with pytest.raises(ValidationError):
            AgentSpec.model_validate({"tool": "cursor", "model": "x"})

    def test_is_frozen(self) -> None:
        agent = AgentSpec(tool=AgentTool.CODEX, model="gpt_5")
        with pytest.raises(ValidationError):
            agent.model = "other"  # type: ignore[misc]


class TestHarnessCommands:
    def test_cargo_defaults(self) -> None:
        assert CargoHarness(type="cargo").test_command() == ("cargo", ["test"])

    def test_cargo_features_and_release(self) -> None:
        harness = CargoHarness(type="cargo", features=["a", "b"], release=True)
        assert harness.test_command() == (
            "cargo",
            ["test", "--features", "a,b", "--release"],
        )

    def test_npm_default_script(self) -> None:
        assert NpmHarness(type="npm").test_command() == ("npm", ["run", "test"])

    def test_pytest_is_verbose(self) -> None:
        harness = PytestHarness(type="pytest", args=["-k", "fast"])
        assert harness.test_command() == ("pytest", ["-v", "--tb=short", "-k", "fast"])

    def test_go_default_package(self) -> None:
        assert GoHarness(type="go").test_command() == ("go", ["test", "-v", "./..."])

    def test_custom_command(self) -> None:
        harness = CustomHarness(type="custom", command="make", args=["check"])
        assert harness.test_command() == ("make", ["check"])

    def test_render_test_command(self) -> None:
        assert render_test_command(GoHarness(type="go", package="./pkg")) == (
            "go test -v ./pkg"
        )

    def test_render_quotes_arguments(self) -> None:
        harness = PytestHarness(type="pytest", args=["-k", "a or b"])
        assert render_test_command(harness) == "pytest -v --tb=short -k 'a or b'"

    def test_render_keeps_custom_command_verbatim(self) -> None:
        harness = CustomHarness(type="custom", command="make -C src check")
        assert render_test_command(harness) == "make -C src check"

    def test_prompt_parses_harness_by_type(self) -> None:
        prompt = _prompt(test_harness={"type": "go", "package": "./x"})
        assert isinstance(prompt.test_harness, GoHarness)
        assert prompt.test_harness.package == "./x"

    def test_prompt_rejects_unknown_harness_type(self) -> None:
        with pytest.raises(ValidationError):
            _prompt(test_harness={"type": "maven"})


class TestPromptSpec:
    def test_rejects_empty_prompt(self) -> None:
        with pytest.raises(ValidationError):
            _prompt(prompt="")

    def test_rejects_non_positive_timeout(self) -> None:
        with pytest.raises(ValidationError):
            _prompt(timeout_hours=0)

    def test_setup_commands_default_empty(self) -> None:
        assert _prompt().setup_commands == []


class TestEvalSettings:
    def test_defaults(self) -> None:
        settings = EvalSettings()
        assert settings.default_timeout_hours == 6
        assert settings.output_dir == Path("./eval-results")
        assert settings.default_iterations == 10
        assert settings.cleanup_on_complete is True
        assert settings.delete_on_timeout is False
        assert settings.api_keys.env_vars == []


class TestEvalConfig:
    def test_combinations_prompt_major_order(self) -> None:
        a1 = AgentSpec(tool=AgentTool.CLAUDE_CODE, model="m1", iterations=1)
        a2 = AgentSpec(tool=AgentTool.CODEX, model="m2", iterations=1)
        cfg = EvalConfig(
            name="order",
            prompts=[_prompt("p1"), _prompt("p2")],
            agents=[a1, a2],
        )

        pairs = [(p.id, a.model) for p, a in cfg.combinations()]

        assert pairs == [("p1", "m1"), ("p1", "m2"), ("p2", "m1"), ("p2", "m2")]

    def test_combinations_fill_default_iterations(self) -> None:
        cfg = EvalConfig(
            name="fill",
            prompts=[_prompt()],
            agents=[
                AgentSpec(tool=AgentTool.CODEX, model="gpt_5"),
                AgentSpec(tool=AgentTool.CLAUDE_CODE, model="m", iterations=3),
            ],
            settings=EvalSettings(default_iterations=7),
        )

        iterations = [agent.iterations for _, agent in cfg.combinations()]

        assert iterations == [7, 3]
        assert cfg.agents[0].iterations is None

    def test_rejects_duplicate_prompt_ids(self) -> None:
        with pytest.raises(ValidationError, match="duplicate prompt ids: p1"):
            EvalConfig(
                name="dup",
                prompts=[_prompt("p1"), _prompt("p1")],
                agents=[AgentSpec(tool=AgentTool.CODEX, model="gpt_5")],
            )

    def test_rejects_empty_prompts(self) -> None:
        with pytest.raises(ValidationError):
            EvalConfig(
                name="empty",
                prompts=[],
                agents=[AgentSpec(tool=AgentTool.CODEX, model="gpt_5")],
            )

    def test_rejects_empty_agents(self) -> None:
        with pytest.raises(ValidationError):
            EvalConfig(name="empty", prompts=[_prompt()], agents=[])

    def test_sample_config_is_valid(self) -> None:
        cfg = sample_config()
        assert cfg.name == "Sample Evaluation"
        assert len(cfg.combinations()) == 2

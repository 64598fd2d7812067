"""Agent configuration models: which CLI tool drives which model."""

from typing import TypeAlias
import shlex
from enum import StrEnum

from pydantic import BaseModel, Field


class AgentTool(StrEnum):
    """Supported agent CLI tools, keyed by their configuration name."""

    CLAUDE_CODE = "claude_code"
    CODEX = "codex"
    OPEN_CODE = "open_code"

    @property
    def display_name(self) -> str:
        return _TOOL_DISPLAY_NAMES[self]

    @property
    def cli_command(self) -> str:
        return _TOOL_CLI_COMMANDS[self]

    @property
    def api_key_env_var(self) -> str:
        """Name of the credential environment variable the CLI reads."""
        if self is AgentTool.CLAUDE_CODE:
            return "ANTHROPIC_API_KEY"
        return "OPENAI_API_KEY"

    @property
    def install_command(self) -> str:
        return _TOOL_INSTALL_COMMANDS[self]

    def invocation(self, model: str, iterations: int, prompt: str) -> str:
        """Shell line that runs the CLI non-interactively on *prompt*.

        The model and prompt are shell-quoted.
        """
        quoted = shlex.quote(prompt)
        model = shlex.quote(model)
        cli = self.cli_command
        match self:
            case AgentTool.CLAUDE_CODE:
                return (
                    f"{cli} --model {model} --max-turns {iterations}"
                    f" --dangerously-skip-permissions -p {quoted}"
                )
            case AgentTool.CODEX:
                return f"{cli} --model {model} --full-auto --iterations {iterations} {quoted}"
            case AgentTool.OPEN_CODE:
                return (
                    f"{cli} --model {model} --auto-edit"
                    f" --max-iterations {iterations} {quoted}"
                )


_TOOL_DISPLAY_NAMES: dict[AgentTool, str] = {
    AgentTool.CLAUDE_CODE: "claude-code",
    AgentTool.CODEX: "codex",
    AgentTool.OPEN_CODE: "opencode",
}

_TOOL_CLI_COMMANDS: dict[AgentTool, str] = {
    AgentTool.CLAUDE_CODE: "claude",
    AgentTool.CODEX: "codex",
    AgentTool.OPEN_CODE: "opencode",
}

_TOOL_INSTALL_COMMANDS: dict[AgentTool, str] = {
    AgentTool.CLAUDE_CODE: "npm install -g @anthropic-ai/claude-code",
    AgentTool.CODEX: "npm install -g @openai/codex",
    AgentTool.OPEN_CODE: "npm install -g opencode",
}

# Config-file model keys and the provider model string each resolves to.
# Any other model string is passed through unchanged.
KNOWN_MODELS: dict[str, str] = {
    "claude_opus_4_5": "claude-opus-4-5-20251101",
    "claude_sonnet_4": "claude-sonnet-4-20250514",
    "gpt_5_2_xhigh": "gpt-5.2-xhigh",
    "gpt_5_2_high": "gpt-5.2-high",
    "gpt_5": "gpt-5",
    "o3": "o3",
    "qwen_coder_8b": "qwen2.5-coder:7b",
}

AgentId: TypeAlias = str


def resolve_model(model: str) -> str:
    """Return the provider model string for a known key, else the input itself."""
    return KNOWN_MODELS.get(model, model)


class AgentSpec(BaseModel, frozen=True):
    """One agent under evaluation: a CLI tool, a model and an iteration budget.

    ``iterations`` is optional in configuration; ``EvalConfig.combinations``
    fills it from ``settings.default_iterations``.
    """

    tool: AgentTool
    model: str = Field(min_length=1)
    iterations: int | None = Field(default=None, ge=1)

    @property
    def resolved_model(self) -> str:
        return resolve_model(self.model)

    def id(self) -> AgentId:
        """Deterministic "{tool}-{model}" identifier.

        Two specs that differ only in ``iterations`` share the same id.
        """
        return f"{self.tool.display_name}-{self.resolved_model}"

"""Global evaluation settings models."""

from pathlib import Path

from pydantic import BaseModel, Field


class ApiKeysConfig(BaseModel, frozen=True):
    """Where credentials come from.

    ``env_vars`` names variables read from the environment at load time;
    ``direct`` holds literal values and is overridden by ``env_vars`` on
    collision.
    """

    env_vars: list[str] = Field(default_factory=list)
    direct: dict[str, str] = Field(default_factory=dict)


class EvalSettings(BaseModel, frozen=True):
    default_timeout_hours: float = Field(default=6, gt=0)
    output_dir: Path = Path("./eval-results")
    default_iterations: int = Field(default=10, ge=1)
    cleanup_on_complete: bool = True
    # Off by default: a timed-out sandbox is only removed when
    # cleanup_on_complete is set.
    delete_on_timeout: bool = False
    poll_interval_seconds: float = Field(default=30.0, gt=0)
    api_keys: ApiKeysConfig = Field(default_factory=ApiKeysConfig)

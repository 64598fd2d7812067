"""YAML config loader: parses, normalises, validates, and emits observer events."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from anode_eval.config.domain.config import EvalConfig
from anode_eval.config.domain.harness import HARNESS_TYPES
from anode_eval.config.domain.observer import ConfigObserver
from anode_eval.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
)


class YamlConfigLoader:
    """Loads, normalises, validates, and returns an EvalConfig from a YAML file."""

    def __init__(self, observer: ConfigObserver) -> None:
        self._observer = observer

    def load(self, path: Path) -> EvalConfig:
        """
        Load, normalise, validate, and return an EvalConfig from a YAML file.

        Raises:
            ConfigLoadError: if the file is missing or is not valid YAML.
            ConfigValidationError: if a harness entry is malformed or the
                schema is violated.
        """
        raw = _parse_yaml(path=path)
        normalised = _normalise_harnesses(raw=raw)
        cfg = _build_config(normalised=normalised)
        self._observer.config_loaded(
            name=cfg.name,
            num_prompts=len(cfg.prompts),
            num_agents=len(cfg.agents),
        )
        return cfg


def dump_config(config: EvalConfig, path: Path) -> None:
    """Write *config* as YAML in the same form ``YamlConfigLoader`` reads."""
    data = config.model_dump(mode="json")
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")


def _parse_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except FileNotFoundError as exc:
        raise ConfigLoadError(path=path) from exc
    except yaml.YAMLError as exc:
        raise ConfigLoadError(path=path, reason=f"invalid YAML ({exc})") from exc
    if not isinstance(raw, dict):
        raise ConfigLoadError(path=path, reason="top level is not a mapping")
    return raw


def _normalise_harnesses(raw: dict[str, Any]) -> dict[str, Any]:
    """
    Rewrite externally-tagged harness entries into the `type`-tagged form.

    Both ``test_harness: {cargo: {release: true}}`` and
    ``test_harness: {type: cargo, release: true}`` are accepted; the former
    is what older config files contain.

    Raises:
        ConfigValidationError: listing ALL malformed harness entries across
            ALL prompts before raising (not just the first one).
    """
    prompts_raw: list[Any] = raw.get("prompts", []) or []
    problems: list[str] = []
    normalised_prompts: list[Any] = []

    for index, prompt_data in enumerate(prompts_raw):
        if not isinstance(prompt_data, dict):
            normalised_prompts.append(prompt_data)
            continue
        harness = prompt_data.get("test_harness")
        if not isinstance(harness, dict) or "type" in harness:
            normalised_prompts.append(prompt_data)
            continue

        prompt_id = prompt_data.get("id", f"#{index}")
        if len(harness) != 1:
            problems.append(
                f"prompt '{prompt_id}' test_harness must name exactly one of"
                f" {', '.join(HARNESS_TYPES)}"
            )
            continue
        ((kind, options),) = harness.items()
        if kind not in HARNESS_TYPES:
            problems.append(f"prompt '{prompt_id}' uses unknown harness '{kind}'")
            continue
        if options is None:
            options = {}
        if not isinstance(options, dict):
            problems.append(
                f"prompt '{prompt_id}' harness '{kind}' options must be a mapping,"
                f" got {type(options).__name__}"
            )
            continue
        normalised_prompts.append(
            {**prompt_data, "test_harness": {"type": kind, **options}}
        )

    if problems:
        raise ConfigValidationError("; ".join(problems))

    return {**raw, "prompts": normalised_prompts}


def _build_config(normalised: dict[str, Any]) -> EvalConfig:
    try:
        return EvalConfig.model_validate(normalised)
    except ValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc

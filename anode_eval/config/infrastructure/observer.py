"""Structlog implementation of the ConfigObserver port."""

import structlog


class StructlogConfigObserver:
    """Delegates config domain events to structlog.

    Satisfies the ConfigObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def config_loaded(self, name: str, num_prompts: int, num_agents: int) -> None:
        self._log.info(
            "config.loaded",
            name=name,
            num_prompts=num_prompts,
            num_agents=num_agents,
        )

    def config_api_key_missing(self, env_var: str) -> None:
        self._log.warning(
            "config.api_key_missing",
            env_var=env_var,
            message="Environment variable not set; sandboxes will not receive it",
        )

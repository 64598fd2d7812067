"""Observer port for the config domain: defines events in domain language."""

from typing import Protocol


class ConfigObserver(Protocol):
    def config_loaded(self, name: str, num_prompts: int, num_agents: int) -> None: ...

    def config_api_key_missing(self, env_var: str) -> None: ...

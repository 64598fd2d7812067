"""Fake ConfigObserver for use in tests: records events without mocking."""


class FakeConfigObserver:
    def __init__(self) -> None:
        self.loaded: list[dict[str, str | int]] = []
        self.missing_keys: list[str] = []

    def config_loaded(self, name: str, num_prompts: int, num_agents: int) -> None:
        self.loaded.append(
            {"name": name, "num_prompts": num_prompts, "num_agents": num_agents}
        )

    def config_api_key_missing(self, env_var: str) -> None:
        self.missing_keys.append(env_var)

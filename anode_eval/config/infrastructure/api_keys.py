"""Credential resolution: turns an ApiKeysConfig into a concrete key map."""

import os
from collections.abc import Mapping

from anode_eval.config.domain.observer import ConfigObserver
from anode_eval.config.domain.settings import ApiKeysConfig


def resolve_api_keys(
    config: ApiKeysConfig,
    observer: ConfigObserver,
    environ: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Merge direct keys with the values of the named environment variables.

    Environment values win over ``direct`` entries of the same name. A
    variable that is not set is reported to the observer and skipped.
    """
    env = os.environ if environ is None else environ
    keys = dict(config.direct)
    for var_name in config.env_vars:
        value = env.get(var_name)
        if value is None:
            observer.config_api_key_missing(env_var=var_name)
            continue
        keys[var_name] = value
    return keys

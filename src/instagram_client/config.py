"""
Configuration management for instagram_client.
"""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, PositiveInt, StrictStr, ValidationError, Field

from ._constants import API_HOST, API_VERSION, DEFAULT_LIMIT, DEFAULT_PROTOCOL, DEFAULT_TIMEOUT, ENV_PREFIX
from .errors import ConfigurationError


class ClientConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    client_id: StrictStr = Field(..., min_length=1)
    client_secret: StrictStr = Field(..., min_length=1)
    redirect_uri: Optional[str] = None
    protocol: Literal["http", "https"] = DEFAULT_PROTOCOL

    host: str = API_HOST
    api_version: int = API_VERSION

    default_limit: PositiveInt = DEFAULT_LIMIT
    verify_ssl: bool = True  # handed to httpx as ``verify``
    timeout: Optional[float] = DEFAULT_TIMEOUT
    user_agent: Optional[str] = None

    # Raise instead of substituting "" when a path placeholder has no value
    strict_placeholders: bool = False

    @property
    def base_url(self) -> str:
        return f"{self.protocol}://{self.host}"


def build_config(**values: Any) -> ClientConfig:
    try:
        return ClientConfig(**values)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid client configuration: {exc}") from exc


def filter_value_from_env(env: Mapping[str, str] | None = None) -> dict[str, Any]:
    env = os.environ if env is None else env
    config_keys = ClientConfig.model_fields.keys()
    env_already_keys = {}
    for key in config_keys:
        value = env.get(f"{ENV_PREFIX}{key.upper()}", None)
        if value is None:
            continue
        env_already_keys[key] = value
    return env_already_keys


def filter_value_from_yaml(yaml_string: str) -> dict[str, Any]:
    yaml_config_data: dict | None = yaml.safe_load(yaml_string)
    if yaml_config_data is None:
        return {}
    if not isinstance(yaml_config_data, Mapping):
        raise ConfigurationError("Config yaml did not contain a mapping.")

    yaml_already_keys = {}
    config_keys = ClientConfig.model_fields.keys()
    for key in config_keys:
        value = yaml_config_data.get(key, None)
        if value is None:
            continue
        yaml_already_keys[key] = value
    return yaml_already_keys


def load_config(
    config_file: str | Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> ClientConfig:
    """
    Build a ``ClientConfig`` from a YAML file, the environment and overrides.

    Later sources win: YAML, then ``INSTAGRAM_*`` variables, then ``overrides``.
    A ``.env`` file is loaded into the process environment only when ``env``
    is not given explicitly.

    Raises:
        ConfigurationError: when the merged values do not validate.
    """
    if env is None:
        load_dotenv()

    yaml_vars: dict[str, Any] = {}
    if config_file is not None:
        path = Path(config_file)
        if not path.exists():
            raise ConfigurationError(f"Config file does not exist: {path}")
        yaml_vars = filter_value_from_yaml(path.read_text(encoding="utf-8"))

    values = {**yaml_vars, **filter_value_from_env(env)}
    if overrides:
        values.update(overrides)
    return build_config(**values)

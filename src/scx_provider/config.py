"""
Configuration loading system for the SCX provider
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import httpx

from ._exceptions import LoadAPIKeyError


def without_trailing_slash(url: Optional[str]) -> Optional[str]:
    """Strip trailing slashes so endpoint paths can be appended with a single '/'."""
    if url is None:
        return None
    return url.rstrip("/")


def load_api_key(api_key: Optional[str], environment_variable_name: str, description: str) -> str:
    """Return the explicit API key, or read it from the environment.

    Raises:
        LoadAPIKeyError: if neither source yields a non-empty string.
    """
    if api_key is not None:
        if not isinstance(api_key, str):
            raise LoadAPIKeyError(f"{description} API key must be a string.")
        return api_key

    env_value = os.getenv(environment_variable_name)
    if not env_value:
        raise LoadAPIKeyError(
            f"{description} API key is missing. Pass it using the 'api_key' parameter "
            f"or the {environment_variable_name} environment variable."
        )
    return env_value


class Config:
    """Packaged defaults for the SCX provider."""

    def __init__(self):
        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from config.json file."""
        config_path = Path(__file__).parent / "config.json"

        try:
            with open(config_path, 'r') as f:
                config = json.load(f)
            return config
        except (FileNotFoundError, json.JSONDecodeError) as e:
            raise RuntimeError(f"Failed to load SCX provider configuration: {e}")

    @property
    def provider_name(self) -> str:
        return self._config.get("provider_name", "scx")

    @property
    def default_base_url(self) -> str:
        return self._config.get("default_base_url", "https://api.scx.ai/v1")

    @property
    def api_key_env_var(self) -> str:
        return self._config.get("api_key_env_var", "SCX_API_KEY")

    @property
    def max_embeddings_per_call(self) -> int:
        return self._config.get("max_embeddings_per_call", 2048)


@dataclass(frozen=True)
class ScxProviderSettings:
    """Options accepted by create_scx().

    Attributes:
        base_url: API root, defaults to https://api.scx.ai/v1
        api_key: Falls back to the SCX_API_KEY environment variable, read on every request
        headers: Extra headers sent with every request
        http_client: Transport override; the caller owns its lifecycle
    """
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    headers: Optional[Dict[str, str]] = None
    http_client: Optional[httpx.AsyncClient] = None


@dataclass(frozen=True)
class ProviderConfig:
    """Wiring shared by every model created from one provider."""
    provider: str
    base_url: str
    headers: Callable[[], Dict[str, str]]
    http_client: Optional[httpx.AsyncClient] = field(default=None, compare=False)

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"

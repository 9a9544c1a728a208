from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError

VERSION = "0.1.0"

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_TIMEOUT = 60.0
DEFAULT_BETA = "assistants=v2"


class ClientSettings(BaseSettings):
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_API_BASE: str = Field(
        default=DEFAULT_BASE_URL,
        validation_alias=AliasChoices("OPENAI_API_BASE", "OPENAI_BASE_URL"),
    )
    OPENAI_ORGANIZATION: Optional[str] = None
    OPENAI_PROJECT: Optional[str] = None
    OPENAI_PROXY: Optional[str] = None
    OPENAI_TIMEOUT: float = DEFAULT_TIMEOUT
    # Sent as OpenAI-Beta on assistants/threads endpoints; empty disables it
    OPENAI_BETA: str = DEFAULT_BETA

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


@dataclass(frozen=True)
class ClientConfig:
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    organization: Optional[str] = None
    project: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    proxy: Optional[str] = None
    beta: Optional[str] = DEFAULT_BETA

    def __repr__(self) -> str:
        # never print the key
        return (
            f"ClientConfig(base_url={self.base_url!r}, organization={self.organization!r}, "
            f"project={self.project!r}, timeout={self.timeout!r}, proxy={self.proxy!r}, beta={self.beta!r})"
        )

    def with_overrides(self, **changes) -> "ClientConfig":
        return validate_config(replace(self, **changes))

    @classmethod
    def from_settings(cls, settings: Optional[ClientSettings] = None, **overrides) -> "ClientConfig":
        s = settings or ClientSettings()
        values = dict(
            api_key=s.OPENAI_API_KEY,
            base_url=s.OPENAI_API_BASE,
            organization=s.OPENAI_ORGANIZATION,
            project=s.OPENAI_PROJECT,
            timeout=s.OPENAI_TIMEOUT,
            proxy=s.OPENAI_PROXY,
            beta=s.OPENAI_BETA or None,
        )
        # explicit keys win, None included
        values.update(overrides)
        return validate_config(cls(**values))


def validate_config(cfg: ClientConfig) -> ClientConfig:
    key = cfg.api_key
    if key is None or not isinstance(key, str) or not key.strip():
        raise ConfigurationError("API key is required (pass api_key or set OPENAI_API_KEY)")
    if key != key.strip() or not all(c.isprintable() and c.isascii() for c in key):
        raise ConfigurationError("API key contains characters that cannot be sent in a header")
    base = cfg.base_url or ""
    if not base.startswith(("http://", "https://")):
        raise ConfigurationError(f"base_url must be an http(s) URL, got {base!r}")
    if cfg.timeout is not None and cfg.timeout <= 0:
        raise ConfigurationError("timeout must be positive")
    return cfg

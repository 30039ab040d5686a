"""Runtime settings for the CLI and match client.

The extraction engine takes no configuration; only callers that talk to
the /match API or decide whether to run on a host need these.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv, set_key
from pydantic import BaseModel, Field, field_validator

DEFAULT_API_BASE = "https://api.geturtix.com"
DEFAULT_TIMEOUT = 15.0

ENV_API_BASE = "TICKET_CONTEXT_API_BASE"
ENV_DISABLED_HOSTS = "TICKET_CONTEXT_DISABLED_HOSTS"
ENV_TIMEOUT = "TICKET_CONTEXT_TIMEOUT"


class Settings(BaseModel):
    """API base URL, per-host enable switch and HTTP timeout."""

    api_base: str = DEFAULT_API_BASE
    disabled_hosts: frozenset[str] = Field(default_factory=frozenset)
    timeout: float = DEFAULT_TIMEOUT

    @field_validator("api_base")
    @classmethod
    def _check_api_base(cls, value: str) -> str:
        value = (value or "").strip().rstrip("/")
        if not value:
            raise ValueError("api_base is empty")
        return value

    @field_validator("disabled_hosts", mode="before")
    @classmethod
    def _normalize_hosts(cls, value):
        if isinstance(value, str):
            value = value.split(",")
        return frozenset(h.strip().lower() for h in value or () if h and h.strip())

    def is_host_enabled(self, host: Optional[str]) -> bool:
        return (host or "").lower() not in self.disabled_hosts

    def with_host(self, host: str, enabled: bool) -> "Settings":
        """Copy with host switched on or off."""
        host = host.strip().lower()
        hosts = self.disabled_hosts - {host} if enabled else self.disabled_hosts | {host}
        return self.model_copy(update={"disabled_hosts": frozenset(hosts)})


def load_settings(env: Optional[dict] = None, env_file: Optional[Path] = None) -> Settings:
    """Build Settings from the environment (and .env when env is not given).

    env_file defaults to the nearest .env at or above the working directory.

    Raises ValueError for an empty API base or a non-numeric timeout.
    """
    if env is None:
        load_dotenv(env_file or find_dotenv(usecwd=True), override=True)
        env = dict(os.environ)

    timeout_raw = env.get(ENV_TIMEOUT)
    try:
        timeout = float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT
    except ValueError:
        raise ValueError(f"{ENV_TIMEOUT} must be a number, got {timeout_raw!r}") from None

    return Settings(
        api_base=env.get(ENV_API_BASE, DEFAULT_API_BASE),
        disabled_hosts=env.get(ENV_DISABLED_HOSTS, ""),
        timeout=timeout,
    )


def save_disabled_hosts(settings: Settings, env_file: Path) -> None:
    """Write the disabled-host list to env_file, keeping its other keys."""
    env_file.touch(exist_ok=True)
    set_key(
        str(env_file),
        ENV_DISABLED_HOSTS,
        ",".join(sorted(settings.disabled_hosts)),
        quote_mode="never",
    )

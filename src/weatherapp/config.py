# settings come from the environment, a local .env is loaded for development

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, TypeVar
from dotenv import load_dotenv

from .errors import ConfigError

T = TypeVar("T")

DEFAULT_DAYS = 3
DEFAULT_TIMEOUT = 10.0
DEFAULT_LOCATION_TIMEOUT = 15.0
DEFAULT_LOG_LEVEL = "INFO"


def _read(env: Mapping[str, str], name: str, cast: Callable[[str], T], default: T) -> T:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"{name} has an invalid value: {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    api_key: str
    days: int = DEFAULT_DAYS
    timeout: float = DEFAULT_TIMEOUT
    location_timeout: float = DEFAULT_LOCATION_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        if env is None:
            load_dotenv()  # in production the variables are injected by the environment
            env = os.environ

        api_key = env.get("WEATHERAPI_KEY", "").strip()
        if not api_key:
            # fail early, a missing key only shows up later as a confusing 401
            raise ConfigError("WEATHERAPI_KEY not set")

        return cls(
            api_key=api_key,
            days=_read(env, "WEATHERAPP_DAYS", int, DEFAULT_DAYS),
            timeout=_read(env, "WEATHERAPP_TIMEOUT", float, DEFAULT_TIMEOUT),
            location_timeout=_read(env, "WEATHERAPP_LOCATION_TIMEOUT", float, DEFAULT_LOCATION_TIMEOUT),
            log_level=env.get("WEATHERAPP_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL,
        )

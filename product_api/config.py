import os
from dataclasses import dataclass, field


API_KEY_NAME = "x-api-key"


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer, got '{value}'")


@dataclass(frozen=True)
class Settings:
    """
    Runtime configuration for the Product API.

    Values are read from the environment when the settings object is built:
    PORT, HOST, API_KEY and LOG_LEVEL.
    """

    host: str = field(default_factory=lambda: os.environ.get("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: _env_int("PORT", 3000))
    api_key: str = field(default_factory=lambda: os.environ.get("API_KEY", "mysecretkey"))
    log_level: str = field(default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO").upper())

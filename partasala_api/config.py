import os
from dataclasses import dataclass

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/122.0.0.0 Safari/537.36"
)


def _env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def _env_int(name: str, default: int) -> int:
    raw = _env(name, str(default))
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"Invalid integer for env var {name}: {raw!r}") from exc


def _env_float(name: str, default: float) -> float:
    raw = _env(name, str(default))
    try:
        return float(raw)
    except ValueError as exc:
        raise RuntimeError(f"Invalid number for env var {name}: {raw!r}") from exc


def _env_list(name: str, default: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in _env(name, default).split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    base_url: str = "https://partasala.is"
    request_timeout_seconds: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    brand_concurrency: int = 1
    api_host: str = "0.0.0.0"
    api_port: int = 8080
    cors_allow_origins: tuple[str, ...] = ("*",)
    log_level: str = "INFO"


def load_settings() -> Settings:
    return Settings(
        base_url=_env("PARTASALA_BASE_URL", "https://partasala.is").rstrip("/"),
        request_timeout_seconds=_env_float("PARTASALA_REQUEST_TIMEOUT_SECONDS", 10.0),
        user_agent=_env("PARTASALA_USER_AGENT", DEFAULT_USER_AGENT),
        brand_concurrency=max(1, _env_int("PARTASALA_BRAND_CONCURRENCY", 1)),
        api_host=_env("API_HOST", "0.0.0.0"),
        api_port=_env_int("API_PORT", 8080),
        cors_allow_origins=_env_list("CORS_ALLOW_ORIGINS", "*"),
        log_level=_env("LOG_LEVEL", "INFO").upper(),
    )


SETTINGS = load_settings()

import os
from dataclasses import dataclass

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    secret_key: str
    env: str
    log_level: str

    backend_url: str
    backend_timeout_seconds: float
    data_source: str

    page_size: int
    router_base_url: str
    shop_type_options: tuple[str, ...]
    package_type_options: tuple[str, ...]


def _getenv(name: str, default: str = "") -> str:
    return (os.environ.get(name) or default).strip()


def _getenv_int(name: str, default: int) -> int:
    raw = _getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _getenv_float(name: str, default: float) -> float:
    raw = _getenv(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _getenv_log_level(name: str, default: str) -> str:
    level = _getenv(name, default).upper()
    return level if level in LOG_LEVELS else default


def _getenv_list(name: str, default: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in _getenv(name, default).split(",") if part.strip())


def load_settings() -> Settings:
    return Settings(
        secret_key=_getenv("SECRET_KEY", "change-me"),
        env=_getenv("ENV", "development"),
        log_level=_getenv_log_level("LOG_LEVEL", "INFO"),
        backend_url=_getenv("BACKEND_URL", "http://localhost:3000"),
        backend_timeout_seconds=_getenv_float("BACKEND_TIMEOUT_SECONDS", 10.0),
        data_source=_getenv("DATA_SOURCE", "fixture").lower(),
        page_size=_getenv_int("PAGE_SIZE", 5),
        router_base_url=_getenv("ROUTER_BASE_URL", ""),
        # Must be kept in sync with the shop types the data actually contains.
        shop_type_options=_getenv_list("SHOP_TYPE_OPTIONS", "General,Medical,Footwear,Electrical,Clothes"),
        package_type_options=_getenv_list("PACKAGE_TYPE_OPTIONS", "Basic,Standard,Premium"),
    )


def load_config() -> dict:
    s = load_settings()
    is_production = s.env in ("prod", "production")
    return {
        "SECRET_KEY": s.secret_key,
        "ENV": s.env,
        "LOG_LEVEL": s.log_level,
        "BACKEND_URL": s.backend_url,
        "BACKEND_TIMEOUT_SECONDS": s.backend_timeout_seconds,
        "DATA_SOURCE": s.data_source,
        "PAGE_SIZE": s.page_size,
        "ROUTER_BASE_URL": s.router_base_url,
        "SHOP_TYPE_OPTIONS": s.shop_type_options,
        "PACKAGE_TYPE_OPTIONS": s.package_type_options,
        # security defaults
        "SESSION_COOKIE_HTTPONLY": True,
        "SESSION_COOKIE_SAMESITE": "Lax",
        "SESSION_COOKIE_SECURE": is_production,  # Require HTTPS in production
    }

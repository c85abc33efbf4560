# _config.py
# Runtime configuration for the Next Feature display, read once from the environment.

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import List, Mapping, Optional

from modules._mod_base import ConfigError, Credentials

DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"
DEFAULT_TOKEN_FIELD = "authToken"
DEFAULT_WATCHLIST_FIELD = "watchlist"

# env var -> AppConfig attribute
REQUIRED_ENV = {
    "MOVERY_BASE_URL": "base_url",
    "API_CLIENT_STRING": "client_string",
    "USER_EMAIL": "email",
    "USER_PASSWORD": "password",
    "USER_ID": "user_id",
}


@dataclass(frozen=True)
class AppConfig:
    base_url: str = ""
    client_string: str = ""
    email: str = ""
    password: str = ""
    user_id: str = ""
    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    next_dt: Optional[str] = None
    token_field: str = DEFAULT_TOKEN_FIELD
    watchlist_field: str = DEFAULT_WATCHLIST_FIELD
    poster_base_url: Optional[str] = None
    display_tz: Optional[str] = None
    http_timeout: Optional[float] = None
    log_level: str = "info"
    log_json: Optional[str] = None

    def __repr__(self) -> str:
        return (
            f"AppConfig(base_url={self.base_url!r}, user_id={self.user_id!r}, "
            f"host={self.host!r}, port={self.port!r})"
        )

    @property
    def credentials(self) -> Credentials:
        return Credentials(email=self.email, password=self.password, client_identifier=self.client_string)

    @property
    def api_base(self) -> str:
        return self.base_url.rstrip("/")

    def missing(self) -> List[str]:
        """Names of required environment variables that are unset or blank."""
        return [env for env, attr in REQUIRED_ENV.items() if not (getattr(self, attr) or "").strip()]


def _str(env: Mapping[str, str], key: str, default: str = "") -> str:
    return (env.get(key) or default).strip()

def _opt(env: Mapping[str, str], key: str) -> Optional[str]:
    v = (env.get(key) or "").strip()
    return v or None

def _port(raw: Optional[str]) -> int:
    if not raw:
        return DEFAULT_PORT
    try:
        port = int(raw)
    except ValueError:
        raise ConfigError(f"PORT must be an integer, got {raw!r}")
    if not 0 < port < 65536:
        raise ConfigError(f"PORT out of range: {port}")
    return port

def _timeout(raw: Optional[str]) -> Optional[float]:
    if not raw:
        return None
    try:
        t = float(raw)
    except ValueError:
        raise ConfigError(f"HTTP_TIMEOUT must be a number of seconds, got {raw!r}")
    return t if t > 0 else None


def load_config(env: Optional[Mapping[str, str]] = None) -> AppConfig:
    """
    Build AppConfig from the environment (or an injected mapping).
    Missing required values are left blank; see AppConfig.missing().
    """
    e = os.environ if env is None else env
    return AppConfig(
        base_url=_str(e, "MOVERY_BASE_URL"),
        client_string=_str(e, "API_CLIENT_STRING"),
        email=_str(e, "USER_EMAIL"),
        password=e.get("USER_PASSWORD") or "",
        user_id=_str(e, "USER_ID"),
        port=_port(_opt(e, "PORT")),
        host=_str(e, "HOST", DEFAULT_HOST),
        next_dt=_opt(e, "NEXT_DT"),
        token_field=_str(e, "MOVARY_TOKEN_FIELD", DEFAULT_TOKEN_FIELD),
        watchlist_field=_str(e, "MOVARY_WATCHLIST_FIELD", DEFAULT_WATCHLIST_FIELD),
        poster_base_url=_opt(e, "POSTER_BASE_URL"),
        display_tz=_opt(e, "DISPLAY_TZ"),
        http_timeout=_timeout(_opt(e, "HTTP_TIMEOUT")),
        log_level=_str(e, "LOG_LEVEL", "info").lower(),
        log_json=_opt(e, "LOG_JSON"),
    )

# config.py
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

DEFAULT_DATABASE_URL = "sqlite:///interviews.db"
DEFAULT_CORS_ORIGINS = ("http://localhost:3000",)


def _split_origins(raw: str) -> Tuple[str, ...]:
    return tuple(o.strip() for o in raw.split(",") if o.strip())


@dataclass(frozen=True)
class Config:
    database_url: str = DEFAULT_DATABASE_URL
    cors_origins: Tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)
    host: str = "127.0.0.1"
    port: int = 5000
    log_level: str = "INFO"
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """Build a Config from environment variables (call load_dotenv first for .env support)."""
        env = os.environ if environ is None else environ
        origins = _split_origins(env.get("CORS_ORIGINS", "")) or DEFAULT_CORS_ORIGINS
        return cls(
            # URL_API is the variable name older deployments used
            database_url=env.get("DATABASE_URL") or env.get("URL_API") or DEFAULT_DATABASE_URL,
            cors_origins=origins,
            host=env.get("HOST", "127.0.0.1"),
            port=int(env.get("PORT", "5000")),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
            debug=env.get("FLASK_DEBUG", "0").lower() in ("1", "true", "yes"),
        )

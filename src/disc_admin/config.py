from __future__ import annotations

from dataclasses import dataclass, field
import os

from disc_admin.schemas.types import MatchMode

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class Settings:
    route_match: MatchMode = "segment"
    require_tracking: bool = False
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    log_level: str = "WARNING"
    notes: list[str] = field(default_factory=list)

    @classmethod
    def from_env(cls) -> Settings:
        settings = cls()

        route_match = os.getenv("DISCADMIN_ROUTE_MATCH", "segment").strip().lower()
        if route_match in {"segment", "prefix"}:
            settings.route_match = route_match  # type: ignore[assignment]
        else:
            settings.notes.append(f"Unknown DISCADMIN_ROUTE_MATCH '{route_match}'; using segment matching.")

        require_tracking = os.getenv("DISCADMIN_REQUIRE_TRACKING", "0").strip().lower()
        if require_tracking in _TRUTHY:
            settings.require_tracking = True
        elif require_tracking not in _FALSY:
            settings.notes.append(f"Unknown DISCADMIN_REQUIRE_TRACKING '{require_tracking}'; tracking stays optional.")

        settings.api_host = os.getenv("DISCADMIN_API_HOST", settings.api_host).strip() or settings.api_host

        raw_port = os.getenv("DISCADMIN_API_PORT", str(settings.api_port)).strip()
        try:
            port = int(raw_port)
        except ValueError:
            port = -1
        if 0 < port < 65536:
            settings.api_port = port
        else:
            settings.notes.append(f"Invalid DISCADMIN_API_PORT '{raw_port}'; using {settings.api_port}.")

        log_level = os.getenv("DISCADMIN_LOG_LEVEL", settings.log_level).strip().upper()
        if log_level in _LOG_LEVELS:
            settings.log_level = log_level
        else:
            settings.notes.append(f"Unknown DISCADMIN_LOG_LEVEL '{log_level}'; using {settings.log_level}.")

        return settings

"""Runtime environment helpers: dev-mode guard and env-driven lists."""

import os
from typing import List, Optional, Set
from urllib.parse import urlparse

DEV_USERNAME = "dev"
DEV_EMAIL = "dev@localhost"

_LOCAL_HOSTS: Set[str] = {"localhost", "127.0.0.1", "::1"}

DEFAULT_CORS_ORIGINS = [
    "http://localhost",
    "http://localhost:3000",
    "http://localhost:5173",
    "http://localhost:8000",
]


def _env_list(var_name: str) -> List[str]:
    raw = os.getenv(var_name, "")
    values = []
    for entry in raw.split(","):
        cleaned = entry.strip().strip('"').strip("'")
        if cleaned:
            values.append(cleaned)
    return values


def _extract_hostname(url_value: str) -> Optional[str]:
    if not url_value or not url_value.strip():
        return None
    url_value = url_value.strip()
    candidate = url_value if "://" in url_value else f"http://{url_value}"
    return urlparse(candidate).hostname


def admin_usernames() -> Set[str]:
    """Usernames elevated to superadmin (ADMIN_USERNAMES, comma-separated)."""
    return {name.lower() for name in _env_list("ADMIN_USERNAMES")}


def cors_origins() -> List[str]:
    origins = list(DEFAULT_CORS_ORIGINS)
    for origin in _env_list("CORS_ORIGINS"):
        if origin not in origins:
            origins.append(origin)
    return origins


def dev_mode_requested() -> bool:
    return os.getenv("DEV_MODE", "false").lower() == "true"


def dev_mode_active() -> bool:
    """Return True if dev mode is enabled and allowed; raise if misconfigured.

    DEV_MODE is honored only when APP_BASE_URL points at a local host (or one
    listed in DEV_MODE_ALLOWED_HOSTS). Without APP_BASE_URL, ALLOW_DEV_MODE=true
    is required.
    """
    if not dev_mode_requested():
        return False

    hostname = _extract_hostname(os.getenv("APP_BASE_URL", ""))
    allowed_hosts = set(_LOCAL_HOSTS)
    allowed_hosts.update(host.lower() for host in _env_list("DEV_MODE_ALLOWED_HOSTS"))

    if hostname:
        if hostname.lower() not in allowed_hosts:
            raise RuntimeError(
                "DEV_MODE=true is not permitted when APP_BASE_URL points to "
                f"'{hostname}'. Allowed hosts: {sorted(allowed_hosts)}"
            )
    elif os.getenv("ALLOW_DEV_MODE", "false").lower() != "true":
        raise RuntimeError(
            "DEV_MODE=true requires APP_BASE_URL to be set to a localhost URL "
            "or ALLOW_DEV_MODE=true for non-local execution."
        )
    return True

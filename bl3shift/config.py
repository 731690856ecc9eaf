"""Centralized configuration loaded from .env, the environment and CLI overrides"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import dotenv_values


def _default_history_dir() -> Path:
    base = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(base) / "bl3shift"


class Config:
    """Centralized configuration management"""

    def __init__(self, overrides: Optional[Dict[str, str]] = None):
        # Load .env file if it exists (for local development)
        env_file_config = dotenv_values(".env") if Path(".env").exists() else {}
        self.env_config = env_file_config
        self.overrides = {k: v for k, v in (overrides or {}).items() if v is not None}

        # API Configuration
        self.api_url = self._get_str("API_URL", "https://api.2k.com/borderlands").rstrip("/")
        self.login_url = self._get_str("LOGIN_URL", f"{self.api_url}/users/authenticate")
        self.code_list_url = self._get_str("CODE_LIST_URL", "https://shift.orcicorn.com/tags/borderlands3/index.json")
        self.user_agent = "BL3 Auto Vip"
        self.origin = "https://borderlands.com"
        self.referer = "https://borderlands.com/en-US/vip/"

        # Headers exchanged during login
        self.login_redirect_header = "X-CT-REDIRECT"
        self.session_id_header = "X-SESSION-SET"
        self.session_header = "X-SESSION"
        self.request_headers: Dict[str, str] = {}

        # Published API settings, applied over the defaults above (empty to disable)
        self.remote_config_url = self._get_str(
            "REMOTE_CONFIG_URL", "https://raw.githubusercontent.com/Nivl/bl3_auto_vip/master/config.json")

        # Runtime Configuration
        self.verbose = self._get_bool("VERBOSE", False)
        self.allow_inactive = self._get_bool("ALLOW_INACTIVE", False)
        self.delay_seconds = self._get_float("DELAY_SECONDS", 0.0)
        self.connection_timeout = self._get_int("CONNECTION_TIMEOUT", 10)
        self.read_timeout = self._get_int("READ_TIMEOUT", 30)

        # Paths
        self.history_dir = Path(self._get_str("HISTORY_PATH") or _default_history_dir())

        # Internal name of the game on the 2K API (Borderlands 3)
        self.game_code_name = self._get_str("GAME_CODE_NAME", "oak")

        # Viewing-only channels can't receive redemptions
        self.excluded_platforms = self._get_list("EXCLUDED_PLATFORMS", ["twitch"])

        self.email = self._get_str("SHIFT_EMAIL")
        self.password = self._get_str("SHIFT_PASSWORD")

    @property
    def timeout(self):
        return (self.connection_timeout, self.read_timeout)

    def _get_str(self, key: str, default: str = "") -> str:
        # Overrides first, then .env file, then environment variables
        if key in self.overrides:
            return str(self.overrides[key])
        value = self.env_config.get(key, os.environ.get(key, default))
        # A bare key in .env has no value
        return default if value is None else value

    def _get_bool(self, key: str, default: bool = False) -> bool:
        value = self._get_str(key, "1" if default else "0")
        return value.strip().lower() in ("1", "true", "yes")

    def _get_int(self, key: str, default: int) -> int:
        try:
            return int(self._get_str(key, str(default)))
        except ValueError:
            return default

    def _get_float(self, key: str, default: float) -> float:
        try:
            return float(self._get_str(key, str(default)))
        except ValueError:
            return default

    def _get_list(self, key: str, default: List[str]) -> List[str]:
        value = self._get_str(key)
        if not value:
            return list(default)
        return [item.strip().lower() for item in value.split(",") if item.strip()]

    def _is_set(self, key: str) -> bool:
        return key in self.overrides or self.env_config.get(key) is not None or key in os.environ

    def apply_remote(self, data: Dict[str, Any]) -> Optional[str]:
        """Apply a published API config and return the tool version it announces.

        A login URL set locally is kept. Missing or non-string values leave
        the current setting in place.
        """
        if not self._is_set("LOGIN_URL") and _is_text(data.get("loginUrl")):
            self.login_url = data["loginUrl"]
        for key, attr in REMOTE_HEADER_KEYS.items():
            if _is_text(data.get(key)):
                setattr(self, attr, data[key])

        headers = data.get("requestHeaders")
        if isinstance(headers, dict):
            self.request_headers.update({str(k): str(v) for k, v in headers.items() if v is not None})

        version = data.get("version")
        return version if _is_text(version) else None


REMOTE_HEADER_KEYS = {
    "loginRedirectHeader": "login_redirect_header",
    "sessionIdHeader": "session_id_header",
    "sessionHeader": "session_header",
}


def _is_text(value) -> bool:
    return isinstance(value, str) and bool(value.strip())

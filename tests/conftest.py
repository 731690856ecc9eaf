from typing import Dict, List, Tuple

import pytest

from bl3shift.config import Config
from bl3shift.models import RedemptionResult, RedemptionStatus
from bl3shift.session import AuthenticatedSession, ShiftSession

API_URL = "https://api.test/borderlands"
CODE_LIST_URL = "https://codes.test/index.json"


class FakeRedeemer:
    """Records redeem calls and answers with preset outcomes (success by default)"""

    def __init__(self, outcomes: Dict[Tuple[str, str], Tuple[RedemptionStatus, str]] = None):
        self.outcomes = outcomes or {}
        self.calls: List[Tuple[str, str]] = []

    def redeem(self, code: str, platform: str) -> RedemptionResult:
        self.calls.append((code, platform))
        status, message = self.outcomes.get((code, platform), (RedemptionStatus.SUCCESS, "redeemed"))
        return RedemptionResult(code, platform, status, message)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    # Keep a developer's .env and credentials out of the tests
    monkeypatch.chdir(tmp_path)
    for key in ("SHIFT_EMAIL", "SHIFT_PASSWORD", "VERBOSE", "ALLOW_INACTIVE", "HISTORY_PATH",
                "API_URL", "LOGIN_URL", "CODE_LIST_URL", "DELAY_SECONDS", "EXCLUDED_PLATFORMS",
                "REMOTE_CONFIG_URL"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def config_override():
    return {}


@pytest.fixture
def config(tmp_path, config_override) -> Config:
    overrides = {
        "API_URL": API_URL,
        "CODE_LIST_URL": CODE_LIST_URL,
        "HISTORY_PATH": str(tmp_path / "history"),
        "DELAY_SECONDS": "0",
        "REMOTE_CONFIG_URL": "",
    }
    overrides.update(config_override)
    return Config(overrides)


@pytest.fixture
def auth_session(config) -> AuthenticatedSession:
    return AuthenticatedSession(ShiftSession(config), config.session_header, "session-123")


@pytest.fixture
def redeemer() -> FakeRedeemer:
    return FakeRedeemer()

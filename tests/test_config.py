from pathlib import Path

from bl3shift.config import Config


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    config = Config()

    assert config.api_url == "https://api.2k.com/borderlands"
    assert config.login_url == "https://api.2k.com/borderlands/users/authenticate"
    assert config.history_dir == tmp_path / "bl3shift"
    assert config.excluded_platforms == ["twitch"]
    assert not config.verbose
    assert config.delay_seconds == 0.0


def test_env_file_and_environment(monkeypatch, tmp_path):
    Path(".env").write_text("SHIFT_EMAIL=file@hunter.com\nDELAY_SECONDS=1.5\n")
    monkeypatch.setenv("SHIFT_PASSWORD", "from-env")
    monkeypatch.setenv("EXCLUDED_PLATFORMS", "Twitch, YouTube")

    config = Config()

    assert config.email == "file@hunter.com"
    assert config.password == "from-env"
    assert config.delay_seconds == 1.5
    assert config.excluded_platforms == ["twitch", "youtube"]


def test_overrides_win(monkeypatch):
    monkeypatch.setenv("SHIFT_EMAIL", "env@hunter.com")

    config = Config({"SHIFT_EMAIL": "cli@hunter.com", "VERBOSE": "1", "SHIFT_PASSWORD": None})

    assert config.email == "cli@hunter.com"
    assert config.verbose


def test_invalid_numbers_fall_back(monkeypatch):
    monkeypatch.setenv("READ_TIMEOUT", "soon")
    assert Config().read_timeout == 30


def test_bare_env_file_key_uses_default():
    Path(".env").write_text("API_URL\nSHIFT_EMAIL\n")

    config = Config()

    assert config.api_url == "https://api.2k.com/borderlands"
    assert config.email == ""


def test_remote_config_applied(monkeypatch):
    monkeypatch.setenv("API_URL", "https://api.test/borderlands")
    config = Config()

    version = config.apply_remote({
        "version": "2.2",
        "loginUrl": "https://api.test/login",
        "sessionHeader": "X-OTHER-SESSION",
        "sessionIdHeader": "",
        "requestHeaders": {"X-Client": "bl3", "X-Null": None},
    })

    assert version == "2.2"
    assert config.login_url == "https://api.test/login"
    assert config.session_header == "X-OTHER-SESSION"
    assert config.session_id_header == "X-SESSION-SET"
    assert config.request_headers == {"X-Client": "bl3"}


def test_local_login_url_wins_over_remote(monkeypatch):
    monkeypatch.setenv("LOGIN_URL", "https://local.test/login")
    config = Config()

    assert config.apply_remote({"loginUrl": "https://api.test/login", "version": 3}) is None
    assert config.login_url == "https://local.test/login"

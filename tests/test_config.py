from mr_bot.config import load_settings

ENV_VARS = [
    "SLACK_AUTH_TOKEN",
    "SLACK_APP_TOKEN",
    "GITLAB_ACCESS_TOKEN",
    "CUSTOM_GITLAB_URL",
    "GITLAB_TIMEOUT_SECONDS",
    "SLACK_TIMEOUT_SECONDS",
    "SLACK_DEBUG",
    "EVENT_DEDUPE_CAPACITY",
]


def _clear(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch):
    _clear(monkeypatch)
    s = load_settings()
    assert s.gitlab_base_url == "https://gitlab.com"
    assert s.gitlab_timeout_seconds == 8.0
    assert s.slack_timeout_seconds == 30
    assert s.slack_debug is False
    assert s.event_dedupe_capacity == 1024
    assert s.missing_required() == ["SLACK_AUTH_TOKEN", "SLACK_APP_TOKEN"]


def test_from_env(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("SLACK_AUTH_TOKEN", "xoxb-1")
    monkeypatch.setenv("SLACK_APP_TOKEN", "xapp-1")
    monkeypatch.setenv("GITLAB_ACCESS_TOKEN", "glpat")
    monkeypatch.setenv("CUSTOM_GITLAB_URL", "https://git.internal")
    monkeypatch.setenv("GITLAB_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("SLACK_DEBUG", "yes")
    monkeypatch.setenv("EVENT_DEDUPE_CAPACITY", "10")
    s = load_settings()
    assert s.slack_auth_token == "xoxb-1"
    assert s.gitlab_access_token == "glpat"
    assert s.gitlab_base_url == "https://git.internal"
    assert s.gitlab_timeout_seconds == 2.5
    assert s.slack_debug is True
    assert s.event_dedupe_capacity == 10
    assert s.missing_required() == []


def test_bad_numbers_fall_back(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("SLACK_TIMEOUT_SECONDS", "soon")
    monkeypatch.setenv("EVENT_DEDUPE_CAPACITY", "0")
    s = load_settings()
    assert s.slack_timeout_seconds == 30
    assert s.event_dedupe_capacity == 1

import pytest

from collab.utils.runtime import admin_usernames, cors_origins, dev_mode_active


def test_dev_mode_active_false_when_disabled(monkeypatch):
    monkeypatch.delenv("DEV_MODE", raising=False)
    assert dev_mode_active() is False


def test_dev_mode_active_true_for_localhost(monkeypatch):
    monkeypatch.setenv("DEV_MODE", "true")
    monkeypatch.setenv("APP_BASE_URL", "http://localhost:3000")
    assert dev_mode_active() is True


def test_dev_mode_active_raises_for_remote_host(monkeypatch):
    monkeypatch.setenv("DEV_MODE", "true")
    monkeypatch.setenv("APP_BASE_URL", "https://collab.example.com")
    with pytest.raises(RuntimeError):
        dev_mode_active()


def test_dev_mode_allowed_hosts_extend_local_hosts(monkeypatch):
    monkeypatch.setenv("DEV_MODE", "true")
    monkeypatch.setenv("APP_BASE_URL", "http://devbox.internal:8080")
    monkeypatch.setenv("DEV_MODE_ALLOWED_HOSTS", "devbox.internal")
    assert dev_mode_active() is True


def test_dev_mode_active_without_app_base_requires_allow(monkeypatch):
    monkeypatch.setenv("DEV_MODE", "true")
    monkeypatch.delenv("APP_BASE_URL", raising=False)
    monkeypatch.delenv("ALLOW_DEV_MODE", raising=False)
    with pytest.raises(RuntimeError):
        dev_mode_active()

    monkeypatch.setenv("ALLOW_DEV_MODE", "true")
    assert dev_mode_active() is True


def test_admin_usernames_are_normalized(monkeypatch):
    monkeypatch.setenv("ADMIN_USERNAMES", " Alice, bob ,,'Carol'")
    assert admin_usernames() == {"alice", "bob", "carol"}


def test_cors_origins_appends_configured_values(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "https://collab.example.com,http://localhost:3000")
    origins = cors_origins()
    assert "https://collab.example.com" in origins
    assert origins.count("http://localhost:3000") == 1

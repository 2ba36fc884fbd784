"""Tests for environment-backed proxy settings."""

from notifier.adapters.driven.config.proxy import EnvProxySettings

__all__ = []


def test_env_proxy_settings_reads_http_proxy(monkeypatch) -> None:
    """The current value of http_proxy is returned."""
    monkeypatch.setenv("http_proxy", "http://proxy.local:3128")

    assert EnvProxySettings().http_proxy() == "http://proxy.local:3128"


def test_env_proxy_settings_reads_value_at_call_time(monkeypatch) -> None:
    """Changes after construction are picked up."""
    monkeypatch.delenv("http_proxy", raising=False)
    settings = EnvProxySettings()
    assert settings.http_proxy() is None

    monkeypatch.setenv("http_proxy", "http://proxy.local")
    assert settings.http_proxy() == "http://proxy.local"


def test_env_proxy_settings_empty_means_direct(monkeypatch) -> None:
    """An empty variable is the same as no proxy."""
    monkeypatch.setenv("http_proxy", "")

    assert EnvProxySettings().http_proxy() is None

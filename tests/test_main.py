"""Tests for main application entrypoint."""

from unittest.mock import Mock, patch

from notifier.adapters.driven.transport.registry import TransportKind
from notifier.core.errors import ConnectError, EndpointParseError
from notifier.main import deliver, main
from notifier.ports.settings import SettingsPort

__all__ = []


def make_settings(**overrides) -> SettingsPort:
    values = {
        "protocol": "HTTP",
        "endpoint_url": "http://localhost:8000/hook",
        "payload": b"{}",
        "timeout_ms": 2000,
        "is_json": True,
        "secret_key": "s3cr3t",
    }
    values.update(overrides)
    return SettingsPort(**values)


def test_deliver_validates_then_sends() -> None:
    """Deliver should validate the endpoint and send the payload once."""
    transport = Mock()

    result = deliver(make_settings(), transport)

    assert result == 0
    transport.validate_url.assert_called_once_with("http://localhost:8000/hook")
    transport.send.assert_called_once_with("http://localhost:8000/hook", b"{}", 2000, True, "s3cr3t")


def test_deliver_does_not_send_when_validation_fails() -> None:
    """Validation errors stop delivery before any network side effect."""
    transport = Mock()
    transport.validate_url.side_effect = EndpointParseError("Invalid URL 'x'")

    result = deliver(make_settings(protocol="UDP", endpoint_url="x"), transport)

    assert result == 1
    transport.send.assert_not_called()


def test_deliver_reports_transport_failure() -> None:
    """Transport errors are logged and mapped to exit code 1."""
    transport = Mock()
    transport.send.side_effect = ConnectError("refused")

    with patch("notifier.main.logger") as mock_logger:
        result = deliver(make_settings(), transport)

    assert result == 1
    mock_logger.error.assert_called_once()


def test_main_delivers_configured_payload() -> None:
    """Main should build the transport from settings and deliver."""
    with (
        patch("notifier.main.configure_logs"),
        patch("notifier.main.load_settings") as mock_load_settings,
        patch("notifier.main.transport_for") as mock_transport_for,
    ):
        mock_config = Mock()
        mock_config.protocol = TransportKind.TCP
        mock_config.endpoint_url = "collector.local:7000"
        mock_config.payload = b"\x01\x02"
        mock_config.timeout_ms = 500
        mock_config.is_json = False
        mock_config.secret_key = None
        mock_load_settings.return_value = mock_config

        result = main()

    assert result == 0
    mock_transport_for.assert_called_once_with("TCP")
    mock_transport_for.return_value.send.assert_called_once_with(
        "collector.local:7000", b"\x01\x02", 500, False, None
    )


def test_main_aborts_on_configuration_error() -> None:
    """Main should not deliver when configuration is invalid."""
    with (
        patch("notifier.main.configure_logs"),
        patch("notifier.main.load_settings") as mock_load_settings,
        patch("notifier.main.transport_for") as mock_transport_for,
    ):
        mock_load_settings.side_effect = RuntimeError("Missing required environment variable: ENDPOINT_URL")

        result = main()

    assert result == 1
    mock_transport_for.assert_not_called()

from __future__ import annotations

import pytest

from mochow_sdk.auth import Credentials
from mochow_sdk.config import ClientConfiguration, Protocol
from mochow_sdk.retry import DefaultRetryPolicy


def test_defaults() -> None:
    cfg = ClientConfiguration()
    assert cfg.protocol is Protocol.HTTP
    assert cfg.max_connections == 50
    assert cfg.socket_timeout_in_millis == 50000
    assert cfg.connection_timeout_in_millis == 50000
    assert cfg.retry_policy.max_error_retry == 3
    assert cfg.retry_policy.max_delay_in_millis == 20000
    assert cfg.user_agent.startswith("mochow-sdk-python/")


def test_endpoint_without_scheme_gets_protocol() -> None:
    assert ClientConfiguration(endpoint="127.0.0.1:5287").resolved_endpoint == "http://127.0.0.1:5287"
    cfg = ClientConfiguration(endpoint="db.example.com", protocol=Protocol.HTTPS)
    assert cfg.resolved_endpoint == "https://db.example.com"
    assert ClientConfiguration(endpoint="https://h:8").resolved_endpoint == "https://h:8"


def test_none_protocol_and_policy_fall_back_to_defaults() -> None:
    cfg = ClientConfiguration(protocol=None, retry_policy=None)  # type: ignore[arg-type]
    assert cfg.protocol is Protocol.HTTP
    assert isinstance(cfg.retry_policy, DefaultRetryPolicy)


@pytest.mark.parametrize(
    "name",
    ["max_connections", "socket_timeout_in_millis", "connection_timeout_in_millis", "socket_buffer_size_in_bytes"],
)
def test_negative_values_rejected(name: str) -> None:
    with pytest.raises(ValueError):
        ClientConfiguration(**{name: -1})


def test_copy_is_independent() -> None:
    cfg = ClientConfiguration(endpoint="a:1", headers={"X-Trace": "1"})
    other = cfg.copy(max_connections=10)
    other.headers["X-Trace"] = "2"
    other.endpoint = "b:2"
    assert cfg.headers == {"X-Trace": "1"}
    assert cfg.endpoint == "a:1"
    assert cfg.max_connections == 50
    assert other.max_connections == 10


def test_with_endpoint() -> None:
    cfg = ClientConfiguration(endpoint="a:1")
    assert cfg.with_endpoint("b:2").endpoint == "b:2"
    with pytest.raises(ValueError):
        cfg.with_endpoint(None)  # type: ignore[arg-type]


def test_protocol_parse() -> None:
    assert Protocol.parse("HTTPS") is Protocol.HTTPS
    assert Protocol.HTTP.default_port == 80
    assert str(Protocol.HTTPS) == "https"
    with pytest.raises(ValueError):
        Protocol.parse("ftp")


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MOCHOW_ENDPOINT", "10.0.0.1:5287")
    monkeypatch.setenv("MOCHOW_ACCOUNT", "root")
    monkeypatch.setenv("MOCHOW_API_KEY", "secret")
    monkeypatch.setenv("MOCHOW_PROTOCOL", "https")
    monkeypatch.setenv("MOCHOW_MAX_ERROR_RETRY", "5")
    monkeypatch.setenv("MOCHOW_MAX_DELAY_MS", "1000")
    monkeypatch.setenv("MOCHOW_SOCKET_TIMEOUT_MS", "0")

    cfg = ClientConfiguration.from_env()
    assert cfg.resolved_endpoint == "https://10.0.0.1:5287"
    assert cfg.credentials == Credentials(account="root", api_key="secret")
    assert cfg.retry_policy.max_error_retry == 5
    assert cfg.retry_policy.max_delay_in_millis == 1000
    assert cfg.socket_timeout_in_millis == 0


def test_from_env_without_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("MOCHOW_ENDPOINT", "MOCHOW_ACCOUNT", "MOCHOW_API_KEY", "MOCHOW_PROTOCOL"):
        monkeypatch.delenv(name, raising=False)
    cfg = ClientConfiguration.from_env()
    assert cfg.credentials is None
    assert cfg.endpoint is None

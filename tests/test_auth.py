from __future__ import annotations

import pytest

from mochow_sdk.auth import Credentials, SignOptions, Signer
from mochow_sdk.internal import HttpMethod, InternalRequest


def test_sign_sets_bearer_header() -> None:
    request = InternalRequest(HttpMethod.POST, "http://127.0.0.1:5287/v1/database")
    Signer().sign(request, Credentials(account="root", api_key="secret"))
    assert request.headers["Authorization"] == "Bearer account=root&api_key=secret"


def test_sign_does_not_escape_credentials() -> None:
    request = InternalRequest(HttpMethod.POST, "http://127.0.0.1:5287/v1/database")
    Signer().sign(request, Credentials(account="a&b", api_key="k=y"))
    assert request.headers["Authorization"] == "Bearer account=a&b&api_key=k=y"


def test_sign_replaces_previous_header() -> None:
    request = InternalRequest(HttpMethod.POST, "http://127.0.0.1:5287/v1/database")
    signer = Signer()
    signer.sign(request, Credentials(account="first", api_key="one"))
    signer.sign(request, Credentials(account="second", api_key="two"))
    assert request.headers["Authorization"] == "Bearer account=second&api_key=two"


def test_sign_rejects_missing_arguments() -> None:
    request = InternalRequest(HttpMethod.GET, "http://h/v1")
    with pytest.raises(ValueError):
        Signer().sign(None, Credentials(account="root", api_key="secret"))  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        Signer().sign(request, None)  # type: ignore[arg-type]


@pytest.mark.parametrize("account,api_key", [("", "key"), ("root", "")])
def test_credentials_require_values(account: str, api_key: str) -> None:
    with pytest.raises(ValueError):
        Credentials(account=account, api_key=api_key)


def test_credentials_repr_masks_key() -> None:
    text = repr(Credentials(account="root", api_key="secret"))
    assert "secret" not in text
    assert "root" in text


def test_sign_options_collects_headers() -> None:
    options = SignOptions()
    assert options.headers_to_sign is None
    assert options.expiration_in_seconds == 1800
    options.add_header_to_sign("Host")
    options.add_header_to_sign("Date")
    assert options.headers_to_sign == {"Host", "Date"}


def test_request_repr_redacts_authorization() -> None:
    request = InternalRequest(HttpMethod.POST, "http://h/v1/row")
    Signer().sign(request, Credentials(account="root", api_key="secret"))
    assert "secret" not in repr(request)
    assert request.has_header("authorization")

"""Credentials and request signing for the Mochow service."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Set

if TYPE_CHECKING:
    from .internal import InternalRequest

logger = logging.getLogger("mochow_sdk.auth")

AUTHORIZATION = "Authorization"


@dataclass(frozen=True)
class Credentials:
    account: str
    api_key: str

    def __post_init__(self) -> None:
        if not self.account:
            raise ValueError("account should not be empty.")
        if not self.api_key:
            raise ValueError("api_key should not be empty.")

    def __repr__(self) -> str:
        return f"Credentials(account={self.account!r}, api_key='***')"


class SignOptions:
    """Per-request signing options.

    ``expiration_in_seconds`` is accepted for compatibility with the service's
    other SDKs; the bearer scheme below does not enforce it.
    """

    DEFAULT_EXPIRATION_IN_SECONDS = 1800

    def __init__(
        self,
        headers_to_sign: Optional[Set[str]] = None,
        expiration_in_seconds: int = DEFAULT_EXPIRATION_IN_SECONDS,
    ) -> None:
        self.headers_to_sign = headers_to_sign
        self.expiration_in_seconds = expiration_in_seconds

    def add_header_to_sign(self, name: str) -> None:
        if self.headers_to_sign is None:
            self.headers_to_sign = set()
        self.headers_to_sign.add(name)

    def __repr__(self) -> str:
        return (
            f"SignOptions(headers_to_sign={self.headers_to_sign!r}, "
            f"expiration_in_seconds={self.expiration_in_seconds})"
        )


DEFAULT_SIGN_OPTIONS = SignOptions()


class Signer:
    def sign(
        self,
        request: "InternalRequest",
        credentials: Credentials,
        options: Optional[SignOptions] = None,
    ) -> None:
        if request is None:
            raise ValueError("request should not be None.")
        if credentials is None:
            raise ValueError("credentials should not be None.")
        if options is None:
            options = request.sign_options or DEFAULT_SIGN_OPTIONS

        # account and api_key are sent verbatim; the service expects no escaping
        header = f"Bearer account={credentials.account}&api_key={credentials.api_key}"
        logger.debug("Signing request for account=%s", credentials.account)
        request.add_header(AUTHORIZATION, header)


__all__ = ["AUTHORIZATION", "Credentials", "DEFAULT_SIGN_OPTIONS", "SignOptions", "Signer"]

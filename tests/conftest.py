from __future__ import annotations

from typing import Any, Callable, Dict, Iterator, List

import httpx
import pytest

from mochow_sdk.auth import Credentials
from mochow_sdk.client import MochowClient
from mochow_sdk.config import ClientConfiguration


@pytest.fixture()
def sleeps() -> List[float]:
    return []


@pytest.fixture()
def make_client(sleeps: List[float]) -> Iterator[Callable[..., MochowClient]]:
    clients: List[MochowClient] = []

    def factory(handler: Callable[[httpx.Request], httpx.Response], **overrides: Any) -> MochowClient:
        settings: Dict[str, Any] = dict(
            endpoint="127.0.0.1:5287",
            credentials=Credentials(account="root", api_key="secret"),
        )
        settings.update(overrides)
        client = MochowClient(
            ClientConfiguration(**settings),
            transport=httpx.MockTransport(handler),
            sleep=sleeps.append,
        )
        clients.append(client)
        return client

    yield factory
    for client in clients:
        client.close()

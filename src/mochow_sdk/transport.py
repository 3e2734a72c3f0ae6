"""HTTP execution with signing, response handling and retry."""

from __future__ import annotations

import asyncio
import logging
import socket
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Sequence, Type, TypeVar, Union

import httpx

from .auth import Signer
from .config import ClientConfiguration
from .exceptions import MochowClientError
from .handlers import DEFAULT_HANDLERS, ResponseHandler
from .internal import HttpMethod, InternalRequest
from .metrics import REQUEST_COUNTER, REQUEST_LATENCY, RETRY_COUNTER
from .models.responses import MochowResponse
from .response import CONTENT_TYPE, MochowHttpResponse
from .utils import canonical_query_string

logger = logging.getLogger("mochow_sdk.http")
request_logger = logging.getLogger("mochow_sdk.request")

T = TypeVar("T", bound=MochowResponse)

_BODY_METHODS = (HttpMethod.PUT, HttpMethod.POST, HttpMethod.PATCH)
_SKIPPED_HEADERS = frozenset({"host", "content-length"})


@dataclass
class Success:
    response: MochowResponse


@dataclass
class Retryable:
    error: MochowClientError
    delay_in_millis: int


@dataclass
class Fatal:
    error: MochowClientError


Outcome = Union[Success, Retryable, Fatal]


def _seconds(millis: int) -> Optional[float]:
    return millis / 1000.0 if millis > 0 else None


class AsyncPutExecutor:
    """Runs an ``httpx.AsyncClient`` on a private event loop thread.

    Callers block on the returned future, so the client's public API stays
    synchronous.
    """

    def __init__(self, client_kwargs: Dict[str, Any], io_thread_count: int, join_timeout: float = 5.0) -> None:
        self._join_timeout = join_timeout
        self._loop = asyncio.new_event_loop()
        self._loop.set_default_executor(
            ThreadPoolExecutor(max_workers=max(1, io_thread_count), thread_name_prefix="mochow-io")
        )
        self._thread = threading.Thread(target=self._run, name="mochow-async-put", daemon=True)
        self._thread.start()
        try:
            self._client: httpx.AsyncClient = self._submit(self._create_client(client_kwargs))
        except Exception:
            self._stop_loop()
            raise

    def _run(self) -> None:
        asyncio.set_event_loop(self._loop)
        self._loop.run_forever()

    @staticmethod
    async def _create_client(client_kwargs: Dict[str, Any]) -> httpx.AsyncClient:
        return httpx.AsyncClient(**client_kwargs)

    def _submit(self, coro: Awaitable[Any]) -> Any:
        return asyncio.run_coroutine_threadsafe(coro, self._loop).result()

    async def _send(self, request: httpx.Request) -> httpx.Response:
        response = await self._client.send(request)
        await response.aread()
        return response

    def send(self, request: httpx.Request) -> httpx.Response:
        return self._submit(self._send(request))

    def _stop_loop(self) -> None:
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(self._join_timeout)
        self._loop.close()

    def close(self) -> None:
        if self._loop.is_closed():
            return
        try:
            self._submit(self._client.aclose())
        finally:
            self._stop_loop()


class HttpClient:
    """Thread safe. Owns one connection pool and, optionally, an async PUT executor."""

    def __init__(
        self,
        config: ClientConfiguration,
        signer: Signer,
        *,
        async_put_enabled: bool = False,
        transport: Optional[httpx.BaseTransport] = None,
        async_transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if config is None:
            raise ValueError("config should not be None.")
        if signer is None:
            raise ValueError("signer should not be None.")
        self._config = config
        self._signer = signer
        self._sleep = sleep
        self._client = httpx.Client(
            timeout=self._timeout(),
            transport=transport or self._create_transport(),
            follow_redirects=False,
        )
        self._async_executor: Optional[AsyncPutExecutor] = None
        if async_put_enabled:
            try:
                self._async_executor = AsyncPutExecutor(
                    {
                        "timeout": self._timeout(),
                        "transport": async_transport or self._create_async_transport(),
                        "follow_redirects": False,
                    },
                    config.io_thread_count,
                )
            except Exception as exc:
                logger.debug("Async PUT transport unavailable, using synchronous path: %s", exc)
                self._async_executor = None

    @property
    def async_put_enabled(self) -> bool:
        return self._async_executor is not None

    def _timeout(self) -> httpx.Timeout:
        socket_timeout = _seconds(self._config.socket_timeout_in_millis)
        return httpx.Timeout(
            connect=_seconds(self._config.connection_timeout_in_millis),
            read=socket_timeout,
            write=socket_timeout,
            pool=socket_timeout,
        )

    def _limits(self) -> httpx.Limits:
        return httpx.Limits(
            max_connections=self._config.max_connections or None,
            max_keepalive_connections=self._config.max_connections or None,
        )

    def _socket_options(self) -> Optional[list]:
        size = self._config.socket_buffer_size_in_bytes
        if size <= 0:
            return None
        return [
            (socket.SOL_SOCKET, socket.SO_RCVBUF, size),
            (socket.SOL_SOCKET, socket.SO_SNDBUF, size),
        ]

    def _create_transport(self) -> httpx.HTTPTransport:
        return httpx.HTTPTransport(
            limits=self._limits(),
            retries=0,
            local_address=self._config.local_address,
            socket_options=self._socket_options(),
        )

    def _create_async_transport(self) -> httpx.AsyncHTTPTransport:
        return httpx.AsyncHTTPTransport(
            limits=self._limits(),
            retries=0,
            local_address=self._config.local_address,
            socket_options=self._socket_options(),
        )

    def execute(
        self,
        request: InternalRequest,
        response_cls: Type[T],
        handlers: Sequence[ResponseHandler] = DEFAULT_HANDLERS,
    ) -> T:
        """Send ``request`` until it succeeds or the retry policy stops.

        An ``InterruptedError`` raised by the injected ``sleep`` ends the loop
        with ``MochowClientError("Delay interrupted")``. ``KeyboardInterrupt``
        is not caught and reaches the caller unchanged.
        """
        attempt = 1
        while True:
            outcome = self._attempt(request, response_cls, handlers, attempt)
            if isinstance(outcome, Success):
                return outcome.response  # type: ignore[return-value]
            if isinstance(outcome, Fatal):
                raise outcome.error

            logger.debug(
                "Retriable error detected, will retry in %s ms, attempt number: %s",
                outcome.delay_in_millis,
                attempt,
            )
            RETRY_COUNTER.labels(method=request.http_method.value).inc()
            try:
                self._sleep(outcome.delay_in_millis / 1000.0)
            except InterruptedError as exc:
                raise MochowClientError("Delay interrupted") from exc
            if request.content is not None:
                request.content.restart()
            attempt += 1

    def _attempt(
        self,
        request: InternalRequest,
        response_cls: Type[MochowResponse],
        handlers: Sequence[ResponseHandler],
        attempt: int,
    ) -> Outcome:
        http_response: Optional[httpx.Response] = None
        try:
            credentials = self._config.credentials
            if credentials is not None:
                self._signer.sign(request, credentials)
            request_logger.debug("Sending Request: %r", request)

            http_response = self._dispatch(request)
            response = response_cls()
            wrapped = MochowHttpResponse(http_response)
            for handler in handlers:
                if handler.handle(wrapped, response):
                    break
            return Success(response)
        except MochowClientError as exc:
            error = exc
        except Exception as exc:
            logger.debug("Unable to execute HTTP request: %s", exc)
            error = MochowClientError("Unable to execute HTTP request")
            error.__cause__ = exc

        if http_response is not None and not http_response.is_closed:
            http_response.close()
        delay = self._delay_before_next_retry(request, error, attempt)
        if delay is None:
            return Fatal(error)
        return Retryable(error, delay)

    def _delay_before_next_retry(
        self, request: InternalRequest, error: MochowClientError, attempt: int
    ) -> Optional[int]:
        retries = attempt - 1
        policy = self._config.retry_policy
        if retries >= policy.max_error_retry:
            return None
        if request.content is not None and not request.content.restartable:
            logger.debug("Entity not repeatable, stop retrying")
            return None
        delay = policy.delay_before_next_retry(error, retries)
        if delay is None:
            return None
        return min(policy.max_delay_in_millis, delay)

    def _dispatch(self, request: InternalRequest) -> httpx.Response:
        use_async = self._async_executor is not None and request.http_method == HttpMethod.PUT
        http_request = self._create_http_request(request, buffered=use_async)
        method = request.http_method.value
        started = time.perf_counter()
        try:
            if use_async:
                response = self._async_executor.send(http_request)  # type: ignore[union-attr]
            else:
                response = self._client.send(http_request)
            hops = 0
            while request.redirects_enabled and response.next_request is not None and hops < request.max_redirects:
                if not response.is_closed:
                    response.close()
                response = self._client.send(response.next_request)
                hops += 1
        except Exception:
            REQUEST_COUNTER.labels(method=method, status="error").inc()
            raise
        finally:
            REQUEST_LATENCY.labels(method=method).observe(time.perf_counter() - started)
        REQUEST_COUNTER.labels(method=method, status=str(response.status_code)).inc()
        request_logger.debug("Received Response: %s %s", response.status_code, response.reason_phrase)
        if request.redirects_enabled and response.next_request is not None:
            if not response.is_closed:
                response.close()
            raise MochowClientError(
                f"Too many redirects: still redirected to {response.next_request.url} "
                f"after {request.max_redirects} hop(s)"
            )
        return response

    def _create_http_request(self, request: InternalRequest, buffered: bool = False) -> httpx.Request:
        try:
            method = HttpMethod(request.http_method)
        except ValueError as exc:
            raise MochowClientError(f"Unknown HTTP method name: {request.http_method}") from exc

        url = request.uri
        query = canonical_query_string(request.parameters)
        if query:
            url += "?" + query

        headers = {"User-Agent": self._config.user_agent}
        headers.update(self._config.headers)
        for name, value in request.headers.items():
            if name.lower() in _SKIPPED_HEADERS:
                continue
            headers[name] = value
        if not any(name.lower() == CONTENT_TYPE.lower() for name in headers):
            raise MochowClientError(f"{CONTENT_TYPE} not set")

        content: Any = None
        if method in _BODY_METHODS and request.content is not None:
            if buffered or request.content.restartable:
                content = request.content.read()
            else:
                content = request.content.iter_chunks()
        return self._client.build_request(method.value, url, headers=headers, content=content)

    def close(self) -> None:
        self._client.close()
        if self._async_executor is not None:
            try:
                self._async_executor.close()
            except Exception as exc:
                logger.debug("Fail to close async PUT executor: %s", exc)
            self._async_executor = None

    shutdown = close


__all__ = ["AsyncPutExecutor", "Fatal", "HttpClient", "Outcome", "Retryable", "Success"]

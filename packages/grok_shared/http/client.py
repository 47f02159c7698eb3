"""Asynchronous JSON API client shared by outbound adapters."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from .errors import HttpJsonDecodeError, HttpRequestError, HttpStatusError

_JSON_MEDIA_TYPE = "application/json"


class AsyncHttpClient:
    """One pooled ``httpx.AsyncClient`` speaking JSON to a single API root.

    Safe to share between concurrently running coroutines. Failures surface
    as the typed errors in :mod:`packages.grok_shared.http.errors`.
    """

    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: float,
        bearer_token: str | None = None,
        headers: Mapping[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        default_headers = {"Accept": _JSON_MEDIA_TYPE, **dict(headers or {})}
        if bearer_token is not None:
            default_headers["Authorization"] = f"Bearer {bearer_token}"

        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_seconds,
            headers=default_headers,
            transport=transport,
        )

    async def aclose(self) -> None:
        """Release pooled connections unless the caller owns the client."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> AsyncHttpClient:
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()

    async def send_json(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
    ) -> Any:
        """Send one request and return the decoded JSON body of a 2xx reply.

        ``body`` is JSON-encoded when given; ``None`` sends no body at all.
        """
        method = method.upper()
        try:
            if body is None:
                response = await self._client.request(method, path)
            else:
                response = await self._client.request(method, path, json=body)
        except httpx.RequestError as exc:
            raise HttpRequestError(
                message=f"{method} {path} failed: {exc}",
                method=method,
                url=path,
                retryable=True,
                cause=exc,
            ) from exc

        url = str(response.request.url)
        if not response.is_success:
            status = response.status_code
            raise HttpStatusError(
                message=f"{method} {url} returned HTTP {status}",
                method=method,
                url=url,
                retryable=status >= 500 or status == 429,
                status_code=status,
                response_body=response.text,
            )

        try:
            return response.json()
        except (ValueError, RecursionError) as exc:
            raise HttpJsonDecodeError(
                message=f"{method} {url} returned a non-JSON body: {exc}",
                method=method,
                url=url,
                status_code=response.status_code,
                response_body=response.text,
                cause=exc,
            ) from exc

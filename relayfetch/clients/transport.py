# relayfetch/clients/transport.py
from __future__ import annotations

from typing import Any, Dict, Optional, Protocol

import httpx

from ..domain.models import AttemptOptions, TransportResponse


class Transport(Protocol):
    """Performs exactly one HTTP exchange. Network failures raise ``httpx.TransportError``."""
    async def send(self, options: AttemptOptions) -> TransportResponse: ...


class HttpxTransport:
    """
    One short-lived ``httpx.AsyncClient`` per attempt.

    httpx binds proxies to the client, not the request, so the proxy decision
    for an attempt lives and dies with its client. With no proxy the client
    also ignores HTTP(S)_PROXY from the environment.
    """

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        # only used by tests (httpx.MockTransport)
        self._transport = transport

    def client_kwargs(self, options: AttemptOptions) -> Dict[str, Any]:
        kw: Dict[str, Any] = {"trust_env": False, "follow_redirects": True}
        if options.proxy is not None:
            kw["proxy"] = options.proxy.url
        if self._transport is not None:
            kw["transport"] = self._transport
        return kw

    @staticmethod
    def _body_kwargs(body: Any) -> Dict[str, Any]:
        if body is None:
            return {}
        if isinstance(body, (str, bytes)):
            return {"content": body}
        return {"json": body}

    @staticmethod
    def _decode(resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError:
            return resp.text

    async def send(self, options: AttemptOptions) -> TransportResponse:
        async with httpx.AsyncClient(**self.client_kwargs(options)) as client:
            resp = await client.request(
                options.method,
                options.url,
                headers=options.headers,
                **self._body_kwargs(options.body),
            )
        return TransportResponse(
            status_code=resp.status_code,
            body=self._decode(resp),
            headers=dict(resp.headers),
        )

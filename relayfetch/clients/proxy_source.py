# relayfetch/clients/proxy_source.py
from __future__ import annotations

from typing import Any, Dict, Optional, Protocol

import httpx
from pydantic import ValidationError

from ..domain.models import ProxyCredential


class ProxyAcquisitionError(RuntimeError):
    pass


class ProxySource(Protocol):
    async def get_fresh_proxy(self) -> ProxyCredential: ...


class HttpProxySource:
    """
    Asks a proxy-provisioning API for one fresh proxy.

    Expected payload (either bare or wrapped as ``{"data": [ ... ]}``):
      {"ip": "1.2.3.4", "port": 8080, "http_user": "u", "http_pass": "p"}

    Nothing is cached: every call is a new remote request.
    """

    def __init__(self, api_url: str, timeout: float = 10.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self._api_url = api_url
        self._timeout = timeout
        self._transport = transport

    @staticmethod
    def _unwrap(payload: Any) -> Dict[str, Any]:
        if isinstance(payload, dict) and isinstance(payload.get("data"), list):
            if not payload["data"]:
                raise ProxyAcquisitionError("proxy API returned an empty data list")
            payload = payload["data"][0]
        if not isinstance(payload, dict):
            raise ProxyAcquisitionError(f"unexpected proxy API payload: {payload!r}")
        return payload

    async def get_fresh_proxy(self) -> ProxyCredential:
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            resp = await client.get(self._api_url)
        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ProxyAcquisitionError(f"GET {self._api_url} -> {resp.status_code}: {resp.text}") from e
        try:
            row = self._unwrap(resp.json())
            return ProxyCredential(
                host=row["ip"],
                port=int(row["port"]),
                username=row["http_user"],
                password=row["http_pass"],
            )
        except (ValueError, KeyError, TypeError, ValidationError) as e:
            raise ProxyAcquisitionError(f"bad proxy API payload from {self._api_url}: {e}") from e


class NullProxySource:
    """Used when no provisioning API is configured; proxied calls go out direct."""
    async def get_fresh_proxy(self) -> ProxyCredential:
        raise ProxyAcquisitionError("no proxy API configured")

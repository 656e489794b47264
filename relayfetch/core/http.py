from __future__ import annotations
import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional

import httpx

from ..clients.proxy_source import NullProxySource, ProxySource
from ..clients.transport import HttpxTransport, Transport
from ..domain.models import AttemptOptions, ProxyConfig, RequestSpec
from ..services.cookies import CookieStore

logger = logging.getLogger(__name__)

RETRY_DELAY = 2.0
DEFAULT_RETRIES = 3


class RequestFailure(RuntimeError):
    """Transport kept failing until the retry budget ran out."""
    def __init__(self, method: str, url: str, attempts: int):
        super().__init__(f"{method} {url} failed after {attempts} attempt(s)")
        self.method = method
        self.url = url
        self.attempts = attempts


class ExhaustedRetries(RuntimeError):
    """Every attempt got an answer, none of them a 200."""
    def __init__(self, method: str, url: str, attempts: int, last_status: int):
        super().__init__(f"{method} {url} -> {last_status} on all {attempts} attempt(s)")
        self.method = method
        self.url = url
        self.attempts = attempts
        self.last_status = last_status


class RetryingClient:
    """
    Fixed-identity GET/POST with per-attempt proxy injection and bounded retries.

    - status 200 is the only success; the decoded body is returned
    - other statuses are logged and retried right away, no sleep
    - network errors sleep ``retry_delay`` before the next attempt and are
      re-raised as RequestFailure on the last one
    - a proxy that can't be acquired downgrades that attempt to a direct call
    """

    def __init__(
        self,
        user_agent: str,
        *,
        proxy_source: Optional[ProxySource] = None,
        cookie_store: Optional[CookieStore] = None,
        transport: Optional[Transport] = None,
        retry_delay: float = RETRY_DELAY,
        raise_on_exhausted: bool = True,
        default_retries: int = DEFAULT_RETRIES,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.user_agent = user_agent
        self._proxies = proxy_source or NullProxySource()
        self._cookies = cookie_store
        self._transport = transport or HttpxTransport()
        self._retry_delay = retry_delay
        self._raise_on_exhausted = raise_on_exhausted
        self._default_retries = default_retries
        self._sleep = sleep

    # ------------ public surface ------------
    async def get(self, url: str, headers: Optional[Mapping[str, str]] = None,
                  use_proxy: bool = False, retries: Optional[int] = None) -> Any:
        req = RequestSpec(url=url, method="GET", headers=dict(headers or {}),
                          use_proxy=use_proxy, retries=self._default_retries if retries is None else retries)
        return await self._request(req)

    async def post(self, url: str, body: Any, headers: Optional[Mapping[str, str]] = None,
                   use_proxy: bool = False, retries: Optional[int] = None) -> Any:
        req = RequestSpec(url=url, method="POST", body=body, headers=dict(headers or {}),
                          use_proxy=use_proxy, retries=self._default_retries if retries is None else retries)
        return await self._request(req)

    def cookie_lookup(self, key: str) -> Optional[str]:
        if self._cookies is None:
            raise RuntimeError("no cookie store configured")
        return self._cookies.cookie_lookup(key)

    # ------------ internals ------------
    def _headers(self, headers: Mapping[str, str]) -> Dict[str, str]:
        out = {k: v for k, v in headers.items() if k.lower() != "user-agent"}
        out["User-Agent"] = self.user_agent
        return out

    async def _fresh_proxy(self, url: str) -> Optional[ProxyConfig]:
        try:
            cred = await self._proxies.get_fresh_proxy()
        except Exception as e:
            logger.warning("could not get a fresh proxy, going direct: %s", e)
            return None
        return ProxyConfig.for_request(cred, url)

    async def _request(self, req: RequestSpec) -> Any:
        last_status: Optional[int] = None
        for attempt in range(1, req.retries + 1):
            options = AttemptOptions(
                url=req.url,
                method=req.method,
                headers=self._headers(req.headers),
                body=req.body,
                proxy=await self._fresh_proxy(req.url) if req.use_proxy else None,
            )
            try:
                resp = await self._transport.send(options)
            except httpx.RequestError as e:
                logger.error("%s %s attempt %d/%d failed: %s",
                             req.method, req.url, attempt, req.retries, e)
                if attempt == req.retries:
                    raise RequestFailure(req.method, req.url, attempt) from e
                logger.info("retrying in %.1fs", self._retry_delay)
                await self._sleep(self._retry_delay)
                continue

            if resp.status_code == 200:
                return resp.body
            last_status = resp.status_code
            logger.warning("%s %s attempt %d/%d: server answered %d",
                           req.method, req.url, attempt, req.retries, resp.status_code)

        assert last_status is not None
        if self._raise_on_exhausted:
            raise ExhaustedRetries(req.method, req.url, req.retries, last_status)
        return None

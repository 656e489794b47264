from __future__ import annotations

import re
from typing import Any, Dict, Literal, Optional
from urllib.parse import quote, urlsplit

from pydantic import BaseModel, Field, field_validator

Method = Literal["GET", "POST"]
Protocol = Literal["http", "https"]

_SCHEME_RE = re.compile(r"^(http|https):")


def scheme_of(url: str) -> Protocol:
    """Protocol a proxy should speak for ``url``: the target's scheme, not the proxy's."""
    m = _SCHEME_RE.match(url)
    if not m:
        raise ValueError(f"unsupported URL scheme: {url!r}")
    return m.group(1)  # type: ignore[return-value]


class RequestSpec(BaseModel):
    url: str
    method: Method = "GET"
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Any = None                  # POST only
    use_proxy: bool = False
    retries: int = Field(3, ge=1)

    @field_validator("url")
    @classmethod
    def url_well_formed(cls, v: str) -> str:
        parts = urlsplit(v)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"expected an absolute http(s) URL, got {v!r}")
        return v


class ProxyCredential(BaseModel):
    host: str
    port: int = Field(..., ge=1, le=65535)
    username: str
    password: str


class ProxyConfig(BaseModel):
    host: str
    port: int = Field(..., ge=1, le=65535)
    protocol: Protocol
    username: str
    password: str

    @classmethod
    def for_request(cls, cred: ProxyCredential, url: str) -> "ProxyConfig":
        return cls(
            host=cred.host,
            port=cred.port,
            protocol=scheme_of(url),
            username=cred.username,
            password=cred.password,
        )

    @property
    def url(self) -> str:
        user = quote(self.username, safe="")
        pw = quote(self.password, safe="")
        host = f"[{self.host}]" if ":" in self.host and not self.host.startswith("[") else self.host
        return f"{self.protocol}://{user}:{pw}@{host}:{self.port}"


class AttemptOptions(BaseModel):
    """Everything one attempt sends. ``proxy=None`` means no proxy at all, env included."""
    url: str
    method: Method
    headers: Dict[str, str]
    body: Any = None
    proxy: Optional[ProxyConfig] = None


class TransportResponse(BaseModel):
    status_code: int
    body: Any = None
    headers: Dict[str, str] = Field(default_factory=dict)

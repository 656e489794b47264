from .core.http import RetryingClient, RequestFailure, ExhaustedRetries
from .clients.proxy_source import HttpProxySource, NullProxySource, ProxyAcquisitionError
from .services.cookies import JsonCookieStore, CookieFileError

__all__ = [
    "RetryingClient",
    "RequestFailure",
    "ExhaustedRetries",
    "HttpProxySource",
    "NullProxySource",
    "ProxyAcquisitionError",
    "JsonCookieStore",
    "CookieFileError",
]

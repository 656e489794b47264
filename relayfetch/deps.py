# relayfetch/deps.py
from relayfetch.core.config import Settings, get_settings
from relayfetch.core.http import RetryingClient
from relayfetch.services.cookies import JsonCookieStore

def get_proxy_source(settings: Settings):
    """
    Returns the active proxy source.
    - If RELAYFETCH_PROXY_API_URL is set -> HttpProxySource
    - Otherwise -> NullProxySource (use_proxy calls go out direct)
    """
    if settings.proxy_api_url:
        from relayfetch.clients.proxy_source import HttpProxySource
        return HttpProxySource(settings.proxy_api_url, timeout=settings.proxy_api_timeout)
    else:
        from relayfetch.clients.proxy_source import NullProxySource
        return NullProxySource()

def get_client(settings: Settings = None) -> RetryingClient:
    settings = settings or get_settings()
    return RetryingClient(
        settings.user_agent,
        proxy_source=get_proxy_source(settings),
        cookie_store=JsonCookieStore(settings.cookie_path),
        retry_delay=settings.retry_delay_seconds,
        raise_on_exhausted=settings.raise_on_exhausted,
        default_retries=settings.default_retries,
    )

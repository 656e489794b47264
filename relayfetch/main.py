# relayfetch/main.py
import asyncio
import sys

from .core.logging import configure_logging
from .deps import get_client

IP_ECHO_URL = "http://4.ipw.cn/"

async def main(url: str = IP_ECHO_URL) -> None:
    """Fetch ``url`` through a fresh proxy and print what came back (egress IP by default)."""
    client = get_client()
    data = await client.get(url, {"Accept": "application/json, text/plain, */*"}, use_proxy=True)
    print(data)

if __name__ == "__main__":
    configure_logging()
    asyncio.run(main(*sys.argv[1:2]))

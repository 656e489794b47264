# relayfetch/services/cookies.py
from __future__ import annotations

import json
import logging
import pathlib
from typing import Optional, Protocol, Union

logger = logging.getLogger(__name__)


class CookieFileError(RuntimeError):
    pass


class CookieStore(Protocol):
    def cookie_lookup(self, key: str) -> Optional[str]: ...


class JsonCookieStore:
    """
    Cookie file shaped as an ordered list of single-entry groups:

      {"cookie": [{"sessionId": "abc"}, {"other": "x"}]}

    Groups are scanned in order; the first group holding the key wins.
    """

    def __init__(self, path: Union[str, pathlib.Path] = "./cookie.json"):
        self.path = pathlib.Path(path)

    def cookie_lookup(self, key: str) -> Optional[str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            groups = data["cookie"]
            if not isinstance(groups, list):
                raise TypeError(f"'cookie' must be a list, got {type(groups).__name__}")
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.error("failed reading cookie file %s: %s", self.path, e)
            raise CookieFileError(f"could not retrieve cookie for key '{key}'") from e

        for group in groups:
            if isinstance(group, dict) and key in group:
                value = group[key]
                if not value:
                    logger.warning("cookie key '%s' is present but empty in %s", key, self.path)
                return value

        logger.warning("cookie key '%s' not found in %s", key, self.path)
        return None

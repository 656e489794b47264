import json
import logging

import pytest

from relayfetch.services.cookies import CookieFileError, JsonCookieStore


def _write(tmp_path, payload):
    p = tmp_path / "cookie.json"
    p.write_text(payload if isinstance(payload, str) else json.dumps(payload), encoding="utf-8")
    return p


def test_lookup_returns_first_matching_group(tmp_path):
    p = _write(tmp_path, {"cookie": [{"sessionId": "abc"}, {"other": "x"}, {"sessionId": "later"}]})
    assert JsonCookieStore(p).cookie_lookup("sessionId") == "abc"
    assert JsonCookieStore(p).cookie_lookup("other") == "x"


def test_missing_key_returns_none_and_warns(tmp_path, caplog):
    p = _write(tmp_path, {"cookie": [{"sessionId": "abc"}, {"other": "x"}]})
    with caplog.at_level(logging.WARNING, logger="relayfetch.services.cookies"):
        assert JsonCookieStore(p).cookie_lookup("missing") is None
    assert "missing" in caplog.text


def test_missing_file_raises_cookie_file_error(tmp_path):
    with pytest.raises(CookieFileError) as ei:
        JsonCookieStore(tmp_path / "nope.json").cookie_lookup("sessionId")
    assert "sessionId" in str(ei.value)
    assert isinstance(ei.value.__cause__, FileNotFoundError)


@pytest.mark.parametrize("payload", ["{not json", {"cookies": []}, {"cookie": {"sessionId": "abc"}}, "[]"])
def test_malformed_file_raises_cookie_file_error(tmp_path, payload):
    p = _write(tmp_path, payload)
    with pytest.raises(CookieFileError):
        JsonCookieStore(p).cookie_lookup("sessionId")

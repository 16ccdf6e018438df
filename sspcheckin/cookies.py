from __future__ import annotations

import re
from typing import Iterable

# A comma starts a new cookie only when a name=value pair follows it, so the
# comma inside "Expires=Thu, 01 Jan 2026 ..." does not split.
_COOKIE_SPLIT_RE = re.compile(r",\s*(?=[^;,=\s]+=)")


def cookie_header_from_set_cookie(set_cookie: str | Iterable[str] | None) -> str:
    """Turn Set-Cookie value(s) into a request Cookie header.

    Attributes (Path, Expires, HttpOnly, ...) are dropped; only name=value
    pairs are kept, joined with "; ".

    >>> cookie_header_from_set_cookie("a=1; Path=/, b=2; HttpOnly")
    'a=1; b=2'
    """
    if not set_cookie:
        return ""
    if isinstance(set_cookie, str):
        raw = set_cookie
    else:
        raw = ", ".join(set_cookie)

    pairs: list[str] = []
    for chunk in _COOKIE_SPLIT_RE.split(raw):
        pair = chunk.split(";", 1)[0].strip()
        if pair:
            pairs.append(pair)
    return "; ".join(pairs)

from __future__ import annotations

from sspcheckin.cookies import cookie_header_from_set_cookie


def test_attributes_are_stripped_and_pairs_joined():
    assert cookie_header_from_set_cookie("a=1; Path=/, b=2; HttpOnly") == "a=1; b=2"


def test_list_of_set_cookie_values():
    values = ["uid=7; path=/; expires=Sat, 17 Oct 2026 00:00:00 GMT", "email=a%40b.c; path=/", "key=xyz; HttpOnly"]
    assert cookie_header_from_set_cookie(values) == "uid=7; email=a%40b.c; key=xyz"


def test_comma_in_expires_does_not_split():
    raw = "uid=7; Expires=Thu, 01 Jan 2026 00:00:00 GMT; Path=/, ip=abc; Path=/"
    assert cookie_header_from_set_cookie(raw) == "uid=7; ip=abc"


def test_missing_header_yields_empty_cookie():
    assert cookie_header_from_set_cookie(None) == ""
    assert cookie_header_from_set_cookie("") == ""
    assert cookie_header_from_set_cookie([]) == ""

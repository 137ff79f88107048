import httpx
import pytest

from parkerlib.github.models import Rate
from parkerlib.github.page import HeaderLinks, Page, get_header_links

NEXT = "https://api.github.com/organizations?per_page=100&since=3043"
RATE = {"limit": 60, "remaining": 59, "reset": 1700000000, "used": 1}


def test_next_link_found_among_others():
    header = f'<{NEXT}>; rel="next", <https://api.github.com/organizations{{?since}}>; rel="first"'
    assert get_header_links([header]).next == NEXT


def test_next_after_prev():
    header = f'<https://api.github.com/x?page=1>; rel="prev", <{NEXT}>; rel="next"'
    assert get_header_links([header]).next == NEXT


def test_whitespace_around_rel():
    assert get_header_links([f'<{NEXT}>;  rel = "next"']).next == NEXT


def test_no_next_link():
    assert get_header_links(['<https://api.github.com/x>; rel="last"']) == HeaderLinks()


def test_no_headers():
    assert get_header_links([]).next is None


def test_invalid_url_is_skipped():
    values = ['<not a url>; rel="next"', f'<{NEXT}>; rel="next"']
    assert get_header_links(values).next == NEXT


def test_undecodable_bytes_are_skipped():
    values = ['<https://ex\u00e4mple.com/>; rel="next"'.encode("latin-1"), NEXT_BYTES()]
    assert get_header_links(values).next == NEXT


def NEXT_BYTES():
    return f'<{NEXT}>; rel="next"'.encode("ascii")


def test_page_from_response():
    response = httpx.Response(
        200, json=[RATE, {**RATE, "used": 2}], headers=[("link", f'<{NEXT}>; rel="next"')]
    )
    page = Page.from_response(response, Rate)
    assert page.items == [Rate.from_dict(RATE), Rate.from_dict({**RATE, "used": 2})]
    assert page.links.next == NEXT


def test_page_from_response_without_links():
    page = Page.from_response(httpx.Response(200, json=[]), Rate)
    assert page.items == []
    assert page.links.next is None


def test_page_from_response_requires_array():
    with pytest.raises(ValueError):
        Page.from_response(httpx.Response(200, json={"message": "x"}), Rate)
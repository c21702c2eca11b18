import datetime

import httpx
import pytest

from docr_client.errors import DecodeError
from docr_client.response import Links, ListOptions, Pages, Rate, Response, page_for_url, paginate

API = "https://api.digitalocean.com/v2/registry/foo/repositories"


@pytest.mark.parametrize(
    "options, want",
    (
        (ListOptions(), {}),
        (ListOptions(page=0, per_page=0), {}),
        (ListOptions(page=2), {"page": 2}),
        (ListOptions(page=1, per_page=20), {"page": 1, "per_page": 20}),
    ),
)
def test_list_options(options, want):
    assert options.to_params() == want


class TestLinks:
    @pytest.mark.parametrize(
        "pages, current, is_last",
        (
            (None, 1, True),
            (Pages(), 1, True),
            (Pages(next=f"{API}?page=2", last=f"{API}?page=3"), 1, False),
            (Pages(first=f"{API}?page=1", prev=f"{API}?page=1", next=f"{API}?page=3"), 2, False),
            (Pages(first=f"{API}?page=1", prev=f"{API}?page=2"), 3, True),
        ),
    )
    def test_page(self, pages, current, is_last):
        links = Links(pages=pages)
        assert links.current_page() == current
        assert links.is_last_page() is is_last

    @pytest.mark.parametrize("url", (API, f"{API}?page=abc"))
    def test_invalid_prev(self, url):
        with pytest.raises(ValueError):
            Links(pages=Pages(prev=url)).current_page()

    def test_page_for_url(self):
        assert page_for_url(f"{API}?per_page=1&page=7") == 7


class TestRate:
    def test_from_headers(self):
        headers = httpx.Headers(
            {"RateLimit-Limit": "5000", "RateLimit-Remaining": "4999", "RateLimit-Reset": "1585699200"}
        )
        rate = Rate.from_headers(headers)
        assert rate.limit == 5000
        assert rate.remaining == 4999
        assert rate.reset == datetime.datetime(2020, 4, 1, tzinfo=datetime.timezone.utc)

    @pytest.mark.parametrize("headers", ({}, {"RateLimit-Limit": "many"}))
    def test_missing(self, headers):
        rate = Rate.from_headers(httpx.Headers(headers))
        assert rate.limit is None
        assert rate.remaining is None
        assert rate.reset is None


class TestResponse:
    def test_links_and_meta(self):
        resp = Response(
            httpx.Response(
                200,
                json={"repositories": [], "links": {"pages": {"next": f"{API}?page=2"}}, "meta": {"total": 3}},
            )
        )
        assert resp.links.pages.next == f"{API}?page=2"
        assert resp.meta.total == 3
        assert resp.status_code == 200

    @pytest.mark.parametrize(
        "raw",
        (
            httpx.Response(204),
            httpx.Response(200, text="plain text"),
            httpx.Response(200, json=["a", "list"]),
            httpx.Response(200, json={"registry": {"name": "foo"}}),
        ),
    )
    def test_without_envelope(self, raw):
        resp = Response(raw)
        assert resp.links is None
        assert resp.meta is None

    @pytest.mark.parametrize(
        "body, target",
        (
            ({"links": []}, "Links"),
            ({"links": {"pages": "next"}}, "Links"),
            ({"meta": {"total": None}}, "Meta"),
            ({"meta": "3"}, "Meta"),
        ),
    )
    def test_malformed_envelope(self, body, target):
        with pytest.raises(DecodeError) as e:
            Response(httpx.Response(200, json=body))
        assert e.value.target == target


class FakeListing:
    def __init__(self, pages):
        self.pages = pages
        self.calls = []

    def __call__(self, registry, opts: ListOptions = None):
        self.calls.append((registry, opts))
        items = self.pages[opts.page - 1]
        body = {"items": items}
        if opts.page < len(self.pages):
            body["links"] = {"pages": {"next": f"{API}?page={opts.page + 1}"}}
        return items, Response(httpx.Response(200, json=body))


class TestPaginate:
    def test_all_pages(self):
        listing = FakeListing([[1, 2], [3, 4], [5]])
        assert list(paginate(listing, "foo", per_page=2)) == [1, 2, 3, 4, 5]
        assert [opts.page for _, opts in listing.calls] == [1, 2, 3]
        assert all(opts.per_page == 2 for _, opts in listing.calls)
        assert all(registry == "foo" for registry, _ in listing.calls)

    def test_single_page(self):
        listing = FakeListing([[1]])
        assert list(paginate(listing, "foo")) == [1]
        assert len(listing.calls) == 1

    def test_stop_on_empty_page(self):
        listing = FakeListing([[1], [], [3]])
        assert list(paginate(listing, "foo")) == [1]
        assert len(listing.calls) == 2

    def test_lazy(self):
        listing = FakeListing([[1], [2]])
        pages = paginate(listing, "foo")
        assert listing.calls == []
        assert next(pages) == 1
        assert len(listing.calls) == 1

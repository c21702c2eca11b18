#!/usr/bin/env python3
# encoding : utf-8
# create at: 2026/10/12-下午5:10
import datetime
from typing import Any, Callable, Dict, Generator, List, Optional, Tuple, TypeVar

import httpx
from pydantic import ValidationError

from docr_client.errors import DecodeError
from docr_client.utlis import CustomModel

T = TypeVar("T")


class ListOptions(CustomModel):
    page: Optional[int] = None
    per_page: Optional[int] = None

    def to_params(self) -> Dict[str, int]:
        params = {}
        if self.page:
            params["page"] = self.page
        if self.per_page:
            params["per_page"] = self.per_page
        return params


def page_for_url(url: str) -> int:
    page = httpx.URL(url).params.get("page")
    if page is None:
        raise ValueError(f"no page in url: {url}")
    return int(page)


class Pages(CustomModel):
    first: Optional[str] = None
    prev: Optional[str] = None
    last: Optional[str] = None
    next: Optional[str] = None


class Links(CustomModel):
    pages: Optional[Pages] = None

    def current_page(self) -> int:
        if self.pages is None or not self.pages.prev:
            return 1
        return page_for_url(self.pages.prev) + 1

    def is_last_page(self) -> bool:
        if self.pages is None:
            return True
        return not self.pages.next


class Meta(CustomModel):
    total: int = 0


class Rate(CustomModel):
    limit: Optional[int] = None
    remaining: Optional[int] = None
    reset: Optional[datetime.datetime] = None

    @classmethod
    def from_headers(cls, headers: httpx.Headers) -> "Rate":
        def _int(key: str) -> Optional[int]:
            value = headers.get(key)
            if value is None or not value.strip().isdigit():
                return None
            return int(value)

        reset = _int("RateLimit-Reset")
        return cls(
            limit=_int("RateLimit-Limit"),
            remaining=_int("RateLimit-Remaining"),
            reset=None if reset is None else datetime.datetime.fromtimestamp(reset, tz=datetime.timezone.utc),
        )


class Response:
    """
    a `httpx.Response` decorated with the pagination envelope and rate limit of the reply
    """

    def __init__(self, response: httpx.Response):
        self.http_response = response
        self.links: Optional[Links] = None
        self.meta: Optional[Meta] = None
        self.rate = Rate.from_headers(response.headers)
        self._populate_page_values()

    def _populate_page_values(self):
        if not self.http_response.content:
            return
        try:
            data = self.http_response.json()
        except ValueError:
            # docker credentials and the like are not json
            return
        if not isinstance(data, dict):
            return
        try:
            if data.get("links") is not None:
                self.links = Links.model_validate(data["links"])
            if data.get("meta") is not None:
                self.meta = Meta.model_validate(data["meta"])
        except ValidationError as exc:
            raise DecodeError(exc.title, str(exc)) from exc

    @property
    def status_code(self) -> int:
        return self.http_response.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self.http_response.headers

    @property
    def content(self) -> bytes:
        return self.http_response.content

    @property
    def request(self) -> httpx.Request:
        return self.http_response.request

    def json(self) -> Any:
        return self.http_response.json()

    def __repr__(self):
        return f"<Response [{self.status_code}]>"


def paginate(
    list_func: Callable[..., Tuple[List[T], Response]],
    *args,
    per_page: Optional[int] = None,
    **kwargs,
) -> Generator[T, None, None]:
    """
    walk every page of a list method, like `RegistryService.list_repositories`

    Args:
        list_func: callable accepting `opts: ListOptions` and returning `(items, Response)`
        per_page (int): page size, server default when not present
    """
    page = 1
    while True:
        items, resp = list_func(*args, opts=ListOptions(page=page, per_page=per_page), **kwargs)
        yield from items
        if resp.links is None or resp.links.is_last_page() or not items:
            return
        page += 1

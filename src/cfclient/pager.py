"""Pagination helpers shared by every resource client.

Cloud Controller list endpoints return one page of resources plus a
``pagination`` block::

    {
        "pagination": {
            "total_results": 3,
            "total_pages": 2,
            "first": {"href": "https://api.example.com/v3/apps?page=1&per_page=2"},
            "last": {"href": "https://api.example.com/v3/apps?page=2&per_page=2"},
            "next": {"href": "https://api.example.com/v3/apps?page=2&per_page=2"},
            "previous": null
        },
        "resources": [...]
    }

``auto_page`` follows the ``next`` links by rewriting the caller's options,
``single`` enforces exactly one match on a narrowed list.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Awaitable, Callable
from typing import TypeVar
from urllib.parse import parse_qs, urlparse

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import (
    AmbiguousResultError,
    MalformedPaginationLinkError,
    NoNextPageError,
    NotFoundError,
    PaginationError,
)
from .query import ListOptions

logger = logging.getLogger(__name__)

T = TypeVar("T")
_PAGE_NUMBER = re.compile(r"[1-9][0-9]*")
OptsT = TypeVar("OptsT", bound=ListOptions)


class Link(BaseModel):
    """A hyperlink in a response envelope."""

    href: str = ""
    method: str | None = None


class Pagination(BaseModel):
    """Pagination metadata returned with every list response."""

    model_config = ConfigDict(frozen=True)

    total_results: int = Field(0, ge=0)
    total_pages: int = Field(0, ge=0)
    first: Link | None = None
    last: Link | None = None
    next: Link | None = None
    previous: Link | None = None

    @property
    def next_page_href(self) -> str | None:
        return self.next.href if self.next and self.next.href else None

    @property
    def previous_page_href(self) -> str | None:
        return self.previous.href if self.previous and self.previous.href else None


class Pager:
    """Wraps the pagination snapshot of one fetched page."""

    def __init__(self, pagination: Pagination) -> None:
        self.pagination = pagination

    @property
    def total_results(self) -> int:
        return self.pagination.total_results

    @property
    def total_pages(self) -> int:
        return self.pagination.total_pages

    def has_next_page(self) -> bool:
        """True iff the server reported a next-page link."""
        return self.pagination.next_page_href is not None

    def next_page(self, options: ListOptions) -> None:
        """Point ``options`` at the next page, in place.

        Only ``options.page`` changes, so every page is fetched with the same
        filters.

        Raises:
            NoNextPageError: If this is the last page.
            MalformedPaginationLinkError: If the next link has no integer
                ``page`` parameter.
        """
        href = self.pagination.next_page_href
        if href is None:
            raise NoNextPageError()
        options.page = parse_page_number(href)


def parse_page_number(href: str) -> int:
    """Extract the ``page`` query parameter from a pagination link."""
    values = parse_qs(urlparse(href).query).get("page")
    # Plain positive decimal only; int() would also take " 3" and "+3"
    if not values or not _PAGE_NUMBER.fullmatch(values[0]):
        raise MalformedPaginationLinkError(href)
    return int(values[0])


async def auto_page(
    options: OptsT | None,
    fetch_page: Callable[[OptsT], Awaitable[tuple[list[T], Pager]]],
    *,
    max_pages: int | None = None,
) -> list[T]:
    """Fetch every page and return all resources in server order.

    All or nothing: if any page fails the exception propagates and the pages
    gathered so far are dropped.

    Args:
        options: Options for the first page; advanced in place. ``None``
            starts from a default, unfiltered ``ListOptions``.
        fetch_page: Fetches one page for the given options.
        max_pages: Optional cap on the number of pages fetched.

    Raises:
        PaginationError: If ``max_pages`` is exceeded or a next link is malformed.
    """
    if options is None:
        options = ListOptions()  # type: ignore[assignment]
    results: list[T] = []
    fetched = 0
    while True:
        if max_pages is not None and fetched >= max_pages:
            raise PaginationError(f"Exceeded maximum of {max_pages} pages")
        items, pager = await fetch_page(options)
        fetched += 1
        results.extend(items)
        logger.debug(
            f"Fetched page {options.page or 1} with {len(items)} results "
            f"({len(results)}/{pager.total_results})"
        )
        if not pager.has_next_page():
            return results
        pager.next_page(options)


async def single(
    options: OptsT,
    fetch_page: Callable[[OptsT], Awaitable[tuple[list[T], Pager]]],
    resource: str = "resource",
) -> T:
    """Return the only resource matching ``options``.

    Only the first page is fetched; callers are expected to narrow the list
    with filters (usually a name plus a parent GUID).

    Raises:
        NotFoundError: If nothing matches.
        AmbiguousResultError: If more than one resource matches.
    """
    items, pager = await fetch_page(options)
    if not items:
        raise NotFoundError(resource.capitalize(), options.to_query_string())
    if len(items) > 1 or pager.has_next_page():
        raise AmbiguousResultError(resource, max(len(items), pager.total_results))
    return items[0]

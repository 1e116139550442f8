"""
Caller-driven pagination.

Listing operations return one bounded page per call. ``paginate`` drives
the cursor loop for any of them: it calls ``fetch(cursor)``, yields the
page's items, derives the next cursor from the last item and stops at the
first empty page.

Example:
    ```python
    async for notification in paginate(
        lambda before: client.get_notifications("blog", before=before),
        notification_cursor,
    ):
        print(notification.type)
    ```
"""

import logging
from datetime import datetime
from typing import AsyncIterator, Awaitable, Callable, Optional, Sequence, TypeVar

from .exceptions import ArgumentError

logger = logging.getLogger(__name__)

T = TypeVar("T")
C = TypeVar("C")


async def paginate(
    fetch: Callable[[Optional[C]], Awaitable[Sequence[T]]],
    next_cursor: Callable[[T], Optional[C]],
    start: Optional[C] = None,
    max_pages: Optional[int] = None,
) -> AsyncIterator[T]:
    """
    Iterate over every item of a paged listing.

    Args:
        fetch: Coroutine function returning the page after a cursor
            (None for the first page)
        next_cursor: Extracts the cursor for the next page from an item
        start: Initial cursor
        max_pages: Optional bound on the number of calls

    Yields:
        Items in the order the pages return them

    Iteration ends on an empty page, or when ``next_cursor`` returns None
    for the last item of a page. Pass ``max_pages`` to bound the loop
    otherwise.
    """
    if max_pages is not None and max_pages < 1:
        raise ArgumentError("max_pages must be at least 1.", argument="max_pages")

    cursor = start
    pages = 0

    while max_pages is None or pages < max_pages:
        page = await fetch(cursor)
        pages += 1

        if not page:
            logger.debug(f"Pagination finished after {pages} call(s)")
            return

        for item in page:
            yield item

        cursor = next_cursor(page[-1])
        if cursor is None:
            logger.debug(f"Pagination stopped after {pages} call(s): last item has no cursor")
            return


async def offset_paginate(
    fetch: Callable[[int], Awaitable[Sequence[T]]],
    start: int = 0,
    max_pages: Optional[int] = None,
) -> AsyncIterator[T]:
    """Pagination for offset-based listings (queue, submissions, likes)."""
    if max_pages is not None and max_pages < 1:
        raise ArgumentError("max_pages must be at least 1.", argument="max_pages")

    offset = start
    pages = 0

    while max_pages is None or pages < max_pages:
        page = await fetch(offset)
        pages += 1

        if not page:
            logger.debug(f"Pagination finished after {pages} call(s)")
            return

        for item in page:
            yield item

        offset += len(page)


def notification_cursor(notification) -> Optional[datetime]:
    """Next ``before`` cursor: the timestamp of the oldest notification seen."""
    return notification.timestamp


def post_id_cursor(post) -> int:
    """Next id cursor for dashboard and draft listings."""
    return post.id

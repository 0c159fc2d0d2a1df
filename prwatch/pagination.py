"""Cursor-driven traversal of a repository's open pull requests."""

from __future__ import annotations

from typing import Any, Callable, Optional, Tuple

from prwatch.errors import ConfigError
from prwatch.logging import get_logger
from prwatch.models import RepoPage, Repository

# GitHub's upper bound for `first:` on a connection.
MAX_PAGE_SIZE = 100

log = get_logger(__name__)

FetchPage = Callable[[str, str, Optional[str], int], RepoPage]
Reducer = Callable[[Any, RepoPage], Any]


def paginate(
    fetch_page: FetchPage,
    owner: str,
    name: str,
    reducer: Reducer,
    state: Any,
    *,
    page_size: int = MAX_PAGE_SIZE,
    max_items: Optional[int] = 0,
) -> Tuple[Repository, Any]:
    """Fetch pages until exhaustion or the cap, folding each one into `state`.

    `reducer(state, page)` runs exactly once per fetched page, in fetch order,
    and its return value becomes the new state. Errors from `fetch_page` or
    `reducer` propagate untouched and end the traversal.

    `max_items` counts pull requests; the check runs after the reducer, so the
    traversal stops on the first page that pushes the running total past the
    cap. 0 or None means no cap.

    Returns the repository summary from the last page and the final state.
    """
    if not owner or not name:
        raise ConfigError("repository owner and name must be non-empty")
    if not 0 < page_size <= MAX_PAGE_SIZE:
        raise ConfigError(f"page size must be between 1 and {MAX_PAGE_SIZE}, got {page_size}")
    max_items = max_items or 0
    if max_items < 0:
        raise ConfigError(f"max items must be non-negative, got {max_items}")

    cursor = None
    total = 0
    while True:
        page = fetch_page(owner, name, cursor, page_size)
        connection = page.repository.pull_requests
        total += len(connection.nodes)
        log.info("paging: %d PRs", total)

        state = reducer(state, page)

        if max_items > 0 and total > max_items:
            log.info("hit max %d", max_items)
            break
        if not connection.page_info.has_next_page:
            break
        cursor = connection.page_info.end_cursor

    return page.repository, state

"""Pagination controller for positional (page=1..N) upstream endpoints."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, Generic, List, TypeVar

from loguru import logger

from unihockey_feed.api.base_client import BadRequestError

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10
DEFAULT_MAX_PAGES = 20


class StopReason(str, Enum):
    EMPTY_PAGE = "empty_page"
    SHORT_PAGE = "short_page"
    BAD_REQUEST = "bad_request"
    ERROR = "error"
    PAGE_LIMIT = "page_limit"


@dataclass(frozen=True)
class Page(Generic[T]):
    """One fetched page: how many rows upstream sent and what survived mapping."""

    raw_count: int
    items: List[T]


@dataclass
class PaginatedResult(Generic[T]):
    items: List[T] = field(default_factory=list)
    pages_fetched: int = 0
    stop_reason: StopReason = StopReason.PAGE_LIMIT

    @property
    def complete(self) -> bool:
        return self.stop_reason != StopReason.ERROR


async def paginate(
    fetch_page: Callable[[int], Awaitable[Page[T]]],
    page_size: int = DEFAULT_PAGE_SIZE,
    max_pages: int = DEFAULT_MAX_PAGES,
) -> PaginatedResult[T]:
    """Fetch pages sequentially until a stop condition is met.

    Stops on an empty page, a page shorter than `page_size`, a 400 response
    (upstream's "no more pages"), any other failure, or after `max_pages`.
    Items gathered before a failure are kept.
    """
    result: PaginatedResult[T] = PaginatedResult()

    for page_number in range(1, max_pages + 1):
        try:
            page = await fetch_page(page_number)
        except BadRequestError:
            logger.debug(f"Page {page_number} rejected with 400, treating as end of results")
            result.stop_reason = StopReason.BAD_REQUEST
            return result
        except Exception as e:
            logger.warning(
                f"Stopping pagination at page {page_number}, keeping {len(result.items)} items: {e}"
            )
            result.stop_reason = StopReason.ERROR
            return result

        result.pages_fetched += 1
        result.items.extend(page.items)

        if not page.items:
            result.stop_reason = StopReason.EMPTY_PAGE
            return result
        if page.raw_count < page_size:
            result.stop_reason = StopReason.SHORT_PAGE
            return result

    logger.warning(f"Pagination hit the {max_pages} page limit")
    result.stop_reason = StopReason.PAGE_LIMIT
    return result

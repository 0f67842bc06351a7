"""
Offset-based pagination over the legacy orders endpoint.

The paginator reads `limit` and `offset` from the query, fetches pages in
order and merges them into a single list. Pages are fetched strictly one
after another because each offset depends on the previous reply.
"""

import asyncio
import logging
from typing import Any, Mapping

from ecwid_client.utils.error_handler import CancelledException, ValidationException

from .interfaces import IPageFetcher

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 200


def _read_int(params: Mapping[str, Any], name: str) -> int | None:
    value = params.get(name)
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ValidationException(
            message=f"'{name}' must be an integer, got {value!r}",
            field=name,
            invalid_value=value,
        ) from e


class OrdersPaginator:
    """
    Walks every page of an orders query.

    Args:
        fetcher: Collaborator that performs one page request
        max_page_size: Server maximum for `limit`; larger values are reset to it
    """

    def __init__(self, fetcher: IPageFetcher, max_page_size: int = MAX_PAGE_SIZE):
        self.fetcher = fetcher
        self.max_page_size = max_page_size

    def resolve_paging(self, params: Mapping[str, Any]) -> tuple[int, int]:
        """
        Effective (limit, offset) for a parameter mapping.

        Raises:
            ValidationException: If limit or offset is negative or not a number
        """
        limit = _read_int(params, "limit")
        offset = _read_int(params, "offset")

        if limit is None or limit > self.max_page_size:
            limit = self.max_page_size
        if offset is None:
            offset = 0

        if limit < 0:
            raise ValidationException(message="'limit' cannot be negative", field="limit", invalid_value=limit)
        if offset < 0:
            raise ValidationException(message="'offset' cannot be negative", field="offset", invalid_value=offset)

        return limit, offset

    async def fetch_all(
        self, params: Mapping[str, Any], cancel_event: asyncio.Event | None = None
    ) -> list[dict[str, Any]] | None:
        """
        Fetch every page matching `params` and merge them.

        A `limit` of 0 makes a single probe request and returns no orders.

        Args:
            params: Query parameters (limit and offset are optional)
            cancel_event: When set, the fetch stops before the next request

        Returns:
            list: Orders in server order, or None if the endpoint answered 404

        Raises:
            CancelledException: If `cancel_event` is set before all pages arrived
            ValidationException: If paging parameters are invalid
            EcwidHttpException: If a request fails
        """
        limit, offset = self.resolve_paging(params)
        orders: list[dict[str, Any]] = []
        pages = 0

        while True:
            if cancel_event is not None and cancel_event.is_set():
                logger.debug(f"Orders fetch cancelled after {pages} page(s), discarding {len(orders)} orders")
                raise CancelledException(pages_fetched=pages)

            request = {**params, "limit": limit}
            if offset or "offset" in params:
                request["offset"] = offset

            page = await self.fetcher.fetch_orders_page(request, cancel_event)
            if page is None:
                return None

            pages += 1
            orders.extend(page.orders)
            logger.debug(f"Fetched page {pages}: offset={offset} count={page.count} total={page.total}")

            if limit == 0 or page.count == 0 or offset + page.count >= page.total:
                break
            offset += limit

        return orders

    async def probe(self, params: Mapping[str, Any], cancel_event: asyncio.Event | None = None) -> int | None:
        """
        Single `limit=0` request; returns the reported total.

        Returns:
            int: Number of orders matching `params`, or None on 404
        """
        if cancel_event is not None and cancel_event.is_set():
            raise CancelledException()

        page = await self.fetcher.fetch_orders_page({**params, "limit": 0}, cancel_event)
        return None if page is None else page.total

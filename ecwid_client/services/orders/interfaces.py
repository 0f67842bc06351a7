"""
Interfaces/Protocols for the orders services.

These protocols decouple the query value and the paginator from the
HTTP client, so both can be tested with simple fakes.
"""

import asyncio
from typing import TYPE_CHECKING, Any, Mapping, Protocol

from ecwid_client.domain.models import OrdersPage

if TYPE_CHECKING:
    from .query_builder import OrdersQuery


class IPageFetcher(Protocol):
    """Protocol for anything able to fetch one page of orders."""

    async def fetch_orders_page(
        self, params: Mapping[str, Any], cancel_event: asyncio.Event | None = None
    ) -> OrdersPage | None:
        """Fetch one page; None when the endpoint answers 404."""
        ...


class IOrdersClient(Protocol):
    """Protocol for clients that can run a whole orders query."""

    async def get_orders(
        self, query: "OrdersQuery | Mapping[str, Any] | None" = None, cancel_event: asyncio.Event | None = None
    ) -> list[dict[str, Any]] | None:
        """Run a query and return every matching order."""
        ...

"""
Page model for list responses of the legacy orders endpoint.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class OrdersPage:
    """
    One server reply from the orders endpoint.

    Attributes:
        count: Orders contained in this page
        total: Orders matching the whole query
        orders: Order records, passed through untouched
        next_url: URL of the next page as reported by the server
    """

    count: int
    total: int
    orders: list[dict[str, Any]] = field(default_factory=list)
    next_url: str | None = None

    def __post_init__(self) -> None:
        if self.count < 0 or self.total < 0:
            raise ValueError(f"Negative page counters: count={self.count}, total={self.total}")

    @classmethod
    def from_json(cls, payload: dict[str, Any]) -> "OrdersPage":
        """
        Build a page from the decoded JSON body.

        The order list lives under ``orders``; some responses use ``order``.
        A missing ``count`` falls back to the length of the list.

        Args:
            payload: Decoded response body

        Returns:
            OrdersPage: Parsed page
        """
        orders = payload.get("orders")
        if orders is None:
            orders = payload.get("order")
        if not isinstance(orders, list):
            orders = []

        count = payload.get("count")
        total = payload.get("total")
        return cls(
            count=int(count) if count is not None else len(orders),
            total=int(total) if total is not None else 0,
            orders=orders,
            next_url=payload.get("next_url"),
        )

"""
Immutable orders query for the Ecwid legacy API.

An OrdersQuery holds the filter and paging parameters of one orders
request. Every setter returns a new query, so a base query can be shared
and specialised without side effects:

    >>> base = client.orders.from_date(date(2024, 1, 1)).limit(50)
    >>> paid = base.add_payment_statuses("paid")
    >>> shipped = base.add_fulfillment_statuses("shipped delivered")
    >>> orders = await paid.get()
"""

import asyncio
import datetime as dt
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping

from ecwid_client.domain.value_objects.statuses import (
    normalize_statuses,
    validate_fulfillment_statuses,
    validate_payment_statuses,
)
from ecwid_client.utils.error_handler import ConfigException, ValidationException

from .interfaces import IOrdersClient

DATE_FORMAT = "%Y-%m-%d"


def _format_date(value: dt.date, field_name: str) -> str:
    # datetime is a subclass of date, so both are accepted
    if not isinstance(value, dt.date):
        raise ValidationException(
            message=f"Expected a date for '{field_name}', got {type(value).__name__}",
            field=field_name,
            invalid_value=value,
            expected_format="yyyy-MM-dd",
        )
    return value.strftime(DATE_FORMAT)


@dataclass(frozen=True)
class OrdersQuery:
    """
    Immutable set of query parameters for the orders endpoint.

    Attributes:
        params: Read-only mapping of parameter name to value
        client: Client that runs the query through `get()` (optional)
    """

    params: Mapping[str, Any] = field(default_factory=dict)
    client: IOrdersClient | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    def __hash__(self) -> int:
        # Must agree with __eq__, which compares params only
        return hash(frozenset(self.params.items()))

    # === PRIMITIVES ===

    def add_or_update(self, name: str, value: Any) -> "OrdersQuery":
        """Return a copy with `name` set to `value`, replacing any previous value."""
        return replace(self, params={**self.params, name: value})

    def custom(self, name: str, value: Any) -> "OrdersQuery":
        """Set a parameter this class does not model."""
        return self.add_or_update(name, value)

    def to_query_params(self) -> dict[str, str]:
        """
        Render parameters for the URL query string.

        Returns:
            dict[str, str]: Parameter values as strings
        """
        return {name: str(value) for name, value in self.params.items()}

    # === DATES ===

    def date(self, value: dt.date) -> "OrdersQuery":
        """All orders placed this day."""
        return self.add_or_update("date", _format_date(value, "date"))

    def from_date(self, value: dt.date) -> "OrdersQuery":
        """All orders placed after this date."""
        return self.add_or_update("from_date", _format_date(value, "from_date"))

    def to_date(self, value: dt.date) -> "OrdersQuery":
        """All orders placed before this date."""
        return self.add_or_update("to_date", _format_date(value, "to_date"))

    def from_update_date(self, value: dt.date) -> "OrdersQuery":
        """All orders changed after this date."""
        return self.add_or_update("from_update_date", _format_date(value, "from_update_date"))

    def to_update_date(self, value: dt.date) -> "OrdersQuery":
        """All orders changed before this date."""
        return self.add_or_update("to_update_date", _format_date(value, "to_update_date"))

    # === ORDER NUMBERS ===

    def order(self, number: int) -> "OrdersQuery":
        """Single order by its ordinary number."""
        return self.add_or_update("order", number)

    def vendor_order(self, vendor_number: str) -> "OrdersQuery":
        """Single order by vendor number (order number with prefix/suffix)."""
        return self.add_or_update("order", vendor_number)

    def from_order(self, number: int) -> "OrdersQuery":
        """Orders with numbers greater than or equal to `number`."""
        return self.add_or_update("from_order", number)

    def from_vendor_order(self, vendor_number: str) -> "OrdersQuery":
        """Orders with vendor numbers greater than or equal to `vendor_number`."""
        return self.add_or_update("from_order", vendor_number)

    # === CUSTOMER ===

    def customer_id(self, customer_id: int | None) -> "OrdersQuery":
        """Customer identifier, or None for anonymous orders."""
        return self.add_or_update("customer_id", "null" if customer_id is None else customer_id)

    def customer_email(self, email: str | None) -> "OrdersQuery":
        """Customer email, or None/empty for orders without an email."""
        return self.add_or_update("customer_email", email or "")

    # === STATUSES ===

    def statuses(self, payment_statuses: str | None, fulfillment_statuses: str | None) -> "OrdersQuery":
        """
        Add payment and fulfillment statuses in one call.

        Both strings are validated before anything changes. Tokens may be
        separated by commas or whitespace and are matched case-insensitively.

        Args:
            payment_statuses: PAID==ACCEPTED, DECLINED, CANCELLED,
                AWAITING_PAYMENT==QUEUED, CHARGEABLE, REFUNDED, INCOMPLETE
            fulfillment_statuses: AWAITING_PROCESSING==NEW, PROCESSING,
                SHIPPED, DELIVERED, WILL_NOT_DELIVER, RETURNED

        Raises:
            ValidationException: If any token is not a known status
        """
        tokens = validate_payment_statuses(payment_statuses)
        tokens += validate_fulfillment_statuses(fulfillment_statuses)
        return self._merge_statuses(tokens)

    def add_payment_statuses(self, payment_statuses: str | None) -> "OrdersQuery":
        """Add payment statuses; an empty string leaves the query unchanged."""
        return self._merge_statuses(validate_payment_statuses(payment_statuses))

    def add_fulfillment_statuses(self, fulfillment_statuses: str | None) -> "OrdersQuery":
        """Add fulfillment statuses; an empty string leaves the query unchanged."""
        return self._merge_statuses(validate_fulfillment_statuses(fulfillment_statuses))

    def _merge_statuses(self, tokens: list[str]) -> "OrdersQuery":
        if not tokens:
            return self
        # Duplicates are kept
        current = normalize_statuses(str(self.params.get("statuses", "")))
        return self.add_or_update("statuses", ",".join(current + tokens))

    # === PAGING ===

    def limit(self, limit: int) -> "OrdersQuery":
        """Page size. Values above the server maximum (200) are reset when fetching."""
        return self.add_or_update("limit", limit)

    def offset(self, offset: int) -> "OrdersQuery":
        """How many orders to skip from the beginning."""
        return self.add_or_update("offset", offset)

    # === EXECUTION ===

    async def get(self, cancel_event: asyncio.Event | None = None) -> list[dict[str, Any]] | None:
        """
        Run the query with the client that created it.

        Args:
            cancel_event: Set it to stop fetching further pages

        Returns:
            list: Every matching order, or None if the endpoint was not found

        Raises:
            ConfigException: If the query is not bound to a client
        """
        if self.client is None:
            raise ConfigException("OrdersQuery is not bound to a client", missing=["client"])
        return await self.client.get_orders(self, cancel_event)

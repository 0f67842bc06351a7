"""
Client for the Ecwid legacy API (v1).

Orders are read through an immutable OrdersQuery and fetched page by page;
products can be read and updated. Every orders call carries the store's
order token as the `secure_auth_key` query parameter.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import aiohttp

from ecwid_client.core.config import Settings
from ecwid_client.domain.models import OrdersPage
from ecwid_client.domain.value_objects.statuses import (
    validate_fulfillment_statuses,
    validate_payment_statuses,
)
from ecwid_client.services.orders.paginator import OrdersPaginator
from ecwid_client.services.orders.query_builder import OrdersQuery
from ecwid_client.utils.error_handler import ConfigException, ValidationException

from .base_client import BaseEcwidClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShopCredentials:
    """
    Store identifier and the two legacy API tokens.

    Attributes:
        shop_id: Numeric store id
        orders_token: Order API secret key
        products_token: Product API secret key
    """

    shop_id: Optional[int] = None
    orders_token: Optional[str] = None
    products_token: Optional[str] = None


class EcwidLegacyClient(BaseEcwidClient):
    """
    Client for the orders and products endpoints of the legacy API.

    Example:
        >>> async with EcwidLegacyClient().configure_shop(123, "orders-key", "products-key") as client:
        ...     if await client.check_orders_auth():
        ...         orders = await client.orders.add_payment_statuses("paid").limit(50).get()
    """

    def __init__(self, settings: Optional[Settings] = None, session: Optional[aiohttp.ClientSession] = None):
        """Initialize the client, taking default credentials from settings."""
        super().__init__(settings=settings, session=session)
        self.credentials = ShopCredentials(
            shop_id=self.settings.ECWID_SHOP_ID,
            orders_token=self.settings.ECWID_ORDERS_TOKEN,
            products_token=self.settings.ECWID_PRODUCTS_TOKEN,
        )
        self.paginator = OrdersPaginator(self, max_page_size=self.settings.ECWID_MAX_PAGE_SIZE)

    def configure_shop(
        self, shop_id: int, orders_token: Optional[str] = None, products_token: Optional[str] = None
    ) -> "EcwidLegacyClient":
        """
        Set the store and its tokens.

        Args:
            shop_id: Store id
            orders_token: Order API key
            products_token: Product API key

        Returns:
            EcwidLegacyClient: self, for chaining
        """
        self.credentials = ShopCredentials(shop_id=shop_id, orders_token=orders_token, products_token=products_token)
        logger.info(f"Configured Ecwid shop {shop_id}")
        return self

    # === URLS AND CREDENTIALS ===

    def _require(self, *fields: str) -> ShopCredentials:
        missing = [name for name in fields if not getattr(self.credentials, name)]
        if missing:
            raise ConfigException(f"Ecwid shop is not configured, missing: {', '.join(missing)}", missing=missing)
        return self.credentials

    def _orders_url(self) -> str:
        credentials = self._require("shop_id", "orders_token")
        return f"{self.api_url}{credentials.shop_id}/orders"

    def _orders_auth(self) -> dict[str, str]:
        return {"secure_auth_key": self._require("orders_token").orders_token}

    def _shop_url(self, resource: str) -> str:
        credentials = self._require("shop_id")
        return f"{self.api_url}{credentials.shop_id}/{resource}"

    # === ORDERS ===

    @property
    def orders(self) -> OrdersQuery:
        """A new, empty orders query bound to this client."""
        return OrdersQuery(client=self)

    async def fetch_orders_page(
        self, params: Mapping[str, Any], cancel_event: Optional[asyncio.Event] = None
    ) -> Optional[OrdersPage]:
        """
        Fetch one page of orders.

        Args:
            params: Query parameters, sent as-is
            cancel_event: Checked before the request

        Returns:
            OrdersPage or None if the endpoint answered 404
        """
        url = self._orders_url()
        payload = await self._get_api(url, {**self._orders_auth(), **params}, cancel_event)
        if payload is None:
            return None
        return OrdersPage.from_json(payload)

    async def get_orders(
        self,
        query: OrdersQuery | Mapping[str, Any] | None = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Optional[list[dict[str, Any]]]:
        """
        Get every order matching a query, walking all pages.

        Args:
            query: OrdersQuery or plain parameter mapping (None for all orders)
            cancel_event: Set it to abort between pages

        Returns:
            list: Orders in server order, or None on 404

        Raises:
            ConfigException: If the shop is not configured
            ValidationException: If paging parameters are invalid
            CancelledException: If cancelled before the last page
            EcwidHttpException: If a request fails
        """
        self._require("shop_id", "orders_token")
        params = query.params if isinstance(query, OrdersQuery) else dict(query or {})
        orders = await self.paginator.fetch_all(params, cancel_event)
        if orders is not None:
            logger.info(f"Fetched {len(orders)} orders from shop {self.credentials.shop_id}")
        return orders

    async def check_orders_auth(self, cancel_event: Optional[asyncio.Event] = None) -> bool:
        """
        Check the order token.

        Returns:
            bool: True if accepted, False if Ecwid answered 403

        Raises:
            ConfigException: If the shop is not configured
        """
        return await self._check_token(self._orders_url(), self._orders_auth(), cancel_event)

    async def get_orders_count(self, cancel_event: Optional[asyncio.Event] = None) -> Optional[int]:
        """Total number of orders in the store from a `limit=0` request; None on 404."""
        self._require("shop_id", "orders_token")
        return await self.paginator.probe({}, cancel_event)

    async def get_new_orders(self, cancel_event: Optional[asyncio.Event] = None) -> Optional[list[dict[str, Any]]]:
        """Orders paid or awaiting payment that are not processed yet."""
        return await self.get_orders(self.orders.statuses("ACCEPTED QUEUED", "NEW"), cancel_event)

    async def get_non_paid_orders(self, cancel_event: Optional[asyncio.Event] = None) -> Optional[list[dict[str, Any]]]:
        """Orders awaiting payment."""
        return await self.get_orders(self.orders.add_payment_statuses("QUEUED"), cancel_event)

    async def get_paid_not_shipped_orders(
        self, cancel_event: Optional[asyncio.Event] = None
    ) -> Optional[list[dict[str, Any]]]:
        """Paid orders that are new or being processed."""
        return await self.get_orders(self.orders.statuses("ACCEPTED", "NEW PROCESSING"), cancel_event)

    async def get_shipped_not_delivered_orders(
        self, cancel_event: Optional[asyncio.Event] = None
    ) -> Optional[list[dict[str, Any]]]:
        """Orders shipped but not delivered yet."""
        return await self.get_orders(self.orders.add_fulfillment_statuses("SHIPPED"), cancel_event)

    async def update_orders(
        self,
        query: OrdersQuery | Mapping[str, Any],
        new_payment_status: Optional[str] = None,
        new_fulfillment_status: Optional[str] = None,
        new_shipping_tracking_code: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        """
        Change status or tracking code of the orders matching a query.

        Args:
            query: Orders to update (usually `client.orders.order(number)`)
            new_payment_status: Single payment status
            new_fulfillment_status: Single fulfillment status
            new_shipping_tracking_code: Tracking code to set

        Returns:
            list: Updated orders as returned by Ecwid

        Raises:
            ValidationException: If no change is requested or a status is invalid
            ConfigException: If the shop is not configured
            EcwidHttpException: If the request fails
        """
        changes: dict[str, str] = {}

        if new_payment_status:
            changes["new_payment_status"] = self._single_status(
                validate_payment_statuses(new_payment_status), "new_payment_status"
            )
        if new_fulfillment_status:
            changes["new_fulfillment_status"] = self._single_status(
                validate_fulfillment_statuses(new_fulfillment_status), "new_fulfillment_status"
            )
        if new_shipping_tracking_code:
            changes["new_shipping_tracking_code"] = new_shipping_tracking_code

        if not changes:
            raise ValidationException(
                message="No order changes requested",
                field="changes",
                expected_format="new_payment_status, new_fulfillment_status or new_shipping_tracking_code",
            )

        params = query.params if isinstance(query, OrdersQuery) else dict(query)
        payload = await self._post_api(self._orders_url(), {**self._orders_auth(), **params, **changes})
        updated = OrdersPage.from_json(payload or {}).orders
        logger.info(f"Updated {len(updated)} orders in shop {self.credentials.shop_id}: {changes}")
        return updated

    @staticmethod
    def _single_status(tokens: list[str], field: str) -> str:
        if len(tokens) != 1:
            raise ValidationException(
                message=f"'{field}' takes exactly one status, got {len(tokens)}",
                field=field,
                invalid_value=",".join(tokens),
            )
        return tokens[0]

    # === PRODUCTS ===

    async def get_product(
        self, product_id: int, cancel_event: Optional[asyncio.Event] = None
    ) -> Optional[dict[str, Any]]:
        """
        Get one product.

        Returns:
            dict or None if the product does not exist
        """
        return await self._get_api(self._shop_url("product"), {"id": product_id}, cancel_event)

    async def get_products(
        self, category: Optional[int] = None, cancel_event: Optional[asyncio.Event] = None
    ) -> list[dict[str, Any]]:
        """
        List products, optionally from one category.

        Returns:
            list: Products (empty if the store has none)
        """
        params = {} if category is None else {"category": category}
        products = await self._get_api(self._shop_url("products"), params, cancel_event)
        return products or []

    async def update_product(self, product_id: int, data: Mapping[str, Any]) -> Any:
        """
        Update product fields with the Product API.

        Args:
            product_id: Product id
            data: Fields to change, sent as a JSON body

        Returns:
            Response body from Ecwid

        Raises:
            ConfigException: If the products token is missing
            EcwidHttpException: If the request fails
        """
        credentials = self._require("shop_id", "products_token")
        return await self._put_api(
            self._shop_url("product"),
            dict(data),
            {"id": product_id, "secure_auth_key": credentials.products_token},
        )

    def __repr__(self):
        return (
            f"EcwidLegacyClient("
            f"api_url='{self.api_url}', "
            f"shop_id={self.credentials.shop_id}, "
            f"session_open={self.session is not None})"
        )

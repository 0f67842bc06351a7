"""
Async client for the Ecwid legacy REST API.

Typical use:

    >>> from ecwid_client import EcwidLegacyClient
    >>> async with EcwidLegacyClient().configure_shop(123, "orders-key") as client:
    ...     orders = await client.orders.from_date(date(2024, 1, 1)).get()
"""

from ecwid_client.db.ecwid_clients import EcwidLegacyClient, ShopCredentials
from ecwid_client.domain.models import OrdersPage
from ecwid_client.services.orders import OrdersPaginator, OrdersQuery
from ecwid_client.utils.error_handler import (
    AppException,
    CancelledException,
    ConfigException,
    EcwidHttpException,
    ValidationException,
)
from ecwid_client.version import __version__

__all__ = [
    "EcwidLegacyClient",
    "ShopCredentials",
    "OrdersQuery",
    "OrdersPaginator",
    "OrdersPage",
    "AppException",
    "CancelledException",
    "ConfigException",
    "EcwidHttpException",
    "ValidationException",
    "__version__",
]

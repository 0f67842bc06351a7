"""Shared fixtures and HTTP fakes for the Ecwid client tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from ecwid_client.core.config import Settings
from ecwid_client.db.ecwid_clients import EcwidLegacyClient

SHOP_ID = 123
ORDERS_TOKEN = "test"
PRODUCTS_TOKEN = "products-test"
ORDERS_URL = f"https://app.ecwid.com/api/v1/{SHOP_ID}/orders"


def make_response(status=200, json_body=None, text="", reason="OK"):
    """Fake aiohttp response with the attributes the client reads."""
    response = MagicMock()
    response.status = status
    response.reason = reason
    response.json = AsyncMock(return_value=json_body)
    response.text = AsyncMock(return_value=text)
    return response


def make_session(*responses):
    """Fake aiohttp session; each `request()` call yields the next response."""
    contexts = []
    for response in responses:
        context = MagicMock()
        context.__aenter__ = AsyncMock(return_value=response)
        context.__aexit__ = AsyncMock(return_value=False)
        contexts.append(context)

    session = MagicMock()
    session.request = MagicMock(side_effect=contexts)
    session.close = AsyncMock()
    return session


def make_orders(start, count):
    return [{"orderNumber": number} for number in range(start, start + count)]


def orders_page(orders, total):
    return {"count": len(orders), "total": total, "orders": orders, "next_url": None}


@pytest.fixture
def settings():
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        ECWID_SHOP_ID=None,
        ECWID_ORDERS_TOKEN=None,
        ECWID_PRODUCTS_TOKEN=None,
        LOG_FILE_PATH=None,
    )


@pytest.fixture
def client_factory(settings):
    """Build a configured legacy client around a fake session."""

    def factory(*responses):
        session = make_session(*responses)
        client = EcwidLegacyClient(settings=settings, session=session)
        client.configure_shop(SHOP_ID, ORDERS_TOKEN, PRODUCTS_TOKEN)
        return client, session

    return factory

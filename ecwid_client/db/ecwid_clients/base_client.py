"""
Base Ecwid REST client with common functionality.

This module provides the foundation for the Ecwid clients: session
management, GET/POST/PUT helpers with JSON decoding, and translation of
HTTP failures into EcwidHttpException.
"""

import asyncio
import logging
import time
from typing import Any, Mapping, Optional

import aiohttp
from aiohttp import ClientTimeout

from ecwid_client.core.config import Settings, get_settings
from ecwid_client.core.logging_config import log_api_call
from ecwid_client.utils.error_handler import CancelledException, EcwidHttpException

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Something happened to the HTTP call."


class BaseEcwidClient:
    """
    Base client for the Ecwid REST API.

    Owns the aiohttp session and exposes the request helpers every
    specialised client builds on. A session can be injected (tests, shared
    connection pools); otherwise one is created on first use.
    """

    def __init__(self, settings: Optional[Settings] = None, session: Optional[aiohttp.ClientSession] = None):
        """Initialize the base Ecwid client."""
        self.settings = settings or get_settings()
        self.api_url = self.settings.ECWID_API_URL
        self.session: Optional[aiohttp.ClientSession] = session
        self._owns_session = session is None

    def _get_session(self) -> aiohttp.ClientSession:
        if self.session is None:
            timeout = ClientTimeout(
                total=self.settings.HTTP_TIMEOUT_SECONDS,
                connect=self.settings.HTTP_CONNECT_TIMEOUT_SECONDS,
            )
            self.session = aiohttp.ClientSession(timeout=timeout, headers=self.settings.get_default_headers())
            self._owns_session = True
            logger.debug(f"Created HTTP session for {self.api_url}")
        return self.session

    async def close(self):
        """Close the HTTP session if this client created it."""
        if self.session and self._owns_session:
            await self.session.close()
            logger.info("Ecwid client session closed")
        self.session = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False

    async def _request(
        self,
        method: str,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        data: Any = None,
        not_found_as_none: bool = False,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Any:
        """
        Send one request and decode its JSON body.

        Args:
            method: HTTP method
            url: Absolute endpoint URL
            params: Query parameters (values are sent as strings)
            data: JSON body for PUT requests
            not_found_as_none: Return None instead of raising on 404
            cancel_event: Checked before the request is sent

        Returns:
            Decoded JSON body (None for empty bodies or a tolerated 404)

        Raises:
            EcwidHttpException: On non-2xx responses or transport failures
            CancelledException: If `cancel_event` is already set
        """
        if cancel_event is not None and cancel_event.is_set():
            raise CancelledException()

        query = {name: str(value) for name, value in (params or {}).items()}
        kwargs: dict[str, Any] = {"params": query}
        if data is not None:
            kwargs["json"] = data

        started = time.monotonic()
        status = None
        try:
            async with self._get_session().request(method, url, **kwargs) as response:
                status = response.status

                if status == 404 and not_found_as_none:
                    return None

                if status >= 400:
                    body = await response.text()
                    message = body or response.reason or DEFAULT_ERROR_MESSAGE
                    raise EcwidHttpException(message, api_response_code=status, endpoint=url)

                if status == 204:
                    return None

                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise EcwidHttpException(
                        f"Invalid JSON in response: {e}", api_response_code=status, endpoint=url
                    ) from e

        except aiohttp.ClientError as e:
            raise EcwidHttpException(
                f"{DEFAULT_ERROR_MESSAGE} {e}".strip(), api_response_code=None, endpoint=url
            ) from e
        except asyncio.TimeoutError as e:
            raise EcwidHttpException(f"Request to {url} timed out", api_response_code=None, endpoint=url) from e
        finally:
            log_api_call(method, url, status, time.monotonic() - started)

    async def _get_api(
        self,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Any:
        """GET a resource; a 404 yields None instead of an error."""
        return await self._request("GET", url, params=params, not_found_as_none=True, cancel_event=cancel_event)

    async def _post_api(self, url: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """POST with query parameters and an empty body."""
        return await self._request("POST", url, params=params)

    async def _put_api(self, url: str, data: Any, params: Optional[Mapping[str, Any]] = None) -> Any:
        """PUT a JSON body."""
        return await self._request("PUT", url, params=params, data=data)

    async def _check_token(
        self,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> bool:
        """
        Probe an endpoint with `limit=0` to check the credentials.

        Returns:
            bool: True if accepted, False if Ecwid answered 403

        Raises:
            EcwidHttpException: For any failure other than 403
        """
        try:
            await self._get_api(url, {**(params or {}), "limit": 0}, cancel_event)
            return True
        except EcwidHttpException as e:
            if e.api_response_code == 403:
                logger.warning(f"Ecwid rejected the credentials for {url}")
                return False
            raise

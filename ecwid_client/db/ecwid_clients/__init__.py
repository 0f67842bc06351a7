"""
Ecwid REST clients organized by responsibility.

BaseEcwidClient holds the HTTP mechanics; EcwidLegacyClient exposes the
orders and products endpoints of the legacy API.
"""

from .base_client import BaseEcwidClient
from .legacy_client import EcwidLegacyClient, ShopCredentials

__all__ = [
    "BaseEcwidClient",
    "EcwidLegacyClient",
    "ShopCredentials",
]

"""
Response models of the Ecwid legacy API.
"""

from .page import OrdersPage

__all__ = ["OrdersPage"]

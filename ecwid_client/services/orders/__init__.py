"""
Orders query building and pagination.

This package provides the immutable OrdersQuery and the offset-based
OrdersPaginator used by the legacy client.
"""

from .paginator import MAX_PAGE_SIZE, OrdersPaginator
from .query_builder import OrdersQuery

__all__ = ["OrdersQuery", "OrdersPaginator", "MAX_PAGE_SIZE"]

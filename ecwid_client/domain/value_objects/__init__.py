"""
Value objects used to build order queries.
"""

from .statuses import (
    FULFILLMENT_STATUSES,
    PAYMENT_STATUSES,
    normalize_statuses,
    validate_fulfillment_statuses,
    validate_payment_statuses,
)

__all__ = [
    "PAYMENT_STATUSES",
    "FULFILLMENT_STATUSES",
    "normalize_statuses",
    "validate_payment_statuses",
    "validate_fulfillment_statuses",
]

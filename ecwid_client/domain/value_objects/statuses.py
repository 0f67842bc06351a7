"""
Order status vocabularies and the status-string parser.

Ecwid classifies an order with two independent vocabularies: payment
status and fulfillment status. Filters accept free-form strings such as
``"paid, declined"`` or ``"SHIPPED DELIVERED"``; this module turns them
into validated, ordered uppercase tokens.
"""

import re

from ecwid_client.utils.error_handler import ValidationException

# Synonym pairs are listed side by side; both spellings are accepted.
PAYMENT_STATUSES = frozenset(
    {
        "ACCEPTED",
        "PAID",
        "DECLINED",
        "CANCELLED",
        "QUEUED",
        "AWAITING_PAYMENT",
        "CHARGEABLE",
        "REFUNDED",
        "INCOMPLETE",
    }
)

FULFILLMENT_STATUSES = frozenset(
    {
        "NEW",
        "AWAITING_PROCESSING",
        "PROCESSING",
        "SHIPPED",
        "DELIVERED",
        "WILL_NOT_DELIVER",
        "RETURNED",
    }
)

_SEPARATORS = re.compile(r"[\s,]+")


def normalize_statuses(text: str | None) -> list[str]:
    """
    Split a comma or whitespace separated status string into tokens.

    Surrounding whitespace is trimmed, every token is uppercased, input
    order is kept and duplicates are not removed.

    Args:
        text: Raw status string (None is treated as empty)

    Returns:
        list[str]: Uppercase tokens, empty for a blank string
    """
    if not text:
        return []
    return [token.upper() for token in _SEPARATORS.split(text.strip()) if token]


def validate_statuses(text: str | None, vocabulary: frozenset[str], field: str) -> list[str]:
    """
    Normalize a status string and check every token against a vocabulary.

    Args:
        text: Raw status string
        vocabulary: Allowed uppercase tokens
        field: Name reported in the validation error

    Returns:
        list[str]: Validated tokens (empty for a blank string)

    Raises:
        ValidationException: On the first token outside the vocabulary
    """
    tokens = normalize_statuses(text)
    for token in tokens:
        if token not in vocabulary:
            raise ValidationException(
                message=f"Invalid {field} status '{token}'",
                field=field,
                invalid_value=token,
                expected_format=", ".join(sorted(vocabulary)),
            )
    return tokens


def validate_payment_statuses(text: str | None) -> list[str]:
    return validate_statuses(text, PAYMENT_STATUSES, "payment")


def validate_fulfillment_statuses(text: str | None) -> list[str]:
    return validate_statuses(text, FULFILLMENT_STATUSES, "fulfillment")


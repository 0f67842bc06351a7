"""Tests for the order status vocabularies and parser."""

import pytest

from ecwid_client.domain.value_objects.statuses import (
    FULFILLMENT_STATUSES,
    PAYMENT_STATUSES,
    normalize_statuses,
    validate_fulfillment_statuses,
    validate_payment_statuses,
)
from ecwid_client.utils.error_handler import ValidationException


class TestNormalizeStatuses:
    """Tests for splitting free-form status strings."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("paid", ["PAID"]),
            ("paid,declined", ["PAID", "DECLINED"]),
            ("paid, declined", ["PAID", "DECLINED"]),
            ("  Paid   Declined  ", ["PAID", "DECLINED"]),
            ("paid,\tdeclined\nqueued", ["PAID", "DECLINED", "QUEUED"]),
            ("paid,,declined,", ["PAID", "DECLINED"]),
        ],
    )
    def test_separators_and_case(self, text, expected):
        """Commas and whitespace separate tokens, case is ignored."""
        assert normalize_statuses(text) == expected

    def test_keeps_order_and_duplicates(self):
        """Tokens keep their input order and repeats."""
        assert normalize_statuses("shipped paid SHIPPED") == ["SHIPPED", "PAID", "SHIPPED"]

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_blank_input_gives_no_tokens(self, text):
        """Blank or missing input gives no tokens."""
        assert normalize_statuses(text) == []


class TestValidateStatuses:
    """Tests for vocabulary checks."""

    def test_every_payment_status_is_accepted(self):
        """Every payment status passes validation."""
        text = " ".join(sorted(PAYMENT_STATUSES)).lower()
        assert validate_payment_statuses(text) == [token.upper() for token in text.split()]

    def test_every_fulfillment_status_is_accepted(self):
        """Every fulfillment status passes validation."""
        text = ",".join(sorted(FULFILLMENT_STATUSES))
        assert validate_fulfillment_statuses(text) == sorted(FULFILLMENT_STATUSES)

    @pytest.mark.parametrize("pair", [("PAID", "ACCEPTED"), ("AWAITING_PAYMENT", "QUEUED")])
    def test_payment_synonyms_both_accepted(self, pair):
        """Both names of a payment synonym pair are accepted as typed."""
        assert validate_payment_statuses(" ".join(pair)) == list(pair)

    def test_fulfillment_synonyms_both_accepted(self):
        """Both names of a fulfillment synonym pair are accepted as typed."""
        assert validate_fulfillment_statuses("new awaiting_processing") == ["NEW", "AWAITING_PROCESSING"]

    def test_invalid_token_is_reported(self):
        """The first unknown token is named in the error."""
        with pytest.raises(ValidationException) as exc_info:
            validate_payment_statuses("paid, teleported, declined")

        assert exc_info.value.field == "payment"
        assert exc_info.value.invalid_value == "TELEPORTED"
        assert "TELEPORTED" in exc_info.value.message

    def test_fulfillment_status_is_not_a_payment_status(self):
        """Fulfillment tokens fail payment validation."""
        with pytest.raises(ValidationException):
            validate_payment_statuses("SHIPPED")

    def test_payment_status_is_not_a_fulfillment_status(self):
        """Payment tokens fail fulfillment validation."""
        with pytest.raises(ValidationException) as exc_info:
            validate_fulfillment_statuses("shipped paid")

        assert exc_info.value.field == "fulfillment"
        assert exc_info.value.invalid_value == "PAID"

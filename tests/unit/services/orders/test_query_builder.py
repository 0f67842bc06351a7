"""Tests for the immutable OrdersQuery."""

from datetime import date, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from ecwid_client.services.orders import OrdersQuery
from ecwid_client.utils.error_handler import ConfigException, ValidationException


class TestAddOrUpdate:
    """Tests for the basic parameter primitive."""

    def test_new_query_is_empty(self):
        """A fresh query carries no parameters."""
        assert dict(OrdersQuery().params) == {}

    def test_add_returns_new_query(self):
        """Adding a parameter leaves the original query untouched."""
        base = OrdersQuery()
        query = base.add_or_update("limit", 5)

        assert query is not base
        assert dict(base.params) == {}
        assert dict(query.params) == {"limit": 5}

    def test_last_write_wins(self):
        """Setting an existing name replaces its value."""
        query = OrdersQuery().add_or_update("offset", 1).add_or_update("offset", 2)
        assert dict(query.params) == {"offset": 2}

    def test_params_are_read_only(self):
        """The parameter mapping cannot be mutated in place."""
        query = OrdersQuery().limit(5)
        with pytest.raises(TypeError):
            query.params["limit"] = 10

    def test_custom_sets_any_parameter(self):
        """custom() stores parameters that have no dedicated setter."""
        query = OrdersQuery().custom("payment_method", "PayPal")
        assert query.params["payment_method"] == "PayPal"

    def test_client_is_kept_through_the_chain(self):
        """Derived queries stay bound to the same client."""
        client = MagicMock()
        query = OrdersQuery(client=client).limit(5).offset(10)
        assert query.client is client

    def test_to_query_params_renders_strings(self):
        """Every value is rendered as a string for the URL."""
        query = OrdersQuery().limit(5).customer_id(42).customer_id(None).order(7)
        assert query.to_query_params() == {"limit": "5", "customer_id": "null", "order": "7"}


class TestEqualityAndHashing:
    """Tests for using queries as values."""

    def test_equal_params_make_equal_queries(self):
        """Queries built the same way compare equal."""
        assert OrdersQuery().limit(5).order(3) == OrdersQuery().order(3).limit(5)

    def test_client_is_ignored_by_equality(self):
        """The bound client does not take part in comparison."""
        assert OrdersQuery(client=MagicMock()).limit(5) == OrdersQuery().limit(5)

    def test_query_is_hashable(self):
        """Equal queries hash the same and can be used as dict keys."""
        first = OrdersQuery().limit(5).add_payment_statuses("paid")
        second = OrdersQuery().add_payment_statuses("paid").limit(5)

        assert hash(first) == hash(second)
        assert {first: "cached"}[second] == "cached"

    def test_different_params_are_different_keys(self):
        """Queries with different parameters are distinct set members."""
        assert len({OrdersQuery().limit(5), OrdersQuery().limit(6), OrdersQuery().limit(5)}) == 2


class TestDates:
    """Tests for date setters."""

    @pytest.mark.parametrize(
        "method, name",
        [
            ("date", "date"),
            ("from_date", "from_date"),
            ("to_date", "to_date"),
            ("from_update_date", "from_update_date"),
            ("to_update_date", "to_update_date"),
        ],
    )
    def test_formats_as_iso_day(self, method, name):
        """Each date setter stores the day as yyyy-MM-dd."""
        query = getattr(OrdersQuery(), method)(date(2024, 3, 7))
        assert query.params[name] == "2024-03-07"

    def test_datetime_drops_the_time(self):
        """A datetime keeps only its calendar day."""
        query = OrdersQuery().from_date(datetime(2023, 12, 31, 23, 59))
        assert query.params["from_date"] == "2023-12-31"

    def test_rejects_strings(self):
        """Non-date values are rejected with the field name."""
        with pytest.raises(ValidationException) as exc_info:
            OrdersQuery().to_date("2024-01-01")
        assert exc_info.value.field == "to_date"


class TestOrderNumbers:
    """Tests for order number setters."""

    def test_numeric_and_vendor_share_the_parameter(self):
        """A vendor number overwrites an earlier numeric one."""
        query = OrdersQuery().order(15).vendor_order("EC-15-X")
        assert dict(query.params) == {"order": "EC-15-X"}

    def test_vendor_then_numeric(self):
        """A numeric number overwrites an earlier vendor one."""
        query = OrdersQuery().vendor_order("EC-15-X").order(15)
        assert dict(query.params) == {"order": 15}

    def test_from_order(self):
        """Both starting-order setters write from_order."""
        assert OrdersQuery().from_order(100).params["from_order"] == 100
        assert OrdersQuery().from_vendor_order("EC-100").params["from_order"] == "EC-100"


class TestCustomer:
    """Tests for customer setters."""

    def test_customer_id_none_means_anonymous(self):
        """None selects guest orders through the literal 'null'."""
        assert OrdersQuery().customer_id(None).params["customer_id"] == "null"

    def test_customer_id_value(self):
        """A numeric id is stored as given."""
        assert OrdersQuery().customer_id(42).params["customer_id"] == 42

    @pytest.mark.parametrize("email", [None, ""])
    def test_customer_email_empty(self, email):
        """None or an empty email selects orders without an email."""
        assert OrdersQuery().customer_email(email).params["customer_email"] == ""

    def test_customer_email_value(self):
        """An email is stored as given."""
        assert OrdersQuery().customer_email("a@b.com").params["customer_email"] == "a@b.com"


class TestStatuses:
    """Tests for status setters."""

    def test_statuses_merges_both_vocabularies(self):
        """Payment tokens come first, then fulfillment tokens."""
        query = OrdersQuery().statuses("paid, declined", "shipped delivered")
        assert query.params["statuses"] == "PAID,DECLINED,SHIPPED,DELIVERED"

    def test_statuses_with_one_side_empty(self):
        """An empty side contributes nothing."""
        query = OrdersQuery().statuses("", "new")
        assert query.params["statuses"] == "NEW"

    def test_statuses_both_empty_adds_nothing(self):
        """Two empty strings return the same query."""
        base = OrdersQuery().limit(5)
        assert base.statuses("", "") is base

    def test_invalid_payment_status_leaves_query_unchanged(self):
        """One bad token rejects the call and keeps existing statuses."""
        base = OrdersQuery().add_payment_statuses("paid")

        with pytest.raises(ValidationException) as exc_info:
            base.statuses("paid, bogus", "shipped")

        assert exc_info.value.invalid_value == "BOGUS"
        assert base.params["statuses"] == "PAID"

    def test_invalid_fulfillment_status_is_rejected(self):
        """Unknown fulfillment tokens are rejected."""
        with pytest.raises(ValidationException):
            OrdersQuery().statuses("paid", "lost_in_space")

    def test_fulfillment_status_in_payment_slot_is_rejected(self):
        """Tokens are checked against the vocabulary of their slot."""
        with pytest.raises(ValidationException):
            OrdersQuery().statuses("shipped", "")

    def test_add_payment_statuses_empty_is_noop(self):
        """An empty payment string returns the same query."""
        base = OrdersQuery().limit(5)
        assert base.add_payment_statuses("") is base

    def test_add_fulfillment_statuses_empty_is_noop(self):
        """An empty fulfillment string returns the same query."""
        base = OrdersQuery().limit(5)
        assert base.add_fulfillment_statuses("") is base

    def test_add_appends_to_existing_statuses(self):
        """Later calls append to the statuses already set."""
        query = OrdersQuery().add_payment_statuses("paid").add_fulfillment_statuses("processing shipped")
        assert query.params["statuses"] == "PAID,PROCESSING,SHIPPED"

    def test_duplicates_are_preserved(self):
        """Repeated tokens are sent as given."""
        query = OrdersQuery().add_payment_statuses("paid").add_payment_statuses("PAID accepted")
        assert query.params["statuses"] == "PAID,PAID,ACCEPTED"


class TestPaging:
    """Tests for paging setters."""

    def test_limit_is_stored_unclamped(self):
        """The limit is clamped only when fetching."""
        assert OrdersQuery().limit(1000).params["limit"] == 1000

    def test_offset(self):
        """The offset is stored as given."""
        assert OrdersQuery().offset(40).params["offset"] == 40


class TestGet:
    """Tests for running a query through its client."""

    @pytest.mark.asyncio
    async def test_get_delegates_to_client(self):
        """get() hands the query itself to the bound client."""
        client = MagicMock()
        client.get_orders = AsyncMock(return_value=[{"orderNumber": 1}])
        query = OrdersQuery(client=client).limit(5)

        result = await query.get()

        assert result == [{"orderNumber": 1}]
        client.get_orders.assert_awaited_once_with(query, None)

    @pytest.mark.asyncio
    async def test_get_without_client_fails(self):
        """An unbound query cannot be run."""
        with pytest.raises(ConfigException):
            await OrdersQuery().limit(5).get()

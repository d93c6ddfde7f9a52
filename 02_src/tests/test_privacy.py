"""Tests for the privacy filter."""

import logging

import pytest

from planner_analytics.bucketing import ACCOUNT_COUNT, ROW_COUNT, SUCCESS_RATE, YEARS
from planner_analytics.exceptions import InvalidEventError, PrivacyViolationError
from planner_analytics.privacy import (
    PrivacyFilter,
    is_sensitive_key,
    validate_event_name,
    value_problem,
)


class TestSensitiveKeys:
    """Tests for is_sensitive_key()."""

    @pytest.mark.parametrize(
        "key",
        [
            "amount",
            "total_amount",
            "accountBalance",
            "transaction_description",
            "payee",
            "email",
            "first_name",
            "firstName",
            "net_worth",
            "user_id",
            "accountNumber",
            "customer-id",
        ],
    )
    def test_sensitive(self, key):
        assert is_sensitive_key(key)

    @pytest.mark.parametrize(
        "key",
        ["rows", "success_rate", "file_type", "account_count", "horizon", "has_spouse", "format"],
    )
    def test_safe(self, key):
        assert not is_sensitive_key(key)


class TestValueProblem:
    """Tests for value_problem()."""

    @pytest.mark.parametrize(
        "value",
        [1234, 12345678, 0.5, True, False, "70-89%", "1001-10000", "pdf", "50-30-20"],
    )
    def test_safe_values(self, value):
        assert value_problem(value) is None

    @pytest.mark.parametrize(
        "value",
        [
            None,
            {"nested": 1},
            [1, 2],
            float("inf"),
            float("nan"),
            "$1,234.56",
            "1234.56 USD",
            "jane@example.com",
            "4111 1111 1111 1111",
            "4111-1111-1111-1111",
            "123456789",
            4111111111111111,
            -123456789,
            4111111111111111.0,
            "x" * 65,
        ],
    )
    def test_unsafe_values(self, value):
        assert value_problem(value) is not None

    @pytest.mark.parametrize(
        "bucketing", [SUCCESS_RATE, ROW_COUNT, YEARS, ACCOUNT_COUNT]
    )
    def test_bucket_labels_are_safe(self, bucketing):
        for label in bucketing.labels:
            assert value_problem(label) is None, label

    def test_long_number_dropped_like_long_string(self):
        privacy = PrivacyFilter()
        assert privacy.sanitize("Account Linked", {"ref": "4111111111111111"}) == {}
        assert privacy.sanitize("Account Linked", {"ref": 4111111111111111}) == {}


class TestValidateEventName:
    """Tests for validate_event_name()."""

    def test_strips_whitespace(self):
        assert validate_event_name("  CSV Uploaded ") == "CSV Uploaded"

    @pytest.mark.parametrize("name", ["", "   ", None, 42, "x" * 65])
    def test_invalid(self, name):
        with pytest.raises(InvalidEventError):
            validate_event_name(name)


class TestPrivacyFilter:
    """Tests for PrivacyFilter.sanitize()."""

    def test_keeps_safe_properties(self):
        props = {"rows": 1234, "success_rate": "70-89%", "imported": True}
        assert PrivacyFilter().sanitize("CSV Uploaded", props) == props

    def test_drops_sensitive_properties(self):
        props = {
            "rows": 1234,
            "amount": 1500.25,
            "memo": "rent",
            "category": "$42.00",
            "meta": {"a": 1},
            7: "numeric key",
        }
        assert PrivacyFilter().sanitize("Budget Created", props) == {"rows": 1234}

    def test_empty_properties(self):
        assert PrivacyFilter().sanitize("x", None) == {}
        assert PrivacyFilter().sanitize("x", {}) == {}

    def test_drop_is_logged_without_value(self, caplog):
        caplog.set_level(logging.WARNING, logger="planner_analytics.privacy.privacy")
        PrivacyFilter().sanitize("Budget Created", {"balance": 98765.43})

        assert "balance" in caplog.text
        assert "Budget Created" in caplog.text
        assert "98765" not in caplog.text

    def test_strict_mode_raises(self):
        with pytest.raises(PrivacyViolationError) as exc_info:
            PrivacyFilter(strict=True).sanitize(
                "Budget Created", {"rows": 3, "salary": 90000, "email": "a@b.co"}
            )

        assert exc_info.value.event_name == "Budget Created"
        assert exc_info.value.keys == ["salary", "email"]

    def test_strict_mode_passes_clean_events(self):
        assert PrivacyFilter(strict=True).sanitize("x", {"rows": 3}) == {"rows": 3}

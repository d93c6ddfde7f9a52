"""Tests for bucketing."""

import math

import pytest

from planner_analytics.bucketing import (
    ACCOUNT_COUNT,
    ROW_COUNT,
    SUCCESS_RATE,
    YEARS,
    Bucket,
    Bucketing,
    bucket,
)


class TestBucketingLabel:
    """Tests for Bucketing.label()."""

    def test_success_rate_example(self):
        """Test that a success rate of 85 lands in 70-89%."""
        assert SUCCESS_RATE.label(85) == "70-89%"

    @pytest.mark.parametrize(
        "value,label",
        [(0, "0-49%"), (49.9, "0-49%"), (50, "50-69%"), (70, "70-89%"), (90, "90-100%"), (100, "90-100%")],
    )
    def test_success_rate_boundaries(self, value, label):
        """Test that lower bounds are inclusive."""
        assert SUCCESS_RATE.label(value) == label

    def test_row_count(self):
        assert ROW_COUNT.label(0) == "0"
        assert ROW_COUNT.label(1234) == "1001-10000"
        assert ROW_COUNT.label(10000) == "1001-10000"
        assert ROW_COUNT.label(250000) == "10000+"

    def test_years_and_accounts(self):
        assert YEARS.label(30) == "30+ years"
        assert YEARS.label(12) == "10-19 years"
        assert ACCOUNT_COUNT.label(3) == "2-4"

    def test_below_range_clamps_to_first(self):
        assert SUCCESS_RATE.label(-5) == "0-49%"
        assert SUCCESS_RATE.label(-math.inf) == "0-49%"

    def test_above_range_clamps_to_last(self):
        assert SUCCESS_RATE.label(150) == "90-100%"
        assert ROW_COUNT.label(math.inf) == "10000+"

    def test_bounded_last_bucket_clamps(self):
        small = Bucketing([Bucket(0, 10, "low"), Bucket(10, 20, "high")])
        assert small.label(20) == "high"
        assert small.label(1e9) == "high"

    def test_nan_rejected(self):
        with pytest.raises(ValueError):
            SUCCESS_RATE.label(float("nan"))

    def test_non_numbers_rejected(self):
        with pytest.raises(TypeError):
            SUCCESS_RATE.label("85")  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            SUCCESS_RATE.label(True)

    def test_shortcut(self):
        assert bucket(85, SUCCESS_RATE) == "70-89%"


class TestBucketingDefinition:
    """Tests for Bucketing validation."""

    def test_empty_rejected(self):
        with pytest.raises(ValueError):
            Bucketing([])

    def test_gap_rejected(self):
        with pytest.raises(ValueError):
            Bucketing([Bucket(0, 10, "a"), Bucket(11, 20, "b")])

    def test_unbounded_must_be_last(self):
        with pytest.raises(ValueError):
            Bucketing([Bucket(0, None, "a"), Bucket(10, 20, "b")])

    def test_inverted_bucket_rejected(self):
        with pytest.raises(ValueError):
            Bucketing([Bucket(10, 5, "a")])

    def test_labels_and_contains(self):
        assert SUCCESS_RATE.labels == ["0-49%", "50-69%", "70-89%", "90-100%"]
        assert "70-89%" in SUCCESS_RATE
        assert "85" not in SUCCESS_RATE

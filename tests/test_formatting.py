"""
Tests for reply formatting helpers.
"""
import pytest

from reya_agent.plugin.formatting import (
    NOT_AVAILABLE,
    format_change,
    format_date,
    format_price,
    format_timestamp,
    format_volume,
)


class TestFormatPrice:
    """Tests for price display."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("3500.25", "3,500.25"),
            ("65010", "65,010.00"),
            (150.7, "150.70"),
            ("0.000123456", "0.00012346"),
            ("1500000000000000000000", "1,500.00"),
            ("1000000000000000000", "1.00"),
            # Below the fixed-point threshold an integer string is a plain number
            ("999999", "999,999.00"),
            ("5e25", "50,000,000,000,000,000,000,000,000.00"),
            ("500000000000000000000.5", "500,000,000,000,000,000,000.50"),
            # A 50-digit fixed point integer still has 32 integer digits after scaling
            ("1" + "0" * 49, f"{10 ** 31:,}.00"),
        ],
    )
    def test_formats(self, value, expected):
        """Test price formatting."""
        assert format_price(value) == expected

    @pytest.mark.parametrize("value", [None, "", "abc", "nan", "inf"])
    def test_missing_or_non_numeric(self, value):
        """Test unavailable prices."""
        assert format_price(value) == NOT_AVAILABLE


class TestOtherFormatters:
    """Tests for volume, change, timestamps and dates."""

    def test_volume(self):
        """Test volume formatting."""
        assert format_volume(1234567.8) == "1,234,568"
        assert format_volume(None) == NOT_AVAILABLE

    def test_change(self):
        """Test change formatting."""
        assert format_change(2.5) == "📈 +2.50%"
        assert format_change(-0.333) == "📉 -0.33%"
        assert format_change(None) == NOT_AVAILABLE

    def test_timestamp_seconds_and_millis(self):
        """Test timestamp formatting."""
        assert format_timestamp(1700000000) == "22:13:20 UTC"
        assert format_timestamp(1700000000000) == "22:13:20 UTC"
        assert format_timestamp(None) == NOT_AVAILABLE

    def test_date(self):
        """Test date formatting."""
        assert format_date("2024-03-01T12:30:00Z") == "2024-03-01"
        assert format_date("last tuesday") == "last tuesday"
        assert format_date(None) == NOT_AVAILABLE

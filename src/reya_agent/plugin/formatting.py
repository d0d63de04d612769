"""
Presentation helpers for reply text.
"""
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation, localcontext
from typing import Optional, Union

NOT_AVAILABLE = "N/A"

# Integer strings at or above this are on-chain fixed point with 18 decimals
FIXED_POINT_THRESHOLD = 10 ** 18
FIXED_POINT_SCALE = Decimal(10) ** 18


def _to_decimal(value: Union[str, int, float, Decimal, None]) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite():
        return None
    
    raw = str(value).strip()
    if raw.lstrip("-").isdigit() and abs(int(raw)) >= FIXED_POINT_THRESHOLD:
        # Exact division regardless of how many digits the integer has
        with localcontext() as ctx:
            ctx.prec = max(28, len(raw) + 2)
            number = number / FIXED_POINT_SCALE
    return number


def format_price(value: Union[str, int, float, Decimal, None]) -> str:
    """
    Format a price with thousands separators and 2-8 decimals.
    
    Only integer strings of 1e18 and above are rescaled from 18-decimal
    fixed point; any other finite number is shown as is.
    
    :param value: Price as string or number
    :return: Formatted price, or "N/A" when missing or not numeric
    """
    number = _to_decimal(value)
    if number is None:
        return NOT_AVAILABLE
    
    with localcontext() as ctx:
        ctx.prec = max(28, number.adjusted() + 10)
        text = f"{number.quantize(Decimal('0.00000001')):,.8f}"
    whole, fraction = text.split(".")
    fraction = fraction.rstrip("0").ljust(2, "0")
    return f"{whole}.{fraction}"


def format_volume(value: Optional[float]) -> str:
    if value is None:
        return NOT_AVAILABLE
    return f"{value:,.0f}"


def format_change(percentage: Optional[float]) -> str:
    """Signed 24h change with a trend marker, e.g. "📈 +2.50%"."""
    if percentage is None:
        return NOT_AVAILABLE
    marker = "📈" if percentage >= 0 else "📉"
    sign = "+" if percentage >= 0 else ""
    return f"{marker} {sign}{percentage:.2f}%"


def format_timestamp(value: Optional[int]) -> str:
    """Format an epoch timestamp (seconds or milliseconds) as UTC time of day."""
    if not value:
        return NOT_AVAILABLE
    seconds = value / 1000 if value > 10 ** 12 else value
    return datetime.fromtimestamp(seconds, tz=timezone.utc).strftime("%H:%M:%S UTC")


def format_date(value: Optional[str]) -> str:
    """Format an ISO timestamp as a date, passing through anything unparseable."""
    if not value:
        return NOT_AVAILABLE
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).strftime("%Y-%m-%d")
    except ValueError:
        return value

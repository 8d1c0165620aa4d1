"""Number and date formatting for dashboard display"""
import math
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional


def format_currency(value: float) -> str:
    """Format as en-US USD with no decimals, e.g. 1234567 -> $1,234,567"""
    if not math.isfinite(value):
        return "N/A"
    amount = Decimal(str(value)).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
    if amount == 0:
        return "$0"
    if amount < 0:
        return f"-${-amount:,}"
    return f"${amount:,}"


def format_date(timestamp: int) -> str:
    """Format a Unix timestamp as numeric month/day (UTC), e.g. 3/15"""
    dt = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return f"{dt.month}/{dt.day}"


def format_percent(value: Optional[float]) -> str:
    """Two decimals with a trailing %, or N/A when the value is absent"""
    if value is None or not math.isfinite(value):
        return "N/A"
    return f"{value:.2f}%"

"""
Candle Shape Arithmetic

Pure Decimal helpers describing the geometry of a single candle:
body size, shadows and the hammer test. They take raw prices rather
than records so that DayRecord can evaluate them while it is being built.
"""

from decimal import Decimal


# Lower shadow must be strictly longer than this many bodies
HAMMER_SHADOW_FACTOR = Decimal('2')


def body_size(open_price: Decimal, close: Decimal) -> Decimal:
    """Absolute height of the candle body."""
    return abs(close - open_price)


def body_top(open_price: Decimal, close: Decimal) -> Decimal:
    return max(open_price, close)


def body_bottom(open_price: Decimal, close: Decimal) -> Decimal:
    return min(open_price, close)


def upper_shadow(open_price: Decimal, high: Decimal, close: Decimal) -> Decimal:
    """Distance from the top of the body up to the high."""
    return high - body_top(open_price, close)


def lower_shadow(open_price: Decimal, low: Decimal, close: Decimal) -> Decimal:
    """Distance from the bottom of the body down to the low."""
    return body_bottom(open_price, close) - low


def is_hammer(open_price: Decimal, high: Decimal, low: Decimal, close: Decimal) -> bool:
    """
    Check whether one day's prices form a hammer.

    A hammer has no upper shadow above the close and a lower shadow
    strictly longer than twice the body:

    1. high > close rules the day out
    2. box height is |close - open|
    3. lower shadow runs from min(close, open) down to the low
    4. hammer iff lower shadow > 2 * box height

    Args:
        open_price: Opening price
        high: Highest price of the day
        low: Lowest price of the day
        close: Closing price

    Returns:
        True if the day is a hammer
    """
    if high > close:
        return False

    box_height = body_size(open_price, close)
    shadow = lower_shadow(open_price, low, close)

    return shadow > box_height * HAMMER_SHADOW_FACTOR

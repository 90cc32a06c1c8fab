"""
Multi-Day Pattern Recognition

This module implements three-day window patterns:
- Three White Soldiers: three advancing bullish days
- Evening Star: bullish day, gapped-up star, bearish reversal

Every threshold test multiplies instead of dividing, so a zero range,
zero body or zero close can never raise.
"""

from typing import Optional, Sequence

from ..models import DayRecord, PatternName
from .base import PatternDetector
from .pattern_config import EveningStarConfig, ThreeWhiteSoldiersConfig, get_pattern_config


class ThreeWhiteSoldiersDetector(PatternDetector):
    """
    Three White Soldiers pattern detector.

    Three consecutive bullish days where:
    1. Each body covers a large part of the day's range
    2. Each upper shadow is small relative to the body
    3. Each day after the first opens within the previous body
    4. Each day after the first closes above the previous close
    """

    def __init__(self, config: Optional[ThreeWhiteSoldiersConfig] = None):
        self.config = config or get_pattern_config().three_white_soldiers

    def get_pattern_name(self) -> PatternName:
        return PatternName.THREE_WHITE_SOLDIERS

    def get_required_days(self) -> int:
        return 3

    def matches(self, window: Sequence[DayRecord]) -> bool:
        for day in window:
            if not self._is_soldier(day):
                return False

        for previous, current in zip(window, window[1:]):
            # Opens within the previous (bullish) body
            if not previous.open <= current.open <= previous.close:
                return False
            if current.close <= previous.close:
                return False

        return True

    def _is_soldier(self, day: DayRecord) -> bool:
        if not day.is_bullish:
            return False
        body = day.body_size
        if body < day.price_range * self.config.min_body_range_ratio:
            return False
        if day.upper_shadow > body * self.config.max_upper_shadow_ratio:
            return False
        return True


class EveningStarDetector(PatternDetector):
    """
    Evening Star pattern detector.

    An Evening Star is a bearish reversal pattern consisting of three days:
    1. A bullish day with substantial body
    2. A small-bodied day (star) that gaps up above the first close
    3. A bearish day that closes below the midpoint of the first body
    """

    def __init__(self, config: Optional[EveningStarConfig] = None):
        self.config = config or get_pattern_config().evening_star

    def get_pattern_name(self) -> PatternName:
        return PatternName.EVENING_STAR

    def get_required_days(self) -> int:
        return 3

    def matches(self, window: Sequence[DayRecord]) -> bool:
        first, star, third = window

        if not first.is_bullish or not third.is_bearish:
            return False

        first_body = first.close - first.open
        if first_body < first.close * self.config.min_first_body_ratio:
            return False

        if star.body_size > first_body * self.config.max_star_ratio:
            return False

        # Gap up between first close and the bottom of the star body
        if min(star.open, star.close) <= first.close:
            return False

        return third.close < first.body_midpoint

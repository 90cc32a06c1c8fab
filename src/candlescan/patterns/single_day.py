"""
Single Day Pattern Recognition

Patterns decided by one trading day on its own. Currently the Hammer,
whose test lives in shapes.is_hammer and is cached on every DayRecord.
"""

from abc import abstractmethod
from typing import Sequence

from ..models import DayRecord, PatternName
from .base import PatternDetector


class SingleDayDetector(PatternDetector):
    """Base class for detectors that look at one day at a time."""

    def get_required_days(self) -> int:
        return 1

    def matches(self, window: Sequence[DayRecord]) -> bool:
        return self.matches_day(window[0])

    @abstractmethod
    def matches_day(self, day: DayRecord) -> bool:
        """Evaluate the pattern on a single day."""
        pass


class HammerDetector(SingleDayDetector):
    """
    Hammer pattern detector.

    A Hammer closes at its high (no upper shadow) and has a lower shadow
    strictly longer than twice its body.
    """

    def get_pattern_name(self) -> PatternName:
        return PatternName.HAMMER

    def matches_day(self, day: DayRecord) -> bool:
        return day.is_hammer

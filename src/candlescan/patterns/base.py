"""
Pattern Detector Interface

Every named pattern is one PatternDetector subclass answering a single
question: does this window of consecutive days match? The classifier
only ever talks to this interface, so new patterns are added by
registering another detector.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence, Union

from ..models import DayRecord, PatternMatch, PatternName, pattern_key


class PatternDetector(ABC):
    """
    Abstract base class for candlestick pattern detectors.

    Subclasses declare their pattern name and window size and implement
    matches(). Detectors are stateless apart from their thresholds.
    """

    @abstractmethod
    def get_pattern_name(self) -> Union[PatternName, str]:
        """Return the pattern this detector identifies."""
        pass

    @abstractmethod
    def get_required_days(self) -> int:
        """Return the number of consecutive days the pattern spans."""
        pass

    @abstractmethod
    def matches(self, window: Sequence[DayRecord]) -> bool:
        """
        Evaluate the pattern predicate.

        Args:
            window: Exactly get_required_days() records, oldest first

        Returns:
            True if the window forms the pattern
        """
        pass

    def detect(self, window: Sequence[DayRecord]) -> Optional[PatternMatch]:
        """Return a PatternMatch for the window, or None if it does not match."""
        if len(window) != self.get_required_days():
            return None
        if not self.matches(window):
            return None
        return PatternMatch.from_window(self.get_pattern_name(), window)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(pattern={pattern_key(self.get_pattern_name())!r}, days={self.get_required_days()})"

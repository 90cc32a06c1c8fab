"""
Pattern Classifier

Coordinates the registered pattern detectors. Given a pattern name and a
sequence of day records it sorts the days by date, slides a window of the
detector's size across them and reports every window that matches.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Union

from ..exceptions import UnsupportedPatternError
from ..models import DayRecord, PatternMatch, PatternName, pattern_key
from .base import PatternDetector
from .multi_day import EveningStarDetector, ThreeWhiteSoldiersDetector
from .pattern_config import PatternDetectionConfig
from .single_day import HammerDetector


logger = logging.getLogger(__name__)


def default_detectors(config: Optional[PatternDetectionConfig] = None) -> List[PatternDetector]:
    """Build one detector per built-in pattern."""
    return [
        HammerDetector(),
        ThreeWhiteSoldiersDetector(config.three_white_soldiers if config else None),
        EveningStarDetector(config.evening_star if config else None),
    ]


class PatternClassifier:
    """
    Registry of pattern detectors plus the window scan.

    The scan is pure: the same records always give the same matches, in
    date order, regardless of the order the records were supplied in.
    """

    def __init__(self, detectors: Optional[Iterable[PatternDetector]] = None):
        """
        Initialize with the given detectors, or the built-in ones.

        Args:
            detectors: Detectors to register; defaults to default_detectors()
        """
        self._detectors: Dict[str, PatternDetector] = {}
        for detector in (default_detectors() if detectors is None else detectors):
            self.register(detector)

    def register(self, detector: PatternDetector, replace: bool = False) -> None:
        """
        Register a detector under its pattern name.

        Raises:
            ValueError: if the name is taken and replace is False
        """
        name = pattern_key(detector.get_pattern_name())
        if name in self._detectors and not replace:
            raise ValueError(f"Pattern {name!r} is already registered")
        self._detectors[name] = detector

    def supported_patterns(self) -> List[str]:
        """Registered pattern names in registration order."""
        return list(self._detectors)

    def get_detector(self, pattern_name: Union[PatternName, str]) -> PatternDetector:
        """
        Look up the detector for a pattern.

        Raises:
            UnsupportedPatternError: if no detector is registered for the name
        """
        name = pattern_key(pattern_name)
        detector = self._detectors.get(name)
        if detector is None:
            raise UnsupportedPatternError(name, self.supported_patterns())
        return detector

    def find_matches(
        self,
        pattern_name: Union[PatternName, str],
        records: Iterable[DayRecord]
    ) -> List[PatternMatch]:
        """
        Find every occurrence of a pattern in a sequence of days.

        Args:
            pattern_name: Pattern to look for
            records: Day records in any order

        Returns:
            One PatternMatch per matching window, ordered by start date

        Raises:
            UnsupportedPatternError: if the pattern is not registered
        """
        detector = self.get_detector(pattern_name)
        ordered = sorted(records)
        size = detector.get_required_days()

        matches = []
        for start in range(len(ordered) - size + 1):
            match = detector.detect(ordered[start:start + size])
            if match is not None:
                matches.append(match)

        logger.debug(
            f"{pattern_key(detector.get_pattern_name())}: {len(matches)} match(es) "
            f"in {len(ordered)} day(s)"
        )
        return matches

    def scan_all(self, records: Iterable[DayRecord]) -> Dict[str, List[PatternMatch]]:
        """Run every registered pattern over the same records."""
        ordered: Sequence[DayRecord] = sorted(records)
        return {name: self.find_matches(name, ordered) for name in self._detectors}


_default_classifier: Optional[PatternClassifier] = None


def get_classifier() -> PatternClassifier:
    """Get the shared classifier with the built-in detectors."""
    global _default_classifier
    if _default_classifier is None:
        _default_classifier = PatternClassifier()
    return _default_classifier


def reset_classifier():
    """Drop the shared classifier so the next use picks up the current pattern config."""
    global _default_classifier
    _default_classifier = None


def find_matches(
    pattern_name: Union[PatternName, str],
    records: Iterable[DayRecord]
) -> List[PatternMatch]:
    """Find pattern matches using the shared classifier."""
    return get_classifier().find_matches(pattern_name, records)

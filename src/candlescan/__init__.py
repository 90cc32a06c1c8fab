"""
Candlescan: Candlestick Pattern Scanner

Classifies daily stock price records (date, open, high, low, close)
against named candlestick patterns and reports the matches.
"""

__version__ = "0.1.0"
__author__ = "Candlescan Team"
__description__ = "Candlestick pattern classification for daily stock prices"

# Package-level imports for convenience
from .config import Config
from .exceptions import RowParseError, UnsupportedPatternError
from .logger import get_logger
from .models import DayRecord, PatternMatch, PatternName, ValidationError
from .patterns.classifier import PatternClassifier, find_matches

__all__ = [
    "Config",
    "DayRecord",
    "PatternClassifier",
    "PatternMatch",
    "PatternName",
    "RowParseError",
    "UnsupportedPatternError",
    "ValidationError",
    "find_matches",
    "get_logger",
    "__version__",
]

"""
Candlescan Models Package

Data models for daily price records and the pattern matches found in them.
"""

from pydantic import ValidationError

from .day_record import DayRecord
from .pattern_match import PatternMatch, PatternName, pattern_key

__all__ = [
    "DayRecord",
    "PatternMatch",
    "PatternName",
    "ValidationError",
    "pattern_key",
]

"""
Pattern Match Models

- PatternName: enumeration of the candlestick patterns the scanner knows
- PatternMatch: one occurrence of a pattern over one or more trading days
"""

import datetime as dt
from enum import Enum
from typing import Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from .day_record import DayRecord


class PatternName(str, Enum):
    """Candlestick pattern names."""
    # Single day patterns
    HAMMER = "hammer"

    # Three day patterns
    THREE_WHITE_SOLDIERS = "three_white_soldiers"
    EVENING_STAR = "evening_star"

    @property
    def display_name(self) -> str:
        return self.value.replace('_', ' ').title()


class PatternMatch(BaseModel):
    """
    A named pattern found over a run of consecutive trading days.

    For single-day patterns start_date equals end_date and records
    holds exactly one day.
    """

    pattern_name: Union[PatternName, str] = Field(
        ...,
        description="Pattern that matched; plugin patterns may use plain names"
    )
    start_date: dt.date = Field(
        ...,
        description="Date of the first day in the pattern"
    )
    end_date: dt.date = Field(
        ...,
        description="Date of the last day in the pattern"
    )
    records: Tuple[DayRecord, ...] = Field(
        ...,
        description="Day records forming the pattern, oldest first",
        min_length=1
    )

    model_config = ConfigDict(frozen=True)

    @model_validator(mode='after')
    def validate_span(self):
        """Keep the reported span consistent with the involved records."""
        if self.start_date > self.end_date:
            raise ValueError(f"start_date {self.start_date} is after end_date {self.end_date}")
        if self.records[0].date != self.start_date or self.records[-1].date != self.end_date:
            raise ValueError("start_date/end_date must match the first and last record dates")
        return self

    @classmethod
    def from_window(cls, pattern_name: Union[PatternName, str], window) -> 'PatternMatch':
        """Build a match spanning a date-ordered window of records."""
        records = tuple(window)
        return cls(
            pattern_name=pattern_name,
            start_date=records[0].date,
            end_date=records[-1].date,
            records=records
        )

    @property
    def date(self) -> dt.date:
        """Date of a single-day match (the start date)."""
        return self.start_date

    @computed_field
    @property
    def day_count(self) -> int:
        return len(self.records)


def pattern_key(pattern_name: Union[PatternName, str]) -> str:
    """Plain string name for a built-in or plugin pattern."""
    if isinstance(pattern_name, PatternName):
        return pattern_name.value
    return str(pattern_name)

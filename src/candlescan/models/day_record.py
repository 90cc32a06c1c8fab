"""
Daily Price Record Model

This module contains the immutable Pydantic model for one trading session:
- DayRecord: date plus open/high/low/close as exact decimals

Prices are held as Decimal, never binary floats, so that pattern
comparisons at price boundaries are exact. The hammer flag is derived
once at construction and cached.

Equality and ordering deliberately differ: two records are equal only
when all five fields match, while ordering looks at the date alone.
"""

import datetime as dt
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

from ..patterns import shapes


class DayRecord(BaseModel):
    """
    OHLC data for a single trading day.

    Example row:
        Date       Open  High  Low  Close
        31/10/2016 58.25 58.65 58.2 58.35

    The only enforced invariant is high >= low. Open and close are not
    checked against the day's range.
    """

    date: dt.date = Field(
        ...,
        description="Trading session date (no time component)"
    )
    open: Decimal = Field(
        ...,
        description="Opening price"
    )
    high: Decimal = Field(
        ...,
        description="Highest price"
    )
    low: Decimal = Field(
        ...,
        description="Lowest price"
    )
    close: Decimal = Field(
        ...,
        description="Closing price"
    )

    _is_hammer: bool = PrivateAttr(default=False)

    model_config = ConfigDict(
        frozen=True,
        extra='forbid',
    )

    @field_validator('date', mode='before')
    @classmethod
    def validate_date(cls, v) -> Any:
        """Reduce datetimes to their calendar date."""
        if isinstance(v, dt.datetime):
            return v.date()
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('open', 'high', 'low', 'close', mode='before')
    @classmethod
    def validate_price_fields(cls, v) -> Decimal:
        """Convert price fields to finite Decimals without float rounding."""
        if isinstance(v, bool):
            raise ValueError(f"Price must be numeric, got {v!r}")

        if isinstance(v, Decimal):
            decimal_val = v
        elif isinstance(v, (int, float)):
            # str() keeps the shortest repr, so 58.35 stays 58.35
            decimal_val = Decimal(str(v))
        elif isinstance(v, str):
            try:
                decimal_val = Decimal(v.strip())
            except InvalidOperation:
                raise ValueError(f"Invalid decimal price: {v!r}")
        else:
            raise ValueError(f"Invalid price type: {type(v).__name__}")

        if not decimal_val.is_finite():
            raise ValueError(f"Price must be finite, got {v!r}")

        return decimal_val

    @model_validator(mode='after')
    def validate_high_low(self):
        """Reject sessions whose high is below their low."""
        if self.high < self.low:
            raise ValueError(
                f"The high {self.high} is below the low {self.low} "
                f"for date {self.date.isoformat()}. Not possible."
            )
        return self

    def model_post_init(self, __context: Any) -> None:
        # Written straight into the private store; __setattr__ refuses it
        self.__pydantic_private__['_is_hammer'] = shapes.is_hammer(
            self.open, self.high, self.low, self.close
        )

    def __setattr__(self, name: str, value: Any) -> None:
        if name == '_is_hammer':
            raise AttributeError("is_hammer is derived from the prices and cannot be assigned")
        super().__setattr__(name, value)

    def model_copy(self, *, update: Optional[Mapping[str, Any]] = None, deep: bool = False) -> 'DayRecord':
        """
        Copy the record; an update builds a new validated record.

        Raises:
            ValidationError: if the updated prices break high >= low or
                name an unknown field
        """
        if not update:
            return super().model_copy(deep=deep)
        return type(self)(**{**self.model_dump(), **update})

    @property
    def is_hammer(self) -> bool:
        """Cached result of the hammer test, computed at construction."""
        return self._is_hammer

    @property
    def body_size(self) -> Decimal:
        """Absolute difference between open and close."""
        return shapes.body_size(self.open, self.close)

    @property
    def upper_shadow(self) -> Decimal:
        return shapes.upper_shadow(self.open, self.high, self.close)

    @property
    def lower_shadow(self) -> Decimal:
        return shapes.lower_shadow(self.open, self.low, self.close)

    @property
    def price_range(self) -> Decimal:
        """High minus low; never negative."""
        return self.high - self.low

    @property
    def body_midpoint(self) -> Decimal:
        return (self.open + self.close) / Decimal('2')

    @property
    def is_bullish(self) -> bool:
        return self.close > self.open

    @property
    def is_bearish(self) -> bool:
        return self.close < self.open

    def compare_to(self, other: 'DayRecord') -> int:
        """
        Compare two records by date only.

        Returns:
            -1, 0 or 1 as this record's date is before, equal to or after
            the other's
        """
        if self.date < other.date:
            return -1
        if self.date > other.date:
            return 1
        return 0

    def __lt__(self, other: 'DayRecord') -> bool:
        if not isinstance(other, DayRecord):
            return NotImplemented
        return self.date < other.date

    def __le__(self, other: 'DayRecord') -> bool:
        if not isinstance(other, DayRecord):
            return NotImplemented
        return self.date <= other.date

    def __gt__(self, other: 'DayRecord') -> bool:
        if not isinstance(other, DayRecord):
            return NotImplemented
        return self.date > other.date

    def __ge__(self, other: 'DayRecord') -> bool:
        if not isinstance(other, DayRecord):
            return NotImplemented
        return self.date >= other.date

    def __eq__(self, other: object) -> bool:
        """Full-field equality; stricter than the date-only ordering."""
        if self is other:
            return True
        if not isinstance(other, DayRecord):
            return NotImplemented
        return (
            self.date == other.date and
            self.open == other.open and
            self.high == other.high and
            self.low == other.low and
            self.close == other.close
        )

    def __hash__(self) -> int:
        return hash((self.date, self.open, self.high, self.low, self.close))

    def __str__(self) -> str:
        return (
            f"DayRecord{{ date={self.date.isoformat()}, open={self.open}, "
            f"high={self.high}, low={self.low}, close={self.close}, "
            f"isHammer={self.is_hammer} }}"
        )

"""Shared data models used across the slot agent."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Level(str, Enum):
    """Session levels as labelled on the booking page."""

    BEGINNER = "초급"
    INTERMEDIATE = "중급"
    ADVANCED = "상급"


@dataclass(frozen=True)
class FragmentContext:
    """Minimal container context captured alongside a text fragment."""

    style_hint: Optional[str] = None
    in_seat_region: bool = False


@dataclass(frozen=True)
class Fragment:
    """One piece of visible text, in document order."""

    text: str
    context: FragmentContext = field(default_factory=FragmentContext)


@dataclass(frozen=True)
class DateMarker:
    month: int
    day: int

    def iso(self, year: int) -> str:
        """Date string for the marker in the supplied year."""
        return f"{year:04d}-{self.month:02d}-{self.day:02d}"


@dataclass(frozen=True)
class TimeMarker:
    time: str


@dataclass(frozen=True)
class LevelMarker:
    level: Level


@dataclass(frozen=True)
class SeatCount:
    left: int
    right: int

    @property
    def total(self) -> int:
        return self.left + self.right


@dataclass(frozen=True)
class SoldOut(SeatCount):
    """Sold-out label, equivalent to a ``0/0`` seat count."""

    left: int = 0
    right: int = 0


@dataclass(frozen=True)
class Unrecognized:
    pass


Classification = Union[DateMarker, TimeMarker, LevelMarker, SeatCount, Unrecognized]


class Slot(BaseModel):
    """A reconstructed availability record for one date/time/level."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: str
    time: str
    level: Level
    left_seats: int = Field(ge=0, alias="leftSeats")
    right_seats: int = Field(ge=0, alias="rightSeats")
    total_seats: int = Field(ge=0, alias="totalSeats")
    raw_text: str = Field(default="", alias="raw")

    @model_validator(mode="after")
    def _check_total(self) -> "Slot":
        if self.total_seats != self.left_seats + self.right_seats:
            raise ValueError("totalSeats must equal leftSeats + rightSeats")
        return self

    @classmethod
    def from_counts(
        cls,
        *,
        date: str,
        time: str,
        level: Level,
        left: int,
        right: int,
        raw_text: str = "",
    ) -> "Slot":
        """Build a slot from left/right counts, deriving the total."""
        return cls(
            date=date,
            time=time,
            level=level,
            left_seats=left,
            right_seats=right,
            total_seats=left + right,
            raw_text=raw_text,
        )

    @property
    def key(self) -> str:
        """Cross-run identity; excludes level, so slots differing only by level collide."""
        return f"{self.date}-{self.time}-{self.left_seats}/{self.right_seats}"


class BaselineEntry(Slot):
    """A slot as persisted in the baseline, with the time it was saved."""

    saved_at: datetime = Field(alias="savedAt")

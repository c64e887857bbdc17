"""
Zeit-Primitive: Uhrzeit (ClockTime) und Zeitspanne (TimeSpan).
Beide sind unveränderlich; Rechenoperationen liefern neue Werte.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from pydantic_core import core_schema

from milog.core.exceptions import TimeRangeError

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR


def _split(text: str) -> tuple[int, int]:
    """'H:MM' bzw. 'HH:MM' → (Stunden, Minuten)."""
    try:
        hours, minutes = text.strip().split(":")
        return int(hours), int(minutes)
    except (AttributeError, ValueError) as e:
        raise TimeRangeError(f"Ungültiges Zeitformat: {text!r} (erwartet H:MM)") from e


class _ParsableTime:
    """Pydantic-Anbindung: akzeptiert Instanzen oder 'H:MM'-Strings."""

    @classmethod
    def parse(cls, text: str):
        raise NotImplementedError

    @classmethod
    def _validate(cls, value: Any):
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        raise TimeRangeError(f"{cls.__name__} erwartet, erhalten: {value!r}")

    @classmethod
    def __get_pydantic_core_schema__(cls, source, handler) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.to_string_ser_schema(),
        )


@dataclass(frozen=True, order=True)
class TimeSpan(_ParsableTime):
    """Nichtnegative Zeitspanne, intern normalisiert auf Minuten."""

    ZERO: ClassVar[TimeSpan]

    total_minutes: int

    def __init__(self, hours: int = 0, minutes: int = 0):
        if hours < 0 or minutes < 0:
            raise TimeRangeError(f"Negative Zeitspanne: {hours}h {minutes}min")
        object.__setattr__(self, "total_minutes", hours * MINUTES_PER_HOUR + minutes)

    @classmethod
    def parse(cls, text: str) -> TimeSpan:
        hours, minutes = _split(text)
        if minutes >= MINUTES_PER_HOUR:
            raise TimeRangeError(f"Minuten außerhalb 0–59: {text!r}")
        return cls(hours, minutes)

    @classmethod
    def of_minutes(cls, minutes: int) -> TimeSpan:
        return cls(0, minutes)

    @property
    def hours(self) -> int:
        return self.total_minutes // MINUTES_PER_HOUR

    @property
    def minutes(self) -> int:
        return self.total_minutes % MINUTES_PER_HOUR

    def __add__(self, other: TimeSpan) -> TimeSpan:
        if not isinstance(other, TimeSpan):
            return NotImplemented
        return TimeSpan.of_minutes(self.total_minutes + other.total_minutes)

    def __sub__(self, other: TimeSpan) -> TimeSpan:
        if not isinstance(other, TimeSpan):
            return NotImplemented
        # Kein Clamping: Unterlauf ist immer ein Fehler des Aufrufers
        if other.total_minutes > self.total_minutes:
            raise TimeRangeError(f"Zeitspanne {other} größer als {self}")
        return TimeSpan.of_minutes(self.total_minutes - other.total_minutes)

    def __str__(self) -> str:
        return f"{self.hours}:{self.minutes:02d}"

    def __repr__(self) -> str:
        return f"TimeSpan({self.hours}, {self.minutes})"


TimeSpan.ZERO = TimeSpan()


@dataclass(frozen=True, order=True)
class ClockTime(_ParsableTime):
    """Uhrzeit eines Tages, 00:00 bis 23:59."""

    hour: int
    minute: int = 0

    def __post_init__(self):
        if not 0 <= self.hour <= 23:
            raise TimeRangeError(f"Stunde außerhalb 0–23: {self.hour}")
        if not 0 <= self.minute <= 59:
            raise TimeRangeError(f"Minute außerhalb 0–59: {self.minute}")

    @classmethod
    def parse(cls, text: str) -> ClockTime:
        return cls(*_split(text))

    @classmethod
    def of_minutes(cls, minutes: int) -> ClockTime:
        if not 0 <= minutes < MINUTES_PER_DAY:
            raise TimeRangeError(f"Uhrzeit außerhalb des Tages: {minutes} min")
        return cls(*divmod(minutes, MINUTES_PER_HOUR))

    @property
    def total_minutes(self) -> int:
        return self.hour * MINUTES_PER_HOUR + self.minute

    def __add__(self, other: TimeSpan) -> ClockTime:
        if not isinstance(other, TimeSpan):
            return NotImplemented
        return ClockTime.of_minutes(self.total_minutes + other.total_minutes)

    def __sub__(self, other):
        """ClockTime - ClockTime → TimeSpan, ClockTime - TimeSpan → ClockTime."""
        if isinstance(other, ClockTime):
            if other > self:
                raise TimeRangeError(f"Ende {self} liegt vor Beginn {other}")
            return TimeSpan.of_minutes(self.total_minutes - other.total_minutes)
        if isinstance(other, TimeSpan):
            return ClockTime.of_minutes(self.total_minutes - other.total_minutes)
        return NotImplemented

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"

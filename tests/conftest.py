"""
Gemeinsame Fixtures und Stub-Helfer für die milog-Tests.

Referenzmonat ist November 2019:
22.11. = Freitag, 23.11. = Samstag, 24.11. = Sonntag, 01.11. = Allerheiligen (BW).
"""
from datetime import date

import pytest

from milog.core.config import CheckerConfig
from milog.models.clock import ClockTime, TimeSpan
from milog.models.timesheet import Employee, Entry, Profession, TimeSheet, WorkingArea

YEAR = 2019
MONTH = 11
WORKDAY = date(2019, 11, 22)
SATURDAY = date(2019, 11, 23)
SUNDAY = date(2019, 11, 24)
ALL_SAINTS = date(2019, 11, 1)

EMPLOYEE = Employee(name="Max Mustermann", staff_id=1234567)
PROFESSION = Profession(
    department_name="Fakultät für Informatik",
    working_area=WorkingArea.UB,
    max_working_time=TimeSpan(40, 0),
    wage=10.31,
)


# ── Stub-Helfer ───────────────────────────────────────────────────────────────

def make_entry(
    day: date,
    start: str,
    end: str,
    pause: str = "0:00",
    vacation: bool = False,
    description: str = "Test",
) -> Entry:
    return Entry(
        description=description,
        date=day,
        start=ClockTime.parse(start),
        end=ClockTime.parse(end),
        pause=TimeSpan.parse(pause),
        vacation=vacation,
    )


def make_sheet(
    entries=(),
    profession: Profession = PROFESSION,
    year: int = YEAR,
    month: int = MONTH,
    **kwargs,
) -> TimeSheet:
    return TimeSheet(
        employee=EMPLOYEE,
        profession=profession,
        year=year,
        month=month,
        entries=tuple(entries),
        **kwargs,
    )


class FailingHolidayService:
    """Simuliert eine nicht erreichbare Feiertagsquelle."""

    def __init__(self, error: Exception):
        self.error = error
        self.calls = 0

    def is_holiday(self, d, year=None, state="BW"):
        self.calls += 1
        raise self.error


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def config() -> CheckerConfig:
    return CheckerConfig()


@pytest.fixture
def valid_entry() -> Entry:
    """08:00–18:45 mit 45min Pause: exakt 10h netto, Pausenpflicht erfüllt."""
    return make_entry(WORKDAY, "08:00", "18:45", pause="0:45")

"""
Tests für das Stundenzettel-Modell: Invarianten bei der Konstruktion und abgeleitete Summen.
"""
from datetime import date

import pytest
from pydantic import ValidationError

from milog.models.clock import ClockTime, TimeSpan
from milog.models.timesheet import Entry, Profession, WorkingArea
from tests.conftest import EMPLOYEE, PROFESSION, WORKDAY, make_entry, make_sheet


# ── Entry ─────────────────────────────────────────────────────────────────────

def test_entry_working_time_does_not_subtract_pause():
    """08:00–18:45 mit 45min Pause → 10:45 Arbeitsblock, 10:00 netto."""
    entry = make_entry(WORKDAY, "08:00", "18:45", pause="0:45")
    assert entry.working_time == TimeSpan(10, 45)
    assert entry.net_working_time == TimeSpan(10, 0)


@pytest.mark.parametrize("start,end", [("08:00", "08:00"), ("10:00", "09:59")])
def test_entry_end_not_after_start_fails(start, end):
    with pytest.raises(ValueError):
        make_entry(WORKDAY, start, end)


def test_entry_pause_longer_than_block_fails():
    with pytest.raises(ValueError):
        make_entry(WORKDAY, "08:00", "09:00", pause="1:01")


def test_entry_pause_equal_to_block_ok():
    entry = make_entry(WORKDAY, "08:00", "09:00", pause="1:00")
    assert entry.net_working_time == TimeSpan.ZERO


def test_entry_accepts_time_strings():
    entry = Entry(description="Tutorium", date=WORKDAY, start="08:00", end="10:30", pause="0:15")
    assert entry.start == ClockTime(8, 0)
    assert entry.end == ClockTime(10, 30)
    assert entry.pause == TimeSpan(0, 15)
    assert entry.vacation is False


def test_entry_rejects_invalid_time_string():
    with pytest.raises(ValidationError):
        Entry(description="Test", date=WORKDAY, start="25:00", end="26:00")


def test_entry_is_frozen():
    entry = make_entry(WORKDAY, "08:00", "10:00")
    with pytest.raises(ValidationError):
        entry.end = ClockTime(12, 0)


# ── Profession ────────────────────────────────────────────────────────────────

def test_profession_wage_must_be_positive():
    with pytest.raises(ValidationError):
        Profession(
            department_name="KIT",
            working_area=WorkingArea.GF,
            max_working_time=TimeSpan(20, 0),
            wage=0,
        )


def test_profession_working_area_from_value():
    p = Profession(department_name="KIT", working_area="gf", max_working_time="20:00", wage=12.0)
    assert p.working_area is WorkingArea.GF
    assert p.max_working_time == TimeSpan(20, 0)


# ── TimeSheet ─────────────────────────────────────────────────────────────────

def test_sheet_entry_outside_month_fails():
    with pytest.raises(ValueError):
        make_sheet([make_entry(date(2019, 12, 2), "08:00", "10:00")])


@pytest.mark.parametrize("month", [0, 13])
def test_sheet_month_out_of_range(month):
    with pytest.raises(ValueError):
        make_sheet(month=month)


def test_sheet_total_work_time_includes_vacation():
    sheet = make_sheet([
        make_entry(date(2019, 11, 21), "08:00", "12:00", pause="0:30"),
        make_entry(WORKDAY, "09:00", "11:30"),
        make_entry(date(2019, 11, 25), "08:00", "12:00", vacation=True),
    ])
    assert sheet.total_work_time == TimeSpan(10, 30)
    assert sheet.total_vacation_time == TimeSpan(4, 0)


def test_sheet_entries_are_tuple():
    sheet = make_sheet([make_entry(WORKDAY, "08:00", "10:00")])
    assert isinstance(sheet.entries, tuple)


def test_sheet_empty_total_is_zero():
    assert make_sheet().total_work_time == TimeSpan.ZERO


def test_sheet_transfers():
    """Übertrag: 4h gearbeitet + 2h aus Vormonat − 1h in Folgemonat = 5h."""
    sheet = make_sheet(
        [make_entry(WORKDAY, "08:00", "12:00")],
        pred_transfer=TimeSpan(2, 0),
        succ_transfer=TimeSpan(1, 0),
    )
    assert sheet.total_with_transfers == TimeSpan(5, 0)


def test_sheet_succ_transfer_above_available_fails():
    with pytest.raises(ValueError):
        make_sheet([make_entry(WORKDAY, "08:00", "09:00")], succ_transfer=TimeSpan(1, 1))


def test_sheet_keeps_metadata():
    sheet = make_sheet()
    assert sheet.employee == EMPLOYEE
    assert sheet.profession == PROFESSION
    assert (sheet.year, sheet.month) == (2019, 11)

"""milog – Prüfung von Arbeitszeitdokumentationen (MiLoG) für Hilfskräfte."""
from milog.core.exceptions import CheckerException, HolidaySourceError, MiLoGError, TimeRangeError
from milog.models import ClockTime, Employee, Entry, Profession, TimeSheet, TimeSpan, WorkingArea
from milog.schemas.checker import CheckerError, CheckerErrorKind, CheckerReturn
from milog.services.checker_service import MiLoGChecker, check_timesheet

__version__ = "1.0.0"

__all__ = [
    "CheckerError",
    "CheckerErrorKind",
    "CheckerException",
    "CheckerReturn",
    "ClockTime",
    "Employee",
    "Entry",
    "HolidaySourceError",
    "MiLoGChecker",
    "MiLoGError",
    "Profession",
    "TimeRangeError",
    "TimeSheet",
    "TimeSpan",
    "WorkingArea",
    "check_timesheet",
]

from milog.models.clock import ClockTime, TimeSpan
from milog.models.timesheet import Employee, Entry, Profession, TimeSheet, WorkingArea

__all__ = ["ClockTime", "TimeSpan", "Employee", "Entry", "Profession", "TimeSheet", "WorkingArea"]

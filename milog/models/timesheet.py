"""
Datenmodell eines Monatsstundenzettels (Arbeitszeitdokumentation nach MiLoG).
Wird einmal vom Parser aufgebaut und danach nur gelesen.
"""
from __future__ import annotations

from datetime import date as Date
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator

from milog.models.clock import ClockTime, TimeSpan


class WorkingArea(str, Enum):
    UB = "ub"  # Universitätsbereich
    GF = "gf"  # Großforschung (Drittmittel)


class Employee(BaseModel):
    name: str
    staff_id: int

    model_config = {"frozen": True}


class Profession(BaseModel):
    department_name: str
    working_area: WorkingArea
    max_working_time: TimeSpan
    wage: float = Field(gt=0)

    model_config = {"frozen": True}


class Entry(BaseModel):
    """Eine Zeile des Stundenzettels."""
    description: str
    date: Date
    start: ClockTime
    end: ClockTime
    pause: TimeSpan = TimeSpan.ZERO
    vacation: bool = False

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_times(self) -> Entry:
        if self.end <= self.start:
            raise ValueError(f"Ende {self.end} muss nach Beginn {self.start} liegen")
        if self.pause > self.end - self.start:
            raise ValueError(f"Pause {self.pause} länger als Arbeitsblock {self.start}–{self.end}")
        return self

    @property
    def working_time(self) -> TimeSpan:
        """Ende minus Beginn; die Pause wird nicht abgezogen."""
        return self.end - self.start

    @property
    def net_working_time(self) -> TimeSpan:
        return self.working_time - self.pause


class TimeSheet(BaseModel):
    employee: Employee
    profession: Profession
    year: int
    month: int = Field(ge=1, le=12)
    entries: tuple[Entry, ...] = ()
    # Übertrag in den Folgemonat / aus dem Vormonat
    succ_transfer: TimeSpan = TimeSpan.ZERO
    pred_transfer: TimeSpan = TimeSpan.ZERO

    model_config = {"frozen": True}

    @field_validator("year")
    @classmethod
    def check_year(cls, v: int) -> int:
        if not Date.min.year <= v <= Date.max.year:
            raise ValueError(f"Jahr außerhalb {Date.min.year}–{Date.max.year}: {v}")
        return v

    @model_validator(mode="after")
    def check_entries(self) -> TimeSheet:
        for entry in self.entries:
            if (entry.date.year, entry.date.month) != (self.year, self.month):
                raise ValueError(
                    f"Eintrag vom {entry.date.isoformat()} liegt nicht im Monat {self.month:02d}/{self.year}"
                )
        if self.succ_transfer > self.total_work_time + self.pred_transfer:
            raise ValueError(
                f"Übertrag {self.succ_transfer} übersteigt die verfügbaren Stunden "
                f"({self.total_work_time + self.pred_transfer})"
            )
        return self

    @property
    def total_work_time(self) -> TimeSpan:
        """Summe aller Arbeitsblöcke inkl. Urlaub."""
        total = TimeSpan.ZERO
        for entry in self.entries:
            total += entry.working_time
        return total

    @property
    def total_vacation_time(self) -> TimeSpan:
        total = TimeSpan.ZERO
        for entry in self.entries:
            if entry.vacation:
                total += entry.working_time
        return total

    @property
    def total_with_transfers(self) -> TimeSpan:
        """Monatssumme inkl. Übertrag aus dem Vormonat, abzüglich Übertrag in den Folgemonat."""
        return self.total_work_time + self.pred_transfer - self.succ_transfer

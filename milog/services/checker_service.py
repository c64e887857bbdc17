"""
MiLoG-Checker: Prüft einen Monatsstundenzettel gegen Höchstarbeitszeit (Monat/Tag),
Pausenpflicht (ArbZG §4), Tagesfenster, Sonn- und Feiertagsverbot,
Zeilenzahl der Vorlage und Pflichtangaben.
"""
import logging
from collections.abc import Callable, Iterator
from datetime import date
from enum import Enum
from typing import NamedTuple, Protocol

from milog.core.config import CheckerConfig, Settings, settings
from milog.core.exceptions import CheckerException, HolidaySourceError
from milog.models.clock import TimeSpan
from milog.models.timesheet import Entry, TimeSheet
from milog.schemas.checker import CheckerError, CheckerErrorKind, CheckerReturn
from milog.utils.german_holidays import GermanHolidayService, get_holiday_service

logger = logging.getLogger(__name__)

SUNDAY = 6


class HolidayService(Protocol):
    def is_holiday(self, d: date, year: int | None = None, state: str = "BW") -> bool: ...


class Aggregation(str, Enum):
    SINGLE = "single"            # eine Bedingung, höchstens ein Fehler
    FIRST_MATCH = "first_match"  # Abbruch beim ersten verletzenden Tag/Eintrag
    ALL = "all"                  # alle Verstöße sammeln


class RuleContext(NamedTuple):
    timesheet: TimeSheet
    config: CheckerConfig
    holidays: HolidayService


class CheckerRule(NamedTuple):
    name: str
    check: Callable[[RuleContext], Iterator[CheckerError]]
    aggregation: Aggregation


# ── Regeln ───────────────────────────────────────────────────────────────────

def check_total_time_exceedance(ctx: RuleContext) -> Iterator[CheckerError]:
    total = ctx.timesheet.total_work_time
    max_time = ctx.timesheet.profession.max_working_time
    if total > max_time:
        yield CheckerError.create(CheckerErrorKind.TIME_EXCEEDANCE, total=total, max=max_time)


def _working_days(timesheet: TimeSheet, include_vacation: bool = True) -> dict[date, tuple[TimeSpan, TimeSpan]]:
    """Arbeitszeit und Pause je Datum, summiert über alle Einträge des Tages."""
    days: dict[date, tuple[TimeSpan, TimeSpan]] = {}
    for entry in timesheet.entries:
        if entry.vacation and not include_vacation:
            continue
        worked, pause = days.get(entry.date, (TimeSpan.ZERO, TimeSpan.ZERO))
        days[entry.date] = (worked + entry.working_time, pause + entry.pause)
    return days


def check_day_pauses(ctx: RuleContext) -> Iterator[CheckerError]:
    days = _working_days(ctx.timesheet)
    for day in sorted(days):
        worked, pause = days[day]
        # Stufen aufsteigend: die erste verletzte Stufe wird gemeldet
        for threshold, required in ctx.config.pause_rules:
            if worked >= threshold and pause < required:
                yield CheckerError.create(
                    CheckerErrorKind.TIME_PAUSE,
                    date=day, threshold=threshold, required=required, pause=pause,
                )
                break


def check_day_time_exceedances(ctx: RuleContext) -> Iterator[CheckerError]:
    """Tageshöchstarbeitszeit (netto); Urlaub zählt hier nicht als Arbeitszeit."""
    max_time = ctx.config.workday_max_working_time
    days = _working_days(ctx.timesheet, include_vacation=False)
    for day in sorted(days):
        worked, pause = days[day]
        net = worked - pause
        if net > max_time:
            yield CheckerError.create(CheckerErrorKind.DAY_TIME_EXCEEDANCE, date=day, worked=net, max=max_time)


def _chronological(timesheet: TimeSheet) -> list[tuple[int, Entry]]:
    """(Eingabeindex, Eintrag) nach Datum und Beginn; Eingabereihenfolge spielt keine Rolle."""
    return sorted(enumerate(timesheet.entries), key=lambda item: (item[1].date, item[1].start, item[0]))


def check_day_time_bounds(ctx: RuleContext) -> Iterator[CheckerError]:
    config = ctx.config
    for index, entry in _chronological(ctx.timesheet):
        if entry.start < config.workday_lower_bound or entry.end > config.workday_upper_bound:
            yield CheckerError.create(
                CheckerErrorKind.TIME_OUTOFBOUNDS,
                date=entry.date, entry_index=index,
                start=entry.start, end=entry.end,
                lower=config.workday_lower_bound, upper=config.workday_upper_bound,
            )


def check_valid_working_days(ctx: RuleContext) -> Iterator[CheckerError]:
    year = ctx.timesheet.year
    for index, entry in _chronological(ctx.timesheet):
        if entry.date.weekday() == SUNDAY:
            yield CheckerError.create(CheckerErrorKind.TIME_SUNDAY, date=entry.date, entry_index=index)
        elif ctx.holidays.is_holiday(entry.date, year, ctx.config.state):
            yield CheckerError.create(CheckerErrorKind.TIME_HOLIDAY, date=entry.date, entry_index=index)


def check_row_num_exceedance(ctx: RuleContext) -> Iterator[CheckerError]:
    count = len(ctx.timesheet.entries)
    if count > ctx.config.max_row_num:
        yield CheckerError.create(CheckerErrorKind.ROWNUM_EXCEEDANCE, count=count, max=ctx.config.max_row_num)


def check_department_name(ctx: RuleContext) -> Iterator[CheckerError]:
    if not ctx.timesheet.profession.department_name.strip():
        yield CheckerError.create(CheckerErrorKind.NAME_MISSING)


RULES: tuple[CheckerRule, ...] = (
    CheckerRule("total_time", check_total_time_exceedance, Aggregation.SINGLE),
    CheckerRule("day_pause", check_day_pauses, Aggregation.FIRST_MATCH),
    CheckerRule("day_time", check_day_time_exceedances, Aggregation.ALL),
    CheckerRule("day_bounds", check_day_time_bounds, Aggregation.FIRST_MATCH),
    CheckerRule("valid_working_days", check_valid_working_days, Aggregation.FIRST_MATCH),
    CheckerRule("row_num", check_row_num_exceedance, Aggregation.SINGLE),
    CheckerRule("department_name", check_department_name, Aggregation.SINGLE),
)


# ── Checker ──────────────────────────────────────────────────────────────────

class MiLoGChecker:
    """
    Führt alle Regeln in fester Reihenfolge aus.

    Eine Instanz hält Ergebnis und Fehlerliste des letzten Laufs und ist nicht
    für parallele check()-Aufrufe gedacht; pro Stundenzettel eine Instanz.
    """

    def __init__(
        self,
        timesheet: TimeSheet,
        config: CheckerConfig | None = None,
        holiday_service: HolidayService | None = None,
        rules: tuple[CheckerRule, ...] = RULES,
    ):
        self.timesheet = timesheet
        self.config = config or CheckerConfig()
        self.holiday_service = holiday_service or GermanHolidayService()
        self.rules = rules

        self._result = CheckerReturn.VALID
        self._errors: list[CheckerError] = []

    @classmethod
    def from_settings(cls, timesheet: TimeSheet, s: Settings | None = None) -> "MiLoGChecker":
        s = s or settings
        return cls(timesheet, CheckerConfig.from_settings(s), get_holiday_service(s.HOLIDAY_SOURCE))

    @property
    def result(self) -> CheckerReturn:
        return self._result

    @property
    def errors(self) -> list[CheckerError]:
        """Fehler des letzten check()-Laufs in Fundreihenfolge (Kopie)."""
        return list(self._errors)

    def check(self) -> CheckerReturn:
        """
        Prüft den Stundenzettel.

        Raises:
            CheckerException: Feiertage konnten nicht ermittelt werden.
        """
        self._result = CheckerReturn.VALID
        self._errors = []

        ctx = RuleContext(self.timesheet, self.config, self.holiday_service)
        for rule in self.rules:
            try:
                found = self._run_rule(rule, ctx)
            except HolidaySourceError as e:
                logger.error("Regel %s abgebrochen: %s", rule.name, e)
                raise CheckerException(f"Feiertagsprüfung fehlgeschlagen: {e}") from e
            logger.debug("Regel %s: %d Verstoß/Verstöße", rule.name, found)

        logger.info(
            "Stundenzettel %s %02d/%d: %s (%d Fehler)",
            self.timesheet.employee.name, self.timesheet.month, self.timesheet.year,
            self._result.value, len(self._errors),
        )
        return self._result

    def _run_rule(self, rule: CheckerRule, ctx: RuleContext) -> int:
        aggregation = rule.aggregation
        if aggregation is Aggregation.FIRST_MATCH and self.config.collect_all_violations:
            aggregation = Aggregation.ALL

        found = 0
        for error in rule.check(ctx):
            self._add_error(error)
            found += 1
            if aggregation is not Aggregation.ALL:
                break
        return found

    def _add_error(self, error: CheckerError) -> None:
        self._errors.append(error)
        self._result = CheckerReturn.INVALID


def check_timesheet(timesheet: TimeSheet, config: CheckerConfig | None = None) -> tuple[CheckerReturn, list[CheckerError]]:
    """Kurzform: neue Checker-Instanz, ein Lauf. Ohne config gelten die Settings."""
    if config is None:
        checker = MiLoGChecker.from_settings(timesheet)
    else:
        checker = MiLoGChecker(timesheet, config)
    result = checker.check()
    return result, checker.errors

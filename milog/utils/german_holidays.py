"""
Deutsche gesetzliche Feiertage je Bundesland.
Standardquelle ist die lokale Berechnung (Gauß'sche Osterformel + feste Termine),
alternativ workalendar als amtliche Referenz.
"""
import logging
from datetime import date, timedelta
from enum import Enum
from functools import lru_cache
from typing import NamedTuple

from milog.core.exceptions import HolidaySourceError

logger = logging.getLogger(__name__)

# Gregorianische Osterformel gilt ab 1583; date() reicht bis 9999
MIN_YEAR = 1583
MAX_YEAR = 9999


class GermanState(str, Enum):
    BW = "BW"  # Baden-Württemberg
    BY = "BY"  # Bayern
    BE = "BE"  # Berlin
    BB = "BB"  # Brandenburg
    HB = "HB"  # Bremen
    HH = "HH"  # Hamburg
    HE = "HE"  # Hessen
    MV = "MV"  # Mecklenburg-Vorpommern
    NI = "NI"  # Niedersachsen
    NW = "NW"  # Nordrhein-Westfalen
    RP = "RP"  # Rheinland-Pfalz
    SL = "SL"  # Saarland
    SN = "SN"  # Sachsen
    ST = "ST"  # Sachsen-Anhalt
    SH = "SH"  # Schleswig-Holstein
    TH = "TH"  # Thüringen


class HolidayInfo(NamedTuple):
    date: date
    name: str


class _Rule(NamedTuple):
    """Feiertagsregel: fester Termin (month, day) oder Oster-Offset (offset)."""
    name: str
    month: int | None = None
    day: int | None = None
    offset: int | None = None
    states: frozenset[GermanState] | None = None  # None = bundesweit
    since: int | None = None
    only: frozenset[int] | None = None  # einmalige Feiertage

    def applies(self, year: int, state: GermanState) -> bool:
        if self.states is not None and state not in self.states:
            return False
        if self.since is not None and year < self.since:
            return False
        if self.only is not None and year not in self.only:
            return False
        return True

    def resolve(self, year: int, easter: date) -> date:
        if self.offset is not None:
            return easter + timedelta(days=self.offset)
        return date(year, self.month, self.day)


def _states(*codes: str) -> frozenset[GermanState]:
    return frozenset(GermanState(c) for c in codes)


_NORTH_REFORMATION = _states("HB", "HH", "NI", "SH")

HOLIDAY_RULES: tuple[_Rule, ...] = (
    _Rule("Neujahr", month=1, day=1),
    _Rule("Heilige Drei Könige", month=1, day=6, states=_states("BW", "BY", "ST")),
    _Rule("Internationaler Frauentag", month=3, day=8, states=_states("BE"), since=2019),
    _Rule("Internationaler Frauentag", month=3, day=8, states=_states("MV"), since=2023),
    _Rule("Karfreitag", offset=-2),
    _Rule("Ostersonntag", offset=0, states=_states("BB")),
    _Rule("Ostermontag", offset=1),
    _Rule("Tag der Arbeit", month=5, day=1),
    _Rule("Tag der Befreiung", month=5, day=8, states=_states("BE"), only=frozenset({2020, 2025})),
    _Rule("Christi Himmelfahrt", offset=39),
    _Rule("Pfingstsonntag", offset=49, states=_states("BB")),
    _Rule("Pfingstmontag", offset=50),
    _Rule("Fronleichnam", offset=60, states=_states("BW", "BY", "HE", "NW", "RP", "SL")),
    _Rule("Mariä Himmelfahrt", month=8, day=15, states=_states("BY", "SL")),
    _Rule("Weltkindertag", month=9, day=20, states=_states("TH"), since=2019),
    _Rule("Tag der Deutschen Einheit", month=10, day=3, since=1990),
    _Rule("Reformationstag", month=10, day=31, states=_states("BB", "MV", "SN", "ST", "TH")),
    _Rule("Reformationstag", month=10, day=31, states=_NORTH_REFORMATION, since=2018),
    # 500 Jahre Reformation: einmalig bundesweit
    _Rule("Reformationstag", month=10, day=31,
          states=frozenset(GermanState) - _states("BB", "MV", "SN", "ST", "TH"), only=frozenset({2017})),
    _Rule("Allerheiligen", month=11, day=1, states=_states("BW", "BY", "NW", "RP", "SL")),
    _Rule("1. Weihnachtstag", month=12, day=25),
    _Rule("2. Weihnachtstag", month=12, day=26),
)


def easter_sunday(year: int) -> date:
    """Gauß'sche Osterformel (gregorianisch)."""
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = ((h + l - 7 * m + 114) % 31) + 1
    return date(year, month, day)


def repentance_day(year: int) -> date:
    """Buß- und Bettag: Mittwoch vor dem 23. November."""
    nov_22 = date(year, 11, 22)
    return nov_22 - timedelta(days=(nov_22.weekday() - 2) % 7)


def resolve_state(state: "str | GermanState") -> GermanState:
    if isinstance(state, GermanState):
        return state
    try:
        return GermanState(str(state).strip().upper())
    except ValueError:
        raise HolidaySourceError(f"Unbekanntes Bundesland: {state!r}") from None


def _check_year(year: int) -> None:
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise HolidaySourceError(f"Feiertage für {year} nicht berechenbar ({MIN_YEAR}–{MAX_YEAR})")


@lru_cache(maxsize=256)
def _compute_holidays(year: int, state: GermanState) -> tuple[HolidayInfo, ...]:
    easter = easter_sunday(year)
    holidays = [
        HolidayInfo(rule.resolve(year, easter), rule.name)
        for rule in HOLIDAY_RULES
        if rule.applies(year, state)
    ]
    if state is GermanState.SN:
        holidays.append(HolidayInfo(repentance_day(year), "Buß- und Bettag"))
    logger.debug("Feiertage %s/%s berechnet: %d Einträge", state.value, year, len(holidays))
    return tuple(sorted(holidays))


@lru_cache(maxsize=256)
def _holiday_dates(year: int, state: GermanState) -> frozenset[date]:
    return frozenset(h.date for h in _compute_holidays(year, state))


def get_holidays(year: int, state: "str | GermanState" = GermanState.BW) -> tuple[HolidayInfo, ...]:
    """Gibt alle gesetzlichen Feiertage eines Bundeslandes für ein Jahr zurück, nach Datum sortiert."""
    _check_year(year)
    return _compute_holidays(year, resolve_state(state))


def is_holiday(d: date, year: int | None = None, state: "str | GermanState" = GermanState.BW) -> bool:
    """Prüft ob ein Datum ein gesetzlicher Feiertag des Jahres `year` ist (Standard: d.year)."""
    year = d.year if year is None else year
    _check_year(year)
    return d in _holiday_dates(year, resolve_state(state))


def get_holiday_name(d: date, state: "str | GermanState" = GermanState.BW) -> str | None:
    for holiday in get_holidays(d.year, state):
        if holiday.date == d:
            return holiday.name
    return None


class GermanHolidayService:
    """Lokale Feiertagsberechnung; der Cache wird von allen Instanzen geteilt."""

    def holidays(self, year: int, state: "str | GermanState" = GermanState.BW) -> tuple[HolidayInfo, ...]:
        return get_holidays(year, state)

    def is_holiday(self, d: date, year: int | None = None, state: "str | GermanState" = GermanState.BW) -> bool:
        return is_holiday(d, year, state)


# workalendar-Klassen je Bundesland
_WORKALENDAR_CLASSES = {
    GermanState.BW: "BadenWurttemberg",
    GermanState.BY: "Bavaria",
    GermanState.BE: "Berlin",
    GermanState.BB: "Brandenburg",
    GermanState.HB: "Bremen",
    GermanState.HH: "Hamburg",
    GermanState.HE: "Hesse",
    GermanState.MV: "MecklenburgVorpommern",
    GermanState.NI: "LowerSaxony",
    GermanState.NW: "NorthRhineWestphalia",
    GermanState.RP: "RhinelandPalatinate",
    GermanState.SL: "Saarland",
    GermanState.SN: "Saxony",
    GermanState.ST: "SaxonyAnhalt",
    GermanState.SH: "SchleswigHolstein",
    GermanState.TH: "Thuringia",
}


class WorkalendarHolidayService:
    """Feiertage aus workalendar (amtliche Referenzdaten statt eigener Berechnung)."""

    def __init__(self):
        self._cache: dict[tuple[int, GermanState], tuple[HolidayInfo, ...]] = {}
        self._dates: dict[tuple[int, GermanState], frozenset[date]] = {}

    def holidays(self, year: int, state: "str | GermanState" = GermanState.BW) -> tuple[HolidayInfo, ...]:
        _check_year(year)
        state = resolve_state(state)
        key = (year, state)
        if key not in self._cache:
            from workalendar import europe

            try:
                cal = getattr(europe, _WORKALENDAR_CLASSES[state])()
                raw = cal.holidays(year)
            except Exception as e:
                logger.error("workalendar-Abfrage %s/%s fehlgeschlagen: %s", state.value, year, e)
                raise HolidaySourceError(f"workalendar liefert keine Feiertage für {state.value}/{year}") from e
            self._cache[key] = tuple(sorted(HolidayInfo(d, name) for d, name in raw))
            self._dates[key] = frozenset(d for d, _ in raw)
            logger.debug("workalendar %s/%s geladen: %d Einträge", state.value, year, len(raw))
        return self._cache[key]

    def is_holiday(self, d: date, year: int | None = None, state: "str | GermanState" = GermanState.BW) -> bool:
        year = d.year if year is None else year
        state = resolve_state(state)
        self.holidays(year, state)
        return d in self._dates[(year, state)]


HOLIDAY_SOURCES = {
    "computus": GermanHolidayService,
    "workalendar": WorkalendarHolidayService,
}


def get_holiday_service(source: str = "computus"):
    try:
        return HOLIDAY_SOURCES[source]()
    except KeyError:
        raise HolidaySourceError(f"Unbekannte Feiertagsquelle: {source!r}") from None

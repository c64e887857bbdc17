from dataclasses import dataclass

from pydantic import field_validator
from pydantic_settings import BaseSettings

from milog.models.clock import ClockTime, TimeSpan


class Settings(BaseSettings):
    # Bundesland für die Feiertagsprüfung
    STATE: str = "BW"
    # "computus" (lokale Berechnung) oder "workalendar"
    HOLIDAY_SOURCE: str = "computus"

    # Zulässiges Tagesfenster und Tageshöchstarbeitszeit (ArbZG §3)
    WORKDAY_LOWER_BOUND: str = "06:00"
    WORKDAY_UPPER_BOUND: str = "22:00"
    WORKDAY_MAX_WORKING_TIME: str = "10:00"

    # Pausenstufen (ArbZG §4): (Arbeitszeit ab, Mindestpause)
    # Als Env-Variable JSON, z.B. MILOG_PAUSE_RULES='[["6:00","0:30"],["9:00","0:45"]]'
    PAUSE_RULES: list[tuple[str, str]] = [("6:00", "0:30"), ("9:00", "0:45")]

    # Zeilen der Dokumentvorlage
    MAX_ROW_NUM: int = 22

    # Alle Verstöße je Regel sammeln statt beim ersten abzubrechen
    COLLECT_ALL_VIOLATIONS: bool = False

    LOG_LEVEL: str = "WARNING"

    @field_validator("WORKDAY_LOWER_BOUND", "WORKDAY_UPPER_BOUND")
    @classmethod
    def valid_clock_time(cls, v: str) -> str:
        ClockTime.parse(v)
        return v

    @field_validator("WORKDAY_MAX_WORKING_TIME")
    @classmethod
    def valid_time_span(cls, v: str) -> str:
        TimeSpan.parse(v)
        return v

    @field_validator("PAUSE_RULES")
    @classmethod
    def valid_pause_rules(cls, v: list[tuple[str, str]]) -> list[tuple[str, str]]:
        for threshold, pause in v:
            TimeSpan.parse(threshold)
            TimeSpan.parse(pause)
        return v

    @field_validator("MAX_ROW_NUM")
    @classmethod
    def row_num_not_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("MAX_ROW_NUM darf nicht negativ sein")
        return v

    @property
    def workday_lower_bound(self) -> ClockTime:
        return ClockTime.parse(self.WORKDAY_LOWER_BOUND)

    @property
    def workday_upper_bound(self) -> ClockTime:
        return ClockTime.parse(self.WORKDAY_UPPER_BOUND)

    @property
    def workday_max_working_time(self) -> TimeSpan:
        return TimeSpan.parse(self.WORKDAY_MAX_WORKING_TIME)

    @property
    def pause_rules(self) -> tuple[tuple[TimeSpan, TimeSpan], ...]:
        # aufsteigend nach Schwelle, damit strengere Stufen später greifen
        return tuple(sorted((TimeSpan.parse(t), TimeSpan.parse(p)) for t, p in self.PAUSE_RULES))

    model_config = {"env_file": ".env", "env_prefix": "MILOG_", "extra": "ignore"}


@dataclass(frozen=True)
class CheckerConfig:
    """Regelparameter, die eine MiLoGChecker-Instanz besitzt."""
    state: str = "BW"
    workday_lower_bound: ClockTime = ClockTime(6, 0)
    workday_upper_bound: ClockTime = ClockTime(22, 0)
    workday_max_working_time: TimeSpan = TimeSpan(10, 0)
    pause_rules: tuple[tuple[TimeSpan, TimeSpan], ...] = (
        (TimeSpan(6, 0), TimeSpan(0, 30)),
        (TimeSpan(9, 0), TimeSpan(0, 45)),
    )
    max_row_num: int = 22
    collect_all_violations: bool = False

    @classmethod
    def from_settings(cls, s: Settings) -> "CheckerConfig":
        return cls(
            state=s.STATE,
            workday_lower_bound=s.workday_lower_bound,
            workday_upper_bound=s.workday_upper_bound,
            workday_max_working_time=s.workday_max_working_time,
            pause_rules=s.pause_rules,
            max_row_num=s.MAX_ROW_NUM,
            collect_all_violations=s.COLLECT_ALL_VIOLATIONS,
        )


settings = Settings()

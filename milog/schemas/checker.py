"""
Ergebnistypen des MiLoG-Checkers.
"""
from dataclasses import dataclass, field
from datetime import date as Date
from enum import Enum
from typing import Any


class CheckerReturn(str, Enum):
    VALID = "valid"
    INVALID = "invalid"


class CheckerErrorKind(str, Enum):
    TIME_EXCEEDANCE = "TIME_EXCEEDANCE"
    DAY_TIME_EXCEEDANCE = "DAY_TIME_EXCEEDANCE"
    TIME_PAUSE = "TIME_PAUSE"
    TIME_OUTOFBOUNDS = "TIME_OUTOFBOUNDS"
    TIME_SUNDAY = "TIME_SUNDAY"
    TIME_HOLIDAY = "TIME_HOLIDAY"
    ROWNUM_EXCEEDANCE = "ROWNUM_EXCEEDANCE"
    NAME_MISSING = "NAME_MISSING"


ERROR_MESSAGES: dict[CheckerErrorKind, str] = {
    CheckerErrorKind.TIME_EXCEEDANCE:
        "Maximale Monatsarbeitszeit überschritten: {total} (max. {max})",
    CheckerErrorKind.DAY_TIME_EXCEEDANCE:
        "Maximale Tagesarbeitszeit am {date} überschritten: {worked} (max. {max})",
    CheckerErrorKind.TIME_PAUSE:
        "Pausenpflicht am {date} verletzt: nach {threshold}h Arbeitszeit mind. {required} Pause erforderlich (erfasst: {pause})",
    CheckerErrorKind.TIME_OUTOFBOUNDS:
        "Arbeitszeit am {date} außerhalb {lower}–{upper}: {start}–{end}",
    CheckerErrorKind.TIME_SUNDAY:
        "Sonntag ({date}) ist kein zulässiger Arbeitstag",
    CheckerErrorKind.TIME_HOLIDAY:
        "Gesetzlicher Feiertag ({date}) ist kein zulässiger Arbeitstag",
    CheckerErrorKind.ROWNUM_EXCEEDANCE:
        "Zu viele Einträge für die Dokumentvorlage: {count} (max. {max})",
    CheckerErrorKind.NAME_MISSING:
        "Name der Organisationseinheit fehlt",
}


def render_message(kind: CheckerErrorKind, **context: Any) -> str:
    """Einzige Stelle, an der Fehlermeldungen formatiert werden."""
    values = {
        k: v.strftime("%d.%m.%Y") if isinstance(v, Date) else v
        for k, v in context.items()
    }
    return ERROR_MESSAGES[kind].format(**values)


@dataclass(frozen=True)
class CheckerError:
    """Ein einzelner Regelverstoß."""
    kind: CheckerErrorKind
    message: str
    date: Date | None = None
    entry_index: int | None = None
    details: dict = field(default_factory=dict, compare=False, hash=False)

    @classmethod
    def create(
        cls,
        kind: CheckerErrorKind,
        *,
        date: Date | None = None,
        entry_index: int | None = None,
        **context: Any,
    ) -> "CheckerError":
        message = render_message(kind, date=date, **context)
        return cls(
            kind=kind,
            message=message,
            date=date,
            entry_index=entry_index,
            details={k: str(v) for k, v in context.items()},
        )

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "date": self.date.isoformat() if self.date else None,
            "entry_index": self.entry_index,
            "details": self.details,
        }

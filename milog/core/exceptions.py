"""
Fehlerklassen für milog.
Regelverstöße sind keine Exceptions, sondern CheckerError-Werte (siehe schemas.checker).
"""


class MiLoGError(Exception):
    """Basisklasse aller milog-Fehler."""


class TimeRangeError(MiLoGError, ValueError):
    """Uhrzeit oder Zeitspanne außerhalb des gültigen Wertebereichs."""


class HolidaySourceError(MiLoGError):
    """Feiertage konnten für Jahr/Bundesland nicht ermittelt werden."""


class CheckerException(MiLoGError):
    """Fataler Fehler während check(); die Ursache hängt an __cause__."""

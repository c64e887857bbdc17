"""
Logging-Setup für Aufrufer (CLI, Dokumentgenerator).
Die Bibliothek selbst loggt nur über Modul-Logger und konfiguriert nichts.
"""
import logging

from milog.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str | int | None = None) -> None:
    level = level if level is not None else settings.LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("milog").setLevel(level)

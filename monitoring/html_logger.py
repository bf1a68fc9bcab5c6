# monitoring/html_logger.py
"""
Application log rendered as HTML.

``info``, ``warn`` and ``error`` send a message to the ``tennis_camp``
logger and also append it, escaped and colour-coded, to
``app.log.html`` under ``MONITORING_LOG_DIR``. Staff read that file
through :func:`monitoring.views.logs_view`.
"""

import html
import logging
from pathlib import Path

from django.conf import settings
from django.utils.timezone import now

logger = logging.getLogger("tennis_camp")

LOG_FILE_NAME = "app.log.html"

#: level -> (css class, label, logging level)
LEVELS = {
    "info": ("log-info", "INFO", logging.INFO),
    "warn": ("log-warn", "WARN", logging.WARNING),
    "error": ("log-error", "ERROR", logging.ERROR),
}

STYLE = """
.log-info{ background:#e3f2fd; color:#0d47a1; border-left:4px solid #1976d2; }
.log-warn{ background:#fff8e1; color:#e65100; border-left:4px solid #ff9800; }
.log-error{ background:#ffebee; color:#b71c1c; border-left:4px solid #f44336; }
div[class^="log-"]{ padding:.5rem; margin:.25rem 0; font-family:monospace; }
"""

HEADER = (
    '<!doctype html>\n<html lang="en"><head><meta charset="utf-8">'
    f"<title>Tennis camp log</title><style>{STYLE}</style></head><body>\n"
    "<h3>Tennis camp log</h3>\n"
)
FOOTER = "</body></html>"


def log_file() -> Path:
    """
    Path of the HTML log, creating its directory if needed.

    Defaults to ``BASE_DIR/logs`` when ``MONITORING_LOG_DIR`` is unset.
    """
    default = Path(settings.BASE_DIR) / "logs"
    directory = Path(getattr(settings, "MONITORING_LOG_DIR", default))
    directory.mkdir(parents=True, exist_ok=True)
    return directory / LOG_FILE_NAME


def _write(level: str, message: str) -> None:
    css_class, label, log_level = LEVELS[level]
    logger.log(log_level, message)

    path = log_file()
    stamp = now().strftime("%Y-%m-%d %H:%M:%S")
    # Messages carry registrant input (names, e-mails)
    entry = f'<div class="{css_class}"><strong>[{label} {stamp}]</strong> {html.escape(message)}</div>\n'
    with path.open("a", encoding="utf-8") as f:
        if f.tell() == 0:
            f.write(HEADER)
        f.write(entry)


def info(message: str) -> None:
    """Record a normal event, e.g. a registration being confirmed."""
    _write("info", message)


def warn(message: str) -> None:
    """
    Record something staff should look at.

    Parameters
    ----------
    message : str
        Plain text; it is escaped before being written.
    """
    _write("warn", message)


def error(message: str) -> None:
    """Record a failure needing manual follow-up (orphaned checkout, ...)."""
    _write("error", message)

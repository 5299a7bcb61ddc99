"""Logging setup shared by the API and the CLI."""
from __future__ import annotations

import logging
import logging.config
import os
from pathlib import Path

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_NOISY_LOGGERS = ("urllib3", "httpx")


def setup_logging(level: str | None = None, log_file: str | None = None) -> None:
    """Configure root logging once per process.

    Explicit arguments win over ``TERMSEARCH_LOG_LEVEL`` and
    ``TERMSEARCH_LOG_FILE``. An empty log file name disables the file handler.
    """
    if logging.getLogger().handlers:
        return

    level_name = (level or os.getenv("TERMSEARCH_LOG_LEVEL", "INFO")).upper()
    if not isinstance(logging.getLevelName(level_name), int):
        level_name = "INFO"
    file_name = log_file if log_file is not None else os.getenv("TERMSEARCH_LOG_FILE", "termsearch.log")

    handlers: dict[str, dict] = {
        "console": {"class": "logging.StreamHandler", "formatter": "plain"},
    }
    if file_name:
        Path(file_name).parent.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.FileHandler",
            "formatter": "plain",
            "filename": file_name,
            "encoding": "utf-8",
        }

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"plain": {"format": _FORMAT}},
            "handlers": handlers,
            "root": {"level": level_name, "handlers": list(handlers)},
            "loggers": {name: {"level": "WARNING"} for name in _NOISY_LOGGERS},
        }
    )

"""Logging configuration setup."""

import copy
import logging
import logging.config
import re
from typing import Optional, Set  # noqa: UP035

from keyring_ctl.constants import DEFAULT_LOG_LEVEL
from keyring_ctl.errors import ConfigurationError

# ── Secret redaction filter ──────────────────────────────────────────────

_REDACTED = "***REDACTED***"


class SecretRedactionFilter(logging.Filter):
    """Logging filter that replaces registered secret values with a placeholder.

    Call :meth:`register` to add values that should be scrubbed.
    """

    def __init__(self) -> None:
        super().__init__()
        self._secrets: Set[str] = set()
        self._pattern: Optional[re.Pattern[str]] = None

    def register(self, value: str) -> None:
        """Register a secret value for redaction."""
        if value and len(value) >= 4:  # skip trivially short values
            self._secrets.add(value)
            # Rebuild regex pattern with longest-first ordering
            escaped = sorted((re.escape(s) for s in self._secrets), key=len, reverse=True)
            self._pattern = re.compile("|".join(escaped))

    def clear(self) -> None:
        self._secrets.clear()
        self._pattern = None

    def filter(self, record: logging.LogRecord) -> bool:
        if self._pattern is not None:
            if isinstance(record.msg, str):
                record.msg = self._pattern.sub(_REDACTED, record.msg)
            if record.args:
                if isinstance(record.args, dict):
                    record.args = {
                        k: self._pattern.sub(_REDACTED, v) if isinstance(v, str) else v
                        for k, v in record.args.items()
                    }
                elif isinstance(record.args, tuple):
                    record.args = tuple(
                        self._pattern.sub(_REDACTED, a) if isinstance(a, str) else a
                        for a in record.args
                    )
        return True


# Module-level singleton so operations can register values as they see them.
secret_redaction_filter = SecretRedactionFilter()

# stdout carries secrets and status lines, so nothing here may write to it.
BASE_LOG_CFG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple_stderr": {
            "format": "%(levelname)s: %(name)s: %(message)s",
        },
        "simple_file": {
            "format": ("%(asctime)s - %(name)25s:%(lineno)-4d - " "%(levelname)-7s - %(message)s"),
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "stderr_handler": {
            "class": "logging.StreamHandler",
            "level": "DEBUG",
            "formatter": "simple_stderr",
            "stream": "ext://sys.stderr",
        },
    },
    "loggers": {
        "keyring_ctl": {
            "handlers": ["stderr_handler"],
            "propagate": False,
            "level": DEFAULT_LOG_LEVEL,
        },
        "keyring": {
            "handlers": ["stderr_handler"],
            "propagate": False,
            "level": DEFAULT_LOG_LEVEL,
        },
    },
    "root": {
        "handlers": ["stderr_handler"],
        "level": "WARNING",
    },
}


def resolve_log_level(log_lvl_str: Optional[str]) -> str:
    """Upper-case *log_lvl_str*, falling back to the default for unknown names."""
    log_lvl_valid = (log_lvl_str or DEFAULT_LOG_LEVEL).upper()
    if log_lvl_valid not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        log_lvl_valid = DEFAULT_LOG_LEVEL
    return log_lvl_valid


def setup_logging(log_lvl_str: Optional[str], log_file: Optional[str] = None) -> str:
    """
    Set up the logging system.

    Args:
        log_lvl_str: The desired log level string (e.g., 'debug', 'info').
            Unknown values fall back to WARNING.
        log_file: Optional path; when given, records are also appended there.

    Returns:
        The validated log level.
    """
    log_lvl_valid = resolve_log_level(log_lvl_str)

    log_cfg: dict = copy.deepcopy(BASE_LOG_CFG)
    handler_names = ["stderr_handler"]
    if log_file:
        log_cfg["handlers"]["file_handler"] = {
            "class": "logging.FileHandler",
            "level": "DEBUG",
            "formatter": "simple_file",
            "filename": log_file,
            "encoding": "utf-8",
            "delay": True,
        }
        handler_names.append("file_handler")

    for logger_cfg in log_cfg["loggers"].values():
        logger_cfg["handlers"] = list(handler_names)
        logger_cfg["level"] = log_lvl_valid
    log_cfg["root"]["handlers"] = list(handler_names)
    log_cfg["root"]["level"] = log_lvl_valid if log_lvl_valid == "DEBUG" else "WARNING"

    try:
        logging.config.dictConfig(log_cfg)
    except (ValueError, TypeError, AttributeError, ImportError) as exc:
        raise ConfigurationError(f"Error applying logging configuration: {exc}") from exc
    # Attach secret redaction filter to every handler in use
    for name in ("keyring_ctl", "keyring", ""):
        for handler in logging.getLogger(name).handlers:
            handler.addFilter(secret_redaction_filter)

    return log_lvl_valid

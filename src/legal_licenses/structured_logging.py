"""
Structured logging configuration for legal-licenses.

Emits machine-readable JSON log lines on stderr so that the report messages
printed on stdout stay clean.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

_RESERVED_ATTRS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "getMessage",
    "exc_info",
    "exc_text",
    "stack_info",
    "taskName",
    "message",
}


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "component": record.name,
        }
        message = record.getMessage()
        if message:
            log_entry["message"] = message

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_entry[key] = value

        return json.dumps(log_entry, default=str)


class ReportLogger:
    """Structured logger for report generation events."""

    def __init__(self, name: str = "legal_licenses"):
        self.logger = logging.getLogger(name)
        self._setup_logger()
        self.run_context: Dict[str, Any] = {}

    def _setup_logger(self) -> None:
        """Setup logger with structured formatting."""
        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.WARNING)
            self.logger.propagate = False

    def set_level(self, level: str) -> None:
        self.logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    def set_run_context(
        self,
        run_id: Optional[str] = None,
        manifest_path: Optional[str] = None,
        total_dependencies: Optional[int] = None,
    ) -> None:
        """Set run context for logging."""
        self.run_context = {}
        if run_id:
            self.run_context["run_id"] = run_id
        if manifest_path:
            self.run_context["manifest_path"] = manifest_path
        if total_dependencies is not None:
            self.run_context["total_dependencies"] = total_dependencies

    def clear_run_context(self) -> None:
        """Clear run context."""
        self.run_context.clear()

    def _log(self, level: str, event_type: str, **kwargs) -> None:
        log_data = {"event_type": event_type, **self.run_context, **kwargs}
        getattr(self.logger, level)("", extra=log_data)

    def info(self, event_type: str, **kwargs) -> None:
        """Log info level event."""
        self._log("info", event_type, **kwargs)

    def debug(self, event_type: str, **kwargs) -> None:
        """Log debug level event."""
        self._log("debug", event_type, **kwargs)


# Global logger instances
_report_logger = ReportLogger("legal_licenses.report")
_locator_logger = ReportLogger("legal_licenses.locator")


def configure_logging(level: str) -> None:
    """Apply the configured log level to all structured loggers."""
    for logger in (_report_logger, _locator_logger):
        logger.set_level(level)

    # Parent logger used by the error handler
    logging.getLogger("legal_licenses").setLevel(
        getattr(logging, level.upper(), logging.WARNING)
    )


def set_run_context(
    run_id: Optional[str] = None,
    manifest_path: Optional[str] = None,
    total_dependencies: Optional[int] = None,
) -> None:
    """Set run context on the report logger."""
    _report_logger.set_run_context(run_id, manifest_path, total_dependencies)


def clear_run_context() -> None:
    """Clear run context on the report logger."""
    _report_logger.clear_run_context()


def log_generation_start(
    run_id: str, manifest_path: str, total_dependencies: int, output_format: str
) -> None:
    """Log the start of a report generation run."""
    _report_logger.info(
        "generation_start",
        run_id=run_id,
        manifest_path=manifest_path,
        total_dependencies=total_dependencies,
        output_format=output_format,
    )


def log_license_lookup(name: str, status: str, path: Optional[str] = None) -> None:
    """Log the outcome of a license file lookup."""
    _locator_logger.debug("license_lookup", dependency=name, status=status, path=path)


def log_generation_complete(
    run_id: str, output_path: str, entries_written: int, missing_licenses: int
) -> None:
    """Log the completion of a report generation run."""
    _report_logger.info(
        "generation_complete",
        run_id=run_id,
        output_path=output_path,
        entries_written=entries_written,
        missing_licenses=missing_licenses,
    )

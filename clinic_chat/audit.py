"""Best-effort flat-file logs of chat traffic.

Two append-only files live in the configured log directory:
    - chat_requests.log: every accepted message
    - upstream_errors.log: provider failures

Writes go through stdlib logging file handlers. A failure to create the
directory, open a file or write a line is dropped inside the handler, so
recording never raises into the request path.
"""

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

REQUESTS_LOG = "chat_requests.log"
UPSTREAM_ERRORS_LOG = "upstream_errors.log"


class _TimestampFormatter(logging.Formatter):
    def __init__(self) -> None:
        super().__init__("[%(asctime)s] %(message)s")

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        created = datetime.fromtimestamp(record.created, tz=UTC)
        return created.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class _BestEffortFileHandler(logging.FileHandler):
    """File handler that opens lazily and never raises."""

    def __init__(self, path: Path) -> None:
        self._path = path
        super().__init__(path, encoding="utf-8", delay=True)
        self.setFormatter(_TimestampFormatter())

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            super().emit(record)
        except OSError:
            self.handleError(record)

    def handleError(self, record: logging.LogRecord) -> None:  # noqa: N802
        return


def _file_logger(name: str, path: Path) -> logging.Logger:
    # Unregistered logger: one per AuditLog, never propagates to the root.
    file_logger = logging.Logger(name, level=logging.INFO)
    file_logger.propagate = False
    file_logger.addHandler(_BestEffortFileHandler(path))
    return file_logger


class AuditLog:
    """Request and upstream-failure logs that callers cannot fail on."""

    def __init__(self, log_dir: Path) -> None:
        self.log_dir = Path(log_dir)
        self._requests = _file_logger("clinic_chat.audit.requests", self.log_dir / REQUESTS_LOG)
        self._errors = _file_logger(
            "clinic_chat.audit.upstream", self.log_dir / UPSTREAM_ERRORS_LOG
        )

    def record_request(self, message: str) -> None:
        self._requests.info("message=%s", json.dumps(message, ensure_ascii=False))

    def record_upstream_status(self, status_code: int, body: str) -> None:
        self._errors.info("status=%s body=%s", status_code, body)

    def record_upstream_exception(self, exc: BaseException) -> None:
        self._errors.info("exception=%s", exc)

    def close(self) -> None:
        """Release open file handles."""
        for file_logger in (self._requests, self._errors):
            for handler in list(file_logger.handlers):
                handler.close()
                file_logger.removeHandler(handler)

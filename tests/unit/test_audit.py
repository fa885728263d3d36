"""Unit tests for the best-effort request and upstream error logs."""

import re
from pathlib import Path

import pytest_check as check

from clinic_chat.audit import REQUESTS_LOG, UPSTREAM_ERRORS_LOG, AuditLog

TIMESTAMP = r"\[\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z\]"


class TestAuditLog:
    """Tests for AuditLog."""

    def test_request_line_format(self, tmp_path: Path) -> None:
        """Each request is one timestamped line with the JSON-quoted message."""
        audit = AuditLog(tmp_path / "logs")

        audit.record_request('Do you take "walk-ins"?')
        audit.record_request("second")
        audit.close()

        lines = (tmp_path / "logs" / REQUESTS_LOG).read_text(encoding="utf-8").splitlines()
        check.equal(len(lines), 2)
        check.is_true(re.fullmatch(TIMESTAMP + r' message="Do you take \\"walk-ins\\"\?"', lines[0]))
        check.is_true(lines[1].endswith('message="second"'))

    def test_upstream_failures(self, tmp_path: Path) -> None:
        """Status failures and exceptions go to the upstream error log."""
        audit = AuditLog(tmp_path)

        audit.record_upstream_status(529, "overloaded")
        audit.record_upstream_exception(ConnectionError("refused"))
        audit.close()

        text = (tmp_path / UPSTREAM_ERRORS_LOG).read_text(encoding="utf-8")
        check.is_in("status=529 body=overloaded", text)
        check.is_in("exception=refused", text)

    def test_nothing_written_until_used(self, tmp_path: Path) -> None:
        """Creating the log does not touch the filesystem."""
        AuditLog(tmp_path / "logs")

        assert not (tmp_path / "logs").exists()

    def test_unwritable_location_never_raises(self, tmp_path: Path) -> None:
        """Write failures are swallowed."""
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("file in the way", encoding="utf-8")
        audit = AuditLog(blocker / "logs")

        audit.record_request("hello")
        audit.record_upstream_status(500, "x")
        audit.record_upstream_exception(RuntimeError("y"))

        assert blocker.read_text(encoding="utf-8") == "file in the way"

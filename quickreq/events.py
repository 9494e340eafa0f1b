"""quickreq events - bounded, newest-first event log."""

from __future__ import annotations

import datetime

from quickreq.models import LOG_TYPES, LogEntry

MAX_LOGS = 100


def now_iso() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


class LogRecorder:
    """Append-only log of info/success/error events.

    New entries go to the head; anything past ``limit`` is dropped from the
    tail without complaint.
    """

    def __init__(self, limit: int = MAX_LOGS, clear_message: str = "Logs cleared"):
        self.limit = limit
        self.clear_message = clear_message
        self._entries: list[LogEntry] = []

    def record(self, type: str, message: str, details: str | None = None) -> LogEntry:
        if type not in LOG_TYPES:
            type = "info"
        entry = LogEntry(timestamp=now_iso(), type=type, message=message, details=details)
        self._entries.insert(0, entry)
        del self._entries[self.limit :]
        return entry

    def info(self, message: str, details: str | None = None) -> LogEntry:
        return self.record("info", message, details)

    def success(self, message: str, details: str | None = None) -> LogEntry:
        return self.record("success", message, details)

    def error(self, message: str, details: str | None = None) -> LogEntry:
        return self.record("error", message, details)

    def clear(self) -> LogEntry:
        self._entries = []
        return self.info(self.clear_message)

    def entries(self) -> list[LogEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

"""quickreq errors - classified failures of an execution or an import."""

from __future__ import annotations


class QuickreqError(Exception):
    """Base class for all quickreq errors."""

    kind = "error"

    def __init__(self, message: str, key: str | None = None):
        super().__init__(message)
        self.message = message
        # translation key for the message, when it has one
        self.key = key


class ExecutionError(QuickreqError):
    """An execution that produced no response."""

    kind = "execution"


class ValidationError(ExecutionError):
    """Required input missing, e.g. an empty URL. No network attempt is made."""

    kind = "validation"


class NetworkError(ExecutionError):
    """Transport failure: unreachable host, timeout, refused connection."""

    kind = "network"


class ParseError(ExecutionError):
    """A body that should be JSON is not."""

    kind = "parse"


class ImportFormatError(ParseError):
    """An import document that is not valid JSON (or not an export document)."""

    kind = "import"

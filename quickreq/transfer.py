"""quickreq transfer - export and import of saved requests and history.

The export document is ``{"savedRequests": [...], "requestHistory": [...]}``.
Saved API keys are never part of it.
"""

from __future__ import annotations

import json
from pathlib import Path

from quickreq.errors import ImportFormatError
from quickreq.models import SavedRequest

EXPORT_FILENAME = "api-requests-export.json"


class ImportDocument:
    """Collections found in an import document.

    A field that was absent, null or not a list in the document is None, which leaves
    the matching collection alone.
    """

    def __init__(
        self,
        saved_requests: list[SavedRequest] | None = None,
        request_history: list[SavedRequest] | None = None,
    ):
        self.saved_requests = saved_requests
        self.request_history = request_history


class ImportResult:
    def __init__(self, document: ImportDocument | None = None, error: ImportFormatError | None = None):
        self.document = document
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None


def build_export(saved_requests: list[SavedRequest], request_history: list[SavedRequest]) -> dict:
    return {
        "savedRequests": [entry.to_dict() for entry in saved_requests],
        "requestHistory": [entry.to_dict() for entry in request_history],
    }


def dumps_export(saved_requests: list[SavedRequest], request_history: list[SavedRequest]) -> str:
    return json.dumps(build_export(saved_requests, request_history), indent=2, ensure_ascii=False)


def write_export(text: str, path: str | Path) -> Path:
    path = Path(path)
    if path.parent != Path("."):
        path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def _entries(value) -> list[SavedRequest] | None:
    if not isinstance(value, list):
        return None
    return [SavedRequest.from_dict(item) for item in value if isinstance(item, dict)]


def parse_import(text: str) -> ImportDocument:
    """Parse an export document.

    Unknown top-level fields are ignored, and so is a collection field that
    is not a list. A document that is not an object imports nothing.
    Entries are taken as they are, with missing or mistyped fields
    defaulted; non-object entries are dropped.
    Raises ImportFormatError only when the text is not JSON.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise ImportFormatError(f"Invalid JSON: {e}", key="invalidFileFormat") from e
    if not isinstance(data, dict):
        return ImportDocument()
    return ImportDocument(
        saved_requests=_entries(data.get("savedRequests")),
        request_history=_entries(data.get("requestHistory")),
    )


def read_import(path: str | Path) -> str:
    return Path(path).read_text(encoding="utf-8")

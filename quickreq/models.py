"""quickreq models - request, response, log and collection records."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH")

DEFAULT_HEADERS = {"Content-Type": "application/json"}

LOG_TYPES = ("info", "error", "success")


def _text(value, default: str = "") -> str:
    """Stored and imported records are loose JSON; coerce scalars to str."""
    if value is None or isinstance(value, (dict, list)):
        return default
    return str(value)


def _mapping(value) -> dict:
    return value if isinstance(value, dict) else {}


@dataclass
class RequestData:
    """The user-edited request: method, url, header map and body text.

    The body is kept when the method is switched to GET; it is simply not
    transmitted.
    """

    url: str = ""
    method: str = "GET"
    headers: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_HEADERS))
    body: str = ""

    def copy(self) -> RequestData:
        return RequestData(
            url=self.url,
            method=self.method,
            headers=dict(self.headers),
            body=self.body,
        )

    def to_dict(self) -> dict:
        return {
            "url": self.url,
            "method": self.method,
            "headers": dict(self.headers),
            "body": self.body,
        }

    @classmethod
    def from_dict(cls, data: dict) -> RequestData:
        """Build from a stored dict. Fields of the wrong shape fall back to defaults."""
        data = _mapping(data)
        headers = _mapping(data.get("headers"))
        return cls(
            url=_text(data.get("url")),
            method=(_text(data.get("method")) or "GET").upper(),
            headers={str(k): _text(v) for k, v in headers.items()},
            body=_text(data.get("body")),
        )


@dataclass(frozen=True)
class ResponseData:
    """Outcome of one successful execution. Replaced wholesale by the next."""

    status: int
    status_text: str
    headers: dict[str, str]
    data: Any
    time: int

    @property
    def ok(self) -> bool:
        return self.status < 400

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "statusText": self.status_text,
            "headers": dict(self.headers),
            "data": copy.deepcopy(self.data),
            "time": self.time,
        }


@dataclass(frozen=True)
class LogEntry:
    timestamp: str
    type: str
    message: str
    details: str | None = None

    def to_dict(self) -> dict:
        d = {"timestamp": self.timestamp, "type": self.type, "message": self.message}
        if self.details is not None:
            d["details"] = self.details
        return d


@dataclass
class SavedRequest:
    """A named snapshot of a RequestData.

    Used for both the saved-requests collection and the request history.
    The ``request`` field is always an independent copy.
    """

    name: str
    request: RequestData
    timestamp: str

    def copy(self) -> SavedRequest:
        return SavedRequest(name=self.name, request=self.request.copy(), timestamp=self.timestamp)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "request": self.request.to_dict(),
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict) -> SavedRequest:
        data = _mapping(data)
        return cls(
            name=_text(data.get("name")),
            request=RequestData.from_dict(data.get("request")),
            timestamp=_text(data.get("timestamp")),
        )


@dataclass
class SavedApiKey:
    """A named credential. Stored in plaintext, like the rest of the data dir."""

    name: str
    key: str
    timestamp: str

    def copy(self) -> SavedApiKey:
        return SavedApiKey(name=self.name, key=self.key, timestamp=self.timestamp)

    def to_dict(self) -> dict:
        return {"name": self.name, "key": self.key, "timestamp": self.timestamp}

    @classmethod
    def from_dict(cls, data: dict) -> SavedApiKey:
        data = _mapping(data)
        return cls(
            name=_text(data.get("name")),
            key=_text(data.get("key")),
            timestamp=_text(data.get("timestamp")),
        )

"""quickreq output - plain-text rendering for the CLI."""

from __future__ import annotations

import json

from quickreq.models import LogEntry, ResponseData, SavedApiKey, SavedRequest
from quickreq.presets import Preset


def format_response(
    response: ResponseData,
    verbose: bool = False,
    raw: bool = False,
) -> str:
    """Format a response for CLI output.

    Default:
        STATUS: 200 OK
        TIME: 45ms
        BODY:
        {...}

    verbose adds a HEADERS section; raw prints the JSON body only.
    """
    body = json.dumps(response.data, indent=2, ensure_ascii=False)
    if raw:
        return body

    status = f"{response.status} {response.status_text}".rstrip()
    lines = [f"STATUS: {status}", f"TIME: {response.time}ms"]

    if verbose and response.headers:
        lines.append("HEADERS:")
        for key, value in response.headers.items():
            lines.append(f"  {key}: {value}")

    lines.append("BODY:")
    lines.append(body)
    return "\n".join(lines)


def mask_key(key: str) -> str:
    if len(key) <= 8:
        return "*" * len(key)
    return f"{key[:4]}...{key[-3:]}"


def format_saved_requests(entries: list[SavedRequest]) -> list[str]:
    lines = []
    for i, entry in enumerate(entries):
        req = entry.request
        lines.append(f"  [{i}] {req.method:<6} {entry.name}  {req.url}  ({entry.timestamp})")
    return lines


def format_history(entries: list[SavedRequest]) -> list[str]:
    lines = []
    for i, entry in enumerate(entries):
        req = entry.request
        lines.append(f"  [{i}] {req.method:<6} {req.url}  ({entry.name})")
    return lines


def format_api_keys(entries: list[SavedApiKey], reveal: bool = False) -> list[str]:
    lines = []
    for i, entry in enumerate(entries):
        key = entry.key if reveal else mask_key(entry.key)
        lines.append(f"  [{i}] {entry.name}  {key}  ({entry.timestamp})")
    return lines


def format_presets(presets: list[Preset]) -> list[str]:
    lines = []
    for preset in presets:
        label = f"  {preset.name} - {preset.description}" if preset.description else f"  {preset.name}"
        lines.append(label)
        lines.append(f"    {preset.request.method} {preset.request.url}")
    return lines


def format_log_entry(entry: LogEntry) -> str:
    line = f"[{entry.timestamp}] {entry.type.upper():<7} {entry.message}"
    if entry.details:
        line += f" ({entry.details})"
    return line

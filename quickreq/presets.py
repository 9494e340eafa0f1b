"""quickreq presets - predefined requests offered for one-step loading."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

import yaml

from quickreq.i18n import translate as _default_translate
from quickreq.models import RequestData


@dataclass
class Preset:
    name: str
    request: RequestData
    description: str = ""


BUILTIN_PRESETS = [
    {
        "name_key": "anthropicChat",
        "url": "https://api.anthropic.com/v1/messages",
        "method": "POST",
        "headers": {
            "Content-Type": "application/json",
            "anthropic-version": "2023-06-01",
        },
        "body": {
            "model": "claude-3-opus-20240229",
            "messages": [{"role": "user", "content": "Hello, Claude!"}],
            "max_tokens": 1024,
        },
    },
    {
        "name_key": "jsonPlaceholder",
        "url": "https://jsonplaceholder.typicode.com/posts",
        "method": "GET",
        "headers": {"Content-Type": "application/json"},
        "body": "",
    },
    {
        "name_key": "httpBin",
        "url": "https://httpbin.org/anything",
        "method": "POST",
        "headers": {"Content-Type": "application/json"},
        "body": {"test": True},
    },
]


def _body_text(body) -> str:
    if body is None:
        return ""
    if isinstance(body, dict | list):
        return json.dumps(body, indent=2)
    return str(body)


def preset_from_dict(data: dict, name: str) -> Preset:
    headers = data.get("headers") or {}
    request = RequestData(
        url=data.get("url", "") or "",
        method=(data.get("method") or "GET").upper(),
        headers={str(k): str(v) for k, v in headers.items()},
        body=_body_text(data.get("body")),
    )
    return Preset(name=name, request=request, description=data.get("description", "") or "")


def builtin_presets(translate: Callable[..., str] = _default_translate) -> list[Preset]:
    return [preset_from_dict(p, translate(p["name_key"])) for p in BUILTIN_PRESETS]


def read_preset_file(path: Path) -> Preset | None:
    """Read one preset YAML file. The name defaults to the file stem."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError):
        return None
    if not isinstance(data, dict):
        return None
    return preset_from_dict(data, str(data.get("name") or path.stem))


def load_user_presets(presets_dir: Path | None) -> list[Preset]:
    if not presets_dir or not presets_dir.is_dir():
        return []
    presets: list[Preset] = []
    for f in sorted(presets_dir.iterdir()):
        if f.suffix in (".yaml", ".yml") and f.is_file():
            preset = read_preset_file(f)
            if preset:
                presets.append(preset)
    return presets


def list_presets(
    presets_dir: Path | None = None,
    translate: Callable[..., str] = _default_translate,
) -> list[Preset]:
    """Built-in presets followed by the user's preset files."""
    return builtin_presets(translate) + load_user_presets(presets_dir)


def find_preset(name: str, presets: list[Preset]) -> Preset | None:
    """Match by name, case-insensitively."""
    wanted = name.strip().lower()
    for preset in presets:
        if preset.name.lower() == wanted:
            return preset
    return None

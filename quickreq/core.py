"""quickreq core - config loading, env resolution, header parsing."""

from __future__ import annotations

import json
import os
import re
from pathlib import Path

import yaml
from dotenv import dotenv_values

GLOBAL_DIR = Path.home() / ".quickreq"
GLOBAL_CONFIG = GLOBAL_DIR / "config.yaml"
GLOBAL_DATA_DIR = GLOBAL_DIR / "data"

CWD_CONFIG_CANDIDATES = [
    ".quickreq.yaml",
    ".quickreq.yml",
    "quickreq.yaml",
    "quickreq.yml",
]


def resolve_path(
    candidates: list[Path],
    default: Path | None = None,
) -> Path | None:
    """Return the first existing path from candidates, else default."""
    for p in candidates:
        if p.exists():
            return p.resolve()
    return default


def resolve_config_path(config_file: str | None) -> Path | None:
    """Find the config file to use.

    Resolution order:
      1. Explicit -c flag (no fallthrough if missing)
      2. .quickreq.yaml (variants) in CWD
      3. ~/.quickreq/config.yaml
    """
    if config_file:
        return resolve_path([Path(config_file)])
    return resolve_path([Path(c) for c in CWD_CONFIG_CANDIDATES] + [GLOBAL_CONFIG])


def load_config(config_path: str | Path | None) -> dict:
    """Load YAML config file. Returns empty defaults if not found.

    Stores '_config_dir' in the returned dict so relative directories in
    the config resolve against the config file's location.
    """
    if config_path is None:
        return {"defaults": {}, "_config_dir": None}
    path = Path(config_path)
    if not path.exists():
        return {"defaults": {}, "_config_dir": None}
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    return {
        "defaults": data.get("defaults") or {},
        "_config_dir": path.resolve().parent,
    }


def load_env(env_file: str | None, base_dir: str | Path = ".") -> dict[str, str]:
    """Load .env file and merge it over os.environ."""
    env = dict(os.environ)
    if env_file:
        dotenv_path = Path(base_dir) / env_file
        if dotenv_path.exists():
            dotenv_vars = dotenv_values(str(dotenv_path))
            env.update({k: v for k, v in dotenv_vars.items() if v is not None})
    return env


def resolve_value(value: str | None, env: dict[str, str]) -> str | None:
    """Resolve $VAR and ${VAR} references in a string value.

    Unknown variables are left as written.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        return value

    def _replace(m: re.Match) -> str:
        var_name = m.group(1) or m.group(2)
        return env.get(var_name, os.environ.get(var_name, m.group(0)))

    return re.sub(r"\$\{([^}]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)", _replace, value)


def _config_relative(value: str, config: dict) -> Path:
    p = Path(value).expanduser()
    config_dir = config.get("_config_dir")
    if not p.is_absolute() and config_dir:
        p = Path(config_dir) / p
    return p


def resolve_data_dir(cli_override: str | None, config: dict) -> Path:
    """Directory holding the persisted collections.

    Resolution order:
      1. --data-dir flag (relative to CWD)
      2. data_dir from config (relative to the config file)
      3. ~/.quickreq/data/
    """
    if cli_override:
        return Path(cli_override).expanduser()
    value = config.get("defaults", {}).get("data_dir")
    if value:
        return _config_relative(str(value), config)
    return GLOBAL_DATA_DIR


def resolve_presets_dir(config: dict) -> Path | None:
    """presets_dir from config (relative to the config file), then ./presets/."""
    value = config.get("defaults", {}).get("presets_dir")
    if value:
        return _config_relative(str(value), config)
    return resolve_path([Path("presets"), GLOBAL_DIR / "presets"])


def parse_headers_text(text: str) -> dict[str, str] | None:
    """Parse a JSON object of header names to values.

    Returns None when the text is not valid JSON or not an object of
    scalar values; the caller keeps its previous headers in that case.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict):
        return None
    headers: dict[str, str] = {}
    for k, v in data.items():
        if isinstance(v, dict | list):
            return None
        headers[str(k)] = "" if v is None else str(v)
    return headers


def parse_header_args(header_tuples) -> dict[str, str]:
    """Parse -H 'Name: Value' tuples into a dict."""
    headers = {}
    for h in header_tuples:
        if ":" in h:
            k, v = h.split(":", 1)
            headers[k.strip()] = v.strip()
    return headers

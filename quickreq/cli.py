"""quickreq CLI - compose, send and keep HTTP requests."""

import sys

import click

from quickreq.transfer import EXPORT_FILENAME

TOOL_HELP = """\
quickreq: lightweight HTTP request composer and tester.

Builds a request, sends it, shows the JSON response, and keeps a local
library of saved requests, request history and API keys.

\b
SENDING
───────
  quickreq GET https://jsonplaceholder.typicode.com/posts/1
  quickreq POST https://httpbin.org/anything -b '{"test": true}'
  quickreq PUT https://example.com/api/items/1 -H "Authorization: Bearer x" -b '{...}'

  Supported methods: GET, POST, PUT, DELETE, PATCH.
  The body is never sent with GET. Responses must be JSON.
  Every response (any status) is added to the history (50 most recent).

\b
STARTING POINTS
───────────────
  quickreq --preset "HTTPBin Test"     Send a preset
  quickreq --load 0                    Send saved request 0 (or --load NAME)
  quickreq --replay 0                  Send history entry 0 again
  Positional METHOD/URL, -H and -b edit the loaded request before sending.

\b
SAVED REQUESTS
──────────────
  quickreq POST https://api.example.com/x -b '{...}' --save "create x"
  quickreq --list
  quickreq --delete-saved 0

\b
HISTORY
───────
  quickreq --history
  quickreq --delete-history 0

\b
API KEYS
────────
  quickreq --add-key work --api-key sk-...      Save a key (plaintext)
  quickreq --keys [--reveal]                    List keys (masked)
  quickreq --key work --preset "Anthropic Chat" Use a saved key
  quickreq --delete-key 0

  The active key is copied into vendor headers by URL rule, e.g.
  anthropic.com -> x-api-key. Add rules in config (credential_headers).

\b
IMPORT / EXPORT
───────────────
  quickreq --export                 Write api-requests-export.json
  quickreq --export backup.json
  quickreq --import backup.json     Replaces saved requests / history

  API keys are never exported.

\b
CONFIG FILE (.quickreq.yaml)
────────────────────────────
  Resolution order:
    1. -c/--config flag
    2. .quickreq.yaml / .quickreq.yml / quickreq.yaml / quickreq.yml in CWD
    3. ~/.quickreq/config.yaml

  \b
  defaults:
    data_dir: ~/.quickreq/data      # where collections are stored
    language: en                    # en | nl
    timeout: 30                     # seconds; omit for no timeout
    env_file: .env
    api_key: ${ANTHROPIC_API_KEY}
    headers:
      Content-Type: application/json
    presets_dir: presets
    credential_headers:
      - pattern: api.openai.com
        header: Authorization
"""


@click.command(
    cls=click.Command,
    help=TOOL_HELP,
    context_settings={"max_content_width": 88},
)
@click.argument("method", required=False)
@click.argument("url", required=False)
@click.option(
    "-H",
    "--header",
    multiple=True,
    help="HTTP header as 'Name: Value'. Repeatable.",
)
@click.option("-b", "--body", default=None, help="Request body text (ignored for GET).")
@click.option(
    "-c",
    "--config",
    "config_file",
    default=None,
    help="Config file path. Default: .quickreq.yaml in CWD, then ~/.quickreq/config.yaml.",
)
@click.option("--data-dir", "data_dir", default=None, help="Override the data directory.")
@click.option("--lang", default=None, help="Message language: en or nl.")
@click.option("--preset", "preset_name", default=None, metavar="NAME", help="Start from a preset.")
@click.option(
    "--load",
    "load_ref",
    default=None,
    metavar="INDEX|NAME",
    help="Start from a saved request.",
)
@click.option("--replay", type=int, default=None, metavar="INDEX", help="Start from a history entry.")
@click.option("--save", "save_name", default=None, metavar="NAME", help="Save the request instead of sending it.")
@click.option("--key", "key_ref", default=None, metavar="INDEX|NAME", help="Activate a saved API key.")
@click.option("--api-key", "api_key", default=None, help="Set the active API key.")
@click.option("--add-key", "add_key_name", default=None, metavar="NAME", help="Save the active API key as NAME.")
@click.option("--list", "show_saved", is_flag=True, default=False, help="List saved requests.")
@click.option("--history", "show_history", is_flag=True, default=False, help="Show request history.")
@click.option("--keys", "show_keys", is_flag=True, default=False, help="List saved API keys.")
@click.option("--reveal", is_flag=True, default=False, help="Show API keys unmasked.")
@click.option(
    "--list-presets",
    "show_presets",
    is_flag=True,
    default=False,
    help="List available presets.",
)
@click.option("--delete-saved", type=int, default=None, metavar="INDEX", help="Delete a saved request.")
@click.option("--delete-history", type=int, default=None, metavar="INDEX", help="Delete a history entry.")
@click.option("--delete-key", type=int, default=None, metavar="INDEX", help="Delete a saved API key.")
@click.option(
    "--export",
    "export_path",
    is_flag=False,
    flag_value=EXPORT_FILENAME,
    default=None,
    metavar="[FILE]",
    help=f"Export saved requests and history. Default file: {EXPORT_FILENAME}.",
)
@click.option("--import", "import_path", default=None, metavar="FILE", help="Import an export file.")
@click.option("--verbose", is_flag=True, default=False, help="Include response headers in output.")
@click.option("--raw", is_flag=True, default=False, help="Output the JSON body only.")
@click.option("--show-log", is_flag=True, default=False, help="Print this session's event log at the end.")
def main(
    method,
    url,
    header,
    body,
    config_file,
    data_dir,
    lang,
    preset_name,
    load_ref,
    replay,
    save_name,
    key_ref,
    api_key,
    add_key_name,
    show_saved,
    show_history,
    show_keys,
    reveal,
    show_presets,
    delete_saved,
    delete_history,
    delete_key,
    export_path,
    import_path,
    verbose,
    raw,
    show_log,
):
    """Compose, send and keep HTTP requests."""
    from quickreq.app import App
    from quickreq.core import load_config, resolve_config_path

    config_path = resolve_config_path(config_file)
    config = load_config(config_path)
    app = App.from_config(config, data_dir_override=data_dir, lang=lang)

    code = _dispatch(
        app,
        config,
        method=method,
        url=url,
        header=header,
        body=body,
        preset_name=preset_name,
        load_ref=load_ref,
        replay=replay,
        save_name=save_name,
        key_ref=key_ref,
        api_key=api_key,
        add_key_name=add_key_name,
        show_saved=show_saved,
        show_history=show_history,
        show_keys=show_keys,
        reveal=reveal,
        show_presets=show_presets,
        delete_saved=delete_saved,
        delete_history=delete_history,
        delete_key=delete_key,
        export_path=export_path,
        import_path=import_path,
        verbose=verbose,
        raw=raw,
    )

    if show_log:
        _print_log(app)
    if code:
        sys.exit(code)


def _dispatch(app, config, **opts) -> int:
    """Run the requested action. Returns the process exit code."""
    if opts["api_key"] is not None:
        app.set_api_key(opts["api_key"])

    if opts["key_ref"] is not None:
        index = _resolve_ref(app.api_keys, opts["key_ref"])
        if index is None:
            click.echo(f"ERROR: No saved API key '{opts['key_ref']}'. Use --keys to list.", err=True)
            return 1
        app.load_api_key(index)

    if opts["show_presets"]:
        return _cmd_list_presets(app, config)
    if opts["show_saved"]:
        return _cmd_list_saved(app)
    if opts["show_history"]:
        return _cmd_history(app)
    if opts["show_keys"]:
        return _cmd_list_keys(app, opts["reveal"])

    if opts["delete_saved"] is not None:
        return _cmd_delete(app.delete_saved_request, opts["delete_saved"], "--list")
    if opts["delete_history"] is not None:
        return _cmd_delete(app.delete_history_entry, opts["delete_history"], "--history")
    if opts["delete_key"] is not None:
        return _cmd_delete(app.delete_api_key, opts["delete_key"], "--keys")

    if opts["add_key_name"] is not None:
        return _cmd_add_key(app, opts["add_key_name"])

    if opts["export_path"] is not None:
        return _cmd_export(app, opts["export_path"])
    if opts["import_path"] is not None:
        return _cmd_import(app, opts["import_path"])

    seeded = any(
        opts[k] is not None for k in ("preset_name", "load_ref", "replay")
    )
    if not seeded and not opts["method"] and not opts["url"]:
        ctx = click.get_current_context()
        click.echo(ctx.get_help())
        return 1

    code = _compose(app, config, opts)
    if code:
        return code

    if opts["save_name"] is not None:
        return _cmd_save(app, opts["save_name"])

    return _cmd_send(app, opts["verbose"], opts["raw"])


# ── Subcommand implementations ──────────────────────────────────────────


def _compose(app, config, opts) -> int:
    """Seed the request model, then apply METHOD/URL/-H/-b edits."""
    from quickreq.core import parse_header_args, resolve_presets_dir
    from quickreq.library import Outcome
    from quickreq.models import METHODS
    from quickreq.presets import find_preset, list_presets

    if opts["preset_name"] is not None:
        presets = list_presets(resolve_presets_dir(config), app.t)
        preset = find_preset(opts["preset_name"], presets)
        if preset is None:
            click.echo(
                f"ERROR: Preset '{opts['preset_name']}' not found. Use --list-presets.",
                err=True,
            )
            return 1
        app.load_preset(preset)
    elif opts["load_ref"] is not None:
        index = _resolve_ref(app.saved_requests, opts["load_ref"])
        if index is None or app.load_saved_request(index) is Outcome.SKIPPED:
            click.echo(f"ERROR: No saved request '{opts['load_ref']}'. Use --list.", err=True)
            return 1
    elif opts["replay"] is not None:
        if app.load_history_entry(opts["replay"]) is Outcome.SKIPPED:
            click.echo(f"ERROR: Invalid index {opts['replay']}. Use --history to list.", err=True)
            return 1

    method, url = opts["method"], opts["url"]
    # a lone positional that isn't a method is the URL
    if method and not url and method.upper() not in METHODS:
        method, url = None, method

    if method and app.set_method(method) is Outcome.SKIPPED:
        click.echo(
            f"ERROR: Unsupported method '{method}'. Use one of: {', '.join(METHODS)}.",
            err=True,
        )
        return 1
    if url:
        app.set_url(url)
    for name, value in parse_header_args(opts["header"]).items():
        app.set_header(name, value)
    if opts["body"] is not None:
        app.set_body(opts["body"])
    return 0


def _cmd_send(app, verbose, raw) -> int:
    from quickreq.output import format_response

    result = app.send()
    if result.error is not None:
        error = result.error
        text = app.t(error.key) if error.key else error.message
        click.echo(f"ERROR: {text}", err=True)
        return 1
    click.echo(format_response(result.response, verbose=verbose, raw=raw))
    return 0


def _cmd_save(app, name) -> int:
    from quickreq.library import Outcome

    if app.save_request(name) is Outcome.SKIPPED:
        click.echo("ERROR: A name is required to save a request.", err=True)
        return 1
    click.echo(f'Saved "{name}" ({app.request.method} {app.request.url})')
    return 0


def _cmd_list_saved(app) -> int:
    from quickreq.output import format_saved_requests

    entries = app.saved_requests.list()
    if not entries:
        click.echo(app.t("noSavedRequests"))
        return 0
    click.echo(f"{app.t('savedRequests')}:\n")
    for line in format_saved_requests(entries):
        click.echo(line)
    return 0


def _cmd_history(app) -> int:
    from quickreq.output import format_history

    entries = app.history.list()
    if not entries:
        click.echo(app.t("noHistory"))
        return 0
    click.echo(f"{app.t('requestHistory')}:\n")
    for line in format_history(entries):
        click.echo(line)
    return 0


def _cmd_list_keys(app, reveal) -> int:
    from quickreq.output import format_api_keys

    entries = app.api_keys.list()
    if not entries:
        click.echo(app.t("noApiKeys"))
        return 0
    click.echo(f"{app.t('apiKeys')}:\n")
    for line in format_api_keys(entries, reveal=reveal):
        click.echo(line)
    return 0


def _cmd_list_presets(app, config) -> int:
    from quickreq.core import resolve_presets_dir
    from quickreq.output import format_presets
    from quickreq.presets import list_presets

    presets = list_presets(resolve_presets_dir(config), app.t)
    click.echo(f"{app.t('apiPresets')}:\n")
    for line in format_presets(presets):
        click.echo(line)
    return 0


def _cmd_delete(delete_fn, index, list_flag) -> int:
    from quickreq.library import Outcome

    if delete_fn(index) is Outcome.SKIPPED:
        click.echo(f"ERROR: Invalid index {index}. Use {list_flag} to list.", err=True)
        return 1
    click.echo(f"Deleted [{index}]")
    return 0


def _cmd_add_key(app, name) -> int:
    from quickreq.library import Outcome

    if app.save_api_key(name) is Outcome.SKIPPED:
        click.echo("ERROR: --add-key needs a name and an API key (--api-key).", err=True)
        return 1
    click.echo(f'API key saved as "{name}"')
    return 0


def _cmd_export(app, path) -> int:
    written = app.export_to(path)
    click.echo(f"Exported to {written}")
    return 0


def _cmd_import(app, path) -> int:
    result = app.import_file(path)
    if not result.ok:
        click.echo(
            f"ERROR: {app.t('importFailed')}: {app.t('invalidFileFormat')}",
            err=True,
        )
        return 1
    doc = result.document
    parts = []
    if doc.saved_requests is not None:
        parts.append(f"{len(doc.saved_requests)} saved")
    if doc.request_history is not None:
        parts.append(f"{len(doc.request_history)} history")
    summary = ", ".join(parts) if parts else "nothing to replace"
    click.echo(f"Imported {summary}")
    return 0


# ── Helpers ──────────────────────────────────────────────────────────────


def _resolve_ref(manager, ref) -> int | None:
    """Turn an INDEX|NAME reference into an index into manager's collection."""
    ref = str(ref).strip()
    if ref.isdigit():
        index = int(ref)
        return index if 0 <= index < len(manager) else None
    return manager.index_of(ref)


def _print_log(app) -> None:
    from quickreq.output import format_log_entry

    click.echo(f"\n{app.t('requestLogs')}:", err=True)
    for entry in app.log.entries():
        click.echo(f"  {format_log_entry(entry)}", err=True)

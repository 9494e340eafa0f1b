"""quickreq app - the application context.

One ``App`` owns the active request, the active credential, the last
response, the event log and the three persisted collections. Collections
are read from the store once, when the App is built, and written back in
full after every change.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from quickreq import executor
from quickreq.core import (
    load_env,
    parse_headers_text,
    resolve_data_dir,
    resolve_value,
)
from quickreq.credentials import DEFAULT_RULES, CredentialRule, apply_credential, rules_from_config
from quickreq.errors import ExecutionError, ImportFormatError
from quickreq.events import LogRecorder
from quickreq.executor import ExecutionResult
from quickreq.i18n import Translator
from quickreq.library import Outcome, RequestHistory, SavedApiKeys, SavedRequests
from quickreq.models import DEFAULT_HEADERS, METHODS, RequestData, ResponseData
from quickreq.presets import Preset
from quickreq.store import Store
from quickreq.transfer import ImportResult, dumps_export, parse_import, read_import, write_export


class App:
    def __init__(
        self,
        store: Store,
        translate: Callable[..., str] | None = None,
        rules: list[CredentialRule] | None = None,
        timeout: float | None = None,
        default_headers: dict[str, str] | None = None,
        api_key: str = "",
    ):
        self.store = store
        self.t = translate or Translator()
        self.log = LogRecorder(clear_message=self.t("logsCleared"))
        self.saved_requests = SavedRequests(store, self.log, self.t)
        self.history = RequestHistory(store, self.log, self.t)
        self.api_keys = SavedApiKeys(store, self.log, self.t)
        self.rules = list(rules) if rules is not None else list(DEFAULT_RULES)
        self.timeout = timeout
        headers = DEFAULT_HEADERS if default_headers is None else default_headers
        self.request = RequestData(headers=dict(headers))
        self.api_key = api_key or ""
        self.response: ResponseData | None = None
        self.last_error: ExecutionError | None = None
        self.loading = False

    @classmethod
    def from_config(
        cls,
        config: dict,
        data_dir_override: str | None = None,
        lang: str | None = None,
    ) -> App:
        """Build an App from a loaded config dict (see core.load_config)."""
        defaults = config.get("defaults", {})
        base_dir = config.get("_config_dir") or "."
        env = load_env(defaults.get("env_file"), base_dir)
        data_dir = resolve_data_dir(data_dir_override, config)
        headers = defaults.get("headers")
        if headers is not None:
            headers = {str(k): str(resolve_value(v, env)) for k, v in headers.items()}
        return cls(
            Store(data_dir),
            translate=Translator(lang or defaults.get("language")),
            rules=rules_from_config(defaults.get("credential_headers")),
            timeout=defaults.get("timeout") or None,
            default_headers=headers,
            api_key=resolve_value(defaults.get("api_key"), env) or "",
        )

    # ── request model ────────────────────────────────────────────────

    def _mirror_credential(self, overwrite_empty: bool = False) -> None:
        apply_credential(self.request, self.api_key, self.rules, overwrite_empty=overwrite_empty)

    def set_url(self, url: str) -> None:
        self.request.url = url
        self._mirror_credential()

    def set_method(self, method: str) -> Outcome:
        method = (method or "").upper()
        if method not in METHODS:
            return Outcome.SKIPPED
        self.request.method = method
        return Outcome.DONE

    def set_body(self, body: str) -> None:
        self.request.body = body or ""

    def set_header(self, name: str, value: str) -> None:
        self.request.headers[name] = value

    def remove_header(self, name: str) -> Outcome:
        if name not in self.request.headers:
            return Outcome.SKIPPED
        del self.request.headers[name]
        return Outcome.DONE

    def set_headers_text(self, text: str) -> Outcome:
        """Replace the header map from JSON text, keeping the old map if it doesn't parse."""
        headers = parse_headers_text(text)
        if headers is None:
            return Outcome.SKIPPED
        self.request.headers = headers
        return Outcome.DONE

    def set_request(self, request: RequestData) -> None:
        self.request = request.copy()

    def set_api_key(self, key: str) -> None:
        self.api_key = key or ""
        self._mirror_credential(overwrite_empty=True)

    def load_preset(self, preset: Preset) -> None:
        self.request = preset.request.copy()
        self._mirror_credential()
        self.log.info(f"{self.t('presetLoaded')}: {preset.name}")

    # ── execution ────────────────────────────────────────────────────

    def send(self) -> ExecutionResult:
        """Execute the active request.

        On a response (any status): stores it, appends a history snapshot,
        logs success for status < 400 and error otherwise. On failure: logs
        the error and leaves history alone.
        """
        request = self.request.copy()
        self.log.info(self.t("sendingRequest", {"method": request.method, "url": request.url}))
        self.loading = True
        try:
            result = executor.execute_request(request, timeout=self.timeout)
        finally:
            self.loading = False

        if result.error is not None:
            error = result.error
            self.last_error = error
            text = self.t(error.key) if error.key else error.message
            message = text if error.kind == "validation" else self.t("requestFailed")
            self.log.error(message, text)
            return result

        response = result.response
        self.response = response
        self.last_error = None
        self.history.record(request)
        self.log.record(
            "success" if response.ok else "error",
            self.t(
                "responseReceived",
                {"status": str(response.status), "statusText": response.status_text},
            ),
            f"Time: {response.time}ms",
        )
        return result

    # ── collections ──────────────────────────────────────────────────

    def save_request(self, name: str) -> Outcome:
        return self.saved_requests.save(name, self.request)

    def load_saved_request(self, index: int) -> Outcome:
        entry = self.saved_requests.load(index)
        if entry is None:
            return Outcome.SKIPPED
        self.request = entry.request
        return Outcome.DONE

    def delete_saved_request(self, index: int) -> Outcome:
        return self.saved_requests.remove(index)

    def load_history_entry(self, index: int) -> Outcome:
        entry = self.history.load(index)
        if entry is None:
            return Outcome.SKIPPED
        self.request = entry.request
        return Outcome.DONE

    def delete_history_entry(self, index: int) -> Outcome:
        return self.history.remove(index)

    def save_api_key(self, name: str) -> Outcome:
        """Save the active credential under ``name``."""
        return self.api_keys.save(name, self.api_key)

    def load_api_key(self, index: int) -> Outcome:
        entry = self.api_keys.load(index)
        if entry is None:
            return Outcome.SKIPPED
        self.set_api_key(entry.key)
        return Outcome.DONE

    def delete_api_key(self, index: int) -> Outcome:
        return self.api_keys.remove(index)

    # ── import / export ──────────────────────────────────────────────

    def export_document(self) -> str:
        text = dumps_export(self.saved_requests.list(), self.history.list())
        self.log.success(self.t("requestsExported"))
        return text

    def export_to(self, path: str | Path) -> Path:
        return write_export(self.export_document(), path)

    def import_document(self, text: str) -> ImportResult:
        """Replace saved requests and/or history from an export document.

        Collections missing from the document stay as they are. On a parse
        failure nothing changes.
        """
        try:
            document = parse_import(text)
        except ImportFormatError as e:
            self.log.error(self.t("importFailed"), self.t("invalidFileFormat"))
            return ImportResult(error=e)
        if document.saved_requests is not None:
            self.saved_requests.replace_all(document.saved_requests)
        if document.request_history is not None:
            self.history.replace_all(document.request_history)
        self.log.success(self.t("requestsImported"))
        return ImportResult(document=document)

    def import_file(self, path: str | Path) -> ImportResult:
        try:
            text = read_import(path)
        except (OSError, UnicodeDecodeError) as e:
            self.log.error(self.t("importFailed"), self.t("invalidFileFormat"))
            return ImportResult(error=ImportFormatError(str(e), key="invalidFileFormat"))
        return self.import_document(text)

    def clear_logs(self) -> None:
        self.log.clear()

"""Scenario tests for the application context."""

from unittest.mock import patch

import requests

from quickreq import executor
from quickreq.app import App
from quickreq.credentials import CredentialRule
from quickreq.errors import NetworkError, ParseError, ValidationError
from quickreq.i18n import Translator
from quickreq.library import Outcome
from quickreq.models import RequestData
from quickreq.presets import builtin_presets
from tests.conftest import FakeResponse, make_result, not_json


class TestSend:
    def test_post_ok(self, app, monkeypatch):
        monkeypatch.setattr(executor.requests, "request", lambda **kw: FakeResponse(200, {"ok": True}))
        app.set_method("POST")
        app.set_url("https://api.example.com/items")
        app.set_body('{"name": "x"}')

        result = app.send()

        assert result.response.status == 200
        assert result.response.data == {"ok": True}
        assert app.response is result.response
        successes = [e for e in app.log.entries() if e.type == "success"]
        assert len(successes) == 1
        assert successes[0].message == "Response received (200 OK)"
        assert successes[0].details.startswith("Time: ")
        history = app.history.list()
        assert len(history) == 1
        assert history[0].request.method == "POST"
        assert history[0].request.body == '{"name": "x"}'

    def test_unreachable_host(self, app, monkeypatch):
        def fake_request(**kwargs):
            raise requests.exceptions.ConnectionError("Failed to resolve host")

        monkeypatch.setattr(executor.requests, "request", fake_request)
        app.set_url("http://unreachable.invalid")

        result = app.send()

        assert isinstance(result.error, NetworkError)
        assert app.last_error is result.error
        entry = app.log.entries()[0]
        assert entry.type == "error"
        assert entry.message == "Request failed"
        assert "Failed to resolve host" in entry.details
        assert app.history.list() == []

    def test_non_latin1_header_logged_as_failure(self, app):
        app.set_url("http://127.0.0.1:9/")
        app.set_header("X-Note", "\u20ac uro")

        result = app.send()

        assert isinstance(result.error, NetworkError)
        assert app.loading is False
        assert app.log.entries()[0].type == "error"
        assert app.history.list() == []

    def test_empty_url(self, app):
        with patch("quickreq.executor.requests.request") as mock_request:
            result = app.send()
        mock_request.assert_not_called()
        assert isinstance(result.error, ValidationError)
        entry = app.log.entries()[0]
        assert entry.type == "error"
        assert entry.message == "URL is required"
        assert app.history.list() == []

    def test_sending_entry_logged_first(self, app):
        with patch("quickreq.executor.execute_request", return_value=make_result(data={})):
            app.set_url("http://x")
            app.send()
        messages = [e.message for e in app.log.entries()]
        assert messages[-1] == "Sending GET request to http://x"

    def test_client_error_status_logged_as_error_but_kept(self, app):
        with patch(
            "quickreq.executor.execute_request",
            return_value=make_result(status=404, status_text="Not Found", data={"error": "x"}),
        ):
            app.set_url("http://x/missing")
            result = app.send()
        assert result.ok
        assert app.log.entries()[0].type == "error"
        assert app.log.entries()[0].message == "Response received (404 Not Found)"
        assert len(app.history) == 1

    def test_redirect_status_logged_as_success(self, app):
        with patch("quickreq.executor.execute_request", return_value=make_result(status=304, data={})):
            app.set_url("http://x")
            app.send()
        assert app.log.entries()[0].type == "success"

    def test_parse_error_leaves_history(self, app, monkeypatch):
        monkeypatch.setattr(executor.requests, "request", lambda **kw: FakeResponse(200, not_json()))
        app.set_url("http://x")
        result = app.send()
        assert isinstance(result.error, ParseError)
        assert app.history.list() == []
        assert app.response is None

    def test_history_snapshot_is_independent(self, app):
        with patch("quickreq.executor.execute_request", return_value=make_result(data={})):
            app.set_url("http://x")
            app.send()
        app.set_header("X-After", "1")
        assert "X-After" not in app.history.get(0).request.headers

    def test_timeout_passed_to_executor(self, store):
        app = App(store, timeout=7)
        with patch("quickreq.executor.execute_request", return_value=make_result(data={})) as mock_exec:
            app.set_url("http://x")
            app.send()
        _, kwargs = mock_exec.call_args
        assert kwargs["timeout"] == 7

    def test_loading_flag_reset(self, app):
        with patch("quickreq.executor.execute_request", return_value=make_result(data={})):
            app.set_url("http://x")
            app.send()
        assert app.loading is False


class TestRequestModel:
    def test_defaults(self, app):
        assert app.request == RequestData(url="", method="GET", headers={"Content-Type": "application/json"}, body="")

    def test_get_keeps_body(self, app):
        app.set_method("POST")
        app.set_body("{}")
        app.set_method("GET")
        assert app.request.body == "{}"

    def test_url_change_keeps_headers(self, app):
        app.set_header("X-Custom", "1")
        app.set_url("http://other")
        assert app.request.headers["X-Custom"] == "1"

    def test_invalid_method_skipped(self, app):
        assert app.set_method("TRACE") is Outcome.SKIPPED
        assert app.request.method == "GET"

    def test_invalid_headers_text_keeps_previous(self, app):
        assert app.set_headers_text('{"X-A": "1"') is Outcome.SKIPPED
        assert app.request.headers == {"Content-Type": "application/json"}
        assert app.set_headers_text('["not", "an", "object"]') is Outcome.SKIPPED
        assert app.set_headers_text('{"X-A": "1"}') is Outcome.DONE
        assert app.request.headers == {"X-A": "1"}

    def test_remove_header(self, app):
        assert app.remove_header("Content-Type") is Outcome.DONE
        assert app.remove_header("Content-Type") is Outcome.SKIPPED


class TestCredentialMirroring:
    def test_key_then_url(self, app):
        app.set_header("Authorization", "keep")
        app.set_api_key("sk-ant-1")
        app.set_url("https://api.anthropic.com/v1/messages")
        assert app.request.headers["x-api-key"] == "sk-ant-1"
        assert app.request.headers["Authorization"] == "keep"

    def test_url_then_key(self, app):
        app.set_url("https://api.anthropic.com/v1/messages")
        assert "x-api-key" not in app.request.headers
        app.set_api_key("sk-ant-2")
        assert app.request.headers["x-api-key"] == "sk-ant-2"

    def test_other_domains_untouched(self, app):
        app.set_api_key("sk-ant-1")
        app.set_url("https://example.com")
        assert "x-api-key" not in app.request.headers

    def test_clearing_key_blanks_header(self, app):
        app.set_api_key("sk-ant-1")
        app.set_url("https://api.anthropic.com/v1/messages")
        app.set_api_key("")
        assert app.request.headers["x-api-key"] == ""

    def test_clearing_key_elsewhere_adds_nothing(self, app):
        app.set_url("https://example.com")
        app.set_api_key("")
        assert "x-api-key" not in app.request.headers

    def test_custom_rule(self, store):
        app = App(store, rules=[CredentialRule("api.openai.com", "Authorization")])
        app.set_api_key("sk-oa")
        app.set_url("https://api.openai.com/v1/chat")
        assert app.request.headers["Authorization"] == "sk-oa"

    def test_loading_saved_key_mirrors(self, app):
        app.set_api_key("sk-saved")
        app.save_api_key("work")
        app.set_api_key("")
        app.set_url("https://api.anthropic.com/v1/messages")
        assert app.load_api_key(0) is Outcome.DONE
        assert app.api_key == "sk-saved"
        assert app.request.headers["x-api-key"] == "sk-saved"
        assert app.log.entries()[0].message == "Loaded API key: work"

    def test_preset_gets_key(self, app):
        app.set_api_key("sk-preset")
        anthropic = builtin_presets()[0]
        app.load_preset(anthropic)
        assert app.request.headers["x-api-key"] == "sk-preset"
        assert app.request.headers["anthropic-version"] == "2023-06-01"
        assert app.log.entries()[0].message == "Loaded preset: Anthropic Chat"
        # preset itself untouched
        assert "x-api-key" not in anthropic.request.headers


class TestSavedRequestFlow:
    def test_load_is_deep_equal_and_independent(self, app):
        app.set_method("PUT")
        app.set_url("http://x/1")
        app.set_header("X-A", "1")
        app.set_body("{}")
        app.save_request("put one")
        stored = app.saved_requests.get(0).request

        app.set_request(RequestData())
        assert app.load_saved_request(0) is Outcome.DONE
        assert app.request == stored

        app.set_header("X-A", "changed")
        app.set_url("http://elsewhere")
        assert app.saved_requests.get(0).request == stored

    def test_save_with_empty_name_skipped(self, app):
        assert app.save_request("") is Outcome.SKIPPED
        assert len(app.log) == 0

    def test_load_out_of_range(self, app):
        assert app.load_saved_request(3) is Outcome.SKIPPED
        assert app.load_history_entry(0) is Outcome.SKIPPED
        assert app.load_api_key(0) is Outcome.SKIPPED

    def test_delete(self, app):
        app.set_url("http://x")
        app.save_request("x")
        assert app.delete_saved_request(0) is Outcome.DONE
        assert app.delete_saved_request(0) is Outcome.SKIPPED

    def test_replay_from_history(self, app):
        with patch("quickreq.executor.execute_request", return_value=make_result(data={})):
            app.set_url("http://first")
            app.send()
        app.set_url("http://second")
        assert app.load_history_entry(0) is Outcome.DONE
        assert app.request.url == "http://first"


class TestLogs:
    def test_clear(self, app):
        app.set_url("http://x")
        app.save_request("x")
        app.clear_logs()
        entries = app.log.entries()
        assert len(entries) == 1
        assert entries[0].message == "Logs cleared"

    def test_dutch_messages(self, store):
        app = App(store, translate=Translator("nl"))
        app.send()
        assert app.log.entries()[0].message == "URL is verplicht"
        app.clear_logs()
        assert app.log.entries()[0].message == "Logs gewist"


class TestFromConfig:
    def test_uses_config_values(self, tmp_path, monkeypatch):
        monkeypatch.setenv("QR_TEST_KEY", "sk-env")
        config = {
            "defaults": {
                "data_dir": "store",
                "language": "nl",
                "timeout": 12,
                "api_key": "${QR_TEST_KEY}",
                "headers": {"Accept": "application/json"},
                "credential_headers": [{"pattern": "example.org", "header": "X-Key"}],
            },
            "_config_dir": tmp_path,
        }
        app = App.from_config(config)
        assert app.store.data_dir == tmp_path / "store"
        assert app.t("logsCleared") == "Logs gewist"
        assert app.timeout == 12
        assert app.api_key == "sk-env"
        assert app.request.headers == {"Accept": "application/json"}
        app.set_url("https://example.org/x")
        assert app.request.headers["X-Key"] == "sk-env"

    def test_overrides(self, tmp_path):
        config = {"defaults": {"language": "nl"}, "_config_dir": None}
        app = App.from_config(config, data_dir_override=str(tmp_path / "d"), lang="en")
        assert app.store.data_dir == tmp_path / "d"
        assert app.t("logsCleared") == "Logs cleared"

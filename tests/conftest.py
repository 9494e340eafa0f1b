"""Shared fixtures for quickreq tests."""

import json

import pytest
from click.testing import CliRunner

from quickreq import core
from quickreq.app import App
from quickreq.executor import ExecutionResult
from quickreq.models import ResponseData
from quickreq.store import Store


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def global_quickreq_dir(tmp_path, monkeypatch):
    """Point the global ~/.quickreq directory at a temp location."""
    fake_global = tmp_path / "fake_home" / ".quickreq"
    fake_global.mkdir(parents=True)
    monkeypatch.setattr(core, "GLOBAL_DIR", fake_global)
    monkeypatch.setattr(core, "GLOBAL_CONFIG", fake_global / "config.yaml")
    monkeypatch.setattr(core, "GLOBAL_DATA_DIR", fake_global / "data")
    return fake_global


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "data"


@pytest.fixture
def store(data_dir):
    return Store(data_dir)


@pytest.fixture
def app(store):
    return App(store)


class FakeResponse:
    """Stand-in for requests.Response."""

    def __init__(self, status_code=200, json_data=None, reason="OK", headers=None):
        self.status_code = status_code
        self.reason = reason
        self.headers = headers or {"Content-Type": "application/json"}
        self._json_data = json_data

    def json(self):
        if isinstance(self._json_data, Exception):
            raise self._json_data
        return self._json_data


def not_json():
    return json.JSONDecodeError("Expecting value", "<html></html>", 0)


def make_response(status=200, data=None, status_text="OK", headers=None, time=42):
    return ResponseData(
        status=status,
        status_text=status_text,
        headers=headers or {},
        data=data,
        time=time,
    )


def make_result(status=200, data=None, status_text="OK", headers=None, time=42, error=None):
    """Factory for ExecutionResult objects."""
    if error is not None:
        return ExecutionResult(error=error)
    return ExecutionResult(response=make_response(status, data, status_text, headers, time))

"""Tests for presets."""

import json

import yaml

from quickreq.i18n import Translator
from quickreq.presets import builtin_presets, find_preset, list_presets, read_preset_file


class TestBuiltins:
    def test_three_builtins(self):
        presets = builtin_presets()
        assert [p.name for p in presets] == ["Anthropic Chat", "JSONPlaceholder Posts", "HTTPBin Test"]

    def test_anthropic_body_is_pretty_json(self):
        anthropic = builtin_presets()[0]
        assert anthropic.request.method == "POST"
        assert anthropic.request.url == "https://api.anthropic.com/v1/messages"
        body = json.loads(anthropic.request.body)
        assert body["max_tokens"] == 1024
        assert "\n" in anthropic.request.body

    def test_get_preset_has_empty_body(self):
        assert builtin_presets()[1].request.body == ""

    def test_translated_names(self):
        presets = builtin_presets(Translator("nl"))
        assert presets[2].name == "HTTPBin Test"

    def test_builtins_are_fresh_copies(self):
        builtin_presets()[0].request.headers["X"] = "1"
        assert "X" not in builtin_presets()[0].request.headers


class TestUserPresets:
    def test_read_file(self, tmp_path):
        path = tmp_path / "health.yaml"
        path.write_text(yaml.dump({"url": "http://localhost/health", "description": "up?"}))
        preset = read_preset_file(path)
        assert preset.name == "health"
        assert preset.request.method == "GET"
        assert preset.description == "up?"

    def test_bad_files_skipped(self, tmp_path):
        (tmp_path / "list.yaml").write_text("- a\n- b\n")
        (tmp_path / "broken.yaml").write_text("url: [unclosed\n")
        (tmp_path / "notes.txt").write_text("ignored")
        presets = list_presets(tmp_path)
        assert len(presets) == 3

    def test_listed_after_builtins(self, tmp_path):
        (tmp_path / "mine.yml").write_text(yaml.dump({"name": "Mine", "url": "http://m", "method": "post"}))
        presets = list_presets(tmp_path)
        assert presets[-1].name == "Mine"
        assert presets[-1].request.method == "POST"

    def test_find_case_insensitive(self):
        presets = builtin_presets()
        assert find_preset("httpbin test", presets).request.url == "https://httpbin.org/anything"
        assert find_preset("nope", presets) is None

"""Tests for config_manager module."""

import json
import os
import tempfile

from pdfninja.utils.config_manager import DEFAULT_CONFIG, ConfigManager


class TestConfigManager:
    def _make_manager(self, tmp_dir, initial=None):
        path = os.path.join(tmp_dir, "settings.json")
        if initial:
            with open(path, "w") as f:
                json.dump(initial, f)
        return ConfigManager(config_path=path)

    def test_get_default_value(self):
        with tempfile.TemporaryDirectory() as d:
            cm = self._make_manager(d)
            assert cm.get("nonexistent.key", "fallback") == "fallback"

    def test_defaults_present(self):
        with tempfile.TemporaryDirectory() as d:
            cm = self._make_manager(d)
            assert cm.get("api.base_url") == ""
            assert cm.get("api.timeout") is None
            assert cm.get("defaults.compression_level") == "medium"
            assert cm.get("defaults.ocr_language") == "eng"

    def test_does_not_create_file_on_init(self):
        with tempfile.TemporaryDirectory() as d:
            self._make_manager(d)
            assert not os.path.exists(os.path.join(d, "settings.json"))

    def test_set_and_get(self):
        with tempfile.TemporaryDirectory() as d:
            cm = self._make_manager(d)
            cm.set("api.base_url", "http://localhost:8000", save_immediately=False)
            assert cm.get("api.base_url") == "http://localhost:8000"

    def test_save_and_reload(self):
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "nested", "settings.json")
            cm = ConfigManager(config_path=path)
            cm.set("defaults.ocr_language", "deu")
            cm2 = ConfigManager(config_path=path)
            assert cm2.get("defaults.ocr_language") == "deu"

    def test_nested_key_path(self):
        with tempfile.TemporaryDirectory() as d:
            cm = self._make_manager(d)
            cm.set("a.b.c", 42, save_immediately=False)
            assert cm.get("a.b.c") == 42

    def test_load_existing_config_merges_defaults(self):
        with tempfile.TemporaryDirectory() as d:
            cm = self._make_manager(d, initial={"api": {"timeout": 30}})
            assert cm.get("api.timeout") == 30
            assert cm.get("api.base_url") == ""
            assert cm.get("output.overwrite_existing") is False

    def test_old_version_upgraded(self):
        with tempfile.TemporaryDirectory() as d:
            cm = self._make_manager(d, initial={"version": 0})
            assert cm.get("version") == DEFAULT_CONFIG["version"]

    def test_corrupt_file_falls_back_to_defaults(self):
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "settings.json")
            with open(path, "w") as f:
                f.write("{not json")
            cm = ConfigManager(config_path=path)
            assert cm.get("defaults.compression_level") == "medium"

    def test_save_returns_true(self):
        with tempfile.TemporaryDirectory() as d:
            cm = self._make_manager(d)
            assert cm.save() is True

    def test_defaults_not_shared_between_instances(self):
        with tempfile.TemporaryDirectory() as d:
            cm = self._make_manager(d)
            cm.set("api.base_url", "http://changed", save_immediately=False)
            assert DEFAULT_CONFIG["api"]["base_url"] == ""

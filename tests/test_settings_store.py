import json

from models import Settings
from storage.settings_store import SettingsStore


class TestSettingsStore:

    def test_missing_file(self, tmp_path):
        assert SettingsStore(tmp_path / "settings.json").load() is None

    def test_save_and_load(self, tmp_path, settings):
        store = SettingsStore(tmp_path / "settings.json")

        assert store.save(settings) is True
        assert store.load() == settings

    def test_lenient_load(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"ai_provider": "gemini", "analysis_depth": "deep"}), encoding="utf-8")

        loaded = SettingsStore(path).load()
        assert loaded.ai_provider == "claude"
        assert loaded.analysis_depth == "deep"
        assert loaded.stealth_mode is True

    def test_write_failure_returns_false(self, tmp_path, settings):
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")

        assert SettingsStore(blocker / "settings.json").save(settings) is False

    def test_non_object_document(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("[1, 2]", encoding="utf-8")

        assert SettingsStore(path).load() is None


class TestSettingsModel:

    def test_redacted_copy(self, settings):
        redacted = settings.redacted()

        assert redacted.ai_api_key == "[REDACTED]"
        assert settings.ai_api_key == "sk-test-key"

    def test_has_keys(self):
        assert Settings(scrape_api_key="a", ai_api_key="b").has_keys
        assert not Settings(scrape_api_key="a", ai_api_key="  ").has_keys

import json
from unittest.mock import patch

from gitpush.config import ConfigStore, default_config_dir


def test_missing_file_is_empty_config(store):
    assert store.get_config() == {}
    assert store.is_setup_complete() is False


def test_set_api_key_round_trip(store):
    store.set_api_key("openai", "sk-test")

    config = store.get_config()
    assert config == {"aiProvider": "openai", "apiKey": "sk-test", "setupComplete": True}
    assert store.get_ai_provider() == "openai"
    assert store.get_api_key() == "sk-test"
    assert store.is_setup_complete() is True


def test_file_is_pretty_printed_json(store):
    store.set_api_key("gemini", "key")
    text = store.config_file.read_text(encoding="utf-8")
    assert json.loads(text)["aiProvider"] == "gemini"
    assert '\n  "aiProvider"' in text


def test_invalid_json_is_treated_as_empty(store):
    store.config_dir.mkdir(parents=True)
    store.config_file.write_text("{not json", encoding="utf-8")
    assert store.get_config() == {}


def test_setup_flag_without_key_is_incomplete(store):
    store.save_config({"aiProvider": "anthropic", "setupComplete": True})
    assert store.is_setup_complete() is False


def test_set_api_key_keeps_other_fields(store):
    store.save_config({"extra": 1})
    store.set_api_key("github", "ghp_x")
    assert store.get_config()["extra"] == 1


def test_clear_config(store):
    store.set_api_key("openai", "sk-test")
    assert store.clear_config() is True
    assert store.get_config() == {}


def test_clear_config_with_nothing_to_clear(store):
    assert store.clear_config() is False


def test_config_dir_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("GITPUSH_CONFIG_DIR", str(tmp_path / "elsewhere"))
    assert default_config_dir() == tmp_path / "elsewhere"
    assert ConfigStore().config_file == tmp_path / "elsewhere" / "config.json"


def test_default_config_dir_is_in_home(monkeypatch):
    monkeypatch.delenv("GITPUSH_CONFIG_DIR", raising=False)
    assert default_config_dir().name == ".gitpush"


def test_clear_config_unlink_failure_returns_false(store):
    store.set_api_key("openai", "sk-test")

    with patch("pathlib.Path.unlink", side_effect=PermissionError("read-only")):
        assert store.clear_config() is False

    assert store.get_api_key() == "sk-test"

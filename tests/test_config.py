import pytest
import yaml

from expense_tracker import config


def test_missing_config_gives_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv(config.LOG_LEVEL_ENV, raising=False)
    cfg = config.load_config(tmp_path / "nope.yaml")
    assert cfg == config.DEFAULT_CONFIG
    assert config.load_config() == config.DEFAULT_CONFIG


def test_file_values_merge_over_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv(config.LOG_LEVEL_ENV, raising=False)
    path = tmp_path / "config.yaml"
    path.write_text("expense_file: /tmp/mine.json\n")
    cfg = config.load_config(path)
    assert cfg["expense_file"] == "/tmp/mine.json"
    assert cfg["summary_file"] == config.DEFAULT_CONFIG["summary_file"]


def test_env_overrides_log_level(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text("log_level: ERROR\n")
    monkeypatch.setenv(config.LOG_LEVEL_ENV, "DEBUG")
    assert config.load_config(path)["log_level"] == "DEBUG"


def test_non_mapping_config_is_rejected(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- a\n- b\n")
    try:
        config.load_config(path)
    except ValueError as e:
        assert "must contain a mapping" in str(e)
    else:
        raise AssertionError("expected ValueError")


def test_save_config_round_trip(tmp_path, monkeypatch):
    monkeypatch.delenv(config.LOG_LEVEL_ENV, raising=False)
    path = tmp_path / "sub" / "config.yaml"
    config.save_config({"expense_file": "x.json"}, path)
    assert yaml.safe_load(path.read_text()) == {"expense_file": "x.json"}
    assert config.load_config(path)["expense_file"] == "x.json"


def test_log_level_is_checked_and_normalized(tmp_path, monkeypatch):
    monkeypatch.delenv(config.LOG_LEVEL_ENV, raising=False)
    path = tmp_path / "config.yaml"
    path.write_text("log_level: debug\n")
    assert config.load_config(path)["log_level"] == "DEBUG"

    path.write_text("log_level: 10\n")
    with pytest.raises(ValueError, match="Invalid log level 10"):
        config.load_config(path)

    monkeypatch.setenv(config.LOG_LEVEL_ENV, "verbose")
    with pytest.raises(ValueError, match="Invalid log level 'verbose'"):
        config.load_config()


def test_invalid_yaml_is_a_value_error(tmp_path, monkeypatch):
    monkeypatch.delenv(config.LOG_LEVEL_ENV, raising=False)
    path = tmp_path / "config.yaml"
    path.write_text("expense_file: [unclosed\n")
    with pytest.raises(ValueError, match="not valid YAML"):
        config.load_config(path)

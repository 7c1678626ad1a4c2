import json
import pytest
from unittest.mock import MagicMock
from vmkit.core.config import ConfigManager

def test_config_defaults_written_when_missing(tmp_path):
    path = tmp_path / "config.json"
    config = ConfigManager(str(path))

    assert config.data.general.debug_mode is True
    assert config.data.container.check_cycles is True
    assert config.data.container.namespace is None
    assert path.exists()
    assert json.loads(path.read_text())["container"]["check_cycles"] is True

def test_config_loads_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"container": {"namespace": "myapp", "check_cycles": False}}))

    config = ConfigManager(str(path))

    assert config.get("container", "namespace") == "myapp"
    assert config.get("container", "check_cycles") is False
    assert config.get("general", "log_dir") == "logs"

def test_config_loads_toml(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[general]\ndebug_mode = false\n\n[container]\nnamespace = "shop"\n')

    config = ConfigManager(str(path))

    assert config.data.general.debug_mode is False
    assert config.data.container.namespace == "shop"

def test_invalid_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")

    config = ConfigManager(str(path))

    assert config.data.container.check_cycles is True
    assert json.loads(path.read_text())["general"]["log_dir"] == "logs"

def test_config_update_event(tmp_path):
    config = ConfigManager(str(tmp_path / "config.json"))
    observer = MagicMock()
    config.on_changed.connect(observer)

    config.update("container", "namespace", "orders")

    assert config.data.container.namespace == "orders"
    observer.assert_called_once_with("container", "namespace", "orders")
    reloaded = ConfigManager(str(tmp_path / "config.json"))
    assert reloaded.data.container.namespace == "orders"

def test_config_update_rejects_unknown_keys(tmp_path):
    config = ConfigManager(str(tmp_path / "config.json"))

    with pytest.raises(ValueError):
        config.update("missing", "key", 1)
    with pytest.raises(ValueError):
        config.update("general", "missing", 1)

def test_config_update_validates_value(tmp_path):
    config = ConfigManager(str(tmp_path / "config.json"))

    with pytest.raises(ValueError):
        config.update("general", "debug_mode", "not-a-bool")
    assert config.data.general.debug_mode is True

def test_toml_config_is_not_rewritten(tmp_path):
    path = tmp_path / "config.toml"
    text = '[container]\ncheck_cycles = false\n'
    path.write_text(text)

    config = ConfigManager(str(path))
    config.update("container", "namespace", "shop")

    assert config.read_only
    assert config.data.container.namespace == "shop"
    assert path.read_text() == text

def test_config_reload(tmp_path):
    path = tmp_path / "config.json"
    config = ConfigManager(str(path))
    path.write_text(json.dumps({"general": {"debug_mode": False}}))

    config.reload()

    assert config.data.general.debug_mode is False

"""Tests for ConfigManager."""

import pytest
import yaml

from pyomdb.config.config_manager import ConfigManager
from pyomdb.models.config import Config
from pyomdb.utils.error_handler import ConfigurationError


@pytest.fixture
def config_file(tmp_path):
    """Write a YAML config file and return its path."""
    def _write(data):
        path = tmp_path / "pyomdb.yaml"
        path.write_text(yaml.safe_dump(data) if not isinstance(data, str) else data, encoding='utf-8')
        return str(path)
    return _write


class TestConfigManager:
    """Test cases for ConfigManager."""

    def test_defaults_without_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv('HOME', str(tmp_path))

        manager = ConfigManager()
        config = manager.get_config()

        assert manager.config_file is None
        assert config == Config()

    def test_load_from_file(self, config_file):
        path = config_file({
            'omdb': {'api_key': 12345},
            'network': {'timeout': 5},
        })

        config = ConfigManager(path).get_config()

        assert config.api_key == '12345'
        assert config.timeout == 5
        assert config.base_url == "http://www.omdbapi.com/"

    def test_env_overrides(self, config_file, monkeypatch):
        path = config_file({'omdb': {'api_key': 'from-file'}})
        monkeypatch.setenv('OMDB_API_KEY', 'from-env')
        monkeypatch.setenv('OMDB_TIMEOUT', '2.5')
        monkeypatch.setenv('PYOMDB_LOG_LEVEL', 'DEBUG')

        config = ConfigManager(path).get_config()

        assert config.api_key == 'from-env'
        assert config.timeout == 2.5
        assert config.log_level == 'DEBUG'

    def test_invalid_env_number_is_ignored(self, config_file, monkeypatch):
        monkeypatch.setenv('OMDB_TIMEOUT', 'soon')

        config = ConfigManager(config_file({})).get_config()

        assert config.timeout == 30

    def test_config_file_from_env(self, config_file, monkeypatch):
        path = config_file({'omdb': {'base_url': 'https://omdb.example.com/'}})
        monkeypatch.setenv('PYOMDB_CONFIG', path)

        manager = ConfigManager()

        assert manager.config_file == path
        assert manager.get('omdb.base_url') == 'https://omdb.example.com/'

    def test_overrides_take_precedence(self, config_file):
        manager = ConfigManager(config_file({'omdb': {'api_key': 'file-key'}}))

        assert manager.get_config(api_key='cli-key').api_key == 'cli-key'
        assert manager.get_config(api_key=None).api_key == 'file-key'

    def test_none_override_keeps_env_key(self, config_file, monkeypatch):
        monkeypatch.setenv('OMDB_API_KEY', 'env-key')
        manager = ConfigManager(config_file({'omdb': {'api_key': 'file-key'}}))

        config = manager.get_config(api_key=None)

        assert config.api_key == 'env-key'
        assert manager.get_config() is config

    def test_get_with_default(self, config_file):
        manager = ConfigManager(config_file({}))

        assert manager.get('network.timeout') == 30
        assert manager.get('omdb.missing', 'fallback') == 'fallback'

    def test_invalid_yaml(self, config_file):
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            ConfigManager(config_file("omdb: [unclosed")).load_config()

    def test_non_mapping_yaml(self, config_file):
        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            ConfigManager(config_file("- just\n- a list\n")).load_config()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            ConfigManager(str(tmp_path / "absent.yaml")).load_config()

    def test_invalid_values(self, config_file):
        manager = ConfigManager(config_file({'network': {'timeout': -1}}))

        with pytest.raises(ConfigurationError, match="timeout must be positive"):
            manager.get_config()

    def test_validate_config(self, config_file):
        assert any("No API key" in error for error in ConfigManager(config_file({})).validate_config())
        assert ConfigManager(config_file({'omdb': {'api_key': 'k'}})).validate_config() == []

    def test_reload_config(self, config_file, tmp_path):
        path = config_file({'omdb': {'api_key': 'first'}})
        manager = ConfigManager(path)
        assert manager.get_config().api_key == 'first'

        (tmp_path / "pyomdb.yaml").write_text(yaml.safe_dump({'omdb': {'api_key': 'second'}}))
        manager.reload_config()

        assert manager.get_config().api_key == 'second'

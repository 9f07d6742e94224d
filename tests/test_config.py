import pytest
from newsassist.utils.config import Config, get_config, reload_config

CONFIG_KEYS = [
    "API_BASE_URL",
    "REQUEST_TIMEOUT",
    "STORE_PATH",
    "SESSION_LABEL_FORMAT",
    "LOG_LEVEL",
    "LOG_FILE",
    "LOG_TO_CONSOLE",
]


@pytest.fixture
def clean_env(monkeypatch):
    for key in CONFIG_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


class TestConfigDefaults:

    def test_default_values(self, clean_env):
        config = Config()

        assert config.API_BASE_URL == "http://localhost:3000/api"
        assert config.REQUEST_TIMEOUT == 30.0

        # Local state
        assert config.STORE_PATH == "data/client_state.json"
        assert config.SESSION_LABEL_FORMAT == "%m/%d/%Y, %I:%M:%S %p"

        # Logging
        assert config.LOG_LEVEL == "INFO"
        assert config.LOG_FILE == "logs/app.log"
        assert config.LOG_TO_CONSOLE is False


class TestConfigValidation:
    """Test configuration validation."""

    def test_validate_with_valid_config(self, clean_env):
        config = Config()

        # Should not raise
        config.validate()

    def test_validate_rejects_non_http_url(self, clean_env):
        config = Config()
        config.API_BASE_URL = "localhost:3000/api"

        with pytest.raises(ValueError, match="API_BASE_URL must be an http"):
            config.validate()

    def test_validate_accepts_https(self, clean_env):
        config = Config()
        config.API_BASE_URL = "https://news.example.com/api"

        config.validate()

    def test_validate_invalid_timeout(self, clean_env):
        config = Config()
        config.REQUEST_TIMEOUT = 0

        with pytest.raises(ValueError, match="REQUEST_TIMEOUT must be positive"):
            config.validate()

    def test_validate_empty_store_path(self, clean_env):
        config = Config()
        config.STORE_PATH = ""

        with pytest.raises(ValueError, match="STORE_PATH must not be empty"):
            config.validate()


class TestEnvironmentVariables:
    """Test loading from environment variables."""

    def test_load_from_env(self, monkeypatch):
        monkeypatch.setenv("API_BASE_URL", "http://news.internal:8080/api")
        monkeypatch.setenv("REQUEST_TIMEOUT", "5")
        monkeypatch.setenv("STORE_PATH", "/tmp/state.json")

        config = reload_config()

        assert config.API_BASE_URL == "http://news.internal:8080/api"
        assert config.REQUEST_TIMEOUT == 5.0
        assert isinstance(config.REQUEST_TIMEOUT, float)
        assert config.STORE_PATH == "/tmp/state.json"

    def test_boolean_parsing(self, monkeypatch):
        monkeypatch.setenv("LOG_TO_CONSOLE", "true")
        config = reload_config()

        assert config.LOG_TO_CONSOLE is True

        monkeypatch.setenv("LOG_TO_CONSOLE", "False")
        config = reload_config()

        assert config.LOG_TO_CONSOLE is False


class TestSingleton:
    """Test singleton pattern."""

    def test_get_config_returns_same_instance(self):
        config1 = get_config()
        config2 = get_config()

        assert config1 is config2

    def test_reload_config_returns_new_instance(self):
        config1 = get_config()
        config2 = reload_config()

        assert config1 is not config2
        assert get_config() is config2


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])

import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()
class Config:
    def __init__(self):
        # BACKEND API CONFIGURATION
        # Base path of the news assistant JSON API (no trailing slash needed).
        self.API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:3000/api")

        # Upper bound for a single request, in seconds.
        # A timed out call is reported like any other network failure.
        self.REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "30.0"))

        # LOCAL STATE
        # JSON file holding the active session id and the session directory.
        self.STORE_PATH = os.getenv("STORE_PATH", "data/client_state.json")

        # strftime pattern for directory labels.
        # Default matches the en-US toLocaleString() output, e.g. "3/14/2025, 09:26:53 AM"
        self.SESSION_LABEL_FORMAT = os.getenv("SESSION_LABEL_FORMAT", "%m/%d/%Y, %I:%M:%S %p")

        # LOGGING CONFIGURATION
        #Logging level (DEBUG, INFO, WARNING, ERROR).
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

        #Path to log file. Empty string disables file logging.
        self.LOG_FILE = os.getenv("LOG_FILE", "logs/app.log")

        #Console logging is off by default so it does not interleave with the chat prompt.
        self.LOG_TO_CONSOLE = os.getenv("LOG_TO_CONSOLE", "false").lower() == "true"

    def validate(self) -> None:
        """Validate configuration and raise errors if invalid."""
        if not self.API_BASE_URL.startswith(("http://", "https://")):
            raise ValueError(
                "API_BASE_URL must be an http(s) URL. "
                "Please set it in .env file or environment variables."
            )

        if self.REQUEST_TIMEOUT <= 0:
            raise ValueError("REQUEST_TIMEOUT must be positive")

        if not self.STORE_PATH:
            raise ValueError("STORE_PATH must not be empty")

# Singleton instance
_config: Optional[Config] = None

def get_config() -> Config:
    """
    Get the global configuration instance (singleton).

    Returns:
        Config instance with loaded environment variables
    """
    global _config
    if _config is None:
        _config = Config()
    return _config

def reload_config() -> Config:
    """
    Reload configuration from environment variables.
    Useful for testing or runtime configuration changes.

    Returns:
        New Config instance
    """
    global _config
    load_dotenv(override=True)
    _config = Config()
    return _config

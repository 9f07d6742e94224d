import pytest

from newsassist.utils.config import reload_config


@pytest.fixture(autouse=True)
def fresh_config():
    """Rebuild the config singleton after each test so env tweaks do not leak."""
    yield
    reload_config()

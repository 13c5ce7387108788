import pytest

from pi.stylish.config import reset_config
from pi.stylish.width import clear_width_cache


@pytest.fixture(autouse=True)
def fresh_config():
    """Re-read configuration and drop cached widths around every test."""
    reset_config()
    clear_width_cache()
    yield
    reset_config()
    clear_width_cache()

import pytest

from huffpack.config_loader import DEFAULT_CONFIG_PATH, load_config


@pytest.fixture
def config():
    return load_config(DEFAULT_CONFIG_PATH)

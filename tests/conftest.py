# tests/conftest.py
import os
import pytest
from pyvider.pluginrpc.config import PluginRPCConfig, CONFIG_SCHEMA
from tests.fixtures import *

@pytest.fixture(autouse=True, scope="function")
def reset_pluginrpc_config_singleton():
    """
    Fixture to reset the PluginRPCConfig singleton and relevant env vars before each test.
    This ensures complete test isolation with respect to configuration.
    """
    PluginRPCConfig._instance = None

    # Backup and clear all environment variables defined in the schema
    env_keys_to_clear = list(CONFIG_SCHEMA.keys())
    original_env_values = {key: os.environ.get(key) for key in env_keys_to_clear}

    for key in env_keys_to_clear:
        if key in os.environ:
            del os.environ[key]

    yield

    # Teardown: Restore original environment variables
    for key, value in original_env_values.items():
        if value is not None:
            os.environ[key] = value
        elif key in os.environ:
            del os.environ[key]

    PluginRPCConfig._instance = None

import os

import pytest

from isofit.core.config import reset_settings


# List of environment variables that may be modified by tests
_ENV_VARS_TO_ISOLATE = [
    "API_KEY",
    "DEFAULT_LANGUAGE",
    "LOG_LEVEL",
    "LOG_JSON",
    "CORS_ORIGINS",
    "ALLOWED_HOSTS",
]


@pytest.fixture(autouse=True)
def env_isolation():
    """Isolate environment variables and cached settings between tests."""
    backup = {k: os.environ.get(k) for k in _ENV_VARS_TO_ISOLATE}
    reset_settings()
    try:
        yield
    finally:
        for k, v in backup.items():
            if v is None:
                os.environ.pop(k, None)
            else:
                os.environ[k] = v
        reset_settings()

"""
Shared test fixtures for todoist-cli tests.
Patches the config module so no test reads the real .env, a real token or
runs the secret lease subprocess.
"""

import pytest


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch):
    """Ensure every test starts with a clean config state."""
    from todoist_cli import config, credentials

    monkeypatch.setattr(config, "env", {})
    monkeypatch.setattr(config, "HTTP_LOG_ENABLED", False)
    monkeypatch.setattr(config, "HTTP_LOG_SAMPLE_RATE", 1.0)
    monkeypatch.setattr(config, "RUNTIME_VERBOSE", False)
    monkeypatch.delenv(config.TOKEN_ENV_VAR, raising=False)
    monkeypatch.setattr(credentials, "lease_token", lambda *a, **kw: "")

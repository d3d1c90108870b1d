"""Root-level pytest fixtures for all tests.

Provides shared fixtures for the pricing and CEP services:
- Recording httpx transport quoting every requested service
- Environment isolation for config loading
"""

import pytest

from tests.helpers import RecordingTransport, ok_for_each_service


# ============================================================================
# Pytest Markers
# ============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests requiring the live Correios endpoints"
    )


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def recording_transport() -> RecordingTransport:
    """Transport that quotes every requested service successfully."""
    return RecordingTransport(ok_for_each_service)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Drop CORREIOS_* env vars and run from an empty directory."""
    import os

    for key in list(os.environ):
        if key.startswith("CORREIOS_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path

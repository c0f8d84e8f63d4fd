"""Pytest configuration and shared fixtures for azure-storage-auth-core tests."""

import pytest


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear test-related environment variables before each test.

    This prevents the developer's shell (or CI's workload identity) from
    leaking into credential resolution.
    """
    import os

    test_prefixes = ("TEST_", "API_", "AZURE_")

    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture
def token_file(tmp_path):
    """A federated token file containing ``tok-from-file``."""
    path = tmp_path / "azure-identity-token"
    path.write_text("tok-from-file", encoding="utf-8")
    return path

"""Test basic package functionality."""

import azure_storage_auth_core


def test_version():
    """Test that package version is defined."""
    assert hasattr(azure_storage_auth_core, "__version__")
    assert azure_storage_auth_core.__version__ == "0.1.0"


def test_public_api():
    """Test that the resolver entry points are exported at the top level."""
    assert callable(azure_storage_auth_core.resolve)
    assert azure_storage_auth_core.CredentialConfig().authority_host is None

"""Credential lookup components.

This module provides:
- Multi-source credential resolution (value → env → .env → default)
- File-backed credentials with path indirection through an env var

Example:
    ```python
    from azure_storage_auth_core.auth import CredentialResolver

    resolver = CredentialResolver(load_dotenv=False)
    tenant_id = resolver.resolve(
        env_var_name="AZURE_TENANT_ID_ENV_KEY",
        required=True,
    )
    ```
"""

from azure_storage_auth_core.auth.credentials import CredentialResolver
from azure_storage_auth_core.auth.exceptions import (
    CredentialError,
    CredentialFileError,
    CredentialNotFoundError,
)

__all__ = [
    "CredentialError",
    "CredentialFileError",
    "CredentialNotFoundError",
    "CredentialResolver",
]

"""Azure Storage Auth Core - credential configuration for Azure Storage clients.

Builds one immutable :class:`CredentialConfig` from explicit values, the
process environment and a federated token file, for a storage client to pick
its authentication mechanism from (account key, SAS token, managed identity or
workload identity).

Example:
    ```python
    from azure_storage_auth_core import CredentialConfig, resolve

    # Explicit values win for static credentials and managed identity fields
    seed = CredentialConfig(account_name="mystorage", client_id="1d0e...")

    # Workload identity fields come from the environment
    config = resolve(seed)

    client = MyStorageClient(config)
    ```
"""

from azure_storage_auth_core.config import (
    AZURE_AUTHORITY_HOST_ENV_KEY,
    AZURE_FEDERATED_TOKEN,
    AZURE_FEDERATED_TOKEN_FILE,
    AZURE_PUBLIC_CLOUD,
    AZURE_TENANT_ID,
    CredentialConfig,
    resolve,
)

__version__ = "0.1.0"

__all__ = [
    "AZURE_AUTHORITY_HOST_ENV_KEY",
    "AZURE_FEDERATED_TOKEN",
    "AZURE_FEDERATED_TOKEN_FILE",
    "AZURE_PUBLIC_CLOUD",
    "AZURE_TENANT_ID",
    "CredentialConfig",
    "__version__",
    "resolve",
]

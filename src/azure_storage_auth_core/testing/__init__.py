"""Testing utilities for code that consumes CredentialConfig.

Build a fixed environment mapping to hand to ``resolve(environ=...)`` instead
of patching ``os.environ``, and write federated token files the way a
workload identity webhook would project them.

Example:
    ```python
    from azure_storage_auth_core import resolve
    from azure_storage_auth_core.testing import azure_environ, write_token_file


    def test_client_uses_workload_identity(tmp_path):
        token_file = write_token_file(tmp_path, "eyJhbGciOi...")
        config = resolve(environ=azure_environ(federated_token_file=token_file, tenant_id="t-1"))
        client = MyStorageClient(config)
        ...
    ```
"""

from pathlib import Path

from azure_storage_auth_core.config import (
    AZURE_AUTHORITY_HOST_ENV_KEY,
    AZURE_FEDERATED_TOKEN,
    AZURE_FEDERATED_TOKEN_FILE,
    AZURE_TENANT_ID,
)

__all__ = ["azure_environ", "write_token_file"]


def azure_environ(
    *,
    federated_token: str | None = None,
    federated_token_file: str | Path | None = None,
    tenant_id: str | None = None,
    authority_host: str | None = None,
    **extra: str,
) -> dict[str, str]:
    """Build an environment mapping with the variables the resolver reads.

    Arguments left as None are omitted (unset), so an empty string can still
    be passed to mean "set but empty". ``extra`` is copied in verbatim.
    """
    environ = dict(extra)
    if federated_token is not None:
        environ[AZURE_FEDERATED_TOKEN] = federated_token
    if federated_token_file is not None:
        environ[AZURE_FEDERATED_TOKEN_FILE] = str(federated_token_file)
    if tenant_id is not None:
        environ[AZURE_TENANT_ID] = tenant_id
    if authority_host is not None:
        environ[AZURE_AUTHORITY_HOST_ENV_KEY] = authority_host
    return environ


def write_token_file(directory: str | Path, token: str, name: str = "azure-identity-token") -> Path:
    """Write ``token`` verbatim to ``directory/name`` and return the path."""
    path = Path(directory) / name
    path.write_text(token, encoding="utf-8")
    return path

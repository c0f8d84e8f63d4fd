"""Credential configuration for Azure Storage clients.

A :class:`CredentialConfig` carries every piece of authentication material a
storage client may need: static account credentials, a managed identity
reference, or workload (federated) identity settings. Callers build a seed with
whatever they know explicitly and pass it through :func:`resolve`, which fills
in the workload identity fields from the environment and returns a new, frozen
configuration.

Resolution rules:

| Field | Source |
|---|---|
| account_name, account_key, sas_token | seed only |
| object_id, client_id, msi_res_id | seed only |
| msi_secret, endpoint | seed only |
| federated_token | AZURE_FEDERATED_TOKEN > file at AZURE_FEDERATED_TOKEN_FILE > seed |
| tenant_id | AZURE_TENANT_ID_ENV_KEY > seed |
| authority_host | AZURE_AUTHORITY_HOST_ENV_KEY > AZURE_PUBLIC_CLOUD |

Example:
    ```python
    from azure_storage_auth_core import CredentialConfig, resolve

    config = resolve(CredentialConfig(account_name="mystorage"))
    config.authority_host  # "https://login.microsoftonline.com" unless overridden
    ```
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace

from azure_storage_auth_core.auth.credentials import CredentialResolver

logger = logging.getLogger(__name__)

AZURE_FEDERATED_TOKEN = "AZURE_FEDERATED_TOKEN"
AZURE_FEDERATED_TOKEN_FILE = "AZURE_FEDERATED_TOKEN_FILE"
AZURE_TENANT_ID = "AZURE_TENANT_ID_ENV_KEY"
AZURE_AUTHORITY_HOST_ENV_KEY = "AZURE_AUTHORITY_HOST_ENV_KEY"
AZURE_PUBLIC_CLOUD = "https://login.microsoftonline.com"

# Token used when AZURE_FEDERATED_TOKEN_FILE is set but unreadable and
# resolution is not strict. Downstream token exchange fails with it.
FEDERATED_TOKEN_FILE_FALLBACK = ""

_SECRET_FIELDS = frozenset({"account_key", "sas_token", "msi_secret", "federated_token"})


@dataclass(frozen=True)
class CredentialConfig:
    """All the authentication configuration for Azure Storage services.

    Every field is optional; ``None`` means unset. ``object_id``, ``client_id``
    and ``msi_res_id`` each identify a user-assigned managed identity and only
    one of them is meant to be set. Choosing between them, and between
    identity mechanisms in general, is up to the storage client.
    """

    account_name: str | None = None
    account_key: str | None = None
    sas_token: str | None = None
    # Managed identity (AAD on an Azure VM)
    object_id: str | None = None
    client_id: str | None = None
    msi_res_id: str | None = None
    msi_secret: str | None = None  # value for the SSRF-mitigation header
    endpoint: str | None = None  # custom identity endpoint, IMDS when unset
    # Workload identity
    federated_token: str | None = None
    tenant_id: str | None = None
    authority_host: str | None = None

    def __repr__(self) -> str:
        parts = []
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in _SECRET_FIELDS and value is not None:
                parts.append(f"{f.name}='***'")
            else:
                parts.append(f"{f.name}={value!r}")
        return f"{type(self).__name__}({', '.join(parts)})"

    def from_env(
        self,
        environ: Mapping[str, str] | None = None,
        *,
        resolver: CredentialResolver | None = None,
        strict: bool = False,
    ) -> "CredentialConfig":
        """Return this config resolved against the environment.

        Shorthand for ``resolve(self, ...)``.
        """
        return resolve(self, environ=environ, resolver=resolver, strict=strict)


def _federated_token_from_file(resolver: CredentialResolver, path: str, strict: bool) -> str:
    """Read the federated token file, falling back to FEDERATED_TOKEN_FILE_FALLBACK.

    With ``strict`` the read failure is raised as CredentialFileError instead.
    """
    token = resolver.resolve_from_file(file_path=path, required=strict, strip=False, expand=False)
    if token is None:
        logger.warning(
            f"Could not read federated token file from {AZURE_FEDERATED_TOKEN_FILE} ({path}); "
            "using an empty federated token"
        )
        return FEDERATED_TOKEN_FILE_FALLBACK
    return token


def resolve(
    seed: CredentialConfig | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    resolver: CredentialResolver | None = None,
    strict: bool = False,
) -> CredentialConfig:
    """Merge the environment into a seed configuration.

    Static credentials and managed identity fields are taken from the seed
    as-is. The workload identity fields are sourced as follows:

    - ``federated_token``: contents of the file named by
      ``AZURE_FEDERATED_TOKEN_FILE`` (read raw), then overwritten by
      ``AZURE_FEDERATED_TOKEN`` if that is set too. Left as the seed's value
      when neither variable is set.
    - ``tenant_id``: ``AZURE_TENANT_ID_ENV_KEY`` when set, else the seed's.
    - ``authority_host``: ``AZURE_AUTHORITY_HOST_ENV_KEY`` when set, else
      :data:`AZURE_PUBLIC_CLOUD`. The seed's value is never used.

    Args:
        seed: Partially populated configuration. None means empty.
        environ: Mapping to read instead of the process environment.
        resolver: Pre-built resolver (e.g. with a .env layer). Mutually
            exclusive with ``environ``.
        strict: Raise instead of falling back to an empty token when the
            federated token file cannot be read.

    Returns:
        A new CredentialConfig. The seed is not modified.

    Raises:
        ValueError: If both ``environ`` and ``resolver`` are given.
        CredentialFileError: Only with ``strict=True``, when the federated
            token file cannot be read.
    """
    if environ is not None and resolver is not None:
        raise ValueError("Pass either environ or resolver, not both")
    if seed is None:
        seed = CredentialConfig()
    if resolver is None:
        resolver = CredentialResolver(environ=environ, load_dotenv=False)

    federated_token = seed.federated_token
    token_path = resolver.resolve(env_var_name=AZURE_FEDERATED_TOKEN_FILE, mask_in_logs=False)
    if token_path is not None:
        federated_token = _federated_token_from_file(resolver, token_path, strict)

    direct_token = resolver.resolve(env_var_name=AZURE_FEDERATED_TOKEN)
    if direct_token is not None:
        federated_token = direct_token

    tenant_id = resolver.resolve(env_var_name=AZURE_TENANT_ID, default=seed.tenant_id, mask_in_logs=False)

    authority_host = resolver.resolve(
        env_var_name=AZURE_AUTHORITY_HOST_ENV_KEY,
        default=AZURE_PUBLIC_CLOUD,
        mask_in_logs=False,
    )

    return replace(
        seed,
        federated_token=federated_token,
        tenant_id=tenant_id,
        authority_host=authority_host,
    )

"""Exceptions raised while resolving storage credentials.

Resolution is lenient by default: absent values come back as ``None`` and an
unreadable federated token file degrades to an empty token. These exceptions
only surface when a caller asks for a value to be ``required`` or resolves
with ``strict=True``.

Example:
    ```python
    from azure_storage_auth_core import resolve
    from azure_storage_auth_core.auth.exceptions import CredentialFileError

    try:
        config = resolve(strict=True)
    except CredentialFileError as e:
        print(f"Federated token file unusable: {e.file_path}")
    ```
"""


class CredentialError(Exception):
    """Base exception for credential-related errors.

    All credential-specific exceptions inherit from this class,
    making it easy to catch any credential-related error.
    """

    pass


class CredentialNotFoundError(CredentialError):
    """Raised when a required credential cannot be resolved.

    Attributes:
        env_var_name: The environment variable name that was checked (if any).
    """

    def __init__(self, message: str, env_var_name: str | None = None):
        super().__init__(message)
        self.env_var_name = env_var_name


class CredentialFileError(CredentialError):
    """Raised when a credential file cannot be read.

    Covers a missing file, permission denied, a directory in place of a file
    and undecodable contents.

    Attributes:
        file_path: The (expanded) path that failed, if one was known.
    """

    def __init__(self, message: str, file_path: str | None = None):
        super().__init__(message)
        self.file_path = file_path

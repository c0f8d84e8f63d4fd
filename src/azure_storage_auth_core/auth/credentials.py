"""Multi-source credential lookup over an environment snapshot.

``CredentialResolver`` answers "where does this value come from?" for a single
credential. The storage configuration resolver in
:mod:`azure_storage_auth_core.config` is built on top of it.

Resolution order (highest to lowest priority):
1. Explicitly provided value
2. Environment variable
3. .env file (python-dotenv)
4. Default value

The environment is read once, when the resolver is constructed, into a private
dict. Tests (or callers with their own configuration source) can inject a
fixed mapping instead, so nothing here needs to touch ``os.environ``.

Example:
    ```python
    from azure_storage_auth_core.auth import CredentialResolver

    # Snapshot of os.environ, .env layered underneath
    resolver = CredentialResolver()
    tenant_id = resolver.resolve(env_var_name="AZURE_TENANT_ID_ENV_KEY")

    # Fixed mapping, no .env
    resolver = CredentialResolver(
        environ={"AZURE_FEDERATED_TOKEN_FILE": "/var/run/secrets/token"},
        load_dotenv=False,
    )
    token = resolver.resolve_from_file(env_var_name="AZURE_FEDERATED_TOKEN_FILE", strip=False)
    ```

Security Considerations:
    - Credentials are never logged in full (masked with ***)
    - Only source information is logged (env var name, file path, etc.)
    - .env values never override real environment variables
    - Thread-safe dotenv loading with lock
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from threading import Lock
from types import MappingProxyType

from dotenv import dotenv_values

from azure_storage_auth_core.auth.exceptions import CredentialFileError, CredentialNotFoundError

logger = logging.getLogger(__name__)


class CredentialResolver:
    """Resolve credentials from multiple sources with priority ordering.

    Explicitly provided values take precedence over environment variables,
    which take precedence over .env file values, which finally take precedence
    over defaults.

    Attributes:
        _environ: Private snapshot of the environment (plus the .env layer).
        _dotenv_loaded: Whether .env file has been loaded.
        _dotenv_lock: Thread lock for safe dotenv loading.
    """

    def __init__(
        self,
        dotenv_path: str | None = None,
        load_dotenv: bool = True,
        environ: Mapping[str, str] | None = None,
    ):
        """Initialize credential resolver.

        Args:
            dotenv_path: Path to .env file. If None, searches parent directories
                for .env file (default behavior of python-dotenv).
            load_dotenv: Whether to layer .env values under the environment.
                Default is True.
            environ: Mapping to use instead of the process environment. When
                None, ``os.environ`` is copied once, here.
        """
        self._environ: dict[str, str] = dict(os.environ if environ is None else environ)
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()
        self._dotenv_path = dotenv_path
        self._load_dotenv_enabled = load_dotenv

        if self._load_dotenv_enabled:
            self._ensure_dotenv_loaded()

    @property
    def environ(self) -> Mapping[str, str]:
        """Read-only view of the environment this resolver reads from."""
        return MappingProxyType(self._environ)

    def _ensure_dotenv_loaded(self) -> None:
        """Layer .env values beneath the environment snapshot (thread-safe, once)."""
        if self._dotenv_loaded:
            return

        with self._dotenv_lock:
            # Double-check pattern for thread safety
            if self._dotenv_loaded:
                return

            try:
                values = dotenv_values(dotenv_path=self._dotenv_path)
            except Exception as e:
                logger.warning(f"Failed to load .env file: {e}")
                # Don't fail - continue without .env
                self._dotenv_loaded = True  # Mark as attempted
                return

            added = 0
            for key, value in values.items():
                # Keys without a value ("FOO" on its own line) come back as None
                if value is None or key in self._environ:
                    continue
                self._environ[key] = value
                added += 1

            self._dotenv_loaded = True
            logger.debug(f"Loaded .env file for credential resolution ({added} new keys)")

    def _mask_credential(self, value: str | None) -> str:
        """Mask a credential value for safe logging.

        Returns:
            Masked string ("***") if value exists, "None" otherwise.
        """
        if value is None:
            return "None"
        return "***"

    def resolve(
        self,
        *,
        value: str | None = None,
        env_var_name: str | None = None,
        default: str | None = None,
        required: bool = False,
        mask_in_logs: bool = True,
    ) -> str | None:
        """Resolve a credential from multiple sources.

        Resolution order (first match wins):
        1. Explicitly provided `value` parameter
        2. Environment variable (if `env_var_name` provided), .env included
        3. Default value (if `default` provided)
        4. None (if not required) or raise error (if required)

        A variable that is set to the empty string counts as set.

        Args:
            value: Explicitly provided value (highest priority).
            env_var_name: Environment variable name to check.
            default: Default value if not found elsewhere.
            required: If True, raises CredentialNotFoundError when
                credential cannot be resolved. Default is False.
            mask_in_logs: If True (default), masks credential values
                in log messages. Disable for non-sensitive values.

        Returns:
            Resolved credential value, or None if not found and not required.

        Raises:
            CredentialNotFoundError: If required=True and credential not found
                in any source.
        """
        result = None
        source = None

        # Priority 1: Explicit value
        if value is not None:
            result = value
            source = "explicit parameter"

        # Priority 2: Environment variable
        elif env_var_name and env_var_name in self._environ:
            result = self._environ[env_var_name]
            source = f"environment variable '{env_var_name}'"

        # Priority 3: Default value
        elif default is not None:
            result = default
            source = "default value"

        if result is not None:
            shown = self._mask_credential(result) if mask_in_logs else result
            logger.debug(f"Resolved credential from {source}: {shown}")

        if required and result is None:
            error_msg = "Required credential not found"
            if env_var_name:
                error_msg += f" (checked env var: {env_var_name})"
            raise CredentialNotFoundError(error_msg, env_var_name=env_var_name)

        return result

    def resolve_from_file(
        self,
        *,
        file_path: str | Path | None = None,
        env_var_name: str | None = None,
        required: bool = False,
        strip: bool = True,
        expand: bool = True,
    ) -> str | None:
        """Resolve credential from a file.

        The path is taken from `file_path`, or else from the environment
        variable `env_var_name`. Contents are read as bytes and decoded as
        UTF-8, so line endings are kept as stored.

        Args:
            file_path: Path to file containing credential.
            env_var_name: Environment variable containing the file path.
                Only consulted when file_path is None.
            required: If True, raises CredentialFileError when no path is
                known or the file cannot be read. Default is False.
            strip: Strip leading/trailing whitespace from the contents.
                Default is True.
            expand: Expand `~` and `$VAR` in the path. With False the path is
                used exactly as given. Default is True.

        Returns:
            File contents, or None if no path is known or the file could not
            be read and the credential is not required.

        Raises:
            CredentialFileError: If required=True and the file cannot be read.
        """
        path_to_use = None

        if file_path is not None:
            path_to_use = str(file_path)
        elif env_var_name:
            path_from_env = self.resolve(env_var_name=env_var_name, required=False, mask_in_logs=False)
            if path_from_env is not None:
                path_to_use = path_from_env

        if path_to_use is None:
            if required:
                error_msg = "No file path provided for credential resolution"
                if env_var_name:
                    error_msg += f" (env var '{env_var_name}' not set)"
                raise CredentialFileError(error_msg)
            return None

        if expand:
            path_to_use = os.path.expanduser(os.path.expandvars(path_to_use))
        path_obj = Path(path_to_use)

        try:
            content = path_obj.read_bytes().decode("utf-8")
        except FileNotFoundError:
            error_msg = f"Credential file not found: {path_obj}"
            if required:
                raise CredentialFileError(error_msg, file_path=str(path_obj)) from None
            logger.debug(error_msg)
            return None
        except PermissionError:
            error_msg = f"Permission denied reading credential file: {path_obj}"
            if required:
                raise CredentialFileError(error_msg, file_path=str(path_obj)) from None
            logger.warning(error_msg)
            return None
        except Exception as e:
            error_msg = f"Error reading credential file {path_obj}: {e}"
            if required:
                raise CredentialFileError(error_msg, file_path=str(path_obj)) from e
            logger.warning(error_msg)
            return None

        if strip:
            content = content.strip()
        logger.debug(f"Resolved credential from file: {path_obj} (***)")
        return content

"""
Credential storage for Resend CLI.

The API key is kept as plain text in a single file under the user's
configuration directory. There is no locking: concurrent ``config``
invocations race, last writer wins.
"""

import logging
import os
import stat
from pathlib import Path
from typing import Optional

from ..core.client.errors import FileAccessError, NotConfiguredError, ValidationFailedError
from .settings import ResendCliSettings

logger = logging.getLogger(__name__)


class CredentialStore:
    """Reads and writes the saved API key."""

    def __init__(self, path: Path):
        self.path = Path(path)

    @classmethod
    def from_settings(cls, settings: ResendCliSettings) -> "CredentialStore":
        return cls(settings.credentials_path)

    def exists(self) -> bool:
        return self.path.is_file()

    def save(self, key: str) -> Path:
        """Persist the API key, replacing any previous one.

        Args:
            key: The API key to store

        Returns:
            Path of the credentials file
        """
        key = key.strip()
        if not key:
            raise ValidationFailedError("API key must not be empty", field="key")

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(key, encoding="utf-8")
            if os.name == "posix":
                self.path.chmod(stat.S_IRUSR | stat.S_IWUSR)
        except OSError as e:
            raise FileAccessError(
                f"Could not write API key: {e.strerror or e}",
                path=str(self.path),
                original_error=e
            ) from e

        logger.info(f"Saved API key to {self.path}")
        return self.path

    def load(self) -> str:
        """Load the saved API key.

        Raises:
            NotConfiguredError: if no key was ever saved
            FileAccessError: if the file exists but cannot be read or is empty
        """
        if not self.path.exists():
            raise NotConfiguredError(path=str(self.path))

        try:
            key = self.path.read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError) as e:
            raise FileAccessError(
                f"Could not read API key from {self.path}: {e}",
                path=str(self.path),
                original_error=e
            ) from e

        if not key:
            raise FileAccessError(
                f"Credentials file {self.path} is empty. Run `resend-cli config` again.",
                path=str(self.path)
            )

        logger.debug(f"Loaded API key from {self.path}")
        return key


def resolve_api_key(settings: ResendCliSettings, store: Optional[CredentialStore] = None) -> str:
    """
    Return the API key for this invocation.

    ``RESEND_CLI_API_KEY`` takes precedence over the saved credentials.
    """
    if settings.api_key and settings.api_key.strip():
        logger.debug("Using API key from environment")
        return settings.api_key.strip()

    store = store or CredentialStore.from_settings(settings)
    return store.load()

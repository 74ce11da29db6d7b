"""Encryption of stored secrets.

Architectural role:
    Stands in for the host platform's encryptor. API keys are stored encrypted
    in the scoped settings store and decrypted on read by
    `magedin_chatgpt.config.settings.ChatGptConfig`.

Key material:
    Fernet key from `MAGEDIN_CRYPT_KEY`. Without a key the encryptor runs in
    plaintext mode and values pass through unchanged.

Failure behavior:
    - Invalid key at construction -> `ConfigurationError`.
    - Undecryptable value -> empty string plus a warning log. The value itself
      is never logged.
"""

import logging
import os

from cryptography.fernet import Fernet, InvalidToken
from dotenv import load_dotenv

from magedin_chatgpt.errors import ConfigurationError

CRYPT_KEY_ENV = "MAGEDIN_CRYPT_KEY"

logger = logging.getLogger(__name__)


def generate_key():
    """Return a fresh urlsafe-base64 Fernet key as text."""
    return Fernet.generate_key().decode("utf-8")


class Encryptor:
    """Fernet encryptor with a plaintext fallback when no key is set."""

    def __init__(self, key=None):
        key = (key or "").strip()
        if key:
            try:
                self._fernet = Fernet(key.encode("utf-8"))
            except (ValueError, TypeError) as err:
                raise ConfigurationError(f"Invalid {CRYPT_KEY_ENV}") from err
        else:
            self._fernet = None
            logger.warning("%s not set: secrets are stored in plaintext mode.", CRYPT_KEY_ENV)

    @classmethod
    def from_env(cls):
        load_dotenv()
        return cls(os.getenv(CRYPT_KEY_ENV))

    @property
    def plaintext_mode(self):
        return self._fernet is None

    def encrypt(self, value):
        if not value:
            return ""
        if self._fernet is None:
            return value
        return self._fernet.encrypt(value.encode("utf-8")).decode("utf-8")

    def decrypt(self, value):
        """Decrypt `value`; return an empty string when it cannot be decrypted."""
        if not value:
            return ""
        if self._fernet is None:
            return value

        data = value.encode("utf-8") if isinstance(value, str) else bytes(value)
        try:
            return self._fernet.decrypt(data).decode("utf-8")
        except InvalidToken:
            logger.warning("Stored secret could not be decrypted with the configured key")
            return ""
        except UnicodeDecodeError:
            logger.warning("Decrypted secret is not valid UTF-8")
            return ""

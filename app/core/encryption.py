"""Encryption of GitHub access tokens at rest.

Uses Fernet symmetric encryption (AES-128-CBC with HMAC-SHA256).
The key must be a 32-byte URL-safe base64-encoded string.

Generate a new key:
    python -c "from cryptography.fernet import Fernet; print(Fernet.generate_key().decode())"
"""

import logging

from cryptography.fernet import Fernet, InvalidToken

from app.config import settings

logger = logging.getLogger(__name__)


class TokenEncryption:
    """Encrypts and decrypts stored GitHub access tokens.

    The key is read from settings.token_encryption_key. Without a key the
    cipher is disabled and values pass through unchanged, which keeps local
    development usable without extra setup.
    """

    def __init__(self, key: str | None = None) -> None:
        self._cipher: Fernet | None = None

        key = settings.token_encryption_key if key is None else key
        if key:
            try:
                self._cipher = Fernet(key.encode())
            except (ValueError, TypeError):
                logger.warning("token_encryption_key has invalid format, encryption disabled")
        elif not settings.debug:
            logger.warning(
                "SECURITY: token_encryption_key is not configured. "
                "GitHub access tokens will be stored in plaintext."
            )

    @property
    def is_enabled(self) -> bool:
        return self._cipher is not None

    def encrypt(self, plaintext: str) -> str:
        """Encrypt a token, or return it unchanged when encryption is disabled."""
        if self._cipher is None:
            return plaintext
        return self._cipher.encrypt(plaintext.encode()).decode()

    def decrypt(self, ciphertext: str) -> str:
        """Decrypt a stored token.

        A value that is not a valid Fernet token (stored before a key was
        configured) is returned as-is.
        """
        if self._cipher is None:
            return ciphertext

        try:
            return self._cipher.decrypt(ciphertext.encode()).decode()
        except InvalidToken:
            return ciphertext


token_encryption = TokenEncryption()

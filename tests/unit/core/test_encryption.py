"""Unit tests for GitHub token encryption at rest."""

from cryptography.fernet import Fernet

from app.core.encryption import TokenEncryption


class TestTokenEncryption:
    def test_round_trip_with_key(self):
        enc = TokenEncryption(Fernet.generate_key().decode())

        ciphertext = enc.encrypt("ghp_secret")

        assert enc.is_enabled is True
        assert ciphertext != "ghp_secret"
        assert enc.decrypt(ciphertext) == "ghp_secret"

    def test_disabled_without_key_passes_through(self):
        enc = TokenEncryption("")

        assert enc.is_enabled is False
        assert enc.encrypt("ghp_secret") == "ghp_secret"
        assert enc.decrypt("ghp_secret") == "ghp_secret"

    def test_invalid_key_disables_encryption(self):
        enc = TokenEncryption("not-a-fernet-key")

        assert enc.is_enabled is False

    def test_legacy_plaintext_value_is_returned_as_is(self):
        enc = TokenEncryption(Fernet.generate_key().decode())

        assert enc.decrypt("ghp_stored_before_key") == "ghp_stored_before_key"

    def test_other_key_cannot_decrypt(self):
        first = TokenEncryption(Fernet.generate_key().decode())
        second = TokenEncryption(Fernet.generate_key().decode())

        ciphertext = first.encrypt("ghp_secret")

        assert second.decrypt(ciphertext) == ciphertext

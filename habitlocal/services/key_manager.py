"""
key_manager.py — Gemini API key storage
Keeps the user's Gemini key in the key-value store, encrypted with a Fernet
key derived from SECRET_KEY. Falls back to GEMINI_API_KEY from the
environment when nothing was saved.
"""

import base64
import logging

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from habitlocal.config import API_KEY_STORAGE_KEY, GEMINI_API_KEY, SECRET_KEY
from habitlocal.services.storage_service import KeyValueStore

logger = logging.getLogger(__name__)


class KeyManager:
    """Encrypted storage for the single Gemini API key."""

    def __init__(
        self,
        storage: KeyValueStore,
        storage_key: str = API_KEY_STORAGE_KEY,
        secret: str = SECRET_KEY,
        env_key: str = GEMINI_API_KEY,
    ):
        self.storage = storage
        self.storage_key = storage_key
        self.env_key = env_key

        salt = b'habitlocal_encryption_salt'
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=32,
            salt=salt,
            iterations=100000,
        )
        key = base64.urlsafe_b64encode(kdf.derive(secret.encode()))
        self.fernet = Fernet(key)

    def encrypt_key(self, plain_text_key: str) -> str:
        return self.fernet.encrypt(plain_text_key.encode()).decode()

    def decrypt_key(self, encrypted_key: str) -> str:
        return self.fernet.decrypt(encrypted_key.encode()).decode()

    # ------------------------------------------------------------------
    def get_api_key(self) -> str | None:
        """Saved key, else the environment key, else None."""
        stored = self.storage.load(self.storage_key)
        if stored:
            try:
                return self.decrypt_key(stored)
            except InvalidToken:
                logger.warning("Stored Gemini API key could not be decrypted; ignoring it.")
        return self.env_key or None

    def set_api_key(self, api_key: str | None) -> bool:
        """Save a key; a blank or None key clears it."""
        if api_key is None or not api_key.strip():
            return self.clear_api_key()
        return self.storage.save(self.storage_key, self.encrypt_key(api_key.strip()))

    def clear_api_key(self) -> bool:
        return self.storage.remove(self.storage_key)

    @property
    def is_api_key_set(self) -> bool:
        key = self.get_api_key()
        return key is not None and key.strip() != ""

    @staticmethod
    def mask(api_key: str | None) -> str | None:
        if not api_key:
            return None
        return api_key[:4] + "..." + api_key[-4:] if len(api_key) > 8 else "****"

from pathlib import Path
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken


class EncryptionError(Exception):
    """raised when a stored value cannot be decrypted."""
    pass


class Encryptor:
    """encrypts setting values with a Fernet key kept beside the settings file."""

    def __init__(self, key_file: Path):
        self.key_file = key_file
        self._fernet: Optional[Fernet] = None

    def _get_fernet(self) -> Fernet:
        if self._fernet is not None:
            return self._fernet

        if self.key_file.exists():
            key = self.key_file.read_bytes().strip()
        else:
            # first use, generate a key readable only by the owner
            key = Fernet.generate_key()
            self.key_file.parent.mkdir(parents=True, exist_ok=True)
            self.key_file.write_bytes(key)
            self.key_file.chmod(0o600)

        self._fernet = Fernet(key)
        return self._fernet

    def encrypt_string(self, value: str) -> str:
        return self._get_fernet().encrypt(value.encode("utf-8")).decode("ascii")

    def decrypt_string(self, value: str) -> str:
        try:
            return self._get_fernet().decrypt(value.encode("ascii")).decode("utf-8")
        except (InvalidToken, UnicodeError) as e:
            raise EncryptionError("stored value could not be decrypted") from e

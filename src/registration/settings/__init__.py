from .store import Settings
from .models import SettingsData
from .encryption import Encryptor, EncryptionError

__all__ = ["Settings", "SettingsData", "Encryptor", "EncryptionError"]

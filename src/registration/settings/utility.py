"""helpers for the `config` section of the settings file."""
import os
from pathlib import Path
from typing import Optional

from .store import Settings
from ..config import CONFIG_DIR, CONFIG_SECTION
from ..domain.errors import InvalidArgumentError

GLOBAL_PACKAGES_FOLDER_KEY = "globalPackagesFolder"
GLOBAL_PACKAGES_FOLDER_ENV = "REGISTRATION_PACKAGES"
REPOSITORY_PATH_KEY = "repositoryPath"


def _require(name: str, value: Optional[str]) -> None:
    if not value:
        raise InvalidArgumentError(name)


def get_decrypted_value(settings: Settings, section: str, key: str, is_path: bool = False) -> Optional[str]:
    """read a value written by set_encrypted_value, None if it is not set."""
    _require("section", section)
    _require("key", key)

    encrypted = settings.get_value(section, key, is_path)
    if encrypted is None:
        return None
    if encrypted == "":
        return ""
    return settings.encryptor.decrypt_string(encrypted)


def set_encrypted_value(settings: Settings, section: str, key: str, value: str) -> None:
    _require("section", section)
    _require("key", key)
    if value is None:
        raise InvalidArgumentError("value")

    if value == "":
        settings.set_value(section, key, "")
    else:
        settings.set_value(section, key, settings.encryptor.encrypt_string(value))


def get_config_value(settings: Settings, key: str, decrypt: bool = False, is_path: bool = False) -> Optional[str]:
    """
    get a value from the config section.

    args:
        settings: settings to read
        key: key to look up
        decrypt: if True, the stored value is decrypted
        is_path: if True, the value is returned as a path

    returns:
        None if the key was not found
    """
    if decrypt:
        return get_decrypted_value(settings, CONFIG_SECTION, key, is_path)
    return settings.get_value(CONFIG_SECTION, key, is_path)


def set_config_value(settings: Settings, key: str, value: str, encrypt: bool = False) -> None:
    if encrypt:
        set_encrypted_value(settings, CONFIG_SECTION, key, value)
    else:
        settings.set_value(CONFIG_SECTION, key, value)


def delete_config_value(settings: Settings, key: str) -> bool:
    return settings.delete_value(CONFIG_SECTION, key)


def get_repository_path(settings: Settings) -> Optional[str]:
    path = settings.get_value(CONFIG_SECTION, REPOSITORY_PATH_KEY, is_path=True)
    if path:
        path = path.replace("\\", os.sep).replace("/", os.sep)
    return path


def get_global_packages_folder(settings: Settings) -> str:
    """environment variable first, then the settings file, then the default under CONFIG_DIR."""
    if settings is None:
        raise InvalidArgumentError("settings")

    path = os.environ.get(GLOBAL_PACKAGES_FOLDER_ENV)
    if not path:
        path = settings.get_value(CONFIG_SECTION, GLOBAL_PACKAGES_FOLDER_KEY, is_path=True)

    if path:
        return path.replace("\\", os.sep).replace("/", os.sep)

    return str(CONFIG_DIR / "packages") + os.sep

import os
from pathlib import Path
from typing import Optional

from .settings import Settings

CONFIG_DIR = Path.home() / ".registration"
SETTINGS_FILE = CONFIG_DIR / "settings.json"

CONFIG_SECTION = "config"
REGISTRY_URL_KEY = "registrationBaseUrl"
REGISTRY_URL_ENV = "REGISTRATION_BASE_URL"
DEFAULT_REGISTRY_URL = "https://api.nuget.org/v3/registration5-semver1/"

def get_settings(settings_file: Optional[Path] = None) -> Settings:
    """settings backed by the default settings file unless another is given."""
    return Settings(settings_file or SETTINGS_FILE)

def get_registry_url(settings: Optional[Settings] = None) -> str:
    """get the registration base URL: environment, then settings, then the default."""
    url = os.environ.get(REGISTRY_URL_ENV)
    if url:
        return url

    settings = settings or get_settings()
    url = settings.get_value(CONFIG_SECTION, REGISTRY_URL_KEY)
    return url or DEFAULT_REGISTRY_URL

def set_registry_url(url: str, settings: Optional[Settings] = None):
    """set the registration base URL in the settings file."""
    settings = settings or get_settings()
    try:
        settings.set_value(CONFIG_SECTION, REGISTRY_URL_KEY, url)
    except (IOError, PermissionError, OSError) as e:
        raise RuntimeError(f"failed to write settings file: {e}") from e

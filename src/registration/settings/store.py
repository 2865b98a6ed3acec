import json
from pathlib import Path
from typing import Optional

from .encryption import Encryptor
from .models import SettingsData


class Settings:
    """section/key settings persisted to a JSON file."""

    def __init__(self, settings_file: Path, key_file: Optional[Path] = None):
        self.settings_file = settings_file
        self.encryptor = Encryptor(key_file or settings_file.with_suffix(".key"))

    def load(self) -> SettingsData:
        """load settings from JSON file."""
        if not self.settings_file.exists():
            return SettingsData.empty()

        try:
            with open(self.settings_file, 'r') as f:
                data = json.load(f)
            return SettingsData(**data)
        except (json.JSONDecodeError, ValueError, TypeError):
            # corrupted file, return empty
            return SettingsData.empty()

    def save(self, data: SettingsData) -> None:
        """save settings to JSON file."""
        self.settings_file.parent.mkdir(parents=True, exist_ok=True)

        with open(self.settings_file, 'w') as f:
            json.dump(data.model_dump(), f, indent=2)

    def get_value(self, section: str, key: str, is_path: bool = False) -> Optional[str]:
        """
        get a value, None if the section or key does not exist.

        args:
            section: section name
            key: key within the section
            is_path: if True, a relative value is resolved against the
                     directory holding the settings file
        """
        value = self.load().sections.get(section, {}).get(key)
        if value is None or not is_path or not value:
            return value

        path = Path(value)
        if not path.is_absolute():
            path = self.settings_file.parent / path
        return str(path)

    def set_value(self, section: str, key: str, value: str) -> None:
        data = self.load()
        data.sections.setdefault(section, {})[key] = value
        self.save(data)

    def delete_value(self, section: str, key: str) -> bool:
        """delete a value, returning False if it did not exist."""
        data = self.load()
        values = data.sections.get(section)
        if values is None or key not in values:
            return False

        del values[key]
        if not values:
            del data.sections[section]
        self.save(data)
        return True

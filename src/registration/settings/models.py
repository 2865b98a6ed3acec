"""data models for persisted settings."""
from typing import Dict
from pydantic import BaseModel, Field


class SettingsData(BaseModel):
    """complete settings file: section -> key -> value."""
    sections: Dict[str, Dict[str, str]] = Field(default_factory=dict)

    @classmethod
    def empty(cls) -> "SettingsData":
        """create empty settings data."""
        return cls(sections={})

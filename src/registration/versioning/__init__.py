from .version import RegistryVersion
from .range import VersionRange

__all__ = ["RegistryVersion", "VersionRange"]

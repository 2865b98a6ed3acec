from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..domain.models import PackageIdentity
from ..versioning import RegistryVersion, VersionRange

class RegistryClient(ABC):
    @abstractmethod
    async def get_all_versions(
        self, package_id: str, include_prerelease: bool = True, include_unlisted: bool = False
    ) -> List[RegistryVersion]:
        """Get available versions for a package."""
        pass

    @abstractmethod
    async def get_package_metadata(
        self,
        package_id: str,
        version_range: VersionRange = VersionRange.ALL,
        include_prerelease: bool = True,
        include_unlisted: bool = False,
    ) -> List[Dict[str, Any]]:
        """Get catalog entries for the versions of a package matching the filters."""
        pass

    @abstractmethod
    async def get_version_metadata(self, identity: PackageIdentity) -> Optional[Dict[str, Any]]:
        """Get the catalog entry for a specific package version."""
        pass

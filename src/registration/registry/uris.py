from typing import Union

from ..domain.errors import InvalidArgumentError
from ..domain.models import PackageIdentity
from ..versioning import RegistryVersion

class RegistrationUris:
    """builds registration document URIs below a base URI."""

    def __init__(self, base_uri: str):
        if not base_uri or not str(base_uri).strip():
            raise InvalidArgumentError("base_uri")
        self.base_uri = str(base_uri).strip()

    def _root(self) -> str:
        return self.base_uri.rstrip("/")

    def get_index_uri(self, package_id: str) -> str:
        """uri of the registration index for a package."""
        if not package_id:
            raise InvalidArgumentError("package_id")
        return f"{self._root()}/{package_id.lower()}/index.json"

    def get_version_uri(self, package_id: str, version: Union[str, RegistryVersion]) -> str:
        """uri of the registration blob for one version of a package."""
        if not package_id:
            raise InvalidArgumentError("package_id")
        if version is None or version == "":
            raise InvalidArgumentError("version")
        if not isinstance(version, RegistryVersion):
            parsed = RegistryVersion.try_parse(version)
            if parsed is None:
                raise InvalidArgumentError("version", f"'{version}' is not a valid version")
            version = parsed

        normalized = version.to_normalized_string().lower()
        return f"{self._root()}/{package_id.lower()}/{normalized}.json"

    def get_identity_uri(self, identity: PackageIdentity) -> str:
        if identity is None:
            raise InvalidArgumentError("identity")
        return self.get_version_uri(identity.id, identity.version)

import logging
import re
from abc import ABC, abstractmethod
from typing import Callable, Iterable, List, Optional, Tuple, Union

from ..domain.errors import InvalidArgumentError

logger = logging.getLogger(__name__)

# host versions that ship without their own credential provider
LEGACY_HOST_PATTERN = re.compile(r"^14\.")


class CredentialProvider(ABC):
    """supplies credentials for a registry source."""

    @property
    @abstractmethod
    def id(self) -> str:
        pass

    @abstractmethod
    async def get_credentials(self, uri: str, is_retry: bool = False) -> Optional[Tuple[str, str]]:
        """return (username, password) for the uri, or None if this provider has none."""
        pass


class CredentialProviderImporter:
    """
    collects credential providers handed over by the host.

    when the host supplies no providers and reports a legacy version, a single
    fallback provider is built from the factory instead.
    """

    def __init__(
        self,
        host_version: Union[str, Callable[[], str]],
        fallback_provider_factory: Callable[[], CredentialProvider],
        error_handler: Callable[[str], None],
        provider_supplier: Optional[Callable[[], Iterable[CredentialProvider]]] = None,
    ):
        if host_version is None:
            raise InvalidArgumentError("host_version")
        if fallback_provider_factory is None:
            raise InvalidArgumentError("fallback_provider_factory")
        if error_handler is None:
            raise InvalidArgumentError("error_handler")

        self._host_version = host_version
        self._fallback_provider_factory = fallback_provider_factory
        self._error_handler = error_handler
        self._provider_supplier = provider_supplier or (lambda: [])

    @property
    def host_version(self) -> str:
        if callable(self._host_version):
            return self._host_version() or ""
        return self._host_version

    @property
    def is_legacy_host(self) -> bool:
        return bool(LEGACY_HOST_PATTERN.match(self.host_version))

    def get_providers(self) -> List[CredentialProvider]:
        providers = list(self._provider_supplier() or [])

        if not providers and self.is_legacy_host:
            try:
                providers.append(self._fallback_provider_factory())
            except (ImportError, OSError) as e:
                logger.debug(f"fallback credential provider failed to load: {e}")
                self._error_handler(f"Failed to load the fallback credential provider: {e}")

        return providers

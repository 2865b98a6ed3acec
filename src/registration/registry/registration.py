import asyncio
import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from .cache import DocumentCache
from .client import RegistryClient
from .transport import Transport
from .uris import RegistrationUris
from ..domain.errors import InvalidArgumentError, MalformedDocumentError
from ..domain.models import (
    CATALOG_PAGE_TYPE,
    InlinePage,
    PackageEntry,
    PackageIdentity,
    PageLink,
    UnknownItem,
    decode_items,
)
from ..versioning import RegistryVersion, VersionRange

logger = logging.getLogger(__name__)

# versions published in or before this year are unlisted
UNLISTED_PUBLISH_YEAR = 1901

def _parse_published(value: Any) -> Optional[datetime]:
    if not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        return None

def is_listed(catalog_entry: Dict[str, Any]) -> bool:
    """True if the entry has a publish date after the unlisted sentinel year."""
    published = _parse_published(catalog_entry.get("published"))
    return published is not None and published.year > UNLISTED_PUBLISH_YEAR

class RegistrationResource(RegistryClient):
    """
    reads package registration documents from a registry.

    every JSON document fetched through an instance is cached for the life of
    that instance, including the empty document that stands in for a missing
    blob. instances are meant to be short lived.
    """

    def __init__(self, transport: Transport, base_uri: str):
        if transport is None:
            raise InvalidArgumentError("transport")

        self.transport = transport
        self.uris = RegistrationUris(base_uri)
        self.cache = DocumentCache()

    @property
    def base_uri(self) -> str:
        return self.uris.base_uri

    def get_index_uri(self, package_id: str) -> str:
        return self.uris.get_index_uri(package_id)

    def get_version_uri(self, package_id: str, version: Union[str, RegistryVersion]) -> str:
        return self.uris.get_version_uri(package_id, version)

    def get_identity_uri(self, identity: PackageIdentity) -> str:
        return self.uris.get_identity_uri(identity)

    # document retrieval

    async def get_json(self, uri: str) -> Dict[str, Any]:
        """
        fetch a JSON document, serving repeats from the cache.

        a non-success response is cached as an empty document so the same
        blob is not requested again.

        raises:
            MalformedDocumentError: if a successful response is not a JSON object
        """
        cached = self.cache.get(uri)
        if cached is not None:
            logger.debug(f"cache hit for {uri}")
            return cached

        response = await self.transport.get(uri)

        if response.success:
            document = self._parse_document(uri, response.body)
        else:
            logger.debug(f"registry document missing at {uri}, caching empty document")
            document = {}

        self.cache.store(uri, document)
        return document

    @staticmethod
    def _parse_document(uri: str, body: bytes) -> Dict[str, Any]:
        try:
            document = json.loads(body)
        except ValueError as e:
            raise MalformedDocumentError(uri, str(e)) from e

        if not isinstance(document, dict):
            raise MalformedDocumentError(uri, f"expected a JSON object, got {type(document).__name__}")
        return document

    async def get_index(self, package_id: str) -> Dict[str, Any]:
        """the registration index for a package, empty if it does not exist."""
        return await self.get_json(self.get_index_uri(package_id))

    # pages and entries

    async def get_pages(self, package_id: str) -> List[Dict[str, Any]]:
        """
        catalog pages of a package in index order.

        inline pages are returned as they are, linked pages are fetched
        concurrently.
        """
        index = await self.get_index(package_id)
        items = decode_items(index)

        links = [item.url for item in items if isinstance(item, PageLink)]
        fetched = iter(await asyncio.gather(*(self.get_json(url) for url in links)))

        pages = []
        for item in items:
            if isinstance(item, InlinePage):
                pages.append(item.document)
            elif isinstance(item, PageLink):
                pages.append(next(fetched))
            elif isinstance(item, UnknownItem):
                if item.type == CATALOG_PAGE_TYPE:
                    logger.warning(f"skipping catalog page without items or @id in index of {package_id}")
            elif isinstance(item, PackageEntry):
                # entries belong to pages, not to the index
                continue

        return pages

    async def _get_entries(self, package_id: str) -> List[PackageEntry]:
        entries = []
        for page in await self.get_pages(package_id):
            for item in decode_items(page):
                if isinstance(item, PackageEntry):
                    entries.append(item)
        return entries

    async def get_package_entries(self, package_id: str, include_unlisted: bool) -> List[Dict[str, Any]]:
        """
        all items of type Package across the pages of a package.

        include_unlisted is accepted for callers that select entries
        themselves; listing state is filtered in get_package_metadata.
        """
        return [entry.document for entry in await self._get_entries(package_id)]

    async def get_package_metadata(
        self,
        package_id: str,
        version_range: VersionRange = VersionRange.ALL,
        include_prerelease: bool = True,
        include_unlisted: bool = False,
    ) -> List[Dict[str, Any]]:
        """
        catalog entries of a package filtered by version range, prerelease
        policy and listing state.

        returned entries are copies with the entry's packageContent (download
        url) copied onto them.
        """
        if not package_id:
            raise InvalidArgumentError("package_id")
        if version_range is None:
            version_range = VersionRange.ALL

        results = []
        for entry in await self._get_entries(package_id):
            catalog_entry = entry.catalog_entry
            if catalog_entry is None:
                continue

            version = RegistryVersion.try_parse(catalog_entry.get("version"))
            if version is None:
                continue

            if not version_range.satisfies(version):
                continue
            if version.is_prerelease and not include_prerelease:
                continue

            published = _parse_published(catalog_entry.get("published"))
            if published is None:
                continue
            if published.year <= UNLISTED_PUBLISH_YEAR and not include_unlisted:
                continue

            result = dict(catalog_entry)
            if entry.has_package_content:
                result["packageContent"] = entry.package_content
            results.append(result)

        return results

    async def get_version_metadata(self, identity: PackageIdentity) -> Optional[Dict[str, Any]]:
        """the catalog entry for exactly this identity, or None."""
        if identity is None:
            raise InvalidArgumentError("identity")

        results = await self.get_package_metadata(
            identity.id,
            VersionRange.exact(identity.version),
            include_prerelease=True,
            include_unlisted=True,
        )
        return results[0] if results else None

    async def get_all_versions(
        self, package_id: str, include_prerelease: bool = True, include_unlisted: bool = False
    ) -> List[RegistryVersion]:
        """distinct versions of a package, lowest first."""
        entries = await self.get_package_metadata(
            package_id,
            VersionRange.ALL,
            include_prerelease=include_prerelease,
            include_unlisted=include_unlisted,
        )
        versions = {RegistryVersion.parse(entry["version"]) for entry in entries}
        return sorted(versions)

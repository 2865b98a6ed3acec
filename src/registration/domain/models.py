from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from ..versioning import RegistryVersion

CATALOG_PAGE_TYPE = "catalog:CatalogPage"
PACKAGE_TYPE = "Package"

class PackageIdentity(BaseModel):
    """a package id together with one concrete version."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: str
    version: RegistryVersion

    @field_validator("id")
    @classmethod
    def _id_not_empty(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("package id cannot be empty")
        return value

    @field_validator("version", mode="before")
    @classmethod
    def _parse_version(cls, value: Any) -> RegistryVersion:
        if isinstance(value, str):
            return RegistryVersion.parse(value)
        return value

    def __eq__(self, other):
        if not isinstance(other, PackageIdentity):
            return NotImplemented
        return self.id.lower() == other.id.lower() and self.version == other.version

    def __hash__(self):
        return hash((self.id.lower(), self.version))

    def __str__(self):
        return f"{self.id} {self.version.to_normalized_string()}"

# catalog items, decoded once from the raw JSON tree

class InlinePage(BaseModel):
    """a catalog page embedded in the index, items included."""
    document: Dict[str, Any]

class PageLink(BaseModel):
    """a catalog page that has to be fetched from its @id."""
    url: str

class PackageEntry(BaseModel):
    """a per-version item of a catalog page."""
    document: Dict[str, Any]

    @property
    def catalog_entry(self) -> Optional[Dict[str, Any]]:
        entry = self.document.get("catalogEntry")
        return entry if isinstance(entry, dict) else None

    @property
    def has_package_content(self) -> bool:
        return "packageContent" in self.document

    @property
    def package_content(self) -> Optional[Any]:
        return self.document.get("packageContent")

class UnknownItem(BaseModel):
    type: Optional[str] = None

CatalogItem = Union[InlinePage, PageLink, PackageEntry, UnknownItem]

def _item_type(item: Any) -> Optional[str]:
    if not isinstance(item, dict):
        return None
    value = item.get("@type")
    return value if isinstance(value, str) else None

def decode_item(item: Any) -> CatalogItem:
    """classify a raw item of an index or page `items` array."""
    item_type = _item_type(item)

    if item_type == CATALOG_PAGE_TYPE:
        if isinstance(item.get("items"), list):
            return InlinePage(document=item)
        url = item.get("@id")
        if isinstance(url, str) and url:
            return PageLink(url=url)
        return UnknownItem(type=item_type)

    if item_type == PACKAGE_TYPE:
        return PackageEntry(document=item)

    return UnknownItem(type=item_type)

def decode_items(document: Dict[str, Any]) -> List[CatalogItem]:
    """decode the `items` array of a document; a missing array means no items."""
    items = document.get("items")
    if not isinstance(items, list):
        return []
    return [decode_item(item) for item in items]

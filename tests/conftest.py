"""shared fixtures for the registration client tests."""
import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from registration.registry.registration import RegistrationResource
from registration.registry.transport import TransportResponse

BASE_URI = "https://api.example.org/v3/registration/"


class FakeTransport:
    """serves canned documents and records every uri requested."""

    def __init__(self, documents=None):
        self.documents = documents or {}
        self.calls = []

    def add(self, uri, document):
        """document may be a dict (served as JSON) or raw bytes."""
        self.documents[uri] = document

    def count(self, uri):
        return self.calls.count(uri)

    async def get(self, uri):
        self.calls.append(uri)
        if uri not in self.documents:
            return TransportResponse(success=False, body=b"Not Found")
        body = self.documents[uri]
        if not isinstance(body, bytes):
            body = json.dumps(body).encode("utf-8")
        return TransportResponse(success=True, body=body)


def catalog_entry(version, published="2020-01-01T00:00:00+00:00", **extra):
    entry = {"@type": "PackageDetails", "id": "Test.Package", "version": version, "published": published}
    entry.update(extra)
    return entry


def package_item(version, published="2020-01-01T00:00:00+00:00", package_content=None):
    item = {
        "@id": f"{BASE_URI}test.package/{version.lower()}.json",
        "@type": "Package",
        "catalogEntry": catalog_entry(version, published),
    }
    if package_content is not None:
        item["packageContent"] = package_content
    return item


def inline_page(*items):
    return {"@id": f"{BASE_URI}test.package/index.json#page", "@type": "catalog:CatalogPage", "items": list(items)}


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def resource(transport):
    return RegistrationResource(transport, BASE_URI)

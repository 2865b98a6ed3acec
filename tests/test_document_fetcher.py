"""test suite for cached document retrieval."""
import asyncio
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from registration.domain.errors import InvalidArgumentError, MalformedDocumentError
from registration.registry.cache import DocumentCache
from registration.registry.registration import RegistrationResource

from conftest import BASE_URI, FakeTransport

DOC_URI = BASE_URI + "foo/index.json"


class TestGetJson:
    def test_success_is_parsed(self, resource, transport):
        transport.add(DOC_URI, {"items": []})
        assert asyncio.run(resource.get_json(DOC_URI)) == {"items": []}

    def test_second_fetch_served_from_cache(self, resource, transport):
        transport.add(DOC_URI, {"count": 1})

        first = asyncio.run(resource.get_json(DOC_URI))
        second = asyncio.run(resource.get_json(DOC_URI))

        assert first == second
        assert transport.count(DOC_URI) == 1

    def test_missing_document_is_empty_and_cached(self, resource, transport):
        assert asyncio.run(resource.get_json(DOC_URI)) == {}
        assert asyncio.run(resource.get_json(DOC_URI)) == {}
        assert transport.count(DOC_URI) == 1
        assert resource.cache.has_document(DOC_URI)

    def test_malformed_body_raises_and_is_not_cached(self, resource, transport):
        transport.add(DOC_URI, b"<html>oops</html>")

        with pytest.raises(MalformedDocumentError) as exc_info:
            asyncio.run(resource.get_json(DOC_URI))
        assert exc_info.value.uri == DOC_URI
        assert not resource.cache.has_document(DOC_URI)

        # the next call goes back to the network
        with pytest.raises(MalformedDocumentError):
            asyncio.run(resource.get_json(DOC_URI))
        assert transport.count(DOC_URI) == 2

    @pytest.mark.parametrize("body", [b"[1, 2]", b"\"text\"", b"null", b"{\"unterminated\": "])
    def test_non_object_body_is_malformed(self, resource, transport, body):
        transport.add(DOC_URI, body)
        with pytest.raises(MalformedDocumentError):
            asyncio.run(resource.get_json(DOC_URI))

    def test_malformed_page_is_not_absorbed(self, resource, transport):
        transport.add(resource.get_index_uri("foo"), {"items": [
            {"@id": BASE_URI + "foo/page/0.json", "@type": "catalog:CatalogPage"},
        ]})
        transport.add(BASE_URI + "foo/page/0.json", b"not json")

        with pytest.raises(MalformedDocumentError):
            asyncio.run(resource.get_package_metadata("foo"))

    def test_get_index(self, resource, transport):
        transport.add(BASE_URI + "foo/index.json", {"count": 0})
        assert asyncio.run(resource.get_index("Foo")) == {"count": 0}

    def test_cancelled_fetch_leaves_cache_untouched(self):
        class BlockingTransport:
            def __init__(self):
                self.started = asyncio.Event()

            async def get(self, uri):
                self.started.set()
                await asyncio.Event().wait()

        async def scenario():
            transport = BlockingTransport()
            resource = RegistrationResource(transport, BASE_URI)
            task = asyncio.create_task(resource.get_json(DOC_URI))
            await transport.started.wait()
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task
            return resource

        resource = asyncio.run(scenario())
        assert len(resource.cache) == 0

    def test_concurrent_requests_for_same_uri(self):
        class SlowTransport(FakeTransport):
            async def get(self, uri):
                await asyncio.sleep(0.01)
                return await super().get(uri)

        transport = SlowTransport({DOC_URI: {"v": 1}})
        resource = RegistrationResource(transport, BASE_URI)

        async def scenario():
            return await asyncio.gather(*(resource.get_json(DOC_URI) for _ in range(3)))

        results = asyncio.run(scenario())
        assert results == [{"v": 1}] * 3
        assert len(resource.cache) == 1
        # no de-duplication of in-flight requests
        assert 1 <= transport.count(DOC_URI) <= 3


class TestResourceConstruction:
    def test_requires_transport(self):
        with pytest.raises(InvalidArgumentError):
            RegistrationResource(None, BASE_URI)

    def test_requires_base_uri(self):
        with pytest.raises(InvalidArgumentError):
            RegistrationResource(FakeTransport(), "  ")

    def test_cache_starts_empty(self, resource):
        assert len(resource.cache) == 0
        assert resource.base_uri == BASE_URI


class TestDocumentCache:
    def test_store_and_get(self):
        cache = DocumentCache()
        cache.store("https://x.org/a.json", {"a": 1})
        assert cache.get("https://x.org/a.json") == {"a": 1}
        assert cache.get("https://x.org/b.json") is None
        assert list(cache) == ["https://x.org/a.json"]

    def test_empty_document_counts_as_value(self):
        cache = DocumentCache()
        cache.store("https://x.org/a.json", {})
        assert cache.has_document("https://x.org/a.json")
        assert cache.get("https://x.org/a.json") == {}

    def test_last_write_wins(self):
        cache = DocumentCache()
        cache.store("https://x.org/a.json", {"a": 1})
        cache.store("https://x.org/a.json", {"a": 2})
        assert len(cache) == 1
        assert cache.get("https://x.org/a.json") == {"a": 2}

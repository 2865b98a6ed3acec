from typing import Any, Dict, Iterator, Optional

import httpx

class DocumentCache:
    """
    in-memory store of registry documents keyed by normalized URI.

    entries are never evicted; an absent document is stored as an empty dict
    so it counts as a value like any other.
    """

    def __init__(self):
        self._documents: Dict[str, Dict[str, Any]] = {}

    @staticmethod
    def normalize(uri: str) -> str:
        return str(httpx.URL(str(uri)))

    def get(self, uri: str) -> Optional[Dict[str, Any]]:
        return self._documents.get(self.normalize(uri))

    def has_document(self, uri: str) -> bool:
        return self.normalize(uri) in self._documents

    def store(self, uri: str, document: Dict[str, Any]) -> None:
        # concurrent writers carry equal documents, last one wins
        self._documents[self.normalize(uri)] = document

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._documents))

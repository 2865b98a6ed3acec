"""registry version strings: parsing, ordering and normalization."""

import re
from functools import total_ordering
from typing import List, Optional, Tuple

_VERSION_PATTERN = re.compile(
    r"^(?P<core>\d+(?:\.\d+){0,3})"
    r"(?:-(?P<release>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<metadata>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)


def _compare_labels(left: List[str], right: List[str]) -> int:
    """compare dot-separated release labels, returning -1, 0 or 1."""
    for a, b in zip(left, right):
        a_numeric, b_numeric = a.isdigit(), b.isdigit()
        if a_numeric and b_numeric:
            result = (int(a) > int(b)) - (int(a) < int(b))
        elif a_numeric:
            result = -1
        elif b_numeric:
            result = 1
        else:
            a_key, b_key = a.lower(), b.lower()
            result = (a_key > b_key) - (a_key < b_key)
        if result:
            return result
    return (len(left) > len(right)) - (len(left) < len(right))


@total_ordering
class RegistryVersion:
    """
    a semantic version as understood by the registry.

    up to four numeric segments, optional release labels after '-' and
    optional build metadata after '+'. metadata is carried for display and
    URI construction but never takes part in comparisons.
    """

    __slots__ = ("major", "minor", "patch", "revision", "release_labels", "metadata", "_original")

    def __init__(
        self,
        major: int,
        minor: int = 0,
        patch: int = 0,
        revision: int = 0,
        release_labels: Optional[List[str]] = None,
        metadata: Optional[str] = None,
        original: Optional[str] = None,
    ):
        if min(major, minor, patch, revision) < 0:
            raise ValueError("version segments must be non-negative")
        self.major = major
        self.minor = minor
        self.patch = patch
        self.revision = revision
        self.release_labels = list(release_labels or [])
        self.metadata = metadata or None
        self._original = original

    @classmethod
    def parse(cls, value: str) -> "RegistryVersion":
        """parse a version string, raising ValueError when it is not valid."""
        if value is None:
            raise ValueError("version string cannot be None")
        text = str(value).strip()
        match = _VERSION_PATTERN.match(text)
        if not match:
            raise ValueError(f"'{value}' is not a valid version string")

        segments = [int(s) for s in match.group("core").split(".")]
        segments += [0] * (4 - len(segments))
        release = match.group("release")
        return cls(
            *segments,
            release_labels=release.split(".") if release else None,
            metadata=match.group("metadata"),
            original=text,
        )

    @classmethod
    def try_parse(cls, value) -> Optional["RegistryVersion"]:
        if value is None:
            return None
        try:
            return cls.parse(value)
        except ValueError:
            return None

    @property
    def release(self) -> str:
        return ".".join(self.release_labels)

    @property
    def is_prerelease(self) -> bool:
        return bool(self.release_labels)

    @property
    def has_metadata(self) -> bool:
        return self.metadata is not None

    def to_normalized_string(self) -> str:
        """
        canonical form used by the registry.

        trailing zero revision is dropped, so 1.0, 1.0.0 and 1.0.0.0 all
        normalize to 1.0.0.
        """
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.revision:
            text += f".{self.revision}"
        if self.release_labels:
            text += f"-{self.release}"
        if self.has_metadata:
            text += f"+{self.metadata}"
        return text

    def _key(self) -> Tuple[int, int, int, int]:
        return (self.major, self.minor, self.patch, self.revision)

    def _compare(self, other: "RegistryVersion") -> int:
        if self._key() != other._key():
            return -1 if self._key() < other._key() else 1
        # a stable version sorts after any of its prereleases
        if not self.release_labels or not other.release_labels:
            return (not self.release_labels) - (not other.release_labels)
        return _compare_labels(self.release_labels, other.release_labels)

    def __eq__(self, other):
        if not isinstance(other, RegistryVersion):
            return NotImplemented
        return self._compare(other) == 0

    def __lt__(self, other):
        if not isinstance(other, RegistryVersion):
            return NotImplemented
        return self._compare(other) < 0

    def __hash__(self):
        labels = tuple(int(label) if label.isdigit() else label.lower() for label in self.release_labels)
        return hash((self._key(), labels))

    def __str__(self):
        return self._original or self.to_normalized_string()

    def __repr__(self):
        return f"RegistryVersion('{self}')"

from typing import Optional

from .version import RegistryVersion


class VersionRange:
    """an interval over registry versions; either bound may be open-ended."""

    ALL: "VersionRange"

    def __init__(
        self,
        min_version: Optional[RegistryVersion] = None,
        is_min_inclusive: bool = True,
        max_version: Optional[RegistryVersion] = None,
        is_max_inclusive: bool = False,
    ):
        self.min_version = min_version
        self.is_min_inclusive = is_min_inclusive
        self.max_version = max_version
        self.is_max_inclusive = is_max_inclusive

    @classmethod
    def exact(cls, version: RegistryVersion) -> "VersionRange":
        return cls(version, True, version, True)

    @classmethod
    def parse(cls, value: str) -> "VersionRange":
        """
        parse interval notation.

        accepted forms:
            1.0         at least 1.0
            [1.0]       exactly 1.0
            [1.0,2.0)   1.0 <= v < 2.0
            (,2.0]      v <= 2.0
            (1.0,)      v > 1.0

        raises:
            ValueError: if the value is not a valid range
        """
        text = (value or "").strip()
        if not text:
            raise ValueError("version range cannot be empty")

        if text[0] not in "[(":
            return cls(RegistryVersion.parse(text), True)

        if len(text) < 3 or text[-1] not in "])":
            raise ValueError(f"'{value}' is not a valid version range")

        is_min_inclusive = text[0] == "["
        is_max_inclusive = text[-1] == "]"
        body = text[1:-1]

        if "," not in body:
            # only [x] is meaningful for a single version
            if not (is_min_inclusive and is_max_inclusive):
                raise ValueError(f"'{value}' is not a valid version range")
            version = RegistryVersion.parse(body)
            return cls.exact(version)

        parts = body.split(",")
        if len(parts) != 2:
            raise ValueError(f"'{value}' is not a valid version range")

        low, high = (p.strip() for p in parts)
        min_version = RegistryVersion.parse(low) if low else None
        max_version = RegistryVersion.parse(high) if high else None
        if min_version is None and max_version is None:
            raise ValueError(f"'{value}' has no bounds")
        if min_version is not None and max_version is not None:
            if max_version < min_version or (
                max_version == min_version and not (is_min_inclusive and is_max_inclusive)
            ):
                raise ValueError(f"'{value}' is an empty range")

        return cls(min_version, is_min_inclusive, max_version, is_max_inclusive)

    @property
    def has_lower_bound(self) -> bool:
        return self.min_version is not None

    @property
    def has_upper_bound(self) -> bool:
        return self.max_version is not None

    def satisfies(self, version: RegistryVersion) -> bool:
        if version is None:
            raise ValueError("version cannot be None")

        if self.has_lower_bound:
            if self.is_min_inclusive:
                if version < self.min_version:
                    return False
            elif version <= self.min_version:
                return False

        if self.has_upper_bound:
            if self.is_max_inclusive:
                if version > self.max_version:
                    return False
            elif version >= self.max_version:
                return False

        return True

    def __eq__(self, other):
        if not isinstance(other, VersionRange):
            return NotImplemented
        return (
            self.min_version == other.min_version
            and self.max_version == other.max_version
            and (self.min_version is None or self.is_min_inclusive == other.is_min_inclusive)
            and (self.max_version is None or self.is_max_inclusive == other.is_max_inclusive)
        )

    def __hash__(self):
        return hash((self.min_version, self.max_version))

    def __str__(self):
        if not self.has_lower_bound and not self.has_upper_bound:
            return "(, )"
        if (
            self.min_version is not None
            and self.min_version == self.max_version
            and self.is_min_inclusive
            and self.is_max_inclusive
        ):
            return f"[{self.min_version.to_normalized_string()}]"
        low = self.min_version.to_normalized_string() if self.has_lower_bound else ""
        high = self.max_version.to_normalized_string() if self.has_upper_bound else ""
        return (
            f"{'[' if self.is_min_inclusive and low else '('}{low}, "
            f"{high}{']' if self.is_max_inclusive and high else ')'}"
        )

    def __repr__(self):
        return f"VersionRange('{self}')"


VersionRange.ALL = VersionRange()

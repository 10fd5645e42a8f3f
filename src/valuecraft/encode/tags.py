"""Closed tag alphabet for encoded elements.

Each tag records one facet of a member's role: where it lives (value or
builder), whether it is static, and what kind of member it is. A TagSet is
an immutable bitset keyed by tag ordinal, so role predicates reduce to a
few bit tests.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Tuple, Union


class Tag(Enum):
    """Facets of an encoded element. The value is the tag ordinal."""

    IMPL = 0
    EXPOSE = 1
    BUILDER = 2
    STATIC = 3
    PRIVATE = 4
    FINAL = 5
    BUILD = 6
    INIT = 7
    FROM = 8
    HELPER = 9
    FIELD = 10
    TO_STRING = 11
    HASH_CODE = 12
    EQUALS = 13
    COPY = 14
    SYNTH = 15

    @property
    def bit(self) -> int:
        return 1 << self.value

    @classmethod
    def parse(cls, name: str) -> "Tag":
        """Resolve a tag by name, ignoring case and surrounding whitespace.

        Raises:
            ValueError: If the name is not one of the closed set
        """
        key = name.strip().upper()
        try:
            return cls[key]
        except KeyError:
            available = ", ".join(t.name for t in cls)
            raise ValueError(f"Unknown tag '{name}'. Available: {available}") from None


_ALL_BITS = sum(t.bit for t in Tag)


@dataclass(frozen=True)
class TagSet:
    """Immutable set of tags stored as a bitset.

    Attributes:
        bits: Bit i is set when the tag with ordinal i is a member
    """
    bits: int = 0

    def __post_init__(self):
        if self.bits & ~_ALL_BITS:
            raise ValueError(f"TagSet bits outside the tag alphabet: {self.bits:#x}")

    @classmethod
    def of(cls, *tags: Tag) -> "TagSet":
        bits = 0
        for tag in tags:
            if not isinstance(tag, Tag):
                raise TypeError(f"TagSet members must be Tag, got {type(tag).__name__}")
            bits |= tag.bit
        return cls(bits)

    @classmethod
    def parse(cls, names: Iterable[str]) -> "TagSet":
        """Build a TagSet from tag names (case-insensitive)."""
        return cls.of(*(Tag.parse(n) for n in names))

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, Tag) and bool(self.bits & tag.bit)

    def __iter__(self) -> Iterator[Tag]:
        return (t for t in Tag if self.bits & t.bit)

    def __len__(self) -> int:
        return bin(self.bits).count("1")

    def __bool__(self) -> bool:
        return self.bits != 0

    def with_tags(self, *tags: Tag) -> "TagSet":
        return TagSet(self.bits | TagSet.of(*tags).bits)

    def names(self) -> Tuple[str, ...]:
        """Tag names in ordinal order."""
        return tuple(t.name for t in self)

    def __repr__(self) -> str:
        return f"TagSet({', '.join(self.names())})"


TagsLike = Union[TagSet, Iterable[Tag]]


def as_tag_set(tags: TagsLike) -> TagSet:
    """Coerce a TagSet or an iterable of Tag into a TagSet."""
    if isinstance(tags, TagSet):
        return tags
    return TagSet.of(*tags)

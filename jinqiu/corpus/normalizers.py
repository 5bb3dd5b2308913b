"""
Normalizers - map each collection's raw JSON shape onto PoemRecord.

Every collection kind has its own normalizer class with a fixed field
resolution order. Dispatch is by the collection's static kind tag; the raw
object's shape is never inspected to pick a normalizer.
"""

import random
import string
from abc import ABC
from typing import Any, Dict, List, Optional, Sequence, Type

from ..models import AUTHOR_PLACEHOLDER, TITLE_PLACEHOLDER, PoemRecord
from ..utils import split_content


def first_value(raw: Dict[str, Any], fields: Sequence[str]) -> Any:
    """Return the first non-empty value among ``fields``, or None."""
    for name in fields:
        value = raw.get(name)
        if value:
            return value
    return None


class BaseNormalizer(ABC):
    """
    Base class for all normalizers.

    Subclasses declare their resolution order through class attributes and
    override the ``resolve_*`` hooks only where a collection needs more than
    "first non-empty field wins".
    """

    kind: str = ""
    title_fields: Sequence[str] = ("title",)
    author_fields: Sequence[str] = ("author",)
    content_fields: Sequence[str] = ("paragraphs",)
    title_default: str = TITLE_PLACEHOLDER
    author_default: str = AUTHOR_PLACEHOLDER

    def __init__(self, dynasty: str = "", id_prefix: Optional[str] = None):
        """
        Initialize normalizer for one source.

        Args:
            dynasty: Era label attached to every record from this source
            id_prefix: Prefix of minted ids (defaults to the kind tag)
        """
        self.dynasty = dynasty
        self.id_prefix = id_prefix or self.kind

    def normalize(self, raw: Any, index: int = 0) -> PoemRecord:
        """
        Produce one canonical record. Never raises.

        Args:
            raw: One raw JSON object from the source file
            index: Position of the object within its source

        Returns:
            PoemRecord with placeholders for anything missing
        """
        if not isinstance(raw, dict):
            raw = {}
        return PoemRecord(
            id=self.make_id(raw, index),
            title=str(self.resolve_title(raw) or self.title_default),
            author=str(self.resolve_author(raw) or self.author_default),
            dynasty=self.dynasty,
            content=self.resolve_content(raw),
            tags=self.resolve_tags(raw),
        )

    def normalize_all(self, items: Any, start: int = 0) -> List[PoemRecord]:
        """Normalize a whole file; non-list payloads yield no records."""
        if not isinstance(items, list):
            return []
        return [self.normalize(item, start + i) for i, item in enumerate(items)]

    def make_id(self, raw: Dict[str, Any], index: int) -> str:
        return f"{self.id_prefix}-{index}"

    def resolve_title(self, raw: Dict[str, Any]) -> Any:
        return first_value(raw, self.title_fields)

    def resolve_author(self, raw: Dict[str, Any]) -> Any:
        return first_value(raw, self.author_fields)

    def resolve_content(self, raw: Dict[str, Any]) -> List[str]:
        return split_content(first_value(raw, self.content_fields))

    def resolve_tags(self, raw: Dict[str, Any]) -> List[str]:
        return []


class TangNormalizer(BaseNormalizer):
    """唐诗三百首: keeps the source's own id when it has one."""

    kind = "tang"
    content_fields = ("contents", "paragraphs")

    def make_id(self, raw: Dict[str, Any], index: int) -> str:
        # Positional ids live under "n" so they never collide with source ids
        source_id = raw.get("id")
        if source_id is None or source_id == "":
            return f"{self.id_prefix}-n{index}"
        return f"{self.id_prefix}-{source_id}"


class ShuimoNormalizer(TangNormalizer):
    """水墨唐诗 shares the Tang shape."""

    kind = "shuimo"


class SongNormalizer(BaseNormalizer):
    """宋词三百首: ci are titled by their tune (``rhythmic``)."""

    kind = "song"
    title_fields = ("rhythmic",)


class NalanNormalizer(BaseNormalizer):
    """纳兰性德诗集: stores lines under ``para``."""

    kind = "nalan"
    title_fields = ("title", "rhythmic")
    content_fields = ("para", "paragraphs")
    author_default = "纳兰性德"


class NantangNormalizer(BaseNormalizer):
    """五代诗词 南唐 volume."""

    kind = "nantang"
    title_fields = ("rhythmic", "title")


class HuajianNormalizer(NantangNormalizer):
    """花间集 volumes."""

    kind = "huajian"


class ShijingNormalizer(BaseNormalizer):
    """诗经: untitled odes fall back to ``chapter·section``."""

    kind = "shijing"
    content_fields = ("content", "paragraphs")

    def resolve_title(self, raw: Dict[str, Any]) -> Any:
        if raw.get("title"):
            return raw["title"]
        chapter, section = raw.get("chapter"), raw.get("section")
        if chapter or section:
            return f"{chapter or ''}·{section or ''}"
        return None

    def resolve_author(self, raw: Dict[str, Any]) -> Any:
        return None


class LibraryNormalizer(BaseNormalizer):
    """Category pages of the library view accept every known shape."""

    kind = "library"
    title_fields = ("title", "rhythmic")
    content_fields = ("paragraphs", "content", "para", "contents")


class ExternalNormalizer(BaseNormalizer):
    """
    Records found by the multi-file external search.

    Ids carry a random suffix, so they are unique per session but not
    reproducible across reloads.
    """

    kind = "external"
    title_fields = ("title", "rhythmic")
    author_fields = ("author", "authorName")
    content_fields = ("paragraphs", "content", "para")
    author_default = "Unknown"

    SUFFIX_ALPHABET = string.ascii_lowercase + string.digits

    def __init__(
        self,
        dynasty: str = "",
        id_prefix: Optional[str] = None,
        rng: Optional[random.Random] = None
    ):
        super().__init__(dynasty, id_prefix)
        self.rng = rng or random.Random()

    def make_id(self, raw: Dict[str, Any], index: int) -> str:
        title = self.resolve_title(raw) or self.title_default
        author = self.resolve_author(raw) or self.author_default
        suffix = "".join(self.rng.choice(self.SUFFIX_ALPHABET) for _ in range(9))
        return f"ext-{self.id_prefix}-{author}-{title}-{suffix}"


class CanonicalNormalizer(BaseNormalizer):
    """Records already in canonical shape (e.g. ``PoemRecord.to_dict()``)."""

    kind = "canonical"
    content_fields = ("content",)

    def make_id(self, raw: Dict[str, Any], index: int) -> str:
        return str(raw.get("id") or f"{self.id_prefix}-{index}")

    def normalize(self, raw: Any, index: int = 0) -> PoemRecord:
        if isinstance(raw, PoemRecord):
            raw = raw.to_dict()
        record = super().normalize(raw, index)
        if isinstance(raw, dict) and raw.get("dynasty"):
            record.dynasty = str(raw["dynasty"])
        return record

    def resolve_tags(self, raw: Dict[str, Any]) -> List[str]:
        tags = raw.get("tags")
        return [str(t) for t in tags] if isinstance(tags, list) else []


class NormalizerRegistry:
    """
    Registry of normalizer classes keyed by collection kind.

    Usage:
        normalizer = NormalizerRegistry.get("song", dynasty="宋")
        records = normalizer.normalize_all(raw_items)
    """

    _normalizers: Dict[str, Type[BaseNormalizer]] = {}

    @classmethod
    def register(cls, normalizer_class: Type[BaseNormalizer]) -> None:
        """Register a normalizer under its ``kind`` tag."""
        cls._normalizers[normalizer_class.kind] = normalizer_class

    @classmethod
    def get(cls, kind: str, dynasty: str = "", id_prefix: Optional[str] = None, **kwargs) -> BaseNormalizer:
        """
        Get a normalizer instance for a collection kind.

        Raises:
            KeyError: If kind is not registered
        """
        if kind not in cls._normalizers:
            available = list(cls._normalizers.keys())
            raise KeyError(f"Normalizer '{kind}' not found. Available: {available}")
        return cls._normalizers[kind](dynasty=dynasty, id_prefix=id_prefix, **kwargs)

    @classmethod
    def list_kinds(cls) -> List[str]:
        """List all registered kinds."""
        return list(cls._normalizers.keys())


def _register_default_normalizers() -> None:
    """Register built-in normalizers on module load."""
    for normalizer_class in (
        TangNormalizer,
        ShuimoNormalizer,
        SongNormalizer,
        NalanNormalizer,
        NantangNormalizer,
        HuajianNormalizer,
        ShijingNormalizer,
        LibraryNormalizer,
        ExternalNormalizer,
        CanonicalNormalizer,
    ):
        NormalizerRegistry.register(normalizer_class)


_register_default_normalizers()

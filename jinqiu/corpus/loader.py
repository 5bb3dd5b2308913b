"""
Corpus Loader - fetch collections and turn them into PoemRecords.

Three loading modes:
- load_all(): every home-corpus source concurrently, tolerating failures
- load_category_page(): one page of one library category
- load_description(): the Markdown README of a category
"""

import asyncio
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import markdown

from ..config import (
    COLLECTIONS,
    CUSTOM_CATEGORY,
    HOME_SOURCES,
    CollectionSpec,
    Config,
    HomeSource,
)
from ..config.collections import COMPOSITE, SHARDED
from ..models import PoemRecord
from ..utils import setup_logger
from .normalizers import NormalizerRegistry
from .sources import BaseSource, create_source

logger = setup_logger(__name__)


@dataclass
class CategoryPage:
    """One page of a library category."""

    records: List[PoemRecord] = field(default_factory=list)
    has_more: bool = False


def render_description(text: str) -> str:
    """
    Render a description document to HTML.

    Soft line breaks are kept as ``<br />`` rather than collapsed.
    """
    return markdown.markdown(text or "", extensions=["nl2br"])


class CorpusLoader:
    """
    Load poem collections from a corpus source.

    Usage:
        async with CorpusLoader() as loader:
            poems = await loader.load_all()
            page = await loader.load_category_page("tang-300", 0)
    """

    def __init__(
        self,
        source: Optional[BaseSource] = None,
        collections: Optional[Dict[str, CollectionSpec]] = None,
        home_sources: Optional[Sequence[HomeSource]] = None,
        shard_step: int = Config.SHARD_STEP
    ):
        """
        Initialize corpus loader.

        Args:
            source: Where files are read from (defaults to create_source())
            collections: Category catalog (defaults to COLLECTIONS)
            home_sources: Files of the merged home corpus (defaults to HOME_SOURCES)
            shard_step: Numeric offset between shard files of sharded categories
        """
        self.source = source or create_source()
        self.collections = collections if collections is not None else COLLECTIONS
        self.home_sources = list(home_sources if home_sources is not None else HOME_SOURCES)
        self.shard_step = shard_step

    async def close(self) -> None:
        await self.source.close()

    async def __aenter__(self) -> "CorpusLoader":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _load_home_source(self, home: HomeSource) -> List[PoemRecord]:
        data = await self.source.fetch_json(home.path)
        if data is None:
            raise IOError(f"Failed to fetch {home.path}")
        normalizer = NormalizerRegistry.get(home.kind, dynasty=home.dynasty, id_prefix=home.id_prefix)
        return normalizer.normalize_all(data)

    async def load_all(self) -> List[PoemRecord]:
        """
        Load the merged home corpus.

        Sources are fetched concurrently. A failed source contributes no
        records and logs a warning; it never aborts the others.

        Returns:
            Records of every source that loaded, in catalog order
        """
        results = await asyncio.gather(
            *[self._load_home_source(home) for home in self.home_sources],
            return_exceptions=True
        )

        poems: List[PoemRecord] = []
        failed = 0
        for home, result in zip(self.home_sources, results):
            if isinstance(result, Exception):
                failed += 1
                logger.warning("Failed to load data: %s (%s)", home.path, result)
                continue
            poems.extend(result)

        logger.info("Loaded %d poems from %d sources (%d failed)",
                    len(poems), len(self.home_sources), failed)
        return poems

    async def load_category_page(self, category: str, page: int = 0) -> CategoryPage:
        """
        Load one page of a library category.

        Single-file categories only have page 0. Sharded categories map
        page N to the shard at offset N * shard_step. The composite category
        merges its sub-files on page 0. Later pages report no more data.

        Args:
            category: Category id
            page: Zero-based page number

        Returns:
            CategoryPage with the records and whether more pages may follow
        """
        spec = self.collections.get(category)
        if spec is None:
            logger.warning("Unknown category: %s", category)
            return CategoryPage()
        if spec.is_runtime:
            return CategoryPage()

        if spec.layout == COMPOSITE:
            if page > 0:
                return CategoryPage()
            return await self._load_composite(spec)

        path = spec.page_path(page, self.shard_step)
        if path is None:
            return CategoryPage()

        data = await self.source.fetch_json(path)
        if not isinstance(data, list):
            return CategoryPage()

        offset = page * self.shard_step if spec.layout == SHARDED else page
        normalizer = NormalizerRegistry.get("library", dynasty=spec.dynasty, id_prefix=f"{spec.id}-{offset}")
        return CategoryPage(normalizer.normalize_all(data), has_more=spec.layout == SHARDED)

    async def _load_composite(self, spec: CollectionSpec) -> CategoryPage:
        merged: list = []
        for path in spec.source_paths():
            data = await self.source.fetch_json(path)
            if isinstance(data, list):
                merged.extend(data)
        normalizer = NormalizerRegistry.get("library", dynasty=spec.dynasty, id_prefix=spec.id)
        return CategoryPage(normalizer.normalize_all(merged), has_more=False)

    async def load_description(self, category: str) -> Optional[str]:
        """
        Fetch the Markdown description of a category.

        Returns:
            Document text, or None when the category has none or it fails
        """
        spec = self.collections.get(category)
        if spec is None or not spec.readme_path:
            return None
        return await self.source.fetch_text(spec.readme_path)


class CategoryView:
    """
    Paged, filterable view over one library category.

    Keeps the loaded records, how many are displayed and the in-category
    filter text. ``load_more`` widens the display window and fetches the
    next shard when the window runs past the loaded records.
    """

    def __init__(
        self,
        loader: CorpusLoader,
        category: str,
        custom_records: Optional[List[PoemRecord]] = None,
        page_size: int = Config.PAGE_SIZE
    ):
        self.loader = loader
        self.category = category
        self.custom_records = custom_records if custom_records is not None else []
        self.page_size = page_size

        self._records: List[PoemRecord] = []
        self.display_count = page_size
        self.page = 0
        self.has_more = True
        self.filter = ""

    @property
    def records(self) -> List[PoemRecord]:
        """Loaded records; the custom category reads the live library list."""
        if self.category == CUSTOM_CATEGORY:
            return self.custom_records
        return self._records

    @records.setter
    def records(self, value: List[PoemRecord]) -> None:
        self._records = value

    @property
    def spec(self) -> Optional[CollectionSpec]:
        return self.loader.collections.get(self.category)

    async def open(self) -> None:
        """Reset the view and load its first page."""
        self.records = []
        self.display_count = self.page_size
        self.page = 0
        self.has_more = True
        self.filter = ""

        if self.category == CUSTOM_CATEGORY:
            self.has_more = False
            return

        result = await self.loader.load_category_page(self.category, 0)
        self.records = result.records
        self.has_more = result.has_more

    @property
    def filtered(self) -> List[PoemRecord]:
        """Records matching the filter text (title, author or any line)."""
        if not self.filter:
            return list(self.records)
        # Import here to avoid circular imports
        from ..search.matcher import filter_records
        return filter_records(self.records, self.filter)

    @property
    def visible(self) -> List[PoemRecord]:
        return self.filtered[:self.display_count]

    @property
    def can_load_more(self) -> bool:
        return self.has_more or len(self.visible) < len(self.filtered)

    async def load_more(self) -> None:
        """Show another page worth of records, fetching a shard if needed."""
        self.display_count += self.page_size
        if self.display_count <= len(self.records) or not self.has_more:
            return

        spec = self.spec
        if spec is None or spec.layout != SHARDED:
            self.has_more = False
            return

        self.page += 1
        result = await self.loader.load_category_page(self.category, self.page)
        self.records.extend(result.records)
        self.has_more = result.has_more

    async def description_html(self) -> Optional[str]:
        """Rendered description document of this category, if any."""
        text = await self.loader.load_description(self.category)
        return render_description(text) if text is not None else None

"""
External Search - scan the broad multi-file corpus for a query.

The scan walks the medium datasets first, then every file listed in the
large-corpus index. Queries are expanded into their script variants, hits
are normalized and deduplicated by id, and partial results are handed to
the caller as each file completes.
"""

import asyncio
import random
from typing import AsyncIterator, Callable, List, Optional, Sequence

from ..config import SEARCH_SOURCES, Config, SearchSource
from ..corpus.cache import FileCache
from ..corpus.normalizers import NormalizerRegistry
from ..corpus.sources import BaseSource, create_source
from ..models import PoemRecord
from ..utils import setup_logger
from .matcher import raw_matches_any
from .variants import script_variants

logger = setup_logger(__name__)

ResultCallback = Callable[[List[PoemRecord]], None]


class ExternalSearch:
    """
    Multi-file search with a per-session file cache.

    Usage:
        search = ExternalSearch()
        results = await search.search("明月", on_result=show_partial)

        async for snapshot in search.stream("明月"):
            show_partial(snapshot)
    """

    def __init__(
        self,
        source: Optional[BaseSource] = None,
        cache: Optional[FileCache] = None,
        sources: Optional[Sequence[SearchSource]] = None,
        index_path: Optional[str] = None,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize external search.

        Args:
            source: Where files are read from (defaults to create_source())
            cache: File cache (a fresh unbounded cache by default)
            sources: Medium datasets scanned first (defaults to SEARCH_SOURCES)
            index_path: JSON index of large-corpus files (defaults to Config.SEARCH_INDEX_FILE)
            rng: Random source for result id suffixes
        """
        self.source = source or create_source()
        self.cache = cache if cache is not None else FileCache()
        self.sources = list(sources if sources is not None else SEARCH_SOURCES)
        self.index_path = index_path if index_path is not None else Config.SEARCH_INDEX_FILE
        self.rng = rng or random.Random()
        self._index: Optional[List[SearchSource]] = None

    async def close(self) -> None:
        await self.source.close()

    async def load_index(self) -> List[SearchSource]:
        """
        Load the large-corpus file index once per session.

        Each entry is ``{"path", "dynasty", "category"}``; results are tagged
        ``category·dynasty``. A missing or broken index means no large files.
        """
        if self._index is not None:
            return self._index

        self._index = []
        if not self.index_path:
            return self._index

        entries = await self.source.fetch_json(self.index_path)
        if not isinstance(entries, list):
            logger.warning("Search index unavailable: %s", self.index_path)
            return self._index

        for entry in entries:
            if not isinstance(entry, dict) or not entry.get("path"):
                continue
            dynasty = str(entry.get("dynasty", ""))
            self._index.append(SearchSource(
                path=str(entry["path"]),
                dynasty=dynasty,
                source=f"{entry.get('category', '')}·{dynasty}",
            ))
        return self._index

    async def _fetch(self, path: str) -> Optional[list]:
        """Fetch a file through the cache; failures are not cached."""
        cached = self.cache.get(path)
        if cached is not None:
            return cached
        data = await self.source.fetch_json(path)
        if not isinstance(data, list):
            return None
        self.cache.put(path, data)
        return data

    async def stream(
        self,
        query: str,
        on_result: Optional[ResultCallback] = None
    ) -> AsyncIterator[List[PoemRecord]]:
        """
        Scan every file, yielding the accumulated results after each one.

        Control returns to the event loop between files. The scan cannot be
        cancelled from inside; a caller that loses interest simply stops
        iterating.

        Args:
            query: Search text (blank queries yield nothing)
            on_result: Called with a snapshot each time a new hit is added
        """
        if not query or not query.strip():
            return

        queries = script_variants(query)
        results: List[PoemRecord] = []
        seen = set()

        files = self.sources + await self.load_index()
        for entry in files:
            data = await self._fetch(entry.path)
            if data is None:
                logger.warning("Failed to search %s", entry.path)
            else:
                normalizer = NormalizerRegistry.get(
                    "external", dynasty=entry.dynasty, id_prefix=entry.source, rng=self.rng
                )
                for raw in data:
                    if not isinstance(raw, dict) or not raw_matches_any(raw, queries):
                        continue
                    record = normalizer.normalize(raw)
                    if record.id in seen:
                        continue
                    seen.add(record.id)
                    results.append(record)
                    if on_result:
                        on_result(list(results))

            yield list(results)
            # Yield to the event loop between files
            await asyncio.sleep(0)

    async def search(
        self,
        query: str,
        on_result: Optional[ResultCallback] = None
    ) -> List[PoemRecord]:
        """
        Run a full scan and return every hit.

        Args:
            query: Search text
            on_result: Called with partial results as hits accumulate

        Returns:
            All matching records, deduplicated by id, in scan order
        """
        results: List[PoemRecord] = []
        async for snapshot in self.stream(query, on_result):
            results = snapshot
        logger.info("External search '%s': %d results", query, len(results))
        return results

"""
Collection Catalog
------------------

Defines every named poem collection: where its files live, how they are
laid out, which era label they carry and which normalizer reads them.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

# Era labels
TANG = "唐"
SONG = "宋"
QING = "清"
WUDAI = "五代"
XIANQIN = "先秦"
MODERN = "今"

# Layouts
SINGLE = "single"        # one file, page 0 only
SHARDED = "sharded"      # {path}/{prefix}.{offset}.json per page
COMPOSITE = "composite"  # several sub-files merged on page 0
RUNTIME = "runtime"      # no files, filled by user actions

CUSTOM_CATEGORY = "custom"

HUAJIANJI_DIR = "五代诗词/huajianji"
HUAJIANJI_FILES: List[str] = [
    f"{HUAJIANJI_DIR}/huajianji-{n}-juan.json" for n in range(1, 10)
] + [f"{HUAJIANJI_DIR}/huajianji-x-juan.json"]


@dataclass
class CollectionSpec:
    """Definition of a single browsable collection."""
    
    id: str
    name: str
    dynasty: str
    layout: str = SINGLE
    path: Optional[str] = None
    prefix: Optional[str] = None
    parts: List[str] = field(default_factory=list)
    kind: str = "library"
    readme_path: Optional[str] = None
    
    @property
    def is_runtime(self) -> bool:
        """Runtime collections have no backing files."""
        return self.layout == RUNTIME
    
    def page_path(self, page: int, shard_step: int = 1000) -> Optional[str]:
        """
        Resolve the file backing one page of this collection.
        
        Args:
            page: Zero-based page number
            shard_step: Numeric offset between shard files
            
        Returns:
            Relative file path, or None when the page has no file
        """
        if self.layout == SHARDED:
            return f"{self.path}/{self.prefix}.{page * shard_step}.json"
        if page > 0 or self.layout in (COMPOSITE, RUNTIME):
            return None
        if self.prefix:
            return f"{self.path}/{self.prefix}.json"
        return self.path
    
    def source_paths(self) -> List[str]:
        """All files merged for page 0 of a composite collection, in order."""
        if self.layout != COMPOSITE:
            path = self.page_path(0)
            return [path] if path else []
        return [self.path] + list(self.parts)


# All browsable collections, in sidebar order
COLLECTIONS: Dict[str, CollectionSpec] = {
    "tang-300": CollectionSpec(
        id="tang-300",
        name="唐诗三百首",
        dynasty=TANG,
        path="唐诗三百首/tang_poem.json",
        readme_path="唐诗三百首/README.md",
    ),
    "song-300": CollectionSpec(
        id="song-300",
        name="宋词三百首",
        dynasty=SONG,
        path="宋词三百首/song_poem.json",
        readme_path="宋词三百首/README.md",
    ),
    "shuimotangshi": CollectionSpec(
        id="shuimotangshi",
        name="水墨唐诗",
        dynasty=TANG,
        path="水墨唐诗/shuimotangshi.json",
    ),
    "shijing": CollectionSpec(
        id="shijing",
        name="诗经",
        dynasty=XIANQIN,
        path="诗经",
        prefix="shijing",
        readme_path="诗经/README.md",
    ),
    "wudai": CollectionSpec(
        id="wudai",
        name="五代诗词",
        dynasty=WUDAI,
        layout=COMPOSITE,
        path="五代诗词/nantang/poetrys.json",
        parts=HUAJIANJI_FILES,
        readme_path="五代诗词/README.md",
    ),
    "nalan": CollectionSpec(
        id="nalan",
        name="纳兰性德",
        dynasty=QING,
        path="纳兰性德/纳兰性德诗集.json",
        readme_path="纳兰性德/README.md",
    ),
    CUSTOM_CATEGORY: CollectionSpec(
        id=CUSTOM_CATEGORY,
        name="个性化",
        dynasty=MODERN,
        layout=RUNTIME,
    ),
}


@dataclass
class HomeSource:
    """One file of the merged home corpus."""
    
    path: str
    kind: str
    dynasty: str
    tag: Optional[str] = None
    
    @property
    def id_prefix(self) -> str:
        """Prefix of the ids minted for this source."""
        return self.tag or self.kind


# Files merged into the home corpus (loaded eagerly, concurrently)
HOME_SOURCES: List[HomeSource] = [
    HomeSource("唐诗三百首/tang_poem.json", "tang", TANG),
    HomeSource("宋词三百首/song_poem.json", "song", SONG),
    HomeSource("水墨唐诗/shuimotangshi.json", "shuimo", TANG),
    HomeSource("纳兰性德/纳兰性德诗集.json", "nalan", QING),
    HomeSource("五代诗词/nantang/poetrys.json", "nantang", WUDAI),
    HomeSource("诗经/shijing.json", "shijing", XIANQIN),
] + [
    HomeSource(f"{HUAJIANJI_DIR}/huajianji-{n}-juan.json", "huajian", WUDAI, f"huajian-{n}")
    for n in range(1, 6)
]


@dataclass
class SearchSource:
    """One file scanned by the external search."""
    
    path: str
    dynasty: str
    source: str


# Medium datasets scanned first by the external search
SEARCH_SOURCES: List[SearchSource] = [
    SearchSource("唐诗三百首/tang_poem.json", TANG, "唐诗三百首"),
    SearchSource("宋词三百首/song_poem.json", SONG, "宋词三百首"),
    SearchSource("纳兰性德/纳兰性德诗集.json", QING, "纳兰性德"),
    SearchSource("五代诗词/nantang/poetrys.json", WUDAI, "五代诗词"),
] + [SearchSource(path, WUDAI, "花间集") for path in HUAJIANJI_FILES]

# Library id prefixes -> category
_ID_PREFIX_CATEGORIES = [
    ("tang-", "tang-300"),
    ("song-", "song-300"),
    ("shuimo-", "shuimotangshi"),
    ("nalan-", "nalan"),
    ("nantang-", "wudai"),
    ("huajian-", "wudai"),
    ("shijing-", "shijing"),
]


def get_collection(category: str) -> Optional[CollectionSpec]:
    """Look up a collection by id."""
    return COLLECTIONS.get(category)


def get_collection_ids() -> List[str]:
    """Get list of all collection IDs in sidebar order."""
    return list(COLLECTIONS.keys())


def category_for_poem_id(poem_id: str) -> Optional[str]:
    """
    Map a home-corpus poem id back to the library category that lists it.
    
    Returns:
        Category id, or None for ids from other origins
    """
    for prefix, category in _ID_PREFIX_CATEGORIES:
        if poem_id.startswith(prefix):
            return category
    return None

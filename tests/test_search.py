import asyncio
import random

from jinqiu.config import SearchSource
from jinqiu.corpus import FileCache, LocalSource
from jinqiu.search import ExternalSearch, filter_records, matches, script_variants

from .conftest import write_json


def test_matches_title_author_and_lines(poems):
    jingyesi = poems[0]
    assert matches(jingyesi, "静夜")
    assert matches(jingyesi, "李白")
    assert matches(jingyesi, "明月光")
    assert not matches(jingyesi, "光疑")  # never across lines
    assert not matches(jingyesi, "杜甫")


def test_filter_records_keeps_order_and_empty_query_returns_all(poems):
    assert [p.id for p in filter_records(poems, "明月")] == ["tang-1", "tang-2", "song-0"]
    assert filter_records(poems, "") == poems


def test_script_variants_are_deduplicated_in_order():
    assert script_variants("靜夜思") == ["靜夜思", "静夜思"]
    assert script_variants("明月") == ["明月"]
    variants = script_variants("举头")
    assert variants[0] == "举头"
    assert "舉頭" in variants


class CountingSource(LocalSource):
    def __init__(self, root):
        super().__init__(root)
        self.fetched = []

    async def fetch_text(self, path):
        self.fetched.append(path)
        return await super().fetch_text(path)


def make_search(root, **kwargs):
    write_json(root, "tang.json", [
        {"title": "静夜思", "author": "李白", "paragraphs": ["床前明月光", "疑是地上霜"]},
        {"title": "春晓", "author": "孟浩然", "paragraphs": ["春眠不觉晓"]},
    ])
    write_json(root, "song.json", [
        {"rhythmic": "水调歌头", "author": "苏轼", "paragraphs": ["明月几时有"]},
    ])
    write_json(root, "big/quantang.json", [
        {"title": "月夜", "authorName": "杜甫", "para": ["今夜鄜州月"]},
        {"title": "夜思", "author": "佚名", "content": "夜靜思明月\n獨坐"},
    ])
    write_json(root, "index.json", [
        {"path": "big/quantang.json", "dynasty": "唐", "category": "全唐诗"},
    ])
    source = CountingSource(str(root))
    search = ExternalSearch(
        source=source,
        sources=[
            SearchSource("tang.json", "唐", "唐诗三百首"),
            SearchSource("missing.json", "唐", "缺失"),
            SearchSource("song.json", "宋", "宋词三百首"),
        ],
        index_path="index.json",
        rng=random.Random(0),
        **kwargs
    )
    return search, source


def test_external_search_matches_any_script_variant(tmp_path):
    search, _ = make_search(tmp_path)

    results = asyncio.run(search.search("靜夜思"))

    assert [r.title for r in results] == ["静夜思"]
    record = results[0]
    assert record.id.startswith("ext-唐诗三百首-李白-静夜思-")
    assert record.dynasty == "唐"


def test_external_search_scans_medium_then_indexed_files(tmp_path):
    search, _ = make_search(tmp_path)

    results = asyncio.run(search.search("明月"))

    assert [r.title for r in results] == ["静夜思", "水调歌头", "夜思"]
    assert results[-1].id.startswith("ext-全唐诗·唐-佚名-夜思-")
    assert results[-1].content == ["夜靜思明月", "獨坐"]
    assert len({r.id for r in results}) == 3


def test_external_search_reports_partial_results(tmp_path):
    search, _ = make_search(tmp_path)
    partials = []

    asyncio.run(search.search("明月", on_result=partials.append))

    assert [len(p) for p in partials] == [1, 2, 3]


def test_external_search_stream_yields_per_file(tmp_path):
    search, _ = make_search(tmp_path)

    async def collect():
        return [snapshot async for snapshot in search.stream("明月")]

    snapshots = asyncio.run(collect())

    # tang, missing, song, then the indexed file
    assert [len(s) for s in snapshots] == [1, 1, 2, 3]


def test_repeat_queries_use_the_file_cache(tmp_path):
    cache = FileCache()
    search, source = make_search(tmp_path, cache=cache)

    asyncio.run(search.search("明月"))
    first_fetches = len(source.fetched)
    asyncio.run(search.search("春眠"))

    # only the missing file is fetched again
    assert source.fetched[first_fetches:] == ["missing.json"]
    assert cache.get_stats()["entries"] == 3
    assert cache.get_stats()["hits"] >= 3


def test_blank_query_fetches_nothing(tmp_path):
    search, source = make_search(tmp_path)

    assert asyncio.run(search.search("   ")) == []
    assert source.fetched == []

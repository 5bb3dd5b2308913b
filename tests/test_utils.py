from jinqiu.corpus import FileCache
from jinqiu.utils import HanText, split_content


def test_split_content_shapes():
    assert split_content("一\n\n二\r\n三") == ["一", "二", "三"]
    assert split_content(["一", "二\n三"]) == ["一", "二", "三"]
    assert split_content(None) == []
    assert split_content(42) == []


def test_han_text_helpers():
    assert HanText.is_han("月")
    assert not HanText.is_han("，")
    assert not HanText.is_han("a")
    assert HanText.han_positions("明月，光") == [0, 1, 3]
    assert HanText.split_clauses("云对雨，雪对风。") == ["云对雨", "雪对风", ""]


def test_file_cache_hits_and_misses():
    cache = FileCache()
    assert cache.get("a.json") is None
    cache.put("a.json", [1])

    assert "a.json" in cache
    assert cache.get("a.json") == [1]
    assert cache.get_stats() == {"entries": 1, "max_entries": None, "hits": 1, "misses": 1}


def test_file_cache_lru_bound():
    cache = FileCache(max_entries=2)
    cache.put("a", 1)
    cache.put("b", 2)
    cache.get("a")
    cache.put("c", 3)

    assert "a" in cache
    assert "b" not in cache
    assert len(cache) == 2

    cache.clear()
    assert len(cache) == 0

import asyncio

from jinqiu.config import CollectionSpec
from jinqiu.config.collections import SHARDED, TANG
from jinqiu.corpus import CategoryView, CorpusLoader, LocalSource, render_description
from jinqiu.services import CustomLibrary

from .conftest import write_json


def make_loader(root, **kwargs):
    return CorpusLoader(source=LocalSource(str(root)), **kwargs)


def test_load_all_tolerates_missing_sources(corpus_dir):
    # huajianji volumes 2-5 are absent
    poems = asyncio.run(make_loader(corpus_dir).load_all())

    ids = [p.id for p in poems]
    assert "tang-100" in ids
    assert "tang-n1" in ids
    assert "song-0" in ids
    assert "huajian-1-0" in ids
    assert not any(i.startswith("huajian-2-") for i in ids)
    assert len(poems) == 5 + 2 + 1 + 1 + 2 + 1


def test_load_all_attaches_dynasty_from_source(corpus_dir):
    poems = asyncio.run(make_loader(corpus_dir).load_all())
    by_id = {p.id: p for p in poems}

    assert by_id["tang-100"].dynasty == "唐"
    assert by_id["song-0"].dynasty == "宋"
    assert by_id["nalan-0"].author == "纳兰性德"
    assert by_id["shijing-1"].title == "小雅·鹿鸣之什"


def test_single_file_category_has_one_page(corpus_dir):
    loader = make_loader(corpus_dir)

    first = asyncio.run(loader.load_category_page("tang-300", 0))
    second = asyncio.run(loader.load_category_page("tang-300", 1))
    third = asyncio.run(loader.load_category_page("tang-300", 2))

    assert [r.id for r in first.records] == [f"tang-300-0-{i}" for i in range(5)]
    assert all(r.dynasty == "唐" for r in first.records)
    assert first.has_more is False
    assert third.records == []
    assert third.has_more is False
    assert second.records == []
    assert second.has_more is False


def test_missing_file_yields_empty_page(tmp_path):
    page = asyncio.run(make_loader(tmp_path).load_category_page("song-300", 0))
    assert page.records == []
    assert page.has_more is False


def test_unknown_and_custom_categories_are_empty(corpus_dir):
    loader = make_loader(corpus_dir)
    assert asyncio.run(loader.load_category_page("nope", 0)).records == []
    assert asyncio.run(loader.load_category_page("custom", 0)).records == []


def test_composite_category_merges_sub_files(corpus_dir):
    loader = make_loader(corpus_dir)

    page = asyncio.run(loader.load_category_page("wudai", 0))
    later = asyncio.run(loader.load_category_page("wudai", 1))

    assert [r.title for r in page.records] == ["虞美人", "菩萨蛮"]
    assert [r.id for r in page.records] == ["wudai-0", "wudai-1"]
    assert page.has_more is False
    assert later.records == []


def sharded_collections():
    return {
        "quantang": CollectionSpec(
            id="quantang", name="全唐诗", dynasty=TANG, layout=SHARDED,
            path="全唐诗", prefix="poet.tang",
        )
    }


def test_sharded_pages_map_to_offset_files(tmp_path):
    write_json(tmp_path, "全唐诗/poet.tang.0.json", [{"title": "a"}, {"title": "b"}])
    write_json(tmp_path, "全唐诗/poet.tang.1000.json", [{"title": "c"}])
    loader = make_loader(tmp_path, collections=sharded_collections())

    first = asyncio.run(loader.load_category_page("quantang", 0))
    second = asyncio.run(loader.load_category_page("quantang", 1))
    third = asyncio.run(loader.load_category_page("quantang", 2))

    assert [r.id for r in first.records] == ["quantang-0-0", "quantang-0-1"]
    assert first.has_more is True
    assert [r.id for r in second.records] == ["quantang-1000-0"]
    assert third.records == []
    assert third.has_more is False


def test_category_view_pages_and_filters(tmp_path):
    write_json(tmp_path, "全唐诗/poet.tang.0.json",
               [{"title": "静夜思"}, {"title": "春晓"}, {"title": "相思"}])
    write_json(tmp_path, "全唐诗/poet.tang.1000.json", [{"title": "登高"}, {"title": "望月怀远"}])
    loader = make_loader(tmp_path, collections=sharded_collections())
    view = CategoryView(loader, "quantang", page_size=2)

    async def scenario():
        await view.open()
        assert [r.title for r in view.visible] == ["静夜思", "春晓"]
        assert view.can_load_more

        await view.load_more()
        assert len(view.records) == 5
        assert len(view.visible) == 4

        await view.load_more()
        assert len(view.visible) == 5
        assert not view.can_load_more

        view.filter = "思"
        assert [r.title for r in view.filtered] == ["静夜思", "相思"]

    asyncio.run(scenario())


def test_custom_category_view_uses_runtime_records(corpus_dir, poems):
    view = CategoryView(make_loader(corpus_dir), "custom", custom_records=poems)
    asyncio.run(view.open())

    assert view.records == poems
    assert view.has_more is False


def test_description_keeps_line_breaks(corpus_dir):
    loader = make_loader(corpus_dir)
    text = asyncio.run(loader.load_description("tang-300"))

    assert text.startswith("# 唐诗三百首")
    html = render_description(text)
    assert "<h1>" in html
    assert "<br />" in html
    assert asyncio.run(loader.load_description("shuimotangshi")) is None


def test_load_all_ids_are_unique_when_source_ids_overlap_positions(tmp_path):
    write_json(tmp_path, "唐诗三百首/tang_poem.json",
               [{"title": "a"}, {"id": 0, "title": "b"}, {"id": 1, "title": "c"}])
    write_json(tmp_path, "水墨唐诗/shuimotangshi.json",
               [{"id": 1, "title": "d"}, {"title": "e"}])

    poems = asyncio.run(make_loader(tmp_path).load_all())

    ids = [p.id for p in poems]
    assert len(ids) == len(set(ids))
    assert "tang-n0" in ids and "tang-0" in ids and "tang-1" in ids


def test_custom_category_view_follows_library_changes(corpus_dir, poems):
    library = CustomLibrary()
    library.add(poems[0])
    view = CategoryView(make_loader(corpus_dir), "custom", custom_records=library.poems)
    asyncio.run(view.open())

    library.add(poems[1])
    assert [r.id for r in view.visible] == ["tang-2", "tang-1"]

    library.remove("tang-2")
    assert [r.id for r in view.records] == ["tang-1"]

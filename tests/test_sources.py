import asyncio
import json

from aiohttp import web
from aiohttp.test_utils import TestServer, unused_port

from jinqiu.corpus import CorpusLoader, HttpSource, LocalSource, create_source

from .conftest import SONG_POEMS, TANG_POEMS

FILES = web.AppKey("files", dict)


async def corpus_handler(request):
    status, body = request.app[FILES].get(request.match_info["tail"], (404, "not found"))
    return web.Response(status=status, text=body, content_type="application/json")


def with_corpus_server(files, scenario):
    """Serve ``files`` ({path: (status, body)}) and run ``scenario(source)``.

    The source is built before the event loop starts, the way an app would
    build it at import time.
    """
    port = unused_port()
    source = HttpSource(f"http://127.0.0.1:{port}/data")

    async def run():
        app = web.Application()
        app[FILES] = files
        app.router.add_get("/data/{tail:.*}", corpus_handler)
        server = TestServer(app, host="127.0.0.1", port=port)
        await server.start_server()
        try:
            async with source:
                return await scenario(source)
        finally:
            await server.close()

    return asyncio.run(run())


def served_corpus():
    return {
        "唐诗三百首/tang_poem.json": (200, json.dumps(TANG_POEMS, ensure_ascii=False)),
        "宋词三百首/song_poem.json": (500, "server error"),
        "纳兰性德/纳兰性德诗集.json": (200, "{bad"),
    }


def test_http_load_all_skips_failed_and_malformed_files():
    async def scenario(source):
        return await CorpusLoader(source=source).load_all()

    poems = with_corpus_server(served_corpus(), scenario)

    assert [p.title for p in poems] == [p.get("title", "无题") for p in TANG_POEMS]
    assert all(p.dynasty == "唐" for p in poems)


def test_http_category_pages_tolerate_failures():
    async def scenario(source):
        loader = CorpusLoader(source=source)
        return (
            await loader.load_category_page("tang-300", 0),
            await loader.load_category_page("song-300", 0),
            await loader.load_category_page("nalan", 0),
            await loader.load_description("song-300"),
        )

    tang, song, nalan, readme = with_corpus_server(served_corpus(), scenario)

    assert len(tang.records) == len(TANG_POEMS)
    assert song.records == [] and song.has_more is False
    assert nalan.records == []
    assert readme is None


def test_http_fetch_json_reports_failures_as_none():
    files = {
        "ok.json": (200, json.dumps(SONG_POEMS, ensure_ascii=False)),
        "gone.json": (503, ""),
    }

    async def scenario(source):
        return (
            await source.fetch_json("ok.json"),
            await source.fetch_json("gone.json"),
            await source.fetch_json("missing.json"),
        )

    ok, gone, missing = with_corpus_server(files, scenario)

    assert ok == SONG_POEMS
    assert gone is None
    assert missing is None


def test_create_source_picks_by_location(tmp_path):
    assert isinstance(create_source("https://example.org/data"), HttpSource)
    local = create_source(str(tmp_path))
    assert isinstance(local, LocalSource)
    assert local.root == tmp_path

"""Shared fixtures: a small on-disk corpus laid out like the real data directory."""

import json
from pathlib import Path

import pytest

from jinqiu.models import PoemRecord

TANG_POEMS = [
    {"id": 100, "title": "静夜思", "author": "李白", "contents": "床前明月光\n疑是地上霜\n\n举头望明月\n低头思故乡"},
    {"title": "春晓", "author": "孟浩然", "contents": ["春眠不觉晓", "处处闻啼鸟", "夜来风雨声", "花落知多少"]},
    {"title": "登鹳雀楼", "author": "王之涣", "paragraphs": ["白日依山尽", "黄河入海流"]},
    {"title": "相思", "author": "王维", "contents": ["红豆生南国", "春来发几枝"]},
    {"contents": ["无名之诗一句"]},
]

SONG_POEMS = [
    {"rhythmic": "水调歌头", "author": "苏轼", "paragraphs": ["明月几时有？把酒问青天。", "不知天上宫阙，今夕是何年。"]},
    {"rhythmic": "念奴娇", "author": "苏轼", "paragraphs": ["大江东去，浪淘尽，千古风流人物。"]},
]

NALAN_POEMS = [
    {"title": "长相思", "para": ["山一程，水一程，身向榆关那畔行，夜深千帐灯。"]},
]

NANTANG_POEMS = [
    {"rhythmic": "虞美人", "author": "李煜", "paragraphs": ["春花秋月何时了，往事知多少。"]},
]

HUAJIAN_POEMS = [
    {"title": "菩萨蛮", "author": "温庭筠", "paragraphs": ["小山重叠金明灭，鬓云欲度香腮雪。"]},
]

SHIJING_POEMS = [
    {"title": "关雎", "chapter": "国风", "section": "周南", "content": ["关关雎鸠，在河之洲。", "窈窕淑女，君子好逑。"]},
    {"chapter": "小雅", "section": "鹿鸣之什", "content": ["呦呦鹿鸣，食野之苹。"]},
]

COUPLET_TEXT = "云对雨，雪对风。晚照对晴空。\n来鸿对去燕，宿鸟对鸣虫。三尺剑，六钧弓。"


def write_json(root: Path, relative: str, data) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def corpus_dir(tmp_path: Path) -> Path:
    """Data directory with a subset of the collection files."""
    write_json(tmp_path, "唐诗三百首/tang_poem.json", TANG_POEMS)
    write_json(tmp_path, "宋词三百首/song_poem.json", SONG_POEMS)
    write_json(tmp_path, "纳兰性德/纳兰性德诗集.json", NALAN_POEMS)
    write_json(tmp_path, "五代诗词/nantang/poetrys.json", NANTANG_POEMS)
    write_json(tmp_path, "五代诗词/huajianji/huajianji-1-juan.json", HUAJIAN_POEMS)
    write_json(tmp_path, "诗经/shijing.json", SHIJING_POEMS)
    (tmp_path / "唐诗三百首" / "README.md").write_text("# 唐诗三百首\n蘅塘退士编\n共三百余首", encoding="utf-8")
    (tmp_path / "raw.txt").write_text(COUPLET_TEXT, encoding="utf-8")
    return tmp_path


@pytest.fixture
def poems():
    """A few canonical records across two eras."""
    return [
        PoemRecord(id="tang-1", title="静夜思", author="李白", dynasty="唐",
                   content=["床前明月光", "疑是地上霜", "举头望明月", "低头思故乡"]),
        PoemRecord(id="tang-2", title="月下独酌", author="李白", dynasty="唐",
                   content=["花间一壶酒", "独酌无相亲", "举杯邀明月", "对影成三人"]),
        PoemRecord(id="tang-3", title="春晓", author="孟浩然", dynasty="唐",
                   content=["春眠不觉晓", "处处闻啼鸟", "夜来风雨声", "花落知多少"]),
        PoemRecord(id="song-0", title="水调歌头", author="苏轼", dynasty="宋",
                   content=["明月几时有", "把酒问青天", "不知天上宫阙", "今夕是何年"]),
    ]

import io
import json

import pytest
from bible_roam.builder import build_document, build_documents, dump_documents, write_documents
from bible_roam.errors import WriteOutputError
from bible_roam.models import RoamBlock, RoamDocument
from bible_roam.ref_parser import ChapterKey
from bible_roam.scanner import FinishedChapter


def test_build_document_genesis_1():
    chapter = FinishedChapter(ChapterKey("Genesis", 1), ("1. In the beginning...",))

    out = dump_documents([build_document(chapter)])

    assert out == (
        '[{"title":"Genesis 1","children":['
        '{"string":"Bible Book:: [[Genesis]]"},'
        '{"string":"[[Genesis 1]]","children":[{"string":"1. In the beginning..."}]}'
        "]}]"
    )


def test_build_document_shape():
    chapter = FinishedChapter(ChapterKey("1 John", 3), ("1. a", "2. b", "2. c"))

    doc = build_document(chapter)

    assert doc.title == "1 John 3"
    assert [b.string for b in doc.children] == ["Bible Book:: [[1 John]]", "[[1 John 3]]"]
    assert doc.children[0].children is None
    assert [b.string for b in doc.children[1].children] == ["1. a", "2. b", "2. c"]
    assert all(b.heading is None for b in doc.children)


def test_dump_omits_unset_fields():
    chapters = [
        FinishedChapter(ChapterKey("X", 1), ("1. a",)),
        FinishedChapter(ChapterKey("X", 2), ()),
    ]

    data = json.loads(dump_documents(build_documents(chapters)))

    def walk(blocks):
        for block in blocks:
            assert "string" in block
            assert "heading" not in block
            assert block.get("children", []) is not None
            walk(block.get("children", []))

    assert len(data) == 2
    for doc in data:
        walk(doc["children"])
    assert "children" not in data[0]["children"][0]
    assert data[1]["children"][1]["children"] == []


def test_dump_keeps_heading_when_set():
    doc = RoamDocument(title="t", children=[RoamBlock(string="s", heading=2)])

    assert json.loads(dump_documents([doc])) == [
        {"title": "t", "children": [{"string": "s", "heading": 2}]}
    ]


def test_dump_empty_list():
    assert dump_documents([]) == "[]"


def test_dump_non_ascii_is_not_escaped():
    chapter = FinishedChapter(ChapterKey("창세기", 1), ("1. 태초에 하나님이",))

    out = dump_documents([build_document(chapter)])

    assert "태초에 하나님이" in out
    assert "\\u" not in out


def test_write_documents_to_stream():
    buf = io.StringIO()
    write_documents(build_documents([FinishedChapter(ChapterKey("X", 1), ("1. a",))]), buf)

    assert json.loads(buf.getvalue())[0]["title"] == "X 1"


class BrokenStream(io.StringIO):
    def write(self, s):
        raise BrokenPipeError(32, "Broken pipe")


def test_write_documents_failure():
    with pytest.raises(WriteOutputError):
        write_documents([], BrokenStream())

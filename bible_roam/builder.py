# bible_roam/builder.py
import sys
from typing import Iterable, List, Optional, TextIO

from pydantic import TypeAdapter
from pydantic_core import PydanticSerializationError

from bible_roam.errors import WriteOutputError
from bible_roam.models import RoamBlock, RoamDocument
from bible_roam.scanner import FinishedChapter

DOCUMENTS = TypeAdapter(List[RoamDocument])


def build_document(chapter: FinishedChapter) -> RoamDocument:
    book, number = chapter.key
    return RoamDocument(
        title=f"{book} {number}",
        children=[
            RoamBlock(string=f"Bible Book:: [[{book}]]"),
            RoamBlock(
                string=f"[[{book} {number}]]",
                children=[RoamBlock(string=v) for v in chapter.verses],
            ),
        ],
    )


def build_documents(chapters: Iterable[FinishedChapter]) -> List[RoamDocument]:
    return [build_document(c) for c in chapters]


def _dump_json(docs: List[RoamDocument]) -> bytes:
    try:
        return DOCUMENTS.dump_json(docs, exclude_none=True)
    except PydanticSerializationError as e:
        raise WriteOutputError(str(e)) from e


def dump_documents(docs: List[RoamDocument]) -> str:
    """Compact JSON array; unset heading/children are left out, never null."""
    return _dump_json(docs).decode("utf-8")


def write_documents(docs: List[RoamDocument], out: Optional[TextIO] = None):
    """
    Write the JSON array to ``out``, or as UTF-8 bytes to stdout whatever the
    locale encoding of sys.stdout is.
    """
    payload = _dump_json(docs)
    try:
        if out is None:
            sys.stdout.flush()
            sys.stdout.buffer.write(payload)
            sys.stdout.buffer.flush()
        else:
            out.write(payload.decode("utf-8"))
            out.flush()
    except (OSError, UnicodeEncodeError) as e:
        raise WriteOutputError(getattr(e, "strerror", None) or str(e)) from e

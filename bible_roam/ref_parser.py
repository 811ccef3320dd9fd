# bible_roam/ref_parser.py
import re
from typing import Dict, Iterable, List, NamedTuple, Optional

from bible_roam.errors import BadChapterError

CHAPTER_NUMBER_RE = re.compile(r"\+?[0-9]+")


class ChapterKey(NamedTuple):
    book: str
    chapter: int


def parse_chapter_ref(text: str, chapter: Optional[int] = None) -> ChapterKey:
    """
    "Book Name N" 형식의 선택자, 또는 (book, chapter) 쌍을 ChapterKey 로 변환.

    The last whitespace-separated token is the chapter number, the remaining
    tokens joined by single spaces are the book name ("1 John 3" -> "1 John", 3).
    """
    if chapter is not None:
        if chapter < 0:
            raise BadChapterError(f"{text} {chapter}")
        return ChapterKey(text, int(chapter))

    tokens = (text or "").split()
    if not tokens:
        raise BadChapterError(text)

    number = tokens[-1]
    if not CHAPTER_NUMBER_RE.fullmatch(number):
        raise BadChapterError(text)

    return ChapterKey(" ".join(tokens[:-1]), int(number))


def parse_chapter_refs(texts: Iterable[str]) -> List[ChapterKey]:
    return [parse_chapter_ref(t) for t in texts]


def requested_chapters(keys: Iterable[ChapterKey]) -> Dict[str, List[int]]:
    requested: Dict[str, List[int]] = {}
    for key in keys:
        requested.setdefault(key.book, []).append(key.chapter)
    return requested

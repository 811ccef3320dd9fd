# bible_roam/scanner.py
"""
Single-pass scanner over a b/c/v scripture XML file.

    <b n="Genesis">
      <c n="1">
        <v n="1">In the beginning...</v>
      </c>
    </b>

Only chapters listed in the requested mapping are buffered. The scan stops as
soon as every distinct requested chapter has been closed, so nothing after the
last match is read (or validated).
"""
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, FrozenSet, List, NamedTuple, Optional, Sequence, Tuple, Union

from bible_roam.config import READ_CHUNK_SIZE
from bible_roam.errors import OpenInputError, XMLParseError
from bible_roam.ref_parser import CHAPTER_NUMBER_RE, ChapterKey

BOOK_TAG = "b"
CHAPTER_TAG = "c"
VERSE_TAG = "v"
NAME_ATTR = "n"


class FinishedChapter(NamedTuple):
    key: ChapterKey
    verses: Tuple[str, ...]


class InBook(NamedTuple):
    book: str
    chapters: FrozenSet[int]


class InChapter(NamedTuple):
    in_book: InBook
    chapter: int
    verses: List[str]


class InVerse(NamedTuple):
    in_chapter: InChapter
    label: str


# None == outside any requested book
ScanState = Optional[Union[InBook, InChapter, InVerse]]


class _ScanComplete(Exception):
    pass


def _name(tag: str, attrib: Dict[str, str]) -> str:
    try:
        return attrib[NAME_ATTR]
    except KeyError:
        raise XMLParseError(f"<{tag}> element without '{NAME_ATTR}' attribute") from None


class ChapterCollector:
    """ElementTree parser target that walks the book/chapter/verse state machine."""

    def __init__(self, requested: Dict[str, Sequence[int]]):
        self.requested = {book: frozenset(chapters) for book, chapters in requested.items()}
        self.expected = sum(len(chapters) for chapters in self.requested.values())
        self.state: ScanState = None
        self.finished: List[FinishedChapter] = []
        self._done = set()
        self._text: List[str] = []

    @property
    def complete(self) -> bool:
        return len(self.finished) >= self.expected

    def _flush_text(self):
        # 한 절 안의 연속된 텍스트 조각 하나 = 항목 하나
        if self._text and isinstance(self.state, InVerse):
            text = "".join(self._text)
            if text:
                self.state.in_chapter.verses.append(f"{self.state.label}. {text}")
        self._text = []

    def start(self, tag, attrib):
        self._flush_text()
        state = self.state

        if tag == BOOK_TAG and state is None:
            book = _name(tag, attrib)
            chapters = self.requested.get(book)
            if chapters is not None:
                self.state = InBook(book, chapters)

        elif tag == CHAPTER_TAG and isinstance(state, InBook):
            label = _name(tag, attrib)
            # same number grammar as "-c 'Book N'" selectors
            if not CHAPTER_NUMBER_RE.fullmatch(label):
                raise XMLParseError(
                    f"chapter label {label!r} in book {state.book!r} is not a number"
                )
            chapter = int(label)
            key = ChapterKey(state.book, chapter)
            if chapter in state.chapters and key not in self._done:
                self.state = InChapter(state, chapter, [])

        elif tag == VERSE_TAG and isinstance(state, InChapter):
            self.state = InVerse(state, _name(tag, attrib))

    def end(self, tag):
        self._flush_text()
        state = self.state

        if tag == BOOK_TAG:
            self.state = None

        elif tag == CHAPTER_TAG and isinstance(state, InChapter):
            key = ChapterKey(state.in_book.book, state.chapter)
            self.finished.append(FinishedChapter(key, tuple(state.verses)))
            self._done.add(key)
            self.state = state.in_book
            if self.complete:
                raise _ScanComplete()

        elif tag == VERSE_TAG and isinstance(state, InVerse):
            self.state = state.in_chapter

    def data(self, data):
        if isinstance(self.state, InVerse):
            self._text.append(data)

    def comment(self, text):
        self._flush_text()

    def pi(self, target, text=None):
        self._flush_text()

    def close(self):
        return self.finished


def scan_chapters(path, requested: Dict[str, Sequence[int]],
                  chunk_size: int = READ_CHUNK_SIZE) -> List[FinishedChapter]:
    """
    Stream ``path`` once and return the requested chapters in the order they
    close in the file. Requested chapters that never appear are simply absent.
    """
    chunk_size = max(1, chunk_size)
    collector = ChapterCollector(requested)
    parser = ET.XMLParser(target=collector)

    try:
        f = open(Path(path), "rb")
    except OSError as e:
        raise OpenInputError(path, e.strerror or str(e)) from e

    with f:
        try:
            while True:
                try:
                    chunk = f.read(chunk_size)
                except OSError as e:
                    raise OpenInputError(path, e.strerror or str(e)) from e
                if not chunk:
                    parser.close()
                    break
                parser.feed(chunk)
        except _ScanComplete:
            pass
        except ET.ParseError as e:
            raise XMLParseError(str(e).split(":")[0], getattr(e, "position", None)) from e

    return collector.finished

# bible_roam/main.py
import argparse
import sys
from typing import List, Optional

from bible_roam.builder import build_documents, write_documents
from bible_roam.config import DEFAULT_XML_PATH
from bible_roam.errors import ConversionError
from bible_roam.ref_parser import (
    ChapterKey,
    parse_chapter_ref,
    parse_chapter_refs,
    requested_chapters,
)
from bible_roam.scanner import scan_chapters


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="bible-roam",
        description="Convert chapters of a b/c/v bible XML file into Roam import JSON.",
    )
    ap.add_argument(
        "-c", "--chapter", dest="chapters", action="append", default=[],
        metavar="'BOOK N'", help="Chapter to extract, e.g. 'Genesis 1' (repeatable)",
    )
    ap.add_argument("-b", "--book", help="Book name (single chapter form)")
    ap.add_argument(
        "-n", "--chapter-number", type=int, metavar="N",
        help="Chapter number (single chapter form, used with --book)",
    )
    ap.add_argument("-f", "--file", dest="path", default=DEFAULT_XML_PATH,
                    help=f"Bible XML file (default: {DEFAULT_XML_PATH})")
    ap.add_argument("-v", "--verbose", action="store_true",
                    help="Print a summary line to stderr")
    return ap


def selected_chapters(ap: argparse.ArgumentParser, args) -> List[ChapterKey]:
    single = args.book is not None or args.chapter_number is not None

    if single and args.chapters:
        ap.error("-c/--chapter cannot be combined with --book/--chapter-number")
    if single:
        if args.book is None or args.chapter_number is None:
            ap.error("--book and --chapter-number must be given together")
        return [parse_chapter_ref(args.book, args.chapter_number)]
    if not args.chapters:
        ap.error("at least one -c/--chapter (or --book with --chapter-number) is required")

    return parse_chapter_refs(args.chapters)


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_arg_parser()
    args = ap.parse_args(argv)

    try:
        keys = selected_chapters(ap, args)
        finished = scan_chapters(args.path, requested_chapters(keys))
        docs = build_documents(finished)
        write_documents(docs)
    except ConversionError as e:
        print(f"ERROR {e}", file=sys.stderr, flush=True)
        return 1

    found = {c.key for c in finished}
    for key in dict.fromkeys(keys):
        if key not in found:
            print(f"WARN no match book={key.book} ch={key.chapter} file={args.path}",
                  file=sys.stderr, flush=True)

    if args.verbose:
        verses = sum(len(c.verses) for c in finished)
        print(f"OK docs={len(docs)} verses={verses}", file=sys.stderr, flush=True)

    return 0


if __name__ == "__main__":
    sys.exit(main())

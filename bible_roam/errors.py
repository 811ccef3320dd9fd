# bible_roam/errors.py
from typing import Optional, Tuple


class ConversionError(Exception):
    """Base class for every failure that aborts a conversion run."""


class OpenInputError(ConversionError):
    def __init__(self, path, reason: str):
        self.path = path
        super().__init__(f"Could not open bible XML file {path}: {reason}")


class BadChapterError(ConversionError, ValueError):
    def __init__(self, chapter: str):
        self.chapter = chapter
        super().__init__(f"Unable to parse chapter {chapter!r}")


class XMLParseError(ConversionError):
    def __init__(self, message: str, position: Optional[Tuple[int, int]] = None):
        self.position = position
        if position is not None:
            message = f"{message} (line {position[0]}, column {position[1]})"
        super().__init__(f"Error parsing XML: {message}")


class WriteOutputError(ConversionError):
    def __init__(self, reason: str):
        super().__init__(f"Writing output: {reason}")

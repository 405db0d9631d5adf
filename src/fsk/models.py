"""Defines classes for representing search results, errors, and change requests.

The most important classes are :class:`SearchResult` and :class:`FileEditCmd`.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


class Error(Exception):
    """Base class for errors raised by fsk itself (as opposed to the OS)."""


class NotFoundError(Error, FileNotFoundError):
    """Raised when a note, folder, or copy source does not exist."""
    def __init__(self, title: str, path: str = None):
        super().__init__(f'Not found: {title}')
        self.title = title
        self.path = path


class TitleError(Error, ValueError):
    """Raised when a title cannot be used, typically because it resolves to a path outside the base directory."""
    def __init__(self, title: str, reason: str = 'escapes the notes directory'):
        super().__init__(f'Invalid title [{title}]: {reason}')
        self.title = title


@dataclass
class SearchResult:
    """A single hit from :meth:`fsk.store.Store.search`.

    Exactly one of :attr:`title_match` and :attr:`preview` is meaningful: when the keyword appears in the title,
    the file is never opened and ``preview`` is None.
    """

    title: str
    """Relative title of the note, without the ``.md`` extension."""

    title_match: bool = False

    preview: Optional[str] = None
    """The first line of content containing the keyword, with surrounding whitespace stripped."""

    def as_json(self) -> dict:
        """Returns a dict representing the instance, suitable for serializing as json."""
        return {
            'title': self.title,
            'title_match': self.title_match,
            'preview': self.preview
        }


@dataclass
class FileEditCmd:
    """Base class for requests to make changes to the notes directory."""

    path: str
    """Path to the file or folder that should be changed."""


@dataclass
class CreateCmd(FileEditCmd):
    """Represents a request to create (or overwrite) a file, creating parent directories as needed."""

    contents: str


@dataclass
class DeleteCmd(FileEditCmd):
    """Represents a request to delete a single file."""

    delete_empty_parents: bool = True
    """If True, any parent directories that are empty after the deletion should be deleted (except the base)."""


@dataclass
class DeleteTreeCmd(FileEditCmd):
    """Represents a request to delete a folder and everything in it."""


@dataclass
class MoveCmd(FileEditCmd):
    """Represents a request to move a file or folder from one location to another."""

    dest: str
    """The new path and filename."""

    create_parents: bool = False
    """If True, any nonexistent parent directories should be created."""

    delete_empty_parents: bool = False
    """If True, any parent directories that are empty after performing the move should be deleted."""


@dataclass
class CopyTreeCmd(FileEditCmd):
    """Represents a request to recursively copy a folder, overwriting files that already exist at the destination."""

    dest: str

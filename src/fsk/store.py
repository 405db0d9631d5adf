"""Provides the :class:`Store` class, which reads and changes the notes directory."""

import logging
import os
import os.path
import shutil
from typing import Iterator, List

from fsk.conf import FskConf
from fsk.models import FileEditCmd, CreateCmd, DeleteCmd, DeleteTreeCmd, MoveCmd, CopyTreeCmd, SearchResult,\
    NotFoundError, TitleError, Error

logger = logging.getLogger(__name__)

NOTE_SUFFIX = '.md'


class Store:
    """Accesses notes directly on the filesystem.

    Every note is a file ``<base>/<title>.md``, where the title may contain slashes to nest notes in folders.
    Nothing is cached and no state is kept between calls apart from :attr:`skipped`.

    Traversal is best-effort: directories and files that cannot be read during :meth:`list` or :meth:`search`
    are skipped rather than aborting the whole walk. The number of entries skipped by the most recent walk is
    available as :attr:`skipped`.

    .. attribute:: conf
       :type: FskConf

    .. attribute:: skipped
       :type: int
    """
    def __init__(self, conf: FskConf):
        self.conf = conf
        self.skipped = 0

    @property
    def base(self) -> str:
        return self.conf.base_dir

    def _resolve(self, title: str, relpath: str) -> str:
        if os.path.isabs(relpath):
            raise TitleError(title)
        path = os.path.normpath(os.path.join(self.base, relpath))
        if not os.path.commonpath([self.base, path]) == self.base:
            raise TitleError(title)
        return path

    def path(self, title: str) -> str:
        """Returns the absolute path of the file for the given note title.

        For an empty title, returns the base directory itself.
        Raises :exc:`TitleError` if the title would point outside the base directory.
        """
        if not title:
            return self.base
        return self._resolve(title, title + NOTE_SUFFIX)

    def folder_path(self, folder: str) -> str:
        """Like :meth:`path`, but for a folder name, so no extension is added."""
        if not folder:
            return self.base
        return self._resolve(folder, folder)

    def title_for(self, path: str) -> str:
        rel = os.path.relpath(path, self.base)
        if rel.endswith(NOTE_SUFFIX):
            rel = rel[:-len(NOTE_SUFFIX)]
        return rel.replace(os.sep, '/')

    def read(self, title: str) -> str:
        """Returns the full text of the note. OS errors such as :exc:`FileNotFoundError` propagate unchanged."""
        with open(self.path(title), 'r', encoding='utf-8', newline='') as file:
            return file.read()

    def write(self, title: str, contents: str) -> str:
        """Creates or replaces the note, creating any folders it is nested in. Returns the path."""
        path = self.path(title)
        if path == self.base:
            raise TitleError(title, 'a note needs a title')
        self.change([CreateCmd(path, contents)])
        return path

    def list(self, folder: str = '') -> List[str]:
        """Returns the sorted titles of all notes, or of just the notes within a folder.

        Titles are always relative to the base directory, so they can be passed straight back to :meth:`read`.
        If the folder does not exist, the result is empty.
        """
        root = self.folder_path(folder)
        self.skipped = 0
        if not os.path.isdir(root):
            return []
        return sorted(self.title_for(e.path) for e in self._notes_in(root))

    def search(self, keyword: str) -> Iterator[SearchResult]:
        """Finds notes whose title or content contains the keyword, ignoring case.

        Results come in directory-walk order, not sorted. A note whose title matches is reported without its
        file being opened. Other notes are read in full and scanned for the first line containing the keyword,
        which is reported (stripped) as the preview. Files that cannot be read or decoded as UTF-8 are skipped.
        """
        keyword = keyword.lower()
        self.skipped = 0
        if not os.path.isdir(self.base):
            return
        for entry in self._notes_in(self.base):
            title = self.title_for(entry.path)
            if keyword in title.lower():
                yield SearchResult(title, title_match=True)
                continue
            try:
                content = self._text(entry.path)
            except (OSError, UnicodeDecodeError) as e:
                self._skip(entry.path, e)
                continue
            preview = next((line.strip() for line in content.split('\n') if keyword in line.lower()), None)
            if preview is not None:
                yield SearchResult(title, preview=preview)

    def remove(self, title: str) -> str:
        """Deletes a note, or a whole folder if there is no note by that name. Returns the deleted path.

        After deleting a note, its folder and any ancestors that are left empty are deleted as well, stopping at
        the base directory, which is never deleted. Deleting a folder removes everything inside it.

        Raises :exc:`NotFoundError` if there is neither a note nor a folder with the given title.
        """
        if not title:
            raise TitleError(title, 'refusing to remove the notes directory itself')
        path = self.path(title)
        if os.path.isfile(path):
            self.change([DeleteCmd(path)])
            return path
        folder = self.folder_path(title)
        if os.path.isdir(folder) and not folder == self.base:
            self.change([DeleteTreeCmd(folder)])
            return folder
        raise NotFoundError(title, path)

    def move(self, src: str, dest: str) -> str:
        """Renames a note, creating the destination's folders as needed. Returns the new path.

        Folders left empty by the move are deleted. Raises :exc:`NotFoundError` if there is no such note;
        other OS errors, such as a rename across devices, propagate unchanged.
        """
        src_path = self.path(src)
        dest_path = self.path(dest)
        if not os.path.isfile(src_path):
            raise NotFoundError(src, src_path)
        self.change([MoveCmd(src_path, dest_path, create_parents=True, delete_empty_parents=True)])
        return dest_path

    def export(self, folder: str, dest: str) -> str:
        """Copies a folder, or all notes if folder is empty, to a directory outside the notes directory.

        Everything is copied, not only notes. Existing files at the destination are overwritten.
        Raises :exc:`NotFoundError` if the folder does not exist. Returns the absolute destination path.
        """
        src = self.folder_path(folder)
        if not os.path.isdir(src):
            raise NotFoundError(folder or src, src)
        dest = os.path.abspath(dest)
        if os.path.commonpath([src, dest]) == src:
            raise Error(f'Cannot export [{src}] into itself: {dest}')
        self.change([CopyTreeCmd(src, dest)])
        return dest

    def import_(self, src: str, folder: str = '') -> str:
        """Copies an external directory tree into the notes directory, or into a folder within it.

        This is the reverse of :meth:`export`. Raises :exc:`NotFoundError` if src is not a directory.
        Returns the path copied into.
        """
        src = os.path.abspath(src)
        if not os.path.isdir(src):
            raise NotFoundError(src, src)
        dest = self.folder_path(folder)
        if os.path.commonpath([src, dest]) == src:
            raise Error(f'Cannot import [{src}] into itself: {dest}')
        self.change([CopyTreeCmd(src, dest)])
        return dest

    def change(self, edits: List[FileEditCmd]) -> None:
        """Applies the edits in order. Changes are not atomic and there is no rollback.

        In preview mode, the edits are printed instead.
        """
        for edit in edits:
            if self.conf.preview_mode:
                print(edit)
                continue

            if isinstance(edit, CreateCmd):
                os.makedirs(os.path.dirname(edit.path), exist_ok=True)
                with open(edit.path, 'w', encoding='utf-8', newline='') as file:
                    file.write(edit.contents)
                logger.info('Wrote %s', edit.path)
            elif isinstance(edit, DeleteCmd):
                os.remove(edit.path)
                logger.info('Deleted %s', edit.path)
                if edit.delete_empty_parents:
                    self._prune(os.path.dirname(edit.path))
            elif isinstance(edit, DeleteTreeCmd):
                shutil.rmtree(edit.path)
                logger.info('Deleted folder %s', edit.path)
            elif isinstance(edit, MoveCmd):
                if edit.create_parents:
                    os.makedirs(os.path.dirname(edit.dest), exist_ok=True)
                os.rename(edit.path, edit.dest)
                logger.info('Moved %s to %s', edit.path, edit.dest)
                if edit.delete_empty_parents:
                    self._prune(os.path.dirname(edit.path))
            elif isinstance(edit, CopyTreeCmd):
                shutil.copytree(edit.path, edit.dest, dirs_exist_ok=True)
                logger.info('Copied %s to %s', edit.path, edit.dest)
            else:
                raise ValueError(f'Unsupported edit: {edit}')

    def _prune(self, dirpath: str) -> None:
        while not dirpath == self.base and os.path.commonpath([self.base, dirpath]) == self.base:
            if not os.path.isdir(dirpath) or os.listdir(dirpath):
                break
            os.rmdir(dirpath)
            logger.debug('Deleted empty folder %s', dirpath)
            dirpath = os.path.dirname(dirpath)

    def _skip(self, path: str, error: BaseException) -> None:
        self.skipped += 1
        logger.debug('Skipping %s: %s', path, error)

    def _text(self, path: str) -> str:
        with open(path, 'r', encoding='utf-8', newline='') as file:
            return file.read()

    def _notes_in(self, dirpath: str) -> Iterator[os.DirEntry]:
        try:
            entries = list(os.scandir(dirpath))
        except OSError as e:
            self._skip(dirpath, e)
            return
        for entry in entries:
            try:
                if entry.is_symlink():
                    continue
                is_dir = entry.is_dir()
            except OSError as e:
                self._skip(entry.path, e)
                continue
            if is_dir:
                yield from self._notes_in(entry.path)
            elif os.path.splitext(entry.name)[1] == NOTE_SUFFIX:
                yield entry

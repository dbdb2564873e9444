"""Provides the :class:`Repo` class, which performs all filesystem access for clife."""

import logging
import os
import os.path
from typing import List, Iterator

from clife.conf import ClifeConf
from clife.models import Note, ErrorKind, FileEditCmd, CreateCmd, DeleteCmd, MkdirCmd


logger = logging.getLogger(__name__)


class RepoError(Exception):
    """Raised when an operation on the root directory fails.

    The underlying :exc:`OSError` is available as ``__cause__``.

    .. attribute:: kind
       :type: clife.models.ErrorKind

    .. attribute:: path
       :type: str
    """

    def __init__(self, message: str, kind: ErrorKind, path: str):
        super().__init__(message)
        self.kind = kind
        self.path = path

    @classmethod
    def wrap(cls, message: str, path: str, ex: OSError) -> 'RepoError':
        kind = ErrorKind.of(ex)
        return cls(f'{message} {path}: {kind.value} ({ex.strerror or ex})', kind, path)


class Repo:
    """Accesses the notes in the root directory directly, without any caching.

    Notes are re-read from the filesystem every time :meth:`index` is called. That's fine since a personal
    notes folder is small, and it means there's nothing to invalidate when files change behind our back.

    .. attribute:: conf
       :type: clife.conf.ClifeConf
    """

    def __init__(self, conf: ClifeConf):
        self.conf = conf
        if not conf.root_dir:
            raise ValueError('`root_dir` must be non-empty in ClifeConf.')

    @property
    def root_dir(self) -> str:
        return self.conf.root_dir

    def root_exists(self) -> bool:
        """Returns True if something exists at the root path.

        Raises :exc:`RepoError` if that can't be determined, e.g. because a parent folder is unreadable.
        """
        return self.exists(self.root_dir)

    def ensure_root(self) -> None:
        """Creates the root directory and any missing parents. Does nothing if it already exists."""
        try:
            os.makedirs(self.root_dir, exist_ok=True)
        except OSError as ex:
            raise RepoError.wrap('Failed to create root dir', self.root_dir, ex) from ex
        logger.debug('Ensured root dir %s', self.root_dir)

    def exists(self, path: str) -> bool:
        """Returns True if the path exists, False if it or one of its parents does not.

        Unlike :func:`os.path.exists`, other errors are not hidden: they raise :exc:`RepoError`.
        """
        try:
            os.stat(path)
        except (FileNotFoundError, NotADirectoryError):
            return False
        except OSError as ex:
            raise RepoError.wrap('Failed to check', path, ex) from ex
        return True

    def path_for(self, trunc_path: str) -> str:
        """Returns the absolute path for a path relative to the root directory."""
        return os.path.join(self.root_dir, trunc_path)

    def index(self) -> List[Note]:
        """Returns every file found anywhere under the root directory.

        The order is whatever order the filesystem lists entries in. Raises :exc:`RepoError` if any
        directory can't be read; partial results are discarded.
        """
        notes = list(self._notes_in(self.root_dir))
        logger.debug('Indexed %d notes in %s', len(notes), self.root_dir)
        return notes

    def _notes_in(self, dirpath: str) -> Iterator[Note]:
        try:
            entries = list(os.scandir(dirpath))
        except OSError as ex:
            raise RepoError.wrap('Failed to read', dirpath, ex) from ex
        for entry in entries:
            # symlinked folders are listed as notes, never walked
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError as ex:
                raise RepoError.wrap('Failed to read', entry.path, ex) from ex
            if is_dir:
                yield from self._notes_in(entry.path)
            else:
                yield Note(full_path=entry.path, trunc_path=os.path.relpath(entry.path, self.root_dir))

    def change(self, edits: List[FileEditCmd]) -> None:
        """Applies the specified edits in order.

        If :attr:`clife.conf.ClifeConf.preview_mode` is set, each edit is printed instead.
        Raises :exc:`RepoError` on the first edit that fails; earlier edits are not rolled back.
        """
        for edit in edits:
            if self.conf.preview_mode:
                print(edit)
                continue

            logger.debug('Applying %s', edit)
            try:
                if isinstance(edit, CreateCmd):
                    with open(edit.path, 'x') as file:
                        file.write(edit.contents)
                elif isinstance(edit, DeleteCmd):
                    os.remove(edit.path)
                elif isinstance(edit, MkdirCmd):
                    os.mkdir(edit.path)
                else:
                    raise NotImplementedError(f'Unsupported edit: {edit}')
            except OSError as ex:
                raise RepoError.wrap(f'Failed to apply {type(edit).__name__} to', edit.path, ex) from ex

    def close(self) -> None:
        """Release any resources associated with the repo. Should be called when you're done with an instance."""
        pass

"""Provides the main entry point for using the library, :class:`Clife`"""

from __future__ import annotations
import logging
import os.path
from typing import List
from mako.exceptions import MakoException
from mako.template import Template
from clife.conf import ClifeConf
from clife.models import Note, ErrorKind, CreateCmd, DeleteCmd, MkdirCmd
from clife.naming import note_filename, validate_project_name, PROJECT_NAME_SYMBOLS
from clife.repo import Repo, RepoError


logger = logging.getLogger(__name__)


class TemplateError(Exception):
    """Raised when the configured note template cannot be read or rendered."""
    pass


class Clife:
    """Main entry point for working programmatically with your notes.

    Generally, you should get an instance using the :meth:`Clife.for_user` method. Call :meth:`close` when you're
    done with it, or else use it as a context manager.

    .. attribute:: conf
       :type: clife.conf.ClifeConf

    .. attribute:: repo
       :type: clife.repo.Repo

    Here's an example that creates a project folder and a note at the top level:

    .. code-block:: python

       from clife.api import Clife
       with Clife.for_user() as cl:
           cl.setup()
           cl.create_project('garden')
           print(cl.new_note())
    """

    @staticmethod
    def for_user() -> Clife:
        """Creates an instance using :meth:`clife.conf.ClifeConf.for_user`."""
        return ClifeConf.for_user().instantiate()

    def __init__(self, conf: ClifeConf):
        self.conf = conf
        self.repo = Repo(conf)

    def setup(self) -> bool:
        """Creates the root directory if it does not exist yet. Returns True if it had to be created."""
        if self.repo.root_exists():
            return False
        print(f'No clife folder detected at {self.conf.root_dir}')
        self.repo.ensure_root()
        return True

    def notes(self) -> List[Note]:
        """Returns all notes currently in the root directory. See :meth:`clife.repo.Repo.index`."""
        return self.repo.index()

    def new_note(self, start: int = 1) -> str:
        """Creates a new note at the top of the root directory and returns its path.

        The note is named ``new_note_<n>.md``, where n is the first number, counting up from start, for which
        no file exists yet. The file is empty unless :attr:`clife.conf.ClifeConf.note_template` is set.

        Raises :exc:`FileNotFoundError` if the template is missing, or :exc:`TemplateError` if it cannot be
        loaded or rendered.
        """
        n = start
        while True:
            path = os.path.join(self.conf.root_dir, note_filename(n))
            if self.repo.exists(path):
                print(f'{os.path.basename(path)} already exists, trying again ...')
                n += 1
                continue
            try:
                self.repo.change([CreateCmd(path, contents=self._render_template(path))])
            except RepoError as ex:
                if ex.kind != ErrorKind.ALREADY_EXISTS:
                    raise
                logger.info('%s was created by someone else, trying again ...', os.path.basename(path))
                n += 1
                continue
            return path

    def _render_template(self, path: str) -> str:
        if not self.conf.note_template:
            return ''
        if not os.path.isfile(self.conf.note_template):
            raise FileNotFoundError(f'Template does not exist: {self.conf.note_template}')
        try:
            template = Template(filename=self.conf.note_template)
        except (MakoException, OSError) as ex:
            raise TemplateError(f'Cannot load template {self.conf.note_template}: {ex}') from ex
        try:
            return template.render(conf=self.conf, path=path)
        except Exception as ex:
            # the template is user code, so anything it raises is reported the same way
            raise TemplateError(f'Cannot render template {self.conf.note_template}: {ex!r}') from ex

    def delete(self, trunc_path: str) -> str:
        """Removes the note at the given path relative to the root directory, and returns its full path.

        Raises :exc:`clife.repo.RepoError` if the file can't be removed, for example because it doesn't exist.
        """
        path = self.repo.path_for(trunc_path)
        self.repo.change([DeleteCmd(path)])
        return path

    def create_project(self, name: str) -> str:
        """Creates a project folder directly under the root directory, and returns its path.

        Raises :exc:`ValueError` if the name is rejected by :func:`clife.naming.validate_project_name`, or
        :exc:`clife.repo.RepoError` if something already exists with that name.
        """
        if not validate_project_name(name):
            raise ValueError(f'Invalid project name {name!r}: may only use alphanumerics and '
                             f'{", ".join(repr(c) for c in PROJECT_NAME_SYMBOLS)}')
        path = self.repo.path_for(name.strip())
        self.repo.change([MkdirCmd(path)])
        return path

    def close(self):
        """Closes the associated repo and releases any other resources."""
        self.repo.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.repo.close()

from __future__ import annotations
from dataclasses import dataclass, replace
import os
import os.path
from typing import Optional


ROOT_ENV_VAR = 'CLIFE_ROOT'
DEFAULT_ROOT = os.path.join('~', '.clife')
USER_CONF_NAME = '.clife.conf.py'


class ConfError(Exception):
    pass


def default_root() -> str:
    """Returns the value of the ``CLIFE_ROOT`` environment variable, or ``~/.clife`` if it is unset or empty."""
    return os.environ.get(ROOT_ENV_VAR) or DEFAULT_ROOT


@dataclass
class ClifeConf:
    root_dir: str
    """The folder under which all notes and projects are stored.

    It will be created (along with any missing parents) the first time clife runs.
    Every file anywhere beneath it is treated as a note.
    """

    note_template: Optional[str] = None
    """Path to a Mako template used as the initial contents of notes created by clife.

    The template is rendered with ``conf`` (this instance) and ``path`` (the absolute path of the new note)
    in its namespace. If this is None, new notes are created empty.
    """

    preview_mode: bool = False
    """If True, actions that would change the root directory should instead just print the change to the console.

    Instead of setting this in your ``.clife.conf.py``, you can pass a ``--preview`` command-line argument.
    """

    @classmethod
    def for_user(cls) -> ClifeConf:
        """Loads the configuration for the current user.

        If ``~/.clife.conf.py`` exists, it is executed and must assign an instance of this class to the
        variable ``conf``. Otherwise, an instance is built from :func:`default_root`.
        """
        path = os.path.expanduser(os.path.join('~', USER_CONF_NAME))
        if not os.path.exists(path):
            return cls(root_dir=default_root())
        with open(path, 'r') as file:
            conf_script = file.read()
        context = {}
        exec(conf_script, context)
        if 'conf' not in context or not isinstance(context['conf'], cls):
            raise ConfError('You need to assign an instance of ClifeConf to the variable `conf` '
                            f'in your config file: {path}')
        return context['conf']

    def standardize(self) -> ClifeConf:
        """Returns a copy with paths expanded and made absolute.

        Raises :exc:`ConfError` if ``root_dir`` is empty.
        """
        if not self.root_dir:
            raise ConfError('`root_dir` must be non-empty in ClifeConf.')
        template = self.note_template
        if template:
            template = os.path.realpath(os.path.expanduser(template))
        return replace(
            self,
            root_dir=os.path.realpath(os.path.expanduser(self.root_dir)),
            note_template=template
        )

    def instantiate(self):
        from clife.api import Clife
        return Clife(self.standardize())

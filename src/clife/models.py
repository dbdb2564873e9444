"""Defines classes for representing notes, user actions, and filesystem changes.

The most important classes are :class:`Note`, :class:`Action`, and :class:`FileEditCmd`
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class Note:
    """A single file found somewhere under the root directory.

    Instances are produced by :meth:`clife.repo.Repo.index`; they are never persisted.
    """

    full_path: str
    """The absolute path of the file."""

    trunc_path: str
    """The path of the file relative to the root directory.

    This is what the user types to refer to the note, and is unique within the results of one index pass.
    """

    def as_json(self) -> dict:
        """Returns a dict representing the instance, suitable for serializing as json."""
        return {
            'full_path': self.full_path,
            'trunc_path': self.trunc_path,
        }


class Action(Enum):
    """The operations offered by the interactive prompt. Each value is the key the user types."""

    CREATE_NOTE = 'c'
    DELETE = 'd'
    CREATE_PROJECT = 'p'

    @classmethod
    def parse(cls, text: str) -> Optional[Action]:
        """Returns the action for the given input, or None if it doesn't name one.

        Leading and trailing whitespace is ignored, but matching is case-sensitive.
        """
        text = text.strip()
        for action in cls:
            if action.value == text:
                return action
        return None


class ErrorKind(Enum):
    NOT_FOUND = 'not found'
    PERMISSION_DENIED = 'permission denied'
    ALREADY_EXISTS = 'already exists'
    OTHER = 'other'

    @classmethod
    def of(cls, ex: OSError) -> ErrorKind:
        """Classifies an exception raised by an OS call."""
        if isinstance(ex, FileNotFoundError):
            return cls.NOT_FOUND
        if isinstance(ex, PermissionError):
            return cls.PERMISSION_DENIED
        if isinstance(ex, FileExistsError):
            return cls.ALREADY_EXISTS
        return cls.OTHER


@dataclass
class FileEditCmd:
    """Base class for requests to make changes to the root directory."""

    path: str
    """Absolute path of the file or folder to create or remove."""


@dataclass
class CreateCmd(FileEditCmd):
    """Represents a request to create a new file. Fails if the file already exists."""

    contents: str = ''


@dataclass
class DeleteCmd(FileEditCmd):
    """Represents a request to remove a file."""
    pass


@dataclass
class MkdirCmd(FileEditCmd):
    """Represents a request to create a single new directory. Fails if anything already exists at the path."""
    pass

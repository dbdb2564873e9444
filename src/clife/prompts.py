"""Line-oriented interactive prompts.

Every prompt loops until it gets valid input, so a script of input lines fully determines the outcome.
"""

import sys
from typing import List, TextIO

from clife.models import Action, Note
from clife.naming import validate_project_name


class Cancelled(Exception):
    """Raised when the user declines to go ahead with an action."""
    pass


class Prompter:
    """Asks the user questions on ``stdout`` and reads the answers from ``stdin``.

    If the streams are not given, the process's current ``sys.stdin`` and ``sys.stdout`` are used at the time
    each prompt runs.
    """

    def __init__(self, stdin: TextIO = None, stdout: TextIO = None):
        self._stdin = stdin
        self._stdout = stdout

    def _print(self, text: str = '') -> None:
        print(text, file=self._stdout or sys.stdout)

    def _readline(self) -> str:
        line = (self._stdin or sys.stdin).readline()
        if not line:
            raise EOFError('No more input')
        return line

    def prompt_for_action(self) -> Action:
        while True:
            self._print('\nWhat action would you like to take?')
            self._print('Options are ... \n\t - (c)reate note\n\t - (d)elete\n\t - create (p)roject')
            action = Action.parse(self._readline())
            if action:
                return action

    def prompt_for_note(self, notes: List[Note], action: str) -> str:
        """Returns the relative path of the note the user picks, exactly as they typed it (minus whitespace)."""
        paths = {note.trunc_path for note in notes}
        while True:
            self._print(f'\nWhat file would you like to {action}?')
            self._print('Options are ... ')
            for note in notes:
                self._print(f'- {note.trunc_path}')
            choice = self._readline().strip()
            if choice in paths:
                return choice

    def confirm_delete(self, path: str) -> None:
        """Returns if the user answers yes; raises :exc:`Cancelled` if they answer no."""
        while True:
            self._print(f'\nAre you sure you want to delete {path}?')
            self._print('Options are ... \n\t- (y)es\n\t- (n)o')
            answer = self._readline().strip()
            if answer == 'y':
                return
            if answer == 'n':
                raise Cancelled(f'Not deleting {path}')

    def prompt_for_project_name(self) -> str:
        while True:
            self._print('\nWhat would you like to name this project?')
            line = self._readline()
            if validate_project_name(line):
                return line.strip()
            self._print(f'Potential project name {line.strip()} contains invalid characters')
            self._print("May only use alphanumerics, '_', and '.'")

"""Rules for the names clife gives to, or accepts for, new files and folders."""

NOTE_PREFIX = 'new_note_'
NOTE_SUFFIX = '.md'

PROJECT_NAME_SYMBOLS = '_.'


def note_filename(n: int) -> str:
    """Returns the filename used for the nth automatically-named note, e.g. ``new_note_3.md``."""
    return f'{NOTE_PREFIX}{n}{NOTE_SUFFIX}'


def validate_project_name(name: str) -> bool:
    """Returns True if the name can be used for a new project folder.

    Surrounding whitespace is ignored. What remains must be non-empty and consist only of
    alphanumeric characters (including non-ASCII letters and digits), ``_``, and ``.``.
    """
    name = name.strip()
    if not name:
        return False
    return all(c.isalnum() or c in PROJECT_NAME_SYMBOLS for c in name)

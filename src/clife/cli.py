"""Command-line interface for clife."""


import argparse
from dataclasses import replace
import json
from operator import attrgetter
import os.path
import sys
from terminaltables import AsciiTable
from clife.api import Clife, TemplateError
from clife.conf import ClifeConf, ConfError, ROOT_ENV_VAR
from clife.logger import configure_logging
from clife.models import Action
from clife.prompts import Prompter, Cancelled
from clife.repo import RepoError


def _setup(cl: Clife) -> None:
    if cl.setup():
        print(f'{cl.conf.root_dir} directory created!')


def _create_note(args, cl: Clife, count: int) -> int:
    path = cl.new_note(count + 1)
    if not args.preview:
        print(f'New note created: {path}')
    return 0


def _delete_note(args, cl: Clife, trunc_path: str) -> int:
    if not args.preview:
        print(f'Deleting note {cl.repo.path_for(trunc_path)} ...')
    cl.delete(trunc_path)
    if not args.preview:
        print('File successfully deleted')
    return 0


def _create_project(args, cl: Clife, name: str) -> int:
    path = cl.create_project(name)
    if not args.preview:
        print(f'Created project {path}')
    return 0


def _interactive(args, cl: Clife) -> int:
    print('Welcome to clife!')
    _setup(cl)
    notes = cl.notes()
    print(f'Found {len(notes)} notes')

    prompter = Prompter()
    action = prompter.prompt_for_action()
    if action == Action.CREATE_NOTE:
        return _create_note(args, cl, len(notes))
    elif action == Action.DELETE:
        if not notes:
            print('There are no notes to delete')
            return 0
        trunc_path = prompter.prompt_for_note(notes, 'delete')
        prompter.confirm_delete(trunc_path)
        return _delete_note(args, cl, trunc_path)
    else:
        return _create_project(args, cl, prompter.prompt_for_project_name())


def _ls(args, cl: Clife) -> int:
    _setup(cl)
    notes = sorted(cl.notes(), key=attrgetter('trunc_path'))
    if args.json:
        print(json.dumps([n.as_json() for n in notes]))
    else:
        data = [('Note', 'Project')]
        for note in notes:
            parent = os.path.dirname(note.trunc_path)
            data.append((note.trunc_path, parent.split(os.sep)[0] if parent else ''))
        print(AsciiTable(data).table)
    return 0


def _new(args, cl: Clife) -> int:
    _setup(cl)
    return _create_note(args, cl, len(cl.notes()))


def _rm(args, cl: Clife) -> int:
    _setup(cl)
    trunc_path = args.path[0].strip()
    if trunc_path not in {n.trunc_path for n in cl.notes()}:
        print(f'No such note: {trunc_path}', file=sys.stderr)
        return 1
    if not args.yes:
        Prompter().confirm_delete(trunc_path)
    return _delete_note(args, cl, trunc_path)


def _mkproject(args, cl: Clife) -> int:
    _setup(cl)
    try:
        return _create_project(args, cl, args.name[0])
    except ValueError as ex:
        print(str(ex), file=sys.stderr)
        return 1


def argparser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Manage notes stored as files under a single root directory. '
                    'Run without a command to be asked what to do.')
    parser.set_defaults(func=_interactive)
    parser.add_argument('--root', nargs=1,
                        help=f'Root directory for notes. Overrides ~/.clife.conf.py and the {ROOT_ENV_VAR} '
                             'environment variable. Defaults to ~/.clife.')
    parser.add_argument('-p', '--preview', action='store_true',
                        help='Print changes to be made but do not change files. The root directory itself '
                             'is still created if it is missing.')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log debugging details to stderr.')

    subs = parser.add_subparsers(title='Commands')

    p_ls = subs.add_parser('ls', help='List every note under the root directory.')
    p_ls.add_argument('-j', '--json', action='store_true',
                      help='Output as JSON. The output is a list of objects with "full_path" and '
                           '"trunc_path" keys, where trunc_path is relative to the root directory.')
    p_ls.set_defaults(func=_ls)

    p_new = subs.add_parser(
        'new',
        help='Create a new note named new_note_<n>.md at the top of the root directory, using the first '
             'number after the current note count that is not already taken. Prints the path of the note.')
    p_new.set_defaults(func=_new)

    p_rm = subs.add_parser('rm', help='Delete a note.')
    p_rm.add_argument('path', nargs=1, help='Path of the note, relative to the root directory.')
    p_rm.add_argument('-y', '--yes', action='store_true', help='Do not ask for confirmation.')
    p_rm.set_defaults(func=_rm)

    p_proj = subs.add_parser('mkproject', help='Create a project folder under the root directory.')
    p_proj.add_argument('name', nargs=1, help="Name of the project. May only use alphanumerics, '_', and '.'.")
    p_proj.set_defaults(func=_mkproject)

    return parser


def main(args=None) -> int:
    """Runs the tool and returns its exit code.

    args may be an array of string command-line arguments; if absent,
    the process's arguments are used.
    """
    parser = argparser()
    args = parser.parse_args(args)
    configure_logging(args.verbose)
    try:
        conf = ClifeConf.for_user()
        if args.root:
            conf = replace(conf, root_dir=args.root[0])
        if args.preview:
            conf = replace(conf, preview_mode=True)
        cl = conf.instantiate()
    except ConfError as ex:
        print(f'Error: {ex}', file=sys.stderr)
        return 1

    with cl:
        try:
            return args.func(args, cl)
        except Cancelled:
            print('Cancelling ...')
            return 0
        except EOFError:
            print('Error: input ended before a valid answer was given', file=sys.stderr)
            return 1
        except (RepoError, TemplateError, FileNotFoundError) as ex:
            print(f'Error: {ex}', file=sys.stderr)
            return 1

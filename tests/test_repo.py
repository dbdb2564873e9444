import os.path
from pathlib import Path
import pytest
from clife.conf import ClifeConf
from clife.models import CreateCmd, DeleteCmd, MkdirCmd, ErrorKind
from clife.repo import Repo, RepoError


def repo_for(root: str, **kwargs) -> Repo:
    return Repo(ClifeConf(root_dir=root, **kwargs).standardize())


def test_requires_root():
    with pytest.raises(ValueError):
        Repo(ClifeConf(root_dir=''))


def test_root_exists(fs):
    fs.create_dir('/notes')
    assert repo_for('/notes').root_exists()
    assert not repo_for('/missing').root_exists()
    assert not repo_for('/missing/deeper').root_exists()


def test_root_exists_error(tmp_path, mocker):
    repo = repo_for(str(tmp_path))
    mocker.patch('os.stat', side_effect=PermissionError(13, 'Permission denied'))
    with pytest.raises(RepoError) as exc_info:
        repo.root_exists()
    assert exc_info.value.kind == ErrorKind.PERMISSION_DENIED
    assert exc_info.value.path == str(tmp_path)
    assert isinstance(exc_info.value.__cause__, PermissionError)


def test_ensure_root(fs):
    repo = repo_for('/home/someone/deep/notes')
    assert not repo.root_exists()
    repo.ensure_root()
    assert os.path.isdir('/home/someone/deep/notes')
    assert repo.root_exists()
    repo.ensure_root()
    assert os.path.isdir('/home/someone/deep/notes')


def test_ensure_root_error(tmp_path, mocker):
    repo = repo_for(str(tmp_path / 'notes'))
    mocker.patch('os.makedirs', side_effect=PermissionError(13, 'Permission denied'))
    with pytest.raises(RepoError, match='Failed to create root dir') as exc_info:
        repo.ensure_root()
    assert exc_info.value.kind == ErrorKind.PERMISSION_DENIED


def test_index_nested(fs):
    fs.create_file('/notes/a/x.md')
    fs.create_file('/notes/b/y.md')
    fs.create_file('/notes/b/z.txt')
    notes = repo_for('/notes').index()
    assert sorted(n.trunc_path for n in notes) == ['a/x.md', 'b/y.md', 'b/z.txt']
    for note in notes:
        assert note.full_path == os.path.join('/notes', note.trunc_path)


def test_index_counts_every_file(fs):
    paths = ['top.md', '.hidden', 'a/b/c/d/deep.md', 'a/b/sibling.pdf', 'proj/notes.md']
    for path in paths:
        fs.create_file(os.path.join('/notes', path))
    fs.create_dir('/notes/empty/nested')
    notes = repo_for('/notes').index()
    assert len(notes) == len(paths)
    assert {n.trunc_path for n in notes} == set(paths)


def test_index_empty(fs):
    fs.create_dir('/notes')
    assert repo_for('/notes').index() == []


def test_index_missing_root(fs):
    with pytest.raises(RepoError) as exc_info:
        repo_for('/notes').index()
    assert exc_info.value.kind == ErrorKind.NOT_FOUND


def test_index_unreadable(tmp_path, mocker):
    (tmp_path / 'a').mkdir()
    (tmp_path / 'a' / 'x.md').write_text('')
    repo = repo_for(str(tmp_path))
    mocker.patch('os.scandir', side_effect=PermissionError(13, 'Permission denied'))
    with pytest.raises(RepoError, match='permission denied') as exc_info:
        repo.index()
    assert exc_info.value.kind == ErrorKind.PERMISSION_DENIED


def test_change(fs):
    fs.create_file('/notes/old.md', contents='bye')
    repo = repo_for('/notes')
    repo.change([CreateCmd('/notes/new.md', contents='hello'),
                 DeleteCmd('/notes/old.md'),
                 MkdirCmd('/notes/project')])
    assert Path('/notes/new.md').read_text() == 'hello'
    assert not Path('/notes/old.md').exists()
    assert Path('/notes/project').is_dir()


def test_change_errors(fs):
    fs.create_file('/notes/existing.md', contents='keep')
    repo = repo_for('/notes')
    with pytest.raises(RepoError) as exc_info:
        repo.change([CreateCmd('/notes/existing.md', contents='overwrite')])
    assert exc_info.value.kind == ErrorKind.ALREADY_EXISTS
    assert Path('/notes/existing.md').read_text() == 'keep'

    with pytest.raises(RepoError) as exc_info:
        repo.change([DeleteCmd('/notes/missing.md')])
    assert exc_info.value.kind == ErrorKind.NOT_FOUND

    with pytest.raises(RepoError) as exc_info:
        repo.change([MkdirCmd('/notes/existing.md')])
    assert exc_info.value.kind == ErrorKind.ALREADY_EXISTS


def test_change_preview(fs, capsys):
    fs.create_file('/notes/old.md')
    repo = repo_for('/notes', preview_mode=True)
    edits = [CreateCmd('/notes/new.md'), DeleteCmd('/notes/old.md'), MkdirCmd('/notes/project')]
    repo.change(edits)
    assert not Path('/notes/new.md').exists()
    assert Path('/notes/old.md').exists()
    assert not Path('/notes/project').exists()
    out, err = capsys.readouterr()
    assert out == ''.join(f'{edit}\n' for edit in edits)


def test_index_symlinked_dirs_not_walked(tmp_path):
    root = tmp_path / 'notes'
    (root / 'a').mkdir(parents=True)
    (root / 'a' / 'x.md').write_text('')
    os.symlink(str(root), str(root / 'a' / 'loop'))
    notes = repo_for(str(root)).index()
    assert sorted(n.trunc_path for n in notes) == ['a/loop', 'a/x.md']

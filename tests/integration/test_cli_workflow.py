"""Integration tests for the basic init/add/commit/log workflow."""

import pytest
from click.testing import CliRunner
from sprig.cli.main import cli
from sprig.core.repository import Repository


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def initialized(runner, workdir):
    result = runner.invoke(cli, ['init'])
    assert result.exit_code == 0
    return workdir


def test_init(runner, workdir):
    result = runner.invoke(cli, ['init'])
    assert result.exit_code == 0
    assert 'Initialized empty Sprig repository' in result.output
    assert (workdir / '.sprig' / 'graph.json').exists()


def test_init_new_directory(runner, workdir):
    result = runner.invoke(cli, ['init', 'project'])
    assert result.exit_code == 0
    assert (workdir / 'project' / '.sprig').is_dir()


def test_init_twice(runner, initialized):
    result = runner.invoke(cli, ['init'])
    assert result.exit_code == 1
    assert 'already exists' in result.output


def test_outside_repository(runner, workdir):
    result = runner.invoke(cli, ['log'])
    assert result.exit_code == 1
    assert 'Not a sprig repository' in result.output


def test_add_commit_log(runner, initialized):
    (initialized / 'hello.txt').write_text('hello')

    result = runner.invoke(cli, ['add', 'hello.txt'])
    assert result.exit_code == 0
    assert "add 'hello.txt'" in result.output

    result = runner.invoke(cli, ['commit', '-m', 'Add hello'])
    assert result.exit_code == 0
    assert 'Add hello' in result.output

    result = runner.invoke(cli, ['log'])
    assert result.exit_code == 0
    assert result.output.index('Add hello') < result.output.index('initial commit')
    assert '(HEAD)' in result.output

    result = runner.invoke(cli, ['log', '--oneline'])
    assert len(result.output.strip().splitlines()) == 2


def test_add_missing_file(runner, initialized):
    result = runner.invoke(cli, ['add', 'nope.txt'])
    assert result.exit_code == 1
    assert "No file named 'nope.txt'" in result.output


def test_commit_nothing(runner, initialized):
    result = runner.invoke(cli, ['commit', '-m', 'empty'])
    assert result.exit_code == 1
    assert 'No changes added to the commit' in result.output


def test_commit_requires_message(runner, initialized):
    result = runner.invoke(cli, ['commit'])
    assert result.exit_code != 0


def test_rm(runner, initialized):
    (initialized / 'a.txt').write_text('a')
    runner.invoke(cli, ['add', 'a.txt'])

    result = runner.invoke(cli, ['rm', 'a.txt'])
    assert result.exit_code == 0
    assert Repository(str(initialized)).load().staging.count() == 0

    result = runner.invoke(cli, ['rm', 'a.txt'])
    assert result.exit_code == 1
    assert 'is not staged' in result.output


def test_find_and_global_log(runner, initialized):
    (initialized / 'a.txt').write_text('a')
    runner.invoke(cli, ['add', 'a.txt'])
    runner.invoke(cli, ['commit', '-m', 'needle'])
    commit_id = Repository(str(initialized)).load().head_commit().id

    result = runner.invoke(cli, ['find', 'needle'])
    assert result.output.strip() == commit_id

    result = runner.invoke(cli, ['find', 'haystack'])
    assert 'Found no commit with that message' in result.output

    result = runner.invoke(cli, ['global-log'])
    assert f'commit {commit_id}' in result.output


def test_status(runner, initialized):
    (initialized / 'a.txt').write_text('a')
    result = runner.invoke(cli, ['status'])
    assert 'On branch master' in result.output
    assert 'Untracked files:' in result.output

    runner.invoke(cli, ['add', 'a.txt'])
    result = runner.invoke(cli, ['status'])
    assert 'Changes to be committed:' in result.output

    runner.invoke(cli, ['commit', '-m', 'a'])
    result = runner.invoke(cli, ['status'])
    assert 'working tree clean' in result.output


def test_verbose_flag(runner, initialized):
    result = runner.invoke(cli, ['-v', 'status'])
    assert result.exit_code == 0


def test_add_from_subdirectory(runner, initialized, monkeypatch):
    (initialized / 'one.py').write_text('root')
    (initialized / 'src').mkdir()
    (initialized / 'src' / 'one.py').write_text('nested')
    monkeypatch.chdir(initialized / 'src')

    result = runner.invoke(cli, ['add', 'one.py'])
    assert result.exit_code == 0
    assert "add 'src/one.py'" in result.output
    staged = Repository(str(initialized)).load().staging.entries
    assert list(staged) == ['src/one.py']


def test_add_outside_repository(runner, workdir, monkeypatch):
    (workdir / 'outside.txt').write_text('x')
    (workdir / 'project').mkdir()
    monkeypatch.chdir(workdir / 'project')
    assert runner.invoke(cli, ['init']).exit_code == 0

    result = runner.invoke(cli, ['add', '../outside.txt'])
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert 'outside the repository' in result.output
    assert Repository(str(workdir / 'project')).load().staging.count() == 0


def test_rm_from_subdirectory(runner, initialized, monkeypatch):
    (initialized / 'one.py').write_text('root')
    (initialized / 'src').mkdir()
    (initialized / 'src' / 'one.py').write_text('nested')
    assert runner.invoke(cli, ['add', '.']).exit_code == 0
    monkeypatch.chdir(initialized / 'src')
    (initialized / 'src' / 'one.py').unlink()

    result = runner.invoke(cli, ['rm', 'one.py'])
    assert result.exit_code == 0
    staged = Repository(str(initialized)).load().staging.entries
    assert list(staged) == ['one.py']

"""Tests for the pygit2 backed repository, run against repositories built in tmp_path."""
import threading

import pygit2
import pytest

from conftest import wait_for
from gitbrowse.exceptions import RepositoryError, UnknownBranchError
from gitbrowse.models.commit_set import CommitSetState
from gitbrowse.models.oid import Oid
from gitbrowse.models.repository import Repository
from gitbrowse.utils.log import Log
from gitbrowse.views.commit_view import CommitView
from gitbrowse.views.redraw import RedrawChannel
from gitbrowse.views.window import Window

BASE_TIME = 1700000000


def make_repo(path, count):
    """Linear history 'Commit 0' .. 'Commit <count-1>' on HEAD plus a 'feature' branch at Commit 1"""
    repo = pygit2.init_repository(str(path))
    tree = repo.TreeBuilder().write()
    parents = []
    ids = []
    for i in range(count):
        signature = pygit2.Signature(f'Author {i % 2}', 'author@example.com', BASE_TIME + i * 60, 0)
        commit_id = repo.create_commit('HEAD', signature, signature, f'Commit {i}\n\nDetails of {i}', tree, parents)
        parents = [commit_id]
        ids.append(commit_id)
    repo.branches.local.create('feature', repo[ids[1]])
    return repo, ids


def make_merge_repo(path):
    """'Base' <- 'Main' and 'Side', joined by 'Merge' with 'Main' as first parent"""
    repo = pygit2.init_repository(str(path))
    tree = repo.TreeBuilder().write()

    def commit(ref, message, offset, parents):
        signature = pygit2.Signature('Author', 'author@example.com', BASE_TIME + offset, 0)
        return repo.create_commit(ref, signature, signature, message, tree, parents)

    base = commit('HEAD', 'Base', 0, [])
    side = commit(None, 'Side', 60, [base])
    main = commit('HEAD', 'Main', 120, [base])
    merge = commit('HEAD', 'Merge', 180, [main, side])
    return repo, merge


def write_undecodable_commit(repo, parent):
    """Commit object declaring an encoding Python does not know"""
    tree = repo.TreeBuilder().write()
    raw = (f'tree {tree}\n'
           f'parent {parent}\n'
           f'author Broken <broken@example.com> {BASE_TIME} +0000\n'
           f'committer Broken <broken@example.com> {BASE_TIME} +0000\n'
           'encoding x-no-such-encoding\n'
           '\n'
           'Broken commit\n')
    return repo.odb.write(pygit2.enums.ObjectType.COMMIT, raw.encode())


class LoadedCallback:

    def __init__(self):
        self.calls = []
        self.event = threading.Event()

    def __call__(self, oid):
        self.calls.append(oid)
        self.event.set()


@pytest.fixture
def git_repo(tmp_path):
    return make_repo(tmp_path / 'repo', 5)


def open_repository(git_repo, args=None, load_batch_size=None):
    repo, _ = git_repo
    repository = Repository(args, load_batch_size)
    assert repository.open(repo.workdir)
    return repository


def load(repository, oid):
    on_loaded = LoadedCallback()
    repository.load_commits(oid, on_loaded)
    assert on_loaded.event.wait(5)
    return on_loaded


def summaries(repository, oid, start=0, count=100):
    return [commit.summary for commit in repository.commits(oid, start, count)]


def test_head_and_branches(git_repo):
    repo, ids = git_repo
    repository = open_repository(git_repo)

    head_name, head_oid = repository.head()
    branches = repository.branches()

    assert head_oid == Oid(repo.head.name)
    assert (head_name, head_oid) in branches
    assert ('feature', Oid('refs/heads/feature')) in branches
    assert [name for name, _ in branches] == sorted(name for name, _ in branches)


def test_detached_head(git_repo):
    repo, ids = git_repo
    repo.set_head(ids[2])
    repository = open_repository(git_repo)

    _, head_oid = repository.head()

    assert head_oid == Oid(ids[2])


def test_refs_at_same_commit_keep_separate_state(git_repo):
    repo, ids = git_repo
    repo.branches.local.create('twin', repo[ids[1]])
    repository = open_repository(git_repo)
    branches = dict(repository.branches())
    feature, twin = branches['feature'], branches['twin']
    view = CommitView(repository, RedrawChannel(), refresh_rate=0.01)

    assert feature != twin

    view.on_ref_select(feature, 'feature')
    assert wait_for(lambda: not repository.commit_set_state(feature).loading, 5)
    view.handle(ord('j'))
    view.on_ref_select(twin, 'twin')
    assert wait_for(lambda: not repository.commit_set_state(twin).loading, 5)
    win = Window(5, 120)
    view.render(win)

    assert view.view_index[feature].active_index == 1
    assert view.view_index[twin].active_index == 0
    assert win.title == 'Commits twin [2]'
    assert summaries(repository, twin) == ['Commit 1', 'Commit 0']
    repository.close()


def test_load_by_ref_name(git_repo):
    repository = open_repository(git_repo)
    oid = Oid('refs/heads/feature')

    on_loaded = load(repository, oid)

    assert on_loaded.calls == [oid]
    assert summaries(repository, oid) == ['Commit 1', 'Commit 0']


def test_load_commits_newest_first(git_repo):
    _, ids = git_repo
    repository = open_repository(git_repo, load_batch_size=2)
    oid = Oid(ids[-1])

    on_loaded = load(repository, oid)

    assert on_loaded.calls == [oid]
    assert repository.commit_set_state(oid) == CommitSetState(False, 5)
    assert summaries(repository, oid) == ['Commit 4', 'Commit 3', 'Commit 2', 'Commit 1', 'Commit 0']
    assert summaries(repository, oid, 3, 10) == ['Commit 1', 'Commit 0']


def test_commit_fields(git_repo):
    _, ids = git_repo
    repository = open_repository(git_repo)
    oid = Oid(ids[-1])
    load(repository, oid)

    commit = next(repository.commits(oid, 0, 1))

    assert commit.id == str(ids[-1])
    assert commit.author == 'Author 0'
    assert commit.author_email == 'author@example.com'
    assert int(commit.when.timestamp()) == BASE_TIME + 4 * 60
    assert commit.parents == [str(ids[-2])]


def test_reload_notifies_again(git_repo):
    _, ids = git_repo
    repository = open_repository(git_repo)
    oid = Oid(ids[-1])
    first = load(repository, oid)

    second = load(repository, oid)

    assert first.calls == [oid]
    assert second.calls == [oid]
    assert repository.commit_set_state(oid).commit_count == 5


def test_branch_loaded_separately(git_repo):
    _, ids = git_repo
    repository = open_repository(git_repo)
    feature = Oid(ids[1])

    load(repository, feature)

    assert summaries(repository, feature) == ['Commit 1', 'Commit 0']
    assert repository.commit_set_state(Oid(ids[-1])) == CommitSetState(False, 0)


def test_unknown_branch(git_repo):
    repository = open_repository(git_repo)

    with pytest.raises(UnknownBranchError):
        repository.commits(Oid('1' * 40), 0, 10)
    with pytest.raises(RepositoryError):
        repository.load_commits(Oid('1' * 40), lambda oid: None)


def test_load_before_open():
    with pytest.raises(RepositoryError):
        Repository().load_commits(Oid('1' * 40), lambda oid: None)


@pytest.mark.parametrize('args, expected', [
    ({'max_count': 2}, ['Commit 4', 'Commit 3']),
    ({'author': 'author 1'}, ['Commit 3', 'Commit 1']),
    ({'grep': '^commit [02]'}, ['Commit 2', 'Commit 0']),
    ({'since': '2023-11-14T22:15:00+00:00'}, ['Commit 4', 'Commit 3', 'Commit 2']),
    ({'until': '2023-11-14T22:15:00+00:00'}, ['Commit 1', 'Commit 0']),
    ({'merges': True}, []),
])
def test_filters(git_repo, args, expected):
    _, ids = git_repo
    repository = open_repository(git_repo, args)
    oid = Oid(ids[-1])

    load(repository, oid)

    assert summaries(repository, oid) == expected


@pytest.mark.parametrize('args, expected', [
    ({}, ['Base', 'Main', 'Merge', 'Side']),
    ({'merges': True}, ['Merge']),
    ({'no_merges': True}, ['Base', 'Main', 'Side']),
    ({'first_parent': True}, ['Base', 'Main', 'Merge']),
])
def test_merge_filters(tmp_path, args, expected):
    repo, merge = make_merge_repo(tmp_path / 'merges')
    repository = Repository(args)
    assert repository.open(repo.workdir)
    oid = Oid(merge)

    load(repository, oid)

    assert sorted(summaries(repository, oid)) == expected


def test_first_parent_order(tmp_path):
    repo, merge = make_merge_repo(tmp_path / 'merges')
    repository = Repository({'first_parent': True})
    assert repository.open(repo.workdir)
    oid = Oid(merge)

    load(repository, oid)

    assert summaries(repository, oid) == ['Merge', 'Main', 'Base']


def test_loader_error_finishes_loading(git_repo):
    repo, ids = git_repo
    broken = write_undecodable_commit(repo, ids[-1])
    repository = open_repository(git_repo)
    oid = Oid(broken)

    on_loaded = load(repository, oid)

    assert on_loaded.calls == [oid]
    assert repository.commit_set_state(oid).loading is False
    assert repository.commit_set_error(oid) is not None
    message, _ = Log.get_status_message(2)
    assert message.startswith(f'Error loading commits for {oid}')


def test_loader_error_stops_commit_view_refresh(git_repo):
    repo, ids = git_repo
    oid = Oid(write_undecodable_commit(repo, ids[-1]))
    repository = open_repository(git_repo)
    view = CommitView(repository, RedrawChannel(), refresh_rate=0.01)

    view.on_ref_select(oid, 'broken')

    assert wait_for(lambda: not repository.commit_set_state(oid).loading, 5)
    assert wait_for(lambda: not view.refresh_task.running, 5)
    repository.close()


def test_invalid_filter():
    with pytest.raises(ValueError):
        Repository({'since': 'someday'})


def test_commit_view_on_repository(git_repo):
    _, ids = git_repo
    repository = open_repository(git_repo)
    redraw = RedrawChannel()
    view = CommitView(repository, redraw, refresh_rate=0.01)
    oid = Oid(ids[-1])

    view.on_ref_select(oid, 'main')
    assert wait_for(lambda: not repository.commit_set_state(oid).loading, 5)
    assert wait_for(lambda: not view.refresh_task.running, 5)

    view.handle(ord('G'))
    win = Window(4, 120)
    view.render(win)

    assert view.view_index[oid].active_index == 4
    assert win.lines[1].endswith('Commit 1')
    assert win.lines[2].endswith('Commit 0')
    assert win.selected_row == 2
    repository.close()

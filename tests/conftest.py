"""Shared fixtures: in-memory commit source and log reset."""
import time
from datetime import datetime, timedelta, timezone

import pytest

from gitbrowse.exceptions import RepositoryError, UnknownBranchError
from gitbrowse.models.commit import GitCommit
from gitbrowse.models.commit_set import CommitSetState
from gitbrowse.models.oid import Oid
from gitbrowse.models.repo_data import RepoData
from gitbrowse.utils.log import LEVEL_INFO, Log
from gitbrowse.views.redraw import RedrawChannel


def make_commits(count, prefix=''):
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return [
        GitCommit(f'{i:040x}', f'Author {i}', start + timedelta(hours=i), f'Commit {prefix}{i}')
        for i in range(count)
    ]


def wait_for(predicate, timeout=2.0):
    deadline = time.time() + timeout
    while time.time() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


class FakeRepoData(RepoData):
    """RepoData whose loading is finished by the test calling finish()"""

    def __init__(self):
        self.branches = {}
        self.loading = {}
        self.callbacks = {}
        self.load_calls = []
        self.load_error = None
        self.commits_error = None
        self.complete_synchronously = False

    def add_branch(self, oid, count, loading=False):
        self.branches[oid] = make_commits(count, oid.short_id[:2])
        self.loading[oid] = loading
        return oid

    def commits(self, oid, start_index, max_count):
        if self.commits_error:
            raise self.commits_error
        if oid not in self.branches:
            raise UnknownBranchError(oid)
        return iter(self.branches[oid][start_index:start_index + max_count])

    def load_commits(self, oid, on_loaded):
        self.load_calls.append(oid)
        if self.load_error:
            raise self.load_error
        if oid not in self.branches:
            raise RepositoryError(f"Cannot read branch {oid}")
        if self.complete_synchronously:
            self.loading[oid] = False
            on_loaded(oid)
            return
        self.callbacks.setdefault(oid, []).append(on_loaded)

    def commit_set_state(self, oid):
        return CommitSetState(self.loading.get(oid, False), len(self.branches.get(oid, [])))

    def finish(self, oid):
        self.loading[oid] = False
        for on_loaded in self.callbacks.pop(oid, []):
            on_loaded(oid)


@pytest.fixture
def repo_data():
    return FakeRepoData()


@pytest.fixture
def redraw():
    return RedrawChannel()


@pytest.fixture
def branch_a():
    return Oid('a' * 40)


@pytest.fixture
def branch_b():
    return Oid('b' * 40)


@pytest.fixture(autouse=True)
def reset_log():
    yield
    Log.close()
    Log.configure(level=LEVEL_INFO)
    Log.clear()

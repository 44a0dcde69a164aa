"""
Git repository interface
"""
import re
import threading
import traceback

import pygit2
from pygit2.enums import SortMode

from gitbrowse.config import DEFAULT_ARGS, LOADER_SETTINGS
from gitbrowse.exceptions import RepositoryError, UnknownBranchError
from gitbrowse.models.commit import GitCommit
from gitbrowse.models.commit_set import CommitSet, CommitSetState
from gitbrowse.models.oid import Oid
from gitbrowse.models.repo_data import RepoData
from gitbrowse.utils.date_parser import parse_date
from gitbrowse.utils.log import log_debug, log_error, log_info, log_success, log_warning


class Repository(RepoData):
    """pygit2 backed commit source, loads each branch on its own thread"""

    def __init__(self, args=None, load_batch_size=None):
        """
        Initialize repository interface

        Args:
            args (dict, optional): Loader filters, see config.DEFAULT_ARGS
            load_batch_size (int, optional): Commits published at once

        Raises:
            ValueError: If a date or regex filter cannot be parsed
        """
        self.repo = None
        self.path = None
        self.args = dict(DEFAULT_ARGS)
        self.args.update(args or {})
        self.load_batch_size = load_batch_size or LOADER_SETTINGS['load_batch_size']

        self._author_filter = self.args['author'].lower() if self.args['author'] else None
        self._since_time = parse_date(self.args['since']) if self.args['since'] else None
        self._until_time = parse_date(self.args['until']) if self.args['until'] else None
        self._grep_pattern = re.compile(self.args['grep'], re.IGNORECASE) if self.args['grep'] else None

        self._commit_sets = {}
        self._threads = []
        self._lock = threading.Lock()
        self._stop = threading.Event()

    def open(self, path=None):
        """
        Open Git repository at the given path or discover from current directory

        Args:
            path (str, optional): Path to repository directory

        Returns:
            bool: True if opened successfully, False otherwise
        """
        try:
            repo_path = pygit2.discover_repository(path or '.')
            if not repo_path:
                log_warning(f"No git repository found at {path or '.'}")
                return False
            self.repo = pygit2.Repository(repo_path)
        except (pygit2.GitError, KeyError, ValueError) as e:
            log_warning(f"Cannot open repository {path or '.'}: {e}")
            return False
        self.path = repo_path
        log_info(f"Opened repository {repo_path}")
        return True

    def close(self, timeout=1.0):
        """Stop loader threads"""
        self._stop.set()
        with self._lock:
            threads = list(self._threads)
        for thread in threads:
            thread.join(timeout)

    def _check_open(self):
        if self.repo is None:
            raise RepositoryError("Repository is not open")

    def head(self):
        """
        Branch checked out in the working tree

        Returns:
            tuple: (name, Oid) or None for an empty repository. The Oid is
                the canonical ref name, or the commit id for a detached HEAD
        """
        self._check_open()
        if self.repo.head_is_unborn:
            return None
        head = self.repo.head
        if self.repo.head_is_detached:
            return head.shorthand, Oid(head.target)
        return head.shorthand, Oid(head.name)

    def branches(self):
        """
        Local branches sorted by name, followed by remote branches when
        the 'all' filter is set

        Returns:
            list: (name, Oid) tuples, keyed by canonical ref name so refs
                pointing at the same commit stay distinct
        """
        self._check_open()
        result = []
        groups = [self.repo.branches.local]
        if self.args['all']:
            groups.append(self.repo.branches.remote)
        for group in groups:
            for name in sorted(group):
                if name.endswith('/HEAD'):
                    continue
                try:
                    branch = group[name]
                    branch.resolve()
                except (KeyError, pygit2.GitError) as e:
                    log_warning(f"Skipping branch {name}: {e}")
                    continue
                result.append((name, Oid(branch.name)))
        return result

    def _get_commit_set(self, oid):
        with self._lock:
            return self._commit_sets.get(oid)

    def commits(self, oid, start_index, max_count):
        commit_set = self._get_commit_set(oid)
        if commit_set is None:
            raise UnknownBranchError(oid)
        return iter(commit_set.commits(start_index, max_count))

    def commit_set_state(self, oid):
        commit_set = self._get_commit_set(oid)
        if commit_set is None:
            return CommitSetState(False, 0)
        return commit_set.state()

    def commit_set_error(self, oid):
        """Error which ended loading of a branch, if any"""
        commit_set = self._get_commit_set(oid)
        return commit_set.error if commit_set else None

    def load_commits(self, oid, on_loaded):
        self._check_open()
        try:
            start_id = self.repo.revparse_single(oid.id).peel(pygit2.Commit).id
        except (KeyError, ValueError, pygit2.GitError) as e:
            raise RepositoryError(f"Cannot read branch {oid}: {e}") from e

        with self._lock:
            commit_set = self._commit_sets.get(oid)
            if commit_set is None:
                commit_set = CommitSet(oid)
                self._commit_sets[oid] = commit_set

        if commit_set.start_loading():
            commit_set.add_on_loaded(on_loaded)
            thread = threading.Thread(
                target=self._load_commits,
                args=(commit_set, start_id),
                name=f'gitbrowse-load-{oid.short_id}',
                daemon=True)
            with self._lock:
                self._threads = [t for t in self._threads if t.is_alive()]
                self._threads.append(thread)
            log_debug(f"Loading commits for {oid}")
            thread.start()
        elif not commit_set.add_on_loaded(on_loaded):
            # already loaded, callers still expect an asynchronous notification
            log_debug(f"Commits for {oid} already loaded")
            threading.Thread(
                target=self._notify, args=([on_loaded], oid),
                name=f'gitbrowse-loaded-{oid.short_id}',
                daemon=True).start()

    def _load_commits(self, commit_set, start_id):
        error = None
        count = 0
        try:
            # each loader gets its own handle, libgit2 objects are not shared between threads
            repo = pygit2.Repository(self.path)
            walker = repo.walk(start_id, SortMode.TOPOLOGICAL | SortMode.TIME)
            if self.args['first_parent']:
                walker.simplify_first_parent()

            max_count = self.args['max_count']
            batch = []
            for pygit_commit in walker:
                if self._stop.is_set():
                    log_debug(f"Loading commits for {commit_set.oid} interrupted")
                    break
                if self._should_skip_commit(pygit_commit):
                    continue
                batch.append(GitCommit.from_pygit2(pygit_commit))
                count += 1
                if len(batch) >= self.load_batch_size:
                    commit_set.extend(batch)
                    batch = []
                if max_count and count >= max_count:
                    break
            commit_set.extend(batch)
        except Exception as e:
            # includes undecodable commit objects, e.g. LookupError for an unknown encoding
            error = e
            log_error(f"Error loading commits for {commit_set.oid}: {e}\n{traceback.format_exc()}")
        finally:
            callbacks = commit_set.finish_loading(error)
            if error is None:
                log_success(f"Loaded {count} commits for {commit_set.oid.short_id}")
            self._notify(callbacks, commit_set.oid)

    def _notify(self, callbacks, oid):
        for on_loaded in callbacks:
            try:
                on_loaded(oid)
            except Exception as e:
                log_error(f"Commits loaded callback failed: {e}\n{traceback.format_exc()}")

    def _should_skip_commit(self, commit):
        """Check if commit should be skipped based on filters"""
        parent_count = len(commit.parent_ids)
        if self.args['merges'] and parent_count < 2:
            return True

        if self.args['no_merges'] and parent_count > 1:
            return True

        if self._author_filter and self._author_filter not in commit.author.name.lower():
            return True

        if self._since_time and commit.commit_time < self._since_time:
            return True

        if self._until_time and commit.commit_time > self._until_time:
            return True

        if self._grep_pattern and not self._grep_pattern.search(commit.message):
            return True

        return False

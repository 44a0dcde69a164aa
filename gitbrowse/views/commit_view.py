"""
Commit list view
"""
import threading

from gitbrowse.config import KEY_BINDINGS, UI_SETTINGS
from gitbrowse.controllers.key_handler import KeyHandler
from gitbrowse.exceptions import MissingScrollStateError
from gitbrowse.utils.log import log_debug, log_info
from gitbrowse.views.base_view import BaseView
from gitbrowse.views.refresh_task import LoadingCommitsRefreshTask
from gitbrowse.views.scroll_state import ScrollState


class CommitView(BaseView):
    """
    Commits of the selected branch, one row per commit

    Every public method takes the view lock for its whole duration, including
    the completion callback handed to the commit loader. The lock is
    re-entrant so a loader that reports completion synchronously from
    load_commits() does not deadlock.
    """

    def __init__(self, repo_data, redraw, refresh_rate=None, key_bindings=None,
                 date_format=None, author_width=None):
        """
        Initialize commit view

        Args:
            repo_data (RepoData): Commit source
            redraw (RedrawChannel): Where redraw requests are posted
            refresh_rate (float, optional): Seconds between redraws while loading
            key_bindings (dict, optional): Action name -> key names
            date_format (str, optional): strftime format of the date column
            author_width (int, optional): Width of the author column
        """
        self.repo_data = repo_data
        self.redraw = redraw
        self.refresh_rate = refresh_rate or UI_SETTINGS['load_refresh_ms'] / 1000
        self.date_format = date_format or UI_SETTINGS['date_format']
        self.author_width = author_width if author_width is not None else UI_SETTINGS['author_width']

        self.active_branch = None
        self.active = False
        self.view_index = {}
        self.branch_names = {}
        self.refresh_task = None
        self.page_size = 1
        self.lock = threading.RLock()

        self.handlers = KeyHandler.resolve_bindings(key_bindings or KEY_BINDINGS, COMMIT_VIEW_ACTIONS)

    def render(self, win):
        log_debug('Rendering CommitView')
        with self.lock:
            view_index = self.view_index.get(self.active_branch)
            if view_index is None:
                raise MissingScrollStateError(self.active_branch)

            rows = win.rows() - 2
            if rows < 1:
                win.draw_border()
                return
            self.page_size = rows

            view_index.clamp_window(rows)

            commits = self.repo_data.commits(self.active_branch, view_index.view_start_index, rows)

            row_index = 1
            for commit in commits:
                win.set_row(row_index, commit.format_row(self.date_format, self.author_width))
                row_index += 1

            win.set_selected_row(view_index.selected_row() + 1, self.active)

            win.set_title(self._title())
            win.draw_border()

    def _title(self):
        name = self.branch_names.get(self.active_branch) or self.active_branch.short_id
        state = self.repo_data.commit_set_state(self.active_branch)
        title = f"Commits {name} [{state.commit_count}]"
        if state.loading:
            title += ' loading...'
        return title

    def on_ref_select(self, oid, name=None):
        """
        Show commits of another branch, loading them if necessary

        Args:
            oid (Oid): Selected branch
            name (str, optional): Branch name for the title

        Raises:
            RepositoryError: If loading cannot be started, the view keeps
                showing the previous branch
        """
        log_debug(f'CommitView loading commits for selected oid {oid}')
        with self.lock:
            if self.refresh_task is not None:
                self.refresh_task.stop()

            refresh_task = LoadingCommitsRefreshTask(self.refresh_rate, self.redraw)

            def on_commits_loaded(loaded_oid):
                log_debug(f'Commits loaded for oid {loaded_oid}')
                with self.lock:
                    refresh_task.stop()

            self.repo_data.load_commits(oid, on_commits_loaded)

            self.refresh_task = refresh_task
            self.active_branch = oid
            if name:
                self.branch_names[oid] = name

            if oid not in self.view_index:
                self.view_index[oid] = ScrollState()

            commit_set_state = self.repo_data.commit_set_state(oid)

            if commit_set_state.loading:
                refresh_task.start()
            else:
                refresh_task.stop()

    def on_active_change(self, active):
        log_debug(f'CommitView active {active}')
        with self.lock:
            self.active = active

    def handle(self, key):
        log_debug(f'CommitView handling key {key}')
        with self.lock:
            handler = self.handlers.get(key)
            if handler is None:
                return False
            handler(self)
            return True

    def status(self):
        """
        Selection and loading progress of the active branch

        Returns:
            tuple: (active_index, CommitSetState), None before any selection
        """
        with self.lock:
            view_index = self.view_index.get(self.active_branch)
            if view_index is None:
                return None
            return view_index.active_index, self.repo_data.commit_set_state(self.active_branch)

    def close(self):
        with self.lock:
            if self.refresh_task is not None:
                self.refresh_task.stop()
        log_info('CommitView closed')

    def active_scroll_state(self):
        return self.view_index.get(self.active_branch)


def _select_commit(commit_view, index):
    view_index = commit_view.active_scroll_state()
    if view_index is None:
        return
    commit_count = commit_view.repo_data.commit_set_state(commit_view.active_branch).commit_count
    index = max(0, min(index, commit_count - 1))
    if index != view_index.active_index:
        log_debug(f'Selecting commit {index}')
        view_index.active_index = index
        commit_view.redraw.request()


def move_up_commit(commit_view):
    view_index = commit_view.active_scroll_state()

    if view_index is not None and view_index.active_index > 0:
        log_debug('Moving up one commit')
        view_index.active_index -= 1
        commit_view.redraw.request()


def move_down_commit(commit_view):
    view_index = commit_view.active_scroll_state()
    if view_index is None:
        return

    commit_set_state = commit_view.repo_data.commit_set_state(commit_view.active_branch)

    if view_index.active_index < commit_set_state.commit_count - 1:
        log_debug('Moving down one commit')
        view_index.active_index += 1
        commit_view.redraw.request()


def page_up_commit(commit_view):
    view_index = commit_view.active_scroll_state()
    if view_index is not None:
        _select_commit(commit_view, view_index.active_index - commit_view.page_size)


def page_down_commit(commit_view):
    view_index = commit_view.active_scroll_state()
    if view_index is not None:
        _select_commit(commit_view, view_index.active_index + commit_view.page_size)


def first_commit(commit_view):
    _select_commit(commit_view, 0)


def last_commit(commit_view):
    view_index = commit_view.active_scroll_state()
    if view_index is not None:
        commit_count = commit_view.repo_data.commit_set_state(commit_view.active_branch).commit_count
        _select_commit(commit_view, commit_count - 1)


COMMIT_VIEW_ACTIONS = {
    'move_up': move_up_commit,
    'move_down': move_down_commit,
    'page_up': page_up_commit,
    'page_down': page_down_commit,
    'first': first_commit,
    'last': last_commit,
}

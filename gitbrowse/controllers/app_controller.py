"""
Main application controller
"""
import curses
import traceback

from gitbrowse.controllers.key_handler import KeyHandler
from gitbrowse.exceptions import GitBrowseError, MissingScrollStateError, RepositoryError
from gitbrowse.utils.display import (COLOR_STATUS_BAR, COLOR_STATUS_ERROR, COLOR_STATUS_SUCCESS,
                                     COLOR_STATUS_WARNING, setup_colors)
from gitbrowse.utils.log import (LEVEL_ERROR, LEVEL_SUCCESS, LEVEL_WARNING, Log, log_debug,
                                 log_info, log_warning)
from gitbrowse.views.commit_view import CommitView
from gitbrowse.views.redraw import RedrawChannel
from gitbrowse.views.window import Window

STATUS_COLORS = {
    LEVEL_ERROR: COLOR_STATUS_ERROR,
    LEVEL_WARNING: COLOR_STATUS_WARNING,
    LEVEL_SUCCESS: COLOR_STATUS_SUCCESS,
}

STATUS_HINT_ACTIONS = ('next_branch', 'prev_branch', 'quit')


def key_hints(bindings, actions=STATUS_HINT_ACTIONS):
    """Status bar help such as "] next branch | q/ESC quit" for the given actions"""
    descriptions = KeyHandler.get_key_descriptions({name: bindings.get(name, []) for name in actions})
    return ' | '.join(f"{keys} {description}" for keys, description in descriptions.items())


def loading_progress(commit_set_state, error=None):
    if commit_set_state.loading:
        return f"Loading: {commit_set_state.commit_count} commits"
    if error is not None:
        return f"Loading failed after {commit_set_state.commit_count} commits: {error}"
    return f"{commit_set_state.commit_count} commits loaded"


class AppController:
    """Main application controller"""

    def __init__(self, stdscr, repository, config):
        """
        Initialize the application controller

        Args:
            stdscr: Curses window object
            repository (Repository): Opened repository
            config (dict): Result of config.load_config()
        """
        self.stdscr = stdscr
        self.repository = repository
        self.config = config
        self.running = True

        ui = config['ui']
        self.redraw = RedrawChannel(ui['redraw_buffer'])
        self.commit_view = CommitView(
            repository, self.redraw,
            refresh_rate=ui['load_refresh_ms'] / 1000,
            key_bindings=config['keys'],
            date_format=ui['date_format'],
            author_width=ui['author_width'])

        self.branches = []
        self.branch_index = -1

        self.key_actions = KeyHandler.resolve_bindings(config['keys'], {
            'next_branch': lambda: self.select_branch(self.branch_index + 1),
            'prev_branch': lambda: self.select_branch(self.branch_index - 1),
            'quit': self.quit,
        })
        self.key_hints = key_hints(config['keys'])

        self.win = None
        self.status_win = None
        self.window = None

        self._setup_curses()

    def _setup_curses(self):
        """Set up curses environment"""
        curses.curs_set(0)
        setup_colors()
        self.stdscr.timeout(self.config['ui']['loop_timeout_ms'])
        curses.set_escdelay(20)
        self._create_windows()

    def _create_windows(self):
        lines, cols = self.stdscr.getmaxyx()
        height = max(1, lines - 1)
        self.win = curses.newwin(height, cols, 0, 0)
        self.status_win = curses.newwin(1, cols, height, 0)
        self.window = Window(height, cols, 'commits')

    def _load_branches(self):
        self.branches = self.repository.branches()
        head = self.repository.head()
        if head is None:
            return 0
        for index, (name, oid) in enumerate(self.branches):
            if name == head[0]:
                return index
        # detached HEAD
        self.branches.insert(0, head)
        return 0

    def select_branch(self, index):
        """
        Show commits of the branch at index, wrapping around

        Args:
            index (int): Position in self.branches
        """
        if not self.branches:
            return
        index %= len(self.branches)
        name, oid = self.branches[index]
        try:
            self.commit_view.on_ref_select(oid, name)
        except RepositoryError as e:
            log_warning(f"Cannot select branch {name}: {e}")
            return
        self.branch_index = index
        log_info(f"Selected branch {name}")
        self.redraw.request()

    def quit(self):
        self.running = False

    def run(self):
        """Run the application until quit"""
        start_index = self._load_branches()
        if not self.branches:
            raise RepositoryError("No branches to display")

        self.commit_view.on_active_change(True)
        self.select_branch(start_index)
        if self.branch_index < 0:
            raise RepositoryError("No branch could be loaded")

        try:
            while self.running:
                if self.redraw.drain():
                    self._draw()
                self._draw_status_bar()
                curses.doupdate()

                key = self.stdscr.getch()
                if key < 0:
                    # no key pressed
                    continue
                self._handle_key(key)
        except KeyboardInterrupt:
            pass
        finally:
            self.commit_view.close()
            self.repository.close()

        log_info('Application ended')

    def _handle_key(self, key):
        log_debug('Key: ' + str(key))
        if key == curses.KEY_RESIZE:
            curses.update_lines_cols()
            self.stdscr.clear()
            self.stdscr.noutrefresh()
            self._create_windows()
            self.redraw.request()
        elif key in self.key_actions:
            self.key_actions[key]()
        elif not self.commit_view.handle(key):
            log_debug(f'Key {key} not bound')

    def _draw(self):
        self.window.clear()
        try:
            self.commit_view.render(self.window)
        except MissingScrollStateError as e:
            log_warning(str(e))
            return
        except GitBrowseError as e:
            # partial output is still painted
            log_warning(f"Render failed: {e}")

        try:
            self.window.paint(self.win)
        except curses.error as e:
            log_warning(f"Curses exception: {str(e)}\n{traceback.format_exc()}")

    def _status_text(self):
        message, level = Log.get_status_message(self.config['ui']['status_message_time'])
        if message:
            return message, STATUS_COLORS.get(level, COLOR_STATUS_BAR)

        status = self.commit_view.status()
        if status is None:
            return f" No branch selected | {self.key_hints} ", COLOR_STATUS_BAR

        active_index, commit_set_state = status
        error = self.repository.commit_set_error(self.commit_view.active_branch)
        progress = loading_progress(commit_set_state, error)
        name = self.branches[self.branch_index][0] if self.branch_index >= 0 else ''
        position = min(active_index + 1, commit_set_state.commit_count)
        text = (f" {name} | Commit {position}/{commit_set_state.commit_count} | {progress}"
                f" | {self.key_hints} ")
        if error is not None and not commit_set_state.loading:
            return text, COLOR_STATUS_ERROR
        return text, COLOR_STATUS_BAR

    def _draw_status_bar(self):
        text, color = self._status_text()
        _, cols = self.status_win.getmaxyx()
        try:
            self.status_win.erase()
            # avoid writing to the bottom-right corner
            self.status_win.addstr(0, 0, text[:cols - 1].ljust(cols - 1), curses.color_pair(color))
            self.status_win.noutrefresh()
        except curses.error as e:
            log_debug(f"Status bar not drawn: {e}")

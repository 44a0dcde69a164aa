"""
Buffered render target for views
"""
from gitbrowse.exceptions import RenderError
from gitbrowse.utils.display import (COLOR_BORDER, COLOR_BORDER_INACTIVE, COLOR_NORMAL,
                                     COLOR_TITLE, curses_color)


class Window:
    """
    Text buffer a view renders into

    Row 0 and the last row belong to the border, content rows are
    1 .. rows() - 2. paint() copies the buffer onto a curses window.
    """

    def __init__(self, rows, cols, id=''):
        self.id = id
        self._rows = rows
        self._cols = cols
        self.lines = [''] * rows
        self.selected_row = None
        self.selected_active = False
        self.border = False
        self.title = ''

    def rows(self):
        return self._rows

    def cols(self):
        return self._cols

    def resize(self, rows, cols):
        self._rows = rows
        self._cols = cols
        self.clear()

    def clear(self):
        self.lines = [''] * self._rows
        self.selected_row = None
        self.selected_active = False
        self.border = False

    def set_title(self, title):
        self.title = title

    def _check_row(self, row_index):
        if not 1 <= row_index < self._rows - 1:
            raise RenderError(f"Invalid row index {row_index} for window {self.id or '?'} with {self._rows} rows")

    def set_row(self, row_index, txt):
        self._check_row(row_index)
        self.lines[row_index] = txt

    def set_selected_row(self, row_index, active):
        self._check_row(row_index)
        self.selected_row = row_index
        self.selected_active = active

    def draw_border(self):
        self.border = True

    def paint(self, win):
        """Copy the buffer onto a curses window of the same size"""
        win.erase()
        height, width = win.getmaxyx()
        inner_width = max(0, width - 2)

        for row_index in range(1, min(self._rows, height) - 1):
            selected = row_index == self.selected_row
            txt = self.lines[row_index][:inner_width]
            if selected:
                txt = txt.ljust(inner_width)
            if txt:
                win.addstr(row_index, 1, txt, curses_color(COLOR_NORMAL, selected, self.selected_active))

        if self.border:
            win.attrset(curses_color(COLOR_BORDER if self.selected_active else COLOR_BORDER_INACTIVE))
            win.box()
            win.attrset(0)

        if self.title and width > 4:
            win.addstr(0, 2, f" {self.title} "[:width - 4], curses_color(COLOR_TITLE, bold=self.selected_active))

        win.noutrefresh()

    def __str__(self):
        return '\n'.join(self.lines)

"""
Per branch selection and scroll position
"""


class ScrollState:
    """Selected commit and first visible commit of a branch"""

    __slots__ = ('active_index', 'view_start_index')

    def __init__(self, active_index=0, view_start_index=0):
        self.active_index = active_index
        self.view_start_index = view_start_index

    def clamp_window(self, rows):
        """
        Move the window by the minimum amount that keeps the selection visible

        Args:
            rows (int): Number of visible rows, at least 1
        """
        if rows < 1:
            raise ValueError(f"Window must have at least one row, got {rows}")

        if self.view_start_index > self.active_index:
            self.view_start_index = self.active_index
        else:
            row_diff = self.active_index - self.view_start_index
            if row_diff >= rows:
                self.view_start_index += (row_diff - rows) + 1

    def selected_row(self):
        """Selection relative to the first visible row"""
        return self.active_index - self.view_start_index

    def __eq__(self, other):
        if not isinstance(other, ScrollState):
            return NotImplemented
        return (self.active_index, self.view_start_index) == (other.active_index, other.view_start_index)

    def __repr__(self):
        return f"ScrollState(active_index={self.active_index}, view_start_index={self.view_start_index})"

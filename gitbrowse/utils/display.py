"""
Curses color setup
"""
import curses

COLOR_NORMAL = 1
COLOR_BORDER = 7
COLOR_BORDER_INACTIVE = 8
COLOR_TITLE = 30

COLOR_STATUS_BAR = 200
COLOR_STATUS_SUCCESS = 201
COLOR_STATUS_WARNING = 202
COLOR_STATUS_ERROR = 203


def init_color(pair_number, nfg, nbg=-1, sfg=-1, sbg=-1, afg=-1, abg=-1):
    """
    Register a color pair together with its selected variants

    Pair N is the normal color, 100 + N the selected row of an inactive view
    and 150 + N the selected row of the focused view.
    """
    curses.init_pair(pair_number, nfg, nbg)
    curses.init_pair(100 + pair_number, sfg if sfg >= 0 else nfg, sbg if sbg >= 0 else 235)
    curses.init_pair(150 + pair_number, afg if afg >= 0 else nfg, abg if abg >= 0 else curses.COLOR_BLUE)


def setup_colors():
    """Set up color pairs for curses"""
    curses.start_color()
    curses.use_default_colors()

    init_color(COLOR_NORMAL, curses.COLOR_WHITE)
    init_color(COLOR_BORDER, curses.COLOR_BLUE)
    init_color(COLOR_BORDER_INACTIVE, 245 if curses.COLORS > 245 else curses.COLOR_WHITE)
    init_color(COLOR_TITLE, curses.COLOR_WHITE, curses.COLOR_BLUE)

    curses.init_pair(COLOR_STATUS_BAR, curses.COLOR_WHITE, curses.COLOR_BLUE)
    curses.init_pair(COLOR_STATUS_SUCCESS, curses.COLOR_BLACK, curses.COLOR_GREEN)
    curses.init_pair(COLOR_STATUS_WARNING, curses.COLOR_BLACK, curses.COLOR_YELLOW)
    curses.init_pair(COLOR_STATUS_ERROR, curses.COLOR_WHITE, curses.COLOR_RED)


def curses_color(number, selected=False, active=False, bold=None):
    """Attribute for color pair `number`, optionally in its selected variant"""
    if selected and active:
        color = curses.color_pair(150 + number)
    elif selected:
        color = curses.color_pair(100 + number)
    else:
        color = curses.color_pair(number)
    if bold or (selected and bold is None):
        color = color | curses.A_BOLD
    return color

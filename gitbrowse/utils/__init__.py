"""
Utils module exports
"""
from gitbrowse.utils.date_parser import parse_date
from gitbrowse.utils.display import curses_color, setup_colors
from gitbrowse.utils.log import Log, log_debug, log_error, log_info, log_success, log_warning

__all__ = [
    'parse_date',
    'curses_color',
    'setup_colors',
    'Log',
    'log_debug',
    'log_error',
    'log_info',
    'log_success',
    'log_warning'
]

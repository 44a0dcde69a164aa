"""
Configuration settings for gitbrowse
"""
import copy

# Default commit loader filters
DEFAULT_ARGS = {
    'all': False,          # Offer remote branches too when cycling branches
    'max_count': None,     # No limit by default
    'author': None,        # Only commits whose author contains this text
    'since': None,         # Only commits newer than this date
    'until': None,         # Only commits older than this date
    'grep': None,          # Only commits whose message matches this regex
    'merges': False,       # Only merge commits
    'no_merges': False,    # Exclude merge commits
    'first_parent': False  # Follow only first parent
}

# UI settings
UI_SETTINGS = {
    'load_refresh_ms': 500,               # Redraw interval while commits are loading
    'loop_timeout_ms': 20,                # getch() timeout of the main loop
    'date_format': '%Y-%m-%d %H:%M:%S %z',
    'author_width': 20,                   # Width for author column
    'status_message_time': 2,             # Seconds a warning stays in the status bar
    'redraw_buffer': 16                   # Pending redraw requests kept before coalescing
}

# Commit loader settings
LOADER_SETTINGS = {
    'load_batch_size': 100                # Commits published to the view at once
}

# Action name -> key names, see KeyHandler.get_key_code
KEY_BINDINGS = {
    'move_up': ['UP', 'k'],
    'move_down': ['DOWN', 'j'],
    'page_up': ['PgUp', 'Ctrl-b'],
    'page_down': ['PgDn', 'Ctrl-f'],
    'first': ['HOME', 'g'],
    'last': ['END', 'G'],
    'next_branch': [']'],
    'prev_branch': ['['],
    'quit': ['q', 'ESC']
}

# Logging
LOG_SETTINGS = {
    'level': 4,            # 0 off, 1 error, 2 warning, 3 success, 4 info, 5 debug
    'file': None           # Append log records to this file
}


def load_config(args=None):
    """
    Merge command line arguments over the defaults

    Args:
        args (argparse.Namespace, optional): Parsed command line

    Returns:
        dict: {'args', 'ui', 'loader', 'keys', 'log'} sections
    """
    config = {
        'args': copy.deepcopy(DEFAULT_ARGS),
        'ui': copy.deepcopy(UI_SETTINGS),
        'loader': copy.deepcopy(LOADER_SETTINGS),
        'keys': copy.deepcopy(KEY_BINDINGS),
        'log': copy.deepcopy(LOG_SETTINGS),
    }
    if args is None:
        return config

    for key in DEFAULT_ARGS:
        value = getattr(args, key, None)
        if value is not None and value is not False:
            config['args'][key] = value

    if getattr(args, 'refresh_ms', None) is not None:
        if args.refresh_ms <= 0:
            raise ValueError(f"Refresh interval must be positive: {args.refresh_ms}")
        config['ui']['load_refresh_ms'] = args.refresh_ms
    if getattr(args, 'date_format', None):
        config['ui']['date_format'] = args.date_format
    if getattr(args, 'log_level', None) is not None:
        config['log']['level'] = args.log_level
    if getattr(args, 'log_file', None):
        config['log']['file'] = args.log_file

    return config

"""
Command line entry point
"""
import argparse
import curses
import re
import sys

from gitbrowse.config import load_config
from gitbrowse.controllers.app_controller import AppController
from gitbrowse.exceptions import RepositoryError
from gitbrowse.models.repository import Repository
from gitbrowse.utils.log import Log, log_error, log_info


def create_parser():
    parser = argparse.ArgumentParser(prog='gitbrowse', description='Terminal based git commit browser')
    parser.add_argument('path', nargs='?', default=None, help='Repository path (default: current directory)')

    filters = parser.add_argument_group('commit filters')
    filters.add_argument('--all', action='store_true', help='Offer remote branches too')
    filters.add_argument('-n', '--max-count', dest='max_count', type=int, help='Limit the number of commits')
    filters.add_argument('--author', help='Only commits whose author contains this text')
    filters.add_argument('--since', help="Only commits newer than this date, e.g. '2 weeks ago'")
    filters.add_argument('--until', help='Only commits older than this date')
    filters.add_argument('--grep', help='Only commits whose message matches this regex')
    merges = filters.add_mutually_exclusive_group()
    merges.add_argument('--merges', action='store_true', help='Only merge commits')
    merges.add_argument('--no-merges', dest='no_merges', action='store_true', help='Exclude merge commits')
    filters.add_argument('--first-parent', dest='first_parent', action='store_true', help='Follow only first parent')

    ui = parser.add_argument_group('display')
    ui.add_argument('--refresh-ms', dest='refresh_ms', type=int, help='Redraw interval while loading')
    ui.add_argument('--date-format', dest='date_format', help='strftime format of the date column')

    log_group = parser.add_argument_group('logging')
    log_group.add_argument('--log-level', dest='log_level', type=int, choices=range(0, 6),
                           help='0 off, 1 error, 2 warning, 3 success, 4 info, 5 debug')
    log_group.add_argument('--log-file', dest='log_file', help='Append log records to this file')
    return parser


def main(argv=None):
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args)
        repository = Repository(config['args'], config['loader']['load_batch_size'])
    except (ValueError, re.error) as e:
        parser.error(str(e))

    try:
        Log.configure(level=config['log']['level'], file_path=config['log']['file'])
    except OSError as e:
        parser.error(f"Cannot open log file: {e}")

    try:
        if not repository.open(args.path):
            print(f"Not in a git repository: {args.path or '.'}", file=sys.stderr)
            return 1

        log_info('Application started')
        curses.wrapper(lambda stdscr: AppController(stdscr, repository, config).run())
    except RepositoryError as e:
        log_error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        Log.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())

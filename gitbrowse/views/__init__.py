"""
Views module exports
"""
from gitbrowse.views.base_view import BaseView
from gitbrowse.views.commit_view import CommitView
from gitbrowse.views.redraw import RedrawChannel
from gitbrowse.views.refresh_task import LoadingCommitsRefreshTask
from gitbrowse.views.scroll_state import ScrollState
from gitbrowse.views.window import Window

__all__ = [
    'BaseView',
    'CommitView',
    'LoadingCommitsRefreshTask',
    'RedrawChannel',
    'ScrollState',
    'Window'
]

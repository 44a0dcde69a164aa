"""
Controllers module exports

AppController is imported from gitbrowse.controllers.app_controller directly,
it depends on the views which themselves use KeyHandler.
"""
from gitbrowse.controllers.key_handler import KeyHandler

__all__ = [
    'KeyHandler'
]

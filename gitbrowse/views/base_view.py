"""
Base abstract view class
"""
from abc import ABC, abstractmethod


class BaseView(ABC):
    """Abstract base class for all views"""

    @abstractmethod
    def render(self, win):
        """
        Draw the view - must be implemented by subclasses

        Args:
            win (Window): Render target
        """

    @abstractmethod
    def handle(self, key):
        """
        Handle key press

        Args:
            key (int): Curses key code

        Returns:
            bool: True if the key was bound to an action
        """

    @abstractmethod
    def on_active_change(self, active):
        """Called when the view gains or loses input focus"""

"""
Exceptions raised by gitbrowse
"""


class GitBrowseError(Exception):
    """Base class for all gitbrowse errors"""


class MissingScrollStateError(GitBrowseError):
    """Render was requested for a branch that was never selected"""

    def __init__(self, oid):
        super().__init__(f"No scroll state exists for branch {oid}")
        self.oid = oid


class RepositoryError(GitBrowseError):
    """Repository could not be opened or read"""


class UnknownBranchError(RepositoryError):
    """Commits were requested for a branch that was never loaded"""

    def __init__(self, oid):
        super().__init__(f"Unknown branch {oid}")
        self.oid = oid


class RenderError(GitBrowseError):
    """Writing to a render window failed"""

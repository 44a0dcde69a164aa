"""
Interface between views and the commit source
"""
from abc import ABC, abstractmethod


class RepoData(ABC):
    """Abstract commit source consumed by the views"""

    @abstractmethod
    def commits(self, oid, start_index, max_count):
        """
        Commits of a branch in display order

        Args:
            oid (Oid): Branch
            start_index (int): Position of the first commit
            max_count (int): Maximum number of commits

        Returns:
            iterator: Up to max_count GitCommit objects, fewer at the end

        Raises:
            UnknownBranchError: If loading was never started for the branch
        """

    @abstractmethod
    def load_commits(self, oid, on_loaded):
        """
        Begin or continue loading commits of a branch in the background

        Args:
            oid (Oid): Branch
            on_loaded (callable): Called once with oid when loading completes,
                possibly from another thread

        Raises:
            RepositoryError: If the branch cannot be read
        """

    @abstractmethod
    def commit_set_state(self, oid):
        """
        Snapshot of the loading progress

        Returns:
            CommitSetState: loading flag and number of commits loaded so far
        """

"""
Loaded commits of a single branch
"""
import threading


class CommitSetState:
    """Point in time snapshot of a commit set"""

    __slots__ = ('loading', 'commit_count')

    def __init__(self, loading, commit_count):
        self.loading = loading
        self.commit_count = commit_count

    def __eq__(self, other):
        if not isinstance(other, CommitSetState):
            return NotImplemented
        return self.loading == other.loading and self.commit_count == other.commit_count

    def __repr__(self):
        return f"CommitSetState(loading={self.loading}, commit_count={self.commit_count})"


class CommitSet:
    """
    Ordered commits of a branch, appended to by the loader thread

    All access goes through the internal lock. Callbacks registered with
    add_on_loaded are handed back by finish_loading and must be invoked by
    the caller after the lock has been released.
    """

    def __init__(self, oid):
        self.oid = oid
        self._commits = []
        self._loading = False
        self._loaded = False
        self._error = None
        self._on_loaded = []
        self._lock = threading.Lock()

    def start_loading(self):
        """Mark as loading, returns False when a load is already running or done"""
        with self._lock:
            if self._loading or self._loaded:
                return False
            self._loading = True
            return True

    def add_on_loaded(self, on_loaded):
        """Register callback, returns False when loading already finished"""
        with self._lock:
            if self._loaded:
                return False
            self._on_loaded.append(on_loaded)
            return True

    def extend(self, commits):
        with self._lock:
            self._commits.extend(commits)

    def finish_loading(self, error=None):
        """Mark as loaded and return the callbacks waiting for it"""
        with self._lock:
            self._loading = False
            self._loaded = True
            self._error = error
            callbacks = self._on_loaded
            self._on_loaded = []
            return callbacks

    def commits(self, start_index, max_count):
        """Copy of commits [start_index, start_index + max_count)"""
        if start_index < 0 or max_count < 0:
            raise ValueError(f"Invalid commit range {start_index}+{max_count}")
        with self._lock:
            return self._commits[start_index:start_index + max_count]

    def state(self):
        with self._lock:
            return CommitSetState(self._loading, len(self._commits))

    @property
    def error(self):
        with self._lock:
            return self._error

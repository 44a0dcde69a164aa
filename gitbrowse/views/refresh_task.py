"""
Periodic redraw while commits are loading
"""
import threading

from gitbrowse.utils.log import log_debug


class LoadingCommitsRefreshTask:
    """
    Requests a redraw every refresh_rate seconds until stopped

    The timer thread sends one final redraw request on its way out, so the
    view shows the complete commit list once loading ends. stop() only sets
    the cancellation event and never waits for the thread.
    """

    def __init__(self, refresh_rate, redraw):
        """
        Args:
            refresh_rate (float): Seconds between redraw requests
            redraw (RedrawChannel): Where the requests go
        """
        if refresh_rate <= 0:
            raise ValueError(f"Refresh rate must be positive, got {refresh_rate}")
        self.refresh_rate = refresh_rate
        self.redraw = redraw
        self._cancel = None
        self._thread = None
        self._lock = threading.Lock()

    @property
    def running(self):
        with self._lock:
            return self._cancel is not None

    def start(self):
        with self._lock:
            if self._cancel is not None:
                return
            cancel = threading.Event()
            self._cancel = cancel
            self._thread = threading.Thread(
                target=self._run, args=(cancel,),
                name='gitbrowse-refresh', daemon=True)
            self._thread.start()
        log_debug('Refresh task started')

    def stop(self):
        with self._lock:
            cancel = self._cancel
            self._cancel = None
        if cancel is None:
            return
        cancel.set()
        log_debug('Refresh task stopped')

    def join(self, timeout=None):
        """Wait for the timer thread to exit, returns False on timeout"""
        with self._lock:
            thread = self._thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()

    def _run(self, cancel):
        while not cancel.wait(self.refresh_rate):
            log_debug('Updating display with newly loaded commits')
            self.redraw.request()
        self.redraw.request()

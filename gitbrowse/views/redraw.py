"""
Redraw requests posted to the main loop
"""
import queue

from gitbrowse.utils.log import log_debug


class RedrawChannel:
    """
    Fire and forget redraw signal

    Requests never block. When the buffer is full a redraw is already
    pending, so extra requests are coalesced into it.
    """

    def __init__(self, maxsize=16):
        if maxsize < 1:
            raise ValueError(f"Redraw buffer must hold at least one request, got {maxsize}")
        self._queue = queue.Queue(maxsize)

    def request(self):
        try:
            self._queue.put_nowait(True)
        except queue.Full:
            log_debug('Redraw already pending')

    def pending(self):
        return self._queue.qsize()

    def drain(self):
        """Consume all pending requests, returns True if there was any"""
        requested = False
        while True:
            try:
                self._queue.get_nowait()
            except queue.Empty:
                return requested
            requested = True

    def wait(self, timeout=None):
        """Block until a request arrives, then consume all pending ones"""
        try:
            self._queue.get(timeout=timeout)
        except queue.Empty:
            return False
        self.drain()
        return True

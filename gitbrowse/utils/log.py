"""
Application log

Records are kept in memory so the status bar can show the latest problem,
and optionally appended to a log file. Every helper is safe to call from the
loader and refresh threads.
"""
import collections
import datetime
import threading
import time

LEVEL_OFF = 0
LEVEL_ERROR = 1
LEVEL_WARNING = 2
LEVEL_SUCCESS = 3
LEVEL_INFO = 4
LEVEL_DEBUG = 5

LEVEL_NAMES = {
    LEVEL_ERROR: 'ERROR',
    LEVEL_WARNING: 'WARNING',
    LEVEL_SUCCESS: 'SUCCESS',
    LEVEL_INFO: 'INFO',
    LEVEL_DEBUG: 'DEBUG',
}


class LogRecord:
    """Single log line"""

    def __init__(self, level, txt, timestamp=None):
        self.level = level
        self.txt = txt
        self.timestamp = timestamp or datetime.datetime.now()

    def __str__(self):
        return f"{self.timestamp} {LEVEL_NAMES.get(self.level, '?'):7} {self.txt}"


class Log:
    """Process wide log sink"""

    level = LEVEL_INFO
    max_records = 1000

    records = collections.deque(maxlen=max_records)
    status_message = ''
    status_level = LEVEL_OFF
    status_time = 0.0

    _file = None
    _lock = threading.Lock()

    @classmethod
    def configure(cls, level=None, file_path=None, max_records=None):
        """
        Set log level, log file and size of the in-memory buffer

        Args:
            level (int): 0 (off) to 5 (debug)
            file_path (str, optional): File to append records to, replaces
                the previous one. close() stops writing to a file.
            max_records (int, optional): Number of records kept in memory
        """
        with cls._lock:
            if level is not None:
                if not LEVEL_OFF <= level <= LEVEL_DEBUG:
                    raise ValueError(f"Invalid log level: {level}")
                cls.level = level
            if max_records is not None:
                cls.max_records = max_records
                cls.records = collections.deque(cls.records, maxlen=max_records)
            if file_path:
                if cls._file:
                    cls._file.close()
                cls._file = open(file_path, 'a', encoding='utf-8')

    @classmethod
    def close(cls):
        with cls._lock:
            if cls._file:
                cls._file.close()
                cls._file = None

    @classmethod
    def clear(cls):
        with cls._lock:
            cls.records.clear()
            cls.status_message = ''
            cls.status_level = LEVEL_OFF

    @classmethod
    def log(cls, level, txt, show_in_status=False):
        if cls.level < level:
            return
        now = datetime.datetime.now()
        with cls._lock:
            first_line = ''
            for line in str(txt).splitlines() or ['']:
                record = LogRecord(level, line, now)
                cls.records.append(record)
                if cls._file:
                    cls._file.write(str(record) + '\n')
                if not first_line:
                    first_line = line
            if cls._file:
                cls._file.flush()
            if show_in_status:
                cls.status_message = first_line
                cls.status_level = level
                cls.status_time = time.time()

    @classmethod
    def get_status_message(cls, max_age):
        """Latest status message if it is younger than max_age seconds"""
        with cls._lock:
            if cls.status_message and time.time() - cls.status_time < max_age:
                return cls.status_message, cls.status_level
            return '', LEVEL_OFF


def log_debug(txt):
    Log.log(LEVEL_DEBUG, txt)

def log_info(txt):
    Log.log(LEVEL_INFO, txt)

def log_success(txt):
    Log.log(LEVEL_SUCCESS, txt, True)

def log_warning(txt):
    Log.log(LEVEL_WARNING, txt, True)

def log_error(txt):
    Log.log(LEVEL_ERROR, txt, True)

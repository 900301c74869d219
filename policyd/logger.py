import sys
import time

from twisted.python import log, util

TIME_FORMAT = "%Y/%m/%d %H:%M:%S %z"

# Stands in for the timestamp when the clock can't be read.
UNKNOWN_TIME = "----/--/-- --:--:-- -----"

class PolicyLogObserver(log.FileLogObserver):
    """
    Log observer writing lines like ``[2011/01/02 03:04:05 +0000] message``.
    """

    timeFormat = TIME_FORMAT

    def formatTime(self, when):
        if when is None:
            return UNKNOWN_TIME
        try:
            return time.strftime(self.timeFormat, time.localtime(when))
        except (TypeError, ValueError, OverflowError, OSError):
            return UNKNOWN_TIME

    def emit(self, eventDict):
        text = log.textFromEventDict(eventDict)
        if text is None:
            return

        line = "[%s] %s\n" % (self.formatTime(eventDict.get("time")),
                              text.replace("\n", "\n\t"))
        util.untilConcludes(self.write, line)
        util.untilConcludes(self.flush)

def start_logging(f=None):
    """
    Send log messages to ``f``, or stdout if no file is given.
    """

    if f is None:
        f = sys.stdout

    observer = PolicyLogObserver(f)
    log.startLoggingWithObserver(observer.emit, setStdout=False)
    return observer

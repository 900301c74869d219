"""
The ``policyd`` command.
"""

import signal
import sys

from twisted.internet import reactor
from twisted.internet.error import CannotListenError
from twisted.python import log, usage

from policyd import tap
from policyd.daemon import daemonize
from policyd.logger import start_logging
from policyd.policy import PolicyError, load_policy
from policyd.service import PolicyService

class Options(tap.Options):

    synopsis = "Usage: policyd -f POLICY [-p PORT] [-l LOGFILE] [-d]"

    optParameters = [
        ["logfile", "l", None, "Log to this file instead of stdout"],
    ]

    optFlags = [
        ["daemon", "d", "Detach from the terminal once listening"],
    ]

def hangup(signum, frame):
    reactor.callFromThread(log.msg, "Received SIGHUP, ignoring.")

def install_signal_handlers():
    """
    Catch the signals the reactor leaves alone.

    SIGINT and SIGTERM are the reactor's, and shut everything down.
    """

    signal.signal(signal.SIGHUP, hangup)
    # Let a dead client show up as a failed write.
    signal.signal(signal.SIGPIPE, signal.SIG_IGN)

def run(argv=None, stdout=None, stderr=None):
    """
    Start serving; returns the exit status.
    """

    if stdout is None:
        stdout = sys.stdout
    if stderr is None:
        stderr = sys.stderr

    config = Options()
    try:
        config.parseOptions(argv)
    except usage.UsageError as e:
        stderr.write("%s\n" % config)
        stderr.write("policyd: %s\n" % e)
        return 1

    try:
        document = load_policy(config["file"])
    except PolicyError as e:
        stderr.write("Failed to read policy file %s\n" % e)
        return 1

    logfile = None
    if config["logfile"] is not None:
        try:
            logfile = open(config["logfile"], "a")
        except OSError as e:
            stderr.write("Failed to open log file %s: %s\n"
                % (config["logfile"], e.strerror))
            return 1

    start_logging(logfile)

    service = PolicyService(config["port"], document)
    try:
        service.startService()
    except CannotListenError as e:
        stderr.write("Failed to create listener: %s\n" % e)
        return 1

    if config["daemon"]:
        daemonize(stdout, reactor)

    install_signal_handlers()
    reactor.addSystemEventTrigger("before", "shutdown", service.stopService)
    reactor.run()

    return service.exitCode

def main():
    sys.exit(run())

if __name__ == "__main__":
    main()

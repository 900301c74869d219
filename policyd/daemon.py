import os
import sys

from twisted.internet.interfaces import IReactorDaemonize

def daemonize(stdout=None, reactor=None):
    """
    Detach from the controlling terminal.

    The parent prints the child's PID and exits; only the child returns.
    Reactors which keep kernel state that doesn't survive a fork get their
    daemonize hooks called around it, as twistd does.
    """

    if stdout is None:
        stdout = sys.stdout
    if reactor is None:
        from twisted.internet import reactor

    if IReactorDaemonize.providedBy(reactor):
        reactor.beforeDaemonize()

    pid = os.fork()
    if pid:
        stdout.write("%d\n" % pid)
        stdout.flush()
        os._exit(0)

    os.setsid()

    null = os.open(os.devnull, os.O_RDWR)
    for fd in range(3):
        os.dup2(null, fd)
    os.close(null)

    if IReactorDaemonize.providedBy(reactor):
        reactor.afterDaemonize()

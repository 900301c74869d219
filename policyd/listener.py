import errno
import socket

from twisted.internet import tcp
from twisted.internet.defer import Deferred, succeed
from twisted.internet.error import CannotListenError
from twisted.python import log
from twisted.python.failure import Failure

# Plenty for a loop which serves and closes each connection straight away.
BACKLOG = 5

# accept() errors which go away if we just try again.
TRANSIENT_ACCEPT_ERRORS = frozenset([
    errno.EINTR,
    errno.EAGAIN,
    errno.EWOULDBLOCK,
])

class SequentialServer(tcp.Server):
    """
    Server transport which tells its port when it has been closed.
    """

    def connectionLost(self, reason):
        tcp.Server.connectionLost(self, reason)
        self.server.connectionFinished(self)

class SequentialPort(tcp.Port):
    """
    A listening TCP port which hands out one connection at a time.

    After accepting a connection the port stops reading its socket until that
    connection has been closed, so clients are served strictly in the order
    the kernel queued them.
    """

    transport = SequentialServer

    def __init__(self, port, factory, backlog=BACKLOG, interface="",
                 reactor=None, onFatal=None):
        tcp.Port.__init__(self, port, factory, backlog, interface, reactor)
        self.onFatal = onFatal
        self.current = None
        self._idleWaiters = []
        self._closeWaiters = []

    def createInternetSocket(self):
        s = tcp.Port.createInternetSocket(self)
        # Let a restarted daemon rebind without waiting out TIME_WAIT.
        s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        return s

    def doRead(self):
        """
        Accept a single connection and give it to the factory.
        """

        if self.disconnecting or self.current is not None:
            return

        try:
            skt, addr = self.socket.accept()
        except OSError as e:
            if e.errno in TRANSIENT_ACCEPT_ERRORS:
                log.msg("accept: %s" % (e.strerror,))
            else:
                log.msg("Couldn't accept connection: %s" % (e.strerror or e,))
                self.acceptFailed(Failure())
            return

        try:
            protocol = self.factory.buildProtocol(self._addressType("TCP",
                                                                    *addr))
            if protocol is None:
                skt.close()
                return

            s = self.sessionno
            self.sessionno = s + 1

            self.stopReading()
            self.current = self.transport(skt, protocol, addr, self, s,
                                          self.reactor)
            protocol.makeConnection(self.current)
        except BaseException:
            log.deferr()
            # Drop the broken connection; the port resumes once it's gone.
            if self.current is not None:
                self.current.abortConnection()
            else:
                skt.close()
                if not self.disconnecting:
                    self.startReading()

    def acceptFailed(self, reason):
        """
        Give up on this port after an accept() error we can't recover from.
        """

        self.stopListening()
        if self.onFatal is not None:
            self.onFatal(reason)

    def connectionFinished(self, transport):
        """
        The connection we handed out has been closed; take the next one.
        """

        if transport is self.current:
            self.current = None

        waiters, self._idleWaiters = self._idleWaiters, []
        for d in waiters:
            d.callback(None)

        if self.connected and not self.disconnecting:
            self.startReading()

    def stopListening(self):
        """
        Close the listening socket. Safe to call more than once.
        """

        if not self.connected:
            return succeed(None)

        d = Deferred()
        self._closeWaiters.append(d)
        if not self.disconnecting:
            tcp.Port.stopListening(self)
        return d

    def connectionLost(self, reason):
        tcp.Port.connectionLost(self, reason)

        waiters, self._closeWaiters = self._closeWaiters, []
        for d in waiters:
            d.callback(None)

    def whenIdle(self):
        """
        Get a Deferred which fires once no connection is being served.
        """

        if self.current is None:
            return succeed(None)

        d = Deferred()
        self._idleWaiters.append(d)
        return d

def listen(port, factory, backlog=BACKLOG, interface="", reactor=None,
           onFatal=None):
    """
    Start listening for TCP connections on ``port``.

    ``onFatal`` is called with a Failure if accept() breaks for good; the port
    has already stopped listening by then.

    Raises CannotListenError if the port can't be bound.
    """

    if not 0 <= port <= 65535:
        raise CannotListenError(interface, port,
                                ValueError("port must be 0-65535"))

    p = SequentialPort(port, factory, backlog, interface, reactor, onFatal)
    p.startListening()
    return p

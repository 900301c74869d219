from twisted.application.service import Service
from twisted.internet import reactor
from twisted.internet.defer import gatherResults, succeed
from twisted.python import log

from policyd.listener import listen
from policyd.protocol import PolicyFactory

DEFAULT_PORT = 843

class PolicyService(Service):
    """
    Serve a policy document on a TCP port until told to stop.

    ``running`` is true while connections are being accepted. Once the
    service has stopped, whether because of a shutdown request or an accept()
    error, it isn't started again.
    """

    name = "policy"
    port = None
    exitCode = 0

    def __init__(self, portNumber, document, interface=""):
        self.portNumber = portNumber
        self.document = document
        self.interface = interface
        self.factory = PolicyFactory(document)

    def startService(self):
        self.port = listen(self.portNumber, self.factory,
                           interface=self.interface,
                           onFatal=self.acceptFailed)
        log.msg("Serving %d byte policy on port %d"
            % (len(self.document), self.port.getHost().port))
        Service.startService(self)

    def stopService(self):
        """
        Stop accepting connections.

        The returned Deferred fires after the port has closed and any client
        already accepted has been served.
        """

        Service.stopService(self)

        if self.port is None:
            return succeed(None)

        port, self.port = self.port, None
        return gatherResults([port.stopListening(), port.whenIdle()])

    def acceptFailed(self, reason):
        log.msg("Giving up on port %d: %s"
            % (self.portNumber, reason.getErrorMessage()))
        self.exitCode = 1
        self.stopService()
        if reactor.running:
            reactor.stop()

from twisted.internet.error import ConnectionDone
from twisted.internet.protocol import Protocol, ServerFactory
from twisted.python import log

class PolicyProtocol(Protocol):
    """
    Write the policy document to the client, then hang up.

    Nothing the client sends is looked at.
    """

    peer = None

    def connectionMade(self):
        self.peer = self.transport.getPeer().host
        log.msg("Connection from %s" % self.peer)

        # The transport retries short writes until its buffer is empty, and
        # only closes once everything has been flushed or a send has failed.
        self.transport.write(self.factory.document.content)
        self.transport.loseConnection()

    def connectionLost(self, reason):
        if not reason.check(ConnectionDone):
            log.msg("Couldn't send policy to %s: %s"
                % (self.peer, reason.getErrorMessage()))

class PolicyFactory(ServerFactory):
    protocol = PolicyProtocol
    noisy = False

    def __init__(self, document):
        self.document = document

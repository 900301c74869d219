from twisted.internet import reactor
from twisted.internet.defer import Deferred
from twisted.internet.endpoints import TCP4ClientEndpoint, connectProtocol
from twisted.internet.protocol import Protocol
from twisted.python import log

from policyd.protocol import PolicyFactory, PolicyProtocol

POLICY = (b'<cross-domain-policy><allow-access-from domain="*"/>'
          b'</cross-domain-policy>')

class Receiver(Protocol):
    """
    Client which reads until the server hangs up.
    """

    def __init__(self):
        self.data = b""
        self.done = Deferred()

    def dataReceived(self, data):
        self.data += data

    def connectionLost(self, reason):
        self.done.callback(self.data)

def fetch(port):
    """
    Connect to ``port`` on localhost and collect everything sent.
    """

    receiver = Receiver()
    endpoint = TCP4ClientEndpoint(reactor, "127.0.0.1", port)
    d = connectProtocol(endpoint, receiver)
    d.addCallback(lambda chaff: receiver.done)
    return d

class RecordingProtocol(PolicyProtocol):

    def connectionMade(self):
        self.factory.events.append("open")
        PolicyProtocol.connectionMade(self)
        if self.factory.onOpen is not None:
            self.factory.onOpen()

    def connectionLost(self, reason):
        self.factory.events.append("close")
        PolicyProtocol.connectionLost(self, reason)

class RecordingFactory(PolicyFactory):
    """
    Policy factory which notes when its connections open and close.
    """

    protocol = RecordingProtocol
    onOpen = None

    def __init__(self, document):
        PolicyFactory.__init__(self, document)
        self.events = []

class LogCatcher(object):

    def __init__(self, testcase):
        self.events = []
        log.addObserver(self.events.append)
        testcase.addCleanup(log.removeObserver, self.events.append)

    def messages(self):
        return [log.textFromEventDict(e) for e in self.events]

    def contains(self, text):
        return any(text in (m or "") for m in self.messages())

class BrokenOnceProtocol(PolicyProtocol):
    """
    Blows up on the first connection it's given.
    """

    def connectionMade(self):
        if not self.factory.broken:
            self.factory.broken = True
            raise RuntimeError("broken protocol")
        PolicyProtocol.connectionMade(self)

class BrokenOnceFactory(PolicyFactory):
    protocol = BrokenOnceProtocol
    broken = False

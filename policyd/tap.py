"""
Support for running the policy server under twistd.
"""

from twisted.python import usage

from policyd.policy import PolicyError, load_policy
from policyd.service import DEFAULT_PORT, PolicyService

class Options(usage.Options):

    synopsis = "-f POLICY [-p PORT]"

    optParameters = [
        ["file", "f", None, "Policy document to serve"],
        ["port", "p", DEFAULT_PORT, "TCP port to listen on", int],
    ]

    def postOptions(self):
        if self["file"] is None:
            raise usage.UsageError("Missing required policy file argument -f")
        if not 0 < self["port"] < 65536:
            raise usage.UsageError("Invalid port %s" % self["port"])

def makeService(options):
    """
    Set up a policy server.
    """

    try:
        document = load_policy(options["file"])
    except PolicyError as e:
        raise usage.UsageError("Failed to read policy file: %s" % e)

    return PolicyService(options["port"], document)

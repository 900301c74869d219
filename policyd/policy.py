from twisted.python.filepath import FilePath

# Anything past this many bytes of the policy file is dropped on load.
MAX_POLICY_LENGTH = 65536

class PolicyError(Exception):
    """
    The policy file couldn't be read.
    """

class PolicyDocument(object):
    """
    The bytes handed to every client.

    The content is fixed when the document is built and never changes
    afterwards, so a single document can be shared by every connection.
    """

    def __init__(self, data):
        self._content = bytes(data[:MAX_POLICY_LENGTH])

    @property
    def content(self):
        return self._content

    def __bytes__(self):
        return self._content

    def __len__(self):
        return len(self._content)

    def __repr__(self):
        return "<PolicyDocument (%d bytes)>" % len(self)

def load_policy(path):
    """
    Read the policy document at ``path``.

    Files longer than ``MAX_POLICY_LENGTH`` are truncated rather than
    refused. Raises ``PolicyError`` if the file can't be opened or read.
    """

    try:
        with FilePath(path).open() as f:
            data = f.read(MAX_POLICY_LENGTH)
    except OSError as e:
        raise PolicyError("%s: %s" % (path, e.strerror or e))

    return PolicyDocument(data)

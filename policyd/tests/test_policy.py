from twisted.python.filepath import FilePath
from twisted.trial import unittest

from policyd.policy import (MAX_POLICY_LENGTH, PolicyDocument, PolicyError,
                            load_policy)
from policyd.tests.util import POLICY

class TestPolicyDocument(unittest.TestCase):

    def test_trivial(self):
        pass

    def test_content(self):
        doc = PolicyDocument(POLICY)
        self.assertEqual(doc.content, POLICY)
        self.assertEqual(bytes(doc), POLICY)
        self.assertEqual(len(doc), len(POLICY))

    def test_empty(self):
        doc = PolicyDocument(b"")
        self.assertEqual(bytes(doc), b"")
        self.assertEqual(len(doc), 0)

    def test_truncated(self):
        doc = PolicyDocument(b"x" * (MAX_POLICY_LENGTH + 1))
        self.assertEqual(len(doc), MAX_POLICY_LENGTH)

    def test_copies_input(self):
        data = bytearray(POLICY)
        doc = PolicyDocument(data)
        data[0:1] = b"!"
        self.assertEqual(bytes(doc), POLICY)

    def test_repr(self):
        self.assertEqual(repr(PolicyDocument(POLICY)),
                         "<PolicyDocument (%d bytes)>" % len(POLICY))

class TestLoadPolicy(unittest.TestCase):

    def setUp(self):
        self.path = FilePath(self.mktemp())

    def test_load(self):
        self.path.setContent(POLICY)
        doc = load_policy(self.path.path)
        self.assertEqual(bytes(doc), POLICY)

    def test_load_empty(self):
        self.path.setContent(b"")
        self.assertEqual(len(load_policy(self.path.path)), 0)

    def test_load_maximum(self):
        data = b"a" * MAX_POLICY_LENGTH
        self.path.setContent(data)
        self.assertEqual(bytes(load_policy(self.path.path)), data)

    def test_load_truncates(self):
        data = b"a" * MAX_POLICY_LENGTH + b"b" * 1000
        self.path.setContent(data)
        doc = load_policy(self.path.path)
        self.assertEqual(bytes(doc), data[:MAX_POLICY_LENGTH])

    def test_missing(self):
        e = self.assertRaises(PolicyError, load_policy, self.path.path)
        self.assertIn(self.path.path, str(e))

    def test_directory(self):
        self.path.makedirs()
        self.assertRaises(PolicyError, load_policy, self.path.path)

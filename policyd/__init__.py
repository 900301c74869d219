"""
A tiny daemon which hands a fixed policy document to every TCP client.
"""

__version__ = "1.0.0"

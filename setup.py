#!/usr/bin/env python

from setuptools import setup

setup(
    name="policyd",
    version="1.0.0",
    python_requires=">=3.8",
    packages=[
        "policyd",
        "policyd.tests",
        "twisted.plugins",
    ],
    install_requires=[
        "Twisted>=22.10.0",
        "zope.interface",
    ],
    entry_points={
        "console_scripts": [
            "policyd = policyd.script:main",
        ],
    },
    description="A Twisted-based server for fixed policy documents",
    license="GPL2",
)

# Regenerate Twisted plugin cache.
try:
    from twisted.plugin import getPlugins, IPlugin
    list(getPlugins(IPlugin))
except ImportError:
    pass

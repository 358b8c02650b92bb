"""Raiden Kit.

Deployment tooling and thin client wrappers for the ``Raiden`` network.
"""

__version__ = "0.1.0"

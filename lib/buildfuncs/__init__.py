"""Namespaced built-in functions for build script expressions, and the
registry and dispatcher that resolve and invoke them against the state of
a running build."""

__version__ = '0.3.0'

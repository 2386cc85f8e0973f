"""State/store layer.

This package is the single owner of every car and fuel entry held by the
process. Nothing outside it mutates the collection directly.
"""

from carfuel.state.store import CarStore

__all__ = ["CarStore"]

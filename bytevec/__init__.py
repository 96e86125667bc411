"""bytevec - Flat binary encoding for typed Python values."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("bytevec")
except PackageNotFoundError:
    __version__ = "(local)"

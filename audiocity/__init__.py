"""AudioCity: a personal media library backed by JSON documents on disk."""

__version__ = "0.3.0"

"""Zip entry paths, timestamp and permission helpers, glob translation and extra-field formatting."""

__version__ = "0.1.0"
__all__ = ["utils", "extra", "pathbytes", "pathrel", "path"]
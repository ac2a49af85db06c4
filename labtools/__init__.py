"""Console utilities: a login shell with request limits, file operations and a directory lister."""

__version__ = "0.1.0"
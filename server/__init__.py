"""HTTP server for the documentation assistant."""

__version__ = "0.1.0"

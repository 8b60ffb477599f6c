"""cosi — inspect and administer a single Linux host over HTTP."""

__version__ = "0.1.0"

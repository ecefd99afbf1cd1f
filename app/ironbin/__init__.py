"""ironbin - FreeDesktop.org trash can for the command line."""

__version__ = "0.3.0"

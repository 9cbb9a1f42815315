"""SEP lifecycle automation bot."""

__version__ = "0.1.0"

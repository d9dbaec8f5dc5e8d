"""snadmin - command-line administration client for a Snapcast podcast host."""

__version__ = "0.2.0"

"""xpilot: a terminal chat client with local history and learned facts."""

__version__ = "0.1.0"

"""Client-side session manager for the news assistant chat service."""

__version__ = "0.1.0"

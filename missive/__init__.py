"""Email addresses, envelopes, typed headers and encoded bodies for MIME messages."""

__version__ = "0.1.0"
"""Errors raised while building e-mail envelopes and messages."""

from __future__ import annotations

__all__ = [
    "MessageError",
    "MissingFromError",
    "MissingToError",
    "TooManyFromError",
    "EmailMissingAtError",
    "EmailMissingLocalPartError",
    "EmailMissingDomainError",
    "CannotParseFilenameError",
    "NonAsciiCharsError",
]


class MessageError(Exception):
    """Base class for errors concerning e-mail content."""

    default_message = "invalid message"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message if message is not None else self.default_message)


class MissingFromError(MessageError):
    """The envelope has no source address."""

    default_message = "missing source address, invalid envelope"


class MissingToError(MessageError):
    """The envelope has no destination address."""

    default_message = "missing destination address, invalid envelope"


class TooManyFromError(MessageError):
    """More than one source address was given."""

    default_message = "there can only be one source address"


class EmailMissingAtError(MessageError):
    """The e-mail address has no ``@``."""

    default_message = "missing @ in email address"


class EmailMissingLocalPartError(MessageError):
    """The e-mail address has no local part."""

    default_message = "missing local part in email address"


class EmailMissingDomainError(MessageError):
    """The e-mail address has no domain."""

    default_message = "missing domain in email address"


class CannotParseFilenameError(MessageError):
    """The attachment file name could not be parsed."""

    default_message = "could not parse attachment filename"


class NonAsciiCharsError(MessageError):
    """The content holds characters outside ASCII."""

    default_message = "contains non-ASCII chars"
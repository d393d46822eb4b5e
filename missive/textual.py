"""Free-text headers and the ``MIME-Version`` header."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar

from .headers import Header, HeaderName, HeaderValue

__all__ = [
    "TextHeader",
    "Subject",
    "Comments",
    "Keywords",
    "InReplyTo",
    "References",
    "MessageId",
    "UserAgent",
    "ContentId",
    "ContentLocation",
    "MimeVersion",
    "MIME_VERSION_1_0",
]


class TextHeader(Header):
    """A header whose value is free text, encoded when it is sent."""

    _header: ClassVar[str]

    __slots__ = ("text",)

    def __init__(self, text: str) -> None:
        self.text = text

    @classmethod
    def header_name(cls) -> HeaderName:
        """The name of this header."""
        return HeaderName(cls._header)

    @classmethod
    def parse(cls, s: str) -> TextHeader:
        """Take the raw value as the text."""
        return cls(s)

    def display(self) -> HeaderValue:
        """The header as a value ready to go into a message."""
        return HeaderValue(self.header_name(), self.text)

    def __str__(self) -> str:
        return self.text

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TextHeader):
            return NotImplemented
        return type(self) is type(other) and self.text == other.text

    def __hash__(self) -> int:
        return hash((type(self), self.text))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.text!r})"


class Subject(TextHeader):
    """The ``Subject`` of the message."""

    _header = "Subject"


class Comments(TextHeader):
    """``Comments`` on the message."""

    _header = "Comments"


class Keywords(TextHeader):
    """Comma-separated ``Keywords`` of the message."""

    _header = "Keywords"


class InReplyTo(TextHeader):
    """``In-Reply-To``: identifiers of the messages this one replies to."""

    _header = "In-Reply-To"


class References(TextHeader):
    """``References``: identifiers of related messages."""

    _header = "References"


class MessageId(TextHeader):
    """``Message-ID``: the unique identifier of the message."""

    _header = "Message-ID"


class UserAgent(TextHeader):
    """``User-Agent``: the client that wrote the message."""

    _header = "User-Agent"


class ContentId(TextHeader):
    """``Content-ID`` of a part."""

    _header = "Content-ID"


class ContentLocation(TextHeader):
    """``Content-Location`` of a part."""

    _header = "Content-Location"


_U8 = re.compile(r"\+?[0-9]+", re.ASCII)


def _parse_u8(text: str) -> int:
    if not _U8.fullmatch(text):
        raise ValueError(f"invalid version number: {text!r}")
    value = int(text)
    if value > 255:
        raise ValueError(f"version number out of range: {text!r}")
    return value


@dataclass(frozen=True)
class MimeVersion(Header):
    """The ``MIME-Version`` of the message format; defaults to 1.0."""

    major: int = 1
    minor: int = 0

    def __post_init__(self) -> None:
        for part in (self.major, self.minor):
            if not isinstance(part, int) or not 0 <= part <= 255:
                raise ValueError("MIME version numbers must be integers from 0 to 255")

    @classmethod
    def header_name(cls) -> HeaderName:
        """The name of this header."""
        return HeaderName("MIME-Version")

    @classmethod
    def parse(cls, s: str) -> MimeVersion:
        """Parse ``major.minor``."""
        parts = s.split(".")
        if len(parts) < 2:
            raise ValueError("MIME-Version header doesn't contain '.'")
        return cls(_parse_u8(parts[0]), _parse_u8(parts[1]))

    def display(self) -> HeaderValue:
        """The header as a value ready to go into a message."""
        value = f"{self.major}.{self.minor}"
        return HeaderValue.pre_encoded(self.header_name(), value, value)


MIME_VERSION_1_0 = MimeVersion(1, 0)
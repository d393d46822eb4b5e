"""Content headers: transfer encoding, disposition and MIME type."""

from __future__ import annotations

import enum
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

from .header_encoding import EmailWriter, encode_rfc2231
from .headers import Header, HeaderName, HeaderValue

__all__ = [
    "ContentTransferEncoding",
    "ContentDisposition",
    "ContentTypeError",
    "ContentType",
]


class ContentTransferEncoding(enum.Enum):
    """The ``Content-Transfer-Encoding`` of a body."""

    SEVEN_BIT = "7bit"
    QUOTED_PRINTABLE = "quoted-printable"
    BASE64 = "base64"
    EIGHT_BIT = "8bit"
    BINARY = "binary"

    @classmethod
    def header_name(cls) -> HeaderName:
        """The name of this header."""
        return HeaderName("Content-Transfer-Encoding")

    @classmethod
    def parse(cls, s: str) -> ContentTransferEncoding:
        """Parse one of the encoding names; raise :class:`ValueError` otherwise."""
        try:
            return cls(s)
        except ValueError:
            raise ValueError(s) from None

    def display(self) -> HeaderValue:
        """The header as a value ready to go into a message."""
        return HeaderValue.pre_encoded(self.header_name(), self.value, self.value)

    def __str__(self) -> str:
        return self.value


_DISPOSITION_LINE_START = len("Content-Disposition: ")
_FILENAME_MARKER = ' filename="'


@dataclass(frozen=True)
class ContentDisposition(Header):
    """The ``Content-Disposition`` of an attachment."""

    value: HeaderValue

    @classmethod
    def inline(cls) -> ContentDisposition:
        """A part to be shown inline in the message."""
        return cls(HeaderValue.pre_encoded(cls.header_name(), "inline", "inline"))

    @classmethod
    def inline_with_name(cls, file_name: str) -> ContentDisposition:
        """A part shown inline that also names the file it would be saved as."""
        return cls._with_name("inline", file_name)

    @classmethod
    def attachment(cls, file_name: str) -> ContentDisposition:
        """A part that is separate from the body and can be downloaded."""
        return cls._with_name("attachment", file_name)

    @classmethod
    def _with_name(cls, kind: str, file_name: str) -> ContentDisposition:
        raw_value = f'{kind}; filename="{file_name}"'
        writer = EmailWriter(_DISPOSITION_LINE_START)
        writer.write(kind)
        writer.write(";")
        writer.optional_breakpoint()
        encode_rfc2231("filename", file_name, writer)
        return cls(
            HeaderValue.pre_encoded(cls.header_name(), raw_value, writer.getvalue())
        )

    @classmethod
    def header_name(cls) -> HeaderName:
        """The name of this header."""
        return HeaderName("Content-Disposition")

    @classmethod
    def parse(cls, s: str) -> ContentDisposition:
        """Parse ``inline`` or ``inline|attachment; filename="..."``."""
        if s == "inline":
            return cls.inline()
        kind, sep, rest = s.partition(";")
        if sep and kind in ("inline", "attachment") and _FILENAME_MARKER in rest:
            file_name = rest.split(_FILENAME_MARKER, 1)[1]
            if file_name.endswith('"'):
                return cls._with_name(kind, file_name[:-1])
        raise ValueError("Unsupported ContentDisposition value")

    def display(self) -> HeaderValue:
        """The header as a value ready to go into a message."""
        return self.value


class ContentTypeError(ValueError):
    """A MIME type could not be parsed."""


_TSPECIALS = frozenset('()<>@,;:\\"/[]?=')
_PARAM = re.compile(r'\s*;\s*([^\s=;]+)=("(?:[^"\\]|\\.)*"|[^\s;"]+)\s*', re.DOTALL)


def _is_token(text: str) -> bool:
    return bool(text) and all(33 <= ord(c) <= 126 and c not in _TSPECIALS for c in text)


def _normalize_param(name: str, value: str) -> tuple[str, str]:
    name = name.lower()
    if not _is_token(name):
        raise ContentTypeError(f"invalid parameter name: {name!r}")
    if name == "charset":
        value = value.lower()
    return name, value


def _show_value(value: str) -> str:
    if _is_token(value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class ContentType(Header):
    """The ``Content-Type`` of a body: a MIME type with its parameters."""

    TEXT_PLAIN: ClassVar[ContentType]
    TEXT_HTML: ClassVar[ContentType]

    __slots__ = ("main_type", "sub_type", "params")

    def __init__(
        self,
        main_type: str,
        sub_type: str,
        params: Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
    ) -> None:
        main_type = main_type.lower()
        sub_type = sub_type.lower()
        if not _is_token(main_type):
            raise ContentTypeError(f"invalid type: {main_type!r}")
        if not _is_token(sub_type):
            raise ContentTypeError(f"invalid subtype: {sub_type!r}")
        if params is None:
            pairs: Iterable[tuple[str, str]] = ()
        elif isinstance(params, Mapping):
            pairs = params.items()
        else:
            pairs = params
        self.main_type = main_type
        self.sub_type = sub_type
        self.params = tuple(_normalize_param(name, value) for name, value in pairs)

    @classmethod
    def header_name(cls) -> HeaderName:
        """The name of this header."""
        return HeaderName("Content-Type")

    @classmethod
    def parse(cls, s: str) -> ContentType:
        """Parse ``type/subtype; name=value; ...``."""
        text = s.strip()
        head, _, _ = text.partition(";")
        main_type, slash, sub_type = head.strip().partition("/")
        if not slash:
            raise ContentTypeError(f"missing '/' in MIME type: {s!r}")
        params = []
        rest = text[len(head) :]
        pos = 0
        while pos < len(rest):
            match = _PARAM.match(rest, pos)
            if match is None or match.end() == pos:
                raise ContentTypeError(f"invalid parameters in MIME type: {s!r}")
            name, value = match.group(1), match.group(2)
            if value.startswith('"'):
                value = re.sub(r"\\(.)", r"\1", value[1:-1], flags=re.DOTALL)
            params.append((name, value))
            pos = match.end()
        return cls(main_type.strip(), sub_type.strip(), params)

    def display(self) -> HeaderValue:
        """The header as a value ready to go into a message."""
        return HeaderValue(self.header_name(), str(self))

    def to_serializable(self) -> str:
        """The MIME type as a plain string."""
        return str(self)

    @classmethod
    def from_serializable(cls, data: Any) -> ContentType:
        """Build a content type from a MIME type string."""
        if not isinstance(data, str):
            raise TypeError("expected a ContentType string like `text/plain`")
        try:
            return cls.parse(data)
        except ContentTypeError:
            raise ContentTypeError(
                f"Couldn't parse the following MIME-Type: {data}"
            ) from None

    def __str__(self) -> str:
        params = "".join(f"; {name}={_show_value(value)}" for name, value in self.params)
        return f"{self.main_type}/{self.sub_type}{params}"

    def __repr__(self) -> str:
        return f"ContentType({str(self)!r})"

    def _key(self) -> tuple[str, str, tuple[tuple[str, str], ...]]:
        return (self.main_type, self.sub_type, self.params)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ContentType):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())


ContentType.TEXT_PLAIN = ContentType("text", "plain", {"charset": "utf-8"})
ContentType.TEXT_HTML = ContentType("text", "html", {"charset": "utf-8"})
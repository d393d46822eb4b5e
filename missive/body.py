"""Message and part bodies, encoded and ready to be sent."""

from __future__ import annotations

import base64
import re
from dataclasses import dataclass
from typing import Union

from .content import ContentTransferEncoding

__all__ = [
    "BodyEncodingError",
    "Body",
    "choose_encoding",
    "crlf_line_endings",
    "encode_quoted_printable",
    "encode_base64",
]

BodyData = Union[str, bytes, bytearray, memoryview]

_LINE_MAX_LEN = 76
# Room left on a quoted-printable line for the trailing soft break "=".
_QP_LINE_CONTENT = _LINE_MAX_LEN - 1

_CR = 0x0D
_LF = 0x0A
_SPACE = 0x20
_TAB = 0x09
_EQUALS = 0x3D

_BARE_LF = re.compile(r"(?<!\r)\n")


class BodyEncodingError(ValueError):
    """The requested transfer encoding would produce an invalid body.

    ``data`` holds the supplied content, as bytes, unchanged.
    """

    def __init__(self, data: bytes, encoding: ContentTransferEncoding) -> None:
        super().__init__(f"the body cannot be sent with the {encoding} encoding")
        self.data = data
        self.encoding = encoding


def _normalize(data: BodyData) -> str | bytes:
    if isinstance(data, str):
        return data
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"a body must be str or bytes, not {type(data).__name__}")


def crlf_line_endings(text: str) -> str:
    """Turn every line feed not already preceded by a carriage return into CRLF."""
    return _BARE_LF.sub("\r\n", text)


def _line_too_long(data: bytes) -> bool:
    return any(len(line) > _LINE_MAX_LEN for line in data.split(b"\n"))


def encode_quoted_printable(data: bytes) -> bytes:
    """Quoted-printable encode ``data``, keeping CRLF as hard line breaks."""
    data = bytes(data)
    pieces: list[str] = []
    on_line = 0

    def emit(token: str) -> None:
        nonlocal on_line
        if on_line + len(token) > _QP_LINE_CONTENT:
            pieces.append("=\r\n")
            on_line = 0
        pieces.append(token)
        on_line += len(token)

    skip_next = False
    for index, byte in enumerate(data):
        if skip_next:
            skip_next = False
            continue
        if byte == _CR and data[index + 1 : index + 2] == b"\n":
            pieces.append("\r\n")
            on_line = 0
            skip_next = True
        elif byte in (_SPACE, _TAB):
            following = data[index + 1 : index + 3]
            at_line_end = not following or following == b"\r\n"
            emit(f"={byte:02X}" if at_line_end else chr(byte))
        elif 33 <= byte <= 126 and byte != _EQUALS:
            emit(chr(byte))
        else:
            emit(f"={byte:02X}")
    return "".join(pieces).encode("ascii")


def encode_base64(data: bytes) -> bytes:
    """Base64 encode ``data`` in lines of at most 76 characters joined by CRLF."""
    encoded = base64.b64encode(bytes(data))
    lines = [
        encoded[start : start + _LINE_MAX_LEN]
        for start in range(0, len(encoded), _LINE_MAX_LEN)
    ]
    return b"\r\n".join(lines)


def choose_encoding(
    data: BodyData, supports_utf8: bool = False
) -> ContentTransferEncoding:
    """The most suitable transfer encoding for ``data``; never ``binary``.

    Text may go as ``7bit``, as ``8bit`` when ``supports_utf8`` is set, or
    else as whichever of quoted-printable and base64 is shorter. Bytes always
    go as base64.
    """
    content = _normalize(data)
    if not isinstance(content, str):
        return ContentTransferEncoding.BASE64

    raw = content.encode("utf-8")
    if not _line_too_long(raw):
        if content.isascii():
            return ContentTransferEncoding.SEVEN_BIT
        if supports_utf8:
            return ContentTransferEncoding.EIGHT_BIT
    if len(encode_quoted_printable(raw)) <= len(encode_base64(raw)):
        return ContentTransferEncoding.QUOTED_PRINTABLE
    return ContentTransferEncoding.BASE64


def _allowed(
    requested: ContentTransferEncoding, best: ContentTransferEncoding
) -> bool:
    if requested is ContentTransferEncoding.SEVEN_BIT:
        return best is ContentTransferEncoding.SEVEN_BIT
    if requested is ContentTransferEncoding.EIGHT_BIT:
        return best in (
            ContentTransferEncoding.SEVEN_BIT,
            ContentTransferEncoding.EIGHT_BIT,
        )
    return True


def _as_bytes(content: str | bytes) -> bytes:
    return content.encode("utf-8") if isinstance(content, str) else content


@dataclass(frozen=True)
class Body:
    """A body already encoded with its ``Content-Transfer-Encoding``."""

    buf: bytes
    encoding: ContentTransferEncoding

    @classmethod
    def encode(cls, data: BodyData) -> Body:
        """Encode ``data`` with the most efficient of 7bit, quoted-printable and base64.

        Line endings in text are converted to CRLF; bytes are always base64.
        """
        content = _normalize(data)
        encoding = choose_encoding(content, supports_utf8=False)
        return cls._build(content, encoding)

    @classmethod
    def with_encoding(
        cls, data: BodyData, encoding: ContentTransferEncoding
    ) -> Body:
        """Encode ``data`` with ``encoding``.

        Raises :class:`BodyEncodingError` if the result would be invalid.
        """
        content = _normalize(data)
        best = choose_encoding(content, supports_utf8=True)
        if not _allowed(encoding, best):
            raise BodyEncodingError(_as_bytes(content), encoding)
        return cls._build(content, encoding)

    @classmethod
    def pre_encoded(cls, buf: bytes, encoding: ContentTransferEncoding) -> Body:
        """Wrap a buffer that is already encoded with ``encoding``.

        ``buf`` should hold no non-ASCII bytes, NUL bytes or overlong lines.
        """
        return cls(bytes(buf), encoding)

    @classmethod
    def _build(cls, content: str | bytes, encoding: ContentTransferEncoding) -> Body:
        if isinstance(content, str):
            content = crlf_line_endings(content)
        raw = _as_bytes(content)
        if encoding is ContentTransferEncoding.QUOTED_PRINTABLE:
            return cls(encode_quoted_printable(raw), encoding)
        if encoding is ContentTransferEncoding.BASE64:
            return cls(encode_base64(raw), encoding)
        return cls(raw, encoding)

    def __len__(self) -> int:
        return len(self.buf)

    def __bytes__(self) -> bytes:
        return self.buf
"""Encoding and line folding of e-mail header values (RFC 2047, RFC 2231)."""

from __future__ import annotations

import base64
import re
import string

__all__ = [
    "MAX_LINE_LEN",
    "EmailWriter",
    "encode_rfc2047",
    "encode_rfc2231",
    "encode_header_value",
    "allowed_str",
]

MAX_LINE_LEN = 76

_ENCODED_PREFIX = "=?utf-8?b?"
_ENCODED_SUFFIX = "?="
_RFC2047_OVERHEAD = len(_ENCODED_PREFIX) + len(_ENCODED_SUFFIX) + len("\r\n")

_RFC2231_SAFE = frozenset(string.ascii_letters + string.digits + "!#$&+-.^_`|~")
_RFC2231_EXTENDED_START = "*0*=utf-8''"
# A continuation line is a leading space, the segment and a trailing ';'.
_RFC2231_SEGMENT_BUDGET = MAX_LINE_LEN - 2

_WORDS = re.compile(r"[^ ]* |[^ ]+$")


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


def _take_bytes(text: str, limit: int) -> str:
    """The longest prefix of ``text`` whose UTF-8 form fits in ``limit`` bytes."""
    size = 0
    for index, char in enumerate(text):
        size += _byte_len(char)
        if size > limit:
            return text[:index]
    return text


class EmailWriter:
    """Accumulates header text while tracking the length of the current line.

    Spaces are held back until the next write, so that a line break can take
    their place when a word would not fit on the current line.
    """

    def __init__(
        self,
        line_len: int = 0,
        spaces: int = 0,
        can_go_to_new_line_now: bool = False,
    ) -> None:
        self._parts: list[str] = []
        self.line_len = line_len
        self.spaces = spaces
        self.can_go_to_new_line_now = can_go_to_new_line_now

    def _write_spaces(self) -> None:
        if self.spaces:
            self._parts.append(" " * self.spaces)
            self.line_len += self.spaces
            self.spaces = 0

    def write(self, text: str) -> None:
        """Write ``text`` as is, preceded by any pending spaces."""
        if not text:
            return
        self._write_spaces()
        self.can_go_to_new_line_now = True
        self._parts.append(text)
        self.line_len += _byte_len(text)

    def write_folding(self, text: str) -> None:
        """Write ``text``, breaking the line at spaces where a word would overflow."""
        rest = text
        while rest:
            if rest.startswith(" "):
                self.space()
                rest = rest[1:]
                continue
            word, sep, tail = rest.partition(" ")
            rest = sep + tail
            if (
                self.can_go_to_new_line_now
                and self.spaces >= 1
                and self.line_len + self.spaces + _byte_len(word) > MAX_LINE_LEN
            ):
                self.new_line()
            self.write(word)

    def space(self) -> None:
        """Add a space that may turn into a line break."""
        self.spaces += 1

    def optional_breakpoint(self) -> None:
        """Mark a place where either a space or a line break goes."""
        self.can_go_to_new_line_now = True
        self.space()

    def new_line(self) -> None:
        """End the current line; pending spaces start the next one."""
        self._parts.append("\r\n")
        self.line_len = 0
        self.can_go_to_new_line_now = False

    def getvalue(self) -> str:
        """Everything written so far."""
        return "".join(self._parts)


def encode_rfc2047(text: str, writer: EmailWriter) -> None:
    """Write ``text`` as one or more base64 encoded words."""
    rest = text
    while rest:
        room = max(MAX_LINE_LEN - _RFC2047_OVERHEAD - writer.line_len, 0) // 4 * 3
        chunk = _take_bytes(rest, room)
        if not chunk:
            if writer.line_len > 0:
                writer.new_line()
                writer.space()
                continue
            chunk = rest[0]
        encoded = base64.b64encode(chunk.encode("utf-8")).decode("ascii")
        writer.write(_ENCODED_PREFIX + encoded + _ENCODED_SUFFIX)
        rest = rest[len(chunk) :]


def _is_printable_ascii(text: str) -> bool:
    return all(32 <= ord(char) <= 126 for char in text)


def _quote(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _rfc2231_segments(key: str, value: str, printable: bool):
    if printable:
        pieces = [_quote(char) for char in value]
        closing = '"'

        def head(index: int) -> str:
            return f'{key}*{index}="'

    else:
        pieces = [
            char
            if char in _RFC2231_SAFE
            else "".join(f"%{byte:02X}" for byte in char.encode("utf-8"))
            for char in value
        ]
        closing = ""

        def head(index: int) -> str:
            return key + _RFC2231_EXTENDED_START if index == 0 else f"{key}*{index}*="

    index = 0
    current: list[str] = []
    current_len = 0
    for piece in pieces:
        budget = _RFC2231_SEGMENT_BUDGET - len(head(index)) - len(closing)
        if current and current_len + len(piece) > budget:
            yield head(index) + "".join(current) + closing
            index += 1
            current = []
            current_len = 0
        current.append(piece)
        current_len += len(piece)
    yield head(index) + "".join(current) + closing


def encode_rfc2231(key: str, value: str, writer: EmailWriter) -> None:
    """Write the parameter ``key=value``, split into continuations when needed."""
    if not key or not key.isascii() or not key.isalnum():
        raise ValueError("the parameter key must only hold ASCII letters and digits")
    if len(key) + len(_RFC2231_EXTENDED_START) >= MAX_LINE_LEN:
        raise ValueError("the parameter key is too long")

    printable = _is_printable_ascii(value)
    if printable:
        quoted = _quote(value)
        needed = len(key) + len('="') + len(quoted) + len('"') + len(";")
        if writer.line_len + writer.spaces + needed < MAX_LINE_LEN:
            writer.write_folding(key)
            writer.write(f'="{quoted}"')
            return

    for index, segment in enumerate(_rfc2231_segments(key, value, printable)):
        if index:
            writer.write(";")
        if writer.line_len:
            writer.new_line()
            if not writer.spaces:
                writer.space()
        writer.write(segment)


def _allowed_byte(byte: int) -> bool:
    return 1 <= byte <= 9 or byte in (11, 12) or 14 <= byte <= 127


def allowed_str(text: str) -> bool:
    """Whether ``text`` can go into a header without encoding."""
    return all(_allowed_byte(byte) for byte in text.encode("utf-8"))


def encode_header_value(name: str, value: str) -> str:
    """Encode and fold ``value`` for a header called ``name``."""
    writer = EmailWriter(len(name) + len(": "))
    pending: list[str] = []

    def flush() -> None:
        if not pending:
            return
        text = "".join(pending)
        pending.clear()
        prefix = text.rstrip(" ")
        encode_rfc2047(prefix, writer)
        for _ in range(len(text) - len(prefix)):
            writer.space()

    for word in _WORDS.findall(value):
        if allowed_str(word):
            flush()
            writer.write_folding(word)
        else:
            pending.append(word)
    flush()
    return writer.getvalue()
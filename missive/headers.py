"""E-mail header names, values and the ordered set of headers of a message."""

from __future__ import annotations

import abc
from collections.abc import Iterator
from typing import TypeVar

from .header_encoding import encode_header_value

__all__ = ["InvalidHeaderName", "HeaderName", "HeaderValue", "Header", "Headers"]

_MAX_NAME_LEN = 76


class InvalidHeaderName(ValueError):
    """A header name is empty, too long, not ASCII or has a space or colon."""

    def __init__(self, message: str = "invalid header name") -> None:
        super().__init__(message)


class HeaderName:
    """A valid header name."""

    __slots__ = ("_name",)

    def __init__(self, name: str) -> None:
        if (
            not name
            or len(name) > _MAX_NAME_LEN
            or not name.isascii()
            or ":" in name
            or " " in name
        ):
            raise InvalidHeaderName()
        self._name = name

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"HeaderName({self._name!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HeaderName):
            return self._name == other._name
        if isinstance(other, str):
            return self._name == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._name)


class HeaderValue:
    """A header name with its raw value and its encoded, folded form."""

    __slots__ = ("name", "raw_value", "encoded_value")

    def __init__(self, name: HeaderName | str, raw_value: str) -> None:
        self.name = name if isinstance(name, HeaderName) else HeaderName(name)
        self.raw_value = raw_value
        self.encoded_value = encode_header_value(str(self.name), raw_value)

    @classmethod
    def pre_encoded(
        cls, name: HeaderName | str, raw_value: str, encoded_value: str
    ) -> HeaderValue:
        """Build a value whose encoded form is trusted as given.

        ``encoded_value`` must hold only printable ASCII and be folded already.
        """
        value = cls.__new__(cls)
        value.name = name if isinstance(name, HeaderName) else HeaderName(name)
        value.raw_value = raw_value
        value.encoded_value = encoded_value
        return value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeaderValue):
            return NotImplemented
        return (self.name, self.raw_value, self.encoded_value) == (
            other.name,
            other.raw_value,
            other.encoded_value,
        )

    def __hash__(self) -> int:
        return hash((self.name, self.raw_value, self.encoded_value))

    def __repr__(self) -> str:
        return f"HeaderValue({str(self.name)!r}, {self.raw_value!r})"


class Header(abc.ABC):
    """A typed e-mail header that can be parsed from and shown as a raw value."""

    @classmethod
    @abc.abstractmethod
    def header_name(cls) -> HeaderName:
        """The name of this header."""

    @classmethod
    @abc.abstractmethod
    def parse(cls, s: str) -> Header:
        """Parse a raw value; raise :class:`ValueError` when it is invalid."""

    @abc.abstractmethod
    def display(self) -> HeaderValue:
        """The header as a value ready to go into a message."""


H = TypeVar("H")


def _same_name(left: str, right: str) -> bool:
    return left.lower() == right.lower()


class Headers:
    """An ordered set of headers, looked up by name without regard to case."""

    def __init__(self) -> None:
        self._values: list[HeaderValue] = []

    def get(self, header_type: type[H]) -> H | None:
        """The header of this type, or ``None`` if absent or unparsable."""
        raw = self.get_raw(str(header_type.header_name()))
        if raw is None:
            return None
        try:
            return header_type.parse(raw)
        except ValueError:
            return None

    def set(self, header: Header) -> None:
        """Set ``header``, replacing one of the same name."""
        self.insert_raw(header.display())

    def remove(self, header_type: type[H]) -> H | None:
        """Remove the header of this type and return it parsed, if possible."""
        value = self.remove_raw(str(header_type.header_name()))
        if value is None:
            return None
        try:
            return header_type.parse(value.raw_value)
        except ValueError:
            return None

    def clear(self) -> None:
        """Remove every header."""
        self._values.clear()

    def _find_index(self, name: str) -> int | None:
        return next(
            (
                index
                for index, value in enumerate(self._values)
                if _same_name(name, str(value.name))
            ),
            None,
        )

    def get_raw(self, name: HeaderName | str) -> str | None:
        """The raw value of header ``name``, or ``None``."""
        index = self._find_index(str(name))
        return None if index is None else self._values[index].raw_value

    def insert_raw(self, value: HeaderValue) -> None:
        """Insert ``value``, replacing in place a header of the same name."""
        index = self._find_index(str(value.name))
        if index is None:
            self._values.append(value)
        else:
            self._values[index] = value

    def remove_raw(self, name: HeaderName | str) -> HeaderValue | None:
        """Remove header ``name`` and return its value, or ``None``."""
        index = self._find_index(str(name))
        return None if index is None else self._values.pop(index)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[HeaderValue]:
        return iter(self._values)

    def __str__(self) -> str:
        return "".join(
            f"{value.name}: {value.encoded_value}\r\n" for value in self._values
        )

    def __repr__(self) -> str:
        return f"Headers({self._values!r})"
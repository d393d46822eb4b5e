"""E-mail addresses made of a user and a domain."""

from __future__ import annotations

import enum
import ipaddress
from typing import Any

import idna

__all__ = ["AddressErrorKind", "AddressError", "Address", "check_user", "check_domain"]

_LOCAL_PART_MAX_LENGTH = 64
_DOMAIN_MAX_LENGTH = 255
_LABEL_MAX_LENGTH = 63
_ATEXT_SPECIALS = frozenset("!#$%&'*+-/=?^_`{|}~")


class AddressErrorKind(enum.Enum):
    """Ways an e-mail address can be invalid."""

    MISSING_PARTS = "Missing domain or user"
    UNBALANCED = "Unbalanced angle bracket"
    INVALID_USER = "Invalid email user"
    INVALID_DOMAIN = "Invalid email domain"


class AddressError(ValueError):
    """An e-mail address could not be parsed or built."""

    def __init__(self, kind: AddressErrorKind) -> None:
        super().__init__(kind.value)
        self.kind = kind


def _is_atext(char: str) -> bool:
    if not char.isascii():
        return True
    return char.isalnum() or char in _ATEXT_SPECIALS


def _is_dot_atom(text: str) -> bool:
    return all(atom and all(_is_atext(c) for c in atom) for atom in text.split("."))


def _is_qtext(char: str) -> bool:
    if not char.isascii():
        return True
    code = ord(char)
    return code in (9, 32, 33) or 35 <= code <= 91 or 93 <= code <= 126


def _is_quoted_content(text: str) -> bool:
    chars = iter(text)
    for char in chars:
        if char == "\\":
            escaped = next(chars, None)
            if escaped is None:
                return False
            if escaped.isascii() and not (32 <= ord(escaped) <= 126 or escaped == "\t"):
                return False
        elif not _is_qtext(char):
            return False
    return True


def _is_valid_local_part(user: str) -> bool:
    if not user or len(user.encode("utf-8")) > _LOCAL_PART_MAX_LENGTH:
        return False
    if len(user) >= 2 and user.startswith('"') and user.endswith('"'):
        return _is_quoted_content(user[1:-1])
    return _is_dot_atom(user)


def _is_valid_label(label: str) -> bool:
    if not label or len(label) > _LABEL_MAX_LENGTH or not label.isascii():
        return False
    if label.startswith("-") or label.endswith("-"):
        return False
    return all(c.isalnum() or c == "-" for c in label)


def _is_dtext(text: str) -> bool:
    return all(33 <= ord(c) <= 90 or 94 <= ord(c) <= 126 for c in text)


def _is_valid_domain(domain: str) -> bool:
    if not domain or len(domain.encode("utf-8")) > _DOMAIN_MAX_LENGTH:
        return False
    if domain.startswith("[") and domain.endswith("]"):
        return _is_dtext(domain[1:-1])
    return all(_is_valid_label(label) for label in domain.split("."))


def _is_ip(domain: str) -> bool:
    ip = domain
    if ip.startswith("[") and ip.endswith("]"):
        ip = ip[1:-1]
    try:
        ipaddress.ip_address(ip)
    except ValueError:
        return False
    return True


def _check_domain_ascii(domain: str) -> None:
    if _is_valid_domain(domain) or _is_ip(domain):
        return
    raise AddressError(AddressErrorKind.INVALID_DOMAIN)


def check_user(user: str) -> None:
    """Raise :class:`AddressError` unless ``user`` is a valid local part."""
    if not _is_valid_local_part(user):
        raise AddressError(AddressErrorKind.INVALID_USER)


def check_domain(domain: str) -> None:
    """Raise :class:`AddressError` unless ``domain`` is a valid domain or IP."""
    try:
        _check_domain_ascii(domain)
        return
    except AddressError:
        pass
    try:
        ascii_domain = idna.encode(domain, uts46=True).decode("ascii")
    except (idna.IDNAError, UnicodeError, ValueError) as exc:
        raise AddressError(AddressErrorKind.INVALID_DOMAIN) from exc
    _check_domain_ascii(ascii_domain)


def _split_address(value: str) -> tuple[str, str]:
    user, sep, domain = value.rpartition("@")
    if not sep:
        raise AddressError(AddressErrorKind.MISSING_PARTS)
    check_user(user)
    check_domain(domain)
    return user, domain


class Address:
    """An e-mail address in canonical ``user@domain`` form."""

    __slots__ = ("_serialized", "_at_start")

    def __init__(self, user: str, domain: str) -> None:
        check_user(user)
        check_domain(domain)
        self._serialized = f"{user}@{domain}"
        self._at_start = len(user)

    @classmethod
    def parse(cls, value: str) -> Address:
        """Parse ``user@domain`` into an address."""
        user, _ = _split_address(value)
        address = cls.__new__(cls)
        address._serialized = value
        address._at_start = len(user)
        return address

    @property
    def user(self) -> str:
        """The part before the last ``@``."""
        return self._serialized[: self._at_start]

    @property
    def domain(self) -> str:
        """The part after the last ``@``."""
        return self._serialized[self._at_start + 1 :]

    def is_ascii(self) -> bool:
        """Whether the address holds only ASCII characters."""
        return self._serialized.isascii()

    def to_serializable(self) -> str:
        """The address as a plain string."""
        return self._serialized

    @classmethod
    def from_serializable(cls, data: Any) -> Address:
        """Build an address from a string or a ``{"user", "domain"}`` mapping."""
        if isinstance(data, str):
            return cls.parse(data)
        if isinstance(data, dict):
            for key in data:
                if key not in ("user", "domain"):
                    raise ValueError(
                        f"unknown field `{key}`, expected `user` or `domain`"
                    )
            for key in ("user", "domain"):
                if key not in data:
                    raise ValueError(f"missing field `{key}`")
            return cls(data["user"], data["domain"])
        raise TypeError("expected an email address string or object")

    def _key(self) -> tuple[str, int]:
        return (self._serialized, self._at_start)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Address):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: Address) -> bool:
        if not isinstance(other, Address):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        return self._serialized

    def __repr__(self) -> str:
        return f"Address({self._serialized!r})"
"""The SMTP envelope: a sender and the recipients of a message."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .address import Address
from .error import MissingToError

__all__ = ["Envelope"]


class Envelope:
    """Sender and recipient addresses; there must be at least one recipient."""

    __slots__ = ("_forward_path", "_reverse_path")

    def __init__(self, sender: Address | None, recipients: Iterable[Address]) -> None:
        forward_path = tuple(recipients)
        if not forward_path:
            raise MissingToError()
        self._forward_path = forward_path
        self._reverse_path = sender

    @property
    def to(self) -> tuple[Address, ...]:
        """The recipient addresses."""
        return self._forward_path

    @property
    def from_(self) -> Address | None:
        """The sender address, if any."""
        return self._reverse_path

    def has_non_ascii_addresses(self) -> bool:
        """Whether any address in the envelope has non-ASCII characters."""
        addresses = list(self._forward_path)
        if self._reverse_path is not None:
            addresses.append(self._reverse_path)
        return any(not address.is_ascii() for address in addresses)

    def to_dict(self) -> dict[str, Any]:
        """A plain mapping suitable for JSON."""
        return {
            "forward_path": [a.to_serializable() for a in self._forward_path],
            "reverse_path": (
                None
                if self._reverse_path is None
                else self._reverse_path.to_serializable()
            ),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Envelope:
        """Rebuild an envelope from :meth:`to_dict` output."""
        if "forward_path" not in data:
            raise ValueError("missing field `forward_path`")
        reverse = data.get("reverse_path")
        sender = None if reverse is None else Address.from_serializable(reverse)
        recipients = [Address.from_serializable(item) for item in data["forward_path"]]
        return cls(sender, recipients)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Envelope):
            return NotImplemented
        return (self._forward_path, self._reverse_path) == (
            other._forward_path,
            other._reverse_path,
        )

    def __hash__(self) -> int:
        return hash((self._forward_path, self._reverse_path))

    def __repr__(self) -> str:
        return f"Envelope(sender={self._reverse_path!r}, recipients={list(self._forward_path)!r})"
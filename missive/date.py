"""The ``Date`` header of a message."""

from __future__ import annotations

import re
from datetime import datetime, timezone

from .headers import Header, HeaderName, HeaderValue

__all__ = ["Date"]

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_LONG_WEEKDAYS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)
_MONTHS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

_TIME = r"(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
_IMF_FIXDATE = re.compile(
    r"(?P<wd>[A-Za-z]{3}), (?P<day>\d{2}) (?P<mon>[A-Za-z]{3}) (?P<year>\d{4}) "
    + _TIME
    + r" GMT",
    re.ASCII,
)
_RFC850 = re.compile(
    r"(?P<wd>[A-Za-z]+), (?P<day>\d{2})-(?P<mon>[A-Za-z]{3})-(?P<year>\d{2}) "
    + _TIME
    + r" GMT",
    re.ASCII,
)
_ASCTIME = re.compile(
    r"(?P<wd>[A-Za-z]{3}) (?P<mon>[A-Za-z]{3}) (?P<day>[ \d]\d) "
    + _TIME
    + r" (?P<year>\d{4})",
    re.ASCII,
)


def _check_range(moment: datetime) -> None:
    if moment.year < 1970:
        raise ValueError("dates before 1970 are not supported")


def _parse_http_date(text: str) -> datetime:
    for pattern, weekdays in (
        (_IMF_FIXDATE, _WEEKDAYS),
        (_RFC850, _LONG_WEEKDAYS),
        (_ASCTIME, _WEEKDAYS),
    ):
        match = pattern.fullmatch(text)
        if match is None:
            continue
        if match["mon"] not in _MONTHS or match["wd"] not in weekdays:
            break
        year = int(match["year"])
        if pattern is _RFC850:
            year += 2000 if year < 70 else 1900
        try:
            moment = datetime(
                year,
                _MONTHS.index(match["mon"]) + 1,
                int(match["day"]),
                int(match["hour"]),
                int(match["minute"]),
                int(match["second"]),
                tzinfo=timezone.utc,
            )
        except ValueError:
            break
        if weekdays[moment.weekday()] != match["wd"]:
            break
        _check_range(moment)
        return moment
    raise ValueError(f"invalid date: {text!r}")


class Date(Header):
    """The moment a message was written, to the second, in UTC."""

    __slots__ = ("_moment",)

    def __init__(self, moment: datetime) -> None:
        moment = moment.astimezone(timezone.utc).replace(microsecond=0)
        _check_range(moment)
        self._moment = moment

    @classmethod
    def now(cls) -> Date:
        """The current date."""
        return cls(datetime.now(timezone.utc))

    @property
    def moment(self) -> datetime:
        """The date as an aware UTC datetime."""
        return self._moment

    @classmethod
    def header_name(cls) -> HeaderName:
        """The name of this header."""
        return HeaderName("Date")

    @classmethod
    def parse(cls, s: str) -> Date:
        """Parse an HTTP-style date, also accepting ``+0000`` in place of ``GMT``."""
        if s.endswith("+0000"):
            s = s[: -len("+0000")] + "GMT"
        return cls(_parse_http_date(s))

    def display(self) -> HeaderValue:
        """The header as a value ready to go into a message."""
        moment = self._moment
        value = (
            f"{_WEEKDAYS[moment.weekday()]}, {moment.day:02d} "
            f"{_MONTHS[moment.month - 1]} {moment.year:04d} "
            f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d} +0000"
        )
        return HeaderValue.pre_encoded(self.header_name(), value, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._moment == other._moment

    def __hash__(self) -> int:
        return hash(self._moment)

    def __repr__(self) -> str:
        return f"Date({self._moment.isoformat()!r})"
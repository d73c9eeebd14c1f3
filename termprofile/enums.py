"""Enumerations used by terminal profiles, with their settings nicknames."""

from __future__ import annotations

import enum
from typing import TypeVar

__all__ = [
    "TitleMode",
    "ScrollbarPosition",
    "ExitAction",
    "BackgroundType",
    "EraseBinding",
    "CursorBlinkMode",
    "CursorShape",
    "enum_from_nick",
    "enum_to_nick",
]


class _NickEnum(enum.IntEnum):
    """Integer enum whose members have a lower-case, dash-separated nickname."""

    @property
    def nick(self) -> str:
        return self.name.lower().replace("_", "-")


class TitleMode(_NickEnum):
    """How a dynamically set title combines with the profile title."""

    REPLACE = 0
    BEFORE = 1
    AFTER = 2
    IGNORE = 3


class ScrollbarPosition(_NickEnum):
    """Where the scrollbar is shown."""

    LEFT = 0
    RIGHT = 1
    HIDDEN = 2


class ExitAction(_NickEnum):
    """What happens when the child process exits."""

    CLOSE = 0
    RESTART = 1
    HOLD = 2


class BackgroundType(_NickEnum):
    """Kind of terminal background."""

    SOLID = 0
    IMAGE = 1
    TRANSPARENT = 2


class EraseBinding(_NickEnum):
    """What the backspace and delete keys send."""

    AUTO = 0
    ASCII_BACKSPACE = 1
    ASCII_DELETE = 2
    DELETE_SEQUENCE = 3
    TTY = 4


class CursorBlinkMode(_NickEnum):
    """Whether the cursor blinks."""

    SYSTEM = 0
    ON = 1
    OFF = 2


class CursorShape(_NickEnum):
    """Shape of the text cursor."""

    BLOCK = 0
    IBEAM = 1
    UNDERLINE = 2


E = TypeVar("E", bound=_NickEnum)


def enum_from_nick(enum_type: type[E], nick: str) -> E:
    """Return the member of *enum_type* whose nickname is *nick*.

    Raises ValueError if no member has that nickname.
    """
    for member in enum_type:
        if member.nick == nick:
            return member
    raise ValueError(f"{nick!r} is not a valid {enum_type.__name__} nickname")


def enum_to_nick(member: _NickEnum) -> str:
    """Return the settings nickname of an enum member."""
    if not isinstance(member, _NickEnum):
        raise TypeError(f"{member!r} is not a profile enum member")
    return member.nick
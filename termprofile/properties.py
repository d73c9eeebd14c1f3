"""Descriptions of the terminal profile properties and their settings mapping."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Optional

from .color import DEFAULT_PALETTE, RGBA, fill_palette, palette_from_string, palette_to_string
from .enums import (
    BackgroundType,
    CursorBlinkMode,
    CursorShape,
    EraseBinding,
    ExitAction,
    ScrollbarPosition,
    TitleMode,
    enum_from_nick,
    enum_to_nick,
)

__all__ = [
    "PropertyKind",
    "PropertySpec",
    "PROPERTIES",
    "DEFAULT_FOREGROUND_COLOR",
    "DEFAULT_BACKGROUND_COLOR",
    "DEFAULT_FONT",
    "MAX_INT",
    "find_property",
    "find_by_key",
    "default_value",
    "validate",
    "values_equal",
    "value_from_setting",
    "value_to_setting",
]

MAX_INT = 2**31 - 1

DEFAULT_FOREGROUND_COLOR = "#000000"
DEFAULT_BACKGROUND_COLOR = "#FFFFDD"
DEFAULT_FONT = "Monospace 12"


class PropertyKind(enum.Enum):
    """The type of value a profile property holds."""

    BOOLEAN = "boolean"
    STRING = "string"
    ENUM = "enum"
    COLOR = "color"
    FONT = "font"
    DOUBLE = "double"
    INT = "int"
    PALETTE = "palette"
    OBJECT = "object"


@dataclass(frozen=True)
class PropertySpec:
    """One profile property: its name, type, default, limits and settings key."""

    name: str
    kind: PropertyKind
    default: Any = None
    key: Optional[str] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    enum_type: Optional[type] = None
    writable: bool = True
    construct_only: bool = False

    @property
    def persistent(self) -> bool:
        """Whether the property is stored under a settings key."""
        return self.key is not None and self.writable


def _boolean(name: str, default: bool) -> PropertySpec:
    return PropertySpec(name, PropertyKind.BOOLEAN, default, key=name)


def _enum(name: str, enum_type: type, default: enum.Enum) -> PropertySpec:
    return PropertySpec(name, PropertyKind.ENUM, default, key=name, enum_type=enum_type)


def _int(name: str, minimum: int, maximum: int, default: int) -> PropertySpec:
    return PropertySpec(
        name, PropertyKind.INT, default, key=name, minimum=minimum, maximum=maximum
    )


def _string(name: str, default: Optional[str], key: Optional[str] = None) -> PropertySpec:
    return PropertySpec(name, PropertyKind.STRING, default, key=key or name)


def _color(name: str, text: str) -> PropertySpec:
    parsed = RGBA.parse(text)
    color = RGBA(parsed.red, parsed.green, parsed.blue, 1.0)
    return PropertySpec(name, PropertyKind.COLOR, color, key=name)


# Ordered as the property identifiers are numbered.
PROPERTIES: tuple[PropertySpec, ...] = (
    _boolean("allow-bold", True),
    _color("background-color", DEFAULT_BACKGROUND_COLOR),
    PropertySpec(
        "background-darkness",
        PropertyKind.DOUBLE,
        0.5,
        key="background-darkness",
        minimum=0.0,
        maximum=1.0,
    ),
    PropertySpec("background-image", PropertyKind.OBJECT, None, writable=False),
    _string("background-image-file", "", key="background-image"),
    _enum("background-type", BackgroundType, BackgroundType.SOLID),
    _enum("backspace-binding", EraseBinding, EraseBinding.ASCII_DELETE),
    _color("bold-color", DEFAULT_FOREGROUND_COLOR),
    _boolean("bold-color-same-as-fg", True),
    _enum("cursor-blink-mode", CursorBlinkMode, CursorBlinkMode.SYSTEM),
    _enum("cursor-shape", CursorShape, CursorShape.BLOCK),
    _string("custom-command", ""),
    _int("default-size-columns", 1, 1024, 80),
    _int("default-size-rows", 1, 1024, 24),
    _boolean("default-show-menubar", True),
    _enum("delete-binding", EraseBinding, EraseBinding.DELETE_SEQUENCE),
    _enum("exit-action", ExitAction, ExitAction.CLOSE),
    PropertySpec("font", PropertyKind.FONT, DEFAULT_FONT, key="font"),
    _color("foreground-color", DEFAULT_FOREGROUND_COLOR),
    _boolean("login-shell", False),
    PropertySpec("name", PropertyKind.STRING, None, construct_only=True),
    PropertySpec("palette", PropertyKind.PALETTE, DEFAULT_PALETTE, key="palette"),
    _boolean("scroll-background", True),
    _int("scrollback-lines", 1, MAX_INT, 512),
    _boolean("scrollback-unlimited", False),
    _enum("scrollbar-position", ScrollbarPosition, ScrollbarPosition.RIGHT),
    _boolean("scroll-on-keystroke", True),
    _boolean("scroll-on-output", False),
    _boolean("silent-bell", False),
    _string("title", "Terminal"),
    _enum("title-mode", TitleMode, TitleMode.REPLACE),
    _boolean("use-custom-command", False),
    _boolean("use-custom-default-size", False),
    _boolean("use-skey", True),
    _boolean("use-urls", True),
    _boolean("use-system-font", True),
    _boolean("use-theme-colors", True),
    _string("visible-name", "Unnamed"),
    _string("word-chars", "-A-Za-z0-9,./?%&#:_=+@~"),
    _boolean("copy-selection", False),
)

_BY_NAME = {spec.name: spec for spec in PROPERTIES}
_BY_KEY = {spec.key: spec for spec in PROPERTIES if spec.key is not None}


def find_property(name: str) -> PropertySpec:
    """Return the spec of the property called *name*; KeyError if there is none."""
    try:
        return _BY_NAME[name]
    except KeyError:
        raise KeyError(f"no profile property named {name!r}") from None


def find_by_key(key: str) -> PropertySpec:
    """Return the spec stored under settings *key*; KeyError if there is none."""
    try:
        return _BY_KEY[key]
    except KeyError:
        raise KeyError(f"no profile property stored under key {key!r}") from None


def default_value(spec: PropertySpec) -> Any:
    """Return the default value of *spec*."""
    if spec.kind is PropertyKind.PALETTE:
        return fill_palette(DEFAULT_PALETTE)
    return spec.default


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _clamp(spec: PropertySpec, value):
    clamped = value
    if spec.minimum is not None and clamped < spec.minimum:
        clamped = type(value)(spec.minimum)
    if spec.maximum is not None and clamped > spec.maximum:
        clamped = type(value)(spec.maximum)
    return clamped, clamped != value


def validate(spec: PropertySpec, value: Any) -> tuple[Any, bool]:
    """Bring *value* into the range *spec* allows.

    Returns the value to store and whether it had to be changed.
    Raises TypeError if the value has the wrong type for the property.
    """
    kind = spec.kind
    if kind is PropertyKind.BOOLEAN:
        if not isinstance(value, bool):
            raise TypeError(f"{spec.name} takes a bool, not {type(value).__name__}")
        return value, False
    if kind in (PropertyKind.STRING, PropertyKind.FONT):
        if value is not None and not isinstance(value, str):
            raise TypeError(f"{spec.name} takes a str, not {type(value).__name__}")
        return value, False
    if kind is PropertyKind.ENUM:
        if isinstance(value, spec.enum_type):
            return value, False
        if isinstance(value, enum.Enum) or not _is_int(value):
            raise TypeError(
                f"{spec.name} takes a {spec.enum_type.__name__}, not {value!r}"
            )
        try:
            return spec.enum_type(value), False
        except ValueError:
            return spec.default, True
    if kind is PropertyKind.COLOR:
        if value is not None and not isinstance(value, RGBA):
            raise TypeError(f"{spec.name} takes an RGBA, not {type(value).__name__}")
        return value, False
    if kind is PropertyKind.DOUBLE:
        if not (_is_int(value) or isinstance(value, float)):
            raise TypeError(f"{spec.name} takes a float, not {type(value).__name__}")
        return _clamp(spec, float(value))
    if kind is PropertyKind.INT:
        if not _is_int(value):
            raise TypeError(f"{spec.name} takes an int, not {type(value).__name__}")
        return _clamp(spec, value)
    if kind is PropertyKind.PALETTE:
        if value is None:
            return None, False
        if isinstance(value, (str, bytes)):
            raise TypeError(f"{spec.name} takes a sequence of RGBA colours")
        colors = tuple(value)
        for color in colors:
            if color is not None and not isinstance(color, RGBA):
                raise TypeError(f"{spec.name} entries must be RGBA, not {color!r}")
        return colors, False
    return value, False


def _font_normal(text: str) -> str:
    return " ".join(text.split())


def values_equal(spec: PropertySpec, a: Any, b: Any) -> bool:
    """Compare two values of *spec*, colours loosely and fonts by description."""
    from .color import rgba_equal

    if a == b:
        return True
    if a is None or b is None:
        return False
    if spec.kind is PropertyKind.COLOR:
        return rgba_equal(a, b)
    if spec.kind is PropertyKind.FONT:
        return _font_normal(a) == _font_normal(b)
    if spec.kind is PropertyKind.PALETTE:
        if len(a) != len(b):
            return False
        return all(
            x is not None and y is not None and rgba_equal(x, y) for x, y in zip(a, b)
        )
    return False


def value_from_setting(spec: PropertySpec, raw: Any) -> Any:
    """Convert a raw settings value into a value of *spec*.

    Raises ValueError if *raw* does not have the stored type the property expects.
    """
    kind = spec.kind
    if kind is PropertyKind.BOOLEAN:
        if not isinstance(raw, bool):
            raise ValueError(f"setting for {spec.name} is not a boolean: {raw!r}")
        return raw
    if kind is PropertyKind.DOUBLE:
        if not (isinstance(raw, float) or _is_int(raw)):
            raise ValueError(f"setting for {spec.name} is not a double: {raw!r}")
        return float(raw)
    if kind is PropertyKind.INT:
        if not _is_int(raw):
            raise ValueError(f"setting for {spec.name} is not an integer: {raw!r}")
        return raw
    if kind is PropertyKind.OBJECT:
        raise ValueError(f"property {spec.name} cannot be read from settings")
    if not isinstance(raw, str):
        raise ValueError(f"setting for {spec.name} is not a string: {raw!r}")
    if kind is PropertyKind.ENUM:
        return enum_from_nick(spec.enum_type, raw)
    if kind is PropertyKind.COLOR:
        return RGBA.parse(raw)
    if kind is PropertyKind.PALETTE:
        return palette_from_string(raw)
    return raw


def value_to_setting(spec: PropertySpec, value: Any) -> Any:
    """Convert a value of *spec* into the form it is stored in settings.

    Raises ValueError if the value cannot be stored.
    """
    kind = spec.kind
    if kind is PropertyKind.BOOLEAN:
        return bool(value)
    if kind is PropertyKind.STRING:
        return "" if value is None else value
    if kind is PropertyKind.ENUM:
        return enum_to_nick(spec.enum_type(value))
    if kind is PropertyKind.DOUBLE:
        return float(value)
    if kind is PropertyKind.INT:
        return int(value)
    if kind is PropertyKind.OBJECT:
        raise ValueError(f"property {spec.name} cannot be stored in settings")
    if value is None:
        raise ValueError(f"property {spec.name} has no value to store")
    if kind is PropertyKind.COLOR:
        return value.to_settings_string()
    if kind is PropertyKind.PALETTE:
        return palette_to_string(value)
    return value
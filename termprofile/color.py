"""Colours and 16-entry terminal palettes."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

__all__ = [
    "RGBA",
    "PALETTE_SIZE",
    "PALETTE_TANGO",
    "PALETTE_LINUX",
    "PALETTE_XTERM",
    "PALETTE_RXVT",
    "PALETTE_SOLARIZED",
    "BUILTIN_PALETTES",
    "DEFAULT_PALETTE",
    "rgba_equal",
    "palette_equal",
    "fill_palette",
    "palette_from_string",
    "palette_to_string",
    "builtin_palette_index",
]

PALETTE_SIZE = 16

PALETTE_TANGO = 0
PALETTE_LINUX = 1
PALETTE_XTERM = 2
PALETTE_RXVT = 3
PALETTE_SOLARIZED = 4

_HEX_RE = re.compile(r"#([0-9A-Fa-f]+)")
_FUNC_RE = re.compile(r"(rgba?)\(\s*([^)]*)\)")

_NAMED = {
    "black": (0, 0, 0),
    "white": (255, 255, 255),
    "red": (255, 0, 0),
    "green": (0, 255, 0),
    "blue": (0, 0, 255),
    "yellow": (255, 255, 0),
    "cyan": (0, 255, 255),
    "magenta": (255, 0, 255),
}


def _clamp(value: float) -> float:
    return min(1.0, max(0.0, value))


def _parse_component(text: str) -> float:
    text = text.strip()
    if text.endswith("%"):
        return _clamp(float(text[:-1]) / 100.0)
    return _clamp(float(text) / 255.0)


@dataclass(frozen=True)
class RGBA:
    """A colour with components in the range 0.0 to 1.0."""

    red: float
    green: float
    blue: float
    alpha: float = 1.0

    @classmethod
    def parse(cls, text: str) -> "RGBA":
        """Parse ``#rgb``-style hex, ``rgb()``/``rgba()`` or a basic colour name.

        Raises ValueError if the text is not a colour.
        """
        if not isinstance(text, str):
            raise ValueError(f"cannot parse colour from {text!r}")
        spec = text.strip()

        match = _HEX_RE.fullmatch(spec)
        if match:
            digits = match.group(1)
            n = len(digits)
            if n in (3, 6, 9, 12):
                width, count = n // 3, 3
            elif n in (4, 8, 16):
                width, count = n // 4, 4
            else:
                raise ValueError(f"cannot parse colour from {text!r}")
            scale = 16**width - 1
            parts = [
                int(digits[k * width:(k + 1) * width], 16) / scale
                for k in range(count)
            ]
            if count == 3:
                parts.append(1.0)
            return cls(*parts)

        match = _FUNC_RE.fullmatch(spec)
        if match:
            func, body = match.groups()
            args = [a for a in body.split(",")]
            try:
                if func == "rgb" and len(args) == 3:
                    return cls(*(_parse_component(a) for a in args))
                if func == "rgba" and len(args) == 4:
                    r, g, b = (_parse_component(a) for a in args[:3])
                    return cls(r, g, b, _clamp(float(args[3].strip())))
            except ValueError:
                pass
            raise ValueError(f"cannot parse colour from {text!r}")

        named = _NAMED.get(spec.lower())
        if named is not None:
            return cls(*(c / 255.0 for c in named))
        raise ValueError(f"cannot parse colour from {text!r}")

    def to_settings_string(self) -> str:
        """Format as ``#RRRRGGGGBBBB`` with 16 bits per channel, alpha dropped."""
        r, g, b = (int(c * 65535) for c in (self.red, self.green, self.blue))
        return f"#{r:04X}{g:04X}{b:04X}"


def rgba_equal(a: RGBA, b: RGBA) -> bool:
    """Compare two colours loosely: squared distance below 1e-4."""
    dr = a.red - b.red
    dg = a.green - b.green
    db = a.blue - b.blue
    da = a.alpha - b.alpha
    return (dr * dr + dg * dg + db * db + da * da) < 1e-4


def palette_equal(a: Sequence[RGBA], b: Sequence[RGBA]) -> bool:
    """Compare the first PALETTE_SIZE entries of two palettes."""
    if len(a) < PALETTE_SIZE or len(b) < PALETTE_SIZE:
        return False
    return all(rgba_equal(x, y) for x, y in zip(a[:PALETTE_SIZE], b[:PALETTE_SIZE]))


def _palette(*rows: tuple) -> tuple[RGBA, ...]:
    return tuple(RGBA(*row) for row in rows)


BUILTIN_PALETTES: tuple[tuple[RGBA, ...], ...] = (
    _palette(  # Tango
        (0, 0, 0, 1),
        (0.8, 0, 0, 1),
        (0.305882, 0.603922, 0.0235294, 1),
        (0.768627, 0.627451, 0, 1),
        (0.203922, 0.396078, 0.643137, 1),
        (0.458824, 0.313725, 0.482353, 1),
        (0.0235294, 0.596078, 0.603922, 1),
        (0.827451, 0.843137, 0.811765, 1),
        (0.333333, 0.341176, 0.32549, 1),
        (0.937255, 0.160784, 0.160784, 1),
        (0.541176, 0.886275, 0.203922, 1),
        (0.988235, 0.913725, 0.309804, 1),
        (0.447059, 0.623529, 0.811765, 1),
        (0.678431, 0.498039, 0.658824, 1),
        (0.203922, 0.886275, 0.886275, 1),
        (0.933333, 0.933333, 0.92549, 1),
    ),
    _palette(  # Linux
        (0, 0, 0, 1),
        (0.666667, 0, 0, 1),
        (0, 0.666667, 0, 1),
        (0.666667, 0.333333, 0, 1),
        (0, 0, 0.666667, 1),
        (0.666667, 0, 0.666667, 1),
        (0, 0.666667, 0.666667, 1),
        (0.666667, 0.666667, 0.666667, 1),
        (0.333333, 0.333333, 0.333333, 1),
        (1, 0.333333, 0.333333, 1),
        (0.333333, 1, 0.333333, 1),
        (1, 1, 0.333333, 1),
        (0.333333, 0.333333, 1, 1),
        (1, 0.333333, 1, 1),
        (0.333333, 1, 1, 1),
        (1, 1, 1, 1),
    ),
    _palette(  # XTerm
        (0, 0, 0, 1),
        (0.803922, 0, 0, 1),
        (0, 0.803922, 0, 1),
        (0.803922, 0.803922, 0, 1),
        (0.117647, 0.564706, 1, 1),
        (0.803922, 0, 0.803922, 1),
        (0, 0.803922, 0.803922, 1),
        (0.898039, 0.898039, 0.898039, 1),
        (0.298039, 0.298039, 0.298039, 1),
        (1, 0, 0, 1),
        (0, 1, 0, 1),
        (1, 1, 0, 1),
        (0.27451, 0.509804, 0.705882, 1),
        (1, 0, 1, 1),
        (0, 1, 1, 1),
        (1, 1, 1, 1),
    ),
    _palette(  # RXVT
        (0, 0, 0, 1),
        (0.803922, 0, 0, 1),
        (0, 0.803922, 0, 1),
        (0.803922, 0.803922, 0, 1),
        (0, 0, 0.803922, 1),
        (0.803922, 0, 0.803922, 1),
        (0, 0.803922, 0.803922, 1),
        (0.980392, 0.921569, 0.843137, 1),
        (0.25098, 0.25098, 0.25098, 1),
        (1, 0, 0, 1),
        (0, 1, 0, 1),
        (1, 1, 0, 1),
        (0, 0, 1, 1),
        (1, 0, 1, 1),
        (0, 1, 1, 1),
        (1, 1, 1, 1),
    ),
    _palette(  # Solarized
        (0.02745, 0.211764, 0.258823, 1),
        (0.862745, 0.196078, 0.184313, 1),
        (0.521568, 0.6, 0, 1),
        (0.709803, 0.537254, 0, 1),
        (0.149019, 0.545098, 0.823529, 1),
        (0.82745, 0.211764, 0.509803, 1),
        (0.164705, 0.631372, 0.596078, 1),
        (0.933333, 0.909803, 0.835294, 1),
        (0, 0.168627, 0.211764, 1),
        (0.796078, 0.294117, 0.086274, 1),
        (0.345098, 0.431372, 0.458823, 1),
        (0.396078, 0.482352, 0.513725, 1),
        (0.513725, 0.580392, 0.588235, 1),
        (0.423529, 0.443137, 0.768627, 1),
        (0.57647, 0.631372, 0.631372, 1),
        (0.992156, 0.964705, 0.890196, 1),
    ),
)

DEFAULT_PALETTE: tuple[RGBA, ...] = BUILTIN_PALETTES[PALETTE_TANGO]


def fill_palette(colors: Iterable[RGBA]) -> tuple[RGBA, ...]:
    """Return *colors* padded with the default palette up to PALETTE_SIZE entries."""
    given = tuple(colors)
    return given + DEFAULT_PALETTE[len(given):]


def palette_from_string(text: str) -> tuple[RGBA, ...]:
    """Parse a colon-separated palette; unparsable entries become transparent black."""
    if not text:
        return fill_palette(())
    colors = []
    for part in text.split(":"):
        try:
            colors.append(RGBA.parse(part))
        except ValueError:
            colors.append(RGBA(0.0, 0.0, 0.0, 0.0))
    return fill_palette(colors)


def palette_to_string(colors: Iterable[Optional[RGBA]]) -> str:
    """Format a palette as colon-separated ``#RRRRGGGGBBBB`` entries."""
    return ":".join(
        "" if color is None else color.to_settings_string() for color in colors
    )


def builtin_palette_index(colors: Sequence[RGBA]) -> Optional[int]:
    """Return the index of the built-in palette matching *colors*, or None."""
    if len(colors) < PALETTE_SIZE:
        return None
    for index, builtin in enumerate(BUILTIN_PALETTES):
        if palette_equal(colors, builtin):
            return index
    return None
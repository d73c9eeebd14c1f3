import pytest

from termprofile.color import (
    BUILTIN_PALETTES,
    DEFAULT_PALETTE,
    PALETTE_SIZE,
    PALETTE_TANGO,
    PALETTE_SOLARIZED,
    RGBA,
    builtin_palette_index,
    fill_palette,
    palette_equal,
    palette_from_string,
    palette_to_string,
    rgba_equal,
)


def test_parse_black_hex():
    assert RGBA.parse("#000000") == RGBA(0.0, 0.0, 0.0, 1.0)


def test_short_and_long_hex_agree():
    assert rgba_equal(RGBA.parse("#fff"), RGBA.parse("#ffffff"))
    assert rgba_equal(RGBA.parse("#abc"), RGBA.parse("#aabbcc"))
    assert rgba_equal(RGBA.parse("#FFFFDD"), RGBA.parse("#FFFFFFFFDDDD"))


def test_parse_rgb_function_matches_hex():
    assert rgba_equal(RGBA.parse("rgb(255,0,0)"), RGBA.parse("#ff0000"))
    assert rgba_equal(RGBA.parse("red"), RGBA.parse("#ff0000"))


def test_parse_rgba_function_keeps_alpha():
    color = RGBA.parse("rgba(0,0,255,0.5)")
    assert color.alpha == pytest.approx(0.5)
    assert color.blue == pytest.approx(1.0)


@pytest.mark.parametrize("bad", ["", "#12", "#12345", "nonsense", "rgb(1,2)", "#ggg"])
def test_parse_invalid_raises(bad):
    with pytest.raises(ValueError):
        RGBA.parse(bad)


def test_white_settings_string():
    assert RGBA(1.0, 1.0, 1.0).to_settings_string() == "#FFFFFFFFFFFF"


@pytest.mark.parametrize("palette", BUILTIN_PALETTES)
def test_settings_string_round_trip(palette):
    for color in palette:
        assert rgba_equal(RGBA.parse(color.to_settings_string()), color)


def test_rgba_equal_tolerance():
    base = RGBA(0.5, 0.5, 0.5)
    assert rgba_equal(base, RGBA(0.505, 0.505, 0.505))
    assert not rgba_equal(base, RGBA(0.51, 0.51, 0.51))
    assert not rgba_equal(base, RGBA(0.5, 0.5, 0.5, 0.0))


def test_fill_palette_pads_with_default():
    red = RGBA(1.0, 0.0, 0.0)
    filled = fill_palette([red])
    assert len(filled) == PALETTE_SIZE
    assert filled[0] == red
    assert filled[1:] == DEFAULT_PALETTE[1:]


def test_fill_palette_keeps_longer_palettes():
    colors = list(BUILTIN_PALETTES[1]) + [RGBA(0.1, 0.2, 0.3)]
    assert fill_palette(colors) == tuple(colors)


@pytest.mark.parametrize("palette", BUILTIN_PALETTES)
def test_palette_string_round_trip(palette):
    text = palette_to_string(palette)
    assert text.count(":") == PALETTE_SIZE - 1
    assert palette_equal(palette_from_string(text), palette)


def test_empty_string_gives_default_palette():
    assert palette_from_string("") == DEFAULT_PALETTE


def test_invalid_entry_becomes_transparent_black():
    palette = palette_from_string("bogus:#ff0000")
    assert palette[0] == RGBA(0.0, 0.0, 0.0, 0.0)
    assert rgba_equal(palette[1], RGBA.parse("#ff0000"))
    assert palette[2:] == DEFAULT_PALETTE[2:]


def test_palette_to_string_skips_missing_entries():
    assert palette_to_string([None, RGBA(1.0, 1.0, 1.0)]).startswith(":#")


@pytest.mark.parametrize("index", range(len(BUILTIN_PALETTES)))
def test_builtin_palette_index_found(index):
    assert builtin_palette_index(BUILTIN_PALETTES[index]) == index


def test_builtin_palette_index_after_round_trip():
    palette = palette_from_string(palette_to_string(BUILTIN_PALETTES[PALETTE_SOLARIZED]))
    assert builtin_palette_index(palette) == PALETTE_SOLARIZED


def test_builtin_palette_index_modified_palette():
    palette = list(BUILTIN_PALETTES[PALETTE_TANGO])
    palette[5] = RGBA(0.9, 0.9, 0.1)
    assert builtin_palette_index(palette) is None


def test_builtin_palette_index_short_palette():
    assert builtin_palette_index(BUILTIN_PALETTES[PALETTE_TANGO][:8]) is None


def test_palette_equal_requires_full_palettes():
    short = BUILTIN_PALETTES[0][:4]
    assert not palette_equal(short, short)
    assert palette_equal(BUILTIN_PALETTES[0], BUILTIN_PALETTES[0])
    assert not palette_equal(BUILTIN_PALETTES[0], BUILTIN_PALETTES[1])
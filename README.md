# termprofile

A model of terminal emulator profiles. It provides typed profile properties
with defaults and validation, the built-in 16-colour palettes (Tango, Linux,
XTerm, RXVT, Solarized), and a key/value settings store that profiles load
from, follow, and save back to.

## Installation

```
pip install termprofile
```

The package has no runtime dependencies.

## Modules

- `termprofile.enums`: the enumerations a profile uses (`TitleMode`,
  `ScrollbarPosition`, `ExitAction`, `BackgroundType`, `EraseBinding`,
  `CursorBlinkMode`, `CursorShape`). Each member has a settings nickname, such
  as `"ascii-delete"` for `EraseBinding.ASCII_DELETE`; `enum_from_nick` and
  `enum_to_nick` convert between the two, raising `ValueError` for an unknown
  nickname.
- `termprofile.color`: the frozen `RGBA` dataclass with `RGBA.parse` (hex
  forms such as `#rgb`, `#rrggbb`, `#rrrrggggbbbb`, `rgb()`/`rgba()` and a
  handful of basic colour names) and `RGBA.to_settings_string`
  (`#RRRRGGGGBBBB`). Also `rgba_equal` (loose comparison: squared distance
  below 1e-4), `palette_equal`, `fill_palette`, `palette_from_string`,
  `palette_to_string`, `builtin_palette_index`, and the `BUILTIN_PALETTES`
  table with `DEFAULT_PALETTE` (Tango).
- `termprofile.settings`: `SettingsStore`, an in-memory store of `bool`,
  `int`, `float` and `str` values with per-key write locks (`is_writable`,
  `set_writable`), change subscriptions (`subscribe`, `unsubscribe`), JSON
  persistence (`SettingsStore.load`, `save`) and batched writes through a
  `Changeset`. Writing a locked key raises `PermissionError`; a `Changeset`
  used as a context manager applies on a clean exit and discards its writes if
  an exception escapes.
- `termprofile.properties`: the property table `PROPERTIES` of `PropertySpec`
  entries (kind, default, limits, settings key), lookups `find_property` and
  `find_by_key`, and `default_value`, `validate` (clamps numbers into range),
  `values_equal`, `value_from_setting` and `value_to_setting`.
- `termprofile.profile`: `Profile`, which keeps a profile's property values in
  step with a `SettingsStore`.

## Example

```python
from termprofile.color import RGBA
from termprofile.profile import Profile
from termprofile.settings import SettingsStore

store = SettingsStore({})
profile = Profile("default", store)

profile.get("font")                 # "Monospace 12"
profile.set("scrollback-lines", 2000)
profile.set_palette_builtin(2)      # XTerm palette
profile.palette_builtin_index()     # 2

profile.modify_palette_entry(0, RGBA.parse("#101010"))
profile.save()                      # writes changed keys, e.g. "default/palette"

copy = profile.clone("My copy", existing_names={"default"})
copy.name                           # "profile0"
copy.get("visible-name")            # "My copy"
```

A profile stores each property under `<profile name>/<key>` in the store.
When the store changes, the profile picks up the new value; when a key is
marked not writable, `Profile.is_locked` reports the property as locked and
`save` skips it. `connect_notify` and `connect_forgotten` register callbacks
for property changes and for `forget`. `close` (also run on leaving a `with`
block) stops following the store, saves pending changes and forgets the
profile.

## What it does not do

This package holds profile data only. It does not draw a terminal, run a
shell, or provide a profile editor or any other user interface. Fonts are
kept as description strings and not resolved to real fonts, and
`Profile.background_image` returns the raw bytes of the image file rather
than a decoded image. Changes are written to the store only when `save` or
`close` is called; nothing is saved in the background.

## Running the tests

```
pip install -e .[test]
pytest
```
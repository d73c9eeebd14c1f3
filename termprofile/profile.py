"""A terminal profile: typed properties kept in step with a settings store."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Iterable, Optional

from .color import (
    BUILTIN_PALETTES,
    RGBA,
    builtin_palette_index,
    fill_palette,
    rgba_equal,
)
from .properties import (
    PROPERTIES,
    PropertyKind,
    PropertySpec,
    default_value,
    find_by_key,
    find_property,
    validate,
    value_from_setting,
    value_to_setting,
    values_equal,
)
from .settings import SettingsStore

__all__ = ["Profile"]

NotifyCallback = Callable[["Profile", str], None]
ForgottenCallback = Callable[["Profile"], None]

_BACKGROUND_IMAGE = "background-image"
_BACKGROUND_IMAGE_FILE = "background-image-file"
_PALETTE = "palette"
_NAME = "name"
_VISIBLE_NAME = "visible-name"


def _prop_name(name: str) -> str:
    return name.replace("_", "-")


class Profile:
    """A named set of terminal settings.

    Values are read from *store* under ``<name>/<key>`` keys and follow
    changes made to the store.  Changes made through :meth:`set` are marked
    dirty and written back by :meth:`save`.
    """

    def __init__(self, name: str, store: SettingsStore, **kwargs: Any) -> None:
        if not isinstance(name, str) or not name:
            raise ValueError("a profile needs a non-empty name")
        self._store = store
        self._values: dict[str, Any] = {spec.name: default_value(spec) for spec in PROPERTIES}
        self._values[_NAME] = name
        self._locked: dict[str, bool] = {}
        self._dirty: list[str] = []
        self._notify_callbacks: list[NotifyCallback] = []
        self._forgotten_callbacks: list[ForgottenCallback] = []
        self._settings_notification: Optional[str] = None
        self._background_load_failed = False
        self._forgotten = False
        self._closed = False

        construct: dict[str, Any] = {}
        for raw_name, value in kwargs.items():
            prop = _prop_name(raw_name)
            try:
                spec = find_property(prop)
            except KeyError:
                raise TypeError(f"unknown profile property {raw_name!r}") from None
            if not spec.writable or spec.construct_only:
                raise TypeError(f"property {prop!r} cannot be given here")
            construct[prop] = value
        for prop, value in construct.items():
            self.set(prop, value)

        self._store.subscribe(self._on_store_changed)
        for spec in PROPERTIES:
            if spec.persistent and not spec.construct_only and spec.name not in construct:
                self._load_key(spec.key)

    @property
    def name(self) -> str:
        """The profile's identifier, used as its settings path."""
        return self._values[_NAME]

    def __enter__(self) -> "Profile":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # settings side

    def _full_key(self, key: str) -> str:
        return f"{self.name}/{key}"

    def _on_store_changed(self, full_key: str) -> None:
        prefix = f"{self.name}/"
        if full_key.startswith(prefix):
            self._load_key(full_key[len(prefix):])

    def _load_key(self, key: str) -> None:
        try:
            spec = find_by_key(key)
        except KeyError:
            return  # unknown keys are left alone
        full_key = self._full_key(key)
        self._locked[spec.name] = not self._store.is_writable(full_key)
        raw = self._store.get(full_key)
        if raw is None:
            return
        try:
            value = value_from_setting(spec, raw)
        except ValueError:
            return
        value, force_set = validate(spec, value)
        if force_set or not values_equal(spec, value, self._values[spec.name]):
            self._settings_notification = spec.name
            try:
                self._store_value(spec, value)
            finally:
                self._settings_notification = None

    # property access

    def get(self, prop_name: str) -> Any:
        """Return the value of *prop_name*; KeyError if there is no such property."""
        spec = find_property(prop_name)
        if spec.name == _BACKGROUND_IMAGE:
            self._ensure_background_image()
        return self._values[spec.name]

    def set(self, prop_name: str, value: Any) -> None:
        """Set *prop_name* to *value* and notify listeners.

        Raises KeyError for an unknown property, AttributeError for a
        read-only one and TypeError for a value of the wrong type.
        """
        spec = find_property(prop_name)
        if not spec.writable or (spec.construct_only and _NAME in self._values and hasattr(self, "_closed")):
            raise AttributeError(f"property {spec.name!r} is read-only")
        value, _ = validate(spec, value)
        self._store_value(spec, value)

    def _store_value(self, spec: PropertySpec, value: Any) -> None:
        self._values[spec.name] = value
        if spec.name == _BACKGROUND_IMAGE_FILE:
            self._values[_BACKGROUND_IMAGE] = None
            self._background_load_failed = False
            self._notify(find_property(_BACKGROUND_IMAGE))
        self._notify(spec)

    def _notify(self, spec: PropertySpec) -> None:
        for callback in list(self._notify_callbacks):
            callback(self, spec.name)
        if spec.persistent and spec.name != self._settings_notification:
            if spec.name not in self._dirty:
                self._dirty.insert(0, spec.name)

    def is_locked(self, prop_name: str) -> bool:
        """Return whether the settings key behind *prop_name* is not writable."""
        spec = find_property(prop_name)
        return self._locked.get(spec.name, False)

    def reset(self, prop_name: str) -> None:
        """Set *prop_name* back to its default; read-only properties are left as they are."""
        spec = find_property(prop_name)
        if not spec.writable or spec.construct_only:
            return
        self._store_value(spec, default_value(spec))

    # palette

    def palette(self) -> Optional[tuple]:
        """Return the palette colours, or None if no palette is set."""
        value = self._values[_PALETTE]
        if value is None:
            return None
        return tuple(value)

    def palette_builtin_index(self) -> Optional[int]:
        """Return the index of the built-in palette in use, or None."""
        colors = self.palette()
        if colors is None or any(color is None for color in colors):
            return None
        if len(colors) != len(BUILTIN_PALETTES[0]):
            return None
        return builtin_palette_index(colors)

    def set_palette_builtin(self, n: int) -> None:
        """Switch to built-in palette *n*; ValueError if there is no such palette."""
        if not isinstance(n, int) or not 0 <= n < len(BUILTIN_PALETTES):
            raise ValueError(f"no built-in palette {n!r}")
        self.set(_PALETTE, fill_palette(BUILTIN_PALETTES[n]))

    def modify_palette_entry(self, i: int, color: RGBA) -> bool:
        """Replace palette entry *i*; return False if there is no such entry."""
        colors = self._values[_PALETTE]
        if colors is None or i < 0 or i >= len(colors):
            return False
        old = colors[i]
        if old is None or not rgba_equal(old, color):
            updated = list(colors)
            updated[i] = color
            self._values[_PALETTE] = tuple(updated)
            self._notify(find_property(_PALETTE))
        return True

    # background image

    def _ensure_background_image(self) -> None:
        if self._values[_BACKGROUND_IMAGE] is not None or self._background_load_failed:
            return
        path = self._values[_BACKGROUND_IMAGE_FILE]
        if not path:
            self._background_load_failed = True
            return
        try:
            data = Path(path).read_bytes()
        except OSError:
            self._background_load_failed = True
            return
        self._values[_BACKGROUND_IMAGE] = data

    def background_image(self) -> Optional[bytes]:
        """Return the contents of the background image file, or None if it cannot be read."""
        self._ensure_background_image()
        return self._values[_BACKGROUND_IMAGE]

    # signals and life cycle

    def connect_notify(self, callback: NotifyCallback) -> None:
        """Call *callback(profile, prop_name)* whenever a property is set."""
        self._notify_callbacks.append(callback)

    def connect_forgotten(self, callback: ForgottenCallback) -> None:
        """Call *callback(profile)* when the profile is forgotten."""
        self._forgotten_callbacks.append(callback)

    def forget(self) -> None:
        """Mark the profile as forgotten, telling listeners the first time only."""
        if self._forgotten:
            return
        self._forgotten = True
        for callback in list(self._forgotten_callbacks):
            callback(self)

    def forgotten(self) -> bool:
        """Return whether the profile has been forgotten."""
        return self._forgotten

    def dirty(self) -> list:
        """Return the names of properties changed since the last save."""
        return list(self._dirty)

    def save(self) -> None:
        """Write the changed properties to the store; locked keys are skipped."""
        names, self._dirty = self._dirty, []
        with self._store.changeset() as changes:
            for prop in names:
                spec = find_property(prop)
                if not spec.persistent:
                    continue
                full_key = self._full_key(spec.key)
                if not self._store.is_writable(full_key):
                    continue
                try:
                    raw = value_to_setting(spec, self._values[spec.name])
                except ValueError:
                    continue
                changes.set(full_key, raw)

    def close(self) -> None:
        """Stop following the store, save pending changes and forget the profile."""
        if self._closed:
            return
        self._closed = True
        self._store.unsubscribe(self._on_store_changed)
        if self._dirty:
            self.save()
        self.forget()

    def clone(self, visible_name: str, existing_names: Iterable[str]) -> "Profile":
        """Return a copy under the first free ``profileN`` name, saved to the store."""
        taken = set(existing_names)
        number = 0
        while f"profile{number}" in taken:
            number += 1
        new_name = f"profile{number}"

        params: dict[str, Any] = {}
        for spec in PROPERTIES:
            if not spec.writable or spec.construct_only:
                continue
            if spec.name == _VISIBLE_NAME:
                params[spec.name] = visible_name
            else:
                params[spec.name] = self.get(spec.name)

        new_profile = Profile(new_name, self._store, **params)
        new_profile._dirty = [spec.name for spec in reversed(PROPERTIES) if spec.persistent]
        new_profile.save()
        return new_profile
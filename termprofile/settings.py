"""A small key/value settings store with change notification and changesets."""

from __future__ import annotations

import json
import os
from typing import Callable, Iterator, Optional, Union

__all__ = ["SettingValue", "SettingsStore", "Changeset"]

SettingValue = Union[bool, int, float, str]
Callback = Callable[[str], None]

_ALLOWED_TYPES = (bool, int, float, str)


def _check_value(key: str, value: object) -> SettingValue:
    if not isinstance(key, str) or not key:
        raise TypeError(f"setting key must be a non-empty string, not {key!r}")
    if not isinstance(value, _ALLOWED_TYPES):
        raise TypeError(
            f"setting {key!r} must be a bool, int, float or str, not {type(value).__name__}"
        )
    return value


def _same(a: object, b: object) -> bool:
    # True == 1 in Python; a change of type is still a change.
    return type(a) is type(b) and a == b


class SettingsStore:
    """Typed key/value settings with per-key write locks and subscribers.

    Subscribers are called with the key whenever its value or its
    writability changes.
    """

    def __init__(self, values: Optional[dict] = None) -> None:
        self._values: dict[str, SettingValue] = {}
        self._locked: set[str] = set()
        self._subscribers: list[Callback] = []
        for key, value in (values or {}).items():
            self._values[key] = _check_value(key, value)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def get(self, key: str) -> Optional[SettingValue]:
        """Return the value stored under *key*, or None if there is none."""
        return self._values.get(key)

    def set(self, key: str, value: SettingValue) -> None:
        """Store *value* under *key* and notify subscribers if it changed.

        Raises PermissionError if the key is locked.
        """
        self._write({key: value})

    def keys(self) -> list[str]:
        """Return the stored keys in sorted order."""
        return sorted(self._values)

    def is_writable(self, key: str) -> bool:
        """Return whether *key* may be written."""
        return key not in self._locked

    def set_writable(self, key: str, writable: bool) -> None:
        """Lock or unlock *key*; subscribers are told if that changes anything."""
        if writable == self.is_writable(key):
            return
        if writable:
            self._locked.discard(key)
        else:
            self._locked.add(key)
        self._notify([key])

    def subscribe(self, callback: Callback) -> None:
        """Call *callback(key)* on every change."""
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Callback) -> None:
        """Stop calling *callback*; raises ValueError if it was not subscribed."""
        try:
            self._subscribers.remove(callback)
        except ValueError:
            raise ValueError("callback is not subscribed") from None

    def changeset(self) -> "Changeset":
        """Return a changeset whose writes reach the store only when applied."""
        return Changeset(self)

    @classmethod
    def load(cls, path: Union[str, os.PathLike]) -> "SettingsStore":
        """Read a store saved with :meth:`save`.

        Raises ValueError if the file does not hold a valid store.
        """
        with open(path, encoding="utf-8") as handle:
            try:
                data = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ValueError(f"invalid settings file: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError("settings file must hold a JSON object")
        values = data.get("values", {})
        locked = data.get("locked", [])
        if not isinstance(values, dict) or not isinstance(locked, list):
            raise ValueError("settings file has a malformed 'values' or 'locked' entry")
        try:
            store = cls(values)
        except TypeError as exc:
            raise ValueError(str(exc)) from exc
        for key in locked:
            if not isinstance(key, str):
                raise ValueError(f"locked key must be a string, not {key!r}")
            store._locked.add(key)
        return store

    def save(self, path: Union[str, os.PathLike]) -> None:
        """Write the values and locked keys to *path* as JSON."""
        data = {
            "values": {key: self._values[key] for key in self.keys()},
            "locked": sorted(self._locked),
        }
        tmp = f"{os.fspath(path)}.tmp"
        with open(tmp, "w", encoding="utf-8") as handle:
            json.dump(data, handle, indent=2, sort_keys=True)
            handle.write("\n")
        os.replace(tmp, path)

    def _write(self, changes: dict) -> None:
        checked = {key: _check_value(key, value) for key, value in changes.items()}
        locked = [key for key in checked if not self.is_writable(key)]
        if locked:
            raise PermissionError(f"setting {locked[0]!r} is not writable")
        changed = []
        for key, value in checked.items():
            if key in self._values and _same(self._values[key], value):
                continue
            self._values[key] = value
            changed.append(key)
        self._notify(changed)

    def _notify(self, keys: list) -> None:
        subscribers = list(self._subscribers)
        for key in keys:
            for callback in subscribers:
                callback(key)


class Changeset:
    """Writes collected for a store and applied together.

    Used as a context manager it applies on a clean exit and discards
    the pending writes when an exception escapes.
    """

    def __init__(self, store: SettingsStore) -> None:
        self._store = store
        self._pending: dict[str, SettingValue] = {}

    @property
    def pending(self) -> dict:
        """A copy of the writes not yet applied."""
        return dict(self._pending)

    def set(self, key: str, value: SettingValue) -> None:
        """Record a write of *value* to *key*."""
        self._pending[key] = _check_value(key, value)

    def apply(self) -> None:
        """Write every pending value to the store, then notify once per changed key.

        Raises PermissionError, writing nothing, if any key is locked.
        """
        pending, self._pending = self._pending, {}
        try:
            self._store._write(pending)
        except PermissionError:
            self._pending = pending
            raise

    def __enter__(self) -> "Changeset":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.apply()
        else:
            self._pending.clear()
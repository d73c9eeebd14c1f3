import json

import pytest

from termprofile.settings import Changeset, SettingsStore


@pytest.fixture
def store():
    return SettingsStore({"font": "Monospace 12", "allow-bold": True, "scrollback-lines": 512})


def test_get_returns_stored_values(store):
    assert store.get("font") == "Monospace 12"
    assert store.get("allow-bold") is True
    assert store.get("scrollback-lines") == 512


def test_get_missing_key_returns_none(store):
    assert store.get("no-such-key") is None


def test_keys_sorted(store):
    assert store.keys() == ["allow-bold", "font", "scrollback-lines"]


def test_set_updates_and_notifies(store):
    seen = []
    store.subscribe(seen.append)
    store.set("font", "Sans 10")
    assert store.get("font") == "Sans 10"
    assert seen == ["font"]


def test_set_same_value_does_not_notify(store):
    seen = []
    store.subscribe(seen.append)
    store.set("font", "Monospace 12")
    assert seen == []


def test_set_change_of_type_notifies(store):
    seen = []
    store.subscribe(seen.append)
    store.set("allow-bold", 1)
    assert seen == ["allow-bold"]
    assert store.get("allow-bold") == 1


def test_set_rejects_unsupported_type(store):
    with pytest.raises(TypeError):
        store.set("palette", ["a", "b"])


def test_constructor_rejects_unsupported_type():
    with pytest.raises(TypeError):
        SettingsStore({"x": None})


def test_locked_key_cannot_be_written(store):
    store.set_writable("font", False)
    assert store.is_writable("font") is False
    with pytest.raises(PermissionError):
        store.set("font", "Sans 10")
    assert store.get("font") == "Monospace 12"


def test_set_writable_notifies_only_on_change(store):
    seen = []
    store.subscribe(seen.append)
    store.set_writable("font", True)
    store.set_writable("font", False)
    store.set_writable("font", False)
    store.set_writable("font", True)
    assert seen == ["font", "font"]
    assert store.is_writable("font") is True


def test_unsubscribe_stops_notifications(store):
    seen = []
    store.subscribe(seen.append)
    store.unsubscribe(seen.append)
    store.set("font", "Sans 10")
    assert seen == []


def test_unsubscribe_unknown_raises(store):
    with pytest.raises(ValueError):
        store.unsubscribe(lambda key: None)


def test_changeset_delays_writes(store):
    seen = []
    store.subscribe(seen.append)
    changes = store.changeset()
    changes.set("font", "Sans 10")
    changes.set("scrollback-lines", 1000)
    assert store.get("font") == "Monospace 12"
    assert seen == []
    changes.apply()
    assert store.get("font") == "Sans 10"
    assert store.get("scrollback-lines") == 1000
    assert seen == ["font", "scrollback-lines"]
    assert changes.pending == {}


def test_changeset_context_manager_applies(store):
    with store.changeset() as changes:
        assert isinstance(changes, Changeset)
        changes.set("title", "Terminal")
    assert store.get("title") == "Terminal"


def test_changeset_context_manager_discards_on_error(store):
    with pytest.raises(RuntimeError):
        with store.changeset() as changes:
            changes.set("font", "Sans 10")
            raise RuntimeError("boom")
    assert store.get("font") == "Monospace 12"


def test_changeset_with_locked_key_writes_nothing(store):
    store.set_writable("font", False)
    changes = store.changeset()
    changes.set("allow-bold", False)
    changes.set("font", "Sans 10")
    with pytest.raises(PermissionError):
        changes.apply()
    assert store.get("allow-bold") is True
    assert changes.pending == {"allow-bold": False, "font": "Sans 10"}


def test_save_and_load_round_trip(store, tmp_path):
    store.set("background-darkness", 0.5)
    store.set_writable("font", False)
    path = tmp_path / "profile.json"
    store.save(path)
    loaded = SettingsStore.load(path)
    assert loaded.keys() == store.keys()
    for key in store.keys():
        assert loaded.get(key) == store.get(key)
    assert loaded.is_writable("font") is False
    assert loaded.is_writable("allow-bold") is True


def test_load_rejects_non_object(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([1, 2, 3]), encoding="utf-8")
    with pytest.raises(ValueError):
        SettingsStore.load(path)


def test_load_rejects_invalid_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        SettingsStore.load(path)


def test_load_rejects_bad_value(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"values": {"x": [1]}}), encoding="utf-8")
    with pytest.raises(ValueError):
        SettingsStore.load(path)
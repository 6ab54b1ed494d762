import pickle

import pytest

from bootwire.config_store import ConfigStore
from bootwire.errors import InvalidKeyError


@pytest.fixture
def store() -> ConfigStore:
    return ConfigStore().add("host", "localhost").add("port", 8080).add("debug", False)


def test_add_and_get(store):
    assert store.get("host") == "localhost"
    assert store["port"] == 8080


def test_add_overwrites_in_place(store):
    store.add("host", "example.com")

    assert store.get("host") == "example.com"
    assert list(store) == ["host", "port", "debug"]


@pytest.mark.parametrize("key", ["", None, 42])
def test_add_rejects_invalid_keys(key):
    with pytest.raises(InvalidKeyError, match="Key cannot be empty"):
        ConfigStore().add(key, "value")


def test_invalid_key_is_a_value_error():
    with pytest.raises(ValueError):
        ConfigStore({"": 1})


def test_get_missing_key_raises(store):
    with pytest.raises(KeyError):
        store.get("missing")


def test_has(store):
    assert store.has("debug")
    assert "port" in store
    assert not store.has("missing")


def test_none_values_are_stored():
    store = ConfigStore().add("fallback", None)

    assert store.has("fallback")
    assert store.get("fallback") is None


def test_delete(store):
    store.delete("port").delete("missing")

    assert list(store) == ["host", "debug"]
    assert len(store) == 2


def test_iteration_is_restartable_and_includes_falsy_values(store):
    first = list(store.items())
    second = list(store.items())

    assert first == second == [("host", "localhost"), ("port", 8080), ("debug", False)]


def test_merge_later_entries_win(store):
    store.merge(ConfigStore({"port": 9000, "workers": 4}))

    assert store.to_dict() == {"host": "localhost", "port": 9000, "debug": False, "workers": 4}


def test_from_mapping_copies(store):
    source = {"a": 1}
    copied = ConfigStore.from_mapping(source)
    source["a"] = 2

    assert copied.get("a") == 1


def test_equality_respects_order():
    assert ConfigStore({"a": 1, "b": 2}) == ConfigStore({"a": 1, "b": 2})
    assert ConfigStore({"a": 1, "b": 2}) != ConfigStore({"b": 2, "a": 1})


def test_store_survives_pickling(store):
    assert pickle.loads(pickle.dumps(store)) == store

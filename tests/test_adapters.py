# tests/test_adapters.py
# TrieMapping (MutableMapping) and TrieBackedProperties wrappers

import threading

import pytest

from trie_map import TrieBackedProperties, TrieMap, TrieMapping
from trie_map.adapters.properties import parse_property_line


@pytest.fixture
def mapping():
    return TrieMapping(a="1", ab="2", b="3")


# mapping adapter -------------------------------------------------------------
def test_mapping_basic_access(mapping):
    assert mapping["ab"] == "2"
    assert len(mapping) == 3
    assert list(mapping) == ["a", "ab", "b"]
    assert dict(mapping) == {"a": "1", "ab": "2", "b": "3"}
    assert mapping == {"a": "1", "ab": "2", "b": "3"}


def test_mapping_missing_keys(mapping):
    with pytest.raises(KeyError):
        mapping["zz"]
    with pytest.raises(KeyError):
        mapping[1]
    assert mapping.get("zz", "dflt") == "dflt"
    with pytest.raises(KeyError):
        del mapping["zz"]


def test_mapping_rejects_non_str_keys(mapping):
    with pytest.raises(TypeError):
        mapping[1] = "x"


def test_mapping_set_overwrites(mapping):
    mapping["a"] = "changed"
    assert mapping["a"] == "changed"
    mapping.update({"c": "4"})
    assert mapping.trie.get("c") == "4"


def test_mapping_delete_and_pop(mapping):
    del mapping["a"]
    assert list(mapping) == ["ab", "b"]
    assert mapping.pop("b") == "3"
    assert len(mapping) == 1


def test_mapping_membership_is_structural():
    m = TrieMapping(abc="x")
    assert "ab" in m
    assert "ab" not in list(m)
    assert m["ab"] is None


def test_mapping_prefix_helpers(mapping):
    assert mapping.completions("a") == ["a", "ab"]
    sub = mapping.sub_mapping("a")
    assert isinstance(sub, TrieMapping)
    assert dict(sub) == {"a": "1", "ab": "2"}


def _finishes(fn, timeout=5):
    t = threading.Thread(target=fn, daemon=True)
    t.start()
    t.join(timeout)
    return not t.is_alive()


def test_mapping_over_a_trie_can_refill_it():
    m = TrieMap({"a": "1", "ab": "2"})
    assert _finishes(lambda: m.put_all(TrieMapping(m)))
    assert m.entries() == [("a", "1"), ("ab", "2")]

    built = []
    assert _finishes(lambda: built.append(TrieMap(TrieMapping(m))))
    assert built[0] == m


def test_mapping_clear_and_wrap_existing():
    trie = TrieMap({"k": "v"})
    m = TrieMapping(trie)
    assert m.trie is trie
    m.clear()
    assert trie.is_empty()
    assert len(m) == 0


# properties adapter -----------------------------------------------------------
def test_properties_string_and_other_keys():
    props = TrieBackedProperties()
    assert props.put("name", "trie") is None
    assert props.put(42, "answer") is None
    assert props.put(42, "again") == "answer"
    assert props.get("name") == "trie"
    assert props.get(42) == "again"
    assert props.size() == 2
    assert props.contains_key(42)
    assert props.contains_key("name")
    assert props.trie.keys() == ["name"]


def test_properties_defaults_fallback():
    defaults = TrieBackedProperties()
    defaults.set_property("color", "blue")
    defaults.set_property("shape", "round")
    props = TrieBackedProperties(defaults=defaults)
    props.set_property("color", "red")
    props.put("count", 3)
    assert props.get_property("color") == "red"
    assert props.get_property("shape") == "round"
    # non-str value: falls through to defaults/default
    assert props.get_property("count") is None
    assert props.get_property("missing", "x") == "x"
    assert props.keys() == ["color", "count", "shape"]
    assert sorted(props.values(), key=str) == [3, "blue", "red", "round"]
    assert props.entries() == [("color", "red"), ("count", 3)]


def test_properties_remove():
    props = TrieBackedProperties()
    props.put("a", "A")
    props.put(("t", 1), "tuple")
    assert props.remove("a") == "A"
    assert props.remove(("t", 1)) == "tuple"
    assert props.remove("missing") is None
    assert props.size() == 0


def test_properties_contains_value():
    props = TrieBackedProperties()
    props.put("a", "A")
    props.put(1, "one")
    assert props.contains_value("A")
    assert props.contains_value("one")
    assert not props.contains_value("zzz")
    with pytest.raises(TypeError):
        props.contains_value(None)


def test_properties_clear_copy_and_equality():
    props = TrieBackedProperties()
    props.put("a", "A")
    props.put(1, "one")
    clone = props.copy()
    assert clone == props
    clone.put("b", "B")
    assert props.get("b") is None
    assert clone != props
    props.clear()
    assert props.is_empty()
    assert len(props) == 0


def test_properties_load_lines():
    props = TrieBackedProperties()
    count = props.load([
        "# comment",
        "! also a comment",
        "",
        "db.host = localhost",
        "db.port: 5432",
        "flag",
    ])
    assert count == 3
    assert props.get_property("db.host") == "localhost"
    assert props.get_property("db.port") == "5432"
    assert props.get_property("flag") == ""
    assert props.trie.get_completions("db.") == ["db.host", "db.port"]


def test_parse_property_line_uses_first_separator():
    assert parse_property_line("url=http://x") == ("url", "http://x")
    assert parse_property_line("a:b=c") == ("a", "b=c")
    assert parse_property_line("   ") is None


def test_properties_str():
    props = TrieBackedProperties()
    props.put("k", "v")
    props.put(1, 2)
    assert str(props) == "{k : v;\n},{1: 2}"


def test_properties_unhashable_keys_are_absent():
    props = TrieBackedProperties()
    props.put(7, "seven")
    assert props.contains_key(["list"]) is False
    assert ["list"] not in props
    assert props.get({"a": 1}) is None
    assert props.remove(["list"]) is None
    assert props.contains_key(7)

# tests/test_trie_map_properties.py
# property-based checks of ordering, best match and sub-map round trips

from hypothesis import given, settings
from hypothesis import strategies as st

from trie_map import TrieMap

keys = st.text(alphabet="ab/1", min_size=1, max_size=8)
key_values = st.dictionaries(keys, st.integers(), max_size=30)
queries = st.text(alphabet="ab/1x", max_size=10)


def _build(d):
    m = TrieMap()
    for k, v in d.items():
        m.add(k, v)
    return m


@given(key_values)
def test_keys_are_lexicographic(d):
    m = _build(d)
    assert m.keys() == sorted(d)
    assert m.size() == len(d)
    assert m.entries() == sorted(d.items())


@given(key_values, queries)
def test_completions_sorted_and_prefixed(d, prefix):
    m = _build(d)
    expected = sorted(k for k in d if k.startswith(prefix))
    assert m.get_completions(prefix) == expected


@given(key_values, queries)
def test_best_matching_path_is_present_prefix(d, query):
    m = _build(d)
    best = m.get_best_matching_path(query)
    if best is None:
        assert query == "" or not m.contains_prefix(query[0])
    else:
        assert query.startswith(best)
        assert len(best) <= len(query)
        assert m.contains_prefix(best)
        # one more char would no longer be present
        if len(best) < len(query):
            assert not m.contains_prefix(query[: len(best) + 1])


@given(key_values, queries)
def test_best_matching_key_is_longest_stored_prefix(d, query):
    m = _build(d)
    matches = [k for k in d if query.startswith(k)]
    expected = d[max(matches, key=len)] if matches and query else None
    assert m.get_value_for_best_matching_key(query) == expected


@given(key_values, queries)
def test_values_on_path_root_first(d, query):
    m = _build(d)
    on_path = sorted((k for k in d if query.startswith(k)), key=len)
    expected = [d[k] for k in on_path] if query else []
    assert m.get_values_on_path(query) == expected


@given(key_values, queries)
def test_sub_map_round_trip(d, prefix):
    m = _build(d)
    sub = m.get_sub_map(prefix)
    assert sub.entries() == sorted((k, v) for k, v in d.items() if k.startswith(prefix))


@given(keys, st.integers(), st.integers())
def test_add_does_not_clobber(key, v1, v2):
    m = TrieMap()
    assert m.add(key, v1)
    assert not m.add(key, v2)
    assert m.get(key) == v1
    assert m.force_add(key, v2)
    assert m.get(key) == v2


@settings(max_examples=50)
@given(key_values, st.data())
def test_remove_then_remove_again(d, data):
    if not d:
        return
    m = _build(d)
    key = data.draw(st.sampled_from(sorted(d)))
    assert m.remove(key) == d[key]
    assert m.remove(key) is None
    assert key not in m.keys()
    # scaffolding for longer keys survives
    for other in d:
        if other != key and other.startswith(key):
            assert m.contains_prefix(key)
            assert m.get(other) == d[other]

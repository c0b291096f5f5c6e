"""
Tests for drop/codes.py and MetadataStore.reserve_code.
"""

from unittest.mock import patch

from drop_server.drop import codes
from drop_server.drop.codes import DICTIONARY, random_string, allocate_code, new_delete_key
from conftest import make_entry


def _in_alphabet(value: str) -> bool:
    return all(c in DICTIONARY for c in value)


def test_dictionary_is_62_chars():
    assert len(DICTIONARY) == 62
    assert len(set(DICTIONARY)) == 62


def test_random_string_length_and_alphabet():
    for size in (1, 8, 16):
        value = random_string(size)
        assert len(value) == size
        assert _in_alphabet(value)


def test_delete_key_length():
    key = new_delete_key()
    assert len(key) == 16
    assert _in_alphabet(key)


def test_allocate_code_retries_on_collision():
    candidates = iter(["aaaaaaaa", "bbbbbbbb", "cccccccc"])
    taken = {"aaaaaaaa", "bbbbbbbb"}
    with patch.object(codes, "random_string", side_effect=lambda size: next(candidates)):
        assert allocate_code(taken.__contains__) == "cccccccc"


def test_reserve_code_skips_existing_codes(store):
    candidates = iter(["dupedupe", "freecode"])
    store.insert(make_entry("dupedupe"))
    with patch.object(codes, "random_string", side_effect=lambda size: next(candidates)):
        assert store.reserve_code() == "freecode"


def test_reserve_code_never_returns_occupied_code(store):
    seeded = set()
    while len(seeded) < 1000:
        code = random_string(2)
        if code not in seeded:
            store.insert(make_entry(code))
            seeded.add(code)

    for _ in range(2000):
        code = store.reserve_code(size=2)
        assert code not in seeded
        store.release(code)


def test_reserved_code_is_not_handed_out_twice(store):
    reserved = {store.reserve_code(size=1) for _ in range(40)}
    assert len(reserved) == 40

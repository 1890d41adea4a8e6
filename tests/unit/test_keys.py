"""Tests for the key-name adapter."""

import pytest

from ldstore.dao.exceptions import KeyEncodingError
from ldstore.dao.keys import (
    FixDirection,
    escape_key,
    fix_keys,
    from_storage,
    to_storage,
    unescape_key,
)

TEMPLATE = {
    "$schema": "http://json-schema.org/draft-04/schema#",
    "@context": {
        "schema": "http://schema.org/",
        "http://schema.org/name": {"@type": "xsd:string"},
    },
    "properties": {
        "$ref": "#/definitions/field",
        "items": [{"$id": "a.b", "100%": True}, "plain.$value", 3, None],
    },
    "title": "A $pecial.title",
}


def test_plain_keys_are_unchanged() -> None:
    assert escape_key("@id") == "@id"
    assert escape_key("schema:name") == "schema:name"
    assert unescape_key("name") == "name"


def test_reserved_characters_are_escaped() -> None:
    assert escape_key("$schema") == "%24schema"
    assert escape_key("http://schema.org/name") == "http://schema%2Eorg/name"
    assert escape_key("50%") == "50%25"
    assert escape_key("a\x00b") == "a%00b"


def test_escaped_keys_hold_no_reserved_characters() -> None:
    stored = to_storage(TEMPLATE)

    def walk(value):
        if isinstance(value, dict):
            for key, item in value.items():
                assert not key.startswith("$")
                assert "." not in key
                walk(item)
        elif isinstance(value, list):
            for item in value:
                walk(item)

    walk(stored)


def test_values_are_not_rewritten() -> None:
    stored = to_storage(TEMPLATE)
    assert stored["%24schema"] == "http://json-schema.org/draft-04/schema#"
    assert stored["title"] == "A $pecial.title"
    assert stored["properties"]["items"][1] == "plain.$value"


def test_round_trip_restores_nested_document() -> None:
    assert from_storage(to_storage(TEMPLATE)) == TEMPLATE


def test_round_trip_of_keys_that_look_escaped() -> None:
    doc = {"%24schema": 1, "%": {"%2E": [{"%%": "x"}]}}
    stored = to_storage(doc)
    assert stored["%2524schema"] == 1
    assert from_storage(stored) == doc


def test_scalars_pass_through() -> None:
    for value in ("$x.y", 1, 2.5, True, None):
        assert to_storage(value) == value
        assert from_storage(value) == value


def test_input_is_not_mutated() -> None:
    doc = {"$a": {"$b": 1}}
    to_storage(doc)
    assert doc == {"$a": {"$b": 1}}


@pytest.mark.parametrize("key", ["%zz", "abc%", "%2", "%2e"])
def test_malformed_escape_raises(key: str) -> None:
    with pytest.raises(KeyEncodingError):
        from_storage({"outer": {key: 1}})


def test_non_string_key_is_rejected() -> None:
    with pytest.raises(TypeError):
        to_storage({1: "one"})


def test_fix_keys_dispatches_on_direction() -> None:
    stored = fix_keys({"$a": 1}, FixDirection.WRITE_TO_STORAGE)
    assert stored == {"%24a": 1}
    assert fix_keys(stored, FixDirection.READ_FROM_STORAGE) == {"$a": 1}

"""Tests for delimiter configuration."""

import dataclasses

import pytest

from field_formatter.formatter import NULL_CHAR
from field_formatter.models import (
    DEFAULT_DELIMITERS,
    MYSQL_DELIMITERS,
    PRESETS,
    DelimiterSet,
)


def test_defaults_disable_escape_and_enclose():
    d = DelimiterSet()
    assert d.field_delim == ","
    assert d.record_delim == "\n"
    assert d.enclose == NULL_CHAR
    assert d.escape == NULL_CHAR
    assert d.enclose_required is False
    assert d.null_string == "null"


def test_mysql_preset():
    assert MYSQL_DELIMITERS.enclose == "'"
    assert MYSQL_DELIMITERS.escape == "\\"
    assert MYSQL_DELIMITERS.enclose_required is False
    assert PRESETS == {"default": DEFAULT_DELIMITERS, "mysql": MYSQL_DELIMITERS}


def test_must_enclose_for_uses_field_and_record_delims():
    assert DEFAULT_DELIMITERS.must_enclose_for == (",", "\n")


def test_must_enclose_for_splits_multi_character_delimiters():
    d = DelimiterSet(field_delim="||", record_delim="\r\n")
    assert d.must_enclose_for == ("|", "\r", "\n")


def test_delimiter_set_is_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_DELIMITERS.field_delim = ";"  # type: ignore[misc]


def test_from_mapping_overrides_defaults():
    d = DelimiterSet.from_mapping({"field_delim": "|", "enclose": '"'})
    assert d.field_delim == "|"
    assert d.enclose == '"'
    assert d.record_delim == "\n"


def test_from_mapping_keeps_base_values():
    d = DelimiterSet.from_mapping({"enclose_required": True}, base=MYSQL_DELIMITERS)
    assert d.enclose == "'"
    assert d.escape == "\\"
    assert d.enclose_required is True


@pytest.mark.parametrize(
    "config, message",
    [
        ({"quote": '"'}, "Unknown delimiter option"),
        ({"enclose_required": "yes"}, "must be a boolean"),
        ({"escape": 5}, "must be a string"),
        ({"field_delim": ""}, "must not be empty"),
    ],
)
def test_from_mapping_rejects_bad_config(config, message):
    with pytest.raises(ValueError, match=message):
        DelimiterSet.from_mapping(config)


def test_from_mapping_requires_mapping():
    with pytest.raises(ValueError):
        DelimiterSet.from_mapping(["field_delim"])  # type: ignore[arg-type]

"""
Tests for the todo wire codec.

Covers identifier extraction from both ``_id`` shapes, strict decoding of
title/done, list decoding and the request bodies.
"""

import pytest

from thetodo.codec import (
    decode_todo,
    decode_todo_list,
    encode_done_update,
    encode_new_todo,
    encode_todo,
    extract_id,
)
from thetodo.errors import ParseError
from thetodo.models import TodoRecord


class TestExtractId:
    """Tests for the ``_id`` tagged-union parser."""

    def test_object_with_oid(self):
        assert extract_id({"$oid": "abc123"}) == "abc123"

    def test_plain_string(self):
        assert extract_id("abc123") == "abc123"

    @pytest.mark.parametrize("raw", [
        None,
        42,
        3.5,
        True,
        [],
        ["abc123"],
        {},
        {"$oid": 12},
        {"$oid": None},
        {"oid": "abc123"},
    ])
    def test_anything_else_is_unassigned(self, raw):
        """Every other shape maps to None instead of failing."""
        assert extract_id(raw) is None

    def test_oid_wins_over_other_keys(self):
        assert extract_id({"$oid": "abc123", "other": "x"}) == "abc123"


class TestDecodeTodo:
    """Tests for decoding a single record."""

    def test_decode_nested_oid(self):
        record = decode_todo({"_id": {"$oid": "abc123"}, "title": "x", "done": False})
        assert record == TodoRecord(id="abc123", title="x", done=False)

    def test_decode_string_id(self):
        record = decode_todo({"_id": "abc123", "title": "x", "done": False})
        assert record.id == "abc123"

    def test_decode_without_id(self):
        record = decode_todo({"title": "x", "done": True})
        assert record.id is None
        assert record.done is True

    def test_plain_id_key_is_ignored(self):
        """Only ``_id`` carries the identifier."""
        record = decode_todo({"id": "abc123", "title": "x", "done": False})
        assert record.id is None

    def test_extra_fields_ignored(self):
        record = decode_todo({"_id": "1", "title": "x", "done": False, "owner": "u"})
        assert record == TodoRecord(id="1", title="x", done=False)

    def test_missing_title_fails(self):
        with pytest.raises(ParseError, match="title"):
            decode_todo({"_id": {"$oid": "abc123"}, "done": False})

    def test_missing_done_fails(self):
        with pytest.raises(ParseError, match="done"):
            decode_todo({"_id": "abc123", "title": "x"})

    @pytest.mark.parametrize("title", [None, 1, ["x"], {"text": "x"}])
    def test_mistyped_title_fails(self, title):
        with pytest.raises(ParseError):
            decode_todo({"_id": "1", "title": title, "done": False})

    @pytest.mark.parametrize("done", [None, 0, 1, "true", "false"])
    def test_mistyped_done_fails(self, done):
        """Completion flag is not coerced from other JSON types."""
        with pytest.raises(ParseError):
            decode_todo({"_id": "1", "title": "x", "done": done})

    @pytest.mark.parametrize("wire", [None, "x", 1, ["x"]])
    def test_non_object_fails(self, wire):
        with pytest.raises(ParseError):
            decode_todo(wire)


class TestDecodeTodoList:
    """Tests for decoding the list response."""

    def test_preserves_server_order(self):
        records = decode_todo_list([
            {"_id": {"$oid": "2"}, "title": "b", "done": True},
            {"_id": "1", "title": "a", "done": False},
        ])
        assert [record.id for record in records] == ["2", "1"]

    def test_empty_array(self):
        assert decode_todo_list([]) == []

    def test_non_array_fails(self):
        with pytest.raises(ParseError):
            decode_todo_list({"todos": []})

    def test_one_bad_element_fails_whole_list(self):
        with pytest.raises(ParseError):
            decode_todo_list([
                {"_id": "1", "title": "a", "done": False},
                {"_id": "2", "done": False},
            ])


class TestEncode:
    """Tests for request bodies."""

    def test_new_todo_body(self):
        assert encode_new_todo("Buy milk") == {"title": "Buy milk", "done": False}

    def test_record_body_never_carries_id(self):
        body = encode_todo(TodoRecord(id="abc123", title="x", done=True))
        assert body == {"title": "x", "done": True}
        assert "_id" not in body and "id" not in body

    def test_done_update_body(self):
        assert encode_done_update(True) == {"done": True}
        assert encode_done_update(False) == {"done": False}

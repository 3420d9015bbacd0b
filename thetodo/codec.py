"""
Wire codec for todo records.

Maps between the JSON documents exchanged with the remote store and
TodoRecord instances. The store is document-oriented, so its identifier
arrives under ``_id`` either as an extended-JSON ObjectId
(``{"$oid": "<hex>"}``) or as a bare string.
"""

from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from thetodo.errors import ParseError
from thetodo.models import TodoRecord

ID_FIELD = "_id"
OID_FIELD = "$oid"


def extract_id(raw: Any) -> Optional[str]:
    """
    Extract the record identifier from the raw ``_id`` value.

    Cases are tried in order and every input maps to exactly one:
    1. object carrying a string ``$oid`` -> that string
    2. plain string -> used as-is
    3. anything else (absent, null, number, other objects) -> None

    Args:
        raw: Value found under ``_id``, or None when the key is absent

    Returns:
        Identifier string, or None when not yet assigned
    """
    if isinstance(raw, dict):
        oid = raw.get(OID_FIELD)
        return oid if isinstance(oid, str) else None
    if isinstance(raw, str):
        return raw
    return None


def decode_todo(wire: Any) -> TodoRecord:
    """
    Decode one wire document into a TodoRecord.

    Args:
        wire: Parsed JSON value for a single record

    Returns:
        Decoded TodoRecord

    Raises:
        ParseError: If the document is not an object, or title/done are
            missing or of the wrong type
    """
    if not isinstance(wire, dict):
        raise ParseError(f"Expected a todo object, got {type(wire).__name__}")

    for field, expected in (("title", str), ("done", bool)):
        if field not in wire:
            raise ParseError(f"Todo is missing '{field}'")
        if not isinstance(wire[field], expected):
            raise ParseError(
                f"Todo field '{field}' must be {expected.__name__}, "
                f"got {type(wire[field]).__name__}"
            )

    try:
        return TodoRecord(
            id=extract_id(wire.get(ID_FIELD)),
            title=wire["title"],
            done=wire["done"],
        )
    except ValidationError as e:
        raise ParseError(f"Invalid todo: {e}") from e


def decode_todo_list(payload: Any) -> List[TodoRecord]:
    """
    Decode a list response body.

    Args:
        payload: Parsed JSON body of GET /todos

    Returns:
        Records in server order

    Raises:
        ParseError: If the payload is not an array or any element is malformed
    """
    if not isinstance(payload, list):
        raise ParseError(f"Expected a JSON array of todos, got {type(payload).__name__}")
    return [decode_todo(item) for item in payload]


def encode_new_todo(title: str) -> Dict[str, Any]:
    """Body for creating a todo; the identifier is assigned by the server."""
    return {"title": title, "done": False}


def encode_todo(record: TodoRecord) -> Dict[str, Any]:
    """Creation body for an existing record; never carries the identifier."""
    return {"title": record.title, "done": record.done}


def encode_done_update(done: bool) -> Dict[str, Any]:
    """Body for updating the completion flag of a todo."""
    return {"done": done}

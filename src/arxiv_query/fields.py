"""Searchable arXiv fields and their query prefixes."""

from enum import Enum, IntEnum
from typing import Any

UNKNOWN_CODE = "unk"


class FieldPrefix(IntEnum):
    """A paper attribute that a search term can be restricted to."""

    TITLE = 0
    AUTHOR = 1
    ABSTRACT = 2
    COMMENT = 3
    JOURNAL_REFERENCE = 4
    SUBJECT_CATEGORY = 5
    REPORT_NUMBER = 6
    ID = 7
    ALL_OF_THE_ABOVE = 8

    @property
    def code(self) -> str:
        return _CODES[self]


_CODES = {
    FieldPrefix.TITLE: "ti",
    FieldPrefix.AUTHOR: "au",
    FieldPrefix.ABSTRACT: "abs",
    FieldPrefix.COMMENT: "co",
    FieldPrefix.JOURNAL_REFERENCE: "jr",
    FieldPrefix.SUBJECT_CATEGORY: "cat",
    FieldPrefix.REPORT_NUMBER: "rn",
    FieldPrefix.ID: "id",
    FieldPrefix.ALL_OF_THE_ABOVE: "all",
}


def field_code(prefix: Any) -> str:
    """
    Return the wire code for a field prefix.

    Values outside the catalog yield ``"unk"``; the resulting query is
    syntactically valid but matches nothing useful.

    Args:
        prefix: A FieldPrefix, or its integer value

    Returns:
        Two or three letter code such as ``"ti"``
    """
    if isinstance(prefix, Enum) and not isinstance(prefix, FieldPrefix):
        return UNKNOWN_CODE
    if isinstance(prefix, bool) or not isinstance(prefix, int):
        return UNKNOWN_CODE
    try:
        return _CODES[FieldPrefix(prefix)]
    except ValueError:
        return UNKNOWN_CODE


def parse_field_prefix(name: str) -> FieldPrefix:
    """
    Look up a FieldPrefix by member name or wire code, case-insensitively.

    Raises:
        ValueError: If the name matches no field
    """
    key = name.strip().lower()
    for prefix, code in _CODES.items():
        if key in (code, prefix.name.lower()):
            return prefix
    raise ValueError(f"Unknown search field: {name}")

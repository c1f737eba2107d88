"""
Field-List Parser (Zipper: raw text → FieldList).

Reads the interleaved ``(Type) name, (Type) name, ...`` notation and
zips it into ordered (type, name) pairs.

Syntax Notes:
    - The type is an opaque blob delimited by a balanced pair of
      parentheses. Commas, angle brackets and nested parentheses inside
      it belong to the type: ``(std::map<int, int>) lookup`` is one entry.
    - Entries are separated by top-level commas only.
    - Whitespace and newlines between tokens are ignored.
    - Empty input is a valid, empty field list.
"""

import logging
import re
from typing import List, Optional, Tuple

from fieldlist.errors import FieldListSyntaxError, FieldLimitError
from fieldlist.model import FieldSpec, FieldList


LOGGER = logging.getLogger("fieldlist.parser")

# Sequence ceiling of the preprocessor expansion the notation comes from.
DEFAULT_MAX_FIELDS = 256

IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def _skip_whitespace(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def _describe(text: str, pos: int) -> str:
    """Short quoted excerpt of the text at ``pos`` for error messages."""
    if pos >= len(text):
        return "end of input"
    match = IDENTIFIER_RE.match(text, pos)
    token = match.group(0) if match else text[pos]
    return f"'{token}'"


def _parse_type(text: str, pos: int, index: int) -> Tuple[str, int]:
    """Parse a parenthesized type blob. Returns (type_text, position after ')')."""
    if pos >= len(text) or text[pos] != "(":
        raise FieldListSyntaxError(
            f"expected '(' before field type, got {_describe(text, pos)}",
            entry_index=index,
            offset=pos,
            source=text,
        )

    start = pos
    depth = 0
    while pos < len(text):
        ch = text[pos]
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                type_text = text[start + 1:pos].strip()
                if not type_text:
                    raise FieldListSyntaxError(
                        "empty field type '()'", entry_index=index, offset=start, source=text
                    )
                return type_text, pos + 1
        pos += 1

    raise FieldListSyntaxError(
        "unbalanced parentheses in field type", entry_index=index, offset=start, source=text
    )


def _parse_name(text: str, pos: int, index: int) -> Tuple[str, int]:
    """Parse the identifier following a type. Returns (name, position after it)."""
    match = IDENTIFIER_RE.match(text, pos)
    if not match:
        raise FieldListSyntaxError(
            f"expected field name after type, got {_describe(text, pos)}",
            entry_index=index,
            offset=pos,
            source=text,
        )
    return match.group(0), match.end()


def parse_field_list(text: str, max_fields: Optional[int] = DEFAULT_MAX_FIELDS) -> FieldList:
    """
    Parse ``(Type) name`` entries into a FieldList.

    Args:
        text: Comma-separated entries, e.g. "(int) x, (bool) y"
        max_fields: Ceiling on the number of entries (None for unbounded)

    Returns:
        FieldList in input order (empty for blank input)

    Raises:
        FieldListSyntaxError: If an entry is malformed
        FieldLimitError: If more than ``max_fields`` entries are present
    """
    fields: List[FieldSpec] = []
    pos = _skip_whitespace(text, 0)
    if pos == len(text):
        return FieldList(fields=fields, source=text)

    index = 0
    while True:
        if pos >= len(text) or text[pos] == ",":
            raise FieldListSyntaxError(
                "empty entry in field list", entry_index=index, offset=pos, source=text
            )

        type_text, pos = _parse_type(text, pos, index)
        pos = _skip_whitespace(text, pos)
        name, pos = _parse_name(text, pos, index)
        fields.append(FieldSpec(type=type_text, name=name))
        if max_fields is not None and len(fields) > max_fields:
            raise FieldLimitError(max_fields, len(fields))

        pos = _skip_whitespace(text, pos)
        if pos >= len(text):
            break
        if text[pos] != ",":
            raise FieldListSyntaxError(
                f"unexpected {_describe(text, pos)} after field name '{name}'",
                entry_index=index,
                offset=pos,
                source=text,
            )
        pos = _skip_whitespace(text, pos + 1)
        index += 1

    LOGGER.debug("parsed %d fields: %s", len(fields), ", ".join(spec.name for spec in fields))
    return FieldList(fields=fields, source=text)


def check_field_count(field_list: FieldList, max_fields: Optional[int] = DEFAULT_MAX_FIELDS) -> None:
    """Apply the ceiling to a FieldList built without the text parser."""
    if max_fields is not None and len(field_list) > max_fields:
        raise FieldLimitError(max_fields, len(field_list))


__all__ = [
    "parse_field_list",
    "check_field_count",
    "DEFAULT_MAX_FIELDS",
    "IDENTIFIER_RE",
]

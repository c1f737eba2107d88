"""
Schema file helpers for field lists.

A schema document is a mapping with an optional record name and an
ordered list of fields:

    record: Car
    fields:
      - {type: 'std::string', name: name}
      - {type: int, name: age}
      - "(bool) isBest"

Entries may be ``{type, name}`` mappings or ``(Type) name`` strings.
Provides JSON/YAML round-trip via an intermediate dict representation.
"""
from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional, Tuple

import yaml

from fieldlist.errors import FieldLimitError, FieldListSyntaxError, SchemaError
from fieldlist.model import FieldList, FieldSpec
from fieldlist.parser import IDENTIFIER_RE, parse_field_list


def field_spec_to_dict(spec: FieldSpec) -> Dict[str, Any]:
    return {"type": spec.type, "name": spec.name}


def field_spec_from_dict(d: Any, index: int = 0) -> FieldSpec:
    if isinstance(d, str):
        try:
            parsed = parse_field_list(d, max_fields=1)
        except FieldListSyntaxError as e:
            raise SchemaError(f"field {index + 1}: {e.message}")
        except FieldLimitError:
            raise SchemaError(f"field {index + 1}: expected one '(Type) name' entry, got {d!r}")
        if len(parsed) != 1:
            raise SchemaError(f"field {index + 1}: expected one '(Type) name' entry, got {d!r}")
        return parsed.fields[0]
    if not isinstance(d, dict):
        raise SchemaError(f"field {index + 1}: expected a mapping or '(Type) name' string, got {d!r}")

    type_text = d.get("type")
    name = d.get("name")
    if not isinstance(type_text, str) or not type_text.strip():
        raise SchemaError(f"field {index + 1}: 'type' is missing or empty")
    if not isinstance(name, str) or not IDENTIFIER_RE.fullmatch(name):
        raise SchemaError(f"field {index + 1}: 'name' must be an identifier, got {name!r}")
    return FieldSpec(type=type_text.strip(), name=name)


def field_list_to_dict(field_list: FieldList, record: Optional[str] = None) -> Dict[str, Any]:
    d: Dict[str, Any] = {}
    if record is not None:
        d["record"] = record
    d["fields"] = [field_spec_to_dict(spec) for spec in field_list]
    return d


def field_list_from_dict(d: Any) -> FieldList:
    if d is None:
        return FieldList()
    if isinstance(d, list):
        entries = d
    elif isinstance(d, dict):
        entries = d.get("fields", [])
    else:
        raise SchemaError(f"schema must be a mapping or a list, got {type(d).__name__}")
    if entries is None:
        entries = []
    if not isinstance(entries, list):
        raise SchemaError("'fields' must be a list")
    return FieldList(fields=[field_spec_from_dict(entry, i) for i, entry in enumerate(entries)])


def record_name_from_dict(d: Any) -> Optional[str]:
    if isinstance(d, dict) and d.get("record") is not None:
        record = d["record"]
        if not isinstance(record, str) or not IDENTIFIER_RE.fullmatch(record):
            raise SchemaError(f"'record' must be an identifier, got {record!r}")
        return record
    return None


def field_list_to_json(field_list: FieldList, record: Optional[str] = None) -> str:
    return json.dumps(field_list_to_dict(field_list, record))


def field_list_from_json(s: str) -> FieldList:
    try:
        d = json.loads(s)
    except json.JSONDecodeError as e:
        raise SchemaError(f"invalid JSON schema: {e}")
    return field_list_from_dict(d)


def field_list_to_yaml(field_list: FieldList, record: Optional[str] = None) -> str:
    return yaml.safe_dump(field_list_to_dict(field_list, record), sort_keys=False)


def field_list_from_yaml(s: str) -> FieldList:
    try:
        d = yaml.safe_load(s)
    except yaml.YAMLError as e:
        raise SchemaError(f"invalid YAML schema: {e}")
    return field_list_from_dict(d)


def load_schema(filepath: str) -> Tuple[Optional[str], FieldList]:
    """
    Load a schema file.

    ``.yaml``/``.yml`` and ``.json`` files are read as schema documents.
    Any other file is parsed as ``(Type) name, ...`` text.

    Returns:
        (record name or None, FieldList)

    Raises:
        FileNotFoundError: If the file doesn't exist
        SchemaError: If the document is malformed
        FieldListSyntaxError: If a plain-text field list is malformed
    """
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            content = f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"schema file not found: {filepath}")

    ext = os.path.splitext(filepath)[1].lower()
    if ext in (".yaml", ".yml"):
        try:
            d = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise SchemaError(f"invalid YAML in {filepath}: {e}")
    elif ext == ".json":
        try:
            d = json.loads(content)
        except json.JSONDecodeError as e:
            raise SchemaError(f"invalid JSON in {filepath}: {e}")
    else:
        return None, parse_field_list(content, max_fields=None)

    return record_name_from_dict(d), field_list_from_dict(d)


def load_field_list(filepath: str) -> FieldList:
    return load_schema(filepath)[1]

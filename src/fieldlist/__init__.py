"""
Field-List Compiler Package

Expands a declarative list of ``(Type) name`` entries into two outputs
that can never drift apart:

    - ordered field declarations for a record type
    - a serialize routine that hands every field to an archive
      under its own name, in declaration order

ARCHITECTURAL GUARANTEE:
------------------------
Every field name is written once by the caller.
The declaration and the serialization key are produced from the
same token, so they are byte-identical by construction.

The archive engine that actually encodes values is NOT part of this
package. Generated code only calls it.
"""

from fieldlist.errors import (
    FieldListError,
    FieldListSyntaxError,
    FieldLimitError,
    DuplicateFieldError,
    SchemaError,
    ConfigError,
)
from fieldlist.model import FieldSpec, FieldList
from fieldlist.parser import parse_field_list, DEFAULT_MAX_FIELDS
from fieldlist.config import GeneratorConfig
from fieldlist.compiler import compile_field_list

__version__ = "0.1.0"

__all__ = [
    "FieldListError",
    "FieldListSyntaxError",
    "FieldLimitError",
    "DuplicateFieldError",
    "SchemaError",
    "ConfigError",
    "FieldSpec",
    "FieldList",
    "parse_field_list",
    "DEFAULT_MAX_FIELDS",
    "GeneratorConfig",
    "compile_field_list",
]

"""
Python generator for compiled field lists.

Emits an ``@dataclass`` whose annotations are the declarations and whose
``serialize``/``deserialize`` methods hand every field to an archive
under its own name:

    @dataclass
    class Car:
        name: str
        age: int

        def serialize(self, ar):
            ar(
                make_nvp("name", self.name),
                make_nvp("age", self.age),
            )

        @classmethod
        def deserialize(cls, ar):
            return cls(*ar.load("name", "age"))

The archive passed in must be callable with any number of named values
(including none) and expose ``load(*keys)`` returning values in key order.
"""

import keyword
import textwrap
from typing import List, Optional

from fieldlist.config import GeneratorConfig
from fieldlist.errors import FieldListError
from fieldlist.model import CompiledFieldList

# Generated Python always uses four-space indentation.
_INDENT = "    "


def _check_names(compiled: CompiledFieldList) -> None:
    for decl in compiled.declarations:
        if keyword.iskeyword(decl.name):
            raise FieldListError(f"field name '{decl.name}' is a Python keyword")


def _stringify(identifier: str) -> str:
    return f'"{identifier}"'


def generate_declarations(compiled: CompiledFieldList, config: Optional[GeneratorConfig] = None) -> str:
    """One ``name: Type`` annotation per field, in order."""
    _check_names(compiled)
    return "\n".join(f"{decl.name}: {decl.type_name}" for decl in compiled.declarations)


def generate_serialize_function(compiled: CompiledFieldList, config: Optional[GeneratorConfig] = None) -> str:
    """Render ``serialize(self, <archive>)`` with one archive call."""
    _check_names(compiled)
    routine = compiled.routine
    archive = routine.archive
    exprs = [f"make_nvp({_stringify(b.key)}, self.{b.value})" for b in routine.bindings]

    lines = [f"def serialize(self, {archive}):"]
    if not exprs:
        lines.append(f"{_INDENT}{archive}()")
    elif len(exprs) == 1:
        lines.append(f"{_INDENT}{archive}({exprs[0]})")
    else:
        lines.append(f"{_INDENT}{archive}(")
        for expr in exprs:
            lines.append(f"{_INDENT * 2}{expr},")
        lines.append(f"{_INDENT})")
    return "\n".join(lines)


def generate_deserialize_function(compiled: CompiledFieldList, config: Optional[GeneratorConfig] = None) -> str:
    """Render the classmethod that rebuilds a record from the same keys, in the same order."""
    archive = compiled.routine.archive
    keys = ", ".join(_stringify(key) for key in compiled.routine.keys())
    return "\n".join([
        "@classmethod",
        f"def deserialize(cls, {archive}):",
        f"{_INDENT}return cls(*{archive}.load({keys}))",
    ])


def generate_body(compiled: CompiledFieldList, config: Optional[GeneratorConfig] = None) -> str:
    """Annotations and both methods, unindented, for splicing into a class body."""
    parts: List[str] = []
    declarations = generate_declarations(compiled, config)
    if declarations:
        parts.append(declarations)
    parts.append(generate_serialize_function(compiled, config))
    parts.append(generate_deserialize_function(compiled, config))
    return "\n\n".join(parts)


def generate_record(
    compiled: CompiledFieldList,
    record_name: str,
    config: Optional[GeneratorConfig] = None,
) -> str:
    """Render the dataclass for one compiled field list."""
    body = textwrap.indent(generate_body(compiled, config), _INDENT)
    return f"@dataclass\nclass {record_name}:\n{body}\n"


def generate_module(
    compiled: CompiledFieldList,
    record_name: str,
    config: Optional[GeneratorConfig] = None,
) -> str:
    """A complete module: imports followed by the record."""
    config = config or GeneratorConfig()
    return "\n".join([
        "from __future__ import annotations",
        "",
        "from dataclasses import dataclass",
        "",
        f"from {config.runtime_module} import make_nvp",
        "",
        "",
        generate_record(compiled, record_name, config),
    ])


def save_record_file(
    compiled: CompiledFieldList,
    record_name: str,
    filename: str,
    config: Optional[GeneratorConfig] = None,
) -> None:
    """Generate the record module and save it to file (.py)."""
    module = generate_module(compiled, record_name, config)
    with open(filename, 'w') as f:
        f.write(module)


__all__ = [
    "generate_declarations",
    "generate_serialize_function",
    "generate_deserialize_function",
    "generate_body",
    "generate_record",
    "generate_module",
    "save_record_file",
]

"""
C++ generator for compiled field lists (cereal-style archives).

Renders the same text the SERIALIZABLE(...) preprocessor macro expands to:

    std::string name;
    int age;

    template <class Archive>
    void serialize( Archive & ar ) {
      ar( ::cereal::make_nvp("name", name),
          ::cereal::make_nvp("age", age) );
    }
"""

import re
import textwrap
from typing import List, Optional

from fieldlist.config import GeneratorConfig
from fieldlist.model import Binding, CompiledFieldList, SerializeRoutine


def _stringify(identifier: str) -> str:
    """String literal of an identifier token, exactly as written."""
    return f'"{identifier}"'


def _binding_expr(binding: Binding, nvp_helper: str) -> str:
    return f"{nvp_helper}({_stringify(binding.key)}, {binding.value})"


def format_archive_call(routine: SerializeRoutine, nvp_helper: str, indent: str = "") -> str:
    """
    Render the archive call statement.

    Zero bindings give ``ar();``. One binding stays on a single line.
    Longer lists put one binding per line, aligned under the first.
    """
    exprs = [_binding_expr(b, nvp_helper) for b in routine.bindings]
    if not exprs:
        return f"{indent}{routine.archive}();"
    if len(exprs) == 1:
        return f"{indent}{routine.archive}( {exprs[0]} );"

    head = f"{indent}{routine.archive}( "
    continuation = " " * len(head)
    lines = [head + exprs[0] + ","]
    for expr in exprs[1:-1]:
        lines.append(continuation + expr + ",")
    lines.append(continuation + exprs[-1] + " );")
    return "\n".join(lines)


def generate_declarations(compiled: CompiledFieldList, config: Optional[GeneratorConfig] = None) -> str:
    """One ``Type name;`` line per field, in order. Empty string for no fields."""
    return "\n".join(f"{decl.type_name} {decl.name};" for decl in compiled.declarations)


def generate_serialize_function(compiled: CompiledFieldList, config: Optional[GeneratorConfig] = None) -> str:
    """Render the templated serialize member function."""
    config = config or GeneratorConfig()
    qualifier = " const" if config.const_method else ""
    archive = compiled.routine.archive
    lines = [
        "template <class Archive>",
        f"void serialize( Archive & {archive} ){qualifier} {{",
        format_archive_call(compiled.routine, config.nvp_helper, indent=config.indent),
        "}",
    ]
    return "\n".join(lines)


def generate_body(compiled: CompiledFieldList, config: Optional[GeneratorConfig] = None) -> str:
    """Declarations followed by the serialize function, as spliced into a record."""
    parts: List[str] = []
    declarations = generate_declarations(compiled, config)
    if declarations:
        parts.append(declarations)
    parts.append(generate_serialize_function(compiled, config))
    return "\n\n".join(parts)


def generate_record(
    compiled: CompiledFieldList,
    record_name: str,
    config: Optional[GeneratorConfig] = None,
) -> str:
    """Wrap the generated body in ``struct <record_name> { ... };``."""
    config = config or GeneratorConfig()
    body = textwrap.indent(generate_body(compiled, config), config.indent)
    return f"struct {record_name} {{\n{body}\n}};"


def _include_guard(record_name: str) -> str:
    token = re.sub(r"[^A-Za-z0-9]+", "_", record_name).strip("_").upper() or "RECORD"
    return f"{token}_HPP_"


def generate_header(
    compiled: CompiledFieldList,
    record_name: str,
    config: Optional[GeneratorConfig] = None,
) -> str:
    """A self-contained header: include guard, cereal include, the record."""
    guard = _include_guard(record_name)
    return "\n".join([
        f"#ifndef {guard}",
        f"#define {guard}",
        "",
        "#include <cereal/cereal.hpp>",
        "",
        generate_record(compiled, record_name, config),
        "",
        f"#endif // {guard}",
        "",
    ])


def save_record_file(
    compiled: CompiledFieldList,
    record_name: str,
    filename: str,
    config: Optional[GeneratorConfig] = None,
) -> None:
    """
    Generate a header for the record and save it to file.

    Args:
        compiled: Compiled field list
        record_name: Name of the generated struct
        filename: Output file path (.hpp extension recommended)
        config: Generator settings
    """
    header = generate_header(compiled, record_name, config)
    with open(filename, 'w') as f:
        f.write(header)


__all__ = [
    "format_archive_call",
    "generate_declarations",
    "generate_serialize_function",
    "generate_body",
    "generate_record",
    "generate_header",
    "save_record_file",
]

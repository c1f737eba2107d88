"""Backends that render compiled field lists as host-language text (C++, Python)."""

from enum import Enum
from typing import Optional

from fieldlist.config import GeneratorConfig
from fieldlist.errors import FieldListError
from fieldlist.model import CompiledFieldList
from fieldlist.backends import cpp_generator, python_generator


class Dialect(Enum):
    """Host languages a field list can be rendered into."""
    CPP = "cpp"
    PYTHON = "python"


def get_dialect(name) -> Dialect:
    if isinstance(name, Dialect):
        return name
    try:
        return Dialect(str(name).lower())
    except ValueError:
        choices = ", ".join(d.value for d in Dialect)
        raise FieldListError(f"unknown dialect '{name}' (choose from {choices})")


def generate(
    compiled: CompiledFieldList,
    dialect=Dialect.CPP,
    record_name: Optional[str] = None,
    config: Optional[GeneratorConfig] = None,
) -> str:
    """
    Render a compiled field list.

    Without a record name the bare body (declarations plus serialize
    routine) is returned, ready to splice into an existing record.
    With a record name a complete C++ header or Python module is returned.
    """
    dialect = get_dialect(dialect)
    if dialect == Dialect.CPP:
        if record_name is None:
            return cpp_generator.generate_body(compiled, config)
        return cpp_generator.generate_header(compiled, record_name, config)
    if record_name is None:
        return python_generator.generate_body(compiled, config)
    return python_generator.generate_module(compiled, record_name, config)


def save_record_file(
    compiled: CompiledFieldList,
    record_name: str,
    filename: str,
    dialect=Dialect.CPP,
    config: Optional[GeneratorConfig] = None,
) -> None:
    if get_dialect(dialect) == Dialect.CPP:
        cpp_generator.save_record_file(compiled, record_name, filename, config)
    else:
        python_generator.save_record_file(compiled, record_name, filename, config)


__all__ = ["Dialect", "get_dialect", "generate", "save_record_file"]

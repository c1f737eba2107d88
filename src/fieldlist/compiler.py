"""
Field-List Compiler pipeline.

    text ── Zipper ──> FieldList ──┬── Declarator ──> [Declaration]
                                   └── Binder ──────> SerializeRoutine

Both emitting stages walk the same FieldList once, front to back, so
declaration order and binding order are the input order.
"""
from __future__ import annotations

import logging
import warnings
from typing import List, Optional, Union

from fieldlist.config import GeneratorConfig
from fieldlist.errors import DuplicateFieldError
from fieldlist.model import (
    Binding,
    CompiledFieldList,
    Declaration,
    FieldList,
    SerializeRoutine,
)
from fieldlist.parser import check_field_count, parse_field_list


LOGGER = logging.getLogger("fieldlist.compiler")


def declare_fields(field_list: FieldList) -> List[Declaration]:
    """One declaration per field, in input order."""
    return [Declaration(type_name=spec.type, name=spec.name) for spec in field_list]


def bind_fields(field_list: FieldList, archive_name: str = "ar") -> SerializeRoutine:
    """
    Build the single archive call for a field list.

    The key of each binding is the identifier text itself. No case
    folding or renaming happens here or anywhere downstream.
    """
    bindings = [Binding(key=spec.name, value=spec.name) for spec in field_list]
    return SerializeRoutine(archive=archive_name, bindings=bindings)


def compile_field_list(
    source: Union[str, FieldList],
    config: Optional[GeneratorConfig] = None,
) -> CompiledFieldList:
    """
    Run the whole pipeline on field-list text or a prebuilt FieldList.

    Args:
        source: "(Type) name, ..." text or a FieldList
        config: Generator settings (defaults if omitted)

    Returns:
        CompiledFieldList with declarations and serialize routine

    Raises:
        FieldListSyntaxError: Malformed entry
        FieldLimitError: More entries than config.max_fields
        DuplicateFieldError: Repeated names with config.reject_duplicates
    """
    config = config or GeneratorConfig()

    if isinstance(source, FieldList):
        field_list = source
        check_field_count(field_list, config.max_fields)
    else:
        field_list = parse_field_list(source, max_fields=config.max_fields)

    duplicates = field_list.duplicate_names()
    if duplicates:
        if config.reject_duplicates:
            raise DuplicateFieldError(duplicates)
        warnings.warn(
            f"Duplicate field names left to the host compiler: {', '.join(duplicates)}",
            UserWarning,
        )

    compiled = CompiledFieldList(
        field_list=field_list,
        declarations=declare_fields(field_list),
        routine=bind_fields(field_list, config.archive_name),
    )
    LOGGER.debug(
        "compiled %d declarations and %d bindings",
        len(compiled.declarations),
        len(compiled.routine.bindings),
    )
    return compiled


__all__ = ["declare_fields", "bind_fields", "compile_field_list"]

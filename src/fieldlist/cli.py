"""
Command line interface.

    fieldlist compile --fields "(int) x, (bool) y" --dialect cpp
    fieldlist compile schema.yaml --dialect python --record Car -o car.py
    fieldlist expand car.hpp.in -o car.hpp
"""

import argparse
import logging
import sys
from typing import List, Optional

from fieldlist.backends import Dialect, generate
from fieldlist.compiler import compile_field_list
from fieldlist.config import GeneratorConfig, load_config
from fieldlist.errors import FieldListError
from fieldlist.expand import DEFAULT_MACRO, expand_file
from fieldlist.serialization import load_schema


LOGGER = logging.getLogger("fieldlist.cli")


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: '{value}'")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be zero or more, got {number}")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fieldlist",
        description="Expand (Type) name field lists into declarations and a serialize routine",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    comp = sub.add_parser("compile", help="Generate code from a field list or schema file")
    source = comp.add_mutually_exclusive_group(required=True)
    source.add_argument("schema", nargs="?", help="Schema file (.yaml, .yml, .json or field-list text)")
    source.add_argument("--fields", help="Inline field list, e.g. \"(int) x, (bool) y\"")
    comp.add_argument("--dialect", choices=[d.value for d in Dialect], help="Target language")
    comp.add_argument("--record", help="Record name; emits a complete header/module")
    comp.add_argument("--config", help="YAML generator configuration")
    comp.add_argument("--max-fields", type=_non_negative_int, help="Override the field ceiling")
    comp.add_argument("-o", "--output", help="Write to file instead of stdout")

    exp = sub.add_parser("expand", help="Expand SERIALIZABLE(...) invocations in C++ source")
    exp.add_argument("source", help="C++ source file")
    exp.add_argument("--macro", default=DEFAULT_MACRO, help="Invocation name (default: %(default)s)")
    exp.add_argument("--config", help="YAML generator configuration")
    exp.add_argument("-o", "--output", help="Write to file instead of stdout")
    return parser


def _write(text: str, output: Optional[str]) -> None:
    if output:
        with open(output, 'w', encoding='utf-8') as f:
            f.write(text)
        LOGGER.info("wrote %s", output)
    else:
        sys.stdout.write(text if text.endswith("\n") else text + "\n")


def _run_compile(args: argparse.Namespace, config: GeneratorConfig) -> None:
    if args.max_fields is not None:
        config.max_fields = args.max_fields
    record = args.record
    if args.fields is not None:
        source = args.fields
    else:
        schema_record, source = load_schema(args.schema)
        record = record or schema_record
    dialect = args.dialect or config.dialect
    compiled = compile_field_list(source, config)
    _write(generate(compiled, dialect, record_name=record, config=config), args.output)


def _run_expand(args: argparse.Namespace, config: GeneratorConfig) -> None:
    expanded = expand_file(args.source, macro=args.macro, config=config)
    _write(expanded, args.output)


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config) if args.config else GeneratorConfig()
        if args.command == "compile":
            _run_compile(args, config)
        else:
            _run_expand(args, config)
    except (FieldListError, OSError, UnicodeDecodeError) as e:
        print(f"fieldlist: error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

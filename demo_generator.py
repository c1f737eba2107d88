#!/usr/bin/env python3
"""
Demo: Generate the Car record in both dialects.

Shows the bare body, the full C++ header and the Python module.
"""

from fieldlist.compiler import compile_field_list
from fieldlist.examples import CAR_FIELDS_TEXT
from fieldlist.backends import generate, save_record_file, Dialect


def main():
    compiled = compile_field_list(CAR_FIELDS_TEXT)

    print("=" * 80)
    print("FIELD-LIST GENERATOR DEMO")
    print("=" * 80)

    for dialect in [Dialect.CPP, Dialect.PYTHON]:
        print(f"\n{dialect.value.upper()} BODY:")
        print("-" * 80)
        print(generate(compiled, dialect))

        print(f"\n{dialect.value.upper()} RECORD:")
        print("-" * 80)
        print(generate(compiled, dialect, record_name="Car"))

        filename = "car.hpp" if dialect == Dialect.CPP else "car.py"
        save_record_file(compiled, "Car", filename, dialect=dialect)
        print(f"\nSaved to: {filename}")


if __name__ == "__main__":
    main()

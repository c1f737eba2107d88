"""
Example field lists used by the demo script and the tests.

The Car record is the one from the SERIALIZABLE header documentation.
"""
from fieldlist.model import FieldList, FieldSpec


CAR_FIELDS_TEXT = """
    (std::string) name,
    (int) age,
    (bool) isBest
"""


def build_example_car_field_list() -> FieldList:
    return FieldList(fields=[
        FieldSpec(type="std::string", name="name"),
        FieldSpec(type="int", name="age"),
        FieldSpec(type="bool", name="isBest"),
    ])


def build_example_wide_field_list(field_count: int = 10, type_name: str = "int") -> FieldList:
    """A list of ``field_count`` fields named f0, f1, ... for ceiling and ordering checks."""
    return FieldList(fields=[
        FieldSpec(type=type_name, name=f"f{i}") for i in range(field_count)
    ])


def example_wide_field_text(field_count: int = 10, type_name: str = "int") -> str:
    return ", ".join(f"({type_name}) f{i}" for i in range(field_count))

"""
Tests for Field-List Model Objects

These tests verify:
    - Basic model creation
    - Ordered retrieval helpers
    - The declaration/binding synchronization check
"""

import pytest
from fieldlist.model import (
    Binding,
    CompiledFieldList,
    Declaration,
    FieldList,
    FieldSpec,
    SerializeRoutine,
)
from fieldlist.examples import build_example_car_field_list


class TestFieldSpec:
    """Test FieldSpec objects."""

    def test_create_field_spec(self):
        spec = FieldSpec(type="int", name="age")
        assert spec.type == "int"
        assert spec.name == "age"

    def test_field_spec_is_immutable(self):
        spec = FieldSpec(type="int", name="age")
        with pytest.raises(AttributeError):
            spec.name = "other"


class TestFieldList:
    """Test FieldList objects."""

    def test_empty_by_default(self):
        fl = FieldList()
        assert len(fl) == 0
        assert fl.names() == []

    def test_iteration_keeps_order(self):
        fl = build_example_car_field_list()
        assert [spec.name for spec in fl] == ["name", "age", "isBest"]
        assert fl.types() == ["std::string", "int", "bool"]

    def test_get_field(self):
        fl = build_example_car_field_list()
        assert fl.get_field("age") == FieldSpec(type="int", name="age")
        assert fl.get_field("Age") is None

    def test_duplicate_names(self):
        fl = FieldList(fields=[
            FieldSpec("int", "a"),
            FieldSpec("int", "b"),
            FieldSpec("int", "a"),
            FieldSpec("int", "a"),
            FieldSpec("int", "b"),
        ])
        assert fl.duplicate_names() == ["a", "b"]

    def test_no_duplicates(self):
        assert build_example_car_field_list().duplicate_names() == []


class TestCompiledFieldList:
    """Test the synchronization invariant helper."""

    def test_synchronized(self):
        compiled = CompiledFieldList(
            field_list=FieldList(fields=[FieldSpec("int", "x")]),
            declarations=[Declaration("int", "x")],
            routine=SerializeRoutine(archive="ar", bindings=[Binding("x", "x")]),
        )
        assert compiled.is_synchronized()

    def test_out_of_order_is_not_synchronized(self):
        compiled = CompiledFieldList(
            field_list=FieldList(),
            declarations=[Declaration("int", "x"), Declaration("int", "y")],
            routine=SerializeRoutine(archive="ar", bindings=[Binding("y", "y"), Binding("x", "x")]),
        )
        assert not compiled.is_synchronized()

    def test_default_routine_is_empty(self):
        compiled = CompiledFieldList(field_list=FieldList())
        assert compiled.routine.bindings == []
        assert compiled.is_synchronized()

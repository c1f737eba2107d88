"""
Tests for the field-list parser (Zipper).

These tests verify:
    - (Type) name entries zip into ordered pairs
    - Types are opaque: commas and parentheses inside them are kept
    - Malformed entries fail with a positioned diagnostic
    - The field ceiling is enforced and configurable
"""

import pytest

from fieldlist.parser import parse_field_list, check_field_count, DEFAULT_MAX_FIELDS
from fieldlist.errors import FieldListSyntaxError, FieldLimitError
from fieldlist.examples import (
    CAR_FIELDS_TEXT,
    build_example_car_field_list,
    build_example_wide_field_list,
    example_wide_field_text,
)


class TestZipping:
    """Test pairing of types and names."""

    def test_two_entries(self):
        """Scenario A input zips into two pairs in order."""
        fl = parse_field_list("(Integer) count, (Boolean) active")
        assert fl.types() == ["Integer", "Boolean"]
        assert fl.names() == ["count", "active"]

    def test_single_entry(self):
        fl = parse_field_list("(Text) label")
        assert len(fl) == 1
        assert fl.fields[0].type == "Text"
        assert fl.fields[0].name == "label"

    def test_empty_input_is_empty_list(self):
        assert len(parse_field_list("")) == 0

    def test_whitespace_only_is_empty_list(self):
        assert len(parse_field_list("  \n\t  ")) == 0

    def test_multiline_car_example(self):
        fl = parse_field_list(CAR_FIELDS_TEXT)
        assert fl.fields == build_example_car_field_list().fields

    def test_source_kept_for_diagnostics(self):
        text = "(int) x"
        assert parse_field_list(text).source == text

    def test_no_space_between_type_and_name(self):
        fl = parse_field_list("(int)x,(bool)y")
        assert fl.names() == ["x", "y"]

    def test_names_are_case_sensitive(self):
        fl = parse_field_list("(int) Count, (int) count, (int) COUNT")
        assert fl.names() == ["Count", "count", "COUNT"]


class TestOpaqueTypes:
    """Test that type blobs are never split on internal punctuation."""

    def test_template_with_comma(self):
        fl = parse_field_list("(std::map<int, std::string>) lookup, (int) size")
        assert fl.types() == ["std::map<int, std::string>", "int"]
        assert fl.names() == ["lookup", "size"]

    def test_nested_parentheses(self):
        fl = parse_field_list("(std::function<void(int, int)>) callback")
        assert fl.fields[0].type == "std::function<void(int, int)>"
        assert fl.fields[0].name == "callback"

    def test_surrounding_whitespace_stripped(self):
        fl = parse_field_list("(  unsigned long  ) total")
        assert fl.fields[0].type == "unsigned long"

    def test_inner_text_kept_verbatim(self):
        fl = parse_field_list("(std::array<int,  3>) xs")
        assert fl.fields[0].type == "std::array<int,  3>"


class TestSyntaxErrors:
    """Test malformed-entry diagnostics."""

    def test_missing_type_delimiter(self):
        """Scenario D: entry without parentheses fails."""
        text = "(int) count, bool active"
        with pytest.raises(FieldListSyntaxError) as exc:
            parse_field_list(text)
        err = exc.value
        assert err.entry_index == 1
        assert text[err.offset:].startswith("bool")
        assert "expected '('" in err.message

    def test_missing_delimiter_on_first_entry(self):
        with pytest.raises(FieldListSyntaxError) as exc:
            parse_field_list("int count")
        assert exc.value.entry_index == 0
        assert exc.value.offset == 0

    def test_unbalanced_parentheses(self):
        with pytest.raises(FieldListSyntaxError, match="unbalanced"):
            parse_field_list("(std::vector<int> values")

    def test_empty_type(self):
        with pytest.raises(FieldListSyntaxError, match="empty field type"):
            parse_field_list("() x")

    def test_missing_name(self):
        with pytest.raises(FieldListSyntaxError, match="expected field name"):
            parse_field_list("(int)")

    def test_invalid_name(self):
        with pytest.raises(FieldListSyntaxError, match="expected field name"):
            parse_field_list("(int) 9lives")

    def test_text_after_name(self):
        with pytest.raises(FieldListSyntaxError) as exc:
            parse_field_list("(int) x y")
        assert "after field name 'x'" in exc.value.message

    def test_trailing_comma(self):
        with pytest.raises(FieldListSyntaxError, match="empty entry"):
            parse_field_list("(int) x,")

    def test_double_comma(self):
        with pytest.raises(FieldListSyntaxError) as exc:
            parse_field_list("(int) x,, (int) y")
        assert exc.value.entry_index == 1

    def test_stray_closing_parenthesis(self):
        with pytest.raises(FieldListSyntaxError):
            parse_field_list("(int) x)")

    def test_error_reports_line_and_column(self):
        text = "(int) a,\n(bool) b,\nfloat c"
        with pytest.raises(FieldListSyntaxError) as exc:
            parse_field_list(text)
        assert exc.value.line == 3
        assert exc.value.column == 1
        assert exc.value.entry_index == 2

    def test_diagnostic_has_caret(self):
        with pytest.raises(FieldListSyntaxError) as exc:
            parse_field_list("(int) x y")
        rendered = str(exc.value)
        assert rendered.startswith("1:9: entry 1:")
        assert rendered.splitlines()[-1].strip() == "^"


class TestFieldCeiling:
    """Test the maximum field count."""

    def test_default_ceiling_value(self):
        assert DEFAULT_MAX_FIELDS == 256

    def test_at_ceiling_is_accepted(self):
        fl = parse_field_list(example_wide_field_text(DEFAULT_MAX_FIELDS))
        assert len(fl) == DEFAULT_MAX_FIELDS

    def test_over_ceiling_fails(self):
        with pytest.raises(FieldLimitError) as exc:
            parse_field_list(example_wide_field_text(DEFAULT_MAX_FIELDS + 1))
        assert exc.value.limit == DEFAULT_MAX_FIELDS
        assert str(DEFAULT_MAX_FIELDS) in str(exc.value)

    def test_custom_ceiling(self):
        with pytest.raises(FieldLimitError) as exc:
            parse_field_list("(int) a, (int) b, (int) c", max_fields=2)
        assert exc.value.limit == 2
        assert exc.value.count == 3

    def test_trailing_comma_at_ceiling_is_a_syntax_error(self):
        text = example_wide_field_text(DEFAULT_MAX_FIELDS) + ","
        with pytest.raises(FieldListSyntaxError, match="empty entry"):
            parse_field_list(text)

    def test_unbounded(self):
        fl = parse_field_list(example_wide_field_text(1000), max_fields=None)
        assert len(fl) == 1000
        assert fl.names()[-1] == "f999"

    def test_check_field_count_on_prebuilt_list(self):
        check_field_count(build_example_wide_field_list(3), max_fields=3)
        with pytest.raises(FieldLimitError):
            check_field_count(build_example_wide_field_list(4), max_fields=3)

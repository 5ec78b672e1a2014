"""
Unit Tests for Item Processing and Result Records

Test Organization:
- TestStringifyItem: Rendering of every JSON value kind
- TestProcessItem: Transformation and log message
- TestFormatResult: ProcessedRecord construction and serialization
"""

import dataclasses

import pytest

from services.batch_processor.formatter import ProcessedRecord, format_result
from services.batch_processor.item_processor import ItemResult, process_item, stringify_item


class TestStringifyItem:
    """Tests for stringify_item"""

    @pytest.mark.parametrize("value,expected", [
        ("abc", "abc"),
        ("", ""),
        (1, "1"),
        (-42, "-42"),
        (2.5, "2.5"),
        (1.0, "1"),
        (0.1, "0.1"),
        (1e21, "1e+21"),
        (1.5e22, "1.5e+22"),
        (0.00001, "0.00001"),
        (0.000123, "0.000123"),
        (-0.0005, "-0.0005"),
        (0.000001, "0.000001"),
        (1.5e-7, "1.5e-7"),
        (1e-7, "1e-7"),
        (-2.5e-10, "-2.5e-10"),
        (1e-100, "1e-100"),
        (123456.789, "123456.789"),
        (True, "true"),
        (False, "false"),
        (None, "null"),
        ([1, "a"], '[1,"a"]'),
        ([], "[]"),
        ({"a": 1, "b": [True, None]}, '{"a":1,"b":[true,null]}'),
        ({"name": "café"}, '{"name":"café"}'),
        ([1.0], "[1]"),
        ({"a": 2.0, "b": [0.00001, 1.5e-7]}, '{"a":2,"b":[0.00001,1.5e-7]}'),
        ([[True, None, "x"], {}], '[[true,null,"x"],{}]'),
        ({"q": "say \"hi\""}, '{"q":"say \\"hi\\""}'),
    ])
    def test_stringify(self, value, expected):
        assert stringify_item(value) == expected

    def test_bool_is_not_treated_as_number(self):
        """bool is an int subclass but must render as a JSON literal"""
        assert stringify_item(True) != "1"

    def test_small_float_length_uses_positional_form(self):
        """The logged length counts the positional rendering, not the exponent form"""
        outcome = process_item(0.00001, 0)
        assert outcome.result == "0.00001 [processed #1]"
        assert outcome.logs == "Successfully processed item #1 with length 7."

    def test_nested_integral_float_matches_top_level(self):
        assert stringify_item([1.0, 2]) == "[1,2]"
        assert stringify_item(1.0) == "1"


class TestProcessItem:
    """Tests for process_item"""

    def test_string_item(self):
        outcome = process_item("abc", 0)

        assert outcome == ItemResult(
            result="ABC [processed #1]",
            logs="Successfully processed item #1 with length 3.",
        )

    def test_number_item(self):
        outcome = process_item(1, 0)
        assert outcome.result == "1 [processed #1]"
        assert outcome.logs == "Successfully processed item #1 with length 1."

    def test_index_is_one_based_in_annotation(self):
        outcome = process_item("x", 9)
        assert outcome.result == "X [processed #10]"
        assert outcome.logs.startswith("Successfully processed item #10 ")

    def test_object_item_uses_compact_json(self):
        outcome = process_item({"k": "v"}, 1)
        assert outcome.result == '{"K":"V"} [processed #2]'
        # length of '{"k":"v"}' before upper-casing
        assert outcome.logs == "Successfully processed item #2 with length 9."

    def test_null_item(self):
        outcome = process_item(None, 0)
        assert outcome.result == "NULL [processed #1]"
        assert outcome.logs == "Successfully processed item #1 with length 4."

    def test_length_counts_stringified_form(self):
        outcome = process_item(12345, 0)
        assert outcome.logs.endswith("with length 5.")


class TestFormatResult:
    """Tests for format_result and ProcessedRecord"""

    def test_format_result_fields(self):
        record = format_result("abc", "ABC [processed #1]", "ok")
        assert record == ProcessedRecord(input="abc", result="ABC [processed #1]", logs="ok")

    def test_to_dict_key_order(self):
        record = format_result({"a": 1}, None, "Error processing item #1: boom")
        assert list(record.to_dict()) == ["input", "result", "logs"]
        assert record.to_dict() == {
            "input": {"a": 1},
            "result": None,
            "logs": "Error processing item #1: boom",
        }

    def test_record_is_immutable(self):
        record = format_result(1, "1 [processed #1]", "ok")
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.result = "changed"  # type: ignore[misc]

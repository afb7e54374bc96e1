"""Tests for masterdata_ingestion.mapping.coercion."""

import math
import struct
from enum import IntEnum

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from masterdata_ingestion.mapping.coercion import coerce, resolve_parser
from masterdata_kernel.domain.dtos import BLANK_VALUE, INVALID_VALUE, CoercionResult
from masterdata_kernel.domain.types import INTEGER_BOUNDS, FieldType
from masterdata_kernel.exceptions import UnsupportedFieldTypeError

from masterdata_samples import Rank, Rarity


class Level(IntEnum):
    ONE = 1
    TWO = 2


class Shape:
    pass


class TestIntegers:
    def test_int32(self):
        r = coerce(FieldType.INT32, "42", "id")
        assert r.success and r.value == 42 and r.error is None

    def test_sign_and_surrounding_whitespace(self):
        assert coerce(FieldType.INT16, " -7 ").value == -7
        assert coerce(FieldType.INT16, "+7").value == 7

    def test_unparsable_text(self):
        r = coerce(FieldType.INT32, "abc", "id")
        assert not r.success
        assert r.value == 0
        assert r.error.code == INVALID_VALUE
        assert r.error.field == "id"
        assert r.error.details == {"field_type": "int32", "raw_value": "abc"}

    @pytest.mark.parametrize("text", ["1.5", "1e3", "0x10", "1_000", "٣"])
    def test_non_decimal_forms_rejected(self, text):
        assert not coerce(FieldType.INT64, text).success

    @pytest.mark.parametrize(
        "field_type, too_small, too_large",
        [
            (FieldType.INT8, "-129", "128"),
            (FieldType.UINT8, "-1", "256"),
            (FieldType.INT32, "-2147483649", "2147483648"),
            (FieldType.UINT64, "-1", "18446744073709551616"),
        ],
    )
    def test_out_of_range_rejected(self, field_type, too_small, too_large):
        assert not coerce(field_type, too_small).success
        assert not coerce(field_type, too_large).success

    @settings(max_examples=200, suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture])
    @given(data=st.data())
    def test_every_in_range_value_round_trips(self, data):
        field_type = data.draw(st.sampled_from(sorted(INTEGER_BOUNDS, key=lambda t: t.value)))
        low, high = INTEGER_BOUNDS[field_type]
        value = data.draw(st.integers(min_value=low, max_value=high))

        r = coerce(field_type, str(value))
        assert r.success
        assert r.value == value


class TestFloats:
    def test_float64(self):
        assert coerce(FieldType.FLOAT64, "3.25").value == 3.25
        assert coerce(FieldType.FLOAT64, "-1e-3").value == -0.001

    def test_float32_rounds_to_single_precision(self):
        r = coerce(FieldType.FLOAT32, "0.1")
        assert r.success
        assert r.value != 0.1
        assert math.isclose(r.value, 0.1, rel_tol=1e-6)

    @pytest.mark.parametrize("text", ["0.1", "3.14159", "-2.5e-3", "1e38", "16777217"])
    def test_float32_round_trips_at_single_precision(self, text):
        r = coerce(FieldType.FLOAT32, text)
        assert r.success
        assert struct.pack("<f", r.value) == struct.pack("<f", float(text))
        assert struct.unpack("<f", struct.pack("<f", r.value))[0] == r.value

    def test_float32_overflow_fails(self):
        assert not coerce(FieldType.FLOAT32, "1e39").success
        assert coerce(FieldType.FLOAT64, "1e39").success

    def test_underscores_rejected(self):
        assert not coerce(FieldType.FLOAT64, "1_0.5").success

    def test_garbage_defaults_to_zero(self):
        r = coerce(FieldType.FLOAT64, "fast")
        assert not r.success and r.value == 0.0


class TestBooleans:
    @pytest.mark.parametrize("text, expected", [("true", True), ("TRUE", True), (" False ", False)])
    def test_true_false_words(self, text, expected):
        r = coerce(FieldType.BOOLEAN, text)
        assert r.success and r.value is expected

    @pytest.mark.parametrize("text", ["yes", "1", "0", "t"])
    def test_other_words_rejected(self, text):
        r = coerce(FieldType.BOOLEAN, text)
        assert not r.success and r.value is False


class TestCharAndString:
    def test_char(self):
        assert coerce(FieldType.CHAR, "A").value == "A"

    def test_char_needs_exactly_one_character(self):
        r = coerce(FieldType.CHAR, "AB")
        assert not r.success and r.value == "\0"

    def test_string_passthrough(self):
        assert coerce(FieldType.STRING, "  padded ").value == "  padded "

    def test_blank_string_is_empty(self):
        for blank in (None, ""):
            r = coerce(FieldType.STRING, blank)
            assert r.success and r.value == ""


class TestEnums:
    def test_parsed_by_integer_value(self):
        r = coerce(Rank, "2", "rank")
        assert r.success and r.value is Rank.HIGH

    def test_plain_enum_with_int_values(self):
        assert coerce(Rarity, "5").value is Rarity.RARE

    def test_member_name_is_not_accepted(self):
        r = coerce(Rank, "HIGH", "rank")
        assert not r.success
        assert r.error.code == INVALID_VALUE
        assert r.value is Rank.LOW

    def test_undefined_value_rejected(self):
        r = coerce(Level, "7")
        assert not r.success
        assert r.value is Level.ONE

    def test_underlying_range_enforced(self):
        assert not coerce(Rank, str(2**31)).success


class TestBlankCells:
    @pytest.mark.parametrize(
        "target", [FieldType.INT32, FieldType.FLOAT64, FieldType.BOOLEAN, FieldType.CHAR, Rank]
    )
    def test_blank_non_string_is_skipped(self, target):
        r = coerce(target, None, "col")
        assert not r.success
        assert r.error.code == BLANK_VALUE
        assert "Skipped blank value" in r.error.message

    def test_empty_text_is_blank(self):
        assert coerce(FieldType.INT32, "").error.code == BLANK_VALUE

    def test_whitespace_is_not_blank(self):
        assert coerce(FieldType.INT32, "   ").error.code == INVALID_VALUE


class TestUnsupportedTypes:
    def test_raises_and_logs(self, captured_logs):
        with pytest.raises(UnsupportedFieldTypeError) as exc_info:
            coerce(Shape, "1", "shape")
        assert exc_info.value.field_name == "shape"

        logs = captured_logs()
        errors = [r for r in logs if r["message"] == "unsupported_field_type"]
        assert errors and errors[0]["level"] == "ERROR"
        assert errors[0]["field"] == "shape"

    def test_raises_even_for_blank_cell(self):
        with pytest.raises(UnsupportedFieldTypeError):
            coerce(Shape, None)

    def test_builtin_python_type_is_unsupported(self):
        with pytest.raises(UnsupportedFieldTypeError):
            resolve_parser(int)


class TestCoercionResult:
    def test_unpacks_as_value_and_flag(self):
        value, ok = coerce(FieldType.INT32, "5")
        assert (value, ok) == (5, True)

    def test_failed_result_unpacks_default(self):
        value, ok = coerce(FieldType.INT32, "x")
        assert (value, ok) == (0, False)

    def test_is_frozen_dataclass(self):
        r = CoercionResult(success=True, value=1)
        with pytest.raises(AttributeError):
            r.value = 2  # type: ignore[misc]

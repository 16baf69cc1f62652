"""Tests for shading type tags."""

import numpy as np
import pytest

from exsl.types import (
    EXSLFragVSInput,
    HLSLBool,
    HLSLDouble,
    HLSLFloat,
    HLSLFloat2,
    HLSLFloat3,
    HLSLFloat4,
    HLSLHalf,
    HLSLInt,
    HLSLNull,
    HLSLUInt,
    HLSLUnregisteredType,
    PayloadKind,
    ScalarType,
    format_number,
    instantiate,
)


class TestScalarTypes:
    """Test scalar type tags."""

    @pytest.mark.parametrize(
        "type_class, name, dtype",
        [
            (HLSLBool, "bool", np.bool_),
            (HLSLInt, "int", np.int32),
            (HLSLUInt, "uint", np.uint32),
            (HLSLHalf, "half", np.float16),
            (HLSLFloat, "float", np.float32),
            (HLSLDouble, "double", np.float64),
        ],
    )
    def test_default_instance(self, type_class, name, dtype):
        """Test that default instances carry the canonical name and a zero payload."""
        tag = type_class()
        assert tag.name == name
        assert str(tag) == name
        assert tag.kind == PayloadKind.SCALAR
        assert isinstance(tag.value, dtype)
        assert tag.value == 0

    def test_value_conversion(self):
        """Test that values are stored with the type's dtype."""
        assert HLSLInt(3.7).value == 3
        assert HLSLFloat(0.5).value == np.float32(0.5)
        assert HLSLBool(1).value

    def test_literals(self):
        """Test literal rendering of scalars."""
        assert HLSLBool(True).literal() == "true"
        assert HLSLBool(False).literal() == "false"
        assert HLSLInt(-3).literal() == "-3"
        assert HLSLFloat(1.5).literal() == "1.5"
        assert HLSLFloat(2).literal() == "2"

    def test_null_type(self):
        """Test the NULL type."""
        null = HLSLNull()
        assert null.name == "NULL"
        assert null.value == 0

    def test_equality(self):
        """Test that scalar tags compare as types, payloads through same_value."""
        assert HLSLFloat(1.0) == HLSLFloat(2.0)
        assert HLSLFloat(1.0) != HLSLDouble(1.0)
        assert HLSLFloat(1.0).same_value(HLSLFloat(1.0))
        assert not HLSLFloat(1.0).same_value(HLSLFloat(2.0))
        assert not HLSLFloat(1.0).same_value(HLSLDouble(1.0))
        assert len({HLSLFloat(), HLSLFloat(3.0)}) == 1

    def test_comparison_with_other_objects(self):
        """Test that tags never equal plain values."""
        assert HLSLFloat() != "float"
        assert HLSLFloat() != 0
        assert HLSLFloat().__eq__("float") is NotImplemented


class TestVectorTypes:
    """Test vector type tags."""

    def test_components(self):
        """Test component access."""
        v = HLSLFloat4(1, 2, 3, 4)
        assert (v.x, v.y, v.z, v.w) == (1.0, 2.0, 3.0, 4.0)
        assert v.kind == PayloadKind.VECTOR

    def test_zero_padding(self):
        """Test that missing components are zero."""
        assert HLSLFloat3(1).to_tuple() == (1.0, 0.0, 0.0)
        assert HLSLFloat2().to_tuple() == (0.0, 0.0)

    def test_sequence_input(self):
        """Test construction from a list or an array."""
        assert HLSLFloat2([1, 2]).same_value(HLSLFloat2(1, 2))
        assert HLSLFloat3(np.array([1, 2, 3])).same_value(HLSLFloat3(1, 2, 3))

    def test_too_many_components(self):
        """Test that extra components are rejected."""
        with pytest.raises(ValueError):
            HLSLFloat2(1, 2, 3)

    def test_literal(self):
        """Test literal rendering of vectors."""
        assert HLSLFloat2(0, 0).literal() == "float2(0, 0)"
        assert HLSLFloat2(10.5, -3).literal() == "float2(10.5, -3)"
        assert HLSLFloat4(1, 0, 0, 1).literal() == "float4(1, 0, 0, 1)"

    @pytest.mark.parametrize(
        "components", [(1234.5678, 250000.5), (0.1, -0.3), (1e-7, 3.4e38)]
    )
    def test_literal_keeps_precision(self, components):
        """Test that literal components read back to the same float32 values."""
        vector = HLSLFloat2(components)
        text = vector.literal()
        values = [float(c) for c in text[len("float2(") : -1].split(",")]
        assert HLSLFloat2(values).same_value(vector)

    def test_equality(self):
        """Test vector equality."""
        assert HLSLFloat2(1, 2) == HLSLFloat2(2, 1)
        assert HLSLFloat2(1, 2).same_value(HLSLFloat2(1, 2))
        assert not HLSLFloat2(1, 2).same_value(HLSLFloat2(2, 1))
        assert HLSLFloat2(0, 0) != HLSLFloat3(0, 0, 0)


class TestOtherTypes:
    """Test struct and unregistered type tags."""

    def test_struct(self):
        """Test struct payload."""
        tag = EXSLFragVSInput()
        assert tag.name == "EXSLFragVSInput"
        assert tag.kind == PayloadKind.STRUCT
        assert tag.value == ()

    def test_unregistered(self):
        """Test the unregistered fallback variant."""
        tag = HLSLUnregisteredType("Light")
        assert tag.name == "Light"
        assert tag.value is None
        assert tag.kind == PayloadKind.OPAQUE
        assert tag == HLSLUnregisteredType("Light")
        assert tag != HLSLUnregisteredType("Material")

    def test_unregistered_never_equals_registered(self):
        """Test that an unregistered tag spelled like a builtin is still distinct."""
        assert HLSLUnregisteredType("float") != HLSLFloat()
        assert HLSLFloat() != HLSLUnregisteredType("float")

    def test_nameless_type(self):
        """Test that a type without a canonical name falls back to 'null'."""

        class Nameless(ScalarType):
            pass

        assert Nameless().name == "null"


class TestHelpers:
    """Test module helpers."""

    def test_instantiate(self):
        """Test getting a tag from a class or an instance."""
        assert instantiate(HLSLFloat) == HLSLFloat()
        tag = HLSLFloat2(1, 2)
        assert instantiate(tag) is tag

    def test_instantiate_invalid(self):
        """Test that non-type arguments are rejected."""
        with pytest.raises(TypeError):
            instantiate("float")

    @pytest.mark.parametrize(
        "value, expected",
        [
            (0.0, "0"),
            (1.0, "1"),
            (0.25, "0.25"),
            (-3.0, "-3"),
            (np.float32(0.1), "0.1"),
            (np.float32(250000.5), "250000.5"),
        ],
    )
    def test_format_number(self, value, expected):
        assert format_number(value) == expected

"""Tests for type references and the type-term parser."""

import pytest
from hypothesis import given

from valuecraft.encode import (
    Array,
    Defined,
    Factory,
    Parameterized,
    Parameters,
    Parser,
    Primitive,
    Reference,
    TypeParseError,
    Variable,
    Wildcard,
)

from strategies import type_refs


class TestParser:
    """Tests for Parser."""

    def test_reference(self, parser):
        assert parser.parse("String") == Reference("String")

    def test_qualified_reference(self, parser):
        assert parser.parse("java.util . List") == Reference("java.util.List")

    def test_primitive_and_array(self, parser):
        assert parser.parse("int") == Primitive("int")
        assert parser.parse("int[][]") == Array(Array(Primitive("int")))

    def test_variable_in_scope(self, parser):
        assert parser.parse("T") == Variable("T")
        assert parser.parse("V") == Reference("V")

    def test_nested_arguments(self, parser):
        parsed = parser.parse("Map<T, List<U>>")
        assert parsed == Parameterized(
            Reference("Map"),
            (Variable("T"), Parameterized(Reference("List"), (Variable("U"),))),
        )
        assert str(parsed) == "Map<T, List<U>>"

    def test_wildcards(self, parser):
        parsed = parser.parse("List<? extends Foo>")
        assert parsed.arguments == (Wildcard("extends", Reference("Foo")),)
        assert str(parser.parse("Class< ? >")) == "Class<?>"

    def test_defined_discrimination(self, parser):
        assert isinstance(parser.parse("Foo"), Defined)
        assert isinstance(parser.parse("Foo<T>"), Defined)
        assert not isinstance(parser.parse("T"), Defined)
        assert not isinstance(parser.parse("int"), Defined)
        assert not isinstance(parser.parse("Foo[]"), Defined)

    @pytest.mark.parametrize("text", [
        "",
        "   ",
        "List<",
        "Foo>",
        "Foo Bar",
        "int<String>",
        "T<String>",
        "?",
        "Foo[",
        "Foo.",
        "Map<K,,V>",
    ])
    def test_malformed_raises(self, parser, text):
        with pytest.raises(TypeParseError, match="Cannot parse type"):
            parser.parse(text)

    def test_parse_error_is_value_error(self, parser):
        with pytest.raises(ValueError):
            parser.parse("List<")

    @given(type_refs)
    def test_string_form_round_trips(self, type_ref):
        """Property: parsing the string form gives back the same reference."""
        parser = Parser(Factory(), Parameters.of("T", "U"))
        assert parser.parse(str(type_ref)) == type_ref


class TestFactory:
    """Tests for Factory."""

    def test_references_are_interned(self, factory):
        assert factory.reference("Foo") is factory.reference("Foo")
        assert factory.primitive("int") is factory.primitive("int")

    def test_parser_uses_factory(self, factory):
        parser = Parser(factory, Parameters())
        assert parser.parse("Foo") is factory.reference("Foo")


class TestParameters:
    """Tests for the type-variable scope."""

    def test_introduce_returns_widened_copy(self):
        base = Parameters.of("T")
        widened = base.introduce("U")
        assert "U" not in base
        assert widened.names() == ["T", "U"]

    def test_duplicates_rejected(self):
        with pytest.raises(ValueError, match="already in scope"):
            Parameters.of("T").introduce("T")
        with pytest.raises(ValueError, match="Duplicate type variables"):
            Parameters.of("T", "T")

    def test_unknown_variable_raises(self):
        with pytest.raises(KeyError, match="Unknown type variable"):
            Parameters.of("T").variable("X")


class TestVariants:
    """Tests for variant validation."""

    def test_invalid_primitive(self):
        with pytest.raises(ValueError, match="Not a primitive"):
            Primitive("string")

    def test_parameterized_requires_arguments(self):
        with pytest.raises(ValueError, match="at least one argument"):
            Parameterized(Reference("List"), ())

    def test_wildcard_kind_and_bound_agree(self):
        with pytest.raises(ValueError):
            Wildcard("extends")
        with pytest.raises(ValueError):
            Wildcard("", Reference("Foo"))
        assert str(Wildcard("super", Reference("Foo"))) == "? super Foo"

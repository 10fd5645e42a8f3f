"""Tests for element descriptors and descriptor files."""

import logging
import textwrap

import pytest

from valuecraft.encode import (
    Factory,
    Parameterized,
    Parameters,
    Reference,
    Tag,
    TagSet,
    Variable,
    element_from_descriptor,
    load_descriptors,
)


class TestElementFromDescriptor:

    def test_full_descriptor(self):
        e = element_from_descriptor({
            "name": "withValue",
            "type": "Foo",
            "naming": "with*",
            "params": ["value: String"],
            "code": "return new Foo(value);",
            "thrown": "IllegalStateException",
            "tags": ["copy", "final"],
        })
        assert e.name == "withValue"
        assert e.naming.apply("value") == "withValue"
        assert [str(p) for p in e.params] == ["value: String"]
        assert e.thrown == (Reference("IllegalStateException"),)
        assert e.tags == TagSet.of(Tag.COPY, Tag.FINAL)
        assert e.is_copy
        assert "".join(t.text for t in e.one_liner) == "return new Foo(value);"

    def test_own_type_params_scope_other_types(self):
        e = element_from_descriptor({
            "name": "max",
            "type": "T",
            "type_params": ["T: Comparable<T>"],
            "params": ["a: T", "b: T"],
            "tags": ["helper", "static"],
        })
        assert e.type == Variable("T")
        assert [p.type for p in e.params] == [Variable("T"), Variable("T")]
        assert e.type_params[0].bounds == (Parameterized(Reference("Comparable"), (Variable("T"),)),)
        assert e.type_parameters == Parameters()
        assert e.is_static_method

    def test_ambient_scope(self):
        e = element_from_descriptor(
            {"name": "value", "type": "List<V>", "tags": ["field"]},
            parameters=Parameters.of("V"),
        )
        assert e.type == Parameterized(Reference("List"), (Variable("V"),))
        assert e.type_parameters == Parameters.of("V")

    def test_element_type_param_shadows_ambient(self):
        e = element_from_descriptor(
            {"name": "m", "type": "T", "type_params": ["T"], "tags": ["helper"]},
            parameters=Parameters.of("T"),
        )
        assert e.type == Variable("T")
        assert e.type_params[0].name == "T"
        assert e.type_parameters == Parameters.of("T")

    def test_null_naming_is_identity(self):
        e = element_from_descriptor({"name": "value", "type": "Foo", "naming": None})
        assert e.naming.is_identity
        assert str(e.naming) == "*"

    def test_shared_factory(self):
        factory = Factory()
        e = element_from_descriptor({"name": "value", "type": "Foo"}, factory=factory)
        assert e.type is factory.reference("Foo")

    def test_round_trip_through_to_dict(self):
        original = element_from_descriptor({
            "name": "hashCode",
            "type": "int",
            "code": "\n  return Objects.hash(a, b);\n",
            "tags": ["hash_code"],
        })
        assert element_from_descriptor(original.to_dict()) == original

    @pytest.mark.parametrize("descriptor,message", [
        ({"type": "Foo"}, "non-empty 'name'"),
        ({"name": "x"}, "requires a 'type'"),
        ({"name": "x", "type": "Foo", "body": "x"}, "Unknown descriptor keys"),
        ({"name": "x", "type": "Foo", "tags": ["field", "ctor"]}, "Unknown tag 'ctor'"),
        ({"name": "x", "type": "Foo", "params": [1]}, "must be a string or a list of strings"),
        ({"name": "x", "type": "Foo", "params": ["a Foo"]}, "must have the form"),
        ({"name": "x", "type": "Foo", "type_params": ["X: int"]}, "not a defined type"),
        ({"name": "x", "type": "Foo", "type_params": ["X", "X: Foo"]}, r"duplicate type parameters \['X'\]"),
        ({"name": "a b", "type": "Foo"}, "not a valid identifier"),
    ])
    def test_malformed(self, descriptor, message):
        with pytest.raises(ValueError, match=message):
            element_from_descriptor(descriptor)

    def test_warns_on_ambiguous_roles(self, caplog):
        with caplog.at_level(logging.WARNING, logger="valuecraft.encode.descriptors"):
            element_from_descriptor({"name": "x", "type": "Foo", "tags": ["copy", "equals"]})
        assert "answers several roles: is_equals, is_copy" in caplog.text


class TestLoadDescriptors:

    def test_loads_in_file_order(self, descriptor_file):
        elements = load_descriptors(descriptor_file)
        assert [e.name for e in elements] == ["value", "withValue", "max", "builder"]
        assert [e.roles() for e in elements] == [
            ["is_value_field"],
            ["is_copy"],
            ["is_static_method"],
            ["is_build"],
        ]
        assert "".join(t.text for t in elements[1].one_liner) == "return new Foo( value);"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_descriptors(tmp_path / "missing.yaml")

    @pytest.mark.parametrize("content,message", [
        ("elements: [", "Invalid YAML"),
        ("- name: x", "expected a mapping with an 'elements' list"),
        ("", "expected a mapping with an 'elements' list"),
        ("elements:\n  - just-a-string", "element #0 must be a mapping"),
        ("elements:\n  - name: ok\n    type: Foo\n  - name: bad\n    type: 'List<'", "invalid element bad"),
    ])
    def test_malformed_documents(self, tmp_path, content, message):
        path = tmp_path / "bad.yaml"
        path.write_text(textwrap.dedent(content))
        with pytest.raises(ValueError, match=message):
            load_descriptors(path)

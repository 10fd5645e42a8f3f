"""Shared fixtures for encoded element tests."""

import textwrap

import pytest

from valuecraft.encode import Factory, Parameters, Parser, Term


@pytest.fixture
def factory():
    """Fresh type factory."""
    return Factory()


@pytest.fixture
def scope():
    """Ambient type-variable scope with T and U."""
    return Parameters.of("T", "U")


@pytest.fixture
def parser(factory, scope):
    """Type parser over the T/U scope."""
    return Parser(factory, scope)


@pytest.fixture
def return_this():
    """Body ``return this;`` as three terms."""
    return (Term.word("return"), Term.space(), Term.word("this;"))


@pytest.fixture
def descriptor_file(tmp_path):
    """YAML descriptor file with one element per common role."""
    path = tmp_path / "elements.yaml"
    path.write_text(textwrap.dedent("""
        elements:
          - name: value
            type: String
            tags: [field, private, final]
          - name: withValue
            type: Foo
            naming: "with*"
            params: ["value: String"]
            code: |
              return new Foo(
                  value);
            tags: [copy]
          - name: max
            type: T
            type_params: ["T: Comparable<T>"]
            params: ["a: T", "b: T"]
            code: "return a.compareTo(b) >= 0 ? a : b;"
            tags: [helper, static]
          - name: builder
            type: Foo
            tags: [build, builder]
    """))
    return path

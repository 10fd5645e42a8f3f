"""Fluent builders for encoded elements.

Builders assemble elements harvested from encoding templates:

    element = (EncodedElementBuilder()
               .name("withValue")
               .type(factory.reference("Foo"))
               .add_params(Parameter("value", factory.reference("String")))
               .code(term_list("return new Foo(value);"))
               .add_tags(Tag.COPY)
               .build())

Builders are immutable - each method returns a new builder instance, so a
partially configured builder can be reused as a template.
"""

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional, Tuple

from .code import Term
from .element import EncodedElement, Parameter, TypeParameter
from .naming import Naming
from .tags import Tag, TagSet
from .types import Defined, Parameters, TypeRef


@dataclass(frozen=True)
class EncodedElementBuilder:
    """Immutable fluent builder for EncodedElement.

    Collection attributes accumulate through ``add_*`` methods and are
    replaced wholesale by the same-named setters.
    """
    _name: Optional[str] = None
    _type: Optional[TypeRef] = None
    _naming: Naming = field(default_factory=Naming.identity)
    _params: Tuple[Parameter, ...] = ()
    _code: Tuple[Term, ...] = ()
    _thrown: Tuple[TypeRef, ...] = ()
    _tags: TagSet = field(default_factory=TagSet)
    _type_parameters: Parameters = field(default_factory=Parameters)
    _type_params: Tuple[TypeParameter, ...] = ()

    @classmethod
    def from_element(cls, element: EncodedElement) -> "EncodedElementBuilder":
        """Start a builder holding every attribute of an existing element."""
        return cls(
            _name=element.name,
            _type=element.type,
            _naming=element.naming,
            _params=element.params,
            _code=element.code,
            _thrown=element.thrown,
            _tags=element.tags,
            _type_parameters=element.type_parameters,
            _type_params=element.type_params,
        )

    def name(self, name: str) -> "EncodedElementBuilder":
        return replace(self, _name=name)

    def type(self, type: TypeRef) -> "EncodedElementBuilder":
        return replace(self, _type=type)

    def naming(self, naming: Naming) -> "EncodedElementBuilder":
        return replace(self, _naming=naming)

    def params(self, params: Iterable[Parameter]) -> "EncodedElementBuilder":
        return replace(self, _params=tuple(params))

    def add_params(self, *params: Parameter) -> "EncodedElementBuilder":
        return replace(self, _params=self._params + params)

    def code(self, code: Iterable[Term]) -> "EncodedElementBuilder":
        return replace(self, _code=tuple(code))

    def add_code(self, *terms: Term) -> "EncodedElementBuilder":
        return replace(self, _code=self._code + terms)

    def add_thrown(self, *thrown: TypeRef) -> "EncodedElementBuilder":
        return replace(self, _thrown=self._thrown + thrown)

    def tags(self, tags: Iterable[Tag]) -> "EncodedElementBuilder":
        return replace(self, _tags=TagSet.of(*tags))

    def add_tags(self, *tags: Tag) -> "EncodedElementBuilder":
        return replace(self, _tags=self._tags.with_tags(*tags))

    def type_parameters(self, type_parameters: Parameters) -> "EncodedElementBuilder":
        return replace(self, _type_parameters=type_parameters)

    def add_type_params(self, *type_params: TypeParameter) -> "EncodedElementBuilder":
        return replace(self, _type_params=self._type_params + type_params)

    def build(self) -> EncodedElement:
        """Build the element.

        Raises:
            ValueError: If name or type is missing, or the element is
                structurally invalid
        """
        missing = [attr for attr, value in (("name", self._name), ("type", self._type)) if value is None]
        if missing:
            raise ValueError(f"Cannot build EncodedElement, missing required attributes: {missing}")

        return EncodedElement(
            name=self._name,
            type=self._type,
            naming=self._naming,
            params=self._params,
            code=self._code,
            thrown=self._thrown,
            tags=self._tags,
            type_parameters=self._type_parameters,
            type_params=self._type_params,
        )

    def __repr__(self) -> str:
        """Compact representation for debugging."""
        return (
            f"EncodedElementBuilder("
            f"name={self._name!r}, "
            f"params={len(self._params)}, "
            f"code={len(self._code)} terms, "
            f"tags=[{', '.join(self._tags.names())}])"
        )


@dataclass(frozen=True)
class TypeParameterBuilder:
    """Immutable fluent builder for TypeParameter."""
    _name: Optional[str] = None
    _bounds: Tuple[Defined, ...] = ()

    def name(self, name: str) -> "TypeParameterBuilder":
        return replace(self, _name=name)

    def add_bounds(self, *bounds: Defined) -> "TypeParameterBuilder":
        return replace(self, _bounds=self._bounds + bounds)

    def build(self) -> TypeParameter:
        if self._name is None:
            raise ValueError("Cannot build TypeParameter, missing required attribute: name")
        return TypeParameter(self._name, self._bounds)

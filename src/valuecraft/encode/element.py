"""Encoded elements: members lifted from encoding templates.

An EncodedElement describes one member (field, method, builder method or
synthesized accessor) ready to be spliced into a generated value class or
its builder. Besides the structural description it carries a TagSet, and
every role question the emitter asks is answered from the tags alone.

Key types:
- Parameter: Named, typed formal parameter (``name: Type``)
- TypeParameter: Generic parameter with nominal bounds (``T: A & B``)
- EncodedElement: Immutable member record with derived role predicates

All types are immutable and can be shared freely between threads.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

from .code import Term, join, one_liner
from .naming import Naming
from .tags import Tag, TagSet, as_tag_set
from .types import Defined, Factory, Parameters, Parser, TypeRef

_IDENTIFIER = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")

# Category predicates; a well-formed element answers at most one of them.
ROLE_PREDICATES = (
    "is_value_field",
    "is_static_field",
    "is_builder_field",
    "is_builder_static_field",
    "is_impl_field",
    "is_static_method",
    "is_value_method",
    "is_builder_method",
    "is_build",
    "is_init",
    "is_from",
    "is_expose",
    "is_equals",
    "is_hash_code",
    "is_to_string",
    "is_copy",
    "is_builder_copy",
    "is_synthetic",
)


def _check_identifier(name: str, kind: str) -> None:
    if not name:
        raise ValueError(f"{kind} name cannot be empty")
    if not _IDENTIFIER.fullmatch(name):
        raise ValueError(f"{kind} name '{name}' is not a valid identifier")


def _split_first(input: str, delimiter: str) -> Tuple[str, str, bool]:
    head, sep, tail = input.partition(delimiter)
    return head.strip(), tail.strip(), bool(sep)


@dataclass(frozen=True)
class Parameter:
    """Formal parameter of an encoded element.

    Attributes:
        name: Parameter identifier
        type: Parameter type
    """
    name: str
    type: TypeRef

    def __post_init__(self):
        _check_identifier(self.name, "Parameter")

    @classmethod
    def parse(cls, input: str, parser: Parser) -> "Parameter":
        """Parse the ``name: Type`` short form.

        The input is split on the first colon and both parts are trimmed.

        Raises:
            ValueError: If there is no colon or the name is empty
            TypeParseError: If the type text does not parse
        """
        name, type_text, has_colon = _split_first(input, ":")
        if not has_colon:
            raise ValueError(f"Parameter '{input.strip()}' must have the form 'name: Type'")
        return cls(name, parser.parse(type_text))

    def __str__(self) -> str:
        return f"{self.name}: {self.type}"


@dataclass(frozen=True)
class TypeParameter:
    """Generic parameter declared on an element.

    Attributes:
        name: Type variable name
        bounds: Nominal upper bounds in declaration order
    """
    name: str
    bounds: Tuple[Defined, ...] = ()

    def __post_init__(self):
        _check_identifier(self.name, "TypeParameter")
        bounds = tuple(self.bounds)
        for bound in bounds:
            if not isinstance(bound, Defined):
                raise TypeError(f"Bound '{bound}' of type parameter {self.name} is not a defined type")
        object.__setattr__(self, 'bounds', bounds)

    @classmethod
    def parse(cls, input: str, type_factory: Factory, type_parameters: Parameters) -> "TypeParameter":
        """Parse the ``T`` or ``T: A & B`` short form.

        Bounds are parsed in the given scope and must all be defined
        (nominal) types.

        Raises:
            ValueError: If a bound is not a defined type
            TypeParseError: If a bound does not parse
        """
        from .builder import TypeParameterBuilder

        name, bounds_text, has_colon = _split_first(input, ":")
        builder = TypeParameterBuilder().name(name)
        if not has_colon:
            return builder.build()

        parser = Parser(type_factory, type_parameters)
        for bound_text in bounds_text.split("&"):
            bound = parser.parse(bound_text.strip())
            if not isinstance(bound, Defined):
                raise ValueError(
                    f"Bound '{bound_text.strip()}' of type parameter {name} is not a defined type"
                )
            builder = builder.add_bounds(bound)
        return builder.build()

    def __str__(self) -> str:
        if not self.bounds:
            return self.name
        return f"{self.name}: {' & '.join(str(b) for b in self.bounds)}"


@dataclass(frozen=True)
class EncodedElement:
    """Normalized description of one generated member.

    Use EncodedElementBuilder to assemble instances. Role predicates are
    pure functions of ``tags``; ``one_liner`` is computed once at
    construction.

    Attributes:
        name: Member identifier
        type: Member type (field type or method return type)
        naming: Template used to derive the emitted member name
        params: Formal parameters, in positional order
        code: Body terms, empty for synthesized members
        thrown: Declared thrown types
        tags: Role facets
        type_parameters: Ambient type-variable scope of the encoding
        type_params: Type parameters declared on the member itself
    """
    name: str
    type: TypeRef
    naming: Naming = field(default_factory=Naming.identity)
    params: Tuple[Parameter, ...] = ()
    code: Tuple[Term, ...] = ()
    thrown: Tuple[TypeRef, ...] = ()
    tags: TagSet = field(default_factory=TagSet)
    type_parameters: Parameters = field(default_factory=Parameters)
    type_params: Tuple[TypeParameter, ...] = ()

    def __post_init__(self):
        """Validate structure, freeze sequences and precompute the one-liner."""
        _check_identifier(self.name, "EncodedElement")

        object.__setattr__(self, 'params', tuple(self.params))
        object.__setattr__(self, 'code', tuple(self.code))
        object.__setattr__(self, 'thrown', tuple(self.thrown))
        object.__setattr__(self, 'type_params', tuple(self.type_params))
        object.__setattr__(self, 'tags', as_tag_set(self.tags))

        names = [p.name for p in self.params]
        if len(names) != len(set(names)):
            duplicates = sorted({n for n in names if names.count(n) > 1})
            raise ValueError(f"Element {self.name}: duplicate parameter names {duplicates}")

        if Tag.FIELD in self.tags and Tag.HELPER in self.tags:
            raise ValueError(f"Element {self.name}: FIELD and HELPER tags cannot be combined")

        if self.is_inlinable and not self.type_params:
            compact = tuple(one_liner(self.code))
        else:
            compact = ()
        object.__setattr__(self, '_one_liner', compact)

    # Tag membership

    @property
    def is_to_string(self) -> bool:
        return Tag.TO_STRING in self.tags

    @property
    def is_hash_code(self) -> bool:
        return Tag.HASH_CODE in self.tags

    @property
    def is_equals(self) -> bool:
        return Tag.EQUALS in self.tags

    @property
    def is_from(self) -> bool:
        return Tag.FROM in self.tags

    @property
    def is_build(self) -> bool:
        return Tag.BUILD in self.tags

    @property
    def is_init(self) -> bool:
        return Tag.INIT in self.tags

    @property
    def is_expose(self) -> bool:
        return Tag.EXPOSE in self.tags

    @property
    def is_synthetic(self) -> bool:
        return Tag.SYNTH in self.tags

    @property
    def is_impl_field(self) -> bool:
        return Tag.IMPL in self.tags

    @property
    def in_builder(self) -> bool:
        return Tag.BUILDER in self.tags

    @property
    def is_static(self) -> bool:
        return Tag.STATIC in self.tags

    @property
    def is_final(self) -> bool:
        return Tag.FINAL in self.tags

    @property
    def is_private(self) -> bool:
        return Tag.PRIVATE in self.tags

    @property
    def is_field(self) -> bool:
        return Tag.FIELD in self.tags

    # Placement-qualified roles

    @property
    def is_copy(self) -> bool:
        return Tag.COPY in self.tags and not self.in_builder

    @property
    def is_builder_copy(self) -> bool:
        return Tag.COPY in self.tags and self.in_builder

    @property
    def is_value_field(self) -> bool:
        return (
            self.is_field
            and Tag.IMPL not in self.tags
            and not self.in_builder
            and not self.is_static
        )

    @property
    def is_static_field(self) -> bool:
        return self.is_field and not self.in_builder and self.is_static

    @property
    def is_builder_field(self) -> bool:
        return self.is_field and self.in_builder and not self.is_static

    @property
    def is_builder_static_field(self) -> bool:
        return self.is_field and self.in_builder and self.is_static

    @property
    def is_static_method(self) -> bool:
        return Tag.HELPER in self.tags and self.is_static and not self.in_builder

    @property
    def is_value_method(self) -> bool:
        return Tag.HELPER in self.tags and not self.is_static and not self.in_builder

    @property
    def is_builder_method(self) -> bool:
        return Tag.HELPER in self.tags and self.in_builder

    # Inlining

    @property
    def is_inlinable(self) -> bool:
        """Standard accessors, ``from`` and value-side copy may be inlined."""
        return (
            self.is_equals
            or self.is_to_string
            or self.is_hash_code
            or self.is_from
            or self.is_copy
        )

    @property
    def one_liner(self) -> Tuple[Term, ...]:
        """Body compacted to one line, or empty when the member cannot be inlined.

        Members declaring their own type parameters are never inlined.
        """
        return self._one_liner

    def roles(self) -> List[str]:
        """Names of the category predicates that hold, in ROLE_PREDICATES order."""
        return [name for name in ROLE_PREDICATES if getattr(self, name)]

    def to_dict(self) -> Dict[str, Any]:
        """Export the element as a serializable dictionary.

        The layout matches the descriptor format read by
        ``element_from_descriptor``.
        """
        return {
            "name": self.name,
            "type": str(self.type),
            "naming": str(self.naming),
            "params": [str(p) for p in self.params],
            "code": join(self.code),
            "thrown": [str(t) for t in self.thrown],
            "tags": list(self.tags.names()),
            "type_params": [str(tp) for tp in self.type_params],
        }

    def __repr__(self) -> str:
        """Compact representation for debugging."""
        params = ", ".join(str(p) for p in self.params)
        tags = ", ".join(self.tags.names())
        return f"EncodedElement({self.name}({params}): {self.type} [{tags}])"


def parse_parameters(lines: Sequence[str], parser: Parser) -> List[Parameter]:
    """Parse ``name: Type`` lines, skipping blank ones."""
    return [Parameter.parse(line, parser) for line in lines if line.strip()]

"""Encoded element model for value-type code generation.

This package describes the members lifted out of encoding templates,
their closed tag algebra and the derived role predicates the emitter
dispatches on.
"""

from .tags import Tag, TagSet
from .code import Term, term_list, one_liner, join
from .types import (
    TypeRef,
    Defined,
    Primitive,
    Reference,
    Parameterized,
    Array,
    Variable,
    Wildcard,
    Parameters,
    Factory,
    Parser,
    TypeParseError,
)
from .naming import Naming
from .element import (
    EncodedElement,
    Parameter,
    TypeParameter,
    ROLE_PREDICATES,
)
from .builder import EncodedElementBuilder, TypeParameterBuilder
from .descriptors import element_from_descriptor, load_descriptors

__all__ = [
    # Tags
    "Tag",
    "TagSet",
    # Code
    "Term",
    "term_list",
    "one_liner",
    "join",
    # Types
    "TypeRef",
    "Defined",
    "Primitive",
    "Reference",
    "Parameterized",
    "Array",
    "Variable",
    "Wildcard",
    "Parameters",
    "Factory",
    "Parser",
    "TypeParseError",
    # Naming
    "Naming",
    # Elements
    "EncodedElement",
    "Parameter",
    "TypeParameter",
    "ROLE_PREDICATES",
    "EncodedElementBuilder",
    "TypeParameterBuilder",
    # Descriptors
    "element_from_descriptor",
    "load_descriptors",
]

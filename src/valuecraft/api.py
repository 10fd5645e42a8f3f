"""Public API for valuecraft.

This module provides the public API of the encoded element model: tags,
body terms, type references, naming templates, elements and builders.
"""

from .encode import (
    Tag,
    TagSet,
    Term,
    term_list,
    one_liner,
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
    Naming,
    EncodedElement,
    Parameter,
    TypeParameter,
    ROLE_PREDICATES,
    EncodedElementBuilder,
    TypeParameterBuilder,
    element_from_descriptor,
    load_descriptors,
)

# Version
try:
    from importlib.metadata import version
    __version__ = version("valuecraft")
except Exception:
    __version__ = "0.1.0"

# Public API Export List
__all__ = [
    # Tags
    "Tag",
    "TagSet",

    # Body terms
    "Term",
    "term_list",
    "one_liner",

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

    # Version
    "__version__",
]

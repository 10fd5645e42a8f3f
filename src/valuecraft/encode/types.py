"""Type references used by encoded elements.

Type terms are written the way they appear in template source
(``Map<K, List<V>>``, ``int[]``, ``? extends Foo``) and parsed into a small
sum of reference variants. Only Reference and Parameterized are Defined,
i.e. nominal; variables, wildcards, arrays and primitives are structural.

Key types:
- TypeRef: Base of all variants
- Defined: Marker base for nominal references
- Parameters: Ambient scope of type-variable names
- Factory: Creates and interns references
- Parser: Parses one type term in a given scope
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

PRIMITIVES = frozenset(
    ["boolean", "byte", "short", "int", "long", "char", "float", "double", "void"]
)


class TypeParseError(ValueError):
    """Raised when a type term cannot be parsed."""

    def __init__(self, text: str, reason: str):
        super().__init__(f"Cannot parse type '{text}': {reason}")
        self.text = text
        self.reason = reason


class TypeRef:
    """Base class of type references."""

    __slots__ = ()


class Defined(TypeRef):
    """Nominal type reference: a named declared type, possibly parameterized."""

    __slots__ = ()


@dataclass(frozen=True)
class Primitive(TypeRef):
    name: str

    def __post_init__(self):
        if self.name not in PRIMITIVES:
            raise ValueError(f"Not a primitive type: {self.name}")

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Reference(Defined):
    """Reference to a declared type by (possibly qualified) name."""
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Parameterized(Defined):
    reference: Reference
    arguments: Tuple[TypeRef, ...]

    def __post_init__(self):
        if not self.arguments:
            raise ValueError(f"Parameterized type {self.reference} needs at least one argument")
        object.__setattr__(self, 'arguments', tuple(self.arguments))

    def __str__(self) -> str:
        return f"{self.reference}<{', '.join(str(a) for a in self.arguments)}>"


@dataclass(frozen=True)
class Array(TypeRef):
    element: TypeRef

    def __str__(self) -> str:
        return f"{self.element}[]"


@dataclass(frozen=True)
class Variable(TypeRef):
    """Type variable introduced by an enclosing Parameters scope."""
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Wildcard(TypeRef):
    """Wildcard type argument.

    Attributes:
        kind: "extends", "super", or "" for an unbounded wildcard
        bound: Bound type, None when unbounded
    """
    kind: str = ""
    bound: Optional[TypeRef] = None

    def __post_init__(self):
        if self.kind not in ("", "extends", "super"):
            raise ValueError(f"Wildcard kind must be 'extends', 'super' or '', got {self.kind}")
        if (self.kind == "") != (self.bound is None):
            raise ValueError("Wildcard bound must be given exactly when kind is set")

    def __str__(self) -> str:
        if self.bound is None:
            return "?"
        return f"? {self.kind} {self.bound}"


@dataclass(frozen=True)
class Parameters:
    """Ambient scope of type-variable names, in declaration order.

    The scope is immutable; introduce() returns a widened copy.
    """
    variables: Tuple[str, ...] = ()

    def __post_init__(self):
        names = list(self.variables)
        if len(names) != len(set(names)):
            duplicates = sorted({n for n in names if names.count(n) > 1})
            raise ValueError(f"Duplicate type variables: {duplicates}")
        object.__setattr__(self, 'variables', tuple(names))

    @classmethod
    def of(cls, *names: str) -> "Parameters":
        return cls(tuple(names))

    def introduce(self, name: str) -> "Parameters":
        if name in self.variables:
            raise ValueError(f"Type variable {name} already in scope")
        return Parameters(self.variables + (name,))

    def variable(self, name: str) -> Variable:
        if name not in self.variables:
            raise KeyError(f"Unknown type variable: {name}. Available: {list(self.variables)}")
        return Variable(name)

    def names(self) -> List[str]:
        return list(self.variables)

    def __contains__(self, name: str) -> bool:
        return name in self.variables

    def __len__(self) -> int:
        return len(self.variables)


@dataclass
class Factory:
    """Creates type references, interning references and primitives by name."""
    _references: Dict[str, Reference] = field(default_factory=dict)
    _primitives: Dict[str, Primitive] = field(default_factory=dict)

    def reference(self, name: str) -> Reference:
        ref = self._references.get(name)
        if ref is None:
            ref = self._references.setdefault(name, Reference(name))
        return ref

    def primitive(self, name: str) -> Primitive:
        prim = self._primitives.get(name)
        if prim is None:
            prim = self._primitives.setdefault(name, Primitive(name))
        return prim

    def parameterized(self, reference: Reference, arguments: List[TypeRef]) -> Parameterized:
        return Parameterized(reference, tuple(arguments))

    def array(self, element: TypeRef) -> Array:
        return Array(element)

    def wildcard(self, kind: str = "", bound: Optional[TypeRef] = None) -> Wildcard:
        return Wildcard(kind, bound)


_LEXEME = re.compile(r"\s*(?:([A-Za-z_$][A-Za-z0-9_$]*(?:\s*\.\s*[A-Za-z_$][A-Za-z0-9_$]*)*)|([<>,?\[\]]))")


class Parser:
    """Parser for a single type term.

    Names found in the Parameters scope become Variables, primitive
    keywords become Primitives and every other name a Reference.
    """

    def __init__(self, factory: Factory, parameters: Parameters):
        self.factory = factory
        self.parameters = parameters

    def parse(self, text: str) -> TypeRef:
        """Parse a type term.

        Raises:
            TypeParseError: If the text is not exactly one well-formed type
        """
        tokens = self._lex(text)
        if not tokens:
            raise TypeParseError(text, "empty type")
        pos, result = self._type(text, tokens, 0, allow_wildcard=False)
        if pos != len(tokens):
            raise TypeParseError(text, f"unexpected '{tokens[pos]}'")
        return result

    def _lex(self, text: str) -> List[str]:
        tokens = []
        pos = 0
        stripped = text.rstrip()
        while pos < len(stripped):
            match = _LEXEME.match(stripped, pos)
            if match is None:
                raise TypeParseError(text, f"unexpected character '{stripped[pos:].lstrip()[:1]}'")
            name, symbol = match.groups()
            tokens.append(re.sub(r"\s+", "", name) if name else symbol)
            pos = match.end()
        return tokens

    def _type(self, text: str, tokens: List[str], pos: int, allow_wildcard: bool) -> Tuple[int, TypeRef]:
        if pos >= len(tokens):
            raise TypeParseError(text, "unexpected end of input")

        token = tokens[pos]
        if token == "?":
            if not allow_wildcard:
                raise TypeParseError(text, "wildcard outside of type arguments")
            pos += 1
            if pos < len(tokens) and tokens[pos] in ("extends", "super"):
                kind = tokens[pos]
                pos, bound = self._type(text, tokens, pos + 1, allow_wildcard=False)
                return pos, self.factory.wildcard(kind, bound)
            return pos, self.factory.wildcard()

        if not _is_name(token):
            raise TypeParseError(text, f"expected a type name, got '{token}'")
        pos += 1

        result: TypeRef
        if pos < len(tokens) and tokens[pos] == "<":
            if token in PRIMITIVES or token in self.parameters:
                raise TypeParseError(text, f"'{token}' cannot take type arguments")
            arguments = []
            pos += 1
            while True:
                pos, argument = self._type(text, tokens, pos, allow_wildcard=True)
                arguments.append(argument)
                if pos < len(tokens) and tokens[pos] == ",":
                    pos += 1
                    continue
                if pos < len(tokens) and tokens[pos] == ">":
                    pos += 1
                    break
                raise TypeParseError(text, "unterminated type arguments")
            result = self.factory.parameterized(self.factory.reference(token), arguments)
        elif token in PRIMITIVES:
            result = self.factory.primitive(token)
        elif token in self.parameters:
            result = self.parameters.variable(token)
        else:
            result = self.factory.reference(token)

        while pos < len(tokens) and tokens[pos] == "[":
            if pos + 1 >= len(tokens) or tokens[pos + 1] != "]":
                raise TypeParseError(text, "unterminated array brackets")
            result = self.factory.array(result)
            pos += 2

        return pos, result


def _is_name(token: str) -> bool:
    return token not in ("<", ">", ",", "?", "[", "]") and token not in ("extends", "super")

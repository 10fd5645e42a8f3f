"""Lexical terms of member bodies.

Bodies harvested from encoding templates are kept as sequences of Terms
rather than text so that the emitter can rewrite identifiers without
reparsing. This module provides the Term value, a small tokenizer and the
single-line compaction used when a member is inlined.
"""

import re
from dataclasses import dataclass
from typing import Iterable, List, Literal, Sequence

TermKind = Literal["word", "whitespace", "newline", "string", "char", "delimiter", "other"]

_TOKEN = re.compile(
    r"""
    (?P<newline>\r\n|\r|\n)
    |(?P<whitespace>[ \t\f]+)
    |(?P<string>"(?:\\.|[^"\\\r\n])*"?)
    |(?P<char>'(?:\\.|[^'\\\r\n])*'?)
    |(?P<word>[A-Za-z_$][A-Za-z0-9_$]*|[0-9][A-Za-z0-9_.]*)
    |(?P<delimiter>[(){}\[\];,.@])
    |(?P<other>.)
    """,
    re.VERBOSE | re.DOTALL,
)


@dataclass(frozen=True)
class Term:
    """A single lexical token of a member body.

    Attributes:
        kind: Lexical category of the token
        text: Exact source text of the token
    """
    kind: TermKind
    text: str

    @property
    def is_whitespace(self) -> bool:
        """True for whitespace and newline terms."""
        return self.kind in ("whitespace", "newline")

    @classmethod
    def space(cls) -> "Term":
        return cls("whitespace", " ")

    @classmethod
    def word(cls, text: str) -> "Term":
        return cls("word", text)

    def __str__(self) -> str:
        return self.text


def term_list(text: str) -> List[Term]:
    """Tokenize source text into Terms.

    String and character literals are kept whole, including escapes, so
    their contents survive compaction. Joining the result gives back the
    input text exactly.
    """
    return [Term(m.lastgroup, m.group()) for m in _TOKEN.finditer(text)]


def one_liner(terms: Sequence[Term]) -> List[Term]:
    """Compact a body to a single logical line.

    Leading and trailing whitespace/newline terms are dropped and every
    interior run of them becomes one space term. Other terms are kept as is.
    """
    start, end = 0, len(terms)
    while start < end and terms[start].is_whitespace:
        start += 1
    while end > start and terms[end - 1].is_whitespace:
        end -= 1

    result: List[Term] = []
    pending_space = False
    for term in terms[start:end]:
        if term.is_whitespace:
            pending_space = True
            continue
        if pending_space:
            result.append(Term.space())
            pending_space = False
        result.append(term)
    return result


def join(terms: Iterable[Term]) -> str:
    """Render terms back to source text."""
    return "".join(t.text for t in terms)

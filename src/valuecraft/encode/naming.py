"""Naming templates for derived member names.

A template such as ``with*`` or ``*Builder`` describes how a member name is
derived from an attribute name; ``*`` marks where the attribute name goes.
A template without ``*`` is a constant name.
"""

import re
from dataclasses import dataclass

NOT_DETECTED = ""

_TEMPLATE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*|[A-Za-z0-9_$]*\*[A-Za-z0-9_$]*")


@dataclass(frozen=True)
class Naming:
    """Immutable naming template.

    Attributes:
        prefix: Text before the substitution point (whole name if constant)
        suffix: Text after the substitution point
        constant: True when the template has no substitution point
    """
    prefix: str = ""
    suffix: str = ""
    constant: bool = False

    def __post_init__(self):
        if self.constant and (self.suffix or not self.prefix):
            raise ValueError("Constant naming must carry its name in prefix only")

    @classmethod
    def parse(cls, template: str) -> "Naming":
        """Parse a naming template.

        Raises:
            ValueError: If the template is empty, has more than one '*' or
                contains characters that cannot appear in an identifier
        """
        template = template.strip()
        if not _TEMPLATE.fullmatch(template):
            raise ValueError(f"Invalid naming template '{template}'")
        if "*" not in template:
            return cls(template, "", constant=True)
        prefix, suffix = template.split("*")
        return cls(prefix, suffix)

    @classmethod
    def identity(cls) -> "Naming":
        return cls()

    @property
    def is_identity(self) -> bool:
        return not self.constant and not self.prefix and not self.suffix

    @property
    def is_constant(self) -> bool:
        return self.constant

    def apply(self, name: str) -> str:
        """Derive a member name from an attribute name."""
        if self.constant:
            return self.prefix
        if self.prefix:
            name = name[:1].upper() + name[1:]
        return f"{self.prefix}{name}{self.suffix}"

    def detect(self, name: str) -> str:
        """Recover the attribute name from a derived name.

        Returns:
            The attribute name, or NOT_DETECTED if name does not match
        """
        if self.constant:
            return name if name == self.prefix else NOT_DETECTED
        if len(name) <= len(self.prefix) + len(self.suffix):
            return NOT_DETECTED
        if not (name.startswith(self.prefix) and name.endswith(self.suffix)):
            return NOT_DETECTED
        detected = name[len(self.prefix):len(name) - len(self.suffix)]
        if self.prefix:
            if not detected[0].isupper():
                return NOT_DETECTED
            detected = detected[0].lower() + detected[1:]
        return detected

    def __str__(self) -> str:
        if self.constant:
            return self.prefix
        return f"{self.prefix}*{self.suffix}"

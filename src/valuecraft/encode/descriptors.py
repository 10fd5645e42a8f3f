"""Element descriptors: encoded elements written as plain data.

A descriptor is a mapping in the same layout produced by
``EncodedElement.to_dict()``:

    elements:
      - name: withValue
        type: Foo
        naming: "with*"
        params: ["value: String"]
        code: "return new Foo(value);"
        tags: [copy]
      - name: max
        type: T
        type_params: ["T: Comparable<T>"]
        params: ["a: T", "b: T"]
        tags: [helper, static]

Descriptor files are YAML documents with a top-level ``elements`` list.
"""

import logging
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

import yaml

from .builder import EncodedElementBuilder
from .code import term_list
from .element import EncodedElement, TypeParameter, parse_parameters
from .naming import Naming
from .tags import TagSet
from .types import Factory, Parameters, Parser

logger = logging.getLogger(__name__)

_KNOWN_KEYS = frozenset(["name", "type", "naming", "params", "code", "thrown", "tags", "type_params"])


def _as_list(value: Any, key: str, name: str) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"Element {name}: '{key}' must be a string or a list of strings")
    return value


def element_from_descriptor(
    descriptor: Mapping[str, Any],
    factory: Optional[Factory] = None,
    parameters: Optional[Parameters] = None,
) -> EncodedElement:
    """Build an EncodedElement from a descriptor mapping.

    Type parameters declared by the element are introduced into the scope
    before any other type text is parsed, so ``T`` in ``a: T`` resolves to
    the element's own type variable.

    Args:
        descriptor: Element description (see module docstring)
        factory: Type factory; a fresh one is used when omitted
        parameters: Ambient type-variable scope of the encoding

    Returns:
        The built element

    Raises:
        ValueError: If the descriptor is malformed or any short form fails
    """
    factory = factory or Factory()
    parameters = parameters or Parameters()

    unknown = set(descriptor) - _KNOWN_KEYS
    if unknown:
        raise ValueError(f"Unknown descriptor keys: {sorted(unknown)}. Available: {sorted(_KNOWN_KEYS)}")

    name = descriptor.get("name")
    if not isinstance(name, str) or not name:
        raise ValueError("Element descriptor requires a non-empty 'name'")
    if "type" not in descriptor:
        raise ValueError(f"Element {name}: descriptor requires a 'type'")

    type_param_lines = _as_list(descriptor.get("type_params"), "type_params", name)
    variables = [line.partition(":")[0].strip() for line in type_param_lines]
    if len(variables) != len(set(variables)):
        duplicates = sorted({v for v in variables if variables.count(v) > 1})
        raise ValueError(f"Element {name}: duplicate type parameters {duplicates}")

    scope = parameters
    for variable in variables:
        # A member type parameter may shadow an ambient one of the same name
        if variable not in scope:
            scope = scope.introduce(variable)
    type_params = [TypeParameter.parse(line, factory, scope) for line in type_param_lines]

    parser = Parser(factory, scope)
    builder = (EncodedElementBuilder()
               .name(name)
               .type(parser.parse(str(descriptor["type"])))
               .naming(Naming.parse(str(descriptor.get("naming") or "*")))
               .params(parse_parameters(_as_list(descriptor.get("params"), "params", name), parser))
               .code(term_list(str(descriptor.get("code") or "")))
               .type_parameters(parameters)
               .add_type_params(*type_params))

    for thrown in _as_list(descriptor.get("thrown"), "thrown", name):
        builder = builder.add_thrown(parser.parse(thrown))

    tags = TagSet.parse(_as_list(descriptor.get("tags"), "tags", name))
    element = builder.add_tags(*tags).build()

    roles = element.roles()
    if len(roles) > 1:
        logger.warning(f"Element {element.name} answers several roles: {', '.join(roles)}")
    logger.debug(f"Built element {element!r}")
    return element


def load_descriptors(
    path: Union[str, Path],
    factory: Optional[Factory] = None,
    parameters: Optional[Parameters] = None,
) -> List[EncodedElement]:
    """Load every element described in a YAML descriptor file.

    Args:
        path: YAML file with a top-level ``elements`` list
        factory: Type factory shared by all elements
        parameters: Ambient type-variable scope for all elements

    Returns:
        Elements in file order

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the document or any entry is malformed
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            document = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(document, dict) or not isinstance(document.get("elements"), list):
        raise ValueError(f"{path}: expected a mapping with an 'elements' list")

    factory = factory or Factory()
    elements = []
    for index, entry in enumerate(document["elements"]):
        if not isinstance(entry, dict):
            raise ValueError(f"{path}: element #{index} must be a mapping")
        try:
            elements.append(element_from_descriptor(entry, factory, parameters))
        except (TypeError, ValueError, KeyError) as e:
            label = entry.get("name", f"#{index}")
            raise ValueError(f"{path}: invalid element {label}: {e}") from e

    logger.info(f"Loaded {len(elements)} elements from {path}")
    return elements

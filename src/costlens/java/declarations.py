"""Method declaration extraction using structural patterns.

Finds class and method declaration headers in Java source text without
parsing it. Parameter types are normalized the way the cost analyzer
reports them: qualifiers and generic arguments are erased, class type parameters are
replaced by their bound and varargs become arrays, so a declaration and a
cost entry for the same method share one identity key.

Extraction is best-effort and never raises: headers that do not fit the
pattern are skipped.
"""

from __future__ import annotations

import logging
import re

from costlens.java.patterns import (
    MODIFIERS,
    iter_class_type_parameters,
    iter_declaration_matches,
    split_top_level,
)
from costlens.java.types import (
    MethodDeclaration,
    Position,
    Range,
    TypeExtensions,
    simple_type_name,
)

logger = logging.getLogger(__name__)

_INNERMOST_GENERIC = re.compile(r"<[^<>]*>")
_VARARGS = re.compile(r"\s*\.\.\.\s*")


def find_method_declarations(
    text: str,
    type_extensions: TypeExtensions | None = None,
) -> list[MethodDeclaration]:
    """Extract method declarations from source text.

    Args:
        text: Full source file content.
        type_extensions: Generic bounds to substitute into parameter types.
            Derived from text when omitted.

    Returns:
        Declarations in source order.

    """
    if type_extensions is None:
        type_extensions = get_generic_type_extensions(text)

    declarations: list[MethodDeclaration] = []
    for match in iter_declaration_matches(text):
        header = match.group(0)
        start_line = text.count("\n", 0, match.start())
        header_lines = header.split("\n")
        declaration_range = Range(
            Position(start_line, 0),
            Position(start_line + len(header_lines) - 1, len(header_lines[-1])),
        )

        name = match.group(1)
        name_start = match.start(1)
        name_line = text.count("\n", 0, name_start)
        name_column = name_start - (text.rfind("\n", 0, name_start) + 1)
        name_range = Range(
            Position(name_line, name_column),
            Position(name_line, name_column + len(name)),
        )

        declarations.append(
            MethodDeclaration(
                name=name,
                parameter_types=get_parameter_types(header, type_extensions),
                declaration_range=declaration_range,
                name_range=name_range,
            )
        )

    logger.debug("Found %d method declarations", len(declarations))
    return declarations


def get_parameter_types(
    declaration: str,
    type_extensions: TypeExtensions | None = None,
) -> tuple[str, ...]:
    """Extract normalized parameter types from a declaration header.

    ``void put(final Map<K, V> m, A... rest)`` with ``A → Number`` yields
    ``("Map", "Number[]")``.

    Args:
        declaration: Header text ending with the parenthesized parameter list.
        type_extensions: Generic bounds to substitute.

    Returns:
        Parameter types in order; empty for an empty parameter list.

    """
    open_pos = declaration.find("(")
    close_pos = declaration.rfind(")")
    if open_pos == -1 or close_pos < open_pos:
        return ()

    raw = declaration[open_pos + 1 : close_pos]
    if not raw.strip():
        return ()

    types: list[str] = []
    for parameter in split_top_level(raw):
        parameter_type = _declared_type(parameter)
        if type_extensions is not None:
            parameter_type = type_extensions.resolve(parameter_type)
        types.append(parameter_type)
    return tuple(types)


def get_generic_type_extensions(text: str) -> TypeExtensions:
    """Collect ``<X extends Y>`` bounds from every generic class header.

    Bounds are erased (``Comparable<A>`` → ``Comparable``). Type parameters
    with intersection bounds are recorded as unresolved.

    Args:
        text: Full source file content.

    Returns:
        TypeExtensions for this snapshot.

    """
    extensions = TypeExtensions()
    for type_parameters in iter_class_type_parameters(text):
        for type_parameter in split_top_level(type_parameters):
            tokens = _erase_generics(type_parameter).split()
            if len(tokens) < 3 or tokens[1] != "extends":
                continue
            if len(tokens) == 3:
                extensions.bounds[tokens[0]] = simple_type_name(tokens[2])
            else:
                logger.debug(
                    "Unresolved type parameter bound: %s", type_parameter.strip()
                )
                extensions.unresolved.add(tokens[0])
    return extensions


def _declared_type(parameter: str) -> str:
    """Simple type name of one parameter, without modifiers, annotations or generics."""
    normalized = _VARARGS.sub("[] ", _erase_generics(parameter))
    for token in normalized.split():
        if token in MODIFIERS or token.startswith("@"):
            continue
        return simple_type_name(token)
    return ""


def _erase_generics(text: str) -> str:
    """Remove all (possibly nested) ``<...>`` argument lists."""
    previous = None
    while previous != text:
        previous = text
        text = _INNERMOST_GENERIC.sub("", text)
    return text

"""Java source scanning: declaration extraction and method identities.

Pipeline: get_generic_type_extensions() → find_method_declarations()
"""

from costlens.java.declarations import (
    find_method_declarations,
    get_generic_type_extensions,
    get_parameter_types,
)
from costlens.java.types import (
    MethodDeclaration,
    Position,
    Range,
    TypeExtensions,
    method_identity,
    simple_type_name,
)

__all__ = [
    "find_method_declarations",
    "get_generic_type_extensions",
    "get_parameter_types",
    "MethodDeclaration",
    "Position",
    "Range",
    "TypeExtensions",
    "method_identity",
    "simple_type_name",
]

"""Reference taxonomy and parser."""

from .defaults import DEFAULT_REFERENCE_TYPES, default_taxonomy
from .parser import ReferenceParser, parse_github_url
from .taxonomy import Reference, ReferenceAlias, ReferenceType, Taxonomy

__all__ = [
    "DEFAULT_REFERENCE_TYPES",
    "Reference",
    "ReferenceAlias",
    "ReferenceParser",
    "ReferenceType",
    "Taxonomy",
    "default_taxonomy",
    "parse_github_url",
]

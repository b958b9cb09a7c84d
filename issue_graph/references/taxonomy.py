"""Reference type taxonomy models."""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..exceptions import TaxonomyError
from ..github_client.models import Identity

DEFAULT_TYPE_NAME = "default"


class ReferenceAlias(BaseModel):
    """Delegation from one reference type to another."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Name of the reference type delegated to")
    reverse: bool = Field(
        False, description="Swap source and target when following this alias"
    )


class ReferenceType(BaseModel):
    """Named classification of cross-reference text.

    Keys beyond the known fields (edge colours, lengths, ...) are kept as
    opaque presentation metadata and exposed through ``metadata``.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    name: str = Field(..., description="Name of the type within its taxonomy")
    prefixes: list[str] = Field(
        default_factory=list, description="Trigger phrases, matched case-insensitively"
    )
    alias: ReferenceAlias | None = Field(
        None, description="Type this one resolves to, if any"
    )
    follow: bool = Field(
        True, description="Whether targets of this type are queued for crawling"
    )

    @property
    def metadata(self) -> dict[str, Any]:
        """Presentation metadata that is not interpreted by the crawler."""
        return dict(self.model_extra or {})


class Reference(BaseModel):
    """A directed, typed edge found in a piece of text."""

    model_config = ConfigDict(frozen=True)

    reference_type: ReferenceType
    source: Identity
    target: Identity
    text: str = Field("", description="Literal text span that produced the edge")


class Taxonomy(BaseModel):
    """All reference types known to a parser plus the fallback type name."""

    model_config = ConfigDict(frozen=True)

    types: dict[str, ReferenceType]
    default: str = DEFAULT_TYPE_NAME

    @classmethod
    def from_mapping(
        cls, mapping: dict[str, dict[str, Any]], default: str = DEFAULT_TYPE_NAME
    ) -> "Taxonomy":
        """Build a taxonomy from plain configuration.

        Args:
            mapping: type name -> ``{prefixes?, alias?, follow?, ...metadata}``
            default: Name of the type used when no prefix phrase matched

        Raises:
            TaxonomyError: If an entry is not a valid reference type
        """
        types = {}
        for name, config in mapping.items():
            if not isinstance(config, dict):
                raise TaxonomyError(f"Reference type {name!r} must be a mapping")
            try:
                types[name] = ReferenceType(**{**config, "name": name})
            except ValidationError as e:
                raise TaxonomyError(f"Invalid reference type {name!r}: {e}") from e
        return cls(types=types, default=default)

    @classmethod
    def from_file(cls, path: str | Path) -> "Taxonomy":
        """Load a taxonomy from a JSON file.

        The file holds either the type mapping itself or an object with
        ``types`` and an optional ``default`` key.
        """
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise TaxonomyError(f"Could not read taxonomy from {path}: {e}") from e

        if not isinstance(data, dict):
            raise TaxonomyError(f"Taxonomy file {path} must contain a JSON object")
        if "types" in data:
            return cls.from_mapping(
                data["types"], default=data.get("default", DEFAULT_TYPE_NAME)
            )
        return cls.from_mapping(data)

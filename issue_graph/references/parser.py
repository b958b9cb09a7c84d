"""Extract typed references to other issues and pull requests from text."""

import logging
import re

from ..exceptions import TaxonomyError
from ..github_client.models import Identity
from ..github_client.urls import REFERENCE_URL_PATTERN, parse_github_url
from .taxonomy import Reference, ReferenceType, Taxonomy

logger = logging.getLogger(__name__)

# owner/repo#number
REFERENCE_SHORT_PATTERN = (
    r"(?P<short_owner>[-a-zA-Z0-9_]+)/(?P<short_repo>[-a-zA-Z0-9_]+)"
    r"#(?P<short_number>\d+)"
)

# #number
REFERENCE_LOCAL_PATTERN = r"#(?P<local_number>\d+)"

__all__ = ["ReferenceParser", "parse_github_url"]


class ReferenceParser:
    """Classify references found in issue text according to a taxonomy.

    All lookup tables are built once at construction, which also rejects
    taxonomies whose aliases cannot be resolved.
    """

    def __init__(self, taxonomy: Taxonomy):
        """Compile the taxonomy.

        Args:
            taxonomy: Reference types and the default type name

        Raises:
            TaxonomyError: If an alias is unknown or cyclic, or the default
                type does not exist
        """
        self.taxonomy = taxonomy
        if taxonomy.default not in taxonomy.types:
            raise TaxonomyError(
                f"Default reference type {taxonomy.default!r} is not defined"
            )
        for name, reference_type in taxonomy.types.items():
            if reference_type.name != name:
                raise TaxonomyError(
                    f"Reference type registered as {name!r} is named "
                    f"{reference_type.name!r}"
                )

        self._resolved = {
            name: self._resolve_chain(name) for name in taxonomy.types
        }
        self.prefix_lookup: dict[str, ReferenceType] = {}
        for reference_type in taxonomy.types.values():
            for prefix in reference_type.prefixes:
                self.prefix_lookup[prefix.lower()] = reference_type

        self.pattern = re.compile(self._build_pattern(), re.IGNORECASE | re.ASCII)

    def _resolve_chain(self, name: str) -> tuple[ReferenceType, bool]:
        """Follow aliases from ``name`` to a terminal type.

        Returns:
            The terminal type and whether source and target end up swapped
        """
        seen = [name]
        reference_type = self.taxonomy.types[name]
        reverse = False
        while reference_type.alias is not None:
            alias = reference_type.alias
            if alias.id not in self.taxonomy.types:
                raise TaxonomyError(
                    f"Reference type {reference_type.name!r} aliases unknown "
                    f"type {alias.id!r}"
                )
            if alias.id in seen:
                chain = " -> ".join([*seen, alias.id])
                raise TaxonomyError(f"Alias cycle in reference types: {chain}")
            if alias.reverse:
                reverse = not reverse
            seen.append(alias.id)
            reference_type = self.taxonomy.types[alias.id]
        return reference_type, reverse

    def _build_pattern(self) -> str:
        # Longest first so "depends on" wins over "depends".
        prefixes = sorted(self.prefix_lookup, key=len, reverse=True)
        forms = (
            f"(?:(?P<short>{REFERENCE_SHORT_PATTERN})"
            f"|(?P<local>{REFERENCE_LOCAL_PATTERN})"
            f"|(?P<url>{REFERENCE_URL_PATTERN}))"
        )
        if not prefixes:
            return forms
        alternation = "|".join(re.escape(prefix) for prefix in prefixes)
        return f"(?:(?P<prefix>{alternation}):? )?{forms}"

    def lookup_reference_type(self, prefix: str | None) -> ReferenceType | None:
        """Find the type a prefix phrase triggers, or the default type."""
        if not prefix:
            return self.taxonomy.types[self.taxonomy.default]
        return self.prefix_lookup.get(prefix.lower())

    def resolve(
        self, reference_type: ReferenceType, source: Identity, target: Identity
    ) -> tuple[ReferenceType, Identity, Identity]:
        """Resolve aliases, swapping source and target for reversing aliases."""
        terminal, reverse = self._resolved[reference_type.name]
        if reverse:
            source, target = target, source
        return terminal, source, target

    def get_references(self, source: Identity, text: str | None) -> list[Reference]:
        """Extract every reference in ``text``.

        Args:
            source: Identity of the issue or PR the text belongs to; local
                ``#N`` references inherit its owner and repository
            text: Body or comment text, may be empty

        Returns:
            References in order of appearance, one per match
        """
        if not text:
            return []

        references = []
        for match in self.pattern.finditer(text):
            groups = match.groupdict()
            if groups["short"]:
                owner, repo = groups["short_owner"], groups["short_repo"]
                number = int(groups["short_number"])
            elif groups["local"]:
                owner, repo = source.owner, source.repo
                number = int(groups["local_number"])
            else:
                owner, repo = groups["url_owner"], groups["url_repo"]
                number = int(groups["url_number"])

            if number < 1:
                continue

            reference_type = self.lookup_reference_type(groups.get("prefix"))
            if reference_type is None:
                continue

            resolved, ref_source, ref_target = self.resolve(
                reference_type,
                source,
                Identity(owner=owner, repo=repo, number=number),
            )
            references.append(
                Reference(
                    reference_type=resolved,
                    source=ref_source,
                    target=ref_target,
                    text=match.group(0),
                )
            )

        logger.debug(f"Found {len(references)} references in text of {source}")
        return references

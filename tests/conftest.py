"""Test configuration and fixtures."""

from typing import Any, Callable

import pytest

from issue_graph.github_client.models import Identity, NodeData, NodeState
from issue_graph.references import (
    DEFAULT_REFERENCE_TYPES,
    ReferenceParser,
    Taxonomy,
)


@pytest.fixture
def source() -> Identity:
    """Identity the parsed text belongs to."""
    return Identity(owner="a", repo="b", number=1)


@pytest.fixture
def parser() -> ReferenceParser:
    """Parser over the built-in taxonomy extended with a 'blocks' prefix."""
    types: dict[str, dict[str, Any]] = {
        name: dict(config) for name, config in DEFAULT_REFERENCE_TYPES.items()
    }
    types["requires"]["prefixes"] = [*types["requires"]["prefixes"], "blocks"]
    return ReferenceParser(Taxonomy.from_mapping(types))


@pytest.fixture
def make_node() -> Callable[..., NodeData]:
    """Factory for NodeData with sensible defaults."""

    def _make_node(**overrides: Any) -> NodeData:
        data: dict[str, Any] = {
            "title": "Test issue",
            "body": "",
            "author": "octocat",
            "state": NodeState.OPEN,
        }
        data.update(overrides)
        return NodeData(**data)

    return _make_node

"""In-memory graph built from crawl events."""

from typing import Any

from pydantic import BaseModel, Field

from ..github_client.models import Identity
from .events import NodeError, NodeFound, ReferenceFound


class GraphNode(BaseModel):
    """A node as drawn: a fetched issue/PR or a placeholder for a failed fetch."""

    id: str = Field(..., description="owner/repo#number")
    identity: Identity
    depth: int
    label: str
    title: str | None = None
    url: str
    status: str | None = Field(
        None, description="open, closed, merged or draft; None for error nodes"
    )
    is_pull_request: bool = False
    author: str | None = None
    error: str | None = None


class GraphEdge(BaseModel):
    """A typed, directed edge between two node ids."""

    source: str
    target: str
    type: str
    metadata: dict[str, Any] = Field(default_factory=dict)


class GraphCollector:
    """Event sink that accumulates nodes and edges for rendering."""

    def __init__(self) -> None:
        self.nodes: dict[str, GraphNode] = {}
        self.edges: list[GraphEdge] = []

    @property
    def errors(self) -> list[GraphNode]:
        return [node for node in self.nodes.values() if node.error is not None]

    def on_node_found(self, event: NodeFound) -> None:
        node = event.node
        identity = event.identity
        self.nodes[identity.key] = GraphNode(
            id=identity.key,
            identity=identity,
            depth=event.depth,
            label=identity.key,
            title=node.title,
            url=node.url or identity.html_url(node.is_pull_request),
            status=node.status,
            is_pull_request=node.is_pull_request,
            author=node.author,
        )

    def on_node_error(self, event: NodeError) -> None:
        identity = event.identity
        self.nodes[identity.key] = GraphNode(
            id=identity.key,
            identity=identity,
            depth=event.depth,
            label=identity.key,
            url=identity.html_url(),
            error=str(event.error) or type(event.error).__name__,
        )

    def on_reference_found(self, event: ReferenceFound) -> None:
        reference = event.reference
        self.edges.append(
            GraphEdge(
                source=reference.source.key,
                target=reference.target.key,
                type=reference.reference_type.name,
                metadata=reference.reference_type.metadata,
            )
        )

    def on_depth_lowered(self, identity: Identity, depth: int) -> None:
        # Nodes not fetched yet pick up the lowered depth from their work item.
        node = self.nodes.get(identity.key)
        if node is not None:
            node.depth = depth

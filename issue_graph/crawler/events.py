"""Events emitted while crawling and the sink protocol that receives them."""

from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt

from ..github_client.models import Identity, NodeData
from ..references.taxonomy import Reference


class WorkItem(BaseModel):
    """Pending crawl work for one issue or pull request.

    ``depth`` is lowered in place when a shorter path is found; it is never
    raised.
    """

    identity: Identity
    source: Identity | None = Field(
        None, description="Issue or PR whose content led to this one"
    )
    depth: NonNegativeInt = Field(0, description="Hops from the crawl seed")


class NodeFound(BaseModel):
    """A node was fetched successfully."""

    model_config = ConfigDict(frozen=True)

    identity: Identity
    depth: int
    node: NodeData


class NodeError(BaseModel):
    """Fetching a node failed; the node will not be retried in this crawl."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    work: WorkItem
    error: Exception

    @property
    def identity(self) -> Identity:
        return self.work.identity

    @property
    def depth(self) -> int:
        return self.work.depth


class ReferenceFound(BaseModel):
    """A typed reference was found in a node's body or comments."""

    model_config = ConfigDict(frozen=True)

    reference: Reference


class CrawlEventSink(Protocol):
    """Consumer of crawl events, typically something that draws the graph."""

    def on_node_found(self, event: NodeFound) -> None: ...

    def on_node_error(self, event: NodeError) -> None: ...

    def on_reference_found(self, event: ReferenceFound) -> None: ...

    def on_depth_lowered(self, identity: Identity, depth: int) -> None: ...

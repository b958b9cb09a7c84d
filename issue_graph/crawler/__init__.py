"""Crawl engine for the issue reference graph."""

from .collector import GraphCollector, GraphEdge, GraphNode
from .crawler import FetchNode, GitHubCrawler
from .events import CrawlEventSink, NodeError, NodeFound, ReferenceFound, WorkItem

__all__ = [
    "CrawlEventSink",
    "FetchNode",
    "GitHubCrawler",
    "GraphCollector",
    "GraphEdge",
    "GraphNode",
    "NodeError",
    "NodeFound",
    "ReferenceFound",
    "WorkItem",
]

"""CLI commands for crawling the reference graph and inspecting references."""

import asyncio
import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..config import CrawlConfig
from ..crawler import GitHubCrawler, GraphCollector
from ..exceptions import MalformedUrlError, TaxonomyError
from ..github_client.client import GitHubClient
from ..github_client.urls import parse_github_url
from ..references import ReferenceParser, Taxonomy, default_taxonomy
from .options import (
    CONCURRENCY_OPTION,
    MAX_DEPTH_OPTION,
    TAXONOMY_OPTION,
    TOKEN_OPTION,
    URL_ARGUMENT,
    VERBOSE_OPTION,
)

console = Console()

STATUS_STYLES = {
    "open": "green",
    "closed": "red",
    "merged": "magenta",
    "draft": "dim",
}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_parser(taxonomy_path: str | None) -> ReferenceParser:
    """Build a reference parser from a taxonomy file or the built-in types."""
    try:
        taxonomy = (
            Taxonomy.from_file(taxonomy_path) if taxonomy_path else default_taxonomy()
        )
        return ReferenceParser(taxonomy)
    except TaxonomyError as e:
        console.print(f"[red]❌ Taxonomy error: {escape(str(e))}[/red]")
        raise typer.Exit(1)


def _render_graph(collector: GraphCollector) -> None:
    nodes_table = Table(title="Nodes")
    nodes_table.add_column("Node", style="cyan")
    nodes_table.add_column("Depth", justify="right")
    nodes_table.add_column("Status")
    nodes_table.add_column("Title")

    for node in sorted(collector.nodes.values(), key=lambda n: (n.depth, n.id)):
        if node.error is not None:
            nodes_table.add_row(
                node.label,
                str(node.depth),
                "[red]error[/red]",
                f"[red]{escape(node.error)}[/red]",
            )
            continue
        style = STATUS_STYLES.get(node.status or "", "white")
        nodes_table.add_row(
            node.label,
            str(node.depth),
            f"[{style}]{node.status}[/{style}]",
            escape(node.title or ""),
        )
    console.print(nodes_table)

    if collector.edges:
        edges_table = Table(title="References")
        edges_table.add_column("Source", style="cyan")
        edges_table.add_column("Type", style="yellow")
        edges_table.add_column("Target", style="cyan")
        for edge in collector.edges:
            edges_table.add_row(edge.source, edge.type, edge.target)
        console.print(edges_table)


def crawl(
    url: str = URL_ARGUMENT,
    token: str | None = TOKEN_OPTION,
    concurrency: int | None = CONCURRENCY_OPTION,
    max_depth: int | None = MAX_DEPTH_OPTION,
    taxonomy: str | None = TAXONOMY_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Crawl issues and pull requests reachable from URL.

    Examples:
        issue-graph crawl https://github.com/owner/repo/issues/1
        issue-graph crawl https://github.com/owner/repo/pull/7 -c 8 --max-depth 2
    """
    _configure_logging(verbose)

    config = CrawlConfig()
    if token:
        config.token = token
    if concurrency is not None:
        config.concurrency_raw = str(concurrency)
    if max_depth is not None:
        config.max_depth_raw = str(max_depth)
    if taxonomy:
        config.taxonomy_path = taxonomy

    try:
        seed = parse_github_url(url)
        config.validate()
    except ValueError as e:
        console.print(f"[red]❌ Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    parser = _load_parser(config.taxonomy_path)

    console.print(f"🔍 Crawling references from {seed}")
    client = GitHubClient(token=config.token)
    collector = GraphCollector()
    crawler = GitHubCrawler(
        client.fetch_node, parser, collector, max_depth=config.max_depth
    )
    crawler.seed(url)
    asyncio.run(crawler.run(config.concurrency))

    _render_graph(collector)
    console.print(
        f"✅ Found {len(collector.nodes) - len(collector.errors)} nodes, "
        f"{len(collector.edges)} references, {len(collector.errors)} errors"
    )


def refs(
    url: str = URL_ARGUMENT,
    text: str = typer.Argument(..., help="Text to scan for references"),
    taxonomy: str | None = TAXONOMY_OPTION,
) -> None:
    """Show the references TEXT would produce if written in URL."""
    try:
        source = parse_github_url(url)
    except MalformedUrlError as e:
        console.print(f"[red]❌ Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    parser = _load_parser(taxonomy or CrawlConfig().taxonomy_path)
    references = parser.get_references(source, text)
    if not references:
        console.print("No references found")
        return

    table = Table(title=f"References from {source}")
    table.add_column("Text")
    table.add_column("Source", style="cyan")
    table.add_column("Type", style="yellow")
    table.add_column("Target", style="cyan")
    table.add_column("Follow")
    for reference in references:
        table.add_row(
            escape(reference.text),
            reference.source.key,
            reference.reference_type.name,
            reference.target.key,
            "yes" if reference.reference_type.follow else "no",
        )
    console.print(table)

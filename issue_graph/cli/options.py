"""Standardized CLI option definitions shared by the commands."""

import typer

URL_ARGUMENT = typer.Argument(
    ..., help="GitHub issue or pull request URL to start from"
)

TOKEN_OPTION = typer.Option(
    None, "--token", "-t", help="GitHub token (overrides GITHUB_TOKEN)"
)

CONCURRENCY_OPTION = typer.Option(
    None,
    "--concurrency",
    "-c",
    min=1,
    help="Number of concurrent fetch workers (overrides ISSUE_GRAPH_CONCURRENCY)",
)

MAX_DEPTH_OPTION = typer.Option(
    None,
    "--max-depth",
    "-d",
    min=0,
    help="Do not crawl further than this many hops from the seed",
)

TAXONOMY_OPTION = typer.Option(
    None,
    "--taxonomy",
    help="JSON file with reference types (overrides ISSUE_GRAPH_TAXONOMY)",
)

VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable debug logging")

"""Main CLI entry point."""

import typer
from dotenv import load_dotenv
from rich.console import Console

from .crawl import crawl, refs

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="issue-graph",
    help="Explore GitHub issues and pull requests linked by references",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


app.command(name="crawl", context_settings={"help_option_names": ["-h", "--help"]})(
    crawl
)
app.command(name="refs", context_settings={"help_option_names": ["-h", "--help"]})(
    refs
)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from issue_graph import __version__

    console.print(f"Issue Graph v{__version__}")


if __name__ == "__main__":
    app()

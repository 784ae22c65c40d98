"""CLI interface using typer."""

import asyncio
import json
import logging
import sys

import typer

from .browser import BrowserViewModel
from .config import settings
from .state import ErrorKind

app = typer.Typer(
    name="squash",
    help="Minimal browser shell: fetch a page, show its title, links and HTML",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
):
    """Squash Browser."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def _fetch(url: str) -> dict:
    """Run one fetch through the view model and return the page state as dict."""
    view_model = BrowserViewModel(settings)
    view_model.state.address = url
    try:
        await view_model.fetch_command.execute()
    finally:
        await view_model.close()

    state = view_model.state
    return {
        "address": state.address,
        "status": state.status,
        "error": state.error_kind.value,
        "title": state.page_title,
        "links": [{"href": link.href, "text": link.text} for link in state.links],
        "link_count": state.link_count,
        "content": state.html_source,
    }


@app.command()
def fetch(
    url: str = typer.Argument(..., help="URL to fetch"),
    output: str = typer.Option(None, "-o", "--output", help="Output file (JSON)"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    html: bool = typer.Option(False, "--html", help="Also print the raw HTML"),
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Only output content"),
):
    """Fetch a single URL and show its title and links."""
    result = asyncio.run(_fetch(url))

    if output:
        with open(output, "w", encoding="utf-8") as f:
            json.dump(result, f, indent=2, ensure_ascii=False)
        typer.echo(f"Saved to {output}")
    elif as_json:
        typer.echo(json.dumps(result, indent=2, ensure_ascii=False))
    elif quiet:
        sys.stdout.write(result["content"])
    else:
        typer.echo(f"URL: {result['address']}")
        typer.echo(f"Status: {result['status']}")
        typer.echo(f"Title: {result['title']}")
        typer.echo(f"Links: {result['link_count']}")
        for i, link in enumerate(result["links"], 1):
            typer.echo(f"{i}. {link['text']} -> {link['href']}")
        if html:
            typer.echo("---")
            typer.echo(result["content"])

    if ErrorKind(result["error"]).is_fetch_failure:
        raise typer.Exit(code=1)


@app.command()
def browse(
    url: str = typer.Argument(None, help="URL to open first"),
):
    """Start an interactive browsing session."""
    from .shell import TerminalShell

    async def _run():
        view_model = BrowserViewModel(settings)
        try:
            await TerminalShell(view_model).run(url)
        finally:
            await view_model.close()

    asyncio.run(_run())


@app.command()
def version():
    """Show version."""
    from . import __version__

    typer.echo(f"squash {__version__}")


if __name__ == "__main__":
    app()

"""Tests for the interactive terminal shell."""

import asyncio

import typer

from squash.browser import BrowserViewModel
from squash.config import BrowserSettings
from squash.core import Response
from squash.shell import HELP_TEXT, TerminalShell

PAGE = b'<title>Hi</title><a href="/a">A</a><a href="/b"></a>'


class FakeFetcher:
    def __init__(self):
        self.calls = []

    async def fetch(self, url: str) -> Response:
        self.calls.append(url)
        return Response(url=url, status=200, content=PAGE, headers={}, reason="OK")

    async def close(self):
        pass


def scripted_prompt(lines):
    """Prompt double that returns scripted lines, then signals end of input."""
    remaining = list(lines)
    prompts = []

    def prompt(text, default=None):
        prompts.append(default)
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    prompt.defaults = prompts
    return prompt


def make_shell(lines, **settings):
    output = []
    view_model = BrowserViewModel(BrowserSettings(**settings), FakeFetcher())
    shell = TerminalShell(view_model, prompt=scripted_prompt(lines), echo=output.append)
    return shell, output


class TestTerminalShell:
    def test_fetch_renders_status_title_and_links(self):
        """Entering an address fetches it and prints the sidebar."""
        shell, output = make_shell(["example.com", ":quit"])

        asyncio.run(shell.run())

        assert output[0] == "Squash Browser"
        assert "-> https://example.com/" in output
        assert "[Loading...]" in output
        assert f"[Loaded {len(PAGE):,} bytes]" in output
        assert "Title: Hi" in output
        assert "Links (2):" in output
        assert "  1. A -> /a" in output
        assert "  2. /b" in output
        assert shell.view_model.fetcher.calls == ["https://example.com/"]

    def test_initial_address(self):
        shell, output = make_shell([])

        asyncio.run(shell.run("example.org"))

        assert "Title: Hi" in output
        assert shell.view_model.fetcher.calls == ["https://example.org/"]

    def test_prompt_defaults_to_current_address(self):
        shell, output = make_shell(["example.com"], default_address="https://start.example/")

        asyncio.run(shell.run())

        assert shell.prompt.defaults == ["https://start.example/", "https://example.com/"]

    def test_toggle_sidebar_hides_links(self):
        """:sidebar hides the title and links pane."""
        shell, output = make_shell(["example.com", ":sidebar", ":quit"])

        asyncio.run(shell.run())

        assert "Sidebar width: 0px" in output
        assert output.count("Title: Hi") == 1
        assert shell.state.sidebar_visible is False

    def test_toggle_html_shows_source(self):
        shell, output = make_shell(["example.com", ":html", ":quit"])

        asyncio.run(shell.run())

        assert "Raw HTML shown" in output
        assert PAGE.decode() in output

    def test_blank_line_reports_missing_url(self):
        shell, output = make_shell(["   ", ":quit"])

        asyncio.run(shell.run())

        assert "[Please enter a URL.]" in output
        assert shell.view_model.fetcher.calls == []

    def test_help_and_unknown_commands(self):
        shell, output = make_shell([":help", ":bogus", ":q"])

        asyncio.run(shell.run())

        assert HELP_TEXT in output
        assert "Unknown command: :bogus (try :help)" in output

    def test_end_of_input_stops_and_unsubscribes(self):
        """The loop ends on EOF and stops listening to state changes."""
        shell, output = make_shell([])

        asyncio.run(shell.run())
        shell.state.status = "after exit"

        assert "[after exit]" not in output

    def test_abort_stops_loop(self):
        output = []
        view_model = BrowserViewModel(BrowserSettings(), FakeFetcher())

        def prompt(text, default=None):
            raise typer.Abort()

        asyncio.run(TerminalShell(view_model, prompt=prompt, echo=output.append).run())

        assert output == ["Squash Browser"]

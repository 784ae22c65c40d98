"""Interactive terminal front end bound to the page state."""

from typing import Callable

import typer

from .browser import BrowserViewModel

HELP_TEXT = """Enter an address to fetch it, or press Enter to reload.
  :html     show/hide raw HTML
  :sidebar  show/hide the title and links sidebar
  :help     show this help
  :quit     exit"""

HTML_PREVIEW_CHARS = 2000


class TerminalShell:
    """Reads addresses and shell commands, echoes state changes as they happen."""

    def __init__(
        self,
        view_model: BrowserViewModel,
        prompt: Callable[..., str] = typer.prompt,
        echo: Callable[[str], None] = typer.echo,
    ):
        self.view_model = view_model
        self.state = view_model.state
        self.prompt = prompt
        self.echo = echo
        self._unsubscribe = self.state.subscribe(self._on_state_changed)

    def _on_state_changed(self, name: str, value):
        if name == "status":
            self.echo(f"[{value}]")
        elif name == "address":
            self.echo(f"-> {value}")
        elif name == "show_html":
            self.echo(f"Raw HTML {'shown' if value else 'hidden'}")
        elif name == "sidebar_width":
            self.echo(f"Sidebar width: {value}px")

    def render(self):
        """Print the sidebar and raw HTML panes that are currently visible."""
        state = self.state

        if state.sidebar_visible:
            self.echo(f"Title: {state.page_title or '(none)'}")
            self.echo(f"Links ({state.link_count}):")
            for i, link in enumerate(state.links, 1):
                if link.text == link.href:
                    self.echo(f"  {i}. {link.href}")
                else:
                    self.echo(f"  {i}. {link.text} -> {link.href}")

        if state.show_html and state.html_source:
            self.echo("---")
            self.echo(state.html_source[:HTML_PREVIEW_CHARS])
            if len(state.html_source) > HTML_PREVIEW_CHARS:
                self.echo(f"\n... (truncated, {len(state.html_source)} chars total)")

    async def handle(self, line: str) -> bool:
        """Process one input line. Returns False when the shell should exit."""
        command = line.strip()

        if command in (":quit", ":q"):
            return False
        if command == ":help":
            self.echo(HELP_TEXT)
        elif command == ":html":
            self.view_model.toggle_html_command.execute()
            self.render()
        elif command == ":sidebar":
            self.view_model.toggle_sidebar_command.execute()
            self.render()
        elif command.startswith(":"):
            self.echo(f"Unknown command: {command} (try :help)")
        else:
            self.state.address = line
            if await self.view_model.fetch_command.execute():
                self.render()
        return True

    async def run(self, initial_address: str | None = None):
        """Loop until :quit or end of input."""
        self.echo(self.view_model.title)
        if initial_address:
            await self.handle(initial_address)

        try:
            while True:
                try:
                    line = self.prompt("Address", default=self.state.address)
                except (typer.Abort, EOFError):
                    break
                if not await self.handle(line):
                    break
        finally:
            self._unsubscribe()

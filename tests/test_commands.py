"""Tests for command adapters."""

import asyncio

import pytest

from squash.commands import AsyncCommand, ToggleCommand
from squash.state import PageState


class TestAsyncCommand:
    async def test_executes_action(self):
        calls = []

        async def action():
            calls.append("run")

        command = AsyncCommand(action)

        assert await command.execute() is True
        assert calls == ["run"]

    async def test_not_executable_while_running(self):
        """The command disables itself for the duration of the action."""
        seen = []

        async def action():
            seen.append((command.is_executing, command.can_execute()))

        command = AsyncCommand(action)
        await command.execute()

        assert seen == [(True, False)]
        assert command.can_execute() is True

    async def test_second_call_while_running_is_ignored(self):
        """A re-entrant call during a running action does nothing."""
        started = asyncio.Event()
        release = asyncio.Event()
        runs = []

        async def action():
            runs.append(1)
            started.set()
            await release.wait()

        command = AsyncCommand(action)
        task = asyncio.create_task(command.execute())
        await started.wait()

        assert await command.execute() is False

        release.set()
        assert await task is True
        assert runs == [1]

    async def test_predicate_disables_command(self):
        enabled = False
        calls = []

        async def action():
            calls.append(1)

        command = AsyncCommand(action, lambda: enabled)

        assert command.can_execute() is False
        assert await command.execute() is False

        enabled = True
        assert await command.execute() is True
        assert calls == [1]

    async def test_notifies_can_execute_changes(self):
        """Listeners are told when execution starts and ends."""
        async def action():
            pass

        command = AsyncCommand(action)
        states = []
        command.subscribe(lambda cmd: states.append(cmd.can_execute()))

        await command.execute()

        assert states == [False, True]

    async def test_resets_after_exception(self):
        """A failing action re-enables the command."""
        async def action():
            raise ValueError("boom")

        command = AsyncCommand(action)
        states = []
        command.subscribe(lambda cmd: states.append(cmd.can_execute()))

        with pytest.raises(ValueError):
            await command.execute()

        assert command.can_execute() is True
        assert states == [False, True]

    async def test_unsubscribe(self):
        async def action():
            pass

        command = AsyncCommand(action)
        states = []
        unsubscribe = command.subscribe(lambda cmd: states.append(cmd))
        unsubscribe()

        await command.execute()

        assert states == []


class TestToggleCommand:
    def test_flips_field(self):
        """Toggling flips the boolean and returns the new value."""
        state = PageState()
        command = ToggleCommand(state, "show_html")

        assert command.execute() is True
        assert state.show_html is True
        assert command.execute() is False
        assert state.show_html is False

    def test_always_executable(self):
        state = PageState()
        state.is_busy = True
        command = ToggleCommand(state, "sidebar_visible")

        assert command.can_execute() is True
        command.execute()
        assert state.sidebar_visible is False

    def test_toggle_notifies_state_subscribers(self):
        state = PageState()
        events = []
        state.subscribe(lambda name, value: events.append((name, value)))

        ToggleCommand(state, "show_html").execute()

        assert events == [("show_html", True)]

    def test_rejects_non_boolean_field(self):
        with pytest.raises(TypeError):
            ToggleCommand(PageState(), "status")

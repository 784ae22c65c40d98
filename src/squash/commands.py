"""Invocable actions with enabled-state notification."""

from typing import Awaitable, Callable

from .state import Observable

CommandListener = Callable[["Command"], None]


class Command:
    """Base for actions a UI can invoke and enable/disable."""

    def __init__(self):
        self._listeners: list[CommandListener] = []

    def can_execute(self) -> bool:
        return True

    def subscribe(self, listener: CommandListener) -> Callable[[], None]:
        """Listen for can-execute changes; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def raise_can_execute_changed(self):
        for listener in list(self._listeners):
            listener(self)


class AsyncCommand(Command):
    """
    Wraps a coroutine function as a single-flight action.

    The command is not executable while it is running or while the optional
    predicate returns False. Calls to execute() in that state are ignored.
    """

    def __init__(
        self,
        execute: Callable[[], Awaitable[None]],
        can_execute: Callable[[], bool] | None = None,
    ):
        super().__init__()
        self._execute = execute
        self._can_execute = can_execute
        self._is_executing = False

    @property
    def is_executing(self) -> bool:
        return self._is_executing

    def can_execute(self) -> bool:
        if self._is_executing:
            return False
        return self._can_execute() if self._can_execute is not None else True

    async def execute(self) -> bool:
        """Run the action. Returns False if it was not executable."""
        if not self.can_execute():
            return False

        self._is_executing = True
        self.raise_can_execute_changed()
        try:
            await self._execute()
        finally:
            self._is_executing = False
            self.raise_can_execute_changed()
        return True


class ToggleCommand(Command):
    """Flips a boolean field on an observable state object."""

    def __init__(self, state: Observable, field: str):
        super().__init__()
        if not isinstance(getattr(state, field), bool):
            raise TypeError(f"{field!r} is not a boolean field")
        self.state = state
        self.field = field

    def execute(self) -> bool:
        value = not getattr(self.state, self.field)
        setattr(self.state, self.field, value)
        return value

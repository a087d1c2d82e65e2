"""
Metagram models: trigger kinds, string selectors and handler bindings.
"""

import inspect
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Awaitable, Callable, Optional, Union

HandlerFunc = Union[Callable[[Any, Any], None], Callable[[Any, Any], Awaitable[None]]]
"""Bound handler: handler(bot, update)"""


class TriggerKind(Enum):
    """Which dispatch phase a binding participates in"""

    ANY = auto()
    """Invoked for every update"""
    CALLBACK = auto()
    """Invoked for callback queries with matching data"""
    COMMAND = auto()
    """Invoked for command messages with matching text"""


class StringSelector(Enum):
    """String comparison strategy used to match a pattern against update text or data"""

    EQUALS = auto()
    EQUALS_IGNORE_CASE = auto()
    STARTS_WITH = auto()
    CONTAINS = auto()


@dataclass(frozen=True)
class MatchRule:
    """Pattern and the way it is compared with the incoming subject."""

    pattern: str
    selector: StringSelector = StringSelector.EQUALS

    def __post_init__(self) -> None:
        if not isinstance(self.pattern, str):
            raise ValueError(f"MatchRule pattern must be str, got {type(self.pattern).__name__}")
        if not isinstance(self.selector, StringSelector):
            raise ValueError(f"MatchRule selector must be StringSelector, got {self.selector!r}")


@dataclass(frozen=True)
class HandlerBinding:
    """One registered routing target.

    Attributes:
        owner: Handler source the handler belongs to (not owned by the registry)
        handler: Callable taking (bot, update), may be a coroutine function
        kind: Trigger kind of this binding
        matchRule: Match rule, required for CALLBACK and COMMAND, forbidden for ANY
    """

    owner: Any
    handler: HandlerFunc
    kind: TriggerKind
    matchRule: Optional[MatchRule] = field(default=None)

    def __post_init__(self) -> None:
        if not callable(self.handler):
            raise ValueError(f"Handler must be callable, got {self.handler!r}")
        if self.kind == TriggerKind.ANY:
            if self.matchRule is not None:
                raise ValueError(f"{self.kind.name} binding must not have a match rule")
        elif self.matchRule is None:
            raise ValueError(f"{self.kind.name} binding requires a match rule")

    @property
    def name(self) -> str:
        """Human readable handler name for logging"""
        return getattr(self.handler, "__qualname__", repr(self.handler))

    async def invoke(self, bot: Any, update: Any) -> None:
        """Call the handler, awaiting it if it returns an awaitable.

        Args:
            bot: Bot context, passed through unchanged
            update: Incoming update
        """
        result = self.handler(bot, update)
        if inspect.isawaitable(result):
            await result

    def __str__(self) -> str:
        if self.matchRule is None:
            return f"HandlerBinding({self.kind.name}, {self.name})"
        return (
            f"HandlerBinding({self.kind.name}, {self.name}, "
            f"pattern={self.matchRule.pattern!r}, selector={self.matchRule.selector.name})"
        )

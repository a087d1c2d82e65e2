"""
Metagram: handler registry and update dispatcher for Telegram bots.

Handler sources are plain classes marked with ``@eventHandler`` (or
inheriting ``EventHandlerMixin``) whose methods are tagged with trigger-kind
decorators. Every incoming update is delivered to all ANY handlers and then
to the CALLBACK or COMMAND handlers whose pattern matches.

Basic usage:
    >>> from lib.metagram import HandlerRegistry, UpdateDispatcher, eventHandler, handleCommand
    >>>
    >>> @eventHandler
    ... class Greeter:
    ...     @handleCommand("/start")
    ...     async def onStart(self, bot, update):
    ...         await update.message.reply_text("Hi!")
    >>>
    >>> registry = HandlerRegistry()
    >>> registry.registerHandlerSource(Greeter())
    >>> dispatcher = UpdateDispatcher(registry)
    >>> # await dispatcher.deliverUpdate(context.bot, update)
"""

from .decorators import (
    EventHandlerMixin,
    eventHandler,
    handleAny,
    handleCallback,
    handleCommand,
    isHandlerSource,
)
from .discovery import discoverHandlerSources
from .dispatcher import UpdateDispatcher, isCommandMessage, matchesRule
from .exceptions import MetagramError, RegisterError, UpdateProcessError
from .models import HandlerBinding, MatchRule, StringSelector, TriggerKind
from .registry import HandlerRegistry

# Public API
__all__ = [
    # Core
    "HandlerRegistry",
    "UpdateDispatcher",
    "matchesRule",
    "isCommandMessage",
    # Models
    "HandlerBinding",
    "MatchRule",
    "StringSelector",
    "TriggerKind",
    # Handler sources
    "EventHandlerMixin",
    "eventHandler",
    "handleAny",
    "handleCallback",
    "handleCommand",
    "isHandlerSource",
    "discoverHandlerSources",
    # Exceptions
    "MetagramError",
    "RegisterError",
    "UpdateProcessError",
]

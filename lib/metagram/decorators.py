"""
Handler source marker and trigger-kind decorators.

A handler source is a class marked with :func:`eventHandler` or inheriting
:class:`EventHandlerMixin`. Its methods are tagged with :func:`handleAny`,
:func:`handleCallback` and :func:`handleCommand`; every tag becomes one
:class:`HandlerBinding` when the source is registered.

Example:
    >>> @eventHandler
    ... class Greeter:
    ...     @handleCommand("/start")
    ...     async def onStart(self, bot, update):
    ...         await update.message.reply_text("Hi!")
"""

import inspect
import logging
from typing import Any, Callable, List, Optional, Sequence, Tuple, TypeVar

from .models import HandlerBinding, MatchRule, StringSelector, TriggerKind

logger = logging.getLogger(__name__)

# Attribute names for storing metadata
_HANDLER_SOURCE_ATTR = "_metagramHandlerSource"
_HANDLER_TAGS_ATTR = "_metagramHandlerTags"

HandlerTag = Tuple[TriggerKind, Optional[MatchRule]]
FuncT = TypeVar("FuncT", bound=Callable[..., Any])
ClassT = TypeVar("ClassT", bound=type)


def eventHandler(cls: ClassT) -> ClassT:
    """Mark class as a handler source.

    Args:
        cls: Class to mark

    Returns:
        The same class
    """
    if not inspect.isclass(cls):
        raise TypeError(f"@eventHandler can only be applied to classes, got {cls!r}")
    setattr(cls, _HANDLER_SOURCE_ATTR, True)
    return cls


def isHandlerSource(obj: Any) -> bool:
    """Check if object (or class) carries the handler source marker."""
    cls = obj if inspect.isclass(obj) else type(obj)
    return bool(getattr(cls, _HANDLER_SOURCE_ATTR, False))


def _checkSignature(func: Callable[..., Any]) -> None:
    """Ensure func is a method accepting exactly (self, bot, update)."""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError) as e:
        raise TypeError(f"Unable to inspect signature of {func!r}: {e}") from e

    params = list(signature.parameters.values())
    positional = [
        p for p in params if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    extra = [
        p
        for p in params
        if p.kind == inspect.Parameter.VAR_POSITIONAL
        or (p.kind == inspect.Parameter.KEYWORD_ONLY and p.default is inspect.Parameter.empty)
    ]

    if len(positional) != 3 or extra:
        raise TypeError(
            f"Handler {getattr(func, '__qualname__', func)!r} must have signature (self, bot, update), got {signature}"
        )


def _addTag(func: FuncT, tag: HandlerTag) -> FuncT:
    if not callable(func):
        raise TypeError(f"Handler decorator can only be applied to callables, got {func!r}")
    _checkSignature(func)

    tags: List[HandlerTag] = list(getattr(func, _HANDLER_TAGS_ATTR, []))
    tags.append(tag)
    setattr(func, _HANDLER_TAGS_ATTR, tags)
    # Return the original function unchanged
    return func


def handleAny() -> Callable[[FuncT], FuncT]:
    """Tag method to be invoked for every update."""

    def decorator(func: FuncT) -> FuncT:
        return _addTag(func, (TriggerKind.ANY, None))

    return decorator


def handleCallback(pattern: str, selector: StringSelector = StringSelector.EQUALS) -> Callable[[FuncT], FuncT]:
    """Tag method to be invoked for callback queries whose data matches pattern.

    Args:
        pattern: Pattern to compare callback data with
        selector: Comparison strategy (default: EQUALS)
    """
    rule = MatchRule(pattern, selector)

    def decorator(func: FuncT) -> FuncT:
        return _addTag(func, (TriggerKind.CALLBACK, rule))

    return decorator


def handleCommand(pattern: str, selector: StringSelector = StringSelector.EQUALS) -> Callable[[FuncT], FuncT]:
    """Tag method to be invoked for command messages whose text matches pattern.

    Args:
        pattern: Pattern to compare message text with (e.g. "/start")
        selector: Comparison strategy (default: EQUALS)
    """
    rule = MatchRule(pattern, selector)

    def decorator(func: FuncT) -> FuncT:
        return _addTag(func, (TriggerKind.COMMAND, rule))

    return decorator


def getHandlerTags(func: Any) -> Sequence[HandlerTag]:
    """Get trigger-kind tags attached to func (empty if untagged)."""
    return tuple(getattr(func, _HANDLER_TAGS_ATTR, ()))


def collectHandlerBindings(holder: Any) -> List[HandlerBinding]:
    """
    Build bindings for every tagged method of holder.

    Methods are visited in definition order (base classes first), every tag
    of a method produces one binding.

    Args:
        holder: Handler source instance

    Returns:
        List of bindings in definition order
    """
    ret: List[HandlerBinding] = []
    seen = set()
    for klass in reversed(type(holder).__mro__):
        for name in vars(klass):
            if name in seen:
                continue
            # Use the most derived attribute so overrides win
            attr = inspect.getattr_static(holder, name, None)
            tags = getHandlerTags(attr)
            if not tags:
                continue
            seen.add(name)

            method = getattr(holder, name)
            for kind, rule in tags:
                ret.append(HandlerBinding(owner=holder, handler=method, kind=kind, matchRule=rule))
    logger.debug(f"Collected {len(ret)} handler bindings from {type(holder).__name__}")
    return ret


class EventHandlerMixin:
    """
    Mixin class that marks a handler source and exposes its bindings.

    Subclasses may override :meth:`getHandlerBindings` to return explicit
    binding descriptors instead of decorated methods.
    """

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        setattr(cls, _HANDLER_SOURCE_ATTR, True)

    def getHandlerBindings(self) -> Sequence[HandlerBinding]:
        """
        Get all handler bindings of this instance.

        Returns:
            Sequence of HandlerBinding objects
        """
        return collectHandlerBindings(self)

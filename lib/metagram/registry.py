"""
Handler registry for Metagram.

Holds the registered handler bindings, partitioned by trigger kind and kept in
registration order. Registration is expected to finish before the first update
is dispatched: the registry does no internal locking.
"""

import inspect
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .decorators import EventHandlerMixin, collectHandlerBindings, isHandlerSource
from .exceptions import RegisterError
from .models import HandlerBinding, TriggerKind

logger = logging.getLogger(__name__)


class HandlerRegistry:
    """Registry of handler bindings.

    Provides methods to register handler sources and to look up bindings of a
    given trigger kind. There is no unregistration.
    """

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._handlers: Dict[TriggerKind, List[HandlerBinding]] = {kind: [] for kind in TriggerKind}

    def _buildBindings(self, holder: Any) -> Sequence[HandlerBinding]:
        if isinstance(holder, EventHandlerMixin):
            bindings = list(holder.getHandlerBindings())
        else:
            bindings = collectHandlerBindings(holder)

        for binding in bindings:
            if not isinstance(binding, HandlerBinding):
                raise ValueError(f"Invalid handler binding from {type(holder).__name__}: {binding!r}")
        return bindings

    def registerHandlerSource(self, holder: Any) -> None:
        """Register every handler binding of a handler source.

        Bindings are built first and appended only if building succeeded, so a
        rejected source leaves the registry unchanged.

        Args:
            holder: Object marked as handler source

        Raises:
            RegisterError: If holder is not a handler source or its bindings can not be built
        """
        className = type(holder).__qualname__
        if not isHandlerSource(holder):
            raise RegisterError(f"Not a handler source (missing @eventHandler marker): {className}")

        try:
            bindings = self._buildBindings(holder)
        except Exception as e:
            raise RegisterError(f"Failed to build handler bindings for {className}", [e]) from e

        for binding in bindings:
            self._handlers[binding.kind].append(binding)
            logger.debug(f"Registered {binding}")

        logger.info(f"Registered handler source {className} with {len(bindings)} bindings")

    def registerHandlerSourcesFrom(self, candidates: Iterable[Any]) -> None:
        """Register every candidate, collecting failures instead of stopping at the first one.

        A candidate which is a class gets instantiated without arguments first.

        Args:
            candidates: Iterable of handler sources (instances or classes)

        Raises:
            RegisterError: If any candidate failed, with every failure in ``errors``
        """
        error: Optional[RegisterError] = None
        registered = 0

        for candidate in candidates:
            try:
                holder = candidate() if inspect.isclass(candidate) else candidate
                self.registerHandlerSource(holder)
                registered += 1
            except Exception as e:
                logger.debug(f"Failed to register {candidate!r}: {e}")
                if error is None:
                    error = RegisterError("Failed to register event handlers", [e])
                else:
                    error.addError(e)

        if error is not None:
            logger.debug(f"Registered {registered} handler sources, {len(error.errors)} failed")
            raise error

        logger.debug(f"Registered {registered} handler sources")

    def getHandlers(self, kind: TriggerKind) -> Tuple[HandlerBinding, ...]:
        """Get bindings of given kind in registration order.

        Args:
            kind: Trigger kind

        Returns:
            Snapshot of the bindings
        """
        return tuple(self._handlers[kind])

    def getHandlerCount(self, kind: Optional[TriggerKind] = None) -> int:
        """Get the number of registered bindings.

        Args:
            kind: Count only bindings of this kind (default: all)

        Returns:
            Number of registered bindings
        """
        if kind is not None:
            return len(self._handlers[kind])
        return sum(len(bindings) for bindings in self._handlers.values())

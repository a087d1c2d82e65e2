"""
Update dispatcher for Metagram.

This module routes a single incoming update to the registered handler bindings:
every ANY binding first, then either the CALLBACK or the COMMAND bindings whose
match rule accepts the callback data or the command text. Handlers run one
after another in registration order; failures are collected and reported
together once every handler had its chance to run.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from telegram import Message, MessageEntity, Update

from .exceptions import UpdateProcessError
from .models import HandlerBinding, MatchRule, StringSelector, TriggerKind
from .registry import HandlerRegistry

logger = logging.getLogger(__name__)


def matchesRule(subject: Any, rule: MatchRule) -> bool:
    """Check if subject matches the rule.

    EQUALS_IGNORE_CASE lowercases both whole strings with ``str.lower()``, so
    characters whose lowercase form has several code points (e.g. "İ") are
    not folded onto their single-character counterparts.

    Args:
        subject: Callback data or command text, anything but str matches nothing
        rule: Match rule of a binding

    Returns:
        True if subject is accepted by the rule
    """
    if not isinstance(subject, str):
        return False

    pattern = rule.pattern
    match rule.selector:
        case StringSelector.EQUALS:
            return subject == pattern
        case StringSelector.EQUALS_IGNORE_CASE:
            return subject.lower() == pattern.lower()
        case StringSelector.STARTS_WITH:
            return subject.startswith(pattern)
        case StringSelector.CONTAINS:
            return pattern in subject

    raise ValueError(f"Unknown selector: {rule.selector}")


def isCommandMessage(message: Message) -> bool:
    """Check if message is a bot command (has text and a bot_command entity at offset 0)."""
    if message.text is None:
        return False
    return any(
        entity.type == MessageEntity.BOT_COMMAND and entity.offset == 0 for entity in message.entities or ()
    )


class UpdateDispatcher:
    """Routes updates to the bindings of a handler registry.

    The dispatcher keeps no per-update state, each :meth:`deliverUpdate` call
    works on the registry as it is at that moment.
    """

    def __init__(self, registry: Optional[HandlerRegistry] = None):
        """Initialize the dispatcher.

        Args:
            registry: Handler registry to use (creates new one if not provided)
        """
        self.registry = registry or HandlerRegistry()
        self._stats: Dict[str, int] = {}
        self.resetStats()

    async def deliverUpdate(self, bot: Any, update: Update) -> None:
        """Deliver update to every matching handler.

        Args:
            bot: Bot context, passed to handlers unchanged
            update: The update to deliver

        Raises:
            UpdateProcessError: If at least one handler failed, with every failure in ``errors``
        """
        self._stats["updates_processed"] += 1
        errors: List[Exception] = []

        await self._runPhase(TriggerKind.ANY, self.registry.getHandlers(TriggerKind.ANY), None, bot, update, errors)

        if update.callback_query is not None:
            await self._runPhase(
                TriggerKind.CALLBACK,
                self.registry.getHandlers(TriggerKind.CALLBACK),
                update.callback_query.data,
                bot,
                update,
                errors,
            )
        elif update.message is not None and isCommandMessage(update.message):
            await self._runPhase(
                TriggerKind.COMMAND,
                self.registry.getHandlers(TriggerKind.COMMAND),
                update.message.text,
                bot,
                update,
                errors,
            )

        if errors:
            self._stats["errors_occurred"] += len(errors)
            raise UpdateProcessError(
                f"Failed to process update #{getattr(update, 'update_id', 'N/A')}", errors, update=update
            )

    async def _runPhase(
        self,
        kind: TriggerKind,
        bindings: Iterable[HandlerBinding],
        subject: Any,
        bot: Any,
        update: Update,
        errors: List[Exception],
    ) -> None:
        """Invoke matching bindings of one phase, appending failures to errors."""
        logger.debug(f"Running {kind.name} phase for update #{getattr(update, 'update_id', 'N/A')}")

        for binding in bindings:
            try:
                if binding.matchRule is not None and not matchesRule(subject, binding.matchRule):
                    continue

                logger.debug(f"Invoking {binding}")
                await binding.invoke(bot, update)
                self._stats["handlers_executed"] += 1
            except Exception as e:
                logger.debug(f"Handler {binding.name} failed: {type(e).__name__}: {e}")
                errors.append(e)

    def getStats(self) -> Dict[str, int]:
        """Get dispatcher statistics.

        Returns:
            Dictionary with processing statistics
        """
        return self._stats.copy()

    def resetStats(self) -> None:
        """Reset dispatcher statistics."""
        self._stats = {
            "updates_processed": 0,
            "handlers_executed": 0,
            "errors_occurred": 0,
        }

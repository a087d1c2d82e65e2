"""
Common handler: greeting, help and ping buttons, dood!

This module contains the CommonHandler class which answers the basic bot
commands and ``ping`` callback buttons and counts every update it sees.
"""

import logging

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update

from lib.metagram import StringSelector, eventHandler, handleAny, handleCallback, handleCommand

logger = logging.getLogger(__name__)

PING_CALLBACK_DATA = "ping"

HELP_TEXT = (
    "Available commands:\n"
    "/start - greeting with a ping button\n"
    "/help - this message"
)


@eventHandler
class CommonHandler:
    """
    Built-in handler source covering every trigger kind.

    Attributes:
        updatesSeen: Number of updates delivered to this handler.
    """

    def __init__(self):
        self.updatesSeen = 0

    @handleAny()
    def countUpdate(self, bot, update: Update) -> None:
        """Count every incoming update."""
        self.updatesSeen += 1
        logger.debug(f"Update #{update.update_id} seen, total: {self.updatesSeen}")

    @handleCommand("/start")
    @handleCommand("/start ", StringSelector.STARTS_WITH)
    @handleCommand("/start@", StringSelector.STARTS_WITH)
    async def startCommand(self, bot, update: Update) -> None:
        """Greet user and offer ping button (deep link payload and @BotName suffix are ignored)."""
        message = update.message
        if message is None:
            return

        keyboard = InlineKeyboardMarkup([[InlineKeyboardButton("Ping", callback_data=PING_CALLBACK_DATA)]])
        await message.reply_text("Hello! I'm alive, dood!", reply_markup=keyboard)

    @handleCommand("/help", StringSelector.EQUALS_IGNORE_CASE)
    async def helpCommand(self, bot, update: Update) -> None:
        """Send list of available commands."""
        if update.message is None:
            return
        await update.message.reply_text(HELP_TEXT)

    @handleCallback(PING_CALLBACK_DATA)
    async def pingButton(self, bot, update: Update) -> None:
        """Answer ping button."""
        query = update.callback_query
        if query is None:
            return
        await query.answer(text="Pong!")

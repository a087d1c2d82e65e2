"""
Telegram mock objects for testing.

This module provides factory functions to create mock Telegram objects
for use in dispatcher tests. All mocks are configured with sensible defaults.
"""

import datetime
from typing import Optional
from unittest.mock import AsyncMock, Mock

from telegram import CallbackQuery, Chat, Message, MessageEntity, Update, User
from telegram.ext import CallbackContext, ExtBot


def createMockUser(
    userId: int = 456,
    username: str = "testuser",
    firstName: str = "Test",
    isBot: bool = False,
) -> Mock:
    """
    Create a mock Telegram User.

    Args:
        userId: User ID (default: 456)
        username: Username (default: "testuser")
        firstName: First name (default: "Test")
        isBot: Whether user is a bot (default: False)

    Returns:
        Mock: Mocked User instance
    """
    user = Mock(spec=User)
    user.id = userId
    user.username = username
    user.first_name = firstName
    user.is_bot = isBot
    user.full_name = firstName
    return user


def createMockChat(chatId: int = 123, chatType: str = "private") -> Mock:
    """
    Create a mock Telegram Chat.

    Args:
        chatId: Chat ID (default: 123)
        chatType: Chat type (private, group, supergroup, channel) (default: "private")

    Returns:
        Mock: Mocked Chat instance
    """
    chat = Mock(spec=Chat)
    chat.id = chatId
    chat.type = chatType
    return chat


def createMockMessage(
    messageId: int = 1,
    chatId: int = 123,
    userId: int = 456,
    text: Optional[str] = "test message",
    isCommand: Optional[bool] = None,
) -> Mock:
    """
    Create a mock Telegram Message.

    Args:
        messageId: Message ID (default: 1)
        chatId: Chat ID (default: 123)
        userId: User ID (default: 456)
        text: Message text (default: "test message")
        isCommand: Force presence (True) or absence (False) of the BOT_COMMAND entity.
            By default the entity is added when text starts with "/"

    Returns:
        Mock: Mocked Message instance

    Example:
        message = createMockMessage(text="/start")
        assert message.entities[0].type == MessageEntity.BOT_COMMAND
    """
    message = Mock(spec=Message)
    message.message_id = messageId
    message.text = text
    message.chat = createMockChat(chatId=chatId)
    message.chat_id = chatId
    message.from_user = createMockUser(userId=userId)
    message.date = datetime.datetime.now()

    if isCommand is None:
        isCommand = bool(text and text.startswith("/"))

    entities = []
    if isCommand:
        # Command is everything before first space or end of string
        commandEnd = len(text or "")
        if text and " " in text:
            commandEnd = text.find(" ")

        commandEntity = Mock(spec=MessageEntity)
        commandEntity.type = MessageEntity.BOT_COMMAND
        commandEntity.offset = 0
        commandEntity.length = commandEnd
        entities.append(commandEntity)

    message.entities = tuple(entities)
    message.reply_text = AsyncMock(return_value=None)
    return message


def createMockCallbackQuery(
    queryId: str = "callback_123",
    data: Optional[str] = "test_callback",
    message: Optional[Mock] = None,
    userId: int = 456,
) -> Mock:
    """
    Create a mock Telegram CallbackQuery.

    Args:
        queryId: Query ID (default: "callback_123")
        data: Callback data (default: "test_callback")
        message: Mock Message object the button belongs to (default: auto-created)
        userId: User ID (default: 456)

    Returns:
        Mock: Mocked CallbackQuery instance

    Example:
        query = createMockCallbackQuery(data="button_clicked")
        assert query.data == "button_clicked"
    """
    query = Mock(spec=CallbackQuery)
    query.id = queryId
    query.data = data
    query.message = message or createMockMessage(text="Choose:")
    query.from_user = createMockUser(userId=userId)
    query.answer = AsyncMock(return_value=True)
    return query


def createMockUpdate(
    updateId: int = 1,
    message: Optional[Mock] = None,
    callbackQuery: Optional[Mock] = None,
) -> Mock:
    """
    Create a mock Telegram Update.

    Only the given payload is set, everything else is None, so
    ``createMockUpdate()`` is an update without message and callback query.

    Args:
        updateId: Update ID (default: 1)
        message: Mock Message object (default: None)
        callbackQuery: Mock CallbackQuery object (default: None)

    Returns:
        Mock: Mocked Update instance
    """
    update = Mock(spec=Update)
    update.update_id = updateId
    update.message = message
    update.callback_query = callbackQuery
    update.effective_message = message if message is not None else (callbackQuery.message if callbackQuery else None)
    return update


def createCommandUpdate(text: str, updateId: int = 1) -> Mock:
    """Create a mock Update carrying a command message with given text."""
    return createMockUpdate(updateId=updateId, message=createMockMessage(text=text, isCommand=True))


def createTextUpdate(text: str, updateId: int = 1) -> Mock:
    """Create a mock Update carrying a plain (non-command) text message."""
    return createMockUpdate(updateId=updateId, message=createMockMessage(text=text, isCommand=False))


def createCallbackUpdate(data: Optional[str], updateId: int = 1) -> Mock:
    """Create a mock Update carrying a callback query with given data."""
    return createMockUpdate(updateId=updateId, callbackQuery=createMockCallbackQuery(data=data))


def createMockBot(botId: int = 123456789, username: str = "test_bot") -> AsyncMock:
    """
    Create a mock Telegram Bot.

    Args:
        botId: Bot ID (default: 123456789)
        username: Bot username (default: "test_bot")

    Returns:
        AsyncMock: Mocked ExtBot instance
    """
    bot = AsyncMock(spec=ExtBot)
    bot.id = botId
    bot.username = username
    bot.send_message = AsyncMock(return_value=None)
    bot.answer_callback_query = AsyncMock(return_value=True)
    return bot


def createMockContext(bot: Optional[AsyncMock] = None) -> Mock:
    """
    Create a mock Telegram Context (CallbackContext).

    Args:
        bot: Mock bot instance (default: auto-created)

    Returns:
        Mock: Mocked CallbackContext instance
    """
    context = Mock(spec=CallbackContext)
    context.bot = bot or createMockBot()
    context.error = None
    return context

"""
Test fixtures package for metagram tests.

- telegram_mocks: Mock Telegram API objects (Update, Message, CallbackQuery, etc.)

All fixtures are also available through the main conftest.py file.
"""

from tests.fixtures.telegram_mocks import (
    createCallbackUpdate,
    createCommandUpdate,
    createMockBot,
    createMockCallbackQuery,
    createMockChat,
    createMockContext,
    createMockMessage,
    createMockUpdate,
    createMockUser,
    createTextUpdate,
)

__all__ = [
    "createCallbackUpdate",
    "createCommandUpdate",
    "createMockBot",
    "createMockCallbackQuery",
    "createMockChat",
    "createMockContext",
    "createMockMessage",
    "createMockUpdate",
    "createMockUser",
    "createTextUpdate",
]

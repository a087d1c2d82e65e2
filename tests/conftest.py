"""
Pytest configuration and common fixtures for metagram tests.

This module provides shared fixtures for testing the handler registry, the
update dispatcher and the bot application. All fixtures follow camelCase
naming convention.
"""

from typing import List

import pytest

from lib.metagram import HandlerRegistry, UpdateDispatcher
from tests.fixtures.telegram_mocks import createMockBot, createMockContext

# ============================================================================
# Metagram Fixtures
# ============================================================================


@pytest.fixture
def handlerRegistry() -> HandlerRegistry:
    """
    Provide an empty handler registry.

    Returns:
        HandlerRegistry: Fresh registry without bindings
    """
    return HandlerRegistry()


@pytest.fixture
def updateDispatcher(handlerRegistry) -> UpdateDispatcher:
    """
    Provide a dispatcher bound to the handlerRegistry fixture.

    Returns:
        UpdateDispatcher: Dispatcher instance
    """
    return UpdateDispatcher(handlerRegistry)


@pytest.fixture
def callLog() -> List[str]:
    """
    Provide a shared list handlers append their names to.

    Example:
        def testOrder(callLog):
            ...
            assert callLog == ["first", "second"]
    """
    return []


# ============================================================================
# Telegram Fixtures
# ============================================================================


@pytest.fixture
def mockBot():
    """
    Create a mock Telegram bot.

    Returns:
        AsyncMock: Mocked ExtBot instance
    """
    return createMockBot()


@pytest.fixture
def mockContext(mockBot):
    """
    Create a mock callback context holding mockBot.

    Returns:
        Mock: Mocked CallbackContext instance
    """
    return createMockContext(bot=mockBot)

"""
Telegram bot application setup and management for Metagram.
"""

import logging
from typing import List, Optional

import telegram
from telegram.ext import Application, ContextTypes, TypeHandler

from internal.config.manager import ConfigManager
from lib.metagram import (
    HandlerRegistry,
    MetagramError,
    RegisterError,
    UpdateDispatcher,
    UpdateProcessError,
    discoverHandlerSources,
)

logger = logging.getLogger(__name__)


def logErrorCauses(error: MetagramError) -> None:
    """Log aggregated error with every collected cause."""
    logger.error(f"{error.message}, causes: {len(error.errors)}")
    for idx, cause in enumerate(error.errors, start=1):
        logger.error(f"Cause #{idx}: {type(cause).__name__}#{cause}", exc_info=cause)


class TelegramBotApplication:
    """Manages Telegram bot application setup and execution."""

    def __init__(self, configManager: ConfigManager, registry: Optional[HandlerRegistry] = None):
        """Initialize Telegram bot application.

        Args:
            configManager: Configuration manager instance
            registry: Handler registry to fill (creates new one if not provided)
        """
        self.configManager = configManager
        self.registry = registry or HandlerRegistry()
        self.dispatcher = UpdateDispatcher(self.registry)
        self.application: Optional[Application] = None

    def registerHandlers(self, packages: Optional[List[str]] = None) -> None:
        """Discover and register handler sources.

        Args:
            packages: Packages to scan (default: packages from configuration)

        Raises:
            RegisterError: If any source failed to register, other sources stay registered
        """
        if packages is None:
            packages = self.configManager.getHandlerPackages()

        candidates = []
        for packageName in packages:
            found = list(discoverHandlerSources(packageName))
            logger.info(f"Found {len(found)} handler sources in {packageName}")
            candidates.extend(found)

        try:
            self.registry.registerHandlerSourcesFrom(candidates)
        except RegisterError as e:
            logErrorCauses(e)
            raise

        logger.info(f"Registered {self.registry.getHandlerCount()} handlers")

    async def processUpdate(self, update: telegram.Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Deliver update to registered handlers, logging failures."""
        logger.debug(f"Handling Update#{update.update_id}")
        try:
            await self.dispatcher.deliverUpdate(context.bot, update)
        except UpdateProcessError as e:
            logErrorCauses(e)

    async def errorHandler(self, update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle errors."""
        logger.error(f"Unhandled exception while handling an update: {type(context.error).__name__}#{context.error}")
        logger.error(f"UpdateObj is: {update}")
        logger.exception(context.error)

    def setupHandlers(self) -> None:
        """Install update handler and error handler into the application."""
        if self.application is None:
            raise RuntimeError("Application not initialized")

        self.application.add_handler(TypeHandler(telegram.Update, self.processUpdate))
        self.application.add_error_handler(self.errorHandler)

        logger.info("Bot handlers configured successfully")

    def buildApplication(self) -> Application:
        """Build python-telegram-bot Application from bot configuration."""
        botConfig = self.configManager.getBotConfig()

        appBuilder = Application.builder().token(self.configManager.getBotToken())

        baseUrl = botConfig.get("baseUrl", None)
        if baseUrl is not None:
            appBuilder = appBuilder.base_url(baseUrl)
            logger.info(f"Base URL set to {baseUrl}")

        self.application = appBuilder.build()
        self.setupHandlers()
        return self.application

    def run(self) -> None:
        """Register handlers and start long polling."""
        self.registerHandlers()
        application = self.buildApplication()

        logger.info("Starting Metagram Telegram bot, dood!")
        application.run_polling(allowed_updates=telegram.Update.ALL_TYPES)

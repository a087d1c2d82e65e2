"""
Bot module for Metagram.

- application: TelegramBotApplication wiring python-telegram-bot to the handler registry
- handlers/: built-in handler sources, always scanned on startup
"""

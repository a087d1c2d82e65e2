"""
Built-in handler sources, scanned by TelegramBotApplication on startup.
"""

from .common import CommonHandler

__all__ = [
    "CommonHandler",
]

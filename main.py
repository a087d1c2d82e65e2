"""
Metagram - Telegram bot built from discovered handler sources.
"""

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from internal.bot.application import TelegramBotApplication
from internal.config.manager import ConfigManager
from lib.logging_utils import initLogging

# Configure basic logging first
logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.INFO)
# set higher logging level for httpx to avoid all GET and POST requests being logged
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


class MetagramBot:
    """Main bot orchestrator: configuration, logging and Telegram application."""

    def __init__(self, configPath: str = "config.toml", configDirs: Optional[List[str]] = None):
        self.configManager = ConfigManager(configPath, configDirs)
        initLogging(self.configManager.getLoggingConfig())
        self.botApp = TelegramBotApplication(configManager=self.configManager)

    def run(self):
        """Start the bot."""
        self.botApp.run()


def parseArguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Metagram - Telegram bot with discoverable handlers, dood!")
    parser.add_argument(
        "-c",
        "--config",
        default="config.toml",
        help="Path to configuration file (default: config.toml)",
    )
    parser.add_argument(
        "--config-dir",
        action="append",
        help="Directory to search for .toml config files recursively (can be specified multiple times)",
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Pretty-print loaded configuration and exit",
    )
    args = parser.parse_args(argv)
    args.config = os.path.abspath(args.config)
    if args.config_dir:
        args.config_dir = [os.path.abspath(dirPath) for dirPath in args.config_dir]

    return args


def prettyPrintConfig(configManager: ConfigManager) -> None:
    """Pretty-print the loaded configuration."""
    print("=== Metagram Configuration ===")
    print()
    print(json.dumps(configManager.config, indent=2, ensure_ascii=False, sort_keys=True, default=str))
    print()
    print("=== Configuration loaded successfully, dood! ===")


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    args = parseArguments(argv)

    try:
        if args.print_config:
            prettyPrintConfig(ConfigManager(args.config, args.config_dir))
            return

        bot = MetagramBot(configPath=args.config, configDirs=args.config_dir)
        bot.run()
    except KeyboardInterrupt:
        logger.info("Bot stopped by user")
    except Exception as e:
        logger.error(f"Bot crashed: {e}")
        logger.exception(e)
        sys.exit(1)


if __name__ == "__main__":
    main()

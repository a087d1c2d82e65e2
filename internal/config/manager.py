"""
Configuration management for Metagram bot.
"""

import logging
import os
import re
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import tomli
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_HANDLER_PACKAGES = ["internal.bot.handlers"]
"""Packages always scanned for handler sources"""


def replaceMatchToEnv(match: re.Match[str]) -> str:
    """Replace environment variable placeholder with its value.

    Args:
        match: A regex match object containing the environment variable name.

    Returns:
        str: The value of the environment variable or the original placeholder
             if the variable is not set.
    """
    key = match.group(1)
    return os.getenv(key, match.group(0))


def substituteEnvVars(value: Any) -> Any:
    """Recursively substitute ${VAR_NAME} placeholders in configuration values.

    Args:
        value: The configuration value to process. Can be a string, dict, list, or other type.

    Returns:
        The processed value, other types are returned unchanged
    """
    if isinstance(value, str):
        return re.sub(r"\$\{([A-Za-z_][A-Za-z0-9_-]*)\}", replaceMatchToEnv, value)
    elif isinstance(value, dict):
        return {k: substituteEnvVars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [substituteEnvVars(item) for item in value]
    return value


class ConfigManager:
    """Loads and validates Metagram configuration."""

    def __init__(
        self, configPath: str = "config.toml", configDirs: Optional[List[str]] = None, dotEnvFile: str = ".env"
    ):
        """Initialize ConfigManager with config file path and optional config directories."""
        self.config_path = configPath
        self.config_dirs = configDirs or []
        load_dotenv(dotenv_path=dotEnvFile)
        self.config: Dict[str, Any] = substituteEnvVars(self._loadConfig())

    def _findTomlFilesRecursive(self, directory: str) -> List[Path]:
        """Recursively find all .toml files in a directory, sorted."""
        dirPath = Path(directory)

        if not dirPath.exists():
            logger.warning(f"Config directory {directory} does not exist, skipping")
            return []

        if not dirPath.is_dir():
            logger.warning(f"Config path {directory} is not a directory, skipping")
            return []

        tomlFiles = [tomlFile for tomlFile in dirPath.rglob("*.toml") if tomlFile.is_file()]
        for tomlFile in tomlFiles:
            logger.debug(f"Found config file: {tomlFile}")
        return sorted(tomlFiles)

    def _mergeConfigs(self, baseConfig: Dict[str, Any], newConfig: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge newConfig into a copy of baseConfig."""
        merged = baseConfig.copy()

        for key, value in newConfig.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = self._mergeConfigs(merged[key], value)
            else:
                merged[key] = value

        return merged

    def _loadConfig(self) -> Dict[str, Any]:
        """
        Load configuration from the main TOML file and optional config directories.

        Files found in config directories are merged over the main file in sorted order.
        A broken file inside a config directory is logged and skipped.

        Returns:
            Dict[str, Any]: The loaded and merged configuration dictionary.

        Raises:
            SystemExit: If there is nothing to load, the main file is broken or the bot token is missing
        """
        configFile = Path(self.config_path)
        hasConfigFile = configFile.exists()
        if not hasConfigFile and not self.config_dirs:
            logger.error(f"Configuration file {self.config_path} not found!")
            sys.exit(1)

        config: Dict[str, Any] = {}
        if hasConfigFile:
            try:
                with open(configFile, "rb") as f:
                    config = tomli.load(f)
            except (OSError, tomli.TOMLDecodeError) as e:
                logger.error(f"Failed to load configuration {self.config_path}: {e}")
                sys.exit(1)
            logger.info(f"Loaded main config from {self.config_path}")

        for configDir in self.config_dirs:
            tomlFiles = self._findTomlFilesRecursive(configDir)
            logger.info(f"Found {len(tomlFiles)} .toml files in {configDir}")

            for tomlFile in tomlFiles:
                try:
                    with open(tomlFile, "rb") as f:
                        dirConfig = tomli.load(f)
                except (OSError, tomli.TOMLDecodeError) as e:
                    logger.error(f"Failed to load config file {tomlFile}: {e}")
                    continue

                config = self._mergeConfigs(config, dirConfig)
                logger.info(f"Merged config from {tomlFile}")

        if not config.get("bot", {}).get("token"):
            logger.error("Bot token not found in configuration!")
            sys.exit(1)

        logger.info("Configuration loaded successfully")
        return config

    def get(self, key: str, default=None) -> Any:
        """Get configuration value by key."""
        return self.config.get(key, default)

    def getBotConfig(self) -> Dict[str, Any]:
        """Get bot-specific configuration."""
        return self.get("bot", {})

    def getLoggingConfig(self) -> Dict[str, Any]:
        """Get logging-specific configuration."""
        return self.get("logging", {})

    def getHandlersConfig(self) -> Dict[str, Any]:
        """
        Get handler discovery configuration

        Returns:
            Dict with ``packages`` (list of packages to scan for handler sources)
        """
        return self.get("handlers", {})

    def getHandlerPackages(self) -> List[str]:
        """Get packages to scan for handler sources, built-in ones first, without duplicates."""
        packages = list(DEFAULT_HANDLER_PACKAGES)
        for package in self.getHandlersConfig().get("packages", []):
            if package not in packages:
                packages.append(package)
        return packages

    def getBotToken(self) -> str:
        """Get bot token from configuration."""
        token = self.getBotConfig().get("token", "")
        if token in ["", "YOUR_BOT_TOKEN_HERE"]:
            logger.error("Please set your bot token in config.toml!")
            sys.exit(1)
        return token

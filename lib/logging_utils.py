"""
Logging utilities for Metagram bot.
"""

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers and the least verbose level they get unless configured explicitly
NOISY_LOGGERS: Dict[str, int] = {
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "telegram": logging.INFO,
}


def getLogLevelByStr(levelStr: str, default: Optional[int] = None) -> Optional[int]:
    """Get log level by its name (case insensitive), or default if name is unknown."""
    level = logging.getLevelName(str(levelStr).upper())
    if isinstance(level, int):
        return level
    logger.error(f"Invalid log level '{levelStr}'")
    return default


def _makeFileHandler(logFile: str, rotate: bool) -> logging.Handler:
    """Create file handler, rotating it daily if requested."""
    Path(logFile).parent.mkdir(parents=True, exist_ok=True)
    if rotate:
        return TimedRotatingFileHandler(
            filename=logFile,
            when="midnight",
            interval=1,
            backupCount=7,
            encoding="utf-8",
        )
    return logging.FileHandler(logFile, encoding="utf-8")


def configureLogger(localLogger: logging.Logger, config: Dict[str, Any]) -> None:
    """
    Configure single logger from [logging] table (or one of [logging.logger.<name>] tables).

    Supported keys: ``level``, ``propagate``, ``format``, ``console``, ``console-level``,
    ``file``, ``file-level``, ``rotate``.
    Existing handlers of the logger are replaced.
    """
    if "propagate" in config:
        localLogger.propagate = bool(config["propagate"])

    if "level" in config:
        logLevel = getLogLevelByStr(config["level"])
        if logLevel is not None:
            localLogger.setLevel(logLevel)

    logLevel = localLogger.getEffectiveLevel()
    formatter = logging.Formatter(config.get("format", DEFAULT_FORMAT))

    for handler in localLogger.handlers[:]:
        localLogger.removeHandler(handler)

    if config.get("console", False):
        consoleLogLevel = logLevel
        if "console-level" in config:
            consoleLogLevel = getLogLevelByStr(config["console-level"], logLevel) or logLevel
        consoleHandler = logging.StreamHandler()
        consoleHandler.setLevel(consoleLogLevel)
        consoleHandler.setFormatter(formatter)
        localLogger.addHandler(consoleHandler)
        logger.info(f"Logging {localLogger.name} to console, logLevel: {consoleHandler.level}")

    if "file" in config:
        logFile = config["file"]
        try:
            fileHandler = _makeFileHandler(logFile, bool(config.get("rotate", False)))
        except OSError as e:
            logger.error(f"Failed to setup file logging for {localLogger.name}: {e}")
            return

        fileLogLevel = logLevel
        if "file-level" in config:
            fileLogLevel = getLogLevelByStr(config["file-level"], logLevel) or logLevel
        fileHandler.setLevel(fileLogLevel)
        fileHandler.setFormatter(formatter)
        localLogger.addHandler(fileHandler)
        logger.info(f"Logging {localLogger.name} to file: {logFile}, logLevel: {fileHandler.level}")


def initLogging(config: Dict[str, Any]) -> None:
    """Configure root logger, quiet noisy libraries and apply per-logger overrides."""
    rootLogger = logging.getLogger()
    rootLogger.setLevel(logging.INFO)

    configureLogger(rootLogger, config)
    logLevel = rootLogger.getEffectiveLevel()

    # Do not log every HTTP request of long polling
    for loggerName, minLevel in NOISY_LOGGERS.items():
        if logLevel < minLevel:
            logging.getLogger(loggerName).setLevel(minLevel)

    for loggerName, loggerConfig in config.get("logger", {}).items():
        logger.debug(f"Configuring logger '{loggerName}' with config {loggerConfig}")
        configureLogger(logging.getLogger(loggerName), loggerConfig)

    logger.info(f"Logging configured: root level={logging.getLevelName(logLevel)}")

"""
Logging utilities for Clinic Locator.

Loggers are configured from ``[logging]`` section of config.toml, with
optional per-logger overrides in ``[logging.logger.<name>]``.
"""

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Chatty third-party loggers, raised to WARNING unless we log at WARNING already
NOISY_LOGGERS = ("httpx", "httpcore")


def getLogLevelByStr(levelStr: str, default: Optional[int] = None) -> Optional[int]:
    """Get log level by string."""
    level = logging.getLevelName(levelStr.upper())
    if isinstance(level, int):
        return level
    logger.error(f"Invalid log level '{levelStr}'")
    return default


def _handlerLevel(config: Dict[str, Any], key: str, loggerLevel: int) -> int:
    if key not in config:
        return loggerLevel
    level = getLogLevelByStr(config[key])
    return loggerLevel if level is None else level


def _makeFileHandler(logFile: str, rotate: bool) -> logging.Handler:
    """Create file handler, creating parent directory if needed."""
    Path(logFile).parent.mkdir(parents=True, exist_ok=True)
    if not rotate:
        return logging.FileHandler(logFile, encoding="utf-8")
    # Daily rotation, one week of history
    return TimedRotatingFileHandler(filename=logFile, when="midnight", backupCount=7, encoding="utf-8")


def configureLogger(localLogger: logging.Logger, config: Dict[str, Any]) -> None:
    """Configure individual logger from `[logging]`-like config section.

    Supported keys: propagate, level, format, console, console-level,
    file, file-level, rotate. Existing handlers of the logger are replaced.
    """
    if "propagate" in config:
        localLogger.propagate = bool(config["propagate"])

    level = getLogLevelByStr(config["level"]) if "level" in config else None
    if level is not None:
        localLogger.setLevel(level)
    loggerLevel = localLogger.getEffectiveLevel()

    for handler in list(localLogger.handlers):
        localLogger.removeHandler(handler)

    handlers: Dict[str, logging.Handler] = {}
    if config.get("console", False):
        consoleHandler = logging.StreamHandler()
        consoleHandler.setLevel(_handlerLevel(config, "console-level", loggerLevel))
        handlers["console"] = consoleHandler

    logFile = config.get("file")
    if logFile:
        try:
            fileHandler = _makeFileHandler(logFile, bool(config.get("rotate", False)))
        except OSError as e:
            logger.error(f"Failed to setup file logging for {localLogger.name}: {e}")
        else:
            fileHandler.setLevel(_handlerLevel(config, "file-level", loggerLevel))
            handlers[f"file {logFile}"] = fileHandler

    formatter = logging.Formatter(config.get("format", DEFAULT_FORMAT))
    for target, handler in handlers.items():
        handler.setFormatter(formatter)
        localLogger.addHandler(handler)
        logger.info(f"Logging {localLogger.name} to {target}, level {logging.getLevelName(handler.level)}")


def initLogging(config: Dict[str, Any]) -> None:
    """Configure root logger and per-logger overrides from config file settings."""
    rootLogger = logging.getLogger()
    rootLogger.setLevel(logging.INFO)
    configureLogger(rootLogger, config)
    rootLevel = rootLogger.getEffectiveLevel()

    # Otherwise every lookup and POST gets logged by httpx itself
    if rootLevel < logging.WARNING:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    for loggerName, loggerConfig in config.get("logger", {}).items():
        logger.debug(f"Configuring logger '{loggerName}' with config {loggerConfig}")
        configureLogger(logging.getLogger(loggerName), loggerConfig)

    logger.info(f"Logging configured: root level={logging.getLevelName(rootLevel)}")

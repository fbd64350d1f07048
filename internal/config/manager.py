"""
Configuration management for Clinic Locator.
"""

import logging
import os
import re
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import tomli

import lib.utils as utils

logger = logging.getLogger(__name__)

API_KEY_PLACEHOLDERS = ("", "YOUR_API_KEY_HERE")


ENV_PLACEHOLDER_RE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_-]*)\}")


def replaceMatchToEnv(match: re.Match[str]) -> str:
    """Value of environment variable named in placeholder, placeholder itself if unset"""
    return os.environ.get(match.group(1), match.group(0))


def substituteEnvVars(value: Any) -> Any:
    """Recursively replace `${VAR_NAME}` placeholders in strings, dicts and lists.

    Unset variables are left as is, so missing secrets stay recognizable.
    """
    match value:
        case str():
            return ENV_PLACEHOLDER_RE.sub(replaceMatchToEnv, value)
        case dict():
            return {key: substituteEnvVars(item) for key, item in value.items()}
        case list():
            return list(map(substituteEnvVars, value))
        case _:
            return value


class ConfigManager:
    """Loads TOML configuration for Clinic Locator.

    Main config file is read first, then every ``*.toml`` found recursively in
    config directories is merged over it (in sorted path order). Values may
    reference environment variables as ``${VAR_NAME}``; a ``.env`` file is
    loaded beforehand.
    """

    def __init__(
        self, configPath: str = "config.toml", configDirs: Optional[List[str]] = None, dotEnvFile: str = ".env"
    ):
        """Initialize ConfigManager with config file path and optional config directories."""
        self.config_path = configPath
        self.config_dirs = configDirs or []
        utils.load_dotenv(path=dotEnvFile)
        self.config = substituteEnvVars(self._loadConfig())

        rootDir = self.config.get("application", {}).get("root-dir", None)
        if rootDir is not None:
            os.chdir(rootDir)
            logger.info(f"Changed root directory to {rootDir}")

    def _findTomlFilesRecursive(self, directory: str) -> List[Path]:
        """Recursively find all .toml files in a directory, dood!"""
        dirPath = Path(directory)

        if not dirPath.is_dir():
            logger.warning(f"Config directory {directory} does not exist or is not a directory, skipping, dood!")
            return []

        tomlFiles = [path for path in dirPath.rglob("*.toml") if path.is_file()]
        for tomlFile in tomlFiles:
            logger.debug(f"Found config file: {tomlFile}")
        return sorted(tomlFiles)

    def _mergeConfigs(self, baseConfig: Dict[str, Any], newConfig: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge two configuration dictionaries, dood!"""
        merged = dict(baseConfig)
        for key, value in newConfig.items():
            current = merged.get(key)
            if isinstance(current, dict) and isinstance(value, dict):
                value = self._mergeConfigs(current, value)
            merged[key] = value

        return merged

    def _loadConfig(self) -> Dict[str, Any]:
        """Load configuration from TOML file and optional config directories.

        Raises:
            SystemExit: If there is neither main config file nor config
                directories, or if main config file can't be parsed.
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
                    # Broken file in config dir is skipped, not fatal
                    logger.error(f"Failed to load config file {tomlFile}: {e}")
                    continue

                config = self._mergeConfigs(config, dirConfig)
                logger.info(f"Merged config from {tomlFile}")

        logger.info("Configuration loaded and merged successfully, dood!")
        return config

    def get(self, key: str, default=None) -> Any:
        """Get configuration value by key."""
        return self.config.get(key, default)

    def getLoggingConfig(self) -> Dict[str, Any]:
        """Get logging-specific configuration."""
        return self.get("logging", {})

    def getGeocodeMapsConfig(self) -> Dict[str, Any]:
        """
        Get Geocode Maps configuration

        Returns:
            Dict with Geocode Maps settings (api-key, request-timeout,
            accept-language, api-base-url, search-limit)
        """
        return self.get("geocode-maps", {})

    def getGeocodeMapsApiKey(self) -> str:
        """Get Geocode Maps API key, exit if it is not configured."""
        apiKey = self.getGeocodeMapsConfig().get("api-key", "")
        if apiKey in API_KEY_PLACEHOLDERS or apiKey.startswith("${"):
            logger.error("Please set geocode-maps.api-key in config.toml!")
            sys.exit(1)
        return apiKey

    def getSearchConfig(self) -> Dict[str, Any]:
        """Get place search configuration (debounce-delay)."""
        return self.get("search", {})

    def getClinicApiConfig(self) -> Dict[str, Any]:
        """Get clinic registration API configuration (endpoint, request-timeout)."""
        return self.get("clinic-api", {})

"""
Configuration management utilities.

Feeds are configured by name, either in a TOML file::

    [feeds.nuget]
    url = "https://api.nuget.org/v3/index.json"

    [feeds.internal]
    url = "https://pkgs.example.com/nuget/v3/index.json"
    username = "mirror"
    password = "s3cret"

or in a standard NuGet.Config XML file (``packageSources`` plus optional
``packageSourceCredentials``). Either way the result is a FeedsConfig that
the FeedResolver is constructed with.
"""

import logging
import tomllib
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from .constants import DEFAULT_CONFIG_PATH, NUGET_CONFIG_SUFFIXES
from ..exceptions import ConfigurationError
from ..models.feeds import FeedEndpoint, FeedsConfig


class ConfigManager:
    """
    Manages feed configuration loading and access.

    This class provides a centralized way to load feed definitions from
    TOML or NuGet.Config files with proper error handling and validation.
    """

    def __init__(self, config_path: Optional[str] = None) -> None:
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to configuration file. If None, uses default path.
        """
        self.config_path = Path(config_path or DEFAULT_CONFIG_PATH).expanduser()
        self._config: Optional[Dict[str, Any]] = None

    @property
    def is_nuget_config(self) -> bool:
        """True when the file is parsed as NuGet.Config XML."""
        return self.config_path.suffix.lower() in NUGET_CONFIG_SUFFIXES

    def load(self) -> Dict[str, Any]:
        """
        Load configuration from file.

        Returns:
            Dictionary with a "feeds" section mapping feed names to settings

        Raises:
            ConfigurationError: If the file is missing or cannot be parsed
        """
        if self._config is not None:
            return self._config

        if not self.config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {self.config_path}")

        try:
            if self.is_nuget_config:
                self._config = _parse_nuget_config(ET.parse(self.config_path).getroot())
            else:
                with open(self.config_path, "rb") as f:
                    self._config = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid TOML in configuration file {self.config_path}: {e}") from e
        except ET.ParseError as e:
            raise ConfigurationError(f"Invalid XML in configuration file {self.config_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Failed to load configuration from {self.config_path}: {e}") from e

        logging.debug("Loaded configuration from %s", self.config_path)
        return self._config

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get an entire configuration section.

        Args:
            section: Section name (e.g., "feeds")

        Returns:
            Dictionary containing section data, or empty dict if section not found
        """
        value = self.load().get(section, {})
        return value if isinstance(value, dict) else {}

    def load_feeds(self) -> FeedsConfig:
        """
        Build the FeedsConfig described by the configuration file.

        Raises:
            ConfigurationError: If a feed entry is malformed
        """
        feeds: Dict[str, FeedEndpoint] = {}
        for name, settings in self.get_section("feeds").items():
            if not isinstance(settings, dict) or "url" not in settings:
                raise ConfigurationError(f"Feed '{name}' in {self.config_path} must define a url")
            try:
                feeds[name] = FeedEndpoint(
                    name=name,
                    url=settings["url"],
                    username=settings.get("username"),
                    password=settings.get("password"),
                )
            except ValidationError as e:
                raise ConfigurationError(f"Invalid settings for feed '{name}' in {self.config_path}: {e}") from e

        logging.debug("Configured feeds: %s", ", ".join(feeds) or "none")
        return FeedsConfig(feeds=feeds)


def _decode_element_name(tag: str) -> str:
    """NuGet.Config stores source names as element names, with spaces encoded."""
    return tag.replace("_x0020_", " ")


def _parse_nuget_config(root: ET.Element) -> Dict[str, Any]:
    """
    Convert a NuGet.Config document into the TOML-shaped dictionary.

    Local folder sources are skipped since the mirror only speaks HTTP.
    """
    feeds: Dict[str, Dict[str, str]] = {}

    sources = root.find("packageSources")
    if sources is not None:
        for element in sources:
            if element.tag == "clear":
                feeds.clear()
            elif element.tag == "add" and element.get("key") and element.get("value"):
                url = element.get("value", "")
                if not url.startswith(("http://", "https://")):
                    logging.debug("Skipping non-HTTP package source %s: %s", element.get("key"), url)
                    continue
                feeds[element.get("key", "")] = {"url": url}

    disabled = root.find("disabledPackageSources")
    if disabled is not None:
        for element in disabled.findall("add"):
            if element.get("value", "").lower() == "true":
                feeds.pop(element.get("key", ""), None)

    credentials = root.find("packageSourceCredentials")
    if credentials is not None:
        for source in credentials:
            name = _decode_element_name(source.tag)
            if name not in feeds:
                continue
            values = {item.get("key"): item.get("value") for item in source.findall("add")}
            if values.get("Username") is not None:
                feeds[name]["username"] = values["Username"]
            if values.get("ClearTextPassword") is not None:
                feeds[name]["password"] = values["ClearTextPassword"]

    return {"feeds": feeds}


def load_feeds_config(config_path: Optional[str] = None) -> FeedsConfig:
    """Load feed definitions from ``config_path`` (or the default location)."""
    return ConfigManager(config_path).load_feeds()


__all__ = ["ConfigManager", "load_feeds_config"]

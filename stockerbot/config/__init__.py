"""Configuration module for stockerbot."""

from stockerbot.config.loader import load_config, save_config, get_config_path
from stockerbot.config.schema import Config

__all__ = ["Config", "load_config", "save_config", "get_config_path"]

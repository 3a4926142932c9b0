"""Configuration management for VIOP spread matching."""

from .config_manager import ConfigManager, VIOPMatchingConfig, SummarySource

__all__ = ["ConfigManager", "VIOPMatchingConfig", "SummarySource"]

"""
Configuration management for ps2bloom.
"""

from .settings import AppConfig, ConversionConfig, DashboardConfig, HydrationConfig, load_config

__all__ = ["AppConfig", "ConversionConfig", "DashboardConfig", "HydrationConfig", "load_config"]

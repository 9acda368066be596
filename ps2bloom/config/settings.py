"""
Configuration loading for ps2bloom.
"""

import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from ..errors import ConfigError
from ..languages import Language, language_from_name


@dataclass
class ConversionConfig:
    """Book conversion options."""
    reference_language: str = "english"
    include_references: bool = False
    overwrite: bool = False
    project_codes: Dict[str, str] = field(default_factory=dict)  # project dir name -> code

    @property
    def reference(self) -> Language:
        language = language_from_name(self.reference_language)
        if language == Language.UNKNOWN:
            raise ConfigError(f"Unknown reference language: {self.reference_language!r}")
        return language


@dataclass
class HydrationConfig:
    """Bloom command line settings."""
    enabled: bool = True
    bloom_path: Optional[str] = None
    preset: str = "shellbook"
    vernacular_iso_code: str = "en"
    timeout_seconds: int = 300


@dataclass
class DashboardConfig:
    """Excel conversion dashboard."""
    enabled: bool = False
    path: str = "conversion_dashboard.xlsx"


@dataclass
class AppConfig:
    """Main application configuration."""
    conversion: ConversionConfig = field(default_factory=ConversionConfig)
    hydration: HydrationConfig = field(default_factory=HydrationConfig)
    dashboard: DashboardConfig = field(default_factory=DashboardConfig)
    log_level: str = "INFO"
    log_file: Optional[str] = None
    output_dir: str = "Output"


def load_config(config_path: Path) -> AppConfig:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config.yaml file

    Returns:
        AppConfig instance (defaults when the file does not exist)

    Raises:
        ConfigError: If the file is not valid YAML or names an unknown language
    """
    config_path = Path(config_path)
    if not config_path.exists():
        return AppConfig()

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid configuration file {config_path}: {e}") from e

    conv_data = data.get('conversion', {}) or {}
    conversion_config = ConversionConfig(
        reference_language=conv_data.get('reference_language', 'english'),
        include_references=bool(conv_data.get('include_references', False)),
        overwrite=bool(conv_data.get('overwrite', False)),
        project_codes={str(k): str(v) for k, v in (conv_data.get('project_codes') or {}).items()}
    )
    if language_from_name(conversion_config.reference_language) == Language.UNKNOWN:
        raise ConfigError(f"Unknown reference language: {conversion_config.reference_language!r}")

    hyd_data = data.get('hydration', {}) or {}
    hydration_config = HydrationConfig(
        enabled=bool(hyd_data.get('enabled', True)),
        bloom_path=hyd_data.get('bloom_path'),
        preset=hyd_data.get('preset', 'shellbook'),
        vernacular_iso_code=hyd_data.get('vernacular_iso_code', 'en'),
        timeout_seconds=int(hyd_data.get('timeout_seconds', 300))
    )

    dash_data = data.get('dashboard', {}) or {}
    dashboard_config = DashboardConfig(
        enabled=bool(dash_data.get('enabled', False)),
        path=dash_data.get('path', 'conversion_dashboard.xlsx')
    )

    return AppConfig(
        conversion=conversion_config,
        hydration=hydration_config,
        dashboard=dashboard_config,
        log_level=data.get('log_level', 'INFO'),
        log_file=data.get('log_file'),
        output_dir=data.get('output_dir', 'Output')
    )

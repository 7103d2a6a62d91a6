"""Configuration management for the crowd density predictor.

Loads YAML configuration files into dataclasses for dataset generation,
export, logging and dashboard settings.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)


@dataclass
class GeneratorConfig:
    """Configuration for synthetic dataset generation."""

    count: int = 50000
    batch_size: int = 5000
    seed: Optional[int] = None
    history_years: int = 2
    clear_bias: float = 0.6
    festival_probability: float = 0.02
    noise_ratio: float = 0.15

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError(f"count must be non-negative, got {self.count}")
        if self.batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {self.batch_size}")
        if self.history_years <= 0:
            raise ValueError(
                f"history_years must be positive, got {self.history_years}"
            )
        for name in ("clear_bias", "festival_probability"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
        if self.noise_ratio < 0:
            raise ValueError(
                f"noise_ratio must be non-negative, got {self.noise_ratio}"
            )


@dataclass
class ExportConfig:
    """Configuration for CSV and JSON dataset export."""

    output_dir: str = "data/exports"
    sample_size: int = 500
    preview_rows: int = 50


@dataclass
class LoggingConfig:
    """Configuration for application logging."""

    level: str = "WARNING"
    file: Optional[str] = None


@dataclass
class DashboardConfig:
    """Configuration for the Streamlit dashboard."""

    sample_count: int = 20000


@dataclass
class AppConfig:
    """Top-level application configuration."""

    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    dashboard: DashboardConfig = field(default_factory=DashboardConfig)


def load_config(config_path: str) -> AppConfig:
    """Load application configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Populated AppConfig instance.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If a generator setting is out of range.
        yaml.YAMLError: If the file contains invalid YAML.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        raw = yaml.safe_load(f)

    if raw is None:
        logger.warning("Empty config file, using defaults")
        return AppConfig()

    config = AppConfig(
        generator=GeneratorConfig(**(raw.get("generator") or {})),
        export=ExportConfig(**(raw.get("export") or {})),
        logging=LoggingConfig(**(raw.get("logging") or {})),
        dashboard=DashboardConfig(**(raw.get("dashboard") or {})),
    )

    logger.info("Configuration loaded from %s", config_path)
    return config

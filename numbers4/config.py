"""
Numbers4 Configuration
======================

Reads engine tunables from config/config.ini. Every value has a default so
the engine runs without a configuration file.
"""

import configparser
import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from loguru import logger

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
DEFAULT_CONFIG_PATH = os.path.join(PROJECT_ROOT, 'config', 'config.ini')


@dataclass(frozen=True)
class EngineConfig:
    """Typed view over config.ini"""
    database_file: str = "data/numbers4.db"
    window_size: int = 100
    ensemble_size: int = 12
    single_model_cap: int = 10
    unit_price: int = 200
    straight_payout: int = 900000
    box_payout: int = 37500
    pattern_max_attempts: int = 100
    pattern_sum_tolerance: float = 5.0
    pattern_runs: int = 3
    variation_top_digits: int = 3
    variation_frequency_bias: float = 0.7
    variation_max_attempts: int = 10
    timezone: str = "Asia/Tokyo"
    extra_holidays: Tuple[str, ...] = field(default_factory=tuple)


DEFAULTS = EngineConfig()


def load_config(path: Optional[str] = None) -> EngineConfig:
    """
    Load the engine configuration.

    Args:
        path: Path to an ini file. Defaults to config/config.ini in the project root.

    Returns:
        EngineConfig with file values layered over the defaults
    """
    config_path = path or DEFAULT_CONFIG_PATH
    config = configparser.ConfigParser()

    try:
        read_files = config.read(config_path)
    except configparser.Error as e:
        logger.error(f"Error reading config file {config_path}: {e}. Using defaults.")
        return DEFAULTS

    if not read_files:
        logger.warning(f"Config file not found at {config_path}, using defaults")
        return DEFAULTS

    for section in ('paths', 'engine', 'purchase', 'payouts', 'pattern', 'variation'):
        if not config.has_section(section):
            logger.warning(f"Config section '{section}' not found, using defaults for it")

    extra = config.get('schedule', 'extra_holidays', fallback='')
    extra_holidays = tuple(d.strip() for d in extra.split(',') if d.strip())

    try:
        return EngineConfig(
            database_file=config.get('paths', 'database_file', fallback=DEFAULTS.database_file),
            window_size=config.getint('engine', 'window_size', fallback=DEFAULTS.window_size),
            ensemble_size=config.getint('engine', 'ensemble_size', fallback=DEFAULTS.ensemble_size),
            single_model_cap=config.getint('engine', 'single_model_cap', fallback=DEFAULTS.single_model_cap),
            unit_price=config.getint('purchase', 'unit_price', fallback=DEFAULTS.unit_price),
            straight_payout=config.getint('payouts', 'straight', fallback=DEFAULTS.straight_payout),
            box_payout=config.getint('payouts', 'box', fallback=DEFAULTS.box_payout),
            pattern_max_attempts=config.getint('pattern', 'max_attempts', fallback=DEFAULTS.pattern_max_attempts),
            pattern_sum_tolerance=config.getfloat('pattern', 'sum_tolerance', fallback=DEFAULTS.pattern_sum_tolerance),
            pattern_runs=config.getint('pattern', 'pattern_runs', fallback=DEFAULTS.pattern_runs),
            variation_top_digits=config.getint('variation', 'top_digits', fallback=DEFAULTS.variation_top_digits),
            variation_frequency_bias=config.getfloat('variation', 'frequency_bias', fallback=DEFAULTS.variation_frequency_bias),
            variation_max_attempts=config.getint('variation', 'max_attempts', fallback=DEFAULTS.variation_max_attempts),
            timezone=config.get('schedule', 'timezone', fallback=DEFAULTS.timezone),
            extra_holidays=extra_holidays,
        )
    except ValueError as e:
        logger.error(f"Invalid value in config file {config_path}: {e}. Using defaults.")
        return DEFAULTS


def get_config() -> EngineConfig:
    """Configuration from the project's config.ini"""
    return load_config()

"""Application configuration loading"""
import logging
import os
from pathlib import Path
from typing import Dict, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "app.yaml"

DEFAULTS = {
    'upstream': {
        'base_url': 'https://api.llama.fi',
        'protocol': 'pumpswap',
        'timeout': 15,
        'cache_ttl': 0,
    },
    'server': {
        'host': '0.0.0.0',
        'port': 5000,
        'debug': False,
    },
    'logging': {
        'level': 'INFO',
    },
}


def load_config(config_path: Optional[str] = None) -> Dict:
    """
    Load configuration from YAML, filling in defaults and env overrides.

    Args:
        config_path: Path to the YAML file. Falls back to the DASHBOARD_CONFIG
            environment variable, then config/app.yaml in the project root.

    Returns:
        Dict with 'upstream', 'server' and 'logging' sections

    Raises:
        FileNotFoundError: if the config file does not exist
    """
    if config_path is None:
        config_path = os.environ.get('DASHBOARD_CONFIG', DEFAULT_CONFIG_PATH)
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Dashboard config not found: {config_path}")

    with open(config_path, 'r') as f:
        loaded = yaml.safe_load(f) or {}

    config = {}
    for section, defaults in DEFAULTS.items():
        config[section] = {**defaults, **(loaded.get(section) or {})}

    apply_env_overrides(config)
    return config


def apply_env_overrides(config: Dict) -> Dict:
    """Override selected settings from environment variables"""
    base_url = os.environ.get('DEFILLAMA_BASE_URL')
    if base_url:
        config['upstream']['base_url'] = base_url

    timeout = os.environ.get('DEFILLAMA_TIMEOUT')
    if timeout:
        try:
            config['upstream']['timeout'] = float(timeout)
        except ValueError:
            logger.warning("Ignoring invalid DEFILLAMA_TIMEOUT=%s", timeout)

    log_level = os.environ.get('DASHBOARD_LOG_LEVEL')
    if log_level:
        config['logging']['level'] = log_level.upper()

    return config

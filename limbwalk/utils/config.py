"""
Configuration management module
"""

import copy
import logging
import os
import yaml
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class Config:
    """Configuration manager for creature assembly and simulation"""

    # Default configuration
    DEFAULTS = {
        "creature": {
            "variant": "walker",
            "layout": "spider",
            "limbs": None,  # explicit list of limb mappings overrides layout
        },
        "gait": {
            "stride_threshold": 0.6,
            "stride_length": 0.6,
            "stance_lead": 0.2,
            "swing_duration": 0.25,
            "step_height": 0.35,
            "reach_margin": 0.99,
        },
        "body": {
            "start": [0.0, 0.0, 0.0],
            "speed": 2.0,
            "turn_rate": 3.0,
            "ride_height": 1.0,
            "arrive_radius": 0.3,
            "pid_kp": 4.0,
            "pid_ki": 0.5,
            "pid_kd": 0.2,
        },
        "camera": {
            "locked": True,
            "offset": [0.0, 6.0, -10.0],
        },
        "terrain": {
            "type": "flat",
        },
        "visual": {
            "show_body": True,
            "show_plating": True,
            "plating_opacity": 1.0,
            "leg_color": "#2a2a35",
        },
        "system": {
            "tick_rate": 60,
            "debug": False,
        }
    }

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to YAML config file (optional)
        """
        self.config = copy.deepcopy(self.DEFAULTS)

        if config_file:
            if os.path.exists(config_file):
                self.load_from_file(config_file)
            else:
                logger.warning(f"Config file not found, using defaults: {config_file}")

    def load_from_file(self, config_file: str) -> None:
        """Load configuration from YAML file"""
        try:
            with open(config_file, 'r') as f:
                yaml_config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load config file {config_file}: {e}")
            return

        if yaml_config:
            if not isinstance(yaml_config, dict):
                logger.warning(f"Ignoring config file {config_file}: top level is not a mapping")
                return
            self._deep_update(self.config, yaml_config)
            logger.info(f"Loaded configuration from {config_file}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key: Configuration key (e.g., "gait.stride_length")
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value using dot notation.

        Args:
            key: Configuration key
            value: Value to set
        """
        keys = key.split('.')
        config = self.config

        for k in keys[:-1]:
            if k not in config or not isinstance(config[k], dict):
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    @staticmethod
    def _deep_update(base_dict: Dict, update_dict: Dict) -> None:
        """Deep update dictionary"""
        for key, value in update_dict.items():
            if key in base_dict and isinstance(base_dict[key], dict) and isinstance(value, dict):
                Config._deep_update(base_dict[key], value)
            else:
                base_dict[key] = value

    def to_dict(self) -> Dict:
        """Get configuration as dictionary"""
        return copy.deepcopy(self.config)

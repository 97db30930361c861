"""
MediYap Central Configuration
Contains decoder matching policy, dictionary source and logging settings
"""

from dataclasses import dataclass
from typing import Optional
import os

import yaml

MATCH_ORDERS = ("longest", "declared")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class DecoderConfig:
    """Configuration for the term decoder"""

    # Tie-break when several dictionary keys match:
    #   longest  - longest key first, equal lengths in declaration order
    #   declared - declaration order of the dictionary
    match_order: str = "longest"

    def __post_init__(self):
        """Validate the matching policy"""
        if self.match_order not in MATCH_ORDERS:
            raise ValueError(
                f"Unknown match order: {self.match_order!r} (expected one of {', '.join(MATCH_ORDERS)})"
            )


@dataclass
class MediYapConfig:
    """Main configuration class combining all settings"""

    decoder: DecoderConfig

    # Extra dictionary entries (YAML file with prefixes/suffixes/roots sections)
    dictionary_path: Optional[str] = None

    # Logging
    log_level: str = "WARNING"

    def __init__(self,
                 decoder: Optional[DecoderConfig] = None,
                 dictionary_path: Optional[str] = None,
                 log_level: str = "WARNING"):
        """Initialize with optional custom configurations"""
        self.decoder = decoder or DecoderConfig()
        self.dictionary_path = dictionary_path
        self.log_level = log_level.upper()

        # Override with environment variables if present
        self._load_env_overrides()
        self.validate()

    def _load_env_overrides(self):
        """Load configuration overrides from environment variables"""
        if os.getenv("MEDIYAP_MATCH_ORDER"):
            self.decoder = DecoderConfig(match_order=os.getenv("MEDIYAP_MATCH_ORDER").lower())

        if os.getenv("MEDIYAP_DICTIONARY"):
            self.dictionary_path = os.getenv("MEDIYAP_DICTIONARY")

        if os.getenv("MEDIYAP_LOG_LEVEL"):
            self.log_level = os.getenv("MEDIYAP_LOG_LEVEL").upper()

        # Debug override
        if os.getenv("MEDIYAP_DEBUG", "").lower() in ("true", "1", "yes"):
            self.log_level = "DEBUG"

    def validate(self):
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level!r}")

    @classmethod
    def load_from_file(cls, config_path: str) -> 'MediYapConfig':
        """Load configuration from YAML file"""
        try:
            with open(config_path, 'r') as f:
                config_data = yaml.safe_load(f) or {}

            decoder = DecoderConfig(**config_data.get('decoder', {}))

            # Relative dictionary paths are relative to the config file
            dictionary_path = config_data.get('dictionary_path')
            if dictionary_path and not os.path.isabs(dictionary_path):
                dictionary_path = os.path.join(os.path.dirname(os.path.abspath(config_path)), dictionary_path)

            return cls(
                decoder=decoder,
                dictionary_path=dictionary_path,
                log_level=config_data.get('log_level', "WARNING"),
            )

        except Exception as e:
            raise ValueError(f"Failed to load config from {config_path}: {e}")

    def save_to_file(self, config_path: str):
        """Save configuration to YAML file"""
        config_data = {
            'decoder': {
                'match_order': self.decoder.match_order,
            },
            'dictionary_path': self.dictionary_path,
            'log_level': self.log_level,
        }

        with open(config_path, 'w') as f:
            yaml.dump(config_data, f, default_flow_style=False, indent=2)

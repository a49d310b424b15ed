"""
Configuration parser for the RouteLens console.
"""

import yaml
from pathlib import Path
from typing import Dict, Any

from models import Language


class ConfigurationError(Exception):
    """Raised when configuration is invalid or missing required fields."""
    pass


class ConsoleConfig:
    """Console configuration parser and validator."""
    
    REQUIRED_FIELDS = {
        'server.listen_address': str,
        'server.port': int,
    }
    
    OPTIONAL_FIELDS = {
        'console.language': str,
        'console.cache_size': int,
        'history.symbol_threshold': int,
    }
    
    def __init__(self, config_dict: Dict[str, Any]):
        self._config = config_dict
        self._validate()
    
    def _validate(self):
        """Validate required fields, optional field types and value ranges."""
        for field_path, expected_type in self.REQUIRED_FIELDS.items():
            value = self._get_nested_value(field_path)
            if value is None:
                raise ConfigurationError(f"Missing required field: {field_path}")
            
            if not isinstance(value, expected_type) or isinstance(value, bool):
                raise ConfigurationError(
                    f"Field {field_path} has incorrect type. "
                    f"Expected {expected_type}, got {type(value)}"
                )
        
        for field_path, expected_type in self.OPTIONAL_FIELDS.items():
            value = self._get_nested_value(field_path)
            if value is None:
                continue
            if not isinstance(value, expected_type) or isinstance(value, bool):
                raise ConfigurationError(
                    f"Field {field_path} has incorrect type. "
                    f"Expected {expected_type}, got {type(value)}"
                )
        
        if not 0 < self.port < 65536:
            raise ConfigurationError(f"Field server.port out of range: {self.port}")
        
        if self.cache_size <= 0:
            raise ConfigurationError("Field console.cache_size must be positive")
        
        if self.symbol_threshold < 0:
            raise ConfigurationError("Field history.symbol_threshold must not be negative")
        
        language = self._get_nested_value('console.language')
        if language is not None and language not in {lang.value for lang in Language}:
            raise ConfigurationError(
                f"Field console.language must be one of "
                f"{sorted(lang.value for lang in Language)}, got {language!r}"
            )
    
    def _get_nested_value(self, field_path: str) -> Any:
        """Get value from nested dictionary using dot notation."""
        keys = field_path.split('.')
        value = self._config
        for key in keys:
            if isinstance(value, dict):
                value = value.get(key)
            else:
                return None
        return value
    
    @property
    def listen_address(self) -> str:
        return self._config['server']['listen_address']
    
    @property
    def port(self) -> int:
        return self._config['server']['port']
    
    @property
    def language(self) -> Language:
        return Language((self._config.get('console') or {}).get('language', Language.PRIMARY.value))
    
    @property
    def cache_size(self) -> int:
        return (self._config.get('console') or {}).get('cache_size', 32)
    
    @property
    def symbol_threshold(self) -> int:
        return (self._config.get('history') or {}).get('symbol_threshold', 50)
    
    @classmethod
    def from_file(cls, config_path: str) -> 'ConsoleConfig':
        """Load configuration from YAML file."""
        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")
        
        try:
            with open(path, 'r') as f:
                config_dict = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse YAML: {e}")
        
        if config_dict is None:
            raise ConfigurationError("Configuration file is empty")
        
        if not isinstance(config_dict, dict):
            raise ConfigurationError("Configuration root must be a mapping")
        
        return cls(config_dict)

"""
Data configuration management.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional, Tuple, Union

from ..exceptions import ConfigurationError

DEFAULT_CONFIG_PATH = Path(__file__).parent / "data_config.yaml"


class DataConfig:
    """
    Load and manage source paths and field spellings from YAML configuration.
    """
    
    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        Initialize with configuration file.
        
        Args:
            config_path: Path to YAML configuration file (packaged default if None)
        """
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self.config = self._load_config()
    
    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file"""
        if not self.config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {self.config_path}")
        
        try:
            with open(self.config_path, 'r') as f:
                config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {self.config_path}: {e}") from e
        
        if not isinstance(config, dict):
            raise ConfigurationError(f"Configuration root must be a mapping: {self.config_path}")
        return config
    
    def get_storage_type(self) -> str:
        """Get storage type from config"""
        return self.config.get('storage', {}).get('type', 'csv')
    
    def get_input_file_path(self) -> Path:
        """Get the attendance CSV path"""
        filename = self.config.get('paths', {}).get('input_file', 'Daily Attendance Trends.csv')
        return Path(filename)
    
    def get_output_dir(self) -> Path:
        """Get output directory"""
        output_dir = self.config.get('paths', {}).get('output_dir', 'output')
        return Path(output_dir)
    
    def get_field_candidates(self) -> Dict[str, Tuple[str, ...]]:
        """
        Get the ordered key spellings configured for each canonical field.
        
        Returns:
            Mapping of canonical field name to a tuple of candidate keys.
            Fields not listed in the config are omitted.
            
        Raises:
            ConfigurationError: If a field entry is not a list of strings
        """
        fields = self.config.get('fields') or {}
        candidates = {}
        for field_name, keys in fields.items():
            if isinstance(keys, str):
                keys = [keys]
            if not isinstance(keys, list) or not all(isinstance(k, str) for k in keys):
                raise ConfigurationError(
                    f"Field '{field_name}' must list candidate column names as strings"
                )
            candidates[field_name] = tuple(keys)
        return candidates

import copy
import yaml
import json
from pathlib import Path
from typing import Dict, Any, Optional
import logging
from jsonschema import validate, ValidationError
from .defaults import DEFAULT_CONFIG, CONFIG_SCHEMA

logger = logging.getLogger(__name__)

class ConfigLoader:
    """Load and validate configuration settings for ticket generation."""

    def __init__(self, schema_path: Optional[Path] = None):
        """Initialize config loader with optional JSON schema path.

        Args:
            schema_path: Path to JSON schema for validating config files.
                The built-in schema is used when not given.
        """
        self.schema_path = schema_path
        self.schema = CONFIG_SCHEMA

        if schema_path:
            try:
                with open(schema_path, 'r') as f:
                    self.schema = json.load(f)
                logger.info(f"Loaded configuration schema from {schema_path}")
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Failed to load schema from {schema_path}: {e}")

    def load_config(self,
                   config_path: Path,
                   apply_defaults: bool = True) -> Dict[str, Any]:
        """Load configuration from file and validate it.

        Args:
            config_path: Path to configuration file (YAML or JSON)
            apply_defaults: Whether to apply default values for missing fields

        Returns:
            Dictionary containing configuration settings
        """
        config_path = Path(config_path)
        logger.info(f"Loading configuration from {config_path}")

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        # Determine file format from extension
        file_ext = config_path.suffix.lower()

        try:
            if file_ext == '.yaml' or file_ext == '.yml':
                with open(config_path, 'r', encoding='utf-8') as f:
                    config = yaml.safe_load(f)
            elif file_ext == '.json':
                with open(config_path, 'r', encoding='utf-8') as f:
                    config = json.load(f)
            else:
                raise ValueError(f"Unsupported configuration file format: {file_ext}")
        except Exception as e:
            logger.error(f"Error loading configuration: {e}")
            raise

        # An empty YAML file loads as None
        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise ValueError(f"Configuration must be a mapping, got {type(config).__name__}")

        # Apply defaults if needed
        if apply_defaults:
            config = self.apply_defaults(config)

        self.validate_config(config)

        return config

    def validate_config(self, config: Dict[str, Any]) -> None:
        """Validate configuration against the schema.

        Raises:
            ValidationError: If the configuration does not match the schema
        """
        try:
            validate(instance=config, schema=self.schema)
            logger.info("Configuration validated successfully")
        except ValidationError as e:
            logger.error(f"Configuration validation failed: {e.message}")
            raise

    def apply_defaults(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply default values for any missing configuration settings.

        Args:
            config: User-provided configuration dictionary

        Returns:
            Configuration with defaults applied for missing values
        """
        result = copy.deepcopy(DEFAULT_CONFIG)

        # Recursively update defaults with user config
        self._recursive_update(result, config)

        return result

    def _recursive_update(self,
                         target: Dict[str, Any],
                         source: Dict[str, Any]) -> None:
        """Recursively update target dictionary with values from source.

        Args:
            target: Target dictionary to update (modified in place)
            source: Source dictionary with new values
        """
        for key, value in source.items():
            # If both are dicts, recursively update
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._recursive_update(target[key], value)
            else:
                # Otherwise replace/add value
                target[key] = value

    def save_config(self, config: Dict[str, Any], output_path: Path) -> None:
        """Save configuration to file.

        Args:
            config: Configuration dictionary
            output_path: Path to save configuration file
        """
        output_path = Path(output_path)
        # Determine file format from extension
        file_ext = output_path.suffix.lower()

        try:
            if file_ext == '.yaml' or file_ext == '.yml':
                with open(output_path, 'w', encoding='utf-8') as f:
                    yaml.safe_dump(config, f, default_flow_style=False, allow_unicode=True)
            elif file_ext == '.json':
                with open(output_path, 'w', encoding='utf-8') as f:
                    json.dump(config, f, indent=2, ensure_ascii=False)
            else:
                raise ValueError(f"Unsupported configuration file format: {file_ext}")

            logger.info(f"Configuration saved to {output_path}")
        except Exception as e:
            logger.error(f"Error saving configuration: {e}")
            raise

"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
from pathlib import Path
from typing import Dict, Any, List, Optional, Union
from dataclasses import asdict, dataclass, field

from ..logging_config import get_logger

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""
    pass


VALID_OUTPUT_STYLES = {"package", "source", "none"}


@dataclass
class GeneratorConfig:
    """Base configuration for code generators."""

    # Runtime naming
    runtime_prefix: str = "CGP"
    export_macro: str = "FOUNDATION_EXPORT"
    field_type_prefix: str = "ComGoogleProtobufDescriptors_FieldDescriptor_Type_Enum_"
    registry_variable: str = "extensionRegistry"

    # Header resolution
    output_style: str = "package"  # package, source, none
    header_mappings: Dict[str, str] = field(default_factory=dict)
    mapping_files: Optional[List[str]] = None  # None: use mappings.j2objc if present
    output_mapping_file: Optional[str] = None

    # Additional metadata
    add_comments: bool = True

    # Custom settings (language-specific)
    custom: Dict[str, Any] = field(default_factory=dict)


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported languages."""
        self._configs["objc"] = {
            "runtime_prefix": "CGP",
            "export_macro": "FOUNDATION_EXPORT",
            "registry_variable": "extensionRegistry",
            "output_style": "package",
            "add_comments": True,
        }

    def get_config(self, language: str = "objc",
                   custom_config: Optional[Dict[str, Any]] = None,
                   config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
        """
        Get complete configuration for a language.

        Args:
            language: Target language name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the language
        """
        # Start with defaults
        base_config = dict(self._configs.get(language, {}))

        # Load from file if provided
        if config_file:
            file_config = self._load_config_file(config_file)
            base_config.update(file_config)
            logger.debug("Loaded configuration file %s", config_file)

        # Apply custom overrides
        if custom_config:
            base_config.update(custom_config)

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == '.json':
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {str(e)}")
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {str(e)}")

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = set(GeneratorConfig.__dataclass_fields__)

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        # Add custom fields to the custom dict
        if custom_args:
            existing_custom = dict(config_args.get('custom', {}))
            existing_custom.update(custom_args)
            config_args['custom'] = existing_custom

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = asdict(config)
        custom = config_dict.pop("custom")
        config_dict.update(custom)

        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {str(e)}")

    def list_languages(self) -> List[str]:
        """Get list of languages with default configuration."""
        return list(self._configs.keys())

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if config.output_style not in VALID_OUTPUT_STYLES:
            warnings.append(f"Invalid output_style: {config.output_style}")

        for name in ("runtime_prefix", "export_macro", "registry_variable"):
            value = getattr(config, name)
            if not value.isidentifier():
                warnings.append(f"Invalid {name}: {value!r} is not an identifier")

        for mapping_file in config.mapping_files or []:
            if not Path(mapping_file).exists():
                warnings.append(f"Header mapping file not found: {mapping_file}")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(language: str = "objc",
                custom_config: Optional[Dict[str, Any]] = None,
                config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target language name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the language
    """
    manager = get_config_manager()
    return manager.get_config(language, custom_config, config_file)

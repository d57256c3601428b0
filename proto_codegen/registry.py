"""
Generator registry system for managing available extension generators.

Provides dynamic registration and instantiation of language generators.
"""

from typing import Dict, Type, Optional, Any, List, Union
from pathlib import Path

from .core.config import GeneratorConfig, load_config
from .core.descriptor import FieldDescriptor
from .core.generator import ContractViolation, ExtensionLowering
from .logging_config import get_logger

logger = get_logger(__name__)


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


ConfigLike = Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]]


class GeneratorRegistry:
    """Registry for managing available extension generators."""

    def __init__(self):
        """Initialize empty registry."""
        self._generators: Dict[str, Type[ExtensionLowering]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        language: str,
        generator_class: Type[ExtensionLowering],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a generator for a language.

        Args:
            language: Primary language name (e.g., 'objc')
            generator_class: Generator class implementing ExtensionLowering
            aliases: Alternative names for this language
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If generator class is invalid or conflicts exist
        """
        if not (isinstance(generator_class, type)
                and issubclass(generator_class, ExtensionLowering)):
            raise RegistryError("Generator class must inherit from ExtensionLowering")

        language_key = language.lower()

        # Already registered, skip silently
        if language_key in self._generators and not replace:
            return

        self._generators[language_key] = generator_class

        for alias in aliases or []:
            alias_key = alias.lower()

            if alias_key == language_key:
                continue

            if not replace:
                if alias_key in self._generators:
                    raise RegistryError(
                        f"Alias '{alias}' conflicts with existing primary language"
                    )
                if (
                    alias_key in self._aliases
                    and self._aliases[alias_key] != language_key
                ):
                    raise RegistryError(
                        f"Alias '{alias}' already points to '{self._aliases[alias_key]}'"
                    )

            self._aliases[alias_key] = language_key

        logger.debug("Registered %s generator %s", language_key, generator_class.__name__)

    def unregister(self, language: str):
        """Unregister a generator and its aliases."""
        language_key = language.lower()
        self._generators.pop(language_key, None)

        aliases_to_remove = [
            alias for alias, target in self._aliases.items() if target == language_key
        ]
        for alias in aliases_to_remove:
            del self._aliases[alias]

    def get_generator_class(self, language: str) -> Type[ExtensionLowering]:
        """
        Get generator class for language.

        Raises:
            RegistryError: If language not found
        """
        language_key = language.lower()

        if language_key in self._generators:
            return self._generators[language_key]

        if language_key in self._aliases:
            return self._generators[self._aliases[language_key]]

        raise RegistryError(
            f"No generator registered for language: {language}. "
            f"Available: {', '.join(self.list_languages())}"
        )

    def create_generator(
        self,
        language: str,
        descriptor: FieldDescriptor,
        config: ConfigLike = None,
    ) -> ExtensionLowering:
        """
        Create generator instance for one extension.

        Args:
            language: Language name or alias
            descriptor: Extension field to lower
            config: Configuration as GeneratorConfig, dict, or file path

        Returns:
            Configured generator instance

        Raises:
            RegistryError: If generator creation fails
            ContractViolation: If the descriptor cannot be lowered
        """
        generator_class = self.get_generator_class(language)
        primary = self._aliases.get(language.lower(), language.lower())

        try:
            if isinstance(config, GeneratorConfig):
                final_config = config
            elif isinstance(config, (str, Path)):
                final_config = load_config(primary, config_file=config)
            elif isinstance(config, dict):
                final_config = load_config(primary, custom_config=config)
            elif config is None:
                final_config = load_config(primary)
            else:
                raise RegistryError(f"Invalid config type: {type(config)}")

            return generator_class(descriptor, final_config)

        except (ContractViolation, RegistryError):
            raise
        except Exception as e:
            raise RegistryError(f"Failed to create {language} generator: {e}")

    def list_languages(self) -> List[str]:
        """Get list of registered primary language names."""
        return sorted(self._generators.keys())

    def get_aliases_for_language(self, language: str) -> List[str]:
        """Get all aliases for a specific language."""
        language_key = language.lower()
        return sorted(
            alias for alias, target in self._aliases.items() if target == language_key
        )

    def is_supported(self, language: str) -> bool:
        """Check if language is supported."""
        language_key = language.lower()
        return language_key in self._generators or language_key in self._aliases


# Global registry instance - created once
_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Get the global generator registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = GeneratorRegistry()
        _auto_register_generators(_global_registry)
    return _global_registry


def _auto_register_generators(registry: GeneratorRegistry):
    """Register the built-in generators with their aliases."""
    from .languages.objc import ExtensionGenerator

    registry.register("objc", ExtensionGenerator, aliases=["objective-c", "j2objc"])


# Public API functions using the global registry


def register_generator(
    language: str,
    generator_class: Type[ExtensionLowering],
    aliases: Optional[List[str]] = None,
):
    """Register a generator in the global registry."""
    get_registry().register(language, generator_class, aliases)


def get_generator(
    language: str, descriptor: FieldDescriptor, config: ConfigLike = None
) -> ExtensionLowering:
    """Get generator instance for an extension from the global registry."""
    return get_registry().create_generator(language, descriptor, config)


def list_supported_languages() -> List[str]:
    """List all supported languages from global registry."""
    return get_registry().list_languages()


def is_language_supported(language: str) -> bool:
    """Check if language is supported by global registry."""
    return get_registry().is_supported(language)

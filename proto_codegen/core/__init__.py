"""
Core code generation components.

Provides base classes and utilities used by all language generators.
"""

from .generator import (
    ContractViolation,
    ExtensionLowering,
    GeneratorError,
    GenerationResult,
    generate_extension_code,
)
from .descriptor import (
    Cardinality,
    DescriptorError,
    DescriptorIndex,
    FieldDescriptor,
    FieldType,
    FileDescriptor,
    TypeDescriptor,
    TypeKind,
    build_descriptor_index,
    extract_all_extensions,
)
from .naming import NameSanitizer, NamingCase, underscores_to_camel_case
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .printer import Printer
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "ExtensionLowering",
    "GeneratorError",
    "ContractViolation",
    "GenerationResult",
    "generate_extension_code",
    # Descriptor model
    "Cardinality",
    "DescriptorError",
    "DescriptorIndex",
    "FieldDescriptor",
    "FieldType",
    "FileDescriptor",
    "TypeDescriptor",
    "TypeKind",
    "build_descriptor_index",
    "extract_all_extensions",
    # Naming utilities - language-agnostic
    "NameSanitizer",
    "NamingCase",
    "underscores_to_camel_case",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Output
    "Printer",
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]

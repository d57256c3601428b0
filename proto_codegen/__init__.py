"""
Protocol buffer extension code generation.

Lowers extension field descriptors into the declarations, definitions,
metadata records and registration code of a generated-code backend.
"""

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    list_supported_languages,
)
from .core.generator import (
    ContractViolation,
    ExtensionLowering,
    GenerationResult,
    GeneratorError,
    generate_extension_code,
)
from .core.descriptor import (
    Cardinality,
    FieldDescriptor,
    FieldType,
    FileDescriptor,
    TypeDescriptor,
    TypeKind,
    build_descriptor_index,
    extract_all_extensions,
)
from .core.config import GeneratorConfig, ConfigManager, load_config
from .core.printer import Printer
from .languages.objc.headers import HeaderMap

__version__ = "0.1.0"


def lower_extension(descriptor, language="objc", config=None):
    """
    Generate every artifact for one extension field.

    Args:
        descriptor: FieldDescriptor of the extension
        language: Target language name
        config: Generator configuration dict, path or GeneratorConfig

    Returns:
        GenerationResult with header and source code
    """
    generator = get_generator(language, descriptor, config)
    return generate_extension_code(generator)


def lower_file_extensions(file_proto, dependencies=(), language="objc", config=None):
    """
    Generate artifacts for every extension declared in a file.

    When the configuration names an output_mapping_file, the header of every
    class owning a lowered extension is written there together with the
    configured mappings.

    Args:
        file_proto: descriptor_pb2.FileDescriptorProto to lower
        dependencies: FileDescriptorProtos defining referenced types
        language: Target language name
        config: Generator configuration

    Returns:
        List of GenerationResult in declaration order
    """
    index = build_descriptor_index([*dependencies, file_proto])

    generators = [
        get_generator(language, descriptor, config)
        for descriptor in extract_all_extensions(file_proto, index)
    ]
    results = [generate_extension_code(generator) for generator in generators]

    if generators and generators[0].config.output_mapping_file:
        resolved = generators[0].config
        header_map = HeaderMap.from_config(resolved)
        for result in results:
            header_map.add_mappings(result.declared_headers)
        header_map.write_mappings(resolved.output_mapping_file)

    return results


__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "ExtensionLowering",
    "GenerationResult",
    "GeneratorError",
    "ContractViolation",
    "Cardinality",
    "FieldDescriptor",
    "FieldType",
    "FileDescriptor",
    "TypeDescriptor",
    "TypeKind",
    "GeneratorConfig",
    "ConfigManager",
    "Printer",
    "build_descriptor_index",
    "extract_all_extensions",
    "generate_extension_code",
    "get_generator",
    "list_supported_languages",
    "load_config",
    "lower_extension",
    "lower_file_extensions",
]

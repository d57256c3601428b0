"""
Header resolution for generated Objective-C classes.

Maps a referenced type to the header that declares it, either from
explicit mappings or from the type's Java package.
"""

from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from ...core.config import ConfigError, GeneratorConfig
from ...core.descriptor import FieldDescriptor, FileDescriptor, TypeDescriptor
from ...logging_config import get_logger
from .naming import java_class_chain, java_package, outer_classname, qualified_java_name

logger = get_logger(__name__)

# Read from the working directory when no mapping files are configured
DEFAULT_HEADER_MAPPING_FILE = "mappings.j2objc"

# Packages shipped with the j2objc libraries. Their headers keep package
# directories whatever the output style.
PLATFORM_PACKAGES = frozenset({
    "android",
    "com.android.internal.util",
    "com.google.common",
    "com.google.common.annotations",
    "com.google.common.base",
    "com.google.common.cache",
    "com.google.common.collect",
    "com.google.common.hash",
    "com.google.common.io",
    "com.google.common.math",
    "com.google.common.net",
    "com.google.common.primitives",
    "com.google.common.util",
    "com.google.j2objc",
    "com.google.protobuf",
    "dalvik",
    "java",
    "javax",
    "junit",
    "libcore",
    "org.apache.harmony",
    "org.hamcrest",
    "org.json",
    "org.junit",
    "org.kxml2",
    "org.mockito",
    "org.w3c",
    "org.xml.sax",
    "org.xmlpull",
    "sun.misc",
})


class OutputStyle(Enum):
    """Where generated headers are placed."""

    PACKAGE = "package"  # Use the Java package as a directory
    SOURCE = "source"  # Outputs follow the proto file; includes have no directory
    NONE = "none"  # No directory


def is_platform_package(package: str) -> bool:
    """Whether a Java package is, or is inside, a platform package."""
    parts = package.split(".")
    return any(".".join(parts[:i]) in PLATFORM_PACKAGES for i in range(1, len(parts) + 1))


def load_mapping_file(path: Union[str, Path]) -> Dict[str, str]:
    """
    Read a header mapping file.

    Each non-comment line has the form "com.foo.Bar=com/foo/Bar.h".
    Lines starting with '#' or '!' are comments.
    """
    mappings = {}
    path = Path(path)
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        raise ConfigError(f"Failed to read header mapping file {path}: {e}")

    for line_number, raw_line in enumerate(lines, 1):
        line = raw_line.strip()
        if not line or line[0] in "#!":
            continue

        key, sep, value = line.partition("=")
        if not sep:
            key, sep, value = line.partition(":")
        if not sep or not key.strip() or not value.strip():
            raise ConfigError(f"{path}:{line_number}: malformed mapping '{raw_line}'")
        mappings[key.strip()] = value.strip()

    logger.debug("Loaded %d header mappings from %s", len(mappings), path)
    return mappings


class HeaderMap:
    """Resolves the header declaring a generated class."""

    def __init__(
        self,
        output_style: OutputStyle = OutputStyle.PACKAGE,
        mappings: Optional[Dict[str, str]] = None,
    ):
        self.output_style = output_style
        self._mappings = dict(mappings or {})

    @classmethod
    def from_config(cls, config: GeneratorConfig) -> "HeaderMap":
        """
        Build a header map from generator configuration.

        Without configured mapping files the default mapping file is read
        if it exists; an empty list disables it. Inline mappings win.
        """
        try:
            style = OutputStyle(config.output_style)
        except ValueError:
            raise ConfigError(f"Invalid output_style: {config.output_style}")

        mapping_files = config.mapping_files
        if mapping_files is None:
            default_file = Path(DEFAULT_HEADER_MAPPING_FILE)
            mapping_files = [default_file] if default_file.is_file() else []

        header_map = cls(style)
        for mapping_file in mapping_files:
            header_map.add_mappings(load_mapping_file(mapping_file))
        header_map.add_mappings(config.header_mappings)
        return header_map

    def add_mappings(self, mappings: Dict[str, str]):
        self._mappings.update(mappings)

    def get_mapped(self, qualified_name: str) -> Optional[str]:
        return self._mappings.get(qualified_name)

    def write_mappings(self, path: Union[str, Path]):
        """Write every mapping to a file readable by load_mapping_file."""
        path = Path(path)
        lines = [f"{key}={value}\n" for key, value in sorted(self._mappings.items())]
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("".join(lines), encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Failed to write header mapping file {path}: {e}")
        logger.debug("Wrote %d header mappings to %s", len(lines), path)

    def _output_dir(self, package: str) -> str:
        if not package:
            return ""
        # Platform headers keep their package directory
        if self.output_style == OutputStyle.PACKAGE or is_platform_package(package):
            return package.replace(".", "/") + "/"
        return ""

    def _entry(self, file: FileDescriptor, top_level_class: str) -> Tuple[str, str]:
        package = java_package(file)
        qualified = qualified_java_name([top_level_class], package)
        mapped = self._mappings.get(qualified)
        if mapped is not None:
            return qualified, mapped
        return qualified, f"{self._output_dir(package)}{top_level_class}.h"

    def header_for_type(self, type_desc: TypeDescriptor) -> str:
        """Header declaring a message or enum class."""
        return self._entry(type_desc.file, java_class_chain(type_desc)[0])[1]

    def scope_entry(self, descriptor: FieldDescriptor) -> Tuple[str, str]:
        """Qualified Java name and header of the class owning an extension."""
        scope = descriptor.extension_scope
        if scope is not None:
            return self._entry(scope.file, java_class_chain(scope)[0])
        return self._entry(descriptor.file, outer_classname(descriptor.file))

    def header_for_scope(self, descriptor: FieldDescriptor) -> str:
        """Header declaring the class that owns an extension."""
        return self.scope_entry(descriptor)[1]

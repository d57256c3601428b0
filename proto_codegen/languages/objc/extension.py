"""
Objective-C extension generator.

Lowers one protobuf extension field into the header declaration, source
definition, runtime field record, initializer and registry call used by
j2objc-translated protocol buffer code.
"""

from typing import Any, Dict, Optional, Set

from ...core.config import GeneratorConfig
from ...core.descriptor import Cardinality, FieldDescriptor, FieldType
from ...core.generator import ContractViolation, ExtensionLowering
from ...core.printer import Printer
from ...logging_config import get_logger
from .headers import HeaderMap
from .naming import (
    extension_global_name,
    extension_java_name,
    objc_class_name,
)
from .templates import OBJC_TEMPLATES
from .types import PACKABLE_TYPES, ObjcTypeMapper, c_string_literal

logger = get_logger(__name__)


class ExtensionGenerator(ExtensionLowering):
    """Code generator for one Objective-C extension field."""

    def __init__(self, descriptor: FieldDescriptor,
                 config: Optional[GeneratorConfig] = None,
                 header_map: Optional[HeaderMap] = None):
        """
        Initialize generator for an extension.

        Args:
            descriptor: Fully resolved extension field
            config: Generator configuration
            header_map: Header resolution; built from config when omitted

        Raises:
            ContractViolation: If the descriptor cannot be lowered
        """
        super().__init__(descriptor, config)
        self.header_map = header_map or HeaderMap.from_config(self.config)
        self.type_mapper = ObjcTypeMapper()
        self._check_contract()
        logger.debug("ExtensionGenerator initialized for %s", descriptor.full_name)

    @property
    def language_name(self) -> str:
        return "objc"

    @property
    def header_extension(self) -> str:
        return ".h"

    @property
    def source_extension(self) -> str:
        return ".m"

    def get_templates(self) -> Dict[str, str]:
        return OBJC_TEMPLATES

    def _check_contract(self):
        descriptor = self.descriptor

        if descriptor.cardinality == Cardinality.REQUIRED:
            raise ContractViolation(descriptor, "extensions cannot be required")

        if descriptor.packed:
            if not descriptor.is_repeated:
                raise ContractViolation(descriptor, "only repeated fields can be packed")
            if descriptor.type not in PACKABLE_TYPES:
                raise ContractViolation(
                    descriptor, f"{descriptor.type.name} fields cannot be packed"
                )

        # Resolves the value type and parses the default
        self.type_mapper.default_value(descriptor)

    # Naming and type helpers; each is a pure function of the descriptor

    def _global_name(self) -> str:
        return extension_global_name(self.descriptor)

    def _extension_type(self) -> str:
        value_class = self.type_mapper.map_field(self.descriptor).value_class
        value_decl = f"{value_class} *"
        if self.descriptor.is_repeated:
            value_decl = f"NSArray<{value_decl}> *"
        return f"{self.config.runtime_prefix}Extension<{value_decl}>"

    def _flags(self) -> str:
        prefix = self.config.runtime_prefix
        flags = [f"{prefix}FieldFlagExtension"]
        if self.descriptor.is_repeated:
            flags.append(f"{prefix}FieldFlagRepeated")
        if self.descriptor.packed:
            flags.append(f"{prefix}FieldFlagPacked")
        if self.descriptor.type == FieldType.GROUP:
            flags.append(f"{prefix}FieldFlagGroup")
        return " | ".join(flags)

    def _common_context(self) -> Dict[str, Any]:
        descriptor = self.descriptor
        return {
            "runtime_prefix": self.config.runtime_prefix,
            "global_name": self._global_name(),
            "data_name": f"{self._global_name()}_data",
            "number": descriptor.number,
        }

    # Operations

    def collect_source_imports(self, imports: Set[str]) -> None:
        """Add the header of the value's message or enum class, if any."""
        value_type = self.descriptor.value_type
        if value_type is None:
            return

        header = self.header_map.header_for_type(value_type)
        if header == self.header_map.header_for_scope(self.descriptor):
            return
        imports.add(header)

    def declared_headers(self) -> Dict[str, str]:
        """The owning class's header, for output mapping files."""
        qualified_name, header = self.header_map.scope_entry(self.descriptor)
        return {qualified_name: header}

    def generate_members_header(self, printer: Printer) -> None:
        """Emit the exported declaration of the extension global."""
        descriptor = self.descriptor
        self.emit(
            printer,
            "members_header.h.j2",
            add_comments=self.config.add_comments,
            full_name=descriptor.full_name,
            extendee=descriptor.containing_type.full_name,
            number=descriptor.number,
            export_macro=self.config.export_macro,
            extension_type=self._extension_type(),
            global_name=self._global_name(),
        )

    def generate_source_definition(self, printer: Printer) -> None:
        """Emit the storage for the extension global."""
        self.emit(
            printer,
            "source_definition.m.j2",
            extension_type=self._extension_type(),
            global_name=self._global_name(),
        )

    def generate_field_data(self, printer: Printer) -> None:
        """Emit the static field record the runtime builds the extension from."""
        descriptor = self.descriptor
        objc_type = self.type_mapper.map_field(descriptor)
        default = self.type_mapper.default_value(descriptor)

        value_type = descriptor.value_type
        objc_type_ref = f'"{objc_class_name(value_type)}"' if value_type else "NULL"

        if descriptor.options_data:
            options_data = c_string_literal(descriptor.options_data)
        else:
            options_data = "NULL"

        if descriptor.is_repeated:
            cardinality = "REPEATED"
        else:
            cardinality = "SINGLE"

        self.emit(
            printer,
            "field_data.m.j2",
            **self._common_context(),
            name=descriptor.name,
            java_name=extension_java_name(descriptor),
            flags=self._flags(),
            cardinality=f"{self.config.runtime_prefix}FieldCardinality_{cardinality}",
            type_enum=f"{self.config.field_type_prefix}{objc_type.type_token}",
            default_slot=objc_type.default_slot,
            default_literal=default.literal,
            default_length=default.length,
            objc_type=objc_type_ref,
            containing_type=descriptor.containing_type.full_name,
            options_data=options_data,
            options_length=len(descriptor.options_data),
        )

    def generate_source_initializer(self, printer: Printer) -> None:
        """Emit the statement creating the extension from its field record."""
        self.emit(printer, "source_initializer.m.j2", **self._common_context())

    def generate_registration_code(self, printer: Printer) -> None:
        """Emit the registry call keyed by extended class and field number."""
        self.emit(
            printer,
            "registration.m.j2",
            **self._common_context(),
            registry_variable=self.config.registry_variable,
            extendee_class=objc_class_name(self.descriptor.containing_type),
        )

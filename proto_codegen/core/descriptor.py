"""
Core descriptor representation for code generation.

Converts protoc's FileDescriptorProto messages into a normalized,
immutable internal format that generators can work with consistently.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple
from enum import Enum

from google.protobuf import descriptor_pb2

from ..logging_config import get_logger

logger = get_logger(__name__)

_FieldProto = descriptor_pb2.FieldDescriptorProto


class DescriptorError(ValueError):
    """Exception raised when protoc descriptors cannot be converted."""

    pass


class FieldType(Enum):
    """Protocol buffer field types, numbered as in descriptor.proto."""

    DOUBLE = 1
    FLOAT = 2
    INT64 = 3
    UINT64 = 4
    INT32 = 5
    FIXED64 = 6
    FIXED32 = 7
    BOOL = 8
    STRING = 9
    GROUP = 10
    MESSAGE = 11
    BYTES = 12
    UINT32 = 13
    ENUM = 14
    SFIXED32 = 15
    SFIXED64 = 16
    SINT32 = 17
    SINT64 = 18

    @property
    def is_message(self) -> bool:
        return self in (FieldType.MESSAGE, FieldType.GROUP)

    @property
    def is_scalar(self) -> bool:
        return not self.is_message and self != FieldType.ENUM


class Cardinality(Enum):
    """Field labels."""

    OPTIONAL = "optional"
    REQUIRED = "required"
    REPEATED = "repeated"


class TypeKind(Enum):
    """Kinds of named types a field can reference."""

    MESSAGE = "message"
    ENUM = "enum"


@dataclass(frozen=True)
class FileDescriptor:
    """A .proto file and the options that affect generated names."""

    name: str  # Proto path, e.g. "com/foo/foo.proto"
    package: str = ""
    java_package: Optional[str] = None
    java_outer_classname: Optional[str] = None
    java_multiple_files: bool = False

    # Names of top-level messages, enums and services
    top_level_names: Tuple[str, ...] = ()


@dataclass(frozen=True)
class TypeDescriptor:
    """A message or enum type."""

    name: str
    full_name: str
    kind: TypeKind
    file: FileDescriptor
    containing_type: Optional["TypeDescriptor"] = None

    # For enums, (name, number) in declaration order
    enum_values: Tuple[Tuple[str, int], ...] = ()

    def find_enum_value(self, name: str) -> Optional[int]:
        """Get the number of an enum value by name."""
        for value_name, number in self.enum_values:
            if value_name == name:
                return number
        return None


@dataclass(frozen=True)
class FieldDescriptor:
    """Represents a single extension field."""

    name: str
    number: int
    type: FieldType
    cardinality: Cardinality
    containing_type: TypeDescriptor  # The message being extended
    file: FileDescriptor

    # Message the extension is declared in; None for top-level extensions
    extension_scope: Optional[TypeDescriptor] = None

    # Referenced value types
    message_type: Optional[TypeDescriptor] = None
    enum_type: Optional[TypeDescriptor] = None

    # Raw textual default, as stored in FieldDescriptorProto.default_value
    default_value: Optional[str] = None

    packed: bool = False
    options_data: bytes = field(default=b"", repr=False)

    @property
    def full_name(self) -> str:
        scope = self.extension_scope.full_name if self.extension_scope else self.file.package
        return f"{scope}.{self.name}" if scope else self.name

    @property
    def is_repeated(self) -> bool:
        return self.cardinality == Cardinality.REPEATED

    @property
    def has_default_value(self) -> bool:
        return self.default_value is not None

    @property
    def value_type(self) -> Optional[TypeDescriptor]:
        """The message or enum type of the value, if any."""
        if self.type.is_message:
            return self.message_type
        if self.type == FieldType.ENUM:
            return self.enum_type
        return None


# Conversion from protoc descriptors

_LABEL_MAPPING = {
    _FieldProto.LABEL_OPTIONAL: Cardinality.OPTIONAL,
    _FieldProto.LABEL_REQUIRED: Cardinality.REQUIRED,
    _FieldProto.LABEL_REPEATED: Cardinality.REPEATED,
}


class DescriptorIndex:
    """Fully-qualified name lookup over converted files and types."""

    def __init__(self):
        self.files: Dict[str, FileDescriptor] = {}
        self.types: Dict[str, TypeDescriptor] = {}

    def add_file(self, file_proto: descriptor_pb2.FileDescriptorProto) -> FileDescriptor:
        """Convert a file and register all of its types."""
        options = file_proto.options
        file_desc = FileDescriptor(
            name=file_proto.name,
            package=file_proto.package,
            java_package=options.java_package if options.HasField("java_package") else None,
            java_outer_classname=(
                options.java_outer_classname
                if options.HasField("java_outer_classname")
                else None
            ),
            java_multiple_files=options.java_multiple_files,
            top_level_names=tuple(
                [m.name for m in file_proto.message_type]
                + [e.name for e in file_proto.enum_type]
                + [s.name for s in file_proto.service]
            ),
        )
        self.files[file_desc.name] = file_desc

        prefix = file_proto.package
        for enum_proto in file_proto.enum_type:
            self._add_enum(enum_proto, file_desc, prefix, None)
        for message_proto in file_proto.message_type:
            self._add_message(message_proto, file_desc, prefix, None)

        logger.debug("Indexed %s (%d types total)", file_desc.name, len(self.types))
        return file_desc

    def _add_message(self, message_proto, file_desc, prefix, containing):
        full_name = f"{prefix}.{message_proto.name}" if prefix else message_proto.name
        type_desc = TypeDescriptor(
            name=message_proto.name,
            full_name=full_name,
            kind=TypeKind.MESSAGE,
            file=file_desc,
            containing_type=containing,
        )
        self.types[full_name] = type_desc

        for enum_proto in message_proto.enum_type:
            self._add_enum(enum_proto, file_desc, full_name, type_desc)
        for nested_proto in message_proto.nested_type:
            self._add_message(nested_proto, file_desc, full_name, type_desc)

    def _add_enum(self, enum_proto, file_desc, prefix, containing):
        full_name = f"{prefix}.{enum_proto.name}" if prefix else enum_proto.name
        self.types[full_name] = TypeDescriptor(
            name=enum_proto.name,
            full_name=full_name,
            kind=TypeKind.ENUM,
            file=file_desc,
            containing_type=containing,
            enum_values=tuple((v.name, v.number) for v in enum_proto.value),
        )

    def resolve(self, type_name: str) -> TypeDescriptor:
        """
        Look up a type by name.

        protoc always emits fully-qualified names with a leading dot.
        """
        key = type_name[1:] if type_name.startswith(".") else type_name
        try:
            return self.types[key]
        except KeyError:
            raise DescriptorError(f"Unknown type referenced: {type_name}")

    def convert_field(
        self,
        field_proto: descriptor_pb2.FieldDescriptorProto,
        file_desc: FileDescriptor,
        scope: Optional[TypeDescriptor] = None,
    ) -> FieldDescriptor:
        """Convert one extension field of an indexed file."""
        if not field_proto.HasField("extendee"):
            raise DescriptorError(f"Field {field_proto.name} is not an extension")

        try:
            field_type = FieldType(field_proto.type)
        except ValueError:
            raise DescriptorError(
                f"Unsupported type {field_proto.type} for field {field_proto.name}"
            )

        message_type = None
        enum_type = None
        if field_type.is_message:
            message_type = self.resolve(field_proto.type_name)
        elif field_type == FieldType.ENUM:
            enum_type = self.resolve(field_proto.type_name)

        options_data = b""
        if field_proto.HasField("options"):
            options_data = field_proto.options.SerializeToString()

        return FieldDescriptor(
            name=field_proto.name,
            number=field_proto.number,
            type=field_type,
            cardinality=_LABEL_MAPPING[field_proto.label],
            containing_type=self.resolve(field_proto.extendee),
            file=file_desc,
            extension_scope=scope,
            message_type=message_type,
            enum_type=enum_type,
            default_value=(
                field_proto.default_value
                if field_proto.HasField("default_value")
                else None
            ),
            packed=field_proto.options.packed,
            options_data=options_data,
        )


def build_descriptor_index(
    file_protos: Iterable[descriptor_pb2.FileDescriptorProto],
) -> DescriptorIndex:
    """
    Index a set of files, e.g. CodeGeneratorRequest.proto_file.

    Args:
        file_protos: Files in any order; all referenced types must be present

    Returns:
        DescriptorIndex covering every file
    """
    index = DescriptorIndex()
    for file_proto in file_protos:
        index.add_file(file_proto)
    return index


def extract_all_extensions(
    file_proto: descriptor_pb2.FileDescriptorProto, index: DescriptorIndex
) -> List[FieldDescriptor]:
    """
    Extract all extensions declared in a file, top-level first.

    Returns:
        List of FieldDescriptor in declaration order
    """
    if file_proto.name not in index.files:
        index.add_file(file_proto)
    file_desc = index.files[file_proto.name]

    extensions = [index.convert_field(f, file_desc) for f in file_proto.extension]

    def collect_nested(message_proto, prefix: str):
        full_name = f"{prefix}.{message_proto.name}" if prefix else message_proto.name
        scope = index.resolve(full_name)
        for field_proto in message_proto.extension:
            extensions.append(index.convert_field(field_proto, file_desc, scope))
        for nested_proto in message_proto.nested_type:
            collect_nested(nested_proto, full_name)

    for message_proto in file_proto.message_type:
        collect_nested(message_proto, file_proto.package)

    return extensions

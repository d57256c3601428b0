from collections.abc import Callable

import pytest

from proto_codegen.core.descriptor import (
    Cardinality,
    FieldDescriptor,
    FieldType,
    FileDescriptor,
    TypeDescriptor,
    TypeKind,
)
from proto_codegen.core.printer import Printer
from proto_codegen.languages.objc import ExtensionGenerator


@pytest.fixture
def foo_file() -> FileDescriptor:
    return FileDescriptor(
        name="com/foo/foo.proto",
        package="foo",
        java_package="com.foo",
        java_outer_classname="FooProto",
        top_level_names=("Foo", "Baz", "Color"),
    )


@pytest.fixture
def other_file() -> FileDescriptor:
    return FileDescriptor(
        name="com/other/other_types.proto",
        package="other",
        java_package="com.other",
        java_multiple_files=True,
        top_level_names=("Thing",),
    )


@pytest.fixture
def foo_message(foo_file: FileDescriptor) -> TypeDescriptor:
    return TypeDescriptor("Foo", "foo.Foo", TypeKind.MESSAGE, foo_file)


@pytest.fixture
def baz_message(foo_file: FileDescriptor) -> TypeDescriptor:
    return TypeDescriptor("Baz", "foo.Baz", TypeKind.MESSAGE, foo_file)


@pytest.fixture
def color_enum(foo_file: FileDescriptor) -> TypeDescriptor:
    return TypeDescriptor(
        "Color",
        "foo.Color",
        TypeKind.ENUM,
        foo_file,
        enum_values=(("RED", 0), ("GREEN", 1), ("BLUE", 7)),
    )


@pytest.fixture
def thing_message(other_file: FileDescriptor) -> TypeDescriptor:
    return TypeDescriptor("Thing", "other.Thing", TypeKind.MESSAGE, other_file)


@pytest.fixture
def make_extension(
    foo_file: FileDescriptor, foo_message: TypeDescriptor
) -> Callable[..., FieldDescriptor]:
    def _make_extension(**overrides: object) -> FieldDescriptor:
        fields: dict[str, object] = {
            "name": "bar",
            "number": 5,
            "type": FieldType.INT32,
            "cardinality": Cardinality.OPTIONAL,
            "containing_type": foo_message,
            "file": foo_file,
        }
        fields.update(overrides)
        return FieldDescriptor(**fields)

    return _make_extension


@pytest.fixture
def render() -> Callable[[ExtensionGenerator, str], str]:
    def _render(generator: ExtensionGenerator, operation: str) -> str:
        printer = Printer()
        getattr(generator, operation)(printer)
        return printer.getvalue()

    return _render


@pytest.fixture
def printer() -> Printer:
    return Printer()

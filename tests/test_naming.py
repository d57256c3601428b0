import pytest

from proto_codegen.core.descriptor import FileDescriptor, TypeDescriptor, TypeKind
from proto_codegen.core.naming import NameSanitizer, NamingCase, underscores_to_camel_case
from proto_codegen.languages.objc.naming import (
    containing_class_name,
    create_objc_sanitizer,
    extension_global_name,
    objc_class_name,
    objc_package_prefix,
    outer_classname,
)


@pytest.mark.parametrize(
    ("name", "cap_first", "expected"),
    [
        ("foo_bar", False, "fooBar"),
        ("foo_bar", True, "FooBar"),
        ("foo2bar", False, "foo2Bar"),
        ("FooBar", False, "fooBar"),
        ("foo__bar_", False, "fooBar"),
        ("foo-bar.baz", True, "FooBarBaz"),
        ("x", False, "x"),
    ],
)
def test_underscores_to_camel_case(name: str, cap_first: bool, expected: str) -> None:
    assert underscores_to_camel_case(name, cap_first) == expected


def test_sanitizer_is_stateless() -> None:
    sanitizer = NameSanitizer({"for"})

    first = sanitizer.sanitize_name("for", NamingCase.CAMEL_CASE)
    second = sanitizer.sanitize_name("for", NamingCase.CAMEL_CASE)

    assert first == second == "for_"


@pytest.mark.parametrize(
    ("name", "case", "expected"),
    [
        ("id", NamingCase.CAMEL_CASE, "id_"),
        ("description", NamingCase.CAMEL_CASE, "description_"),
        ("my_field", NamingCase.CAMEL_CASE, "myField"),
        ("my_field", NamingCase.PASCAL_CASE, "MyField"),
        ("MyField", NamingCase.SNAKE_CASE, "my_field"),
        ("2nd", NamingCase.CAMEL_CASE, "_2Nd"),
    ],
)
def test_objc_sanitizer(name: str, case: NamingCase, expected: str) -> None:
    assert create_objc_sanitizer().sanitize_name(name, case) == expected


class TestOuterClassname:
    def test_explicit_name_wins(self) -> None:
        file = FileDescriptor("a/b.proto", java_outer_classname="Custom")
        assert outer_classname(file) == "Custom"

    def test_derived_from_file_name(self) -> None:
        assert outer_classname(FileDescriptor("a/foo_bar.proto")) == "FooBar"

    def test_conflict_with_top_level_type(self) -> None:
        file = FileDescriptor("a/foo_bar.proto", top_level_names=("FooBar",))
        assert outer_classname(file) == "FooBarOuterClass"


def test_objc_package_prefix() -> None:
    assert objc_package_prefix("com.google.protobuf") == "ComGoogleProtobuf"
    assert objc_package_prefix("") == ""


class TestClassNames:
    def test_type_in_outer_class(self, foo_message) -> None:
        assert objc_class_name(foo_message) == "ComFooFooProto_Foo"

    def test_multiple_files(self, thing_message) -> None:
        assert objc_class_name(thing_message) == "ComOtherThing"

    def test_nested_type(self, other_file, thing_message) -> None:
        inner = TypeDescriptor(
            "Inner", "other.Thing.Inner", TypeKind.ENUM, other_file, thing_message
        )
        assert objc_class_name(inner) == "ComOtherThing_Inner"

    def test_proto_package_used_without_java_package(self) -> None:
        file = FileDescriptor("x.proto", package="my.pkg")
        message = TypeDescriptor("M", "my.pkg.M", TypeKind.MESSAGE, file)
        assert objc_class_name(message) == "MyPkgX_M"


class TestExtensionNames:
    def test_top_level(self, make_extension) -> None:
        descriptor = make_extension()
        assert containing_class_name(descriptor) == "ComFooFooProto"
        assert extension_global_name(descriptor) == "ComFooFooProto_bar"

    def test_top_level_with_multiple_files_uses_outer_class(
        self, make_extension, other_file, thing_message
    ) -> None:
        descriptor = make_extension(file=other_file, containing_type=thing_message)
        assert extension_global_name(descriptor) == "ComOtherOtherTypes_bar"

    def test_reserved_name(self, make_extension) -> None:
        assert extension_global_name(make_extension(name="id")) == "ComFooFooProto_id_"

    def test_naming_is_deterministic(self, make_extension) -> None:
        descriptor = make_extension(name="some_ext")
        assert extension_global_name(descriptor) == extension_global_name(descriptor)

from pathlib import Path

import pytest

from proto_codegen.core.config import ConfigError, GeneratorConfig
from proto_codegen.core.descriptor import FieldType, FileDescriptor, TypeDescriptor, TypeKind
from proto_codegen.languages.objc import ExtensionGenerator
from proto_codegen.languages.objc.headers import (
    DEFAULT_HEADER_MAPPING_FILE,
    HeaderMap,
    OutputStyle,
    is_platform_package,
    load_mapping_file,
)


class TestHeaderMap:
    def test_package_style(self, foo_message, thing_message) -> None:
        header_map = HeaderMap()
        assert header_map.header_for_type(foo_message) == "com/foo/FooProto.h"
        assert header_map.header_for_type(thing_message) == "com/other/Thing.h"

    @pytest.mark.parametrize("style", [OutputStyle.SOURCE, OutputStyle.NONE])
    def test_non_package_styles_have_no_directory(self, style, foo_message, thing_message) -> None:
        header_map = HeaderMap(style)
        assert header_map.header_for_type(foo_message) == "FooProto.h"
        assert header_map.header_for_type(thing_message) == "Thing.h"

    @pytest.mark.parametrize("style", [OutputStyle.SOURCE, OutputStyle.NONE])
    def test_platform_packages_keep_directories(self, style) -> None:
        any_file = FileDescriptor(
            "google/protobuf/any.proto",
            package="google.protobuf",
            java_package="com.google.protobuf",
            java_multiple_files=True,
            top_level_names=("Any",),
        )
        any_message = TypeDescriptor("Any", "google.protobuf.Any", TypeKind.MESSAGE, any_file)

        assert HeaderMap(style).header_for_type(any_message) == "com/google/protobuf/Any.h"

    def test_platform_package_mapping_still_wins(self) -> None:
        file = FileDescriptor("j.proto", java_package="java.util", java_multiple_files=True)
        message = TypeDescriptor("List", "List", TypeKind.MESSAGE, file)
        header_map = HeaderMap(OutputStyle.NONE, {"java.util.List": "List.h"})
        assert header_map.header_for_type(message) == "List.h"

    @pytest.mark.parametrize(
        ("package", "expected"),
        [
            ("com.google.protobuf", True),
            ("com.google.protobuf.compiler", True),
            ("java", True),
            ("javax.annotation", True),
            ("com.google", False),
            ("com.googleapis", False),
            ("org.xml", False),
            ("", False),
        ],
    )
    def test_is_platform_package(self, package: str, expected: bool) -> None:
        assert is_platform_package(package) is expected

    def test_unnamed_package(self) -> None:
        file = FileDescriptor("root.proto", java_multiple_files=True, top_level_names=("Top",))
        message = TypeDescriptor("Top", "Top", TypeKind.MESSAGE, file)
        assert HeaderMap().header_for_type(message) == "Top.h"

    def test_nested_type_uses_top_level_header(self, other_file, thing_message) -> None:
        inner = TypeDescriptor(
            "Inner", "other.Thing.Inner", TypeKind.MESSAGE, other_file, thing_message
        )
        assert HeaderMap().header_for_type(inner) == "com/other/Thing.h"

    def test_mapping_overrides_default(self, thing_message) -> None:
        header_map = HeaderMap(mappings={"com.other.Thing": "vendor/Thing.h"})
        assert header_map.header_for_type(thing_message) == "vendor/Thing.h"
        assert header_map.get_mapped("com.other.Thing") == "vendor/Thing.h"

    def test_scope_entry(self, make_extension, baz_message) -> None:
        header_map = HeaderMap()
        assert header_map.scope_entry(make_extension()) == (
            "com.foo.FooProto", "com/foo/FooProto.h",
        )
        assert header_map.scope_entry(make_extension(extension_scope=baz_message)) == (
            "com.foo.FooProto", "com/foo/FooProto.h",
        )

    def test_from_config_merges_files_and_inline_mappings(self, tmp_path: Path) -> None:
        mapping_file = tmp_path / "mappings.j2objc"
        mapping_file.write_text(
            "com.a.A=from_file/A.h\ncom.b.B=from_file/B.h\n", encoding="utf-8"
        )
        config = GeneratorConfig(
            output_style="none",
            mapping_files=[str(mapping_file)],
            header_mappings={"com.b.B": "inline/B.h"},
        )

        header_map = HeaderMap.from_config(config)

        assert header_map.output_style == OutputStyle.NONE
        assert header_map.get_mapped("com.a.A") == "from_file/A.h"
        assert header_map.get_mapped("com.b.B") == "inline/B.h"

    def test_from_config_reads_default_mapping_file(self, tmp_path: Path, monkeypatch) -> None:
        (tmp_path / DEFAULT_HEADER_MAPPING_FILE).write_text(
            "com.a.A=default/A.h\n", encoding="utf-8"
        )
        monkeypatch.chdir(tmp_path)

        assert HeaderMap.from_config(GeneratorConfig()).get_mapped("com.a.A") == "default/A.h"
        assert HeaderMap.from_config(GeneratorConfig(mapping_files=[])).get_mapped("com.a.A") is None

    def test_from_config_without_default_mapping_file(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert HeaderMap.from_config(GeneratorConfig()).get_mapped("com.a.A") is None

    def test_from_config_rejects_unknown_style(self) -> None:
        with pytest.raises(ConfigError):
            HeaderMap.from_config(GeneratorConfig(output_style="flat"))


class TestMappingFile:
    def test_write_then_load(self, tmp_path: Path) -> None:
        header_map = HeaderMap(mappings={"com.z.Z": "z/Z.h", "com.a.A": "a/A.h"})
        path = tmp_path / "out" / "mappings.j2objc"

        header_map.write_mappings(path)

        assert path.read_text(encoding="utf-8") == "com.a.A=a/A.h\ncom.z.Z=z/Z.h\n"
        assert load_mapping_file(path) == {"com.a.A": "a/A.h", "com.z.Z": "z/Z.h"}

    def test_comments_and_separators(self, tmp_path: Path) -> None:
        path = tmp_path / "map.properties"
        path.write_text(
            "# comment\n! also a comment\n\n com.x.X = x/X.h \ncom.y.Y:y/Y.h\n",
            encoding="utf-8",
        )
        assert load_mapping_file(path) == {"com.x.X": "x/X.h", "com.y.Y": "y/Y.h"}

    def test_malformed_line(self, tmp_path: Path) -> None:
        path = tmp_path / "map.properties"
        path.write_text("com.x.X\n", encoding="utf-8")
        with pytest.raises(ConfigError, match=":1: malformed"):
            load_mapping_file(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            load_mapping_file(tmp_path / "absent")


class TestCollectSourceImports:
    def test_scalar_adds_nothing(self, make_extension) -> None:
        imports: set[str] = set()
        ExtensionGenerator(make_extension()).collect_source_imports(imports)
        assert imports == set()

    def test_message_from_other_file(self, make_extension, thing_message) -> None:
        generator = ExtensionGenerator(
            make_extension(type=FieldType.MESSAGE, message_type=thing_message)
        )
        imports: set[str] = set()
        generator.collect_source_imports(imports)
        assert imports == {"com/other/Thing.h"}

    def test_is_idempotent(self, make_extension, thing_message) -> None:
        generator = ExtensionGenerator(
            make_extension(type=FieldType.MESSAGE, message_type=thing_message)
        )
        once: set[str] = set()
        generator.collect_source_imports(once)
        twice: set[str] = set()
        generator.collect_source_imports(twice)
        generator.collect_source_imports(twice)
        assert once == twice

    def test_keeps_existing_entries(self, make_extension, thing_message) -> None:
        generator = ExtensionGenerator(
            make_extension(type=FieldType.MESSAGE, message_type=thing_message)
        )
        imports = {"existing.h", "com/other/Thing.h"}
        generator.collect_source_imports(imports)
        assert imports == {"existing.h", "com/other/Thing.h"}

    def test_enum_in_same_scope_is_not_imported(self, make_extension, color_enum) -> None:
        generator = ExtensionGenerator(make_extension(type=FieldType.ENUM, enum_type=color_enum))
        imports = {"already.h"}
        generator.collect_source_imports(imports)
        assert imports == {"already.h"}

    def test_nested_scope_self_import(self, other_file, thing_message, make_extension) -> None:
        descriptor = make_extension(
            file=other_file,
            containing_type=thing_message,
            extension_scope=thing_message,
            type=FieldType.MESSAGE,
            message_type=thing_message,
        )
        imports: set[str] = set()
        ExtensionGenerator(descriptor).collect_source_imports(imports)
        assert imports == set()

    def test_multiple_files_imports_sibling_type(
        self, other_file, thing_message, make_extension
    ) -> None:
        sibling = TypeDescriptor("Other", "other.Other", TypeKind.ENUM, other_file)
        descriptor = make_extension(
            file=other_file,
            extension_scope=thing_message,
            type=FieldType.ENUM,
            enum_type=sibling,
        )
        imports: set[str] = set()
        ExtensionGenerator(descriptor).collect_source_imports(imports)
        assert imports == {"com/other/Other.h"}

    def test_uses_configured_mappings(self, make_extension, thing_message) -> None:
        config = GeneratorConfig(header_mappings={"com.other.Thing": "Mapped.h"})
        generator = ExtensionGenerator(
            make_extension(type=FieldType.MESSAGE, message_type=thing_message), config
        )
        imports: set[str] = set()
        generator.collect_source_imports(imports)
        assert imports == {"Mapped.h"}

"""
Objective-C naming for protobuf-generated Java classes.

Class names follow j2objc: the camel-cased Java package is prepended to
the Java class name, and nested classes are joined with underscores.
"""

import posixpath
from typing import List, Optional

from ...core.descriptor import FieldDescriptor, FileDescriptor, TypeDescriptor
from ...core.naming import NameSanitizer, NamingCase, underscores_to_camel_case


# C and Objective-C keywords
OBJC_RESERVED_WORDS = {
    "asm", "auto", "bool", "break", "case", "char", "const", "continue",
    "default", "do", "double", "else", "enum", "extern", "float", "for",
    "goto", "if", "inline", "int", "long", "register", "restrict", "return",
    "short", "signed", "sizeof", "static", "struct", "switch", "typedef",
    "union", "unsigned", "void", "volatile", "while",
    "id", "in", "inout", "nil", "oneway", "out", "self", "super",
    "BOOL", "Class", "IMP", "NO", "NULL", "Nil", "SEL", "YES",
}

# Names clashing with NSObject members or common runtime macros
OBJC_BUILTIN_NAMES = {
    "alloc", "autorelease", "class", "copy", "dealloc", "description",
    "hash", "init", "isEqual", "mutableCopy", "release", "retain",
    "retainCount", "zone",
}


def create_objc_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for Objective-C."""
    return NameSanitizer(OBJC_RESERVED_WORDS, OBJC_BUILTIN_NAMES)


def java_package(file: FileDescriptor) -> str:
    """The Java package of a file's generated classes."""
    if file.java_package is not None:
        return file.java_package
    return file.package


def outer_classname(file: FileDescriptor) -> str:
    """
    The Java outer class name of a file.

    Derived from the file's base name unless set explicitly; a clash with a
    top-level type gets the "OuterClass" suffix.
    """
    if file.java_outer_classname:
        return file.java_outer_classname

    basename = posixpath.basename(file.name)
    if basename.endswith(".proto"):
        basename = basename[: -len(".proto")]

    name = underscores_to_camel_case(basename, cap_first=True)
    if name in file.top_level_names:
        name += "OuterClass"
    return name


def objc_package_prefix(package: str) -> str:
    """Camel-case a Java package, e.g. "com.foo.bar" -> "ComFooBar"."""
    return "".join(part[:1].upper() + part[1:] for part in package.split(".") if part)


def java_class_chain(type_desc: TypeDescriptor) -> List[str]:
    """Java class names from the top-level class down to the type itself."""
    chain = []
    current: Optional[TypeDescriptor] = type_desc
    while current is not None:
        chain.insert(0, current.name)
        current = current.containing_type

    if not type_desc.file.java_multiple_files:
        chain.insert(0, outer_classname(type_desc.file))
    return chain


def qualified_java_name(chain: List[str], package: str) -> str:
    """Dotted Java name of a top-level class."""
    return f"{package}.{chain[0]}" if package else chain[0]


def objc_class_name(type_desc: TypeDescriptor) -> str:
    """j2objc class name of a message or enum, e.g. "ComFooFooProto_Bar"."""
    prefix = objc_package_prefix(java_package(type_desc.file))
    return prefix + "_".join(java_class_chain(type_desc))


def objc_outer_class_name(file: FileDescriptor) -> str:
    """j2objc class name of a file's outer class."""
    return objc_package_prefix(java_package(file)) + outer_classname(file)


def containing_class_name(descriptor: FieldDescriptor) -> str:
    """
    Class owning the extension's global.

    Extensions nested in a message belong to that message's class; top-level
    extensions belong to the file's outer class, even with multiple files.
    """
    if descriptor.extension_scope is not None:
        return objc_class_name(descriptor.extension_scope)
    return objc_outer_class_name(descriptor.file)


def extension_field_name(descriptor: FieldDescriptor) -> str:
    """The camel-cased field part of the extension's global name."""
    return create_objc_sanitizer().sanitize_name(descriptor.name, NamingCase.CAMEL_CASE)


def extension_java_name(descriptor: FieldDescriptor) -> str:
    """Capitalized camel name, as used by the Java accessors."""
    return underscores_to_camel_case(descriptor.name, cap_first=True)


def extension_global_name(descriptor: FieldDescriptor) -> str:
    """Name of the global holding the runtime extension object."""
    return f"{containing_class_name(descriptor)}_{extension_field_name(descriptor)}"

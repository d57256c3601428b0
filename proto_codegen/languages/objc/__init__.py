"""
Objective-C extension generator module.

Lowers protobuf extension fields for j2objc-translated protocol buffers.
"""

from .extension import ExtensionGenerator
from .headers import HeaderMap, OutputStyle, load_mapping_file
from .naming import (
    containing_class_name,
    create_objc_sanitizer,
    extension_global_name,
    objc_class_name,
    outer_classname,
)
from .types import DefaultValue, ObjcType, ObjcTypeMapper

__all__ = [
    # Generator
    "ExtensionGenerator",
    # Headers
    "HeaderMap",
    "OutputStyle",
    "load_mapping_file",
    # Naming
    "containing_class_name",
    "create_objc_sanitizer",
    "extension_global_name",
    "objc_class_name",
    "outer_classname",
    # Types
    "DefaultValue",
    "ObjcType",
    "ObjcTypeMapper",
]

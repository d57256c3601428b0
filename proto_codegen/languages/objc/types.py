"""
Objective-C type system for extension metadata.

Maps each protobuf field type to the boxed value class exposed by the
extension, the default-value slot of the runtime field record, and the
literal syntax its default is written in.
"""

import math
import re
from dataclasses import dataclass
from typing import Dict, Optional

from google.protobuf import text_encoding

from ...core.descriptor import FieldDescriptor, FieldType
from ...core.generator import ContractViolation
from .naming import objc_class_name

INT32_MIN, INT32_MAX = -(2 ** 31), 2 ** 31 - 1
UINT32_MAX = 2 ** 32 - 1
INT64_MIN, INT64_MAX = -(2 ** 63), 2 ** 63 - 1
UINT64_MAX = 2 ** 64 - 1
# Smallest magnitude that rounds to infinity as a single-precision float
FLOAT32_OVERFLOW = (2 - 2 ** -24) * 2 ** 127

# Decimal, hex or leading-zero octal, as in .proto source
INTEGER_LITERAL = re.compile(r"(-?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")


@dataclass(frozen=True)
class ObjcType:
    """How one protobuf field type appears in generated Objective-C."""

    field_type: FieldType
    value_class: str  # Boxed class of a single value, e.g. "JavaLangInteger"
    default_slot: str  # Member of the defaultValue union, e.g. "Int"
    zero_literal: str  # Default when none is declared

    @property
    def type_token(self) -> str:
        return self.field_type.name

    @property
    def has_length(self) -> bool:
        """Whether the default is a byte sequence with an explicit length."""
        return self.default_slot == "CStr"


@dataclass(frozen=True)
class DefaultValue:
    """A formatted default for the field record."""

    literal: str
    length: Optional[int] = None


def _objc(field_type: FieldType, value_class: str, slot: str, zero: str) -> ObjcType:
    return ObjcType(field_type, value_class, slot, zero)


SCALAR_TYPES: Dict[FieldType, ObjcType] = {
    FieldType.INT32: _objc(FieldType.INT32, "JavaLangInteger", "Int", "0"),
    FieldType.SINT32: _objc(FieldType.SINT32, "JavaLangInteger", "Int", "0"),
    FieldType.SFIXED32: _objc(FieldType.SFIXED32, "JavaLangInteger", "Int", "0"),
    FieldType.UINT32: _objc(FieldType.UINT32, "JavaLangInteger", "Int", "0"),
    FieldType.FIXED32: _objc(FieldType.FIXED32, "JavaLangInteger", "Int", "0"),
    FieldType.INT64: _objc(FieldType.INT64, "JavaLangLong", "Long", "0LL"),
    FieldType.SINT64: _objc(FieldType.SINT64, "JavaLangLong", "Long", "0LL"),
    FieldType.SFIXED64: _objc(FieldType.SFIXED64, "JavaLangLong", "Long", "0LL"),
    FieldType.UINT64: _objc(FieldType.UINT64, "JavaLangLong", "Long", "0LL"),
    FieldType.FIXED64: _objc(FieldType.FIXED64, "JavaLangLong", "Long", "0LL"),
    FieldType.FLOAT: _objc(FieldType.FLOAT, "JavaLangFloat", "Float", "0.0f"),
    FieldType.DOUBLE: _objc(FieldType.DOUBLE, "JavaLangDouble", "Double", "0.0"),
    FieldType.BOOL: _objc(FieldType.BOOL, "JavaLangBoolean", "Bool", "false"),
    FieldType.STRING: _objc(FieldType.STRING, "NSString", "CStr", '""'),
    FieldType.BYTES: _objc(FieldType.BYTES, "ComGoogleProtobufByteString", "CStr", '""'),
}

# (minimum, maximum) accepted for integer defaults
INTEGER_RANGES = {
    FieldType.INT32: (INT32_MIN, INT32_MAX),
    FieldType.SINT32: (INT32_MIN, INT32_MAX),
    FieldType.SFIXED32: (INT32_MIN, INT32_MAX),
    FieldType.UINT32: (0, UINT32_MAX),
    FieldType.FIXED32: (0, UINT32_MAX),
    FieldType.INT64: (INT64_MIN, INT64_MAX),
    FieldType.SINT64: (INT64_MIN, INT64_MAX),
    FieldType.SFIXED64: (INT64_MIN, INT64_MAX),
    FieldType.UINT64: (0, UINT64_MAX),
    FieldType.FIXED64: (0, UINT64_MAX),
}

# Types that may use packed encoding
PACKABLE_TYPES = frozenset(INTEGER_RANGES) | {
    FieldType.FLOAT,
    FieldType.DOUBLE,
    FieldType.BOOL,
    FieldType.ENUM,
}


def int32_literal(value: int) -> str:
    # -2147483648 would be parsed as negation of an out-of-range constant
    if value == INT32_MIN:
        return "(-2147483647 - 1)"
    return str(value)


def uint32_literal(value: int) -> str:
    # Java has no unsigned types; large values keep their bit pattern
    if value > INT32_MAX:
        return f"(jint){value}U"
    return str(value)


def int64_literal(value: int) -> str:
    if value == INT64_MIN:
        return "(-9223372036854775807LL - 1)"
    return f"{value}LL"


def uint64_literal(value: int) -> str:
    if value > INT64_MAX:
        return f"(jlong){value}ULL"
    return f"{value}LL"


def floating_literal(value: float, single_precision: bool) -> str:
    """Shortest literal that reads back as exactly the same value."""
    if math.isnan(value):
        return "NAN"
    if math.isinf(value):
        return "INFINITY" if value > 0 else "-INFINITY"
    text = repr(value)
    return f"{text}f" if single_precision else text


def c_string_literal(data: bytes) -> str:
    return '"' + text_encoding.CEscape(data, False) + '"'


class ObjcTypeMapper:
    """Maps extension descriptors to Objective-C types and literals."""

    _INTEGER_FORMATTERS = {
        FieldType.INT32: int32_literal,
        FieldType.SINT32: int32_literal,
        FieldType.SFIXED32: int32_literal,
        FieldType.UINT32: uint32_literal,
        FieldType.FIXED32: uint32_literal,
        FieldType.INT64: int64_literal,
        FieldType.SINT64: int64_literal,
        FieldType.SFIXED64: int64_literal,
        FieldType.UINT64: uint64_literal,
        FieldType.FIXED64: uint64_literal,
    }

    def map_field(self, descriptor: FieldDescriptor) -> ObjcType:
        """Get the ObjcType of an extension's value."""
        field_type = descriptor.type
        if field_type in SCALAR_TYPES:
            return SCALAR_TYPES[field_type]

        value_type = descriptor.value_type
        if value_type is None:
            raise ContractViolation(
                descriptor, f"{field_type.name} field has no resolved value type"
            )

        if field_type == FieldType.ENUM:
            zero = int32_literal(value_type.enum_values[0][1]) if value_type.enum_values else "0"
            return ObjcType(field_type, objc_class_name(value_type), "Int", zero)

        return ObjcType(field_type, objc_class_name(value_type), "Id", "NULL")

    def default_value(self, descriptor: FieldDescriptor) -> DefaultValue:
        """
        Format the declared default of an extension, or the type's zero value.

        Raises:
            ContractViolation: If the default is malformed or not allowed
        """
        objc_type = self.map_field(descriptor)
        field_type = descriptor.type

        if not descriptor.has_default_value:
            return DefaultValue(objc_type.zero_literal, 0 if objc_type.has_length else None)

        text = descriptor.default_value

        if descriptor.is_repeated:
            raise ContractViolation(descriptor, "repeated fields cannot have defaults")

        if field_type in INTEGER_RANGES:
            return DefaultValue(self._integer_default(descriptor, text))

        if field_type in (FieldType.FLOAT, FieldType.DOUBLE):
            return DefaultValue(self._floating_default(descriptor, text))

        if field_type == FieldType.BOOL:
            if text not in ("true", "false"):
                raise ContractViolation(descriptor, f"invalid bool default {text!r}")
            return DefaultValue(text)

        if field_type == FieldType.STRING:
            data = text.encode("utf-8")
            return DefaultValue(c_string_literal(data), len(data))

        if field_type == FieldType.BYTES:
            # Bytes defaults are stored C-escaped in descriptors
            data = text_encoding.CUnescape(text)
            return DefaultValue(c_string_literal(data), len(data))

        if field_type == FieldType.ENUM:
            number = descriptor.enum_type.find_enum_value(text)
            if number is None:
                raise ContractViolation(
                    descriptor,
                    f"default {text!r} is not a value of {descriptor.enum_type.full_name}",
                )
            return DefaultValue(int32_literal(number))

        raise ContractViolation(descriptor, f"{field_type.name} fields cannot have defaults")

    def _integer_default(self, descriptor: FieldDescriptor, text: str) -> str:
        match = INTEGER_LITERAL.fullmatch(text)
        if match is None:
            raise ContractViolation(descriptor, f"invalid integer default {text!r}")

        sign, digits = match.groups()
        if digits[:2] in ("0x", "0X"):
            value = int(digits[2:], 16)
        elif len(digits) > 1 and digits[0] == "0":
            value = int(digits, 8)
        else:
            value = int(digits)
        if sign:
            value = -value

        low, high = INTEGER_RANGES[descriptor.type]
        if not low <= value <= high:
            raise ContractViolation(
                descriptor,
                f"default {value} out of range for {descriptor.type.name}",
            )
        return self._INTEGER_FORMATTERS[descriptor.type](value)

    def _floating_default(self, descriptor: FieldDescriptor, text: str) -> str:
        try:
            # float() also accepts digit separators and padding
            if "_" in text or text != text.strip():
                raise ValueError(text)
            value = float(text)
        except ValueError:
            raise ContractViolation(descriptor, f"invalid floating default {text!r}")

        single = descriptor.type == FieldType.FLOAT
        if single and math.isfinite(value) and abs(value) >= FLOAT32_OVERFLOW:
            raise ContractViolation(descriptor, f"default {text} out of range for FLOAT")
        return floating_literal(value, single)

"""
Naming utilities for safe code generation.

Handles case conversions following protobuf's Java naming rules and
reserved-word conflicts in target languages. All conversions are pure
functions of their input so that independently generated artifacts
agree on every identifier.
"""

import re
from typing import Optional, Set
from enum import Enum


class NamingCase(Enum):
    """Different naming case styles."""
    CAMEL_CASE = "camel"      # fooBar
    PASCAL_CASE = "pascal"    # FooBar
    SNAKE_CASE = "snake"      # foo_bar


def underscores_to_camel_case(name: str, cap_first: bool = False) -> str:
    """
    Convert a proto identifier to camel case the way protoc's Java backend does.

    Letters following an underscore, a digit or any other non-alphanumeric
    character are capitalized; those characters other than digits are dropped.
    A leading capital is lowered unless cap_first is set.

    Args:
        name: Proto identifier, e.g. "foo_bar2baz"
        cap_first: Whether the first letter should be capitalized

    Returns:
        Converted name, e.g. "fooBar2Baz"
    """
    result = []
    cap_next = cap_first
    for i, char in enumerate(name):
        if "a" <= char <= "z":
            result.append(char.upper() if cap_next else char)
            cap_next = False
        elif "A" <= char <= "Z":
            if i == 0 and not cap_next:
                result.append(char.lower())
            else:
                result.append(char)
            cap_next = False
        elif "0" <= char <= "9":
            result.append(char)
            cap_next = True
        else:
            cap_next = True
    return "".join(result)


class NameSanitizer:
    """Handles name sanitization and case conversion."""

    def __init__(self, reserved_words: Optional[Set[str]] = None,
                 builtin_types: Optional[Set[str]] = None):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of language reserved words
            builtin_types: Set of builtin names that might conflict
        """
        self.reserved_words = frozenset(reserved_words or ())
        self.builtin_types = frozenset(builtin_types or ())

    def sanitize_name(self, name: str, target_case: NamingCase = NamingCase.CAMEL_CASE,
                      suffix_on_conflict: str = "_") -> str:
        """
        Sanitize a name for safe use in the target language.

        Args:
            name: Original name to sanitize
            target_case: Desired case style
            suffix_on_conflict: Suffix to add for reserved-word conflicts

        Returns:
            Sanitized name safe for use
        """
        cleaned = self._clean_basic(name)
        converted = self._convert_case(cleaned, target_case)
        return self._resolve_conflicts(converted, suffix_on_conflict)

    def is_reserved(self, name: str) -> bool:
        return name in self.reserved_words or name in self.builtin_types

    def _clean_basic(self, name: str) -> str:
        """Basic name cleanup - remove invalid characters."""
        cleaned = re.sub(r'[^a-zA-Z0-9_]', '_', name)

        if not cleaned.strip('_'):
            return "field"
        return cleaned

    def _convert_case(self, name: str, target_case: NamingCase) -> str:
        """Convert name to target case style."""
        if target_case == NamingCase.CAMEL_CASE:
            converted = underscores_to_camel_case(name)
        elif target_case == NamingCase.PASCAL_CASE:
            converted = underscores_to_camel_case(name, cap_first=True)
        elif target_case == NamingCase.SNAKE_CASE:
            converted = self._to_snake_case(name)
        else:
            converted = name

        # Ensure doesn't start with number
        if converted and converted[0].isdigit():
            converted = f"_{converted}"
        return converted

    def _to_snake_case(self, name: str) -> str:
        """Convert to snake_case."""
        name = re.sub(r'([a-z0-9])([A-Z])', r'\1_\2', name)
        name = re.sub(r'_+', '_', name.lower())
        return name.strip('_')

    def _resolve_conflicts(self, name: str, suffix: str) -> str:
        """Resolve naming conflicts with reserved words and builtins."""
        if self.is_reserved(name):
            return f"{name}{suffix}"
        return name

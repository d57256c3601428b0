"""
Language-specific extension generators.
"""

from .objc import ExtensionGenerator

__all__ = ["ExtensionGenerator"]

"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering
with common utilities for emitting C-family source text.
"""

from typing import Dict, Any, Optional
from pathlib import Path

from google.protobuf import text_encoding
from jinja2 import (
    Environment,
    FileSystemLoader,
    DictLoader,
    StrictUndefined,
)


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files
        """
        self.template_dir = template_dir
        self._env = None
        self._setup_environment()

    def _setup_environment(self):
        """Setup Jinja2 environment with code generation utilities."""
        if self.template_dir and self.template_dir.exists():
            loader = FileSystemLoader(str(self.template_dir))
        else:
            # Use in-memory templates
            loader = DictLoader({})

        # Generated code must never be HTML-escaped, and a missing binding
        # is a generator bug rather than an empty string.
        self._env = Environment(
            loader=loader,
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

        # Add custom filters for code generation
        self._env.filters["c_string"] = self._c_string_filter

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template file
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template {template_name}: {str(e)}")

    def render_string(self, template_string: str, context: Dict[str, Any]) -> str:
        """
        Render a template string with the given context.

        Args:
            template_string: Template content as string
            context: Variables to pass to template

        Returns:
            Rendered content
        """
        try:
            template = self._env.from_string(template_string)
            return template.render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template string: {str(e)}")

    def add_template(self, name: str, content: str):
        """
        Add an in-memory template.

        Args:
            name: Template name
            content: Template content
        """
        if not isinstance(self._env.loader, DictLoader):
            # Convert to DictLoader to support in-memory templates
            self._env.loader = DictLoader({})

        self._env.loader.mapping[name] = content

    def template_exists(self, template_name: str) -> bool:
        """Check if a template is available to the loader."""
        return template_name in self._env.list_templates()

    # Template filters for code generation

    def _c_string_filter(self, value) -> str:
        """Escape text or bytes for use inside a C string literal."""
        if isinstance(value, str):
            value = value.encode("utf-8")
        return text_encoding.CEscape(value, False)


def create_template_engine(
    template_dir: Optional[Path] = None, templates: Optional[Dict[str, str]] = None
) -> TemplateEngine:
    """
    Create a template engine, optionally preloaded with in-memory templates.

    Args:
        template_dir: Directory containing template files
        templates: Mapping of template name to template source

    Returns:
        Configured TemplateEngine
    """
    engine = TemplateEngine(template_dir)
    for name, content in (templates or {}).items():
        engine.add_template(name, content)
    return engine

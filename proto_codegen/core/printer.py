"""
Append-only output sink for emitted source text.
"""

from typing import List, Optional

from .templates import TemplateEngine, create_template_engine


class Printer:
    """
    Collects generated text.

    Each print call renders a Jinja2 template against the given bindings
    and appends the result. Written text is never inspected or rewritten.
    """

    def __init__(self, engine: Optional[TemplateEngine] = None):
        self._engine = engine or create_template_engine()
        self._chunks: List[str] = []

    def print(self, template: str, **bindings) -> None:
        """Render a template string and append it."""
        self._chunks.append(self._engine.render_string(template, bindings))

    def write(self, text: str) -> None:
        """Append text verbatim."""
        self._chunks.append(text)

    def getvalue(self) -> str:
        return "".join(self._chunks)

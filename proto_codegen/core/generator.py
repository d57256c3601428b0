"""
Base interface for extension lowering targets.

Defines the contract that every language backend implements to turn
one extension field descriptor into its declaration, definition,
metadata record, initializer and registration code.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional, Set
from pathlib import Path

from ..logging_config import get_logger
from .config import GeneratorConfig
from .descriptor import FieldDescriptor
from .printer import Printer
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class ContractViolation(GeneratorError):
    """
    The descriptor describes a combination the lowering rules do not cover.

    Upstream schema processing is expected to reject such descriptors, so
    this is never recovered from: generation of the field aborts.
    """

    def __init__(self, descriptor: FieldDescriptor, reason: str):
        self.descriptor = descriptor
        self.reason = reason
        super().__init__(f"Cannot lower extension {descriptor.full_name}: {reason}")


class ExtensionLowering(ABC):
    """Abstract base class for per-extension code generators."""

    def __init__(self, descriptor: FieldDescriptor,
                 config: Optional[GeneratorConfig] = None):
        """Initialize generator for one extension field."""
        self._descriptor = descriptor
        self.config = config or GeneratorConfig()
        self._template_engine = create_template_engine(
            self.get_template_directory(), self.get_templates()
        )

    @property
    def descriptor(self) -> FieldDescriptor:
        """The extension field being lowered."""
        return self._descriptor

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'objc')."""
        pass

    @property
    @abstractmethod
    def header_extension(self) -> str:
        """Return the file extension of declaration files (e.g., '.h')."""
        pass

    @property
    @abstractmethod
    def source_extension(self) -> str:
        """Return the file extension of definition files (e.g., '.m')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Return None to use in-memory templates only.
        """
        return None

    def get_templates(self) -> Dict[str, str]:
        """Return in-memory templates keyed by name."""
        return {}

    @property
    def template_engine(self) -> TemplateEngine:
        return self._template_engine

    def emit(self, printer: Printer, template_name: str, **bindings) -> None:
        """
        Render one of this generator's templates into any output sink.

        Args:
            printer: Caller-owned sink the rendered text is appended to
            template_name: Name of a template known to this generator
            **bindings: Template variables
        """
        printer.write(self.template_engine.render_template(template_name, bindings))

    @abstractmethod
    def collect_source_imports(self, imports: Set[str]) -> None:
        """Add the headers defining types referenced by the emitted source."""
        pass

    @abstractmethod
    def generate_members_header(self, printer: Printer) -> None:
        """Emit the public declaration of the extension."""
        pass

    @abstractmethod
    def generate_source_definition(self, printer: Printer) -> None:
        """Emit the definition matching the header declaration."""
        pass

    @abstractmethod
    def generate_field_data(self, printer: Printer) -> None:
        """Emit the runtime metadata record for the extension."""
        pass

    @abstractmethod
    def generate_source_initializer(self, printer: Printer) -> None:
        """Emit the statement building the runtime extension object."""
        pass

    @abstractmethod
    def generate_registration_code(self, printer: Printer) -> None:
        """Emit the statement registering the extension."""
        pass

    def declared_headers(self) -> Dict[str, str]:
        """Headers declaring the emitted code, keyed by qualified class name."""
        return {}

    def format_import(self, header: str) -> str:
        """Format one collected import as a source line."""
        return f'#include "{header}"'

    def format_code(self, code: str) -> str:
        """
        Apply basic formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        # Basic cleanup - remove trailing whitespace and excessive blank lines
        formatted_lines = []
        blank_count = 0

        for line in code.split("\n"):
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        code: str,
        header: str = "",
        imports: Optional[List[str]] = None,
        sections: Optional[Dict[str, str]] = None,
        declared_headers: Optional[Dict[str, str]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize generation result.

        Args:
            code: Generated source (definition) code
            header: Generated header (declaration) code
            imports: Sorted headers the source depends on
            sections: Raw output of each operation, keyed by operation
            declared_headers: Header of each class the code belongs to
            metadata: Additional metadata about generation
        """
        self.code = code
        self.header = header
        self.imports = imports or []
        self.sections = sections or {}
        self.declared_headers = declared_headers or {}
        self.metadata = metadata or {}
        self.success = True


# Source sections in the order they must appear in the assembled file
SOURCE_SECTION_ORDER = ("definition", "field_data", "initializer", "registration")


def generate_extension_code(generator: ExtensionLowering) -> GenerationResult:
    """
    Run every operation of one generator and assemble the results.

    Initialization is always placed before registration in the source.
    Contract violations are logged and re-raised.

    Args:
        generator: Extension generator instance

    Returns:
        GenerationResult with header, source and metadata
    """
    descriptor = generator.descriptor
    operations = {
        "header": generator.generate_members_header,
        "definition": generator.generate_source_definition,
        "field_data": generator.generate_field_data,
        "initializer": generator.generate_source_initializer,
        "registration": generator.generate_registration_code,
    }

    try:
        imports: Set[str] = set()
        generator.collect_source_imports(imports)

        sections = {}
        for name, operation in operations.items():
            printer = Printer()
            operation(printer)
            sections[name] = printer.getvalue()
    except ContractViolation as e:
        logger.error("%s", e)
        raise

    sorted_imports = sorted(imports)
    parts = []
    if sorted_imports:
        parts.append("\n".join(generator.format_import(h) for h in sorted_imports))
    parts.extend(sections[name] for name in SOURCE_SECTION_ORDER)

    metadata = {
        "language": generator.language_name,
        "header_extension": generator.header_extension,
        "source_extension": generator.source_extension,
        "extension": descriptor.full_name,
        "extendee": descriptor.containing_type.full_name,
        "number": descriptor.number,
        "repeated": descriptor.is_repeated,
    }

    logger.info(
        "Generated %s extension %s (field %d of %s)",
        generator.language_name,
        descriptor.full_name,
        descriptor.number,
        descriptor.containing_type.full_name,
    )

    return GenerationResult(
        code=generator.format_code("\n".join(parts)),
        header=generator.format_code(sections["header"]),
        imports=sorted_imports,
        sections=sections,
        declared_headers=generator.declared_headers(),
        metadata=metadata,
    )

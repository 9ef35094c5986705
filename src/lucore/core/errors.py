"""
Error types for LU DSL parsing and semantic validation.

Every fatal error carries a stable :class:`ErrorCode`. Callers are expected to
match on ``error.code`` rather than on the message text.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ErrorCode(str, Enum):
    """Stable error identifiers surfaced to callers."""

    INVALID_LINE = "InvalidLine"
    INVALID_URI = "InvalidUri"
    INVALID_INPUT = "InvalidInput"
    INVALID_INPUT_FILE = "InvalidInputFile"
    MISSING_LABELLED_VALUE = "MissingLabelledValue"
    INVALID_COMPOSITE_ENTITY = "InvalidCompositeEntity"
    SYNONYMS_NOT_A_LIST = "SynonymsNotAList"
    INVALID_REGEX_ENTITY = "InvalidRegexEntity"
    UNKNOWN_OPTIONS = "UnknownOptions"


class Severity(str, Enum):
    """Diagnostic severities produced by the front end."""

    ERROR = "ERROR"
    WARN = "WARN"


@dataclass
class ErrorContext:
    """
    Source location of a diagnostic.

    Attributes:
        line: Line number (1-indexed)
        column: Column number (0-indexed, as reported by the front end)
        text: The offending source line
        file: Optional source file path
    """

    line: int
    column: int = 0
    text: str | None = None
    file: Path | None = None

    def format(self) -> str:
        """
        Format the location as ``line 3:0 - line 3:14``.

        The end column is derived from the source text when it is known.
        """
        location = f"line {self.line}:{self.column}"
        if self.text is not None:
            location += f" - line {self.line}:{self.column + len(self.text)}"
        if self.file:
            location = f"{self.file}: {location}"
        return location


@dataclass
class Diagnostic:
    """A single front-end or semantic finding with its severity."""

    message: str
    severity: Severity = Severity.ERROR
    context: ErrorContext | None = None

    def __str__(self) -> str:
        if self.context:
            return f"[{self.severity.value}] {self.context.format()}: {self.message}"
        return f"[{self.severity.value}] {self.message}"


class LuError(Exception):
    """Base exception for all LU compilation errors."""

    default_code = ErrorCode.INVALID_INPUT

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        code: ErrorCode | None = None,
    ):
        self.message = message
        self.context = context
        self.code = code or self.default_code
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Render the message the way a diagnostic would print it."""
        return str(Diagnostic(self.message, Severity.ERROR, self.context))


class ParseError(LuError):
    """
    Raised when the front end reports syntax errors.

    All ERROR diagnostics of a file are aggregated into one ParseError before
    any semantic processing starts.
    """

    default_code = ErrorCode.INVALID_LINE

    def __init__(self, diagnostics: list[Diagnostic]):
        self.diagnostics = diagnostics
        message = "\n".join(str(d) for d in diagnostics)
        super().__init__(message)

    def _format_message(self) -> str:
        return self.message


class ReferenceResolutionError(LuError):
    """Raised when a linked URI cannot be reached."""

    default_code = ErrorCode.INVALID_URI


class ValidationError(LuError):
    """
    Raised when a declaration violates a semantic rule.

    Examples:
    - Composite entity redefined with different children
    - Regex entity with an empty pattern
    - List synonyms without a normalized value
    - Mixed labelled and unlabelled entities in one utterance
    """

    pass


class DuplicateEntityDefinition(ValidationError):
    """Raised when a name is declared with two different entity types."""

    pass


class RoleNameCollision(ValidationError):
    """Raised when a role collides with an entity name or another entity's role."""

    pass


def make_validation_error(
    message: str,
    code: ErrorCode = ErrorCode.INVALID_INPUT,
    context: ErrorContext | None = None,
) -> ValidationError:
    """
    Helper to create a ValidationError with optional context.

    Args:
        message: Error description
        code: Stable error code
        context: Optional source location

    Returns:
        ValidationError with the given code
    """
    return ValidationError(message, context, code)

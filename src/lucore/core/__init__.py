"""Core LU functionality: front end, IR, entity registry, semantic parse pass."""

from . import ir
from .content import LuisContent, ParsedContent
from .errors import (
    DuplicateEntityDefinition,
    ErrorCode,
    ErrorContext,
    LuError,
    ParseError,
    ReferenceResolutionError,
    RoleNameCollision,
    ValidationError,
)
from .lexer import tokenize
from .manifest import ParseOptions, load_options
from .parser import parse_file, parse_files, parse_resource, parse_text
from .registry import EntityRegistry

__all__ = [
    "ir",
    "LuError",
    "ParseError",
    "ReferenceResolutionError",
    "ValidationError",
    "DuplicateEntityDefinition",
    "RoleNameCollision",
    "ErrorCode",
    "ErrorContext",
    "EntityRegistry",
    "LuisContent",
    "ParsedContent",
    "ParseOptions",
    "load_options",
    "tokenize",
    "parse_resource",
    "parse_text",
    "parse_file",
    "parse_files",
]

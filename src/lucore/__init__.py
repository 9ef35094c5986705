"""
lucore - semantic compiler for the LU intent and QnA language.

Parses ``.lu`` / ``.qna`` documents into a normalized intent-recognition
model and a knowledge-base model.
"""

from ._version import get_version
from .core import ir
from .core.errors import LuError, ParseError, ReferenceResolutionError, ValidationError
from .core.parser import parse_file, parse_files, parse_text

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "LuError",
    "ParseError",
    "ReferenceResolutionError",
    "ValidationError",
    "parse_file",
    "parse_files",
    "parse_text",
]

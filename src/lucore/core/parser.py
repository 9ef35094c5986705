"""
Semantic parse pass for LU documents.

Sections are processed in a fixed order because later merge decisions depend
on registry state built by earlier ones:

1. imports
2. ``@`` entity definitions
3. intents, utterances and patterns
4. legacy ``$`` entity definitions
5. QnA pairs
6. model info directives
"""

import logging
from pathlib import Path

import httpx

from .content import ParsedContent
from .errors import ErrorCode, LuError, ParseError, Severity
from .handlers import DeclarationHandler
from .lexer import tokenize
from .manifest import ParseOptions
from .model_info import handle_model_infos
from .qna import handle_qnas
from .references import resolve_imports
from .resolver import UtteranceResolver
from .resource import LuResource

logger = logging.getLogger(__name__)


def check_diagnostics(resource: LuResource, options: ParseOptions) -> None:
    """
    Report front-end diagnostics.

    Warnings are logged in verbose mode. Errors abort the parse.

    Raises:
        ParseError: With every ERROR diagnostic, if there is at least one
    """
    errors = [d for d in resource.errors if d.severity is Severity.ERROR]
    if options.verbose:
        for diagnostic in resource.errors:
            if diagnostic.severity is Severity.WARN:
                logger.warning("%s", diagnostic)
    if errors:
        raise ParseError(errors)


def parse_resource(
    resource: LuResource,
    options: ParseOptions | None = None,
    client: httpx.Client | None = None,
) -> ParsedContent:
    """
    Run the semantic pass over sections produced by a front end.

    Args:
        resource: Sections of one document
        options: Locale and verbosity, defaults when omitted
        client: HTTP client for import URI checks

    Returns:
        ParsedContent owning a fresh registry

    Raises:
        ParseError: If the front end reported syntax errors
        ReferenceResolutionError: If an imported URI cannot be reached
        ValidationError: If a declaration violates a semantic rule
    """
    options = options or ParseOptions()
    check_diagnostics(resource, options)

    content = ParsedContent()
    resolve_imports(content, resource.imports, client, timeout=options.http_timeout)

    handler = DeclarationHandler(content, options)
    handler.handle_new_entities(resource.new_entities)

    UtteranceResolver(content, options).resolve_intents(resource.intents)

    handler.handle_legacy_entities(resource.entities)
    handle_qnas(content, resource.qnas)
    handle_model_infos(content, resource.model_infos, options)

    logger.debug(
        "Parsed %d intents, %d utterances, %d patterns",
        len(content.luis.intents),
        len(content.luis.utterances),
        len(content.luis.patterns),
    )
    return content


def parse_text(
    text: str,
    options: ParseOptions | None = None,
    file: Path | None = None,
    client: httpx.Client | None = None,
) -> ParsedContent:
    """Parse LU source text."""
    return parse_resource(tokenize(text, file), options, client)


def parse_file(
    path: Path,
    options: ParseOptions | None = None,
    client: httpx.Client | None = None,
) -> ParsedContent:
    """
    Parse one ``.lu`` or ``.qna`` file.

    Raises:
        LuError: With code ``InvalidInputFile`` if the file cannot be read
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LuError(f"Failed to read {path}: {e}", code=ErrorCode.INVALID_INPUT_FILE) from e
    return parse_text(text, options, path, client)


def parse_files(
    files: list[Path],
    options: ParseOptions | None = None,
    client: httpx.Client | None = None,
) -> list[ParsedContent]:
    """
    Parse several files, each into its own ParsedContent.

    Files do not share a registry; merging them is up to the caller.

    Args:
        files: LU file paths in the order to parse them
        options: Locale and verbosity for every file
        client: HTTP client shared by all import checks

    Returns:
        One ParsedContent per file, in the same order
    """
    return [parse_file(f, options, client) for f in files]

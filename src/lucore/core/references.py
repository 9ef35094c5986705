"""
Import and link reference resolution.

``[description](path)`` lines either point at a remote document or at another
local LU file:

- Remote URIs are checked with an HTTP HEAD request. HTML pages become
  knowledge-base URLs; any other content type becomes a knowledge-base file.
- Local paths are queued for the caller to parse separately.

Utterance lines that are themselves links (``- [text](other.lu#Intent)``)
queue the linked file as well, excluded from collation.
"""

import logging
import re
from urllib.parse import urlparse

import httpx

from . import ir
from .content import ParsedContent
from .errors import ReferenceResolutionError
from .resource import ImportSection

logger = logging.getLogger(__name__)

_LINK_REF_RE = re.compile(r"^\[[^\]]*\]\(([^)]*)\)$")


def is_remote(path: str) -> bool:
    """True if ``path`` has a host part, i.e. is a URL rather than a file path."""
    parsed = urlparse(path)
    return bool(parsed.scheme and parsed.netloc)


def is_utterance_link_ref(text: str) -> bool:
    return _LINK_REF_RE.match(text.strip()) is not None


def parse_link_uri(text: str) -> str:
    """
    Return the LU file part of a ``[text](file.lu#fragment)`` link.

    Raises:
        ValueError: If ``text`` is not a link reference
    """
    match = _LINK_REF_RE.match(text.strip())
    if match is None:
        raise ValueError(f"Not a link reference: {text!r}")
    path, _, _ = match.group(1).partition("#")
    return path.strip()


def check_uri(client: httpx.Client, section: ImportSection) -> httpx.Response:
    """
    Send a HEAD request for an imported URI.

    Raises:
        ReferenceResolutionError: On transport failure or a non-success status
    """
    message = (
        f'URI: "{section.path}" appears to be invalid. Please double check the URI '
        "or re-try this parse when you are connected to the internet."
    )
    try:
        response = client.head(section.path, follow_redirects=True)
    except httpx.HTTPError as e:
        raise ReferenceResolutionError(message, section.context) from e

    if not response.is_success:
        logger.debug("HEAD %s returned %s", section.path, response.status_code)
        raise ReferenceResolutionError(message, section.context)
    return response


def resolve_imports(
    content: ParsedContent,
    imports: list[ImportSection],
    client: httpx.Client | None = None,
    timeout: float = 10.0,
) -> None:
    """
    Resolve every import of a document into ``content``.

    Args:
        content: Parse state to record files and URLs in
        imports: Import sections in source order
        client: HTTP client to use; one is created when needed and not given
        timeout: Timeout for a created client
    """
    remote: list[ImportSection] = []
    for section in imports:
        if is_remote(section.path):
            remote.append(section)
        else:
            content.additional_files_to_parse.append(ir.FileToParse(file_path=section.path))

    if not remote:
        return
    if client is None:
        with httpx.Client(timeout=timeout) as owned:
            _resolve_remote(content, remote, owned)
        return
    _resolve_remote(content, remote, client)


def _resolve_remote(
    content: ParsedContent, imports: list[ImportSection], client: httpx.Client
) -> None:
    for section in imports:
        response = check_uri(client, section)
        content_type = response.headers.get("content-type", "")
        if "text/html" in content_type:
            content.qna.urls.append(section.path)
        else:
            content.qna.files.append(
                ir.QnaFile(file_uri=section.path, file_name=section.description)
            )

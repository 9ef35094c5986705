"""Shared pytest fixtures for lucore tests."""

from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from lucore.core.content import ParsedContent
from lucore.core.handlers import DeclarationHandler
from lucore.core.manifest import ParseOptions
from lucore.core.parser import parse_text


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def parse_lu() -> Callable[..., ParsedContent]:
    """Return a helper parsing LU text with keyword overrides for ParseOptions."""

    def _parse(text: str, **options: object) -> ParsedContent:
        return parse_text(text, ParseOptions(**options))  # type: ignore[arg-type]

    return _parse


@pytest.fixture
def content() -> ParsedContent:
    return ParsedContent()


@pytest.fixture
def handler(content: ParsedContent) -> DeclarationHandler:
    """Return a declaration handler over empty parse state with default options."""
    return DeclarationHandler(content, ParseOptions())


@pytest.fixture
def head_client() -> Callable[[dict[str, httpx.Response]], httpx.Client]:
    """
    Return a factory for HTTP clients answering HEAD requests from a URL table.

    Unknown URLs raise a transport error.
    """

    def _factory(responses: dict[str, httpx.Response]) -> httpx.Client:
        def _handler(request: httpx.Request) -> httpx.Response:
            response = responses.get(str(request.url))
            if response is None:
                raise httpx.ConnectError("unreachable", request=request)
            return response

        return httpx.Client(transport=httpx.MockTransport(_handler))

    return _factory

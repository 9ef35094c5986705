"""
Parse options and the optional ``lucore.toml`` configuration file.

Example::

    [parse]
    locale = "fr-fr"
    verbose = true
    http_timeout = 5.0
"""

import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from .builtin_types import DEFAULT_LOCALE
from .errors import ErrorCode, LuError


@dataclass(frozen=True)
class ParseOptions:
    """
    Options for one parse pass.

    Attributes:
        locale: Target locale, used for prebuilt entity availability
        verbose: Log recoverable problems as warnings and skip the offending
            declaration instead of failing where that is allowed
        http_timeout: Timeout in seconds for import URI checks
    """

    locale: str = DEFAULT_LOCALE
    verbose: bool = False
    http_timeout: float = 10.0

    def with_overrides(self, **overrides: Any) -> "ParseOptions":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def load_options(path: Path) -> ParseOptions:
    """
    Load parse options from the ``[parse]`` table of a TOML file.

    Raises:
        LuError: With code ``UnknownOptions`` for keys ParseOptions does not know
    """
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    parse_data = data.get("parse", {})

    known = {f.name for f in fields(ParseOptions)}
    unknown = sorted(set(parse_data) - known)
    if unknown:
        raise LuError(
            f"Unknown option(s) in {path}: {', '.join(unknown)}",
            code=ErrorCode.UNKNOWN_OPTIONS,
        )

    options = ParseOptions(**parse_data)
    return replace(options, locale=options.locale.lower())

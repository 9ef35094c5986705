"""
Model info directives.

``> !# @<scope>.<key> = <value>`` lines set application metadata:

- ``@app.<key>``: top-level setting of the intent-recognition model
- ``@kb.<key>``: top-level setting of the knowledge base
- ``@intent.inherits`` / ``@entity.inherits``: six ``:``/``;`` separated
  parts, ``name:<target>;<k1>:<v1>;<k2>:<v2>``

Malformed directives are skipped; they are logged only in verbose mode.
"""

import logging
import re

from . import ir
from .content import ParsedContent
from .manifest import ParseOptions
from .resource import ModelInfoSection

logger = logging.getLogger(__name__)

_DIRECTIVE_RE = re.compile(r"@(app|kb|intent|entity)\.(.*)=")
_INHERITS_SEPARATOR_RE = re.compile(r"[:;]")


def parse_inherits(value: str) -> tuple[str, dict[str, str]] | None:
    """
    Split an ``inherits`` value into the target name and its key/value pairs.

    Returns:
        ``(name, {k1: v1, k2: v2})``, or None if the value does not have
        exactly six parts
    """
    parts = [part.strip() for part in _INHERITS_SEPARATOR_RE.split(value)]
    if len(parts) != 6:
        return None
    return parts[1], {parts[2]: parts[3], parts[4]: parts[5]}


def handle_model_infos(
    content: ParsedContent, sections: list[ModelInfoSection], options: ParseOptions
) -> None:
    for section in sections:
        handle_model_info(content, section, options)


def handle_model_info(
    content: ParsedContent, section: ModelInfoSection, options: ParseOptions
) -> None:
    """Apply one directive to ``content``; never raises for malformed input."""
    line = section.model_info
    parts = [part.strip() for part in _DIRECTIVE_RE.split(line)]
    if len(parts) != 4 or not all(parts[1:]):
        _skip(options, "Invalid model info found. Skipping %r", line)
        return

    _, scope, key, value = parts
    scope = scope.lower()

    if scope == "app":
        content.luis.settings[key] = value
    elif scope == "kb":
        content.qna.settings[key] = value
    elif key.lower() != "inherits":
        _skip(options, "Invalid %s inherits information found. Skipping %r", scope, line)
    else:
        inherits = parse_inherits(value)
        if inherits is None:
            _skip(options, "Invalid %s inherits information found. Skipping %r", scope, line)
            return
        name, pairs = inherits
        if scope == "intent":
            target = content.luis.get_or_add_intent(name)
        else:
            target = content.registry.simple.get(name)
            if target is None:
                target = content.registry.upsert(ir.EntityKind.SIMPLE, name, [])
        target.inherits = {**(target.inherits or {}), **pairs}


def _skip(options: ParseOptions, message: str, *args: object) -> None:
    if options.verbose:
        logger.warning(message, *args)

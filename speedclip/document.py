"""Read and write speedscope JSON documents from paths or stdio."""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict

from .errors import MalformedDocumentError
from .profile import SpeedscopeDocument

__all__ = ["STDIO", "read_json", "load_document", "dump_document", "save_document"]

LOG = logging.getLogger(__name__)

STDIO = "-"


def read_json(path: str | Path) -> Any:
    """Parse JSON from ``path``, or from stdin when ``path`` is ``"-"``."""
    source = "<stdin>" if str(path) == STDIO else str(path)
    try:
        if str(path) == STDIO:
            return json.load(sys.stdin)
        with Path(path).open("r", encoding="utf-8") as fh:
            return json.load(fh)
    except json.JSONDecodeError as exc:
        raise MalformedDocumentError(f"{source} is not valid JSON: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise MalformedDocumentError(f"{source} is not UTF-8 text: {exc}") from exc


def load_document(path: str | Path) -> SpeedscopeDocument:
    document = SpeedscopeDocument.from_dict(read_json(path))
    LOG.debug("Loaded %d profile(s) from %s", len(document.profiles), path)
    return document


def dump_document(document: SpeedscopeDocument | Dict[str, Any], *, indent: int | None = None, ensure_ascii: bool = False) -> str:
    payload = document.to_dict() if isinstance(document, SpeedscopeDocument) else document
    if indent:
        return json.dumps(payload, indent=indent, ensure_ascii=ensure_ascii)
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=ensure_ascii)


def save_document(
    document: SpeedscopeDocument | Dict[str, Any],
    path: str | Path,
    *,
    indent: int | None = None,
    ensure_ascii: bool = False,
) -> None:
    """Serialise ``document`` to ``path``, or to stdout when ``path`` is ``"-"``.

    The text is rendered before the target is opened, so a serialisation
    error never leaves a truncated file behind.
    """
    text = dump_document(document, indent=indent, ensure_ascii=ensure_ascii)
    if str(path) == STDIO:
        sys.stdout.write(text)
        sys.stdout.flush()
        return
    with Path(path).open("w", encoding="utf-8") as fh:
        fh.write(text)
    LOG.debug("Wrote %d bytes to %s", len(text), path)

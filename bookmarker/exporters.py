"""
Renderers that turn a list of bookmarks into text, JSON or Markdown.

These functions never touch the database: they work on records the caller
has already fetched. An empty list renders to valid empty output in every
format; whether that is worth reporting is the caller's decision.
"""
import json
import logging
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence, Union

from bookmarker.errors import ExportError
from bookmarker.models import Bookmark

logger = logging.getLogger(__name__)

FORMAT_TEXT = "text"
FORMAT_JSON = "json"
FORMAT_MARKDOWN = "md"

_EXTENSION_FORMATS = {
    ".json": FORMAT_JSON,
    ".md": FORMAT_MARKDOWN,
    ".markdown": FORMAT_MARKDOWN,
}


def to_text(bookmarks: Sequence[Bookmark]) -> str:
    """One ``<id>. <name> - <url>`` line per bookmark."""
    return "".join(f"{b.id}. {b.name} - {b.url}\n" for b in bookmarks)


def to_json(bookmarks: Sequence[Bookmark]) -> str:
    """
    Render bookmarks as a pretty-printed JSON array.

    Only ``name`` and ``url`` are written; ids are internal to the store.
    """
    data = [b.to_dict() for b in bookmarks]
    return json.dumps(data, indent=2, ensure_ascii=False)


def to_markdown(bookmarks: Sequence[Bookmark]) -> str:
    """One ``- [name](url)`` Markdown link per bookmark."""
    return "".join(f"- [{b.name}]({b.url})\n" for b in bookmarks)


_RENDERERS: Dict[str, Callable[[Sequence[Bookmark]], str]] = {
    FORMAT_JSON: to_json,
    FORMAT_MARKDOWN: to_markdown,
    FORMAT_TEXT: to_text,
}


def normalize_format(format: Optional[str]) -> str:
    """
    Map a format name to one of text, json or md.

    Accepts a leading dot (".json") and any case. Unknown or empty names
    fall back to text.
    """
    if not format:
        return FORMAT_TEXT
    name = format.strip().lower().lstrip(".")
    if name == "markdown":
        return FORMAT_MARKDOWN
    if name in _RENDERERS:
        return name
    return FORMAT_TEXT


def format_for_path(path: Union[str, Path]) -> str:
    """Infer the export format from a file extension (.json, .md, else text)."""
    return _EXTENSION_FORMATS.get(Path(path).suffix.lower(), FORMAT_TEXT)


def render(bookmarks: Sequence[Bookmark], format: Optional[str] = None) -> str:
    """Render bookmarks in the given format (text when unrecognized)."""
    return _RENDERERS[normalize_format(format)](bookmarks)


def export_file(bookmarks: Sequence[Bookmark], path: Union[str, Path],
                format: Optional[str] = None) -> Path:
    """
    Export bookmarks to a file.

    Args:
        bookmarks: Bookmarks to export
        path: Output file path
        format: json, md, or anything else for text

    Returns:
        The path written

    Raises:
        ExportError: The file cannot be written
    """
    path = Path(path)
    content = render(bookmarks, format)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as exc:
        raise ExportError(f"failed to write file {path}: {exc}") from exc

    logger.info("exported %d bookmarks to %s", len(bookmarks), path)
    return path

"""
Document loading for prompt-consolidator.

Parses the optional `---`-delimited header block at the top of a markdown file and
splits it from the body.
"""

from __future__ import annotations

from pathlib import Path

from .config import HEADER_DELIMITER, Document
from .errors import ReadError
from .utils import normalize_line_endings, read_file_safe


def parse_header(lines: list[str]) -> tuple[dict[str, str], int | None]:
    """Parse header fields from the lines of a document.

    The header is only recognized when the first line is exactly the delimiter. Scanning
    stops at the next delimiter line. Each line is split at its first colon; the value
    keeps any further colons.

    Args:
        lines: Document lines without line terminators.

    Returns:
        Tuple `(fields, body_start)` where `body_start` is the index of the first body
        line, or None if a header was opened but never closed.
    """
    fields: dict[str, str] = {}

    if not lines or lines[0] != HEADER_DELIMITER:
        return fields, 0

    for index in range(1, len(lines)):
        line = lines[index]
        if line == HEADER_DELIMITER:
            return fields, index + 1

        key, sep, value = line.partition(":")
        key = key.strip()
        if sep and key:
            fields[key] = value.strip()

    return fields, None


def parse_document(text: str, name: str, path: Path | None = None) -> Document:
    """Build a `Document` from raw text.

    Args:
        text: Full file content.
        name: File name of the document.
        path: Path the text was read from (defaults to `name`).

    Returns:
        The parsed document. An unclosed header block yields an empty body.
    """
    lines = normalize_line_endings(text).split("\n")
    fields, body_start = parse_header(lines)

    if body_start is None:
        body = ""
    else:
        body = "\n".join(lines[body_start:]).strip()

    return Document(
        name=name,
        path=Path(path) if path is not None else Path(name),
        header_fields=fields,
        body=body,
    )


def load_document(path: Path) -> Document:
    """Read and parse a markdown document.

    Args:
        path: Path to the document.

    Returns:
        The parsed document.

    Raises:
        ReadError: If the file is missing, unreadable, or not a regular file.
    """
    path = Path(path)
    try:
        content, _ = read_file_safe(path)
    except OSError as e:
        raise ReadError(path, e) from e

    return parse_document(content, path.name, path)


def format_heading(raw_title: str) -> str:
    """Turn a hyphenated identifier into a heading.

    Each hyphen-separated segment gets its first character uppercased; the rest of the
    segment is left as is. Segments are joined with single spaces.

    Examples:
        >>> format_heading("clean-code-typescript")
        'Clean Code Typescript'
        >>> format_heading("")
        ''
    """
    return " ".join(segment[:1].upper() + segment[1:] for segment in raw_title.split("-"))

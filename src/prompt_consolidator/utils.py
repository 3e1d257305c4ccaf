"""
Utility functions for prompt-consolidator.

Includes encoding detection, safe text reading and writing, line ending normalization,
and small formatting helpers for the run summary.
"""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

import chardet


def detect_encoding(sample: bytes) -> str:
    """Detect a likely text encoding for a byte sample.

    BOM markers win, then `chardet`. UTF-8 is assumed when detection has no answer.

    Args:
        sample: Raw bytes from the start of a file.

    Returns:
        A normalized encoding label (e.g., `"utf-8"`, `"utf-8-sig"`, `"utf-16-le"`).
    """
    if not sample:
        return "utf-8"

    # Check for BOM markers first (most reliable)
    if sample.startswith(b"\xef\xbb\xbf"):
        return "utf-8-sig"
    if sample.startswith(b"\xff\xfe"):
        return "utf-16-le"
    if sample.startswith(b"\xfe\xff"):
        return "utf-16-be"

    result = chardet.detect(sample)
    encoding_any = result.get("encoding")

    if not isinstance(encoding_any, str) or not encoding_any:
        return "utf-8"

    encoding = encoding_any.lower()
    if encoding in ("ascii", "utf-8", "utf8"):
        return "utf-8"
    return encoding


def read_file_safe(file_path: Path) -> tuple[str, str]:
    """Read a text file, falling back to encoding detection when it is not UTF-8.

    Strategy:
    - Decode as strict UTF-8 (prompt files are almost always UTF-8).
    - On a decode failure, detect the encoding and decode with `errors="replace"`.

    Args:
        file_path: Path to the file to read.

    Returns:
        A tuple `(content, encoding_used)`.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    raw = Path(file_path).read_bytes()

    try:
        return raw.decode("utf-8"), "utf-8"
    except UnicodeDecodeError:
        pass

    detected = detect_encoding(raw[:8192])
    try:
        return raw.decode(detected, errors="replace"), detected
    except LookupError:
        # chardet named a codec Python does not ship
        return raw.decode("utf-8", errors="replace"), "utf-8"


def _target_mode(destination: Path) -> int:
    """Permission bits for a file written to `destination`."""
    try:
        return stat.S_IMODE(destination.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_text_atomic(path: Path, data: str, *, encoding: str = "utf-8") -> None:
    """Write text through a temp file in the destination directory, then rename it.

    The destination either keeps its previous content or receives all of `data`. The
    result keeps the destination's existing permissions, or gets the umask default for a
    new file, as a direct write would.

    Raises:
        OSError: If the temp file cannot be written or renamed.
    """
    destination = Path(path)
    mode = _target_mode(destination)
    handle = tempfile.NamedTemporaryFile(
        "w",
        encoding=encoding,
        newline="\n",
        dir=str(destination.parent),
        prefix=f".{destination.name}.",
        suffix=".tmp",
        delete=False,
    )
    temp_name = handle.name
    try:
        with handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        # NamedTemporaryFile always creates 0600
        os.chmod(temp_name, mode)
        os.replace(temp_name, destination)
    finally:
        if os.path.exists(temp_name):
            os.remove(temp_name)


def normalize_line_endings(content: str) -> str:
    """Normalize line endings to LF (Unix-style).

    Args:
        content: Input text that may contain CRLF/CR/mixed endings.

    Returns:
        Content with all line endings normalized to LF.
    """
    # Replace CRLF first, then remaining CR, to avoid double-transforming CRLF.
    return content.replace("\r\n", "\n").replace("\r", "\n")


def count_lines(content: str) -> int:
    """Count lines the way an editor shows them: `"a\\nb"` is two lines, `""` is one."""
    return content.count("\n") + 1


def format_kib(size_bytes: int) -> str:
    """Format a byte count as KB with two decimals (e.g., `"1.50 KB"`)."""
    return f"{size_bytes / 1024:.2f} KB"

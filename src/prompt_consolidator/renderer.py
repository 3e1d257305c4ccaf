"""
Output rendering for prompt-consolidator.

Orders prompt documents and renders the combined markdown guide.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date
from pathlib import Path

from .config import DEFAULT_PRIORITY_ORDER, Document
from .document import format_heading
from .errors import WriteError
from .utils import write_text_atomic

SEPARATOR = "---"

TITLE_BLOCK = [
    "# Awesome Coding Prompts - Consolidated Guide",
    "",
    "> A comprehensive collection of professional development standards and architectural guidance",
    "",
    SEPARATOR,
    "",
]

INSTRUCTIONS_HEADING = "## 📋 Core Instructions"
PROMPT_HEADING_PREFIX = "## 📖 "

FOOTER_NOTES = [
    "## 🚀 Implementation Notes",
    "",
    "This consolidated guide follows the architectural principles outlined in each individual prompt:",
    "",
    "- **Clean Architecture**: Strict separation of concerns with dependency inversion",
    "- **TypeScript Excellence**: Zero `any` types, strict typing, and type-driven development",
    "- **Professional Standards**: Production-ready code with comprehensive error handling",
    "- **Domain-Driven Design**: Business logic isolated from infrastructure concerns",
    "",
    SEPARATOR,
    "",
]


def order_documents(
    documents: Sequence[Document],
    priority_order: Iterable[str] = DEFAULT_PRIORITY_ORDER,
) -> list[Document]:
    """Order documents: priority names first, then the rest in listing order.

    Priority names without a matching document are skipped. A document is emitted at
    most once, even if the priority list repeats its name.

    Args:
        documents: Documents in listing (lexicographic) order.
        priority_order: File names to place first, in order.

    Returns:
        A new list holding every input document exactly once.
    """
    by_name = {doc.name: doc for doc in documents}
    priority = list(dict.fromkeys(priority_order))

    ordered = [by_name[name] for name in priority if name in by_name]
    emitted = {doc.name for doc in ordered}
    ordered.extend(doc for doc in documents if doc.name not in emitted)
    return ordered


def render_document_section(document: Document) -> list[str]:
    """Render one prompt document as markdown lines (heading, subtitle, body, separator)."""
    lines = [f"{PROMPT_HEADING_PREFIX}{format_heading(document.title)}"]
    if document.description:
        lines.append("")
        lines.append(f"*{document.description}*")
    lines.extend(["", document.body, "", SEPARATOR, ""])
    return lines


def build_output(
    instructions: Document,
    documents: Sequence[Document],
    priority_order: Iterable[str] = DEFAULT_PRIORITY_ORDER,
    today: date | None = None,
) -> str:
    """Render the consolidated guide.

    Args:
        instructions: Instructions document, rendered first under a fixed heading.
        documents: Prompt documents in listing order.
        priority_order: File names rendered before the other prompts.
        today: Date stamped in the footer (defaults to the current date).

    Returns:
        The combined markdown text, lines joined with `\\n` and no trailing newline.
    """
    return render_output(instructions, order_documents(documents, priority_order), today)


def render_output(
    instructions: Document,
    ordered_documents: Sequence[Document],
    today: date | None = None,
) -> str:
    """Render the guide from prompts that are already in their final order."""
    if today is None:
        today = date.today()

    lines = list(TITLE_BLOCK)
    lines.extend([INSTRUCTIONS_HEADING, "", instructions.body, "", SEPARATOR, ""])

    for document in ordered_documents:
        lines.extend(render_document_section(document))

    lines.extend(FOOTER_NOTES)
    lines.append(
        f"*Generated from individual prompt files. Last updated: {today.isoformat()}*"
    )

    return "\n".join(lines)


def write_output(output_path: Path, content: str, atomic: bool = True) -> Path:
    """Write the consolidated guide, replacing any previous content.

    Args:
        output_path: Destination file.
        content: Text to write (UTF-8, `\\n` newlines).
        atomic: Write via a temp file and rename instead of writing in place.

    Returns:
        The path written.

    Raises:
        WriteError: If the directory cannot be created or the file cannot be written.
    """
    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        if atomic:
            write_text_atomic(output_path, content)
        else:
            with open(output_path, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)
    except OSError as e:
        raise WriteError(output_path, e) from e

    return output_path

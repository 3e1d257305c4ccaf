"""
Configuration models and defaults for prompt-consolidator.

Holds the fixed locations, the priority order, and the immutable document model.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

# Line that opens and closes a document header block
HEADER_DELIMITER = "---"

# Only files with this exact (case-sensitive) suffix are prompt documents
MARKDOWN_SUFFIX = ".md"

# Default locations, relative to the project root
DEFAULT_INSTRUCTIONS_FILE = "instructions.md"
DEFAULT_PROMPTS_DIR = "prompts"
DEFAULT_OUTPUT_FILE = "CONSOLIDATED_PROMPTS.md"

# Prompt files rendered first, in this order. The last two entries are
# placeholders for prompts that may not exist yet; absent names emit nothing.
DEFAULT_PRIORITY_ORDER: tuple[str, ...] = (
    "clean-code-typescript.md",
    "clean-architecture.md",
    "typescript-wizard.md",
    "feature-development.md",
    "frontend-react-shadcn.md",
    "frontend-design.md",
    "nextjs-app-router.md",
)


@dataclass
class ConsolidatorConfig:
    """Locations and ordering used by a consolidation run.

    Attributes:
        instructions_path: Instructions document rendered first.
        prompts_dir: Directory holding the `*.md` prompt documents.
        output_path: Destination of the combined document (overwritten on every run).
        priority_order: File names rendered before all other prompts, in order.
        atomic_write: Write through a temp file and rename it over `output_path`.
    """

    instructions_path: Path
    prompts_dir: Path
    output_path: Path
    priority_order: tuple[str, ...] = DEFAULT_PRIORITY_ORDER
    atomic_write: bool = True

    def __post_init__(self) -> None:
        """Normalize paths to absolute form and freeze the priority order."""
        self.instructions_path = Path(self.instructions_path).resolve()
        self.prompts_dir = Path(self.prompts_dir).resolve()
        self.output_path = Path(self.output_path).resolve()
        self.priority_order = tuple(self.priority_order)

    @classmethod
    def from_root(cls, root: Path, **overrides: object) -> ConsolidatorConfig:
        """Build a config with the default layout under `root`.

        Args:
            root: Project root containing `instructions.md` and `prompts/`.
            **overrides: Field values replacing the defaults.

        Returns:
            A `ConsolidatorConfig` instance.
        """
        root = Path(root)
        values: dict[str, object] = {
            "instructions_path": root / DEFAULT_INSTRUCTIONS_FILE,
            "prompts_dir": root / DEFAULT_PROMPTS_DIR,
            "output_path": root / DEFAULT_OUTPUT_FILE,
        }
        values.update(overrides)
        return cls(**values)  # type: ignore[arg-type]


@dataclass(frozen=True)
class Document:
    """A markdown document with its parsed header and body.

    Attributes:
        name: File name including the `.md` suffix.
        path: Path the document was read from.
        header_fields: Read-only mapping of header keys to values (insertion ordered).
        body: Text after the header block, trimmed.
    """

    name: str
    path: Path
    header_fields: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    body: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.header_fields, MappingProxyType):
            object.__setattr__(self, "header_fields", MappingProxyType(dict(self.header_fields)))

    @property
    def stem(self) -> str:
        """File name without the markdown suffix."""
        if self.name.endswith(MARKDOWN_SUFFIX):
            return self.name[: -len(MARKDOWN_SUFFIX)]
        return self.name

    @property
    def title(self) -> str:
        """Raw title: the `name` header field, falling back to the file stem."""
        return self.header_fields.get("name") or self.stem

    @property
    def description(self) -> str:
        return self.header_fields.get("description", "")


@dataclass
class ListingStats:
    """Statistics from listing the prompt directory.

    Attributes:
        files_found: `*.md` entries found in the directory.
        files_loaded: Documents read successfully.
        skipped: Documents that could not be read, with the reason.
    """

    files_found: int = 0
    files_loaded: int = 0
    skipped: list[tuple[Path, str]] = field(default_factory=list)


@dataclass
class ConsolidationResult:
    """Outcome of a successful run.

    Attributes:
        output_path: Where the combined document was written (or would be, for dry runs).
        size_bytes: UTF-8 size of the combined document.
        line_count: Number of lines in the combined document.
        document_names: Prompt file names in rendered order.
        stats: Listing statistics, including skipped documents.
        written: False for dry runs.
    """

    output_path: Path
    size_bytes: int
    line_count: int
    document_names: list[str]
    stats: ListingStats
    written: bool = True

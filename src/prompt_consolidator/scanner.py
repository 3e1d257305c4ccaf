"""
Prompt scanner module for prompt-consolidator.

Discovers markdown prompt documents in a directory and loads them in a stable order.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

from rich.console import Console

from .config import MARKDOWN_SUFFIX, Document, ListingStats
from .document import load_document
from .errors import MissingDirectoryError, ReadError

console = Console(stderr=True)


class PromptScanner:
    """
    Lists and loads the prompt documents of one directory.

    Unreadable documents are reported and skipped; they never abort the listing.
    """

    def __init__(self, prompts_dir: Path, suffix: str = MARKDOWN_SUFFIX):
        """
        Initialize the scanner.

        Args:
            prompts_dir: Directory holding the prompt documents
            suffix: Exact, case-sensitive file name suffix to include
        """
        self.prompts_dir = Path(prompts_dir).resolve()
        self.suffix = suffix
        self.stats = ListingStats()

    def list_paths(self) -> list[Path]:
        """
        Return prompt paths sorted by full path string.

        Raises:
            MissingDirectoryError: If the directory does not exist, is not a directory, or cannot be listed
        """
        if not self.prompts_dir.is_dir():
            raise MissingDirectoryError(self.prompts_dir)

        try:
            with os.scandir(self.prompts_dir) as entries:
                names = [entry.name for entry in entries if entry.name.endswith(self.suffix)]
        except FileNotFoundError as e:
            raise MissingDirectoryError(self.prompts_dir) from e
        except OSError as e:
            raise MissingDirectoryError(self.prompts_dir, e) from e

        return sorted((self.prompts_dir / name for name in names), key=str)

    def scan(self) -> Generator[Document, None, None]:
        """
        Load each prompt document in listing order.

        Yields:
            Document objects for each readable prompt
        """
        paths = self.list_paths()
        self.stats.files_found = len(paths)

        for path in paths:
            try:
                document = load_document(path)
            except ReadError as e:
                self.stats.skipped.append((path, str(e.cause)))
                console.print(f"[yellow]Warning: Skipping {path.name}: {e.cause}[/yellow]")
                continue

            self.stats.files_loaded += 1
            yield document


def list_prompt_documents(prompts_dir: Path) -> tuple[list[Document], ListingStats]:
    """
    Convenience function to load every prompt document in a directory.

    Returns:
        Tuple of (documents in lexicographic order, ListingStats)
    """
    scanner = PromptScanner(prompts_dir)
    documents = list(scanner.scan())
    return documents, scanner.stats

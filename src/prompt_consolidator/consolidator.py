"""
Consolidation pipeline for prompt-consolidator.

Checks preconditions, loads the documents, renders the guide, and writes it.
"""

from __future__ import annotations

from datetime import date

from .config import ConsolidationResult, ConsolidatorConfig
from .document import load_document
from .errors import MissingDirectoryError, MissingInstructionsError, ReadError
from .renderer import order_documents, render_output, write_output
from .scanner import PromptScanner
from .utils import count_lines


class Consolidator:
    """
    Combines the instructions document and all prompt documents into one file.

    A run is a single linear pass: check preconditions, list and load prompts, render,
    then write. Nothing is written if a precondition fails.
    """

    def __init__(self, config: ConsolidatorConfig) -> None:
        self.config = config

    def check_preconditions(self) -> None:
        """Fail early if the prompt directory or the instructions file is missing.

        Raises:
            MissingDirectoryError: If the prompt directory does not exist.
            MissingInstructionsError: If the instructions file does not exist.
        """
        if not self.config.prompts_dir.is_dir():
            raise MissingDirectoryError(self.config.prompts_dir)
        if not self.config.instructions_path.is_file():
            raise MissingInstructionsError(self.config.instructions_path)

    def render(self, today: date | None = None) -> tuple[str, ConsolidationResult]:
        """Load all documents and render the guide without writing it.

        Args:
            today: Footer date (defaults to the current date).

        Returns:
            Tuple of (rendered text, result describing it with `written=False`).

        Raises:
            MissingDirectoryError: If the prompt directory does not exist.
            MissingInstructionsError: If the instructions file is missing or unreadable.
        """
        self.check_preconditions()

        try:
            instructions = load_document(self.config.instructions_path)
        except ReadError as e:
            raise MissingInstructionsError(self.config.instructions_path, e.cause) from e

        scanner = PromptScanner(self.config.prompts_dir)
        documents = list(scanner.scan())

        ordered = order_documents(documents, self.config.priority_order)
        content = render_output(instructions, ordered, today=today)

        result = ConsolidationResult(
            output_path=self.config.output_path,
            size_bytes=len(content.encode("utf-8")),
            line_count=count_lines(content),
            document_names=[doc.name for doc in ordered],
            stats=scanner.stats,
            written=False,
        )
        return content, result

    def run(self, today: date | None = None, dry_run: bool = False) -> ConsolidationResult:
        """Run the full consolidation.

        Args:
            today: Footer date (defaults to the current date).
            dry_run: Render and report, but leave the output file untouched.

        Returns:
            A `ConsolidationResult` describing the output.

        Raises:
            MissingDirectoryError: If the prompt directory does not exist.
            MissingInstructionsError: If the instructions file is missing or unreadable.
            WriteError: If the output file cannot be written.
        """
        content, result = self.render(today=today)
        if dry_run:
            return result

        write_output(self.config.output_path, content, atomic=self.config.atomic_write)
        result.written = True
        return result

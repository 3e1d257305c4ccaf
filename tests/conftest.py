"""Shared fixtures for prompt-consolidator tests."""

from pathlib import Path

import pytest


@pytest.fixture
def prompt_root(tmp_path: Path) -> Path:
    """Create a project root with instructions and a small prompt directory."""
    root = tmp_path / "project"
    prompts = root / "prompts"
    prompts.mkdir(parents=True)

    (root / "instructions.md").write_text(
        "---\nname: instructions\n---\n\nAlways follow these rules.\n"
    )
    (prompts / "b.md").write_text("Body of B.\n")
    (prompts / "a.md").write_text(
        "---\nname: alpha-prompt\ndescription: The first letter\n---\nBody of A.\n"
    )
    (prompts / "clean-architecture.md").write_text(
        "---\ndescription: Layers: domain, application\n---\n\nKeep layers apart.\n"
    )
    (prompts / "notes.txt").write_text("not a prompt")

    return root

"""Tests for the renderer module."""

import os
import stat
from datetime import date

import pytest

from prompt_consolidator.document import parse_document
from prompt_consolidator.errors import WriteError
from prompt_consolidator.renderer import (
    build_output,
    order_documents,
    render_document_section,
    write_output,
)

TODAY = date(2024, 5, 17)


def make_doc(name, text="body"):
    return parse_document(text, name)


@pytest.fixture
def instructions():
    return parse_document("---\nname: ignored-title\n---\nFollow the rules.", "instructions.md")


class TestOrderDocuments:
    """Tests for priority ordering."""

    def test_priority_first_then_lexicographic(self):
        """Test that priority names lead and the remainder keeps listing order."""
        docs = [make_doc("a.md"), make_doc("b.md"), make_doc("clean-architecture.md")]

        ordered = order_documents(docs, ["clean-architecture.md"])

        assert [d.name for d in ordered] == ["clean-architecture.md", "a.md", "b.md"]

    def test_priority_follows_declared_order(self):
        docs = [make_doc("a.md"), make_doc("b.md"), make_doc("c.md")]

        ordered = order_documents(docs, ["c.md", "a.md"])

        assert [d.name for d in ordered] == ["c.md", "a.md", "b.md"]

    def test_absent_priority_names_are_skipped(self):
        docs = [make_doc("a.md")]

        ordered = order_documents(docs, ["frontend-design.md", "nextjs-app-router.md"])

        assert [d.name for d in ordered] == ["a.md"]

    def test_each_document_once(self):
        """Test that repeated priority names never duplicate a document."""
        docs = [make_doc("a.md"), make_doc("b.md")]

        ordered = order_documents(docs, ["b.md", "b.md", "a.md"])

        assert [d.name for d in ordered] == ["b.md", "a.md"]

    def test_remainder_is_not_resorted(self):
        """Test that the remainder keeps the given listing order."""
        docs = [make_doc("z.md"), make_doc("m.md")]

        ordered = order_documents(docs, [])

        assert [d.name for d in ordered] == ["z.md", "m.md"]


class TestRenderDocumentSection:
    """Tests for per-document rendering."""

    def test_heading_from_name_field_with_description(self):
        doc = make_doc("x.md", "---\nname: type-wizard\ndescription: Strict types\n---\nContent")

        lines = render_document_section(doc)

        assert lines == [
            "## 📖 Type Wizard",
            "",
            "*Strict types*",
            "",
            "Content",
            "",
            "---",
            "",
        ]

    def test_heading_from_file_stem_without_description(self):
        doc = make_doc("feature-development.md", "Content")

        lines = render_document_section(doc)

        assert lines == ["## 📖 Feature Development", "", "Content", "", "---", ""]

    def test_empty_description_is_omitted(self):
        doc = make_doc("x.md", "---\ndescription:\n---\nContent")

        assert "**" not in "\n".join(render_document_section(doc))


class TestBuildOutput:
    """Tests for the combined document."""

    def test_layout(self, instructions):
        """Test the overall layout of title, instructions, prompts and footer."""
        docs = [make_doc("a.md", "A body")]

        output = build_output(instructions, docs, priority_order=[], today=TODAY)
        lines = output.split("\n")

        assert lines[0] == "# Awesome Coding Prompts - Consolidated Guide"
        assert lines[6] == "## 📋 Core Instructions"
        assert lines[8] == "Follow the rules."
        assert "## 📖 A" in lines
        assert "Ignored Title" not in output
        assert lines[-1] == "*Generated from individual prompt files. Last updated: 2024-05-17*"
        assert not output.endswith("\n")

    def test_prompts_in_priority_order(self, instructions):
        docs = [make_doc("a.md", "A body"), make_doc("b.md", "B body"), make_doc("c.md", "C body")]

        output = build_output(instructions, docs, priority_order=["c.md"], today=TODAY)

        assert output.index("C body") < output.index("A body") < output.index("B body")

    def test_every_document_appears_once(self, instructions):
        docs = [make_doc(f"{n}.md", f"unique-{n}") for n in ("a", "b", "c")]

        output = build_output(instructions, docs, priority_order=["b.md", "b.md"], today=TODAY)

        for n in ("a", "b", "c"):
            assert output.count(f"unique-{n}") == 1

    def test_deterministic_for_same_day(self, instructions):
        docs = [make_doc("a.md"), make_doc("b.md")]

        first = build_output(instructions, docs, today=TODAY)
        second = build_output(instructions, docs, today=TODAY)

        assert first == second

    def test_defaults_to_current_date(self, instructions):
        output = build_output(instructions, [])

        assert date.today().isoformat() in output.split("\n")[-1]


class TestWriteOutput:
    """Tests for writing the combined document."""

    @pytest.mark.parametrize("atomic", [True, False])
    def test_overwrites_existing_file(self, tmp_path, atomic):
        target = tmp_path / "out" / "CONSOLIDATED_PROMPTS.md"
        target.parent.mkdir()
        target.write_text("old content that is longer than the new one")

        write_output(target, "new", atomic=atomic)

        assert target.read_text(encoding="utf-8") == "new"
        assert sorted(p.name for p in target.parent.iterdir()) == ["CONSOLIDATED_PROMPTS.md"]

    def test_creates_parent_directory(self, tmp_path):
        target = tmp_path / "nested" / "dir" / "guide.md"

        write_output(target, "text")

        assert target.read_text(encoding="utf-8") == "text"

    def test_write_failure_raises_write_error(self, tmp_path):
        """Test that writing onto a directory raises WriteError."""
        target = tmp_path / "guide.md"
        target.mkdir()

        with pytest.raises(WriteError) as exc_info:
            write_output(target, "text", atomic=False)

        assert exc_info.value.path == target

    @pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")
    def test_atomic_write_matches_direct_write_mode(self, tmp_path):
        """Test that a new file gets the same permissions either way."""
        old_umask = os.umask(0o022)
        try:
            write_output(tmp_path / "atomic.md", "x", atomic=True)
            write_output(tmp_path / "direct.md", "x", atomic=False)
        finally:
            os.umask(old_umask)

        atomic_mode = stat.S_IMODE((tmp_path / "atomic.md").stat().st_mode)
        direct_mode = stat.S_IMODE((tmp_path / "direct.md").stat().st_mode)
        assert oct(atomic_mode) == oct(direct_mode) == oct(0o644)

    @pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")
    def test_atomic_write_keeps_existing_mode(self, tmp_path):
        """Test that overwriting keeps the destination's permissions."""
        target = tmp_path / "guide.md"
        target.write_text("old")
        target.chmod(0o640)

        write_output(target, "new", atomic=True)

        assert target.read_text(encoding="utf-8") == "new"
        assert oct(stat.S_IMODE(target.stat().st_mode)) == oct(0o640)

    def test_atomic_failure_leaves_no_temp_file(self, tmp_path):
        target = tmp_path / "guide.md"
        target.mkdir()

        with pytest.raises(WriteError):
            write_output(target, "text", atomic=True)

        assert [p.name for p in tmp_path.iterdir()] == ["guide.md"]

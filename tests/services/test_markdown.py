"""Tests for frontmatter parsing and rendering."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from locus.services.markdown import (
    create_task_markdown,
    ensure_markdown_extension,
    extract_title,
    generate_markdown,
    merge_frontmatter,
    parse_markdown,
)

DOC = """---
status: todo
priority: high
tags:
- bug
- ui
---
# Fix the button

Details here.
"""


class TestParseMarkdown:
    def test_frontmatter_and_body(self) -> None:
        parsed = parse_markdown(DOC)
        assert parsed.frontmatter == {"status": "todo", "priority": "high", "tags": ["bug", "ui"]}
        assert parsed.body == "# Fix the button\n\nDetails here.\n"

    def test_no_frontmatter_is_body(self) -> None:
        content = "# Just a note\n\ntext"
        parsed = parse_markdown(content)
        assert parsed.frontmatter is None
        assert parsed.body == content

    def test_unclosed_block(self) -> None:
        content = "---\nstatus: todo\n# heading"
        parsed = parse_markdown(content)
        assert parsed.frontmatter is None
        assert parsed.body == content

    def test_empty_block(self) -> None:
        parsed = parse_markdown("---\n---\nbody")
        assert parsed.frontmatter == {}
        assert parsed.body == "body"

    @pytest.mark.parametrize(
        "yaml_block",
        ["status: [unclosed", "- just\n- a list", "plain scalar"],
    )
    def test_malformed_or_non_mapping(self, yaml_block: str) -> None:
        content = f"---\n{yaml_block}\n---\nbody"
        parsed = parse_markdown(content)
        assert parsed.frontmatter is None
        assert parsed.body == content

    def test_delimiter_must_be_exact(self) -> None:
        parsed = parse_markdown("--- \nstatus: todo\n---\n")
        assert parsed.frontmatter is None


class TestGenerateMarkdown:
    def test_round_trip(self) -> None:
        parsed = parse_markdown(DOC)
        again = parse_markdown(generate_markdown(parsed.frontmatter, parsed.body))
        assert again.frontmatter == parsed.frontmatter
        assert again.body == parsed.body

    def test_no_frontmatter_returns_body(self) -> None:
        assert generate_markdown(None, "body") == "body"
        assert generate_markdown({}, "body") == "body"

    def test_block_style(self) -> None:
        text = generate_markdown({"tags": ["a", "b"]}, "")
        assert text == "---\ntags:\n- a\n- b\n---\n"

    def test_key_order_preserved(self) -> None:
        text = generate_markdown({"zeta": 1, "alpha": 2}, "")
        assert text.index("zeta") < text.index("alpha")

    def test_unicode_values(self) -> None:
        text = generate_markdown({"title": "日本語"}, "x")
        assert parse_markdown(text).frontmatter == {"title": "日本語"}


class TestMergeFrontmatter:
    def test_updates_win_and_lists_replaced(self) -> None:
        merged = merge_frontmatter({"tags": ["a"], "status": "todo"}, {"tags": ["b"]})
        assert merged == {"tags": ["b"], "status": "todo"}

    def test_existing_untouched(self) -> None:
        existing = {"status": "todo"}
        merge_frontmatter(existing, {"status": "done"})
        assert existing == {"status": "todo"}


class TestExtractTitle:
    def test_first_h1(self) -> None:
        assert extract_title("intro\n# First\n# Second") == "First"

    def test_h2_ignored(self) -> None:
        assert extract_title("## Sub\ntext") is None

    def test_indented_heading(self) -> None:
        assert extract_title("   #  Padded  ") == "Padded"


class TestCreateTaskMarkdown:
    def test_defaults(self) -> None:
        now = datetime(2024, 3, 10, 12, 0, tzinfo=UTC)
        text = create_task_markdown("Hello", now=now)
        parsed = parse_markdown(text)
        assert parsed.frontmatter is not None
        assert str(parsed.frontmatter["date"]) == "2024-03-10"
        assert str(parsed.frontmatter["created"]).startswith("2024-03-10T12:00")
        assert parsed.body == "# Hello\n\n"

    def test_caller_overrides_and_body(self) -> None:
        text = create_task_markdown("Hello", "custom body", {"date": "1999-01-01", "status": "wip"})
        parsed = parse_markdown(text)
        assert parsed.frontmatter is not None
        assert str(parsed.frontmatter["date"]) == "1999-01-01"
        assert parsed.frontmatter["status"] == "wip"
        assert parsed.body == "custom body"

    def test_date_keys_first(self) -> None:
        text = create_task_markdown("Hello", frontmatter={"status": "todo"})
        assert text.index("date:") < text.index("status:")


class TestEnsureExtension:
    def test_added_once(self) -> None:
        assert ensure_markdown_extension("a") == "a.md"
        assert ensure_markdown_extension("a.md") == "a.md"

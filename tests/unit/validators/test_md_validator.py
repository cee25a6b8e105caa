import pytest
from pathlib import Path
from unittest.mock import MagicMock

from almanac.core.exceptions import CorpusError
from almanac.core.logging_manager import AlmanacLogger
from almanac.validators.md import (
    MarkdownIssue,
    MarkdownValidationReport,
    MarkdownValidator,
    format_markdown_report,
)

VALID_POST = """---
title: "Valid Post"
date: "2024-01-15"
tags: [python]
---

# Valid Post

This is a valid post body.
"""


class TestMarkdownValidator:
    """Tests for per-file validation."""

    @pytest.fixture
    def validator(self, posts_dir):
        """Create a MarkdownValidator over the temporary posts directory."""
        return MarkdownValidator(posts_dir)

    def test_validate_valid_file(self, validator, write_post):
        """A complete, conventionally named post has no issues."""
        path = write_post("2024-01-15-valid-post.md", VALID_POST)

        issues = validator.validate_file(path)
        assert not issues
        assert validator.report.files_checked == 1
        assert validator.report.total_errors == 0
        assert validator.report.total_warnings == 0

    def test_validate_missing_required_field(self, validator, write_post):
        """Missing 'date' is an error."""
        path = write_post("2024-01-15-no-date.md", """---
title: "No Date"
tags: [a]
---
Body content.
""")

        issues = validator.validate_file(path)
        assert len(issues) == 1
        assert issues[0].severity == "error"
        assert "Required field 'date' missing" in issues[0].message

    def test_validate_empty_required_field(self, validator, write_post):
        """An empty title is reported on its own line."""
        path = write_post("2024-01-15-empty.md", """---
date: "2024-01-15"
title:
tags: [a]
---
Body content.
""")

        issues = validator.validate_file(path)
        empty = [i for i in issues if "Required field 'title' is empty" in i.message]
        assert len(empty) == 1
        assert empty[0].line_number == 3

    def test_whitespace_title_is_empty(self, validator, write_post):
        """A title of only spaces counts as empty."""
        path = write_post(
            "2024-01-15-blank.md",
            '---\ntitle: "   "\ndate: "2024-01-15"\ntags: [x]\n---\nBody content.\n',
        )

        issues = validator.validate_file(path)
        assert len(issues) == 1
        assert issues[0].severity == "error"
        assert issues[0].message == "Required field 'title' is empty"
        assert issues[0].line_number == 2

    def test_whitespace_date_is_only_empty(self, validator, write_post):
        """A blank date is reported once, as empty."""
        path = write_post(
            "2024-01-15-blank-date.md",
            '---\ntitle: T\ndate: "  "\ntags: [x]\n---\nBody content.\n',
        )

        messages = [i.message for i in validator.validate_file(path)]
        assert messages == ["Required field 'date' is empty"]

    def test_missing_tags_is_warning(self, validator, write_post):
        """Tags are recommended, not required."""
        path = write_post("2024-01-15-untagged.md", """---
title: "Untagged"
date: "2024-01-15"
---
Body content.
""")

        issues = validator.validate_file(path)
        assert len(issues) == 1
        assert issues[0].severity == "warning"
        assert "Recommended field 'tags' missing" in issues[0].message

    def test_validate_invalid_yaml(self, validator, write_post):
        """Invalid YAML is an error with a file line number."""
        path = write_post("2024-01-15-bad-yaml.md", """---
title: "Bad"
tags: [unclosed list
---
Body content.
""")

        issues = validator.validate_file(path)
        assert issues[0].severity == "error"
        assert "Invalid YAML syntax" in issues[0].message
        assert issues[0].line_number is not None

    def test_validate_non_mapping(self, validator, write_post):
        """Front matter that is a list is rejected."""
        path = write_post("2024-01-15-list.md", "---\n- a\n- b\n---\nBody\n")

        issues = validator.validate_file(path)
        assert any("must be a mapping" in i.message for i in issues)

    def test_unterminated_frontmatter(self, validator, write_post):
        """An opening '---' that is never closed is an error on line 1."""
        path = write_post("2024-01-15-open.md", "---\ntitle: T\n\nBody\n")

        issues = validator.validate_file(path)
        assert len(issues) == 1
        assert issues[0].line_number == 1
        assert "Failed to parse front matter" in issues[0].message

    def test_frontmatter_not_on_first_line(self, validator, write_post):
        """Front matter after blank lines is an error."""
        path = write_post("2024-01-15-late.md", "\n---\ntitle: T\n---\nBody\n")

        issues = validator.validate_file(path)
        late = [i for i in issues if "first line" in i.message]
        assert len(late) == 1
        assert late[0].severity == "error"
        assert late[0].line_number == 2

    def test_no_frontmatter_is_info(self, validator, write_post):
        """Posts without front matter are allowed."""
        path = write_post("2024-01-15-plain.md", "# Plain\n\nJust text.\n")

        issues = validator.validate_file(path)
        assert [i.severity for i in issues] == ["info"]
        assert validator.report.is_healthy

    @pytest.mark.parametrize("value", ['"January 1st, 2024"', '"2024-02-30"', "20240101"])
    def test_validate_invalid_date_format(self, validator, write_post, value):
        """Dates must be real YYYY-MM-DD dates."""
        path = write_post(
            "2024-01-15-bad-date.md",
            f"---\ntitle: T\ndate: {value}\ntags: [a]\n---\nBody\n",
        )

        issues = validator.validate_file(path)
        bad = [i for i in issues if "Invalid date format" in i.message]
        assert len(bad) == 1
        assert bad[0].line_number == 3

    def test_unquoted_date_accepted(self, validator, write_post):
        path = write_post(
            "2024-01-15-plain-date.md",
            "---\ntitle: T\ndate: 2024-01-15\ntags: [a]\n---\nBody\n",
        )
        assert validator.validate_file(path) == []

    def test_validate_unexpected_type(self, validator, write_post):
        """A scalar tags value has the wrong type."""
        path = write_post(
            "2024-01-15-scalar-tags.md",
            '---\ntitle: T\ndate: "2024-01-15"\ntags: python\n---\nBody\n',
        )

        issues = validator.validate_file(path)
        assert any("Field 'tags' has unexpected type: str" in i.message for i in issues)

    def test_invalid_tags(self, validator, write_post):
        """Tags must be non-empty strings."""
        path = write_post(
            "2024-01-15-tags.md",
            '---\ntitle: T\ndate: "2024-01-15"\ntags: [1, ""]\n---\nBody\n',
        )

        messages = [i.message for i in validator.validate_file(path)]
        assert "Tag 1 must be a non-empty string, got 1" in messages
        assert "Tag 2 must be a non-empty string, got ''" in messages

    def test_duplicate_tags_warned(self, validator, write_post):
        path = write_post(
            "2024-01-15-dupes.md",
            '---\ntitle: T\ndate: "2024-01-15"\ntags: [a, A]\n---\nBody\n',
        )

        issues = validator.validate_file(path)
        assert len(issues) == 1
        assert issues[0].severity == "warning"
        assert issues[0].message == "Duplicate tag: 'A'"

    def test_validate_unknown_field(self, validator, write_post):
        """Unknown fields are listed sorted in one warning."""
        path = write_post(
            "2024-01-15-unknown.md",
            '---\ntitle: T\ndate: "2024-01-15"\ntags: [a]\nlayout: post\nauthor: me\n---\nBody\n',
        )

        issues = validator.validate_file(path)
        assert len(issues) == 1
        assert issues[0].severity == "warning"
        assert issues[0].message == "Unknown fields: author, layout"

    def test_unconventional_filename(self, validator, write_post):
        """Non YYYY-MM-DD-title.md names get a rename suggestion."""
        path = write_post("notes.md", VALID_POST)

        issues = validator.validate_file(path)
        assert len(issues) == 1
        assert issues[0].category == "filename"
        assert issues[0].severity == "warning"
        assert issues[0].suggestion == "Rename to 2024-01-15-valid-post.md"

    def test_filename_date_mismatch(self, validator, write_post):
        path = write_post("2024-01-16-valid-post.md", VALID_POST)

        issues = validator.validate_file(path)
        assert len(issues) == 1
        assert issues[0].message == (
            "Filename date 2024-01-16 does not match front matter date 2024-01-15"
        )

    def test_validate_empty_body(self, validator, write_post):
        """An empty body is a warning."""
        path = write_post(
            "2024-01-15-empty-body.md",
            '---\ntitle: T\ndate: "2024-01-15"\ntags: [a]\n---\n',
        )

        issues = validator.validate_file(path)
        assert any("Post body is empty" in i.message for i in issues)

    def test_placeholder_line_number(self, validator, write_post):
        """Placeholders are located by file line."""
        path = write_post(
            "2024-01-15-draft.md",
            '---\ntitle: T\ndate: "2024-01-15"\ntags: [a]\n---\n\nIntro\n\nTODO finish\n',
        )

        issues = validator.validate_file(path)
        assert len(issues) == 1
        assert issues[0].message == "Placeholder text found: TODO"
        assert issues[0].line_number == 9

    def test_byte_order_mark_warned(self, validator, posts_dir):
        path = posts_dir / "2024-01-15-valid-post.md"
        path.write_text("\ufeff" + VALID_POST, encoding="utf-8")

        issues = validator.validate_file(path)
        assert len(issues) == 1
        assert issues[0].category == "structure"
        assert issues[0].severity == "warning"

    def test_unreadable_path(self, validator, posts_dir):
        """A path that cannot be read is a structure error, not a crash."""
        path = posts_dir / "2024-01-15-folder.md"
        path.mkdir()

        issues = validator.validate_file(path)
        assert len(issues) == 1
        assert issues[0].severity == "error"
        assert issues[0].category == "structure"
        assert issues[0].message.startswith("Cannot read file:")

    def test_non_utf8_file(self, validator, posts_dir):
        path = posts_dir / "2024-01-15-latin.md"
        path.write_bytes("---\ntitle: Caf\xe9\n---\n".encode("latin-1"))

        issues = validator.validate_file(path)
        assert len(issues) == 1
        assert issues[0].category == "structure"
        assert "File encoding error" in issues[0].message

    def test_render_failure(self, validator, write_post, monkeypatch):
        """Renderer failures are errors in the render category."""
        monkeypatch.setattr(
            "almanac.validators.md.check_renders",
            lambda body, md=None: "RuntimeError: boom",
        )
        path = write_post("2024-01-15-valid-post.md", VALID_POST)

        issues = validator.validate_file(path)
        assert len(issues) == 1
        assert issues[0].category == "render"
        assert issues[0].message == "Body failed to render: RuntimeError: boom"
        assert issues[0].line_number == 7


class TestCorpusValidation:
    """Tests for validate_all, validate_links and validate_order."""

    def test_validate_all_fixture_corpus(self, sample_posts_dir):
        logger = MagicMock(spec=AlmanacLogger)
        report = MarkdownValidator(sample_posts_dir, logger).validate_all()

        assert report.files_checked == 3
        assert report.total_errors == 0
        assert report.total_warnings == 0
        assert report.files_clean == 3
        logger.log_operation.assert_called_once()

    def test_validate_all_missing_directory(self, tmp_dir):
        with pytest.raises(CorpusError):
            MarkdownValidator(tmp_dir / "missing").validate_all()

    def test_validate_all_skips_md_directories(self, write_post, posts_dir):
        write_post("2024-01-15-valid-post.md", VALID_POST)
        (posts_dir / "assets.md").mkdir()

        report = MarkdownValidator(posts_dir).validate_all()

        assert report.files_checked == 1
        assert report.is_healthy

    def test_validate_all_empty_directory(self, posts_dir):
        logger = MagicMock(spec=AlmanacLogger)
        report = MarkdownValidator(posts_dir, logger).validate_all()

        assert report.files_checked == 0
        logger.log_warning.assert_called_once()

    def test_links_valid_in_fixture_corpus(self, sample_posts_dir):
        assert MarkdownValidator(sample_posts_dir).validate_links() == []

    def test_broken_link(self, write_post, posts_dir):
        write_post(
            "2024-01-15-links.md",
            '---\ntitle: T\ndate: "2024-01-15"\ntags: [a]\n---\n\nIntro\n\n'
            "See [missing](missing.md) and [web](https://example.com).\n",
        )

        issues = MarkdownValidator(posts_dir).validate_links()
        assert len(issues) == 1
        assert issues[0].message == "Broken link: missing.md"
        assert issues[0].line_number == 9

    def test_skipped_link_targets(self, write_post, posts_dir):
        write_post(
            "2024-01-15-links.md",
            "[a](#section) [b](/about/) [c](mailto:me@example.com) "
            "[d](//cdn.example.com/x.png)\n",
        )
        assert MarkdownValidator(posts_dir).validate_links() == []

    def test_link_with_fragment_and_escapes(self, write_post, posts_dir):
        write_post("2024-01-15-my post.md", "Target\n")
        write_post(
            "2024-01-16-links.md",
            "[a](2024-01-15-my%20post.md#part) [b](2024-01-15-my%20post.md?x=1)\n",
        )
        assert MarkdownValidator(posts_dir).validate_links() == []

    def test_link_in_code_ignored(self, write_post, posts_dir):
        write_post("2024-01-15-code.md", "```\n[a](missing.md)\n```\n\n`[b](gone.md)`\n")
        assert MarkdownValidator(posts_dir).validate_links() == []

    def test_order_warnings(self, write_post, posts_dir):
        write_post("2024-01-01-a.md", '---\ntitle: A\ndate: "2024-05-01"\n---\nBody\n')
        write_post("2024-02-01-b.md", '---\ntitle: B\ndate: "2024-02-01"\n---\nBody\n')

        issues = MarkdownValidator(posts_dir).validate_order()
        assert len(issues) == 1
        assert issues[0].severity == "warning"
        assert issues[0].category == "order"
        assert issues[0].file_path.name == "2024-02-01-b.md"
        assert issues[0].message == "Dated 2024-02-01 but sorts after 2024-01-01-a.md (2024-05-01)"


class TestMarkdownValidationReport:
    """Tests for the report container and its formatting."""

    def _issue(self, name, severity, category="frontmatter"):
        return MarkdownIssue(Path(name), None, severity, category, f"{severity} here")

    def test_add_issue_counts(self):
        report = MarkdownValidationReport(files_checked=3)
        report.add_issue(self._issue("a.md", "error"))
        report.add_issue(self._issue("b.md", "warning"))
        report.add_issue(self._issue("c.md", "info"))

        assert report.total_errors == 1
        assert report.total_warnings == 1
        assert report.files_clean == 1
        assert not report.is_healthy

    def test_filter(self):
        report = MarkdownValidationReport(files_checked=2)
        report.add_issue(self._issue("a.md", "error", "render"))
        report.add_issue(self._issue("b.md", "warning", "filename"))

        filtered = report.filter({"render"})
        assert filtered.files_checked == 2
        assert filtered.total_errors == 1
        assert filtered.total_warnings == 0
        assert filtered.files_with_errors == 1

    def test_per_file_counts_follow_added_issues(self):
        report = MarkdownValidationReport(files_checked=2)
        report.add_issue(self._issue("a.md", "error", "link"))
        report.add_issue(self._issue("a.md", "error", "link"))
        report.add_issue(self._issue("b.md", "warning", "order"))

        assert report.files_with_errors == 1
        assert report.files_with_warnings == 1
        assert "❌ Files with Errors: 1" in format_markdown_report(report)

    def test_format_healthy(self):
        text = format_markdown_report(MarkdownValidationReport(files_checked=2))
        assert "MARKDOWN VALIDATION REPORT" in text
        assert "✅ ALL FILES VALID" in text
        assert "ISSUES BY FILE" not in text

    def test_format_failed(self):
        report = MarkdownValidationReport(files_checked=1)
        issue = self._issue("a.md", "error")
        issue.line_number = 4
        issue.suggestion = "Fix it"
        report.add_issue(issue)

        text = format_markdown_report(report)
        assert "❌ VALIDATION FAILED" in text
        assert "❌ a.md" in text
        assert "[frontmatter]:4 error here" in text
        assert "💡 Fix it" in text

#!/usr/bin/env python3
"""
md.py
-----
Markdown file validation for blog posts.

Validates:
- YAML front matter placement, delimiters and syntax
- Required (title, date) and recommended (tags) fields
- Field types and the YYYY-MM-DD date format
- The YYYY-MM-DD-title.md filename convention
- Body content and that it renders through markdown-it-py
- Relative links between files
- Filename order against front-matter dates

Usage:
    almanac validate all
    almanac validate frontmatter [FILE]
    almanac validate links
    almanac validate order
    almanac validate render
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple
from urllib.parse import unquote

# --- Third party imports ---
import yaml

# --- Local imports ---
from almanac.core.exceptions import CorpusError, PostParseError, ValidationError
from almanac.core.logging_manager import AlmanacLogger, safe_logger
from almanac.core.validators import DataValidator
from almanac.corpus.collection import EXCLUDED_NAMES, PostCorpus
from almanac.render.renderer import build_renderer, check_renders, extract_links
from almanac.utils.fs import date_to_filename, find_markdown_files, parse_post_filename
from almanac.utils.md import BOM, FRONTMATTER_DELIMITER, body_start_line, split_frontmatter

SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")


@dataclass
class MarkdownIssue:
    """Represents a validation issue in a markdown file."""

    file_path: Path
    line_number: Optional[int]
    severity: str  # error, warning, info
    category: str  # frontmatter, filename, content, render, link, order, structure
    message: str
    suggestion: Optional[str] = None


@dataclass
class MarkdownValidationReport:
    """Complete markdown validation report."""

    files_checked: int = 0
    total_errors: int = 0
    total_warnings: int = 0
    issues: List[MarkdownIssue] = field(default_factory=list)

    def add_issue(self, issue: MarkdownIssue) -> None:
        """Add an issue to the report."""
        self.issues.append(issue)
        if issue.severity == "error":
            self.total_errors += 1
        elif issue.severity == "warning":
            self.total_warnings += 1

    def filter(self, categories: Set[str]) -> MarkdownValidationReport:
        """New report restricted to issues in ``categories``."""
        filtered = MarkdownValidationReport(files_checked=self.files_checked)
        for issue in self.issues:
            if issue.category in categories:
                filtered.add_issue(issue)
        return filtered

    def _files_with(self, severity: str) -> int:
        return len({i.file_path for i in self.issues if i.severity == severity})

    @property
    def files_with_errors(self) -> int:
        """Distinct files with at least one error."""
        return self._files_with("error")

    @property
    def files_with_warnings(self) -> int:
        """Distinct files with at least one warning."""
        return self._files_with("warning")

    @property
    def files_clean(self) -> int:
        """Files with no errors and no warnings."""
        flagged = {
            i.file_path for i in self.issues if i.severity in ("error", "warning")
        }
        return max(self.files_checked - len(flagged), 0)

    @property
    def has_errors(self) -> bool:
        """Check if any errors were found."""
        return self.total_errors > 0

    @property
    def has_warnings(self) -> bool:
        """Check if any warnings were found."""
        return self.total_warnings > 0

    @property
    def is_healthy(self) -> bool:
        """Check if all files are healthy (no errors)."""
        return not self.has_errors


class MarkdownValidator:
    """Validates blog post files."""

    REQUIRED_FIELDS = ["title", "date"]

    # Missing recommended fields are warnings
    RECOMMENDED_FIELDS = ["tags"]

    FIELD_TYPES: Dict[str, type] = {
        "title": str,
        "excerpt": str,
        "tags": list,
    }

    PLACEHOLDERS = ["TODO", "FIXME", "XXX", "PLACEHOLDER"]

    def __init__(
        self,
        posts_dir: Path,
        logger: Optional[AlmanacLogger] = None,
    ):
        """
        Initialize markdown validator.

        Args:
            posts_dir: Directory containing the posts
            logger: Optional logger instance
        """
        self.posts_dir = Path(posts_dir)
        self.logger = safe_logger(logger)
        self.report = MarkdownValidationReport()
        self._md = build_renderer()

    # ----- Discovery -----
    def post_files(self) -> List[Path]:
        """
        Markdown files to validate.

        Raises:
            CorpusError: If the posts directory does not exist
        """
        if not self.posts_dir.is_dir():
            raise CorpusError(f"Posts directory not found: {self.posts_dir}")
        return [
            f for f in find_markdown_files(self.posts_dir)
            if f.name not in EXCLUDED_NAMES
        ]

    # ----- Per-file validation -----
    def validate_file(self, file_path: Path) -> List[MarkdownIssue]:
        """
        Validate a single markdown file.

        Args:
            file_path: Path to markdown file

        Returns:
            List of issues found in the file
        """
        file_path = Path(file_path)
        issues = self._check_file(file_path)

        self.report.files_checked += 1
        for issue in issues:
            self.report.add_issue(issue)

        self.logger.log_debug(
            "Validated post",
            {"file": str(file_path), "issues": len(issues)},
        )
        return issues

    def _check_file(self, file_path: Path) -> List[MarkdownIssue]:
        issues: List[MarkdownIssue] = []

        try:
            content = file_path.read_bytes().decode("utf-8")
        except UnicodeDecodeError as e:
            return [
                MarkdownIssue(
                    file_path=file_path,
                    line_number=None,
                    severity="error",
                    category="structure",
                    message=f"File encoding error: {e}",
                    suggestion="Ensure file is UTF-8 encoded",
                )
            ]
        except OSError as e:
            return [
                MarkdownIssue(
                    file_path=file_path,
                    line_number=None,
                    severity="error",
                    category="structure",
                    message=f"Cannot read file: {e}",
                    suggestion="Check that the path is a readable regular file",
                )
            ]

        if content.startswith(BOM):
            issues.append(
                MarkdownIssue(
                    file_path=file_path,
                    line_number=1,
                    severity="warning",
                    category="structure",
                    message="File starts with a UTF-8 byte order mark",
                    suggestion="Save the file as UTF-8 without BOM",
                )
            )

        try:
            frontmatter_text, body_lines = split_frontmatter(content)
        except PostParseError as e:
            issues.append(
                MarkdownIssue(
                    file_path=file_path,
                    line_number=e.line_number,
                    severity="error",
                    category="frontmatter",
                    message=f"Failed to parse front matter: {e}",
                    suggestion="Close the front matter block with a '---' line",
                )
            )
            return issues

        body = "\n".join(body_lines)
        frontmatter: Optional[Dict[str, Any]] = None

        if frontmatter_text is None:
            issues.extend(self._check_missing_frontmatter(file_path, content))
        else:
            frontmatter_issues, frontmatter = self._validate_frontmatter(
                file_path, frontmatter_text
            )
            issues.extend(frontmatter_issues)

        issues.extend(self._validate_filename(file_path, frontmatter))

        start = body_start_line(content)
        issues.extend(self._validate_body(file_path, body, start))
        issues.extend(self._validate_render(file_path, body, start))

        return issues

    def _check_missing_frontmatter(
        self, file_path: Path, content: str
    ) -> List[MarkdownIssue]:
        """Front matter is optional, but must start on line 1 when present."""
        lines = content.lstrip(BOM).splitlines()
        for i, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            if line.strip() == FRONTMATTER_DELIMITER and i > 1:
                return [
                    MarkdownIssue(
                        file_path=file_path,
                        line_number=i,
                        severity="error",
                        category="frontmatter",
                        message="Front matter must start on the first line of the file",
                        suggestion="Remove the blank lines before the opening '---'",
                    )
                ]
            break

        return [
            MarkdownIssue(
                file_path=file_path,
                line_number=None,
                severity="info",
                category="frontmatter",
                message="No front matter",
                suggestion="Add a '---' block with title, date and tags",
            )
        ]

    def _find_field_line_number(self, frontmatter_text: str, field_name: str) -> int:
        """
        Find the line number where a field appears in the front matter.

        Returns:
            Line number (1-indexed) in the original file, accounting for the
            opening "---" delimiter; 1 when the field is not found
        """
        lines = frontmatter_text.split('\n')
        for i, line in enumerate(lines, start=1):
            if re.match(rf'^{re.escape(field_name)}\s*:', line):
                return i + 1
        return 1

    def _validate_frontmatter(
        self, file_path: Path, frontmatter_text: str
    ) -> Tuple[List[MarkdownIssue], Optional[Dict[str, Any]]]:
        """Validate YAML front matter structure and content."""
        issues: List[MarkdownIssue] = []

        try:
            frontmatter = yaml.safe_load(frontmatter_text)
        except yaml.YAMLError as e:
            problem_mark = getattr(e, 'problem_mark', None)
            line_num = problem_mark.line + 2 if problem_mark else None
            issues.append(
                MarkdownIssue(
                    file_path=file_path,
                    line_number=line_num,
                    severity="error",
                    category="frontmatter",
                    message=f"Invalid YAML syntax: {e}",
                    suggestion="Check YAML formatting (indentation, colons, quotes)",
                )
            )
            return issues, None

        if frontmatter is None:
            frontmatter = {}

        if not isinstance(frontmatter, dict):
            issues.append(
                MarkdownIssue(
                    file_path=file_path,
                    line_number=2,
                    severity="error",
                    category="frontmatter",
                    message="Front matter must be a mapping of keys to values",
                )
            )
            return issues, None

        for field_name in self.REQUIRED_FIELDS:
            try:
                DataValidator.validate_required_fields(frontmatter, [field_name])
            except ValidationError as e:
                present = field_name in frontmatter
                issues.append(
                    MarkdownIssue(
                        file_path=file_path,
                        line_number=(
                            self._find_field_line_number(frontmatter_text, field_name)
                            if present else 1
                        ),
                        severity="error",
                        category="frontmatter",
                        message=str(e),
                        suggestion=(
                            None if present
                            else f"Add '{field_name}: <value>' to front matter"
                        ),
                    )
                )

        for field_name in self.RECOMMENDED_FIELDS:
            if field_name not in frontmatter:
                issues.append(
                    MarkdownIssue(
                        file_path=file_path,
                        line_number=1,
                        severity="warning",
                        category="frontmatter",
                        message=f"Recommended field '{field_name}' missing",
                        suggestion=f"Add '{field_name}: [...]' to front matter",
                    )
                )

        date_value = frontmatter.get("date")
        if (
            DataValidator.normalize_string(date_value) is not None
            and not DataValidator.normalize_date(date_value)
        ):
            issues.append(
                MarkdownIssue(
                    file_path=file_path,
                    line_number=self._find_field_line_number(frontmatter_text, "date"),
                    severity="error",
                    category="frontmatter",
                    message=f"Invalid date format: '{date_value}'",
                    suggestion="Use YYYY-MM-DD format (e.g., \"2024-01-15\")",
                )
            )

        for field_key, expected_type in self.FIELD_TYPES.items():
            value = frontmatter.get(field_key)
            if value is None or value == "":
                continue
            if not isinstance(value, expected_type):
                issues.append(
                    MarkdownIssue(
                        file_path=file_path,
                        line_number=self._find_field_line_number(frontmatter_text, field_key),
                        severity="error",
                        category="frontmatter",
                        message=f"Field '{field_key}' has unexpected type: {type(value).__name__}",
                        suggestion=f"Expected: {expected_type.__name__}",
                    )
                )

        tags = frontmatter.get("tags")
        if isinstance(tags, list):
            issues.extend(
                self._validate_tags(
                    file_path, tags, self._find_field_line_number(frontmatter_text, "tags")
                )
            )

        known_fields = set(self.REQUIRED_FIELDS) | set(self.RECOMMENDED_FIELDS) | set(self.FIELD_TYPES)
        unknown_fields = sorted(str(k) for k in frontmatter if k not in known_fields)
        if unknown_fields:
            issues.append(
                MarkdownIssue(
                    file_path=file_path,
                    line_number=1,
                    severity="warning",
                    category="frontmatter",
                    message=f"Unknown fields: {', '.join(unknown_fields)}",
                    suggestion="These fields may be ignored by the publishing platform",
                )
            )

        return issues, frontmatter

    def _validate_tags(
        self, file_path: Path, tags: List[Any], line_num: int
    ) -> List[MarkdownIssue]:
        """Every tag must be a non-empty string; duplicates are warned."""
        issues: List[MarkdownIssue] = []
        seen: Set[str] = set()

        for idx, tag in enumerate(tags, start=1):
            if not isinstance(tag, str) or not tag.strip():
                issues.append(
                    MarkdownIssue(
                        file_path=file_path,
                        line_number=line_num,
                        severity="error",
                        category="frontmatter",
                        message=f"Tag {idx} must be a non-empty string, got {tag!r}",
                        suggestion="Quote numeric or empty tags, e.g. tags: [\"2024\"]",
                    )
                )
                continue
            key = tag.strip().lower()
            if key in seen:
                issues.append(
                    MarkdownIssue(
                        file_path=file_path,
                        line_number=line_num,
                        severity="warning",
                        category="frontmatter",
                        message=f"Duplicate tag: '{tag}'",
                        suggestion="Remove the repeated tag",
                    )
                )
            seen.add(key)

        return issues

    def _validate_filename(
        self, file_path: Path, frontmatter: Optional[Dict[str, Any]]
    ) -> List[MarkdownIssue]:
        """Check the YYYY-MM-DD-title.md convention and date agreement."""
        frontmatter = frontmatter or {}
        fm_date = DataValidator.normalize_date(frontmatter.get("date"))

        try:
            filename_date, _ = parse_post_filename(file_path)
        except ValueError as e:
            suggestion = "Rename to YYYY-MM-DD-title.md"
            title = frontmatter.get("title")
            if fm_date and isinstance(title, str) and title.strip():
                suggestion = f"Rename to {date_to_filename(fm_date, title)}"
            return [
                MarkdownIssue(
                    file_path=file_path,
                    line_number=None,
                    severity="warning",
                    category="filename",
                    message=str(e),
                    suggestion=suggestion,
                )
            ]

        if fm_date and filename_date != fm_date:
            return [
                MarkdownIssue(
                    file_path=file_path,
                    line_number=None,
                    severity="warning",
                    category="filename",
                    message=(
                        f"Filename date {filename_date.isoformat()} does not match "
                        f"front matter date {fm_date.isoformat()}"
                    ),
                    suggestion="Align the filename prefix with the 'date' field",
                )
            ]

        return []

    def _validate_body(
        self, file_path: Path, body: str, body_start: int
    ) -> List[MarkdownIssue]:
        """Validate markdown body content."""
        issues: List[MarkdownIssue] = []

        if not body.strip():
            issues.append(
                MarkdownIssue(
                    file_path=file_path,
                    line_number=body_start,
                    severity="warning",
                    category="content",
                    message="Post body is empty",
                    suggestion="Add content after the front matter",
                )
            )
            return issues

        for placeholder in self.PLACEHOLDERS:
            match = re.search(rf"\b{placeholder}\b", body)
            if match:
                line_no = body[:match.start()].count('\n') + body_start
                issues.append(
                    MarkdownIssue(
                        file_path=file_path,
                        line_number=line_no,
                        severity="warning",
                        category="content",
                        message=f"Placeholder text found: {placeholder}",
                        suggestion="Replace placeholder with actual content",
                    )
                )

        return issues

    def _validate_render(
        self, file_path: Path, body: str, body_start: int
    ) -> List[MarkdownIssue]:
        """The body must render through markdown-it-py without raising."""
        problem = check_renders(body, self._md)
        if problem is None:
            return []
        return [
            MarkdownIssue(
                file_path=file_path,
                line_number=body_start,
                severity="error",
                category="render",
                message=f"Body failed to render: {problem}",
                suggestion="Check the Markdown syntax of the body",
            )
        ]

    # ----- Corpus validation -----
    def validate_all(self) -> MarkdownValidationReport:
        """
        Validate all markdown files in the directory.

        Returns:
            Complete validation report
        """
        md_files = self.post_files()

        if not md_files:
            self.logger.log_warning(f"No markdown files found in {self.posts_dir}")

        for md_file in md_files:
            self.validate_file(md_file)

        self.logger.log_operation(
            "validate_all",
            {
                "posts_dir": str(self.posts_dir),
                "files": self.report.files_checked,
                "errors": self.report.total_errors,
                "warnings": self.report.total_warnings,
            },
        )
        return self.report

    def validate_links(self) -> List[MarkdownIssue]:
        """
        Validate relative links and images between files.

        External links (any URL scheme), protocol-relative and site-absolute
        paths, and pure anchors are skipped.

        Returns:
            List of broken link issues
        """
        issues: List[MarkdownIssue] = []

        for md_file in self.post_files():
            try:
                content = md_file.read_text(encoding="utf-8")
                _, body_lines = split_frontmatter(content)
            except (OSError, UnicodeDecodeError, PostParseError) as e:
                # reported by validate_file
                self.logger.log_debug(
                    "Skipping links of unreadable post",
                    {"file": str(md_file), "error": str(e)},
                )
                continue

            body_start = body_start_line(content)
            for target, line in extract_links("\n".join(body_lines), self._md):
                if SCHEME_RE.match(target) or target.startswith(("/", "#")):
                    continue

                link_path = unquote(target.split("#", 1)[0].split("?", 1)[0])
                if not link_path:
                    continue

                line_no = body_start + line - 1
                try:
                    target_path = (md_file.parent / link_path).resolve()
                except (ValueError, OSError) as e:
                    issues.append(
                        MarkdownIssue(
                            file_path=md_file,
                            line_number=line_no,
                            severity="error",
                            category="link",
                            message=f"Invalid link path: {target}",
                            suggestion=str(e),
                        )
                    )
                    continue

                if not target_path.exists():
                    issues.append(
                        MarkdownIssue(
                            file_path=md_file,
                            line_number=line_no,
                            severity="error",
                            category="link",
                            message=f"Broken link: {target}",
                            suggestion=f"Target file not found: {target_path}",
                        )
                    )

        self.logger.log_operation(
            "validate_links", {"posts_dir": str(self.posts_dir), "broken": len(issues)}
        )
        return issues

    def validate_order(self) -> List[MarkdownIssue]:
        """
        Check that filename order agrees with front-matter dates.

        Returns:
            One warning per post whose date precedes the post sorted before it
        """
        corpus = PostCorpus(self.posts_dir)
        issues: List[MarkdownIssue] = []

        for previous, post in corpus.ordering_issues():
            issues.append(
                MarkdownIssue(
                    file_path=post.path,
                    line_number=None,
                    severity="warning",
                    category="order",
                    message=(
                        f"Dated {post.date.isoformat()} but sorts after "
                        f"{previous.path.name} ({previous.date.isoformat()})"
                    ),
                    suggestion="Rename the file so its date prefix matches the 'date' field",
                )
            )

        self.logger.log_operation(
            "validate_order", {"posts_dir": str(self.posts_dir), "out_of_order": len(issues)}
        )
        return issues


def format_markdown_report(report: MarkdownValidationReport) -> str:
    """
    Format markdown validation report as readable text.

    Args:
        report: Validation report to format

    Returns:
        Formatted report string
    """
    lines = []
    lines.append("\n" + "=" * 60)
    lines.append("MARKDOWN VALIDATION REPORT")
    lines.append("=" * 60)
    lines.append("")

    lines.append(f"Files Checked: {report.files_checked}")
    lines.append(f"✅ Clean Files: {report.files_clean}")
    lines.append(f"⚠️  Files with Warnings: {report.files_with_warnings}")
    lines.append(f"❌ Files with Errors: {report.files_with_errors}")
    lines.append("")
    lines.append(f"Total Warnings: {report.total_warnings}")
    lines.append(f"Total Errors: {report.total_errors}")
    lines.append("")

    if report.is_healthy:
        lines.append("✅ ALL FILES VALID")
    else:
        lines.append("❌ VALIDATION FAILED")
    lines.append("")

    if report.issues:
        issues_by_file: Dict[Path, List[MarkdownIssue]] = {}
        for issue in report.issues:
            issues_by_file.setdefault(issue.file_path, []).append(issue)

        lines.append("ISSUES BY FILE:")
        lines.append("")

        for file_path in sorted(issues_by_file.keys()):
            file_issues = issues_by_file[file_path]
            severities = {i.severity for i in file_issues}

            if "error" in severities:
                icon = "❌"
            elif "warning" in severities:
                icon = "⚠️"
            else:
                icon = "ℹ️"
            lines.append(f"{icon} {file_path.name}")

            for issue in file_issues:
                severity_icon = {"error": "❌", "warning": "⚠️"}.get(issue.severity, "ℹ️")
                line_info = f":{issue.line_number}" if issue.line_number else ""
                lines.append(f"   {severity_icon} [{issue.category}]{line_info} {issue.message}")
                if issue.suggestion:
                    lines.append(f"      💡 {issue.suggestion}")

            lines.append("")

    lines.append("=" * 60)

    return "\n".join(lines)

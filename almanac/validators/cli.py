"""
Markdown Validation Commands
-----------------------------

Commands for validating the blog posts.

Commands:
    - frontmatter: Validate YAML front matter (one file or the corpus)
    - links: Check for broken relative links
    - order: Check filename order against front-matter dates
    - render: Check that every body renders through markdown-it-py
    - all: Run every check

Each command expects ``ctx.obj`` to carry ``posts_dir`` and ``logger``, as
set up by the ``almanac`` group.
"""
from pathlib import Path
from typing import List, Optional

import click

from almanac.core.cli import ValidationStats
from almanac.core.exceptions import CorpusError
from almanac.core.logging_manager import handle_cli_error
from almanac.validators.md import (
    MarkdownIssue,
    MarkdownValidator,
    format_markdown_report,
)

FRONTMATTER_CATEGORIES = {"frontmatter", "structure"}


def _echo_issues(issues: List[MarkdownIssue]) -> None:
    for issue in issues:
        icon = {"error": "❌", "warning": "⚠️"}.get(issue.severity, "ℹ️")
        location = issue.file_path.name
        if issue.line_number:
            location += f":{issue.line_number}"
        click.echo(f"{icon} {location}")
        click.echo(f"   {issue.message}")
        if issue.suggestion:
            click.echo(f"   💡 {issue.suggestion}")
        click.echo()


def _validator(ctx: click.Context) -> MarkdownValidator:
    return MarkdownValidator(ctx.obj["posts_dir"], ctx.obj.get("logger"))


@click.group()
def validate() -> None:
    """
    Validate the blog posts.

    Check front matter, filenames, links, ordering and that bodies render.
    """
    pass


@validate.command()
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False), required=False)
@click.pass_context
def frontmatter(ctx: click.Context, file_path: Optional[str]) -> None:
    """
    Validate YAML front matter in markdown files.

    Checks for:
    - Front matter at the very start of the file, closed by '---'
    - Valid YAML syntax that parses to a mapping
    - Required fields (title, date) and recommended tags
    - Field types and the YYYY-MM-DD date format
    - Unknown fields
    """
    posts_dir = ctx.obj["posts_dir"]
    validator = _validator(ctx)

    if file_path:
        click.echo(f"🔍 Validating front matter in {file_path}\n")
        issues = [
            i for i in validator.validate_file(Path(file_path))
            if i.category in FRONTMATTER_CATEGORIES
        ]
        if issues:
            _echo_issues(issues)
        else:
            click.echo("✅ No front matter issues found")
        if any(i.severity == "error" for i in issues):
            raise click.ClickException("Front matter errors found")
        return

    click.echo(f"🔍 Validating front matter in {posts_dir}\n")
    try:
        report = validator.validate_all().filter(FRONTMATTER_CATEGORIES)
    except CorpusError as e:
        handle_cli_error(ctx, e, "validate_frontmatter")
        return

    click.echo(format_markdown_report(report))

    if report.has_errors:
        raise click.ClickException(f"Found {report.total_errors} front matter error(s)")


@validate.command()
@click.pass_context
def links(ctx: click.Context) -> None:
    """
    Check for broken relative markdown links.

    External links (http://, https://, mailto:) and anchors are skipped.
    """
    posts_dir = ctx.obj["posts_dir"]
    click.echo(f"🔍 Checking markdown links in {posts_dir}\n")

    try:
        issues = _validator(ctx).validate_links()
    except CorpusError as e:
        handle_cli_error(ctx, e, "validate_links")
        return

    if issues:
        _echo_issues(issues)
        raise click.ClickException(f"Found {len(issues)} broken link(s)")
    click.echo("✅ All markdown links are valid")


@validate.command()
@click.pass_context
def order(ctx: click.Context) -> None:
    """
    Check that filename order matches front-matter dates.

    Out-of-order posts are reported as warnings; the exit status stays 0.
    """
    posts_dir = ctx.obj["posts_dir"]
    click.echo(f"🔍 Checking post order in {posts_dir}\n")

    try:
        issues = _validator(ctx).validate_order()
    except CorpusError as e:
        handle_cli_error(ctx, e, "validate_order")
        return

    if issues:
        _echo_issues(issues)
        click.echo(f"⚠️  {len(issues)} post(s) out of chronological order")
    else:
        click.echo("✅ Filename order matches post dates")


@validate.command()
@click.pass_context
def render(ctx: click.Context) -> None:
    """Check that every post body renders without errors."""
    posts_dir = ctx.obj["posts_dir"]
    click.echo(f"🔍 Rendering post bodies in {posts_dir}\n")

    try:
        report = _validator(ctx).validate_all().filter({"render"})
    except CorpusError as e:
        handle_cli_error(ctx, e, "validate_render")
        return

    if report.issues:
        _echo_issues(report.issues)
        raise click.ClickException(f"{report.total_errors} post(s) failed to render")
    click.echo(f"✅ All {report.files_checked} post bodies render")


@validate.command(name="all")
@click.pass_context
def all_checks(ctx: click.Context) -> None:
    """
    Run all markdown validation checks.

    Front matter, filenames, content, rendering, links and ordering in a
    single report.
    """
    posts_dir = ctx.obj["posts_dir"]
    logger = ctx.obj.get("logger")
    click.echo(f"🔍 Running comprehensive validation on {posts_dir}\n")

    stats = ValidationStats()
    validator = _validator(ctx)
    try:
        report = validator.validate_all()
        for issue in validator.validate_links() + validator.validate_order():
            report.add_issue(issue)
    except CorpusError as e:
        handle_cli_error(ctx, e, "validate_all")
        return

    stats.files_processed = report.files_checked
    stats.files_clean = report.files_clean
    stats.errors = report.total_errors
    stats.warnings = report.total_warnings

    click.echo(format_markdown_report(report))
    click.echo(stats.summary())
    if logger:
        logger.log_operation("validate_all_cli", stats.to_dict())

    if not report.is_healthy:
        raise click.ClickException(
            f"Markdown validation failed with {report.total_errors} error(s)"
        )

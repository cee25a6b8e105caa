#!/usr/bin/env python3
"""
cli.py
------
Command line entry point for the almanac toolkit.

Commands:
    list      List posts in display order (optionally by tag, or as JSON)
    tags      Show how many posts carry each tag
    show      Show the metadata and summary of one post
    validate  Validation checks (see almanac.validators.cli)

Usage:
    almanac list --tag python
    almanac --posts-dir path/to/_posts validate all
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
from typing import Optional

# --- Third party imports ---
import click

# --- Local imports ---
from almanac.core.cli_decorators import almanac_cli_group
from almanac.core.exceptions import CorpusError
from almanac.core.logging_manager import handle_cli_error
from almanac.corpus.collection import PostCorpus
from almanac.validators.cli import validate


@almanac_cli_group("almanac")
def cli(ctx: click.Context) -> None:
    """
    almanac - Blog post corpus toolkit.

    Load, query and validate Markdown posts with YAML front matter.
    """
    pass


def _load_corpus(ctx: click.Context, operation: str) -> PostCorpus:
    corpus = PostCorpus(ctx.obj["posts_dir"], ctx.obj.get("logger"))
    try:
        corpus.load()
    except CorpusError as e:
        handle_cli_error(ctx, e, operation)
    for path, error in corpus.failures:
        click.echo(f"⚠️  Skipped {path.name}: {error}", err=True)
    return corpus


@cli.command(name="list")
@click.option("--tag", default=None, help="Only posts carrying this tag")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_posts(ctx: click.Context, tag: Optional[str], as_json: bool) -> None:
    """List posts in display order."""
    corpus = _load_corpus(ctx, "list_posts")
    posts = corpus.by_tag(tag) if tag else corpus.posts

    if as_json:
        click.echo(json.dumps([post.to_dict() for post in posts], indent=2, ensure_ascii=False))
        return

    if not posts:
        click.echo("No posts found")
        return

    for post in posts:
        post_date = post.date.isoformat() if post.date else "----------"
        title = post.title or "(untitled)"
        tags = f"  [{', '.join(post.tags)}]" if post.tags else ""
        click.echo(f"{post_date}  {title}{tags}")

    click.echo(f"\n{len(posts)} post(s)")


@cli.command()
@click.pass_context
def tags(ctx: click.Context) -> None:
    """Show tag usage across the corpus, most common first."""
    corpus = _load_corpus(ctx, "list_tags")
    counts = corpus.tag_counts()

    if not counts:
        click.echo("No tags found")
        return

    width = max(len(tag) for tag in counts)
    for tag, count in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])):
        click.echo(f"{tag.ljust(width)}  {count}")


@cli.command()
@click.argument("slug")
@click.pass_context
def show(ctx: click.Context, slug: str) -> None:
    """Show the metadata and summary of the post SLUG."""
    corpus = _load_corpus(ctx, "show_post")
    post = corpus.find(slug)
    if post is None:
        raise click.ClickException(f"No post with slug '{slug}'")

    click.echo(f"Title:    {post.title or '(untitled)'}")
    click.echo(f"Date:     {post.date.isoformat() if post.date else '(none)'}")
    click.echo(f"Tags:     {', '.join(post.tags) if post.tags else '(none)'}")
    click.echo(f"File:     {post.path}")
    click.echo(f"Words:    {post.word_count} (~{post.reading_time} min read)")
    if post.summary:
        click.echo(f"\n{post.summary}")


cli.add_command(validate)


if __name__ == "__main__":
    cli()

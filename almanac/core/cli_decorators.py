#!/usr/bin/env python3
"""
cli_decorators.py
-------------------
Custom Click decorators for almanac CLIs.

Usage:
    from almanac.core.cli_decorators import almanac_cli_group

    @almanac_cli_group("almanac")
    def cli(ctx):
        '''almanac - Blog corpus toolkit'''
        pass  # Setup handled automatically
"""
from functools import wraps
from pathlib import Path
from typing import Callable
import click

from almanac.core.cli import setup_logger
from almanac.core.paths import LOG_DIR, POSTS_DIR


def almanac_cli_group(component_name: str) -> Callable:
    """
    Decorator factory for creating consistent CLI groups.

    Automatically adds:
    - Click group() decorator
    - --posts-dir option
    - --log-dir option
    - --verbose option
    - Context object setup with logger

    Args:
        component_name: Component identifier for logging

    Provides context with:
        ctx.obj["posts_dir"]: Path - Corpus directory
        ctx.obj["log_dir"]: Path - Log directory
        ctx.obj["verbose"]: bool - Verbose flag
        ctx.obj["logger"]: AlmanacLogger - Configured logger instance
    """
    def decorator(f: Callable) -> Callable:
        @click.group()
        @click.option(
            "--posts-dir",
            type=click.Path(file_okay=False),
            default=str(POSTS_DIR),
            show_default=True,
            help="Directory holding the blog posts"
        )
        @click.option(
            "--log-dir",
            type=click.Path(file_okay=False),
            default=str(LOG_DIR),
            help="Directory for log files"
        )
        @click.option(
            "-v", "--verbose",
            is_flag=True,
            help="Enable verbose logging"
        )
        @click.pass_context
        @wraps(f)
        def wrapper(ctx: click.Context, posts_dir: str, log_dir: str, verbose: bool):
            ctx.ensure_object(dict)
            ctx.obj["posts_dir"] = Path(posts_dir)
            ctx.obj["log_dir"] = Path(log_dir)
            ctx.obj["verbose"] = verbose
            ctx.obj["logger"] = setup_logger(Path(log_dir), component_name)

            return f(ctx)

        return wrapper
    return decorator

"""
render package
--------------
markdown-it-py render checks and link extraction for post bodies.
"""
from almanac.render.renderer import (
    build_renderer,
    check_renders,
    extract_links,
    render_body,
)

__all__ = ["build_renderer", "check_renders", "extract_links", "render_body"]

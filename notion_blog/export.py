"""
Static site export for Notion Blog.

Renders every route through the Flask test client and writes the responses
to disk, so the blog can be served by any static host:

    <output>/index.html
    <output>/blog/<slug>/index.html
    <output>/blog/<slug>/index.md
    <output>/api/posts.json
    <output>/static/...

One ContentService is shared by the whole build, so Notion is read once.
"""

import logging
import shutil
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from flask import Flask

from notion_blog.content import ContentService

logger = logging.getLogger(__name__)


@dataclass
class ExportResult:
    """
    Result of a static export.

    Attributes:
        output_dir: Where files were written.
        files_written: Relative paths of written files.
        posts_exported: Number of post pages rendered.
        errors: Content fetch errors and failed routes.
    """
    output_dir: Path
    files_written: List[str] = field(default_factory=list)
    posts_exported: int = 0
    errors: List[str] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def success(self) -> bool:
        return not self.errors

    def to_summary(self) -> str:
        lines = [
            "=" * 60,
            "STATIC EXPORT SUMMARY",
            "=" * 60,
            f"Output:   {self.output_dir}",
            f"Posts:    {self.posts_exported}",
            f"Files:    {len(self.files_written)}",
            f"Duration: {self.duration_seconds:.2f}s",
        ]
        if self.errors:
            lines.append("")
            lines.append("Errors:")
            for error in self.errors[:10]:
                lines.append(f"  ✗ {error}")
        lines.append("=" * 60)
        return "\n".join(lines)


def is_exportable_slug(slug: str) -> bool:
    """True when the slug can name a single directory under blog/."""
    return bool(slug) and slug not in (".", "..") and "/" not in slug and "\\" not in slug


def _write(output_dir: Path, relative: str, data: bytes, result: ExportResult) -> None:
    path = output_dir / relative
    if not path.resolve().is_relative_to(output_dir.resolve()):
        raise ValueError(f"Refusing to write outside {output_dir}: {relative}")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    result.files_written.append(relative)
    logger.debug(f"Wrote {relative} ({len(data)} bytes)")


def build_site(
    app: Flask,
    output_dir: Path,
    content: Optional[ContentService] = None,
    clean: bool = True,
) -> ExportResult:
    """
    Export the whole site as static files.

    Args:
        app: The Flask application to render.
        output_dir: Destination directory.
        content: Content service shared by all pages. Defaults to a new one.
        clean: Remove output_dir before writing.

    Returns:
        ExportResult listing written files and any errors.
    """
    started = time.monotonic()
    output_dir = Path(output_dir)
    content = content if content is not None else ContentService()
    result = ExportResult(output_dir=output_dir)

    if clean and output_dir.exists():
        shutil.rmtree(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    posts = content.get_all_content()
    result.errors.extend(posts.errors)

    routes = [("/", "index.html"), ("/api/posts", "api/posts.json")]
    for post in posts.items:
        if not is_exportable_slug(post.slug):
            logger.warning(f"Skipping '{post.title}': slug {post.slug!r} is not a valid path")
            result.errors.append(f"Skipped '{post.title}' ({post.id}): unusable slug {post.slug!r}")
            continue
        routes.append((f"/blog/{post.slug}", f"blog/{post.slug}/index.html"))
        routes.append((f"/blog/{post.slug}/markdown", f"blog/{post.slug}/index.md"))

    previous = app.config.get("CONTENT_SERVICE")
    app.config["CONTENT_SERVICE"] = content
    try:
        with app.test_client() as client:
            seen = set()
            for route, relative in routes:
                # Duplicate slugs resolve to the first post, export it once
                if relative in seen:
                    continue
                seen.add(relative)

                response = client.get(route)
                if response.status_code != 200:
                    result.errors.append(f"{route} returned {response.status_code}")
                    continue
                _write(output_dir, relative, response.get_data(), result)
                if relative.endswith("index.html") and relative.startswith("blog/"):
                    result.posts_exported += 1
    finally:
        app.config["CONTENT_SERVICE"] = previous

    if app.static_folder and Path(app.static_folder).exists():
        shutil.copytree(app.static_folder, output_dir / "static", dirs_exist_ok=True)
        result.files_written.append("static/")

    result.duration_seconds = time.monotonic() - started
    logger.info(f"Exported {result.posts_exported} posts to {output_dir}")
    return result

"""
Notion Blog - Web Front-end

A Flask app that renders blog posts sourced from Notion.

Run with: python -m web.app
Or: python main.py serve
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from flask import Flask, Response, current_app, g, jsonify, render_template, request

from notion_blog.content import ContentService
from notion_blog.profile import load_profile
from notion_blog.render import blocks_to_markdown, render_blocks
from notion_blog.search import BlogSearch

app = Flask(__name__)


def get_content() -> ContentService:
    """
    Content service for the current request.

    A service placed in app.config["CONTENT_SERVICE"] is shared by every
    request (static export does this); otherwise each request gets its own,
    so memoized fetches never outlive a response.
    """
    shared = current_app.config.get("CONTENT_SERVICE")
    if shared is not None:
        return shared
    if "content" not in g:
        g.content = ContentService()
    return g.content


@app.context_processor
def inject_profile():
    return {"profile": load_profile()}


# =============================================================================
# Pages
# =============================================================================

@app.route("/")
def index():
    """Listing page: hero, search box and post cards."""
    result = get_content().get_all_content()

    search = BlogSearch(result.items)
    term = request.args.get("q", "")
    if term:
        search.set_term(term)

    return render_template(
        "index.html",
        posts=search.filtered,
        all_posts=result.items,
        shown_ids={post.id for post in search.filtered},
        search=search,
        available=result.available,
    )


@app.route("/blog/<slug>")
def post_detail(slug):
    """Single post page."""
    content = get_content()
    post = content.get_post_by_slug(slug)

    if not post:
        return render_template("not_found.html", slug=slug), 404

    blocks = content.get_page_content_with_children(post.id)
    # Same memoized listing the slug lookup read
    listing = content.get_all_content()

    return render_template(
        "post.html",
        post=post,
        body=render_blocks(blocks.items),
        has_blocks=bool(blocks.items),
        available=listing.available and blocks.available,
    )


@app.route("/blog/<slug>/markdown")
def post_markdown(slug):
    """The post's top-level blocks as Markdown."""
    content = get_content()
    post = content.get_post_by_slug(slug)

    if not post:
        return Response("Post Not Found\n", status=404, mimetype="text/plain")

    blocks = content.get_page_content(post.id)
    markdown = f"# {post.title}\n\n{blocks_to_markdown(blocks.items)}\n"
    return Response(markdown, mimetype="text/markdown")


# =============================================================================
# JSON API
# =============================================================================

@app.route("/api/posts")
def api_posts():
    """All posts, newest first."""
    result = get_content().get_all_content()
    return jsonify({
        "available": result.available,
        "count": len(result.items),
        "posts": [post.to_dict() for post in result.items],
        "errors": result.errors[:5],
    })


@app.route("/api/posts/<slug>")
def api_post(slug):
    """One post by slug."""
    post = get_content().get_post_by_slug(slug)
    if not post:
        return jsonify({"error": f"Post not found: {slug}"}), 404
    return jsonify(post.to_dict())


@app.route("/api/search")
def api_search():
    """Search posts by title, description or tag."""
    query = request.args.get("q", "")
    result = get_content().get_all_content()

    search = BlogSearch(result.items)
    state = search.set_term(query)

    return jsonify({
        "available": result.available,
        "query": query,
        "state": state,
        "count": len(search.filtered),
        "results": [post.to_dict() for post in search.filtered],
    })


@app.errorhandler(404)
def page_not_found(error):
    return render_template("not_found.html", slug=None), 404


# =============================================================================
# Template Filters
# =============================================================================

@app.template_filter("format_date")
def format_date(dt):
    """Format datetime for display, e.g. "May 1, 2024"."""
    if not dt:
        return "Unknown"
    if isinstance(dt, str):
        return dt
    return f"{dt.strftime('%B')} {dt.day}, {dt.year}"


@app.template_filter("time_ago")
def time_ago(dt, now=None):
    """Relative time with suffix, e.g. "3 days ago"."""
    if not dt:
        return "Unknown"
    if isinstance(dt, str):
        return dt

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    seconds = int((now - dt).total_seconds())

    if seconds < 0:
        return "in the future"
    if seconds < 60:
        return "less than a minute ago"

    for unit, size in (("year", 365 * 86400), ("month", 30 * 86400), ("day", 86400),
                       ("hour", 3600), ("minute", 60)):
        if seconds >= size:
            count = seconds // size
            return f"{count} {unit}{'s' if count != 1 else ''} ago"
    return "just now"


if __name__ == "__main__":
    print("=" * 50)
    print("Notion Blog")
    print("=" * 50)
    print("Open http://localhost:5000 in your browser")
    print("Press Ctrl+C to stop")
    print("=" * 50)
    app.run(debug=True, port=5000)

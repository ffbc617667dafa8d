#!/usr/bin/env python3
"""
Notion Blog - command-line entry point.

Commands:
  - list:  print discovered posts, newest first
  - show:  print one post, optionally with its content as Markdown
  - build: export the blog as a static site
  - serve: run the Flask development server

Usage:
    python main.py list                     # All posts
    python main.py list --query react       # Posts matching "react"
    python main.py show my-first-post --markdown
    python main.py build --output dist      # Static export
    python main.py serve --port 5000        # Development server
    python main.py --show-config            # Effective configuration
"""

import argparse
import json
import sys
from pathlib import Path

from notion_blog import __version__
from notion_blog.config import (
    DEBUG,
    EXPORT_DIR,
    LOG_DIR,
    print_config_summary,
    validate_config,
)
from notion_blog.content import ContentService
from notion_blog.export import build_site
from notion_blog.logging_config import setup_logging
from notion_blog.render import blocks_to_markdown
from notion_blog.search import filter_posts


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="notion-blog",
        description="Render a blog from the content of a Notion workspace.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s list                      List all posts
  %(prog)s list -q design --json     Posts matching "design" as JSON
  %(prog)s show hello-world          Show one post's metadata
  %(prog)s show hello-world --markdown
  %(prog)s build -o dist             Export static site to ./dist
  %(prog)s serve -p 8000             Serve on port 8000
        """,
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging",
    )

    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Show current configuration and exit",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    list_parser = subparsers.add_parser("list", help="List posts, newest first")
    list_parser.add_argument(
        "--query", "-q",
        default="",
        metavar="TERM",
        help="Only posts whose title, description or tags contain TERM",
    )
    list_parser.add_argument(
        "--json",
        action="store_true",
        help="Print posts as JSON",
    )

    show_parser = subparsers.add_parser("show", help="Show a single post")
    show_parser.add_argument("slug", help="Post slug")
    show_parser.add_argument(
        "--markdown", "-m",
        action="store_true",
        help="Also print the post content as Markdown",
    )

    build_parser = subparsers.add_parser("build", help="Export the static site")
    build_parser.add_argument(
        "--output", "-o",
        default=None,
        metavar="DIR",
        help=f"Output directory (default: {EXPORT_DIR})",
    )
    build_parser.add_argument(
        "--no-clean",
        action="store_true",
        help="Keep existing files in the output directory",
    )

    serve_parser = subparsers.add_parser("serve", help="Run the development server")
    serve_parser.add_argument(
        "--port", "-p",
        type=int,
        default=5000,
        metavar="N",
        help="Port to listen on (default: 5000)",
    )
    serve_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode",
    )

    return parser


def show_config() -> None:
    """Display current configuration."""
    print("=" * 60)
    print("Notion Blog Configuration")
    print("=" * 60)
    print_config_summary()

    errors = validate_config()
    if errors:
        print("\nConfiguration warnings:")
        for error in errors:
            print(f"  ⚠️  {error}")
    else:
        print("\n✓ Configuration valid")
    print("=" * 60)


# =============================================================================
# Commands
# =============================================================================

def cmd_list(args, content: ContentService) -> int:
    result = content.get_all_content()
    posts = filter_posts(result.items, args.query)

    if args.json:
        print(json.dumps({
            "available": result.available,
            "posts": [post.to_dict() for post in posts],
        }, indent=2))
    else:
        for post in posts:
            print(f"{post.published_at.strftime('%Y-%m-%d')}  {post.slug:<40} {post.title}")
        print(f"\n{len(posts)} of {len(result.items)} posts")

    if not result.available:
        print("\n⚠️  Notion could not be read completely:", file=sys.stderr)
        for error in result.errors[:5]:
            print(f"  {error}", file=sys.stderr)
    return 0


def cmd_show(args, content: ContentService) -> int:
    post = content.get_post_by_slug(args.slug)
    if not post:
        print(f"Post not found: {args.slug}", file=sys.stderr)
        return 1

    print(f"Title:       {post.title}")
    print(f"Slug:        {post.slug}")
    print(f"Published:   {post.published_at.isoformat()}")
    print(f"Status:      {post.status}")
    print(f"Author:      {post.author or '-'}")
    print(f"Tags:        {', '.join(post.tags) or '-'}")
    print(f"Description: {post.description or '-'}")
    print(f"Cover:       {post.cover or '-'}")
    print(f"Notion:      {post.url}")

    if args.markdown:
        blocks = content.get_page_content(post.id)
        print()
        print(blocks_to_markdown(blocks.items))
    return 0


def cmd_build(args, content: ContentService) -> int:
    from web.app import app

    output_dir = Path(args.output or EXPORT_DIR)
    result = build_site(app, output_dir, content=content, clean=not args.no_clean)
    print(result.to_summary())

    # An export missing posts because Notion failed is not a successful build
    return 0 if result.success else 1


def cmd_serve(args) -> int:
    from web.app import app

    app.run(debug=args.debug, port=args.port)
    return 0


def main(argv: list = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command-line arguments (default: sys.argv[1:]).

    Returns:
        Exit code (0 = success, 1 = error, 130 = interrupted).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.show_config:
        show_config()
        return 0

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(Path(LOG_DIR) if LOG_DIR else None, verbose=args.verbose or DEBUG)

    try:
        if args.command == "serve":
            return cmd_serve(args)

        content = ContentService()
        if args.command == "list":
            return cmd_list(args, content)
        if args.command == "show":
            return cmd_show(args, content)
        if args.command == "build":
            return cmd_build(args, content)

        parser.print_help()
        return 1

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130
    except Exception as e:
        print(f"\n❌ Command error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())

"""
Sparkle Stories CLI - Entry point

Browses the story catalog from the terminal, serves the web API, and runs the
interactive music player.
"""

import argparse
import sys
from typing import Sequence

from loguru import logger

from sparkle_stories.core.config import Config, ensure_directories, load_config
from sparkle_stories.core.console import print_table, safe_print
from sparkle_stories.core.output import log, setup_from_config
from sparkle_stories.domain.catalog import Catalog, Story, load_catalog


def _story_rows(stories: Sequence[Story]) -> list[tuple[str, ...]]:
    return [
        (
            story.id,
            story.title,
            story.author,
            ", ".join(story.labels),
            "★" if story.featured else "",
        )
        for story in stories
    ]


def print_stories(title: str, stories: Sequence[Story]) -> None:
    if not stories:
        safe_print("No stories found", style="yellow")
        return
    print_table(title, ["ID", "Title", "Author", "Labels", ""], _story_rows(stories))


def run_list_stories(catalog: Catalog, query: str, category: str | None) -> int:
    stories = catalog.filter(query, category)
    heading = f"Stories ({len(stories)} of {len(catalog)})"
    print_stories(heading, stories)
    return 0


def run_show_story(catalog: Catalog, story_id: str) -> int:
    """Print one story with its previous/next neighbours.

    Returns:
        Exit code (0 for success, 1 if the story does not exist)
    """
    story = catalog.get_by_id(story_id)
    if story is None:
        safe_print(f"Story not found: {story_id}", style="red")
        return 1

    previous, following = catalog.neighbors(story_id)

    safe_print(f"[bold]{story.title}[/bold]")
    safe_print(f"by {story.author} - {story.created_at:%B %d, %Y}", style="dim")
    if story.labels:
        safe_print(", ".join(story.labels), style="cyan")
    safe_print("")
    for paragraph in story.paragraphs:
        safe_print(paragraph)
        safe_print("")
    safe_print(
        f"← {previous.title}  |  {following.title} →",
        style="dim",
    )
    return 0


def run_categories(catalog: Catalog) -> int:
    categories = catalog.get_categories()
    if not categories:
        safe_print("No categories", style="yellow")
        return 0
    for category in categories:
        safe_print(f"  • {category}")
    return 0


def run_featured(catalog: Catalog) -> int:
    print_stories("Featured stories", catalog.get_featured())
    return 0


def run_serve(config: Config, host: str | None, port: int | None) -> int:
    """Run the web API under uvicorn until interrupted."""
    import uvicorn

    from sparkle_stories.web import create_app

    host = host or config.web.host
    port = port or config.web.port
    log(f"Serving web API on http://{host}:{port}")
    uvicorn.run(create_app(config), host=host, port=port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sparkle-stories",
        description="Sparkle Stories - children's stories with background music",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="subcommand", help="Available commands")

    stories_parser = subparsers.add_parser("stories", help="List and search stories")
    stories_parser.add_argument(
        "--query", "-q", default="", help="Match title or description"
    )
    stories_parser.add_argument(
        "--category", "-c", default=None, help="Only stories with this label"
    )

    story_parser = subparsers.add_parser("story", help="Read a story")
    story_parser.add_argument("story_id", help="Story id")

    subparsers.add_parser("categories", help="List all story categories")
    subparsers.add_parser("featured", help="List featured stories")

    serve_parser = subparsers.add_parser("serve", help="Run the web API")
    serve_parser.add_argument("--host", default=None, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port")

    subparsers.add_parser("player", help="Interactive background music player")

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point for the sparkle-stories command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    ensure_directories()
    config = load_config()
    setup_from_config(config.logging)
    logger.debug(f"Running subcommand: {args.subcommand}")

    if args.subcommand == "serve":
        sys.exit(run_serve(config, args.host, args.port))

    if args.subcommand == "player":
        from sparkle_stories.player_shell import run_player_shell

        sys.exit(run_player_shell(config))

    catalog = load_catalog(config.catalog.stories_path)

    if args.subcommand == "stories":
        sys.exit(run_list_stories(catalog, args.query, args.category))
    elif args.subcommand == "story":
        sys.exit(run_show_story(catalog, args.story_id))
    elif args.subcommand == "categories":
        sys.exit(run_categories(catalog))
    elif args.subcommand == "featured":
        sys.exit(run_featured(catalog))

    parser.print_help()
    sys.exit(0)


if __name__ == "__main__":
    main()

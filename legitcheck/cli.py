import sys
import logging
import argparse
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.panel import Panel

from legitcheck.api.scraper import Scraper, VALID_TIME_OPTIONS
from legitcheck.cli_config import (
    CONFIG_FILE,
    build_keyword_tables,
    build_registry,
    load_config_from_file,
    load_env_config,
    merge_config,
)
from legitcheck.fetcher import PostFetcher
from legitcheck.utils.exceptions import handle_exception
from legitcheck.utils.logging import setup_logging, get_logger, with_logging
from legitcheck.utils.report import write_report
from legitcheck.utils.tables import TableFormatter
from legitcheck.verdict import CommentAnalyzer

logger = get_logger(__name__)
console = Console(highlight=True)


def build_fetcher(config: Dict[str, Any], show_progress: bool = False) -> PostFetcher:
    """Wires a PostFetcher from a merged configuration."""
    analyzer = CommentAnalyzer(
        verified_checkers=build_registry(config),
        keywords=build_keyword_tables(config),
    )
    return PostFetcher(
        api=Scraper(user_agent=config["user_agent"], timeout=config["timeout"]),
        analyzer=analyzer,
        subreddit=config["subreddit"],
        comment_limit=config["comment_limit"],
        max_workers=config["max_workers"],
        show_progress=show_progress,
    )


@with_logging(logger)
def handle_posts(config: Dict[str, Any]) -> None:
    """Handle the posts command."""
    fetcher = build_fetcher(config, show_progress=True)
    console.print(
        f"[cyan]Fetching legit checks from[/cyan] r/{config['subreddit']} "
        f"[dim](time={config['time']}, limit={config['limit']})[/dim]"
    )
    posts = fetcher.fetch_posts(time_filter=config["time"], limit=config["limit"])
    formatter = TableFormatter()

    output_file = config.get("output_file")
    if output_file:
        write_report(output_file, posts, config["subreddit"], config["time"], fetcher.last_stats)
        console.print(f"[green]Wrote {len(posts)} posts to[/green] {output_file}")
    elif posts:
        console.print(formatter.generate_posts_table(posts))
    else:
        console.print("[yellow]No legit check posts found for this time period.[/yellow]")

    console.print(Panel(formatter.create_stats_table(fetcher.last_stats), title="Screening", expand=False))


@with_logging(logger)
def handle_thread(config: Dict[str, Any]) -> None:
    """Handle the thread command."""
    fetcher = build_fetcher(config)
    post_id = config["post_id"]
    analysis = fetcher.analyze_thread(post_id)
    formatter = TableFormatter()

    summary = (
        f"Verdict: [{formatter._get_verdict_style(analysis.verdict)}]{analysis.verdict.upper()}[/]  "
        f"legit {analysis.legit_score:g} / fake {analysis.fake_score:g}"
    )
    if analysis.community_split:
        summary += "  [yellow](community split)[/yellow]"
    console.print(Panel(summary, title=f"Post {post_id}", expand=False))

    if analysis.legit_comments or analysis.fake_comments:
        console.print(formatter.create_breakdown_table(analysis, fetcher.analyzer.verified_checkers))
    else:
        console.print("[dim]No comments breakdown available.[/dim]")


class CLI:
    """Main CLI application class"""

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            description="Legit check verdicts from subreddit comment threads",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self.parser.add_argument('--version', action='version', version='%(prog)s 1.0')
        self.parser.add_argument('--debug', action='store_true', help='Enable debug logging.')
        self.parser.add_argument('--log-file', dest='log_file', help='Also write logs to this file.')
        self.parser.add_argument('--config', dest='config', default=CONFIG_FILE, help='JSON configuration file.')
        self.parser.add_argument('--subreddit', dest='subreddit', help='Subreddit to read.')
        self.parser.add_argument('--max-workers', dest='max_workers', type=int, help='Parallel comment thread requests.')
        self.parser.add_argument('--timeout', dest='timeout', type=float, help='Per-request timeout in seconds.')

        self.subparsers = self.parser.add_subparsers(dest='command', help='Action to perform', required=True)

        parser_posts = self.subparsers.add_parser('posts', help='Fetch new posts and keep those with a clear verdict')
        parser_posts.add_argument("--time", dest="time", choices=VALID_TIME_OPTIONS, help="Time window of the listing.")
        parser_posts.add_argument("--limit", dest="limit", type=int, help="Maximum listing entries to request.")
        parser_posts.add_argument("--output-file", dest="output_file", help="Write results to a file (.json or markdown).")
        parser_posts.set_defaults(func=handle_posts)

        parser_thread = self.subparsers.add_parser('thread', help="Score a single post's comment thread")
        parser_thread.add_argument("post_id", help="The ID of the post")
        parser_thread.set_defaults(func=handle_thread)

    def run(self, argv: List[str]) -> int:
        """Parse arguments, merge configuration and dispatch the command."""
        is_debug = "--debug" in argv
        try:
            args = self.parser.parse_args(argv)
            setup_logging(logging.DEBUG if args.debug else logging.INFO, log_file=args.log_file)
            logger.debug(f"Parsed command args: {args}")

            file_config, notification = load_config_from_file(args.config)
            logger.debug(notification)

            cli_values = {
                key: getattr(args, key, None)
                for key in ("subreddit", "max_workers", "timeout", "time", "limit", "output_file", "post_id")
            }
            config = merge_config(file_config, load_env_config(), cli_values)
            logger.debug(f"Final run config: {config}")

            args.func(config)
            return 0
        except Exception as e:
            command = argv[0] if argv else "unknown"
            handle_exception(e, f"Failed to execute command '{command}'", debug=is_debug)
            return 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    cli = CLI()
    return cli.run(sys.argv[1:] if argv is None else argv)


if __name__ == "__main__":
    sys.exit(main())

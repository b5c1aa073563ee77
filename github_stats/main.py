"""
github-stats: GitHub contribution statistics in the terminal

Entry point for the application.
"""

import argparse
import logging
import sys
from datetime import datetime

from github_stats.cli import display_report
from github_stats.config import LOG_LEVEL, resolve_token, resolve_username
from github_stats.github_client import GitHubClient, GitHubClientError
from github_stats.report import build_report, report_to_json
from github_stats.terminal import LoadingAnimation, clear_screen, wait_for_exit_key

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="github-stats",
        description="Display GitHub contribution statistics",
    )
    parser.add_argument("username", nargs="?", help="GitHub username to analyze")
    parser.add_argument("-t", "--token", help="GitHub personal access token")
    parser.add_argument(
        "-f",
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser.parse_args(argv)


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else getattr(logging, LOG_LEVEL.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _print_error(message) -> None:
    # Fatal errors are reported on a single line
    text = " ".join(str(message).split())
    print(f"❌ Error: {text}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)

    try:
        username = resolve_username(args.username)
    except ValueError as e:
        _print_error(e)
        return 1

    client = GitHubClient(resolve_token(args.token))
    interactive = args.format == "text" and sys.stdout.isatty()

    report = None
    error = None
    # One clock reading for the whole run
    now = datetime.now().astimezone()

    # The animation owns stdout until stop() returns
    animation = LoadingAnimation() if interactive else None
    if animation is not None:
        animation.start()
    try:
        report = build_report(client, username, now=now)
    except GitHubClientError as e:
        error = e
    finally:
        if animation is not None:
            animation.stop()
            clear_screen()

    if error is not None:
        logger.debug("Report failed for %s", username, exc_info=error)
        _print_error(error)
        return 1

    if args.format == "json":
        print(report_to_json(report))
        return 0

    display_report(report, today=now.date(), now=now)

    if interactive:
        print()
        print("Press 'q' or Ctrl+C to exit")
        sys.stdout.flush()
        wait_for_exit_key()

    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Configuration management for github-stats.

Loads GitHub credentials and settings from environment variables.
"""

import logging
import os
import shutil
import subprocess

from dotenv import load_dotenv

# Load .env file from project root
load_dotenv()

logger = logging.getLogger(__name__)

GITHUB_TOKEN = os.getenv("GITHUB_TOKEN")
GITHUB_USERNAME = os.getenv("GITHUB_USERNAME")
GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com")
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

# Commit listing pagination
PER_PAGE = 100
MAX_PAGES = 5

# Number of recently pushed repositories to report on
REPO_LIMIT = 5

_PLACEHOLDERS = {"", "your_token_here", "your_username_here"}


def _gh_output(*args: str) -> str | None:
    """Run the GitHub CLI and return its trimmed stdout, or None."""
    if shutil.which("gh") is None:
        return None
    try:
        result = subprocess.run(
            ["gh", *args], capture_output=True, text=True, timeout=10
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("gh %s failed: %s", " ".join(args), e)
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def resolve_token(cli_token: str | None = None) -> str | None:
    """
    Find a GitHub token: --token flag, then GITHUB_TOKEN, then `gh auth token`.

    A missing token is not an error; the client falls back to
    unauthenticated access.
    """
    for candidate in (cli_token, GITHUB_TOKEN):
        if candidate and candidate not in _PLACEHOLDERS:
            return candidate

    token = _gh_output("auth", "token")
    if token is None:
        logger.info("No GitHub token found, using unauthenticated access")
    return token


def resolve_username(cli_username: str | None = None) -> str:
    """
    Find the user to report on: argument, then GITHUB_USERNAME, then the
    account the GitHub CLI is logged in as.

    Raises:
        ValueError: If no username can be determined
    """
    for candidate in (cli_username, GITHUB_USERNAME):
        if candidate and candidate not in _PLACEHOLDERS:
            return candidate

    username = _gh_output("api", "user", "--jq", ".login")
    if username:
        return username

    raise ValueError(
        "No username provided and couldn't detect authenticated GitHub user. "
        "Try: github-stats <username>, or set GITHUB_USERNAME in .env"
    )

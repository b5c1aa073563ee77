"""
Tests for the command-line entry point.
"""

import json
import sys
from datetime import date
from unittest.mock import MagicMock, patch

import pytest

from github_stats.github_client import GitHubClientError, UserNotFoundError
from github_stats.main import main, parse_args
from github_stats.models import ContributionGraph, DayCell, Report, Week


@pytest.fixture
def report():
    graph = ContributionGraph(
        weeks=(Week(days=(DayCell(date(2026, 10, 19), 3, 2),)),),
        total_contributions=3,
    )
    return Report(username="octocat", contribution_graph=graph)


@pytest.fixture
def patched():
    with patch("github_stats.main.resolve_username", side_effect=lambda name: name or "octocat"), \
            patch("github_stats.main.resolve_token", return_value=None), \
            patch("github_stats.main.GitHubClient") as client, \
            patch("github_stats.main.build_report") as build, \
            patch("github_stats.main.wait_for_exit_key") as wait:
        yield {"client": client, "build": build, "wait": wait}


class TestParseArgs:

    def test_defaults(self):
        args = parse_args([])
        assert args.username is None
        assert args.token is None
        assert args.format == "text"

    def test_all_options(self):
        args = parse_args(["octocat", "--token", "abc", "--format", "json", "-v"])
        assert args.username == "octocat"
        assert args.token == "abc"
        assert args.format == "json"
        assert args.verbose is True

    def test_rejects_unknown_format(self):
        with pytest.raises(SystemExit):
            parse_args(["--format", "xml"])


class TestMain:

    def test_json_output(self, patched, report, capsys):
        patched["build"].return_value = report

        exit_code = main(["octocat", "--format", "json"])

        assert exit_code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["username"] == "octocat"
        assert data["contribution_graph"]["total_contributions"] == 3
        patched["wait"].assert_not_called()

    def test_text_output(self, patched, report, capsys):
        patched["build"].return_value = report

        exit_code = main(["octocat"])

        assert exit_code == 0
        assert "Today:" in capsys.readouterr().out

    def test_user_not_found(self, patched, capsys):
        patched["build"].side_effect = UserNotFoundError("User 'ghost' not found")

        exit_code = main(["ghost"])

        assert exit_code == 1
        captured = capsys.readouterr()
        assert "❌ Error: User 'ghost' not found" in captured.err
        assert captured.out == ""

    def test_transport_failure_on_user_lookup(self, patched, capsys):
        patched["build"].side_effect = GitHubClientError("Request to GitHub failed")

        assert main(["octocat"]) == 1
        assert "❌ Error:" in capsys.readouterr().err

    def test_multiline_error_is_printed_on_one_line(self, patched, capsys):
        patched["build"].side_effect = GitHubClientError("line one\nline two")

        assert main(["octocat"]) == 1
        captured = capsys.readouterr()
        assert "❌ Error: line one line two" in captured.err
        assert captured.err.strip().count("\n") == 0

    def test_report_and_display_share_one_clock_reading(self, patched, report):
        patched["build"].return_value = report

        with patch("github_stats.main.display_report") as display:
            assert main(["octocat"]) == 0

        now = patched["build"].call_args.kwargs["now"]
        assert now is not None
        assert now.tzinfo is not None
        assert display.call_args.kwargs["now"] is now
        assert display.call_args.kwargs["today"] == now.date()

    def test_missing_username(self, capsys):
        with patch("github_stats.main.resolve_username", side_effect=ValueError("No username provided")):
            assert main([]) == 1
        assert "❌ Error: No username provided" in capsys.readouterr().err

    def test_animation_is_stopped_before_error_is_printed(self, patched):
        patched["build"].side_effect = UserNotFoundError("User 'ghost' not found")
        events = []
        animation = MagicMock()
        animation.stop.side_effect = lambda: events.append("stop")

        with patch("github_stats.main.LoadingAnimation", return_value=animation), \
                patch("github_stats.main.clear_screen", side_effect=lambda: events.append("clear")), \
                patch("github_stats.main._print_error", side_effect=lambda e: events.append("error")), \
                patch.object(sys.stdout, "isatty", return_value=True):
            assert main(["ghost"]) == 1

        animation.start.assert_called_once()
        assert events == ["stop", "clear", "error"]

    def test_interactive_text_waits_for_exit_key(self, patched, report):
        patched["build"].return_value = report
        animation = MagicMock()

        with patch("github_stats.main.LoadingAnimation", return_value=animation), \
                patch("github_stats.main.clear_screen"), \
                patch.object(sys.stdout, "isatty", return_value=True):
            assert main(["octocat"]) == 0

        animation.stop.assert_called_once()
        patched["wait"].assert_called_once()
